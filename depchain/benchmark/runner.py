import csv
import glob
import logging
import os

import numpy as np

from ..domain.graph import GraphError
from ..services.analysis import analyze_graph
from ..utils.loader import GraphLoadError, load_graph_file

logger = logging.getLogger(__name__)


class BenchmarkResult:
    """Metrics from running every algorithm on one dataset."""

    CSV_HEADER = [
        "Dataset",
        "Nodes",
        "Edges",
        "Density",
        "HasCycles",
        "SCC_Time_Nanos",
        "SCC_DFS_Visits",
        "SCC_Edges_Explored",
        "SCC_Stack_Pops",
        "Num_SCCs",
        "Topo_Time_Nanos",
        "Topo_Queue_Pushes",
        "Topo_Queue_Pops",
        "Topo_Edges_Processed",
        "Topo_Success",
        "DAGSP_Time_Nanos",
        "DAGSP_Relaxations",
        "DAGSP_Updates",
        "Critical_Path_Length",
    ]

    def __init__(self, dataset):
        self.dataset = dataset
        self.nodes = 0
        self.edges = 0
        self.density = 0.0
        self.has_cycles = False

        # Component detection
        self.scc_time_nanos = 0
        self.scc_dfs_visits = 0
        self.scc_edges_explored = 0
        self.scc_stack_pops = 0
        self.num_sccs = 0

        # Topological sort of the condensation
        self.topo_time_nanos = 0
        self.topo_queue_pushes = 0
        self.topo_queue_pops = 0
        self.topo_edges_processed = 0
        self.topo_success = False

        # Critical path on the condensation
        self.dagsp_time_nanos = 0
        self.dagsp_relaxations = 0
        self.dagsp_updates = 0
        self.critical_path_length = 0

    def to_row(self):
        return [
            self.dataset,
            self.nodes,
            self.edges,
            f"{self.density:.4f}",
            str(self.has_cycles).lower(),
            self.scc_time_nanos,
            self.scc_dfs_visits,
            self.scc_edges_explored,
            self.scc_stack_pops,
            self.num_sccs,
            self.topo_time_nanos,
            self.topo_queue_pushes,
            self.topo_queue_pops,
            self.topo_edges_processed,
            str(self.topo_success).lower(),
            self.dagsp_time_nanos,
            self.dagsp_relaxations,
            self.dagsp_updates,
            self.critical_path_length,
        ]


def calculate_density(nodes, edges):
    """Edge density of a directed graph without self-loops."""
    if nodes <= 1:
        return 0.0
    return edges / (nodes * (nodes - 1))


class BenchmarkRunner:
    """Runs the analysis pipeline over a directory of JSON datasets."""

    def run_benchmark(self, filename):
        """
        Run all algorithms on one dataset.

        Raises:
            GraphLoadError: If the dataset cannot be loaded
            GraphError: If the graph is undirected
        """
        data = load_graph_file(filename)
        graph = data.graph
        result = BenchmarkResult(os.path.basename(filename))

        result.nodes = graph.n
        result.edges = graph.edge_count()
        result.density = calculate_density(result.nodes, result.edges)

        analysis = analyze_graph(graph, data.source, data.weight_model)

        scc = analysis.metrics["components"]
        result.num_sccs = len(analysis.components)
        result.has_cycles = analysis.has_cycles
        result.scc_time_nanos = scc["elapsed_nanos"]
        result.scc_dfs_visits = scc.get("dfs_visits", 0)
        result.scc_edges_explored = scc.get("edges_explored", 0)
        result.scc_stack_pops = scc.get("stack_pops", 0)

        topo = analysis.metrics["topological"]
        result.topo_success = analysis.component_order is not None
        result.topo_time_nanos = topo["elapsed_nanos"]
        result.topo_queue_pushes = topo.get("queue_pushes", 0)
        result.topo_queue_pops = topo.get("queue_pops", 0)
        result.topo_edges_processed = topo.get("edges_processed", 0)

        if analysis.critical_path is not None:
            dagsp = analysis.metrics["critical_path"]
            result.dagsp_time_nanos = dagsp["elapsed_nanos"]
            result.dagsp_relaxations = dagsp.get("relaxations", 0)
            result.dagsp_updates = dagsp.get("updates", 0)
            result.critical_path_length = analysis.critical_path.length

        return result

    def run_all_benchmarks(self, data_directory, repeats=1):
        """
        Benchmark every *.json file in data_directory.

        The whole set is run repeats times to warm up caches; only the last
        pass is returned. Files that fail to load are reported and skipped.

        Returns:
            list: BenchmarkResult objects sorted by dataset name
        """
        if not os.path.isdir(data_directory):
            print(f"Directory not found: {data_directory}")
            return []

        files = sorted(glob.glob(os.path.join(data_directory, "*.json")))
        if not files:
            print(f"No JSON files found in: {data_directory}")
            return []

        results = []
        for _ in range(max(1, repeats)):
            results = []
            print(f"Running benchmarks on {len(files)} datasets...")
            for filename in files:
                try:
                    result = self.run_benchmark(filename)
                except (GraphLoadError, GraphError) as e:
                    print(f"Error processing {filename}: {e}")
                    logger.warning("Skipping %s: %s", filename, e)
                    continue

                results.append(result)
                print(f"Processing: {result.dataset}")
                print(
                    f"  Nodes: {result.nodes}, Edges: {result.edges}, "
                    f"Density: {result.density:.4f}"
                )
                print(f"  SCCs: {result.num_sccs}, Has Cycles: {result.has_cycles}")
                print(
                    f"  Times (ns): SCC={result.scc_time_nanos}, "
                    f"Topo={result.topo_time_nanos}, DAGSP={result.dagsp_time_nanos}"
                )

        return results

    def write_results_to_csv(self, results, output_file):
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_file, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(BenchmarkResult.CSV_HEADER)
            for result in results:
                writer.writerow(result.to_row())
        print(f"Results written to: {output_file}")

    def summary_statistics(self, results):
        """
        Average timings per size category and overall.

        Categories: small (<= 10 nodes), medium (11-20), large (> 20).

        Returns:
            dict: Keys "categories" (name -> stats dict), "overall" and
                "cycle_count"
        """
        categories = {
            "Small": [r for r in results if r.nodes <= 10],
            "Medium": [r for r in results if 10 < r.nodes <= 20],
            "Large": [r for r in results if r.nodes > 20],
        }

        def averages(group):
            return {
                "count": len(group),
                "avg_nodes": float(np.mean([r.nodes for r in group])),
                "avg_edges": float(np.mean([r.edges for r in group])),
                "avg_density": float(np.mean([r.density for r in group])),
                "avg_scc_time": float(np.mean([r.scc_time_nanos for r in group])),
                "avg_topo_time": float(np.mean([r.topo_time_nanos for r in group])),
                "avg_dagsp_time": float(np.mean([r.dagsp_time_nanos for r in group])),
            }

        return {
            "categories": {
                name: averages(group) for name, group in categories.items() if group
            },
            "overall": averages(results) if results else None,
            "cycle_count": sum(1 for r in results if r.has_cycles),
        }

    def print_summary_statistics(self, results):
        if not results:
            print("No results to summarize.")
            return

        stats = self.summary_statistics(results)
        print("=" * 80)
        print("BENCHMARK SUMMARY STATISTICS")
        print("=" * 80)
        print()

        for name, category in stats["categories"].items():
            print(f"{name} Datasets ({category['count']}):")
            print(
                f"  Avg Nodes: {category['avg_nodes']:.1f}, "
                f"Avg Edges: {category['avg_edges']:.1f}, "
                f"Avg Density: {category['avg_density']:.4f}"
            )
            for label, key in (
                ("SCC", "avg_scc_time"),
                ("Topo", "avg_topo_time"),
                ("DAGSP", "avg_dagsp_time"),
            ):
                nanos = category[key]
                print(f"  Avg {label} Time: {nanos:,.0f} ns ({nanos / 1_000_000:.3f} ms)")
            print()

        overall = stats["overall"]
        print("Overall Averages:")
        for label, key in (
            ("SCC", "avg_scc_time"),
            ("Topo", "avg_topo_time"),
            ("DAGSP", "avg_dagsp_time"),
        ):
            nanos = overall[key]
            print(f"  {label} Time: {nanos:,.0f} ns ({nanos / 1_000_000:.3f} ms)")
        print()

        cycle_count = stats["cycle_count"]
        print(
            f"Graphs with cycles: {cycle_count} / {len(results)} "
            f"({100.0 * cycle_count / len(results):.1f}%)"
        )
