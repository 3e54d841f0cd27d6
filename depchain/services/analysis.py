import logging
from typing import Dict, List, Optional

from ..domain.graph import Graph, GraphError
from .components import ComponentDetector
from .dag_paths import CriticalPathResult, DagPathAnalyzer, PathResult
from .topological import TopologicalSorter, expand_component_order

logger = logging.getLogger(__name__)


class GraphAnalysis:
    """Everything produced by one analyze_graph() run."""

    def __init__(self, graph: Graph, source: int, weight_model: str = "edge"):
        self.graph = graph
        self.source = source
        self.weight_model = weight_model

        self.components: List[List[int]] = []
        self.vertex_to_component: List[int] = []
        self.condensation: Optional[Graph] = None
        self.component_order: Optional[List[int]] = None
        self.expanded_order: Optional[List[int]] = None
        self.component_source: Optional[int] = None
        self.shortest: Optional[PathResult] = None
        self.critical_path: Optional[CriticalPathResult] = None
        self.has_cycles = False

        # One metrics snapshot per stage, keyed "components", "topological",
        # "shortest_paths" and "critical_path"
        self.metrics: Dict[str, Dict[str, int]] = {}

    def report(self) -> str:
        """Human-readable report of every stage."""
        rule = "=" * 60
        lines = [
            str(self.graph),
            f"Source vertex: {self.source}",
            f"Weight model: {self.weight_model}",
            "",
            rule,
            "1. STRONGLY CONNECTED COMPONENTS",
            rule,
            f"Found {len(self.components)} strongly connected components:",
        ]
        for index, component in enumerate(self.components):
            lines.append(f"  SCC {index} (size {len(component)}): {component}")
        lines.append(_format_metrics(self.metrics.get("components", {})))
        lines.append("")
        lines.append("Condensation graph (DAG of SCCs):")
        lines.append(str(self.condensation))
        lines.append("")

        lines += [rule, "2. TOPOLOGICAL SORT", rule]
        if self.component_order is None:
            lines.append("ERROR: Cycle detected in condensation graph!")
            return "\n".join(lines)
        lines.append(f"Topological order of SCCs: {self.component_order}")
        lines.append(f"Expanded order (original vertices): {self.expanded_order}")
        lines.append(_format_metrics(self.metrics.get("topological", {})))
        lines.append("")
        if self.shortest is None:
            return "\n".join(lines)

        lines += [rule, "3. SHORTEST PATHS IN DAG", rule]
        lines.append(f"Shortest distances from SCC {self.component_source}:")
        for target, distance in enumerate(self.shortest.dist):
            if distance is None:
                continue
            lines.append(f"  To SCC {target}: {distance}")
            lines.append(f"    Path: {self.shortest.reconstruct_path(target)}")
        lines.append(_format_metrics(self.metrics.get("shortest_paths", {})))
        lines.append("")

        lines += [rule, "4. CRITICAL PATH (Longest Path)", rule]
        lines.append(str(self.critical_path))
        lines.append(_format_metrics(self.metrics.get("critical_path", {})))
        return "\n".join(lines)


def _format_metrics(snapshot):
    elapsed = snapshot.get("elapsed_nanos", 0) / 1_000_000.0
    lines = [f"Execution time: {elapsed:.3f} ms"]
    for name in sorted(snapshot):
        if name != "elapsed_nanos":
            lines.append(f"  {name}: {snapshot[name]}")
    return "\n".join(lines)


def analyze_graph(graph: Graph, source: int = 0, weight_model: str = "edge") -> GraphAnalysis:
    """
    Run the full pipeline on a dependency graph.

    Components are detected and collapsed into the condensation DAG, which
    is then ordered and analyzed for shortest paths and the critical path
    from the component containing source.

    Args:
        graph: Directed task-dependency graph
        source: Start vertex in the original graph
        weight_model: Informational label carried through to the report

    Returns:
        GraphAnalysis: All intermediate and final results

    Raises:
        GraphError: If the graph is undirected or source is out of range
    """
    if graph.n and not 0 <= source < graph.n:
        raise GraphError(f"Source vertex {source} is out of range [0, {graph.n})")

    analysis = GraphAnalysis(graph, source, weight_model)

    detector = ComponentDetector(graph)
    analysis.components = detector.find_components()
    analysis.metrics["components"] = detector.metrics.snapshot()
    analysis.vertex_to_component = detector.vertex_to_component()
    analysis.condensation = detector.build_condensation()
    analysis.has_cycles = detector.has_cycles()

    sorter = TopologicalSorter(analysis.condensation)
    analysis.component_order = sorter.sort()
    analysis.metrics["topological"] = sorter.metrics.snapshot()

    if analysis.component_order is None:
        return analysis
    analysis.expanded_order = expand_component_order(
        analysis.component_order, analysis.components
    )
    if graph.n == 0:
        return analysis

    analysis.component_source = analysis.vertex_to_component[source]

    paths = DagPathAnalyzer(analysis.condensation)
    analysis.shortest = paths.shortest_paths(analysis.component_source)
    analysis.metrics["shortest_paths"] = paths.metrics.snapshot()
    analysis.critical_path = paths.find_critical_path(analysis.component_source)
    analysis.metrics["critical_path"] = paths.metrics.snapshot()

    logger.info(
        "Analyzed graph with %d vertices: %d components, critical path length %d",
        graph.n,
        len(analysis.components),
        analysis.critical_path.length,
    )
    return analysis
