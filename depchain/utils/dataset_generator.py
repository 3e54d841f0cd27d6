import logging
import os

import networkx as nx
import numpy as np

from ..domain.graph import Graph
from .graph import to_networkx
from .loader import save_graph_file

logger = logging.getLogger(__name__)

# (filename, vertices, density, has_cycles)
STANDARD_DATASETS = [
    ("small_dag_1.json", 6, 0.3, False),
    ("small_cycle_1.json", 8, 0.4, True),
    ("small_dag_2.json", 10, 0.25, False),
    ("medium_mixed_1.json", 12, 0.3, True),
    ("medium_mixed_2.json", 15, 0.35, True),
    ("medium_dag_1.json", 18, 0.2, False),
    ("large_sparse_1.json", 25, 0.15, True),
    ("large_mixed_1.json", 35, 0.25, True),
    ("large_dag_1.json", 50, 0.1, False),
]


class DatasetGenerator:
    """
    Synthetic task-dependency graphs for testing and benchmarking.

    A fixed seed always reproduces the same graphs.
    """

    def __init__(self, seed=42):
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def _weight(self, high):
        return int(self.rng.integers(1, high + 1))

    def generate_dag(self, n, density):
        """
        Random DAG whose edges all run from lower to higher vertex index.

        At most density * n(n-1)/2 random edges (weights 1..10) are drawn.
        If vertex n-1 ends up unreachable from vertex 0, the missing links
        of the backbone chain 0 -> 1 -> ... -> n-1 are added (weights 1..5).
        """
        graph = Graph(n, directed=True)
        target_edges = int(n * (n - 1) / 2 * density)
        pairs = set()

        for u in range(n - 1):
            for v in range(u + 1, n):
                if len(pairs) < target_edges and self.rng.random() < density:
                    graph.add_edge(u, v, self._weight(10))
                    pairs.add((u, v))

        if n > 1 and not nx.has_path(to_networkx(graph), 0, n - 1):
            for u in range(n - 1):
                if (u, u + 1) not in pairs:
                    graph.add_edge(u, u + 1, self._weight(5))
                    pairs.add((u, u + 1))

        return graph

    def generate_graph_with_cycles(self, n, density):
        """
        Random graph seeded with short cycles.

        max(1, n // 4) cycles of 2..4 consecutive vertices are laid down
        first, then distinct random edges (no self-loops) are added until
        the graph holds density * n(n-1) edges.
        """
        graph = Graph(n, directed=True)
        if n < 2:
            return graph

        pairs = set()

        def add(u, v, weight):
            if u != v and (u, v) not in pairs:
                graph.add_edge(u, v, weight)
                pairs.add((u, v))

        for _ in range(max(1, n // 4)):
            cycle_size = min(int(self.rng.integers(2, 5)), n)
            start = int(self.rng.integers(0, max(1, n - cycle_size + 1)))
            for j in range(cycle_size):
                add(start + j, start + (j + 1) % cycle_size, self._weight(10))

        target_edges = min(int(n * (n - 1) * density), n * (n - 1))
        while len(pairs) < target_edges:
            u = int(self.rng.integers(0, n))
            v = int(self.rng.integers(0, n))
            add(u, v, self._weight(10))

        return graph

    def generate_dataset(self, n, density, has_cycles, filename):
        """Generate one graph and write it as a JSON document with source 0."""
        if has_cycles:
            graph = self.generate_graph_with_cycles(n, density)
        else:
            graph = self.generate_dag(n, density)

        save_graph_file(filename, graph, source=0, weight_model="edge")
        print(f"Generated: {filename}")
        return graph

    def generate_standard_datasets(self, directory):
        """
        Write the nine standard benchmark datasets into directory.

        Returns:
            list: Paths of the written files
        """
        os.makedirs(directory, exist_ok=True)
        paths = []
        for filename, n, density, has_cycles in STANDARD_DATASETS:
            path = os.path.join(directory, filename)
            self.generate_dataset(n, density, has_cycles, path)
            paths.append(path)
        logger.info("Generated %d datasets in %s", len(paths), directory)
        return paths
