import os
import tempfile
import unittest

import networkx as nx

from depchain.services.components import ComponentDetector
from depchain.utils.dataset_generator import STANDARD_DATASETS, DatasetGenerator
from depchain.utils.graph import to_networkx
from depchain.utils.loader import load_graph_file


class DatasetGeneratorTestCase(unittest.TestCase):
    """Test cases for synthetic dataset generation."""

    def test_same_seed_same_graph(self):
        first = DatasetGenerator(7).generate_graph_with_cycles(12, 0.3)
        second = DatasetGenerator(7).generate_graph_with_cycles(12, 0.3)
        self.assertEqual(list(first.edges()), list(second.edges()))

    def test_dag_properties(self):
        """Test that generated DAGs are acyclic and connect 0 to n-1."""
        for seed in range(5):
            graph = DatasetGenerator(seed).generate_dag(15, 0.2)
            G = to_networkx(graph)

            self.assertTrue(nx.is_directed_acyclic_graph(G))
            self.assertTrue(nx.has_path(G, 0, 14))
            for u, v, w in graph.edges():
                self.assertLess(u, v)
                self.assertTrue(1 <= w <= 10)

    def test_sparse_dag_gets_backbone(self):
        graph = DatasetGenerator(1).generate_dag(6, 0.0)
        self.assertEqual([(u, v) for u, v, _ in graph.edges()], [(i, i + 1) for i in range(5)])

    def test_cyclic_graph_properties(self):
        """Test that cyclic graphs contain a cycle and reach the target size."""
        for seed in range(5):
            graph = DatasetGenerator(seed).generate_graph_with_cycles(12, 0.3)

            self.assertTrue(ComponentDetector(graph).has_cycles())
            self.assertGreaterEqual(graph.edge_count(), int(12 * 11 * 0.3))

            pairs = [(u, v) for u, v, _ in graph.edges()]
            self.assertEqual(len(pairs), len(set(pairs)))
            self.assertTrue(all(u != v for u, v in pairs))

    def test_tiny_graphs(self):
        generator = DatasetGenerator(3)
        self.assertEqual(generator.generate_graph_with_cycles(1, 0.5).edge_count(), 0)
        self.assertEqual(generator.generate_dag(1, 0.5).edge_count(), 0)
        self.assertTrue(ComponentDetector(generator.generate_graph_with_cycles(2, 0.1)).has_cycles())

    def test_generate_standard_datasets(self):
        with tempfile.TemporaryDirectory() as directory:
            paths = DatasetGenerator(42).generate_standard_datasets(directory)

            self.assertEqual(len(paths), len(STANDARD_DATASETS))
            for path, (filename, n, _, _) in zip(paths, STANDARD_DATASETS):
                self.assertEqual(os.path.basename(path), filename)
                data = load_graph_file(path)
                self.assertEqual(data.graph.n, n)
                self.assertEqual(data.source, 0)


if __name__ == "__main__":
    unittest.main()
