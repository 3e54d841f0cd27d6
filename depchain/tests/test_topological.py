import unittest

from depchain.domain.graph import Graph, GraphError
from depchain.services.components import ComponentDetector
from depchain.services.topological import TopologicalSorter, expand_component_order


def make_graph(n, edges):
    graph = Graph(n, directed=True)
    for u, v in edges:
        graph.add_edge(u, v, 1)
    return graph


class TopologicalSorterTestCase(unittest.TestCase):
    """Test cases for both topological sort strategies."""

    def setUp(self):
        # Diamond: 0 -> {1, 2} -> 3
        self.diamond = make_graph(4, [(0, 1), (0, 2), (1, 3), (2, 3)])

    def assertValidOrder(self, graph, order):
        self.assertEqual(sorted(order), list(range(graph.n)))
        position = {v: i for i, v in enumerate(order)}
        for u, v, _ in graph.edges():
            self.assertLess(position[u], position[v], f"edge {u} -> {v} goes backwards")

    def test_kahn_order(self):
        """Test the queue-driven order on a diamond."""
        sorter = TopologicalSorter(self.diamond)
        self.assertEqual(sorter.sort(), [0, 1, 2, 3])

    def test_kahn_metrics(self):
        sorter = TopologicalSorter(self.diamond)
        sorter.sort()

        self.assertEqual(sorter.metrics.get_count("queue_pushes"), 4)
        self.assertEqual(sorter.metrics.get_count("queue_pops"), 4)
        self.assertEqual(sorter.metrics.get_count("edges_processed"), 4)

    def test_dfs_order(self):
        """Test the depth-first order on a diamond (reverse post-order)."""
        sorter = TopologicalSorter(self.diamond)
        order = sorter.sort_dfs()

        self.assertEqual(order, [0, 2, 1, 3])
        self.assertValidOrder(self.diamond, order)
        self.assertEqual(sorter.metrics.get_count("dfs_visits"), 4)
        self.assertEqual(sorter.metrics.get_count("edges_explored"), 4)

    def test_metrics_reset_between_strategies(self):
        """Test that each run starts from fresh counters."""
        sorter = TopologicalSorter(self.diamond)
        sorter.sort()
        sorter.sort_dfs()

        self.assertEqual(sorter.metrics.get_count("queue_pops"), 0)
        self.assertEqual(sorter.metrics.get_count("dfs_visits"), 4)

    def test_linear_chain(self):
        graph = make_graph(5, [(3, 4), (2, 3), (1, 2), (0, 1)])
        sorter = TopologicalSorter(graph)

        self.assertEqual(sorter.sort(), [0, 1, 2, 3, 4])
        self.assertEqual(sorter.sort_dfs(), [0, 1, 2, 3, 4])

    def test_cycle_detected(self):
        """Test that both strategies signal the 0 -> 1 -> 2 -> 0 cycle."""
        graph = make_graph(3, [(0, 1), (1, 2), (2, 0)])
        sorter = TopologicalSorter(graph)

        self.assertIsNone(sorter.sort())
        self.assertIsNone(sorter.sort_dfs())
        self.assertFalse(sorter.is_acyclic())

    def test_cycle_behind_acyclic_prefix(self):
        """Test a cycle that is only reachable after some ordered vertices."""
        graph = make_graph(5, [(0, 1), (1, 2), (2, 3), (3, 2), (0, 4)])
        sorter = TopologicalSorter(graph)

        self.assertIsNone(sorter.sort())
        self.assertIsNone(sorter.sort_dfs())

    def test_self_loop_detected(self):
        graph = make_graph(2, [(0, 1), (1, 1)])
        sorter = TopologicalSorter(graph)

        self.assertIsNone(sorter.sort())
        self.assertIsNone(sorter.sort_dfs())

    def test_disconnected_and_parallel_edges(self):
        """Test isolated vertices and duplicate edges."""
        graph = make_graph(5, [(0, 1), (0, 1), (3, 2)])
        sorter = TopologicalSorter(graph)

        self.assertValidOrder(graph, sorter.sort())
        self.assertValidOrder(graph, sorter.sort_dfs())

    def test_empty_graph(self):
        sorter = TopologicalSorter(Graph(0))
        self.assertEqual(sorter.sort(), [])
        self.assertEqual(sorter.sort_dfs(), [])

    def test_deep_chain_does_not_recurse(self):
        n = 20000
        graph = make_graph(n, [(v, v + 1) for v in range(n - 1)])
        self.assertEqual(TopologicalSorter(graph).sort_dfs(), list(range(n)))

    def test_undirected_graph_rejected(self):
        with self.assertRaises(GraphError):
            TopologicalSorter(Graph(3, directed=False))

    def test_expand_component_order(self):
        """Test expanding a condensation order into original vertices."""
        self.assertEqual(
            expand_component_order([1, 0], [[3, 2], [1, 0]]), [1, 0, 3, 2]
        )
        self.assertEqual(expand_component_order([], []), [])

    def test_condensation_order_expands_to_all_vertices(self):
        """Test ordering the condensation of (0 <-> 1) -> (2 <-> 3)."""
        graph = make_graph(4, [(0, 1), (1, 0), (1, 2), (2, 3), (3, 2)])
        detector = ComponentDetector(graph)
        components = detector.find_components()
        condensation = detector.build_condensation()

        order = TopologicalSorter(condensation).sort()
        expanded = expand_component_order(order, components)

        self.assertEqual(order, [1, 0])
        self.assertEqual(sorted(expanded[:2]), [0, 1])
        self.assertEqual(sorted(expanded[2:]), [2, 3])


if __name__ == "__main__":
    unittest.main()
