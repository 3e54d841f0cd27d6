import unittest

from depchain.domain.graph import Graph, GraphError
from depchain.examples.simple_project import create_sample_project
from depchain.services.analysis import analyze_graph


class AnalysisPipelineTestCase(unittest.TestCase):
    """End-to-end tests for the component -> order -> paths pipeline."""

    def setUp(self):
        # (0 -> 1 -> 2 -> 0) -> 3 -> 4
        self.graph = Graph(5, directed=True)
        self.graph.add_edge(0, 1, 2)
        self.graph.add_edge(1, 2, 3)
        self.graph.add_edge(2, 0, 1)
        self.graph.add_edge(2, 3, 4)
        self.graph.add_edge(3, 4, 5)

    def test_full_pipeline(self):
        analysis = analyze_graph(self.graph, source=0)

        self.assertEqual(analysis.components, [[4], [3], [2, 1, 0]])
        self.assertEqual(analysis.vertex_to_component, [2, 2, 2, 1, 0])
        self.assertTrue(analysis.has_cycles)

        self.assertEqual(analysis.condensation.n, 3)
        self.assertEqual(analysis.condensation.edge_count(), 2)

        self.assertEqual(analysis.component_order, [2, 1, 0])
        self.assertEqual(analysis.expanded_order, [2, 1, 0, 3, 4])

        self.assertEqual(analysis.component_source, 2)
        self.assertEqual(analysis.shortest.dist, [9, 4, 0])
        self.assertEqual(analysis.critical_path.path, [2, 1, 0])
        self.assertEqual(analysis.critical_path.length, 9)

    def test_stage_metrics(self):
        """Test that every stage records its own metrics snapshot."""
        analysis = analyze_graph(self.graph, source=0)

        self.assertEqual(
            set(analysis.metrics),
            {"components", "topological", "shortest_paths", "critical_path"},
        )
        self.assertEqual(analysis.metrics["components"]["dfs_visits"], 5)
        self.assertEqual(analysis.metrics["components"]["sccs_found"], 3)
        self.assertEqual(analysis.metrics["topological"]["queue_pops"], 3)
        self.assertEqual(analysis.metrics["shortest_paths"]["relaxations"], 2)
        self.assertEqual(analysis.metrics["critical_path"]["updates"], 2)

    def test_source_inside_downstream_component(self):
        analysis = analyze_graph(self.graph, source=3)

        self.assertEqual(analysis.component_source, 1)
        self.assertEqual(analysis.shortest.dist, [5, 0, None])
        self.assertEqual(analysis.critical_path.length, 5)

    def test_acyclic_input(self):
        graph = Graph(3)
        graph.add_edge(0, 1, 1).add_edge(1, 2, 1)
        analysis = analyze_graph(graph)

        self.assertFalse(analysis.has_cycles)
        self.assertEqual(len(analysis.components), 3)

    def test_empty_graph(self):
        analysis = analyze_graph(Graph(0))

        self.assertEqual(analysis.components, [])
        self.assertEqual(analysis.expanded_order, [])
        self.assertIsNone(analysis.shortest)
        self.assertIsNone(analysis.critical_path)
        self.assertIn("2. TOPOLOGICAL SORT", analysis.report())

    def test_report(self):
        report = analyze_graph(self.graph, source=0, weight_model="duration").report()

        self.assertIn("Weight model: duration", report)
        self.assertIn("Found 3 strongly connected components:", report)
        self.assertIn("SCC 2 (size 3): [2, 1, 0]", report)
        self.assertIn("Topological order of SCCs: [2, 1, 0]", report)
        self.assertIn("Critical Path: [2, 1, 0], Length: 9", report)

    def test_invalid_input(self):
        with self.assertRaises(GraphError):
            analyze_graph(self.graph, source=5)
        with self.assertRaises(GraphError):
            analyze_graph(Graph(2, directed=False))


class SampleProjectTestCase(unittest.TestCase):
    def test_sample_project(self):
        """Test the bundled example task network."""
        analysis = create_sample_project()

        # design (2) and utilities (3) wait on each other
        groups = [sorted(c) for c in analysis.components if len(c) > 1]
        self.assertEqual(groups, [[2, 3]])
        self.assertIsNotNone(analysis.critical_path)
        self.assertEqual(analysis.critical_path.path[0], analysis.component_source)


if __name__ == "__main__":
    unittest.main()
