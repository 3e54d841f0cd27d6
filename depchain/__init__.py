"""
depchain
========

Dependency-graph analysis for task networks.

Available modules:
- domain.graph: weighted directed graph
- domain.metrics: per-run operation counters and timing
- services.components: strongly connected components and condensation
- services.topological: queue-driven and depth-first topological order
- services.dag_paths: shortest/longest paths and the critical path in a DAG
- services.analysis: the full pipeline over a dependency graph
"""

from depchain.domain.graph import Edge, Graph, GraphError
from depchain.domain.metrics import Metrics
from depchain.services.components import ComponentDetector
from depchain.services.topological import TopologicalSorter, expand_component_order
from depchain.services.dag_paths import (
    CriticalPathResult,
    DagPathAnalyzer,
    PathResult,
)
from depchain.services.analysis import GraphAnalysis, analyze_graph

__all__ = [
    "Edge",
    "Graph",
    "GraphError",
    "Metrics",
    "ComponentDetector",
    "TopologicalSorter",
    "expand_component_order",
    "CriticalPathResult",
    "DagPathAnalyzer",
    "PathResult",
    "GraphAnalysis",
    "analyze_graph",
]
