import logging
from typing import List, Optional, Sequence

from ..domain.graph import Graph, GraphError
from ..domain.metrics import Metrics
from .topological import TopologicalSorter

logger = logging.getLogger(__name__)

SHORTEST = "shortest"
LONGEST = "longest"


class PathResult:
    """
    Distances and parent links from one single-source run.

    A distance of None means the vertex was not reached from the source.
    A parent of None means the vertex has no predecessor on its path
    (the source itself, or an unreached vertex).
    """

    def __init__(
        self,
        source: int,
        dist: List[Optional[int]],
        parent: List[Optional[int]],
        topo_order: List[int],
        mode: str = SHORTEST,
    ):
        self.source = source
        self.dist = dist
        self.parent = parent
        self.topo_order = topo_order
        self.mode = mode

    def is_reachable(self, target: int) -> bool:
        return self.dist[target] is not None

    def reconstruct_path(self, target: int) -> Optional[List[int]]:
        """
        Walk parent links back from target.

        Returns:
            list: Vertices from source to target inclusive, or None if target is unreached
        """
        if self.dist[target] is None:
            return None

        path = []
        current = target
        while current is not None:
            path.append(current)
            current = self.parent[current]
        path.reverse()
        return path

    def __repr__(self):
        return f"PathResult(mode={self.mode!r}, source={self.source}, dist={self.dist})"


class CriticalPathResult:
    """The longest path from a source and its total weight."""

    def __init__(self, path: List[int], length: int):
        self.path = path
        self.length = length

    def __eq__(self, other):
        if not isinstance(other, CriticalPathResult):
            return NotImplemented
        return self.path == other.path and self.length == other.length

    def __str__(self):
        return f"Critical Path: {self.path}, Length: {self.length}"

    __repr__ = __str__


def path_weight(graph: Graph, path: Sequence[int], longest: bool = False) -> int:
    """
    Total weight along path.

    Where parallel edges join two consecutive vertices, the lightest one
    is used, or the heaviest one when longest is set, matching the edge a
    shortest or longest run would have relaxed.

    Raises:
        GraphError: If two consecutive vertices are not joined by an edge
    """
    total = 0
    for u, v in zip(path, path[1:]):
        weights = [edge.weight for edge in graph.get_neighbors(u) if edge.to == v]
        if not weights:
            raise GraphError(f"No edge {u} -> {v} along path")
        total += max(weights) if longest else min(weights)
    return total


class DagPathAnalyzer:
    """
    Single-source shortest and longest paths in a DAG.

    Vertices are relaxed in topological order, which makes one pass over
    the edges enough: O(V + E). Every run recomputes its own order, so a
    cyclic graph is detected here as well and reported by returning None.
    """

    def __init__(self, graph: Graph):
        if not graph.directed:
            raise GraphError("DAG path analysis requires a directed graph")
        self.graph = graph
        self.metrics = Metrics()

    def shortest_paths(self, source: int) -> Optional[PathResult]:
        """Shortest distances from source, or None if the graph has a cycle."""
        return self._relax_all(source, SHORTEST)

    def longest_paths(self, source: int) -> Optional[PathResult]:
        """Longest distances from source, or None if the graph has a cycle."""
        return self._relax_all(source, LONGEST)

    def _relax_all(self, source, mode):
        if not isinstance(source, int) or not 0 <= source < self.graph.n:
            raise GraphError(f"Source vertex {source!r} is out of range [0, {self.graph.n})")

        self.metrics.reset()

        topo_order = TopologicalSorter(self.graph).sort()
        if topo_order is None:
            logger.debug("Skipping %s paths: graph contains a cycle", mode)
            return None

        n = self.graph.n
        dist: List[Optional[int]] = [None] * n
        parent: List[Optional[int]] = [None] * n
        dist[source] = 0
        longest = mode == LONGEST

        self.metrics.start_timer()

        for u in topo_order:
            base = dist[u]
            if base is None:
                continue
            for edge in self.graph.get_neighbors(u):
                self.metrics.increment("relaxations")
                candidate = base + edge.weight
                current = dist[edge.to]
                if current is None or (
                    candidate > current if longest else candidate < current
                ):
                    dist[edge.to] = candidate
                    parent[edge.to] = u
                    self.metrics.increment("updates")

        self.metrics.stop_timer()

        logger.debug(
            "%s paths from %d: %s", mode.capitalize(), source, self.metrics.counters()
        )
        return PathResult(source, dist, parent, topo_order, mode)

    def find_critical_path(self, source: int) -> Optional[CriticalPathResult]:
        """
        The maximum-weight path starting at source.

        Returns:
            CriticalPathResult: Path and length; just [source] with length 0
                when nothing reachable lies farther away. None if the graph
                has a cycle.
        """
        result = self.longest_paths(source)
        if result is None:
            return None

        # The source is always reached with distance 0
        best_vertex, best_dist = source, 0
        for v, d in enumerate(result.dist):
            if d is not None and d > best_dist:
                best_vertex, best_dist = v, d

        return CriticalPathResult(result.reconstruct_path(best_vertex), best_dist)
