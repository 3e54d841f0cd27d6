import logging
from collections import deque
from typing import List, Optional, Sequence

from ..domain.graph import Graph, GraphError
from ..domain.metrics import Metrics

logger = logging.getLogger(__name__)


class TopologicalSorter:
    """
    Topological ordering of a directed graph.

    Two strategies are offered: sort() is queue-driven (Kahn's algorithm)
    and sort_dfs() is depth-first. They may break ties differently but
    always agree on whether an order exists. A cyclic graph is not an
    error: both return None.
    """

    def __init__(self, graph: Graph):
        if not graph.directed:
            raise GraphError("Topological sort requires a directed graph")
        self.graph = graph
        self.metrics = Metrics()

    def sort(self) -> Optional[List[int]]:
        """
        Kahn's algorithm.

        Returns:
            list: Vertices in topological order, or None if the graph has a cycle
        """
        n = self.graph.n

        self.metrics.reset()
        self.metrics.start_timer()

        in_degree = [0] * n
        for _, v, _ in self.graph.edges():
            in_degree[v] += 1

        queue = deque()
        for v in range(n):
            if in_degree[v] == 0:
                queue.append(v)
                self.metrics.increment("queue_pushes")

        result = []
        while queue:
            u = queue.popleft()
            self.metrics.increment("queue_pops")
            result.append(u)

            for edge in self.graph.get_neighbors(u):
                self.metrics.increment("edges_processed")
                in_degree[edge.to] -= 1
                if in_degree[edge.to] == 0:
                    queue.append(edge.to)
                    self.metrics.increment("queue_pushes")

        self.metrics.stop_timer()

        if len(result) != n:
            logger.debug("Cycle detected: ordered %d of %d vertices", len(result), n)
            return None
        return result

    def sort_dfs(self) -> Optional[List[int]]:
        """
        Depth-first topological sort.

        A vertex is pushed onto the finish stack once all of its
        descendants are finished; draining that stack gives reverse
        post-order. Meeting a vertex that is still on the current path
        means a back edge, i.e. a cycle.

        Returns:
            list: Vertices in topological order, or None if the graph has a cycle
        """
        n = self.graph.n
        visited = [False] * n
        on_path = [False] * n
        finished: List[int] = []

        self.metrics.reset()
        self.metrics.start_timer()

        for root in range(n):
            if visited[root]:
                continue

            visited[root] = on_path[root] = True
            self.metrics.increment("dfs_visits")
            work = [[root, 0]]

            while work:
                frame = work[-1]
                u, cursor = frame
                neighbors = self.graph.get_neighbors(u)

                if cursor < len(neighbors):
                    frame[1] = cursor + 1
                    v = neighbors[cursor].to
                    self.metrics.increment("edges_explored")

                    if not visited[v]:
                        visited[v] = on_path[v] = True
                        self.metrics.increment("dfs_visits")
                        work.append([v, 0])
                    elif on_path[v]:
                        self.metrics.stop_timer()
                        logger.debug("Cycle detected: back edge %d -> %d", u, v)
                        return None
                    continue

                work.pop()
                on_path[u] = False
                finished.append(u)

        self.metrics.stop_timer()

        order = []
        while finished:
            order.append(finished.pop())
        return order

    def is_acyclic(self) -> bool:
        return self.sort() is not None


def expand_component_order(
    component_order: Sequence[int], components: Sequence[Sequence[int]]
) -> List[int]:
    """
    Replace each condensation vertex with the members of its component.

    Members keep the order recorded by the component detector. The result
    is only meaningful when component_order is an order over the same
    component list, not an independently reordered copy.

    Args:
        component_order: Topological order of component indices
        components: Components as returned by ComponentDetector

    Returns:
        list: Original vertices
    """
    expanded = []
    for index in component_order:
        expanded.extend(components[index])
    return expanded
