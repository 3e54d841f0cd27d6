import logging
from typing import List, Optional

from ..domain.graph import Graph, GraphError
from ..domain.metrics import Metrics

logger = logging.getLogger(__name__)


class ComponentDetector:
    """
    Strongly connected components via Tarjan's single-pass depth-first search.

    Every vertex gets a discovery index and a low-link value (the lowest
    discovery index reachable through its subtree plus back edges to
    vertices still on the stack). A vertex whose low-link equals its own
    discovery index roots a component; popping the stack down through it
    yields the members.

    Components come out in reverse topological order of the condensation:
    a component is emitted only after every component it can reach.
    """

    def __init__(self, graph: Graph):
        """
        Args:
            graph: The directed graph to analyze

        Raises:
            GraphError: If the graph is undirected
        """
        if not graph.directed:
            raise GraphError("Component detection requires a directed graph")
        self.graph = graph
        self.metrics = Metrics()
        self._components: Optional[List[List[int]]] = None

    @property
    def components(self) -> List[List[int]]:
        if self._components is None:
            return self.find_components()
        return self._components

    def find_components(self) -> List[List[int]]:
        """
        Find all strongly connected components.

        Returns:
            list: Components, each a list of vertices in the order they were popped
        """
        n = self.graph.n
        disc = [-1] * n
        low = [0] * n
        on_stack = [False] * n
        stack: List[int] = []
        components: List[List[int]] = []
        counter = 0

        self.metrics.reset()
        self.metrics.start_timer()

        for root in range(n):
            if disc[root] != -1:
                continue

            disc[root] = low[root] = counter
            counter += 1
            stack.append(root)
            on_stack[root] = True
            self.metrics.increment("dfs_visits")

            # Each frame is [vertex, index of the next neighbor to explore]
            work = [[root, 0]]
            while work:
                frame = work[-1]
                u, cursor = frame
                neighbors = self.graph.get_neighbors(u)

                if cursor < len(neighbors):
                    frame[1] = cursor + 1
                    v = neighbors[cursor].to
                    self.metrics.increment("edges_explored")

                    if disc[v] == -1:
                        disc[v] = low[v] = counter
                        counter += 1
                        stack.append(v)
                        on_stack[v] = True
                        self.metrics.increment("dfs_visits")
                        work.append([v, 0])
                    elif on_stack[v]:
                        low[u] = min(low[u], disc[v])
                    continue

                # All neighbors of u done
                work.pop()
                if low[u] == disc[u]:
                    component = []
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component.append(w)
                        self.metrics.increment("stack_pops")
                        if w == u:
                            break
                    components.append(component)
                    self.metrics.increment("sccs_found")

                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[u])

        self.metrics.stop_timer()
        self._components = components

        logger.debug(
            "Found %d components in %d vertices (%s)",
            len(components),
            n,
            self.metrics.counters(),
        )
        return components

    def vertex_to_component(self) -> List[int]:
        """Map each vertex to the index of its component."""
        mapping = [0] * self.graph.n
        for index, component in enumerate(self.components):
            for v in component:
                mapping[v] = index
        return mapping

    def build_condensation(self) -> Graph:
        """
        Build the condensation graph, one vertex per component.

        An edge i -> j is added for the first original edge found crossing
        from component i to component j; later parallel crossings are
        ignored, so only the first-seen weight survives. Original edges are
        scanned by ascending source vertex, then in insertion order, which
        makes the kept weight depend on that order whenever several
        crossings with different weights exist.

        Returns:
            Graph: Directed acyclic graph over component indices
        """
        mapping = self.vertex_to_component()
        condensation = Graph(len(self.components), directed=True)
        added = set()

        for u, v, weight in self.graph.edges():
            source_component = mapping[u]
            target_component = mapping[v]
            if source_component == target_component:
                continue
            key = (source_component, target_component)
            if key not in added:
                condensation.add_edge(source_component, target_component, weight)
                added.add(key)

        return condensation

    def has_cycles(self) -> bool:
        """True if any component has more than one vertex or a self-loop."""
        for component in self.components:
            if len(component) > 1:
                return True
            v = component[0]
            if any(edge.to == v for edge in self.graph.get_neighbors(v)):
                return True
        return False
