from typing import Iterator, List, Tuple


class GraphError(Exception):
    """Exception raised for invalid graph structure or misuse of a graph."""

    pass


class Edge:
    """An outgoing edge: destination vertex and integer weight."""

    __slots__ = ("to", "weight")

    def __init__(self, to: int, weight: int):
        self.to = to
        self.weight = weight

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.to == other.to and self.weight == other.weight

    def __hash__(self):
        return hash((self.to, self.weight))

    def __repr__(self):
        return f"->{self.to}(w={self.weight})"


class Graph:
    """
    Weighted graph over vertices 0..n-1 stored as adjacency lists.

    Edges are appended per source vertex and kept in insertion order.
    Self-loops and parallel edges are allowed. There is no edge removal:
    build the graph once, then hand it to the algorithms, which never
    modify it.
    """

    def __init__(self, n: int, directed: bool = True):
        """
        Initialize an empty graph.

        Args:
            n: Number of vertices
            directed: Whether edges are one-way

        Raises:
            GraphError: If n is negative or not an integer
        """
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise GraphError("Vertex count must be a non-negative integer")
        self._n = n
        self._directed = bool(directed)
        self._adj: List[List[Edge]] = [[] for _ in range(n)]

    @property
    def n(self) -> int:
        return self._n

    @property
    def directed(self) -> bool:
        return self._directed

    def __len__(self):
        return self._n

    def _check_vertex(self, u):
        if not isinstance(u, int) or isinstance(u, bool) or not 0 <= u < self._n:
            raise GraphError(f"Vertex {u!r} is out of range [0, {self._n})")

    def add_edge(self, u: int, v: int, weight: int = 1) -> "Graph":
        """
        Add an edge from u to v.

        For undirected graphs the mirror edge v -> u is stored as well.

        Args:
            u: Source vertex
            v: Destination vertex
            weight: Integer edge weight

        Returns:
            self: For method chaining

        Raises:
            GraphError: If either endpoint is out of range or weight is not an integer
        """
        self._check_vertex(u)
        self._check_vertex(v)
        if not isinstance(weight, int) or isinstance(weight, bool):
            raise GraphError(f"Edge weight must be an integer, got {weight!r}")

        self._adj[u].append(Edge(v, weight))
        if not self._directed:
            self._adj[v].append(Edge(u, weight))
        return self

    def get_neighbors(self, u: int) -> List[Edge]:
        """Return the outgoing edges of u in insertion order."""
        self._check_vertex(u)
        return self._adj[u]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Iterate over every stored (u, v, weight) entry."""
        for u, adjacency in enumerate(self._adj):
            for edge in adjacency:
                yield u, edge.to, edge.weight

    def reverse(self) -> "Graph":
        """
        Return the transpose of this graph.

        Raises:
            GraphError: If the graph is undirected
        """
        if not self._directed:
            raise GraphError("Cannot reverse an undirected graph")

        reversed_graph = Graph(self._n, directed=True)
        for u, v, weight in self.edges():
            reversed_graph.add_edge(v, u, weight)
        return reversed_graph

    def edge_count(self) -> int:
        """Number of edges; undirected edges are stored twice but counted once."""
        count = sum(len(adjacency) for adjacency in self._adj)
        return count if self._directed else count // 2

    def __repr__(self):
        kind = "directed" if self._directed else "undirected"
        return f"Graph(n={self._n}, edges={self.edge_count()}, {kind})"

    def __str__(self):
        lines = [repr(self)]
        for u, adjacency in enumerate(self._adj):
            if adjacency:
                lines.append(f"  {u}: {adjacency}")
        return "\n".join(lines)
