import networkx as nx

from ..domain.graph import Graph, GraphError


def to_networkx(graph):
    """
    Convert a Graph into a networkx multigraph.

    Parallel edges and self-loops are kept; each edge carries a "weight"
    attribute. Undirected graphs become nx.MultiGraph with each edge
    added once.
    """
    if graph.directed:
        G = nx.MultiDiGraph()
        G.add_nodes_from(range(graph.n))
        for u, v, weight in graph.edges():
            G.add_edge(u, v, weight=weight)
        return G

    G = nx.MultiGraph()
    G.add_nodes_from(range(graph.n))
    # Each undirected edge is stored once per endpoint, self-loops twice at u
    self_loops = {}
    for u, v, weight in graph.edges():
        if u < v:
            G.add_edge(u, v, weight=weight)
        elif u == v:
            self_loops[(u, weight)] = self_loops.get((u, weight), 0) + 1
    for (u, weight), count in self_loops.items():
        for _ in range(count // 2):
            G.add_edge(u, u, weight=weight)
    return G


def from_networkx(G, weight="weight", default_weight=1):
    """
    Build a Graph from a networkx graph.

    Nodes are relabelled 0..n-1 in G's node iteration order.

    Returns:
        tuple: (Graph, dict mapping original node -> vertex index)

    Raises:
        GraphError: If an edge weight is not an integer
    """
    index = {node: i for i, node in enumerate(G.nodes())}
    graph = Graph(len(index), directed=G.is_directed())
    for u, v, data in G.edges(data=True):
        w = data.get(weight, default_weight)
        if isinstance(w, float) and w.is_integer():
            w = int(w)
        if not isinstance(w, int):
            raise GraphError(f"Edge {u!r} -> {v!r} has non-integer weight {w!r}")
        graph.add_edge(index[u], index[v], w)
    return graph, index


def build_dependency_graph(durations, dependencies):
    """
    Build a task-dependency graph in which edge weights are task durations.

    Each edge dep -> task carries the duration of dep, so the longest path
    from a start task adds up the durations of every task on the chain
    except the last.

    Args:
        durations: Dictionary of task durations keyed by task ID
        dependencies: Dictionary of dependency ID lists keyed by task ID

    Returns:
        tuple: (Graph, list of task IDs indexed by vertex)
    """
    task_ids = list(durations)
    index = {task_id: i for i, task_id in enumerate(task_ids)}
    graph = Graph(len(task_ids), directed=True)

    for task_id in task_ids:
        for dep_id in dependencies.get(task_id, []):
            if dep_id in index:  # Ensure dependency exists
                graph.add_edge(index[dep_id], index[task_id], durations[dep_id])

    return graph, task_ids
