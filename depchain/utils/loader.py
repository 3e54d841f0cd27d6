"""
JSON graph ingestion.

Graph documents look like::

    {
        "directed": true,
        "n": 4,
        "edges": [{"u": 0, "v": 1, "w": 3}, {"u": 1, "v": 2}],
        "source": 0,
        "weight_model": "edge"
    }

"w" defaults to 1, "source" to 0 and "weight_model" to "edge". The weight
model is an informational label only; no algorithm interprets it.
"""

import json
import logging
import os

from ..domain.graph import Graph, GraphError

logger = logging.getLogger(__name__)


class GraphLoadError(Exception):
    """Exception raised when a graph document cannot be turned into a Graph."""

    pass


class GraphData:
    """A loaded graph plus the metadata that travels with it."""

    def __init__(self, graph: Graph, source: int = 0, weight_model: str = "edge"):
        self.graph = graph
        self.source = source
        self.weight_model = weight_model

    def __repr__(self):
        return (
            f"GraphData({self.graph!r}, source={self.source}, "
            f"weight_model={self.weight_model!r})"
        )


def _require_int(value, what):
    if not isinstance(value, int) or isinstance(value, bool):
        raise GraphLoadError(f"{what} must be an integer, got {value!r}")
    return value


def graph_data_from_dict(data):
    """
    Build GraphData from an already parsed document.

    Raises:
        GraphLoadError: If required keys are missing or values are invalid
    """
    if not isinstance(data, dict):
        raise GraphLoadError("Graph document must be a JSON object")

    for key in ("directed", "n", "edges"):
        if key not in data:
            raise GraphLoadError(f"Graph document is missing '{key}'")

    if not isinstance(data["directed"], bool):
        raise GraphLoadError("'directed' must be true or false")
    n = _require_int(data["n"], "'n'")
    if not isinstance(data["edges"], list):
        raise GraphLoadError("'edges' must be a list")

    try:
        graph = Graph(n, directed=data["directed"])
        for position, edge in enumerate(data["edges"]):
            if not isinstance(edge, dict) or "u" not in edge or "v" not in edge:
                raise GraphLoadError(f"Edge #{position} must be an object with 'u' and 'v'")
            graph.add_edge(
                _require_int(edge["u"], f"Edge #{position} 'u'"),
                _require_int(edge["v"], f"Edge #{position} 'v'"),
                _require_int(edge.get("w", 1), f"Edge #{position} 'w'"),
            )
    except GraphError as e:
        raise GraphLoadError(str(e)) from e

    source = _require_int(data.get("source", 0), "'source'")
    if n > 0 and not 0 <= source < n:
        raise GraphLoadError(f"Source vertex {source} is out of range [0, {n})")

    weight_model = data.get("weight_model", "edge")
    if not isinstance(weight_model, str):
        raise GraphLoadError("'weight_model' must be a string")

    return GraphData(graph, source, weight_model)


def load_graph_string(text):
    """Parse a JSON string into GraphData."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Invalid JSON: {e}") from e
    return graph_data_from_dict(data)


def load_graph_file(filename):
    """
    Load GraphData from a JSON file.

    Raises:
        GraphLoadError: If the file cannot be read or is not a valid graph document
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise GraphLoadError(f"Cannot read {filename}: {e}") from e

    graph_data = load_graph_string(text)
    logger.info("Loaded %s: %r", os.path.basename(filename), graph_data.graph)
    return graph_data


def graph_to_dict(graph, source=0, weight_model="edge"):
    """Serialize a Graph into the document format read by graph_data_from_dict."""
    if graph.directed:
        entries = list(graph.edges())
    else:
        # Undirected edges are stored at both endpoints; keep one copy of each
        entries = []
        self_loops = {}
        for u, v, w in graph.edges():
            if u < v:
                entries.append((u, v, w))
            elif u == v:
                self_loops[(u, w)] = self_loops.get((u, w), 0) + 1
        for (u, w), count in self_loops.items():
            entries.extend([(u, u, w)] * (count // 2))

    return {
        "directed": graph.directed,
        "n": graph.n,
        "edges": [{"u": u, "v": v, "w": w} for u, v, w in entries],
        "source": source,
        "weight_model": weight_model,
    }


def save_graph_file(filename, graph, source=0, weight_model="edge"):
    """Write a Graph as a JSON document."""
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(graph_to_dict(graph, source, weight_model), f, indent=2)
    logger.info("Wrote %s", filename)
