"""Load a JSON graph document into a RankedGraph.

Document shape::

    {"directed": true, "nodes": ["a", "b"], "edges": [["a", "b"]], "ranks": {"a": 0, "b": 1}}

Only ``edges`` is required. Missing ranks are derived by longest path.
"""

from __future__ import annotations

import json

from layer_order.ir.graph import RankedGraph
from layer_order.types import GraphFormatError


def parse_document(text: str) -> RankedGraph:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphFormatError(f"invalid JSON: {e}") from e
    return load_document(doc)


def load_document(doc: object) -> RankedGraph:
    if not isinstance(doc, dict):
        raise GraphFormatError("graph document must be a JSON object")

    directed = doc.get("directed", True)
    if not isinstance(directed, bool):
        raise GraphFormatError("'directed' must be true or false")

    nodes = doc.get("nodes", [])
    if not isinstance(nodes, list) or not all(isinstance(n, str) for n in nodes):
        raise GraphFormatError("'nodes' must be a list of strings")

    raw_edges = doc.get("edges")
    if not isinstance(raw_edges, list):
        raise GraphFormatError("'edges' must be a list of [source, target] pairs")
    edges: list[tuple[str, str]] = []
    for edge in raw_edges:
        if not (isinstance(edge, list) and len(edge) == 2 and all(isinstance(e, str) for e in edge)):
            raise GraphFormatError(f"malformed edge {edge!r}; expected [source, target]")
        edges.append((edge[0], edge[1]))

    ranks = doc.get("ranks")
    if ranks is not None and not isinstance(ranks, dict):
        raise GraphFormatError("'ranks' must be an object mapping node ids to ranks")

    try:
        return RankedGraph.from_edges(edges, ranks=ranks, nodes=nodes, directed=directed)
    except ValueError as e:
        raise GraphFormatError(str(e)) from e
