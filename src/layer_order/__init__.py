"""layer-order: crossing-minimized node ordering for ranked layered graphs."""

from __future__ import annotations

from collections.abc import Mapping

import networkx as nx

from layer_order.config import OrderConfig
from layer_order.ir.graph import RankedGraph
from layer_order.layout import order, order_ranked
from layer_order.layout.types import Layering, OrderResult
from layer_order.types import NeighborGraph, NodeId

__all__ = [
    "OrderConfig",
    "OrderResult",
    "RankedGraph",
    "order_graph",
    "order_layers",
]


def order_layers(graph: NeighborGraph, ranks: Mapping[NodeId, int], max_iterations: int) -> Layering:
    """Return the lowest-crossing layering found in ``max_iterations`` sweeps.

    Args:
        graph: Any object with ``nodes()`` and ``neighbors(node)`` methods, e.g. a RankedGraph.
        ranks: Total map from node id to non-negative rank.
        max_iterations: Number of barycenter sweeps.

    Returns:
        One ordered list of node ids per rank.

    Raises:
        ValueError: If ``max_iterations`` is negative.
        MissingRankError: If any node of ``graph`` has no rank.
    """
    return order(graph, ranks, max_iterations).layering


def order_graph(
    graph: nx.Graph,
    ranks: Mapping[NodeId, int] | None = None,
    config: OrderConfig | None = None,
) -> OrderResult:
    """Order a networkx graph, deriving longest-path ranks when none are given.

    Args:
        graph: A networkx Graph or DiGraph.
        ranks: Node ranks; None derives them (requires a DAG when directed).
        config: Iteration count and seeding options.

    Returns:
        The best OrderResult found.

    Raises:
        ValueError: If ranks cannot be derived or are invalid.
    """
    if ranks is None:
        rg = RankedGraph.from_edges(graph.edges, nodes=graph.nodes, directed=graph.is_directed())
    else:
        rg = RankedGraph(graph, ranks)
    return order_ranked(rg, config)
