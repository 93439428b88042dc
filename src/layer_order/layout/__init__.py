"""Ordering phase public API."""

from __future__ import annotations

import logging

from layer_order.config import OrderConfig
from layer_order.ir.graph import RankedGraph
from layer_order.layout.ordering import (
    bilayer_cross_count,
    copy_layering,
    cross_count,
    improve_layer,
    improve_ordering,
    init_order,
    order,
    rank_weights,
    reorder,
)
from layer_order.layout.types import Layering, OrderResult

__all__ = [
    "Layering",
    "OrderResult",
    "bilayer_cross_count",
    "copy_layering",
    "cross_count",
    "improve_layer",
    "improve_ordering",
    "init_order",
    "order",
    "order_ranked",
    "rank_weights",
    "reorder",
]

logger = logging.getLogger(__name__)


def order_ranked(rg: RankedGraph, config: OrderConfig | None = None) -> OrderResult:
    """Run the ordering phase on a RankedGraph."""
    config = config or OrderConfig()
    rg.validate()
    logger.debug("ordering %d nodes and %d edges", rg.node_count(), rg.edge_count())
    return order(rg, rg.ranks, config.iterations, nodes=rg.nodes(), seed_unreached=config.seed_unreached)
