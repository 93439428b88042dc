"""Ordering types shared across the layout phase and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field

from layer_order.types import NodeId

Layering = list[list[NodeId]]


@dataclass
class OrderResult:
    """Best layering found by the optimization loop, with its true score."""

    layering: Layering
    crossings: int
    iterations: int
    improved_at: list[int] = field(default_factory=list)
