"""Shared type definitions for layer-order.

Exceptions raised across the graph IR, the ordering phase, and the CLI.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol

NodeId = Hashable


class NeighborGraph(Protocol):
    """Anything that can enumerate its nodes and the neighbors of a node."""

    def nodes(self) -> list[NodeId]: ...

    def neighbors(self, node: NodeId) -> list[NodeId]: ...


class OrderError(ValueError):
    """Base class for caller contract violations."""


class MissingRankError(OrderError, KeyError):
    """A node reached by the ordering has no entry in the rank map."""

    def __init__(self, node: NodeId) -> None:
        super().__init__(f"node {node!r} has no rank")
        self.node = node

    def __str__(self) -> str:
        return str(self.args[0])


class NegativeRankError(OrderError):
    """A rank is negative or not an integer."""

    def __init__(self, node: NodeId, rank: object) -> None:
        super().__init__(f"node {node!r} has invalid rank {rank!r}; ranks must be non-negative integers")
        self.node = node
        self.rank = rank


class GraphFormatError(OrderError):
    """A graph document could not be turned into a ranked graph."""
