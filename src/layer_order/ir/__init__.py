"""Intermediate representation: the ranked graph consumed by the ordering."""

from layer_order.ir.graph import RankedGraph, longest_path_ranks

__all__ = [
    "RankedGraph",
    "longest_path_ranks",
]
