"""Centralized configuration for layer-order."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ITERATIONS: int = 24


@dataclass
class OrderConfig:
    """Configuration for the ordering pipeline."""

    iterations: int = DEFAULT_ITERATIONS
    seed_unreached: bool = False
