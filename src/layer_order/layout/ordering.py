"""Crossing minimization for ranked layered graphs.

Phases:
  1. Crossing count (bilayer accumulator tree + total)
  2. Initial order (depth-first from rank-0 nodes)
  3. Barycenter reordering of one layer against a fixed neighbor layer
  4. Optimization loop (alternating sweeps, best-so-far tracking)
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from fractions import Fraction

from layer_order.layout.types import Layering, OrderResult
from layer_order.types import MissingRankError, NegativeRankError, NeighborGraph, NodeId

logger = logging.getLogger(__name__)


# ─── Crossing Count ──────────────────────────────────────────────────────────


def bilayer_cross_count(graph: NeighborGraph, layer1: list[NodeId], layer2: list[NodeId]) -> int:
    """Count edge crossings between two adjacent ordered layers.

    Derived from W. Barth et al., Bilayer Cross Counting, JGAA 8(2) 179-194
    (2004). Edge endpoints in ``layer2`` are inserted into an accumulator tree
    in ``layer1`` order; each insertion adds the number of earlier endpoints
    lying strictly to its right.
    """
    layer2_pos: dict[NodeId, int] = {node: i for i, node in enumerate(layer2)}

    edge_indices: list[int] = []
    for u in layer1:
        edge_indices.extend(sorted(layer2_pos[v] for v in graph.neighbors(u) if v in layer2_pos))

    first_index = 1
    while first_index < len(layer2):
        first_index <<= 1

    tree_size = 2 * first_index - 1
    first_index -= 1
    tree: list[int] = [0] * tree_size

    crossings = 0
    for pos in edge_indices:
        tree_index = pos + first_index
        tree[tree_index] += 1
        while tree_index > 0:
            # Odd indices are left children; the right sibling holds later positions.
            if tree_index % 2:
                crossings += tree[tree_index + 1]
            tree_index = (tree_index - 1) >> 1
            tree[tree_index] += 1

    return crossings


def cross_count(graph: NeighborGraph, layering: Layering) -> int:
    """Sum bilayer crossings over every pair of consecutive layers."""
    total = 0
    prev_layer: list[NodeId] | None = None
    for layer in layering:
        if prev_layer is not None:
            total += bilayer_cross_count(graph, prev_layer, layer)
        prev_layer = layer
    return total


# ─── Initial Order ───────────────────────────────────────────────────────────


def _rank_of(ranks: Mapping[NodeId, int], node: NodeId) -> int:
    try:
        rank = ranks[node]
    except KeyError:
        raise MissingRankError(node) from None
    if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
        raise NegativeRankError(node, rank)
    return rank


def init_order(
    graph: NeighborGraph,
    ranks: Mapping[NodeId, int],
    nodes: Iterable[NodeId],
    seed_unreached: bool = False,
) -> Layering:
    """Build a first valid layering by depth-first traversal from rank-0 nodes.

    Nodes are appended to the layer of their rank in pre-order. Traversal uses
    an explicit stack so deep graphs do not hit the recursion limit; neighbors
    are pushed in reverse so they are visited in their natural order.

    Nodes not reachable from any rank-0 node are left out and reported with a
    warning, unless ``seed_unreached`` is set, in which case each of them seeds
    a further traversal (lowest rank first).
    """
    nodes = list(nodes)
    node_ranks: dict[NodeId, int] = {u: _rank_of(ranks, u) for u in nodes}
    layering: Layering = []
    visited: set[NodeId] = set()

    def dfs(root: NodeId) -> None:
        stack: list[NodeId] = [root]
        while stack:
            u = stack.pop()
            if u in visited:
                continue
            visited.add(u)

            rank = _rank_of(ranks, u)
            for _ in range(len(layering), rank + 1):
                layering.append([])
            layering[rank].append(u)

            stack.extend(reversed(list(graph.neighbors(u))))

    for u in nodes:
        if node_ranks[u] == 0:
            dfs(u)

    unreached = [u for u in nodes if u not in visited]
    if unreached:
        if seed_unreached:
            logger.debug("seeding %d unreached nodes", len(unreached))
            for u in sorted(unreached, key=node_ranks.__getitem__):
                dfs(u)
        else:
            logger.warning(
                "%d node(s) not reachable from a rank-0 node were left out of the layering: %s",
                len(unreached),
                ", ".join(repr(u) for u in unreached[:10]),
            )

    return layering


# ─── Barycenter Reordering ───────────────────────────────────────────────────


def rank_weights(
    graph: NeighborGraph,
    fixed: list[NodeId],
    movable: list[NodeId],
) -> dict[NodeId, Fraction | None]:
    """Mean fixed-layer position of each movable node's neighbors.

    Weights are exact fractions. A node with no neighbor in ``fixed`` gets
    ``None`` and is left in place by the reorderer.
    """
    fixed_pos: dict[NodeId, int] = {node: i for i, node in enumerate(fixed)}

    weights: dict[NodeId, Fraction | None] = {}
    for u in movable:
        total = 0
        adj_count = 0
        for v in graph.neighbors(u):
            v_pos = fixed_pos.get(v)
            if v_pos is not None:
                total += v_pos
                adj_count += 1
        weights[u] = Fraction(total, adj_count) if adj_count else None
    return weights


def reorder(graph: NeighborGraph, fixed: list[NodeId], movable: list[NodeId]) -> list[NodeId]:
    """Return ``movable`` reordered by barycenter against ``fixed``."""
    weights = rank_weights(graph, fixed, movable)

    to_sort = [(weights[u], pos, u) for pos, u in enumerate(movable) if weights[u] is not None]
    to_sort.sort(key=lambda entry: (entry[0], entry[1]))

    sorted_nodes = iter(u for _, _, u in to_sort)
    return [next(sorted_nodes) if weights[u] is not None else u for u in movable]


def improve_layer(graph: NeighborGraph, fixed: list[NodeId], movable: list[NodeId]) -> None:
    """Reorder ``movable`` in place by barycenter against ``fixed``."""
    movable[:] = reorder(graph, fixed, movable)


def improve_ordering(graph: NeighborGraph, iteration: int, layering: Layering) -> None:
    """Run one sweep: top-down on even iterations, bottom-up on odd ones."""
    if iteration % 2 == 0:
        for j in range(1, len(layering)):
            improve_layer(graph, layering[j - 1], layering[j])
    else:
        for j in range(len(layering) - 2, -1, -1):
            improve_layer(graph, layering[j + 1], layering[j])


# ─── Optimization Loop ───────────────────────────────────────────────────────


def _check_iterations(max_iterations: object) -> int:
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise ValueError(f"max_iterations must be an int, got {max_iterations!r}")
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")
    return max_iterations


def copy_layering(layering: Layering) -> Layering:
    return copy.deepcopy(layering)


def order(
    graph: NeighborGraph,
    ranks: Mapping[NodeId, int],
    max_iterations: int,
    nodes: Iterable[NodeId] | None = None,
    seed_unreached: bool = False,
) -> OrderResult:
    """Find a low-crossing layering by repeated barycenter sweeps.

    Args:
        graph: Neighbor lookup for every node.
        ranks: Total map from node to non-negative rank.
        max_iterations: Number of sweeps to run; there is no early exit.
        nodes: Node iteration order for seeding; defaults to ``graph.nodes()``.
        seed_unreached: Also place nodes not reachable from rank 0.

    Returns:
        The best layering seen (the initial one if no sweep improved on it)
        together with its crossing count.

    Raises:
        ValueError: If ``max_iterations`` is negative or not an int.
        MissingRankError: If any node in ``nodes`` has no rank.
    """
    max_iterations = _check_iterations(max_iterations)
    if nodes is None:
        nodes = graph.nodes()

    layering = init_order(graph, ranks, nodes, seed_unreached=seed_unreached)
    best_layering = copy_layering(layering)
    best_cc = cross_count(graph, layering)
    logger.debug("initial layering: %d layers, %d crossings", len(layering), best_cc)

    improved_at: list[int] = []
    for i in range(max_iterations):
        improve_ordering(graph, i, layering)
        cc = cross_count(graph, layering)
        logger.debug("iteration %d: %d crossings", i, cc)
        if cc < best_cc:
            best_layering = copy_layering(layering)
            best_cc = cc
            improved_at.append(i)

    logger.info("ordered %d layers with %d crossings after %d iterations", len(best_layering), best_cc, max_iterations)
    return OrderResult(layering=best_layering, crossings=best_cc, iterations=max_iterations, improved_at=improved_at)
