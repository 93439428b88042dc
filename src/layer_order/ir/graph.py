"""Ranked graph IR — a networkx graph paired with a rank map.

This module owns the graph handed to the ordering phase. It exposes the one
query the ordering needs (symmetric neighbor lookup) and validates that the
rank map is total and non-negative before any layer index is computed from it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import networkx as nx

from layer_order.types import MissingRankError, NegativeRankError, NodeId


class RankedGraph:
    """A networkx graph whose nodes have already been assigned ranks.

    Neighbors are symmetric: for a directed graph the neighbors of a node are
    its successors followed by its predecessors.
    """

    def __init__(self, graph: nx.Graph, ranks: Mapping[NodeId, int]) -> None:
        self.graph = graph
        self.ranks = dict(ranks)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[NodeId, NodeId]],
        ranks: Mapping[NodeId, int] | None = None,
        nodes: Iterable[NodeId] = (),
        directed: bool = True,
    ) -> RankedGraph:
        """Build a RankedGraph from an edge list, deriving ranks when omitted."""
        graph: nx.Graph = nx.DiGraph() if directed else nx.Graph()
        graph.add_nodes_from(nodes)
        graph.add_edges_from(edges)
        if ranks is None:
            ranks = longest_path_ranks(graph)
        return cls(graph, ranks)

    def nodes(self) -> list[NodeId]:
        return list(self.graph.nodes)

    def neighbors(self, node: NodeId) -> list[NodeId]:
        if node not in self.graph:
            return []
        if not self.graph.is_directed():
            return list(self.graph.neighbors(node))
        result = list(self.graph.successors(node))
        seen = set(result)
        for pred in self.graph.predecessors(node):
            if pred not in seen:
                seen.add(pred)
                result.append(pred)
        return result

    def rank(self, node: NodeId) -> int:
        try:
            return self.ranks[node]
        except KeyError:
            raise MissingRankError(node) from None

    def validate(self) -> None:
        """Check that every node has a non-negative integer rank."""
        for node in self.graph.nodes:
            rank = self.rank(node)
            if isinstance(rank, bool) or not isinstance(rank, int) or rank < 0:
                raise NegativeRankError(node, rank)

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        return self.graph.number_of_edges()


def longest_path_ranks(graph: nx.Graph) -> dict[NodeId, int]:
    """Rank every node by the longest path reaching it from a source.

    Undirected graphs are ranked by breadth-first distance from the first node
    of each connected component. Raises ValueError for a directed graph with
    cycles.
    """
    if not graph.is_directed():
        ranks: dict[NodeId, int] = {}
        for node in graph.nodes:
            if node not in ranks:
                ranks.update(nx.single_source_shortest_path_length(graph, node))
        return ranks

    if not nx.is_directed_acyclic_graph(graph):
        raise ValueError("cannot derive ranks for a graph with cycles; supply explicit ranks")

    ranks = {node: 0 for node in graph.nodes}
    for node in nx.topological_sort(graph):
        for succ in graph.successors(node):
            if ranks[succ] < ranks[node] + 1:
                ranks[succ] = ranks[node] + 1
    return ranks
