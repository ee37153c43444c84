"""
Similarity Graph Builder
========================

Structural graph of items linked by shared tags.

LINK RULE:
==========
Two items are connected iff their tag collections share at least one
non-empty value. The test is a set intersection across all slots, not
a per-slot comparison. There are no weights, attributes or directions:
topology is binary, connected or not.

Cost is O(N^2 * T) with T = 4 tag slots. Fine for collections of
tens to low hundreds of items.
"""

from __future__ import annotations
from typing import Optional, Sequence
from dataclasses import dataclass
import logging

import networkx as nx

from ..contracts.base import GroupDimension
from ..contracts.items import Item
from ..contracts.graph import GraphEdge, GraphNode, GraphSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphMetrics:
    """Immutable structural metrics for a built graph."""
    node_count: int
    edge_count: int
    density: float
    is_connected: bool
    connected_components_count: int
    isolated_count: int


class SimilarityGraphBuilder:
    """
    Builds the item similarity graph.

    Stateless: every call returns a fresh NetworkX graph. Node insertion
    order follows item order and edge insertion order follows pair order
    (i < j), so the output is deterministic for a given item sequence.
    """

    def build_graph(self, items: Sequence[Item]) -> nx.Graph:
        """
        Build the graph for `items`.

        Node attributes: `item` and `tags` (the item's non-empty tag
        values as a frozenset).
        """
        graph = nx.Graph()

        for item in items:
            graph.add_node(item.id, item=item, tags=frozenset(item.tags.values()))

        for i in range(len(items)):
            a = items[i]
            a_tags = graph.nodes[a.id]["tags"]
            if not a_tags:
                continue
            for j in range(i + 1, len(items)):
                b = items[j]
                if not a_tags.isdisjoint(graph.nodes[b.id]["tags"]):
                    graph.add_edge(a.id, b.id)

        logger.debug(
            "Built similarity graph: %d nodes, %d edges",
            graph.number_of_nodes(), graph.number_of_edges()
        )
        return graph


def compute_metrics(graph: nx.Graph) -> GraphMetrics:
    if not graph:
        return GraphMetrics(0, 0, 0.0, False, 0, 0)

    return GraphMetrics(
        node_count=graph.number_of_nodes(),
        edge_count=graph.number_of_edges(),
        density=nx.density(graph),
        is_connected=nx.is_connected(graph),
        connected_components_count=nx.number_connected_components(graph),
        isolated_count=nx.number_of_isolates(graph),
    )


def snapshot_metrics(snapshot: GraphSnapshot) -> GraphMetrics:
    """Structural metrics of a snapshot, clusters counted as single nodes."""
    graph = nx.Graph()
    graph.add_nodes_from(snapshot.node_ids())
    graph.add_edges_from((e.source, e.target) for e in snapshot.edges)
    return compute_metrics(graph)


def to_snapshot(
    graph: nx.Graph,
    group_type: Optional[GroupDimension] = None,
    filter_tag: str = ""
) -> GraphSnapshot:
    """
    Freeze a NetworkX graph into a GraphSnapshot.

    Item-nodes carry an `item` attribute; cluster-nodes carry a `node`
    attribute holding their prebuilt GraphNode.
    """
    nodes = []
    for node_id, data in graph.nodes(data=True):
        if "node" in data:
            nodes.append(data["node"])
        else:
            nodes.append(GraphNode.for_item(data["item"]))

    edges = tuple(GraphEdge(source=u, target=v) for u, v in graph.edges())

    return GraphSnapshot(
        nodes=tuple(nodes),
        edges=edges,
        group_type=group_type,
        filter_tag=filter_tag,
    ).with_hash()
