"""
Cluster Composer
================

Condenses item-nodes into one aggregate node per tag value of a
grouping dimension.

CLAIM ORDER:
============
Values are visited in enumeration order. Each value claims every item-
node that is still unclaimed and whose tags contain the value (in any
slot). A node claimed by an earlier value is never reconsidered, so a
node matching several values lands in exactly one cluster and rebuilds
are reproducible.

Edges touching a claimed node are re-routed to its cluster-node.
Re-routed duplicates collapse and edges inside one cluster vanish.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple
import logging

import networkx as nx

from ..contracts.base import DEFAULT_SPHERE_VALUES, GroupDimension
from ..contracts.graph import GraphNode, GraphSnapshot, cluster_node_id
from .topology import to_snapshot

if TYPE_CHECKING:
    from ..store import ItemStore

logger = logging.getLogger(__name__)


class ClusterComposer:
    """Applies a grouping dimension to a built similarity graph."""

    def __init__(self, sphere_values: Sequence[str] = DEFAULT_SPHERE_VALUES):
        self._sphere_values = tuple(sphere_values)

    @property
    def sphere_values(self) -> Tuple[str, ...]:
        return self._sphere_values

    def enumerate_values(self, dimension: GroupDimension, store: ItemStore) -> Tuple[str, ...]:
        """
        Candidate cluster values for a dimension.

        Sphere is a fixed enumeration. The other dimensions take the
        distinct values of their slot across the whole, unfiltered store.
        """
        if dimension is GroupDimension.SPHERE:
            return self._sphere_values
        return store.distinct_values(dimension)

    def compose(
        self,
        graph: nx.Graph,
        dimension: GroupDimension,
        values: Sequence[str]
    ) -> nx.Graph:
        """
        Return a new graph with matched item-nodes merged into clusters.

        The input graph is not modified. Surviving item-nodes keep their
        original order and come first; cluster-nodes follow in claim order.
        """
        owner: Dict[str, str] = {}
        claims: List[Tuple[str, List[str]]] = []

        for value in values:
            if not value:
                continue
            members = [
                node_id for node_id, data in graph.nodes(data=True)
                if node_id not in owner and value in data["tags"]
            ]
            if not members:
                continue
            cluster_id = cluster_node_id(dimension, value)
            for node_id in members:
                owner[node_id] = cluster_id
            claims.append((value, members))

        composed = nx.Graph()
        for node_id, data in graph.nodes(data=True):
            if node_id not in owner:
                composed.add_node(node_id, **data)
        for value, members in claims:
            node = GraphNode.for_cluster(dimension, value, tuple(members))
            composed.add_node(node.node_id, node=node, tags=frozenset())

        for u, v in graph.edges():
            cu = owner.get(u, u)
            cv = owner.get(v, v)
            if cu != cv:
                composed.add_edge(cu, cv)

        logger.debug(
            "Composed %d clusters for %s absorbing %d of %d nodes",
            len(claims), dimension.value, len(owner), graph.number_of_nodes()
        )
        return composed

    def compose_snapshot(
        self,
        graph: nx.Graph,
        group_type: Optional[GroupDimension],
        filter_tag: str,
        store: ItemStore
    ) -> GraphSnapshot:
        """
        Apply clustering when it is active, else freeze the raw graph.

        Clustering is active only with a grouping dimension AND no filter.
        """
        if group_type is None or filter_tag:
            return to_snapshot(graph, group_type=group_type, filter_tag=filter_tag)

        values = self.enumerate_values(group_type, store)
        composed = self.compose(graph, group_type, values)
        return to_snapshot(composed, group_type=group_type, filter_tag=filter_tag)
