"""
Graph Contracts
===============

Immutable node, edge and snapshot types produced by the core engine.

A snapshot is a COMPUTED projection of the item collection for one
interaction state. It is rebuilt, never patched, and carries a state
hash so two rebuilds can be compared for determinism.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, Optional, Tuple
import hashlib

from .base import GroupDimension
from .items import Item

CLUSTER_PREFIX = "cluster_"


class NodeKind(Enum):
    ITEM = "item"
    CLUSTER = "cluster"


def cluster_node_id(dimension: GroupDimension, value: str) -> str:
    """Derive the id of the cluster-node holding `value` of `dimension`."""
    return f"{CLUSTER_PREFIX}{dimension.value}_{value}"


def decode_cluster_id(node_id: str) -> Optional[Tuple[GroupDimension, str]]:
    """
    Recover (dimension, value) from a cluster-node id.

    The value is everything after the second underscore, so values may
    themselves contain underscores. Returns None for anything that is
    not a well-formed cluster id.
    """
    if not isinstance(node_id, str) or not node_id.startswith(CLUSTER_PREFIX):
        return None
    parts = node_id.split("_")
    if len(parts) < 3:
        return None
    try:
        dimension = GroupDimension(parts[1])
    except ValueError:
        return None
    value = "_".join(parts[2:])
    if not value:
        return None
    return dimension, value


@dataclass(frozen=True)
class GraphNode:
    """Either an item-node (backed by an item) or a cluster-node."""
    node_id: str
    kind: NodeKind
    label: str
    item: Optional[Item] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    dimension: Optional[GroupDimension] = None
    value: Optional[str] = None
    member_ids: Tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def for_item(item: Item) -> GraphNode:
        return GraphNode(
            node_id=item.id,
            kind=NodeKind.ITEM,
            label=item.title,
            item=item,
            tags=item.tags.values(),
        )

    @staticmethod
    def for_cluster(dimension: GroupDimension, value: str, member_ids: Tuple[str, ...]) -> GraphNode:
        return GraphNode(
            node_id=cluster_node_id(dimension, value),
            kind=NodeKind.CLUSTER,
            label=value,
            dimension=dimension,
            value=value,
            member_ids=member_ids,
        )

    @property
    def is_cluster(self) -> bool:
        return self.kind is NodeKind.CLUSTER


@dataclass(frozen=True)
class GraphEdge:
    """Undirected edge. `source`/`target` order carries no meaning."""
    source: str
    target: str

    def __post_init__(self):
        if self.source == self.target:
            raise ValueError(f"Self-edge on {self.source!r} is not allowed")

    def key(self) -> FrozenSet[str]:
        return frozenset((self.source, self.target))


@dataclass(frozen=True)
class GraphSnapshot:
    """
    Complete node/edge set for one (group_type, filter_tag) pair.

    This is the OUTPUT of the engine, handed to the rendering side.
    """
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]
    group_type: Optional[GroupDimension] = None
    filter_tag: str = ""
    state_hash: str = ""

    def node_ids(self) -> Tuple[str, ...]:
        return tuple(n.node_id for n in self.nodes)

    def edge_set(self) -> FrozenSet[FrozenSet[str]]:
        return frozenset(e.key() for e in self.edges)

    def clusters(self) -> Tuple[GraphNode, ...]:
        return tuple(n for n in self.nodes if n.is_cluster)

    def item_nodes(self) -> Tuple[GraphNode, ...]:
        return tuple(n for n in self.nodes if not n.is_cluster)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)

    def with_hash(self) -> GraphSnapshot:
        """Return a copy carrying its deterministic state hash."""
        return GraphSnapshot(
            nodes=self.nodes,
            edges=self.edges,
            group_type=self.group_type,
            filter_tag=self.filter_tag,
            state_hash=self.compute_hash(),
        )

    def compute_hash(self) -> str:
        """Hash over node ids, edge keys and cluster memberships."""
        content = (
            f"{self.group_type.value if self.group_type else ''}|"
            f"{self.filter_tag}|"
            f"{','.join(self.node_ids())}|"
            f"{';'.join(sorted('~'.join(sorted(k)) for k in self.edge_set()))}|"
        )
        for cluster in self.clusters():
            content += f"{cluster.node_id}:{','.join(cluster.member_ids)}|"
        return hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]
