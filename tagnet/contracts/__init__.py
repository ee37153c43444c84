"""
Contracts Module

This module defines the data types passed between layers. No layer
may import implementation details from another layer; they exchange
these types only.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses)
2. Identity is derived (item id, cluster id), never assigned at random
3. Errors are explicit exception types or recorded data, never silent
"""

from .base import (
    TagnetError, DataIntegrityError, ItemStoreLoadError, RejectedRecord,
    GroupDimension, TAG_SLOT_COUNT, DEFAULT_SPHERE_VALUES,
)
from .items import Item, TagSlots
from .graph import (
    NodeKind, GraphNode, GraphEdge, GraphSnapshot,
    CLUSTER_PREFIX, cluster_node_id, decode_cluster_id,
)

__all__ = [
    'TagnetError', 'DataIntegrityError', 'ItemStoreLoadError', 'RejectedRecord',
    'GroupDimension', 'TAG_SLOT_COUNT', 'DEFAULT_SPHERE_VALUES',
    'Item', 'TagSlots',
    'NodeKind', 'GraphNode', 'GraphEdge', 'GraphSnapshot',
    'CLUSTER_PREFIX', 'cluster_node_id', 'decode_cluster_id',
]
