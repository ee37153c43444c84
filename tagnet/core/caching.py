"""Snapshot memoization keyed by (filter_tag, group_type)."""

from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from ..contracts.base import GroupDimension
from ..contracts.graph import GraphSnapshot

SnapshotKey = Tuple[str, Optional[GroupDimension]]


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    hit_count: int
    miss_count: int
    eviction_count: int
    hit_rate: float


class SnapshotCache:
    """
    Least-recently-used cache of built snapshots.

    Safe because the item store never changes: a key always maps to the
    same snapshot. max_entries=0 disables caching.
    """

    def __init__(self, max_entries: int = 32):
        self._max_entries = max_entries
        self._cache: "OrderedDict[SnapshotKey, GraphSnapshot]" = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: SnapshotKey) -> Optional[GraphSnapshot]:
        snapshot = self._cache.get(key)
        if snapshot is None:
            self._misses += 1
            return None
        self._hits += 1
        self._cache.move_to_end(key)
        return snapshot

    def put(self, key: SnapshotKey, snapshot: GraphSnapshot):
        if self._max_entries <= 0:
            return
        self._cache[key] = snapshot
        self._cache.move_to_end(key)
        while len(self._cache) > self._max_entries:
            self._cache.popitem(last=False)
            self._evictions += 1

    def clear(self):
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> CacheStats:
        total = self._hits + self._misses
        return CacheStats(
            total_entries=len(self._cache),
            hit_count=self._hits,
            miss_count=self._misses,
            eviction_count=self._evictions,
            hit_rate=self._hits / total if total > 0 else 0.0,
        )
