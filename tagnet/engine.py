"""
Engine Orchestration Module

This module provides the unified interface that runs the rebuild
pipeline on every interaction.

PIPELINE:
=========
1. Interaction: (state, action) → next state
2. Store: items filtered by filter_tag
3. Core: similarity graph over the filtered items
4. Core: cluster composition (grouping set AND no filter)

Every transition runs the whole pipeline before returning. Snapshots
are memoized by (filter_tag, group_type); a cached snapshot is
identical to a fresh rebuild.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging

from .contracts.base import DEFAULT_SPHERE_VALUES, GroupDimension
from .contracts.graph import GraphSnapshot
from .contracts.items import Item
from .core import ClusterComposer, GraphMetrics, SimilarityGraphBuilder, snapshot_metrics
from .core.caching import CacheStats, SnapshotCache
from .interaction import INITIAL_STATE, Action, InteractionResolver, InteractionState
from .store import ItemStore

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Configuration for the explorer engine."""
    sphere_values: Tuple[str, ...] = DEFAULT_SPHERE_VALUES
    cache_size: int = 32


@dataclass(frozen=True)
class EngineResult:
    """What the surrounding application needs after one action."""
    state: InteractionState
    snapshot: GraphSnapshot
    detail_item: Optional[Item] = None
    graph_changed: bool = False


class ExplorerEngine:
    """
    Unified engine over one item store.

    Owns the current interaction state. All user actions go through
    dispatch(); the convenience methods below only build the Action.
    """

    def __init__(self, store: ItemStore, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._store = store

        self._builder = SimilarityGraphBuilder()
        self._composer = ClusterComposer(sphere_values=self._config.sphere_values)
        self._resolver = InteractionResolver(store)
        self._cache = SnapshotCache(max_entries=self._config.cache_size)

        self._state = INITIAL_STATE
        self._snapshot = self.rebuild(self._state.group_type, self._state.filter_tag)

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    @property
    def store(self) -> ItemStore:
        return self._store

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> InteractionState:
        return self._state

    def snapshot(self) -> GraphSnapshot:
        return self._snapshot

    def selected_item(self) -> Optional[Item]:
        if self._state.selected_item_id is None:
            return None
        return self._store.get(self._state.selected_item_id)

    def compute_metrics(self) -> GraphMetrics:
        """Structural metrics of the current snapshot."""
        return snapshot_metrics(self._snapshot)

    def cache_stats(self) -> CacheStats:
        return self._cache.get_stats()

    # =========================================================================
    # PIPELINE
    # =========================================================================

    def rebuild(
        self,
        group_type: Optional[GroupDimension],
        filter_tag: str = ""
    ) -> GraphSnapshot:
        """
        Derive the snapshot for a (group_type, filter_tag) pair.

        Does not touch the interaction state.
        """
        key = (filter_tag, group_type)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Snapshot cache hit for %r", key)
            return cached

        items = self._store.filter_by_tag(filter_tag)
        graph = self._builder.build_graph(items)
        snapshot = self._composer.compose_snapshot(
            graph,
            group_type=group_type,
            filter_tag=filter_tag,
            store=self._store,
        )

        self._cache.put(key, snapshot)
        logger.debug(
            "Rebuilt snapshot %s: %d nodes, %d edges, %d clusters",
            snapshot.state_hash, len(snapshot.nodes), len(snapshot.edges),
            len(snapshot.clusters())
        )
        return snapshot

    def dispatch(self, action: Action) -> EngineResult:
        """Resolve an action, rebuild, and publish the new state."""
        transition = self._resolver.resolve(self._state, action)
        self._state = transition.state
        self._snapshot = self.rebuild(self._state.group_type, self._state.filter_tag)

        return EngineResult(
            state=self._state,
            snapshot=self._snapshot,
            detail_item=transition.detail_item or self.selected_item(),
            graph_changed=transition.graph_changed,
        )

    # =========================================================================
    # CONVENIENCE ACTIONS
    # =========================================================================

    def choose_grouping(self, group_type: Union[GroupDimension, str, None]) -> EngineResult:
        return self.dispatch(Action.choose_grouping(group_type))

    def select_node(self, node_id: str) -> EngineResult:
        """Entry point for the rendering surface's onNodeSelected event."""
        return self.dispatch(Action.select_node(node_id))

    def click_tag(self, tag: str) -> EngineResult:
        return self.dispatch(Action.click_tag(tag))

    def clear_filter(self) -> EngineResult:
        return self.dispatch(Action.clear_filter())

    def close_detail(self) -> EngineResult:
        return self.dispatch(Action.close_detail())

    def reset(self) -> EngineResult:
        """Return to the initial state."""
        self._state = INITIAL_STATE
        self._snapshot = self.rebuild(None, "")
        return EngineResult(state=self._state, snapshot=self._snapshot)
