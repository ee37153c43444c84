"""
Interaction State Machine
=========================

Pure transition function over the interaction state.

INVARIANT: resolve(state, action) is a PURE FUNCTION
Same state + same action → identical next state.

This module DOES NOT build graphs. The (group_type, filter_tag) pair
it produces is the sole input that drives graph re-derivation.

TRANSITIONS:
============
- CHOOSE_GROUPING(d)   → (d, "")            filter always cleared
- SELECT_NODE(cluster) → (None, value)      grouping cleared
- SELECT_NODE(item)    → unchanged graph    "show detail" side effect
- CLICK_TAG(tag)       → (None, tag)        detail closed
- CLEAR_FILTER         → (None, "")
- CLOSE_DETAIL         → unchanged graph    detail closed

Undecodable cluster ids and unknown item ids are no-ops, never errors.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union
import logging

from ..contracts.base import GroupDimension
from ..contracts.items import Item
from ..contracts.graph import CLUSTER_PREFIX, decode_cluster_id

if TYPE_CHECKING:
    from ..store import ItemStore

logger = logging.getLogger(__name__)


# =============================================================================
# STATE
# =============================================================================

@dataclass(frozen=True)
class InteractionState:
    """
    Current grouping, filter and open detail view.

    A grouping and a filter are never stored together: clustering only
    applies to the unfiltered collection.
    """
    group_type: Optional[GroupDimension] = None
    filter_tag: str = ""
    selected_item_id: Optional[str] = None

    def __post_init__(self):
        if self.group_type is not None and self.filter_tag:
            raise ValueError(
                "InteractionState cannot hold both a grouping and a filter "
                f"({self.group_type.value!r}, {self.filter_tag!r})"
            )

    @property
    def graph_key(self):
        """The part of the state a graph snapshot depends on."""
        return (self.filter_tag, self.group_type)

    @property
    def clustering_active(self) -> bool:
        return self.group_type is not None and not self.filter_tag

    @property
    def grouping_control_visible(self) -> bool:
        return not self.filter_tag


INITIAL_STATE = InteractionState()


# =============================================================================
# ACTIONS
# =============================================================================

class ActionType(Enum):
    """Types of user interaction the core consumes."""
    CHOOSE_GROUPING = "choose_grouping"
    SELECT_NODE = "select_node"
    CLICK_TAG = "click_tag"
    CLEAR_FILTER = "clear_filter"
    CLOSE_DETAIL = "close_detail"


@dataclass(frozen=True)
class Action:
    """A single user intent. Only the field matching `action` is read."""
    action: ActionType
    group_type: Optional[GroupDimension] = None
    node_id: str = ""
    tag: str = ""

    @staticmethod
    def choose_grouping(group_type: Union[GroupDimension, str, None]) -> Action:
        return Action(ActionType.CHOOSE_GROUPING, group_type=GroupDimension.parse(group_type))

    @staticmethod
    def select_node(node_id: str) -> Action:
        return Action(ActionType.SELECT_NODE, node_id=node_id)

    @staticmethod
    def click_tag(tag: str) -> Action:
        return Action(ActionType.CLICK_TAG, tag=tag)

    @staticmethod
    def clear_filter() -> Action:
        return Action(ActionType.CLEAR_FILTER)

    @staticmethod
    def close_detail() -> Action:
        return Action(ActionType.CLOSE_DETAIL)


@dataclass(frozen=True)
class Transition:
    """Result of resolving one action."""
    previous: InteractionState
    state: InteractionState
    detail_item: Optional[Item] = None

    @property
    def graph_changed(self) -> bool:
        return self.previous.graph_key != self.state.graph_key

    @property
    def is_noop(self) -> bool:
        return self.previous == self.state and self.detail_item is None


# =============================================================================
# RESOLVER
# =============================================================================

class InteractionResolver:
    """
    Maps (state, action) to the next state.

    Holds a read-only reference to the item store, used to resolve item
    clicks into the item shown in the detail view.
    """

    def __init__(self, store: ItemStore):
        self._store = store

    def resolve(self, state: InteractionState, action: Action) -> Transition:
        handler = {
            ActionType.CHOOSE_GROUPING: self._choose_grouping,
            ActionType.SELECT_NODE: self._select_node,
            ActionType.CLICK_TAG: self._click_tag,
            ActionType.CLEAR_FILTER: self._clear_filter,
            ActionType.CLOSE_DETAIL: self._close_detail,
        }[action.action]
        return handler(state, action)

    def _choose_grouping(self, state: InteractionState, action: Action) -> Transition:
        next_state = InteractionState(
            group_type=action.group_type,
            filter_tag="",
            selected_item_id=state.selected_item_id,
        )
        return Transition(previous=state, state=next_state)

    def _select_node(self, state: InteractionState, action: Action) -> Transition:
        node_id = action.node_id
        if not node_id:
            return Transition(previous=state, state=state)

        if node_id.startswith(CLUSTER_PREFIX):
            decoded = decode_cluster_id(node_id)
            if decoded is None:
                logger.warning("Ignoring click on undecodable cluster id %r", node_id)
                return Transition(previous=state, state=state)
            _, value = decoded
            next_state = InteractionState(
                group_type=None,
                filter_tag=value,
                selected_item_id=state.selected_item_id,
            )
            return Transition(previous=state, state=next_state)

        item = self._store.get(node_id)
        if item is None:
            logger.warning("Ignoring click on unknown node %r", node_id)
            return Transition(previous=state, state=state)

        next_state = replace(state, selected_item_id=item.id)
        return Transition(previous=state, state=next_state, detail_item=item)

    def _click_tag(self, state: InteractionState, action: Action) -> Transition:
        if not action.tag:
            return Transition(previous=state, state=state)
        next_state = InteractionState(group_type=None, filter_tag=action.tag)
        return Transition(previous=state, state=next_state)

    def _clear_filter(self, state: InteractionState, action: Action) -> Transition:
        next_state = InteractionState(
            group_type=None,
            filter_tag="",
            selected_item_id=state.selected_item_id,
        )
        return Transition(previous=state, state=next_state)

    def _close_detail(self, state: InteractionState, action: Action) -> Transition:
        return Transition(previous=state, state=replace(state, selected_item_id=None))
