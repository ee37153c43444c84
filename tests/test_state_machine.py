"""
Interaction State Machine Tests
===============================

Every transition of the resolver, including the no-op paths.
"""

import pytest

from tagnet.contracts.base import GroupDimension
from tagnet.contracts.graph import decode_cluster_id
from tagnet.interaction import (
    INITIAL_STATE, Action, ActionType, InteractionResolver, InteractionState,
)

from .fixtures import scenario_store


@pytest.fixture
def resolver():
    return InteractionResolver(scenario_store())


class TestInteractionState:

    def test_initial_state(self):
        assert INITIAL_STATE.group_type is None
        assert INITIAL_STATE.filter_tag == ""
        assert INITIAL_STATE.selected_item_id is None
        assert INITIAL_STATE.grouping_control_visible

    def test_grouping_and_filter_never_stored_together(self):
        with pytest.raises(ValueError):
            InteractionState(group_type=GroupDimension.SPHERE, filter_tag="War")

    def test_clustering_active(self):
        assert InteractionState(group_type=GroupDimension.THEME).clustering_active
        assert not InteractionState(filter_tag="War").clustering_active
        assert not InteractionState().clustering_active

    def test_grouping_control_hidden_while_filtered(self):
        assert not InteractionState(filter_tag="War").grouping_control_visible


class TestClusterIdDecoding:

    def test_decodes_dimension_and_value(self):
        assert decode_cluster_id("cluster_Sphere_War") == (GroupDimension.SPHERE, "War")

    def test_value_may_contain_underscores(self):
        assert decode_cluster_id("cluster_Theme_home_front") == (GroupDimension.THEME, "home_front")

    @pytest.mark.parametrize("node_id", [
        "cluster_",
        "cluster_Sphere",
        "cluster_Sphere_",
        "cluster_Colour_Red",
        "Sphere_War",
        "",
    ])
    def test_malformed_ids(self, node_id):
        assert decode_cluster_id(node_id) is None


class TestChooseGrouping:

    def test_sets_grouping(self, resolver):
        t = resolver.resolve(INITIAL_STATE, Action.choose_grouping("Sphere"))
        assert t.state == InteractionState(group_type=GroupDimension.SPHERE)
        assert t.graph_changed

    def test_clears_active_filter(self, resolver):
        state = InteractionState(filter_tag="War")
        t = resolver.resolve(state, Action.choose_grouping(GroupDimension.PERIOD))
        assert t.state.group_type is GroupDimension.PERIOD
        assert t.state.filter_tag == ""

    def test_no_grouping(self, resolver):
        state = InteractionState(group_type=GroupDimension.THEME)
        t = resolver.resolve(state, Action.choose_grouping(None))
        assert t.state == INITIAL_STATE

    def test_empty_string_means_no_grouping(self):
        assert Action.choose_grouping("").group_type is None

    def test_unknown_dimension_rejected(self):
        with pytest.raises(ValueError):
            Action.choose_grouping("Colour")

    def test_parse_accepts_member_names(self):
        assert GroupDimension.parse("person") is GroupDimension.PERSON
        assert GroupDimension.parse("PERIOD") is GroupDimension.PERIOD


class TestSelectNode:

    def test_cluster_click_filters_by_value(self, resolver):
        state = InteractionState(group_type=GroupDimension.SPHERE)
        t = resolver.resolve(state, Action.select_node("cluster_Sphere_War"))
        assert t.state == InteractionState(group_type=None, filter_tag="War")
        assert t.detail_item is None
        assert t.graph_changed

    def test_item_click_shows_detail(self, resolver):
        state = InteractionState(group_type=GroupDimension.SPHERE)
        t = resolver.resolve(state, Action.select_node("A"))
        assert t.detail_item.id == "A"
        assert t.state.selected_item_id == "A"
        assert t.state.group_type is GroupDimension.SPHERE
        assert not t.graph_changed

    def test_undecodable_cluster_is_noop(self, resolver):
        state = InteractionState(group_type=GroupDimension.SPHERE)
        t = resolver.resolve(state, Action.select_node("cluster_Bogus_War"))
        assert t.state == state
        assert t.is_noop

    def test_unknown_item_is_noop(self, resolver):
        t = resolver.resolve(INITIAL_STATE, Action.select_node("Z"))
        assert t.is_noop

    def test_empty_node_id_is_noop(self, resolver):
        t = resolver.resolve(INITIAL_STATE, Action.select_node(""))
        assert t.is_noop


class TestDetailActions:

    def test_click_tag_filters_and_closes_detail(self, resolver):
        state = InteractionState(group_type=GroupDimension.PERSON, selected_item_id="A")
        t = resolver.resolve(state, Action.click_tag("War"))
        assert t.state == InteractionState(group_type=None, filter_tag="War", selected_item_id=None)

    def test_click_empty_tag_is_noop(self, resolver):
        state = InteractionState(selected_item_id="A")
        t = resolver.resolve(state, Action.click_tag(""))
        assert t.state == state

    def test_close_detail(self, resolver):
        state = InteractionState(filter_tag="War", selected_item_id="A")
        t = resolver.resolve(state, Action.close_detail())
        assert t.state == InteractionState(filter_tag="War")
        assert not t.graph_changed


class TestClearFilter:

    def test_clear_filter(self, resolver):
        t = resolver.resolve(InteractionState(filter_tag="War"), Action.clear_filter())
        assert t.state == INITIAL_STATE
        assert t.graph_changed

    def test_clear_filter_keeps_selection(self, resolver):
        t = resolver.resolve(
            InteractionState(filter_tag="War", selected_item_id="B"), Action.clear_filter()
        )
        assert t.state.selected_item_id == "B"


class TestPurity:

    def test_same_input_same_output(self, resolver):
        state = InteractionState(group_type=GroupDimension.SPHERE)
        action = Action.select_node("cluster_Sphere_Culture")
        assert resolver.resolve(state, action) == resolver.resolve(state, action)

    def test_every_action_type_handled(self, resolver):
        actions = {
            ActionType.CHOOSE_GROUPING: Action.choose_grouping("Theme"),
            ActionType.SELECT_NODE: Action.select_node("A"),
            ActionType.CLICK_TAG: Action.click_tag("War"),
            ActionType.CLEAR_FILTER: Action.clear_filter(),
            ActionType.CLOSE_DETAIL: Action.close_detail(),
        }
        assert set(actions) == set(ActionType)
        for action in actions.values():
            resolver.resolve(INITIAL_STATE, action)
