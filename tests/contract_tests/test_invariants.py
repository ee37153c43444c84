"""
Property Tests for Graph Contracts
Verifies linking, filtering and clustering invariants over generated
item collections.
"""

from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from tagnet.contracts.base import DEFAULT_SPHERE_VALUES, GroupDimension
from tagnet.contracts.graph import NodeKind
from tagnet.contracts.items import Item, TagSlots
from tagnet.core import ClusterComposer, SimilarityGraphBuilder
from tagnet.store import ItemStore

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

# Small pools so that collections overlap often. "Culture" appears in two
# slots on purpose: linking and clustering look at every slot.
SLOT_POOLS = (
    DEFAULT_SPHERE_VALUES + ("",),
    ("Tolstoy", "Chaliapin", ""),
    ("1913", "1914", ""),
    ("Culture", "Theatre", "Shortages", ""),
)


@composite
def tag_slots(draw):
    """Generates TagSlots with values drawn from the shared pools."""
    return TagSlots(*(draw(st.sampled_from(pool)) for pool in SLOT_POOLS))


@composite
def item_collections(draw, max_size=8):
    """Generates a collection of items with unique ids."""
    tags = draw(st.lists(tag_slots(), max_size=max_size))
    return tuple(
        Item(id=f"i{index}", title=f"Item {index}", img="", description="", tags=slots)
        for index, slots in enumerate(tags)
    )


dimensions = st.sampled_from(list(GroupDimension))
tags = st.sampled_from([v for pool in SLOT_POOLS for v in pool if v])


def _shares_tag(a: Item, b: Item) -> bool:
    return bool(set(a.tags.values()) & set(b.tags.values()))


def _snapshot(items, group_type=None, filter_tag=""):
    store = ItemStore(items)
    graph = SimilarityGraphBuilder().build_graph(store.filter_by_tag(filter_tag))
    return ClusterComposer().compose_snapshot(graph, group_type, filter_tag, store)


# =============================================================================
# LINKING
# =============================================================================

@settings(max_examples=100)
@given(item_collections())
def test_edge_iff_shared_tag(items):
    """Two items are linked exactly when they share a non-empty tag."""
    snapshot = _snapshot(items)
    edges = snapshot.edge_set()

    for i, a in enumerate(items):
        for b in items[i + 1:]:
            assert (frozenset((a.id, b.id)) in edges) == _shares_tag(a, b)


@given(item_collections())
def test_no_self_or_duplicate_edges(items):
    snapshot = _snapshot(items)

    assert all(e.source != e.target for e in snapshot.edges)
    assert len(snapshot.edge_set()) == len(snapshot.edges)


@given(item_collections())
def test_every_item_is_a_node(items):
    assert _snapshot(items).node_ids() == tuple(item.id for item in items)


# =============================================================================
# FILTERING
# =============================================================================

@given(item_collections(), tags)
def test_filter_gives_induced_subgraph(items, tag):
    """Filtered nodes are the matching items; edges are the induced subgraph."""
    full = _snapshot(items)
    filtered = _snapshot(items, filter_tag=tag)

    expected_nodes = {item.id for item in items if item.tags.contains(tag)}
    assert set(filtered.node_ids()) == expected_nodes
    assert filtered.edge_set() == {
        e for e in full.edge_set() if e <= expected_nodes
    }


@given(item_collections(), dimensions, tags)
def test_filter_suppresses_clustering(items, dimension, tag):
    snapshot = _snapshot(items, group_type=dimension, filter_tag=tag)
    assert snapshot.clusters() == ()


# =============================================================================
# CLUSTERING
# =============================================================================

@settings(max_examples=100)
@given(item_collections(), dimensions)
def test_cluster_ownership(items, dimension):
    """
    Each item belongs to at most one cluster: the first enumerated value it
    carries in any slot. Items carrying none stay as item-nodes.
    """
    store = ItemStore(items)
    values = ClusterComposer().enumerate_values(dimension, store)
    snapshot = _snapshot(items, group_type=dimension)

    owners = {}
    for cluster in snapshot.clusters():
        assert cluster.dimension is dimension
        assert cluster.member_ids
        for member in cluster.member_ids:
            assert member not in owners
            owners[member] = cluster.value

    for item in items:
        expected = next((v for v in values if item.tags.contains(v)), None)
        if expected is None:
            node = snapshot.get_node(item.id)
            assert node is not None and node.kind is NodeKind.ITEM
        else:
            assert owners[item.id] == expected
            assert snapshot.get_node(item.id) is None


@settings(max_examples=100)
@given(item_collections(), dimensions)
def test_cluster_edges_are_rerouted(items, dimension):
    """Clustered edges equal the base edges mapped through ownership."""
    base = _snapshot(items)
    snapshot = _snapshot(items, group_type=dimension)

    owner = {item.id: item.id for item in items}
    for cluster in snapshot.clusters():
        for member in cluster.member_ids:
            owner[member] = cluster.node_id

    expected = set()
    for edge in base.edges:
        a, b = owner[edge.source], owner[edge.target]
        if a != b:
            expected.add(frozenset((a, b)))

    assert snapshot.edge_set() == expected
    assert all(e.source != e.target for e in snapshot.edges)
