"""
Test Fixtures

Explicit item collections for deterministic testing.
All fixtures are explicit - no random generation here.
"""

from __future__ import annotations
from typing import Sequence

from tagnet.contracts.items import Item, TagSlots
from tagnet.store import ItemStore


def make_item(item_id: str, tags: Sequence[str] = ("", "", "", ""), title: str = "") -> Item:
    """Helper to create an item with positional tags."""
    return Item(
        id=item_id,
        title=title or f"Item {item_id}",
        img=f"/images/{item_id}.jpg",
        description=f"Description of {item_id}",
        tags=TagSlots.from_sequence(tags),
    )


def make_record(item_id, tags=("", "", "", "")) -> dict:
    """Raw record as found in the JSON document."""
    return {
        "id": item_id,
        "title": f"Item {item_id}",
        "img": f"/images/{item_id}.jpg",
        "description": f"Description of {item_id}",
        "tags": list(tags),
    }


# =============================================================================
# SCENARIO COLLECTIONS
# =============================================================================

def scenario_items():
    """A{War}, B{War}, C{Culture}: two linked items and one loner."""
    return (
        make_item("A", ["War", "", "", ""]),
        make_item("B", ["War", "", "", ""]),
        make_item("C", ["Culture", "", "", ""]),
    )


def scenario_store() -> ItemStore:
    return ItemStore(scenario_items())


def overlap_items():
    """
    Items matching several sphere values at once.

    D carries both War (sphere) and Culture (theme), so under Sphere
    grouping it must land in the War cluster, which is enumerated first.
    """
    return (
        make_item("D", ["War", "Tolstoy", "1914", "Culture"]),
        make_item("E", ["Culture", "Tolstoy", "1913", "Theatre"]),
        make_item("F", ["Everyday-life", "", "1914", "Shortages"]),
        make_item("G", ["", "Chaliapin", "", ""]),
        make_item("H", ["", "", "", ""]),
    )


def overlap_store() -> ItemStore:
    return ItemStore(overlap_items())
