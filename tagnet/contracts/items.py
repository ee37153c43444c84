"""
Item Contracts

The immutable record types for the item collection.

Tags are carried as named slots (sphere, person, period, theme) rather
than a bare positional list, but keep their positional order so the
slot index of each dimension stays meaningful.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from .base import GroupDimension, TAG_SLOT_COUNT


@dataclass(frozen=True)
class TagSlots:
    """Four fixed tag slots. An empty slot is the empty string."""
    sphere: str = ""
    person: str = ""
    period: str = ""
    theme: str = ""

    @staticmethod
    def from_sequence(raw: Sequence[Any]) -> TagSlots:
        """
        Build slots from a positional list of up to four values.

        Missing trailing slots and None are read as empty.
        """
        if isinstance(raw, str):
            raise ValueError("tags must be a list, not a string")
        try:
            values = list(raw)
        except TypeError:
            raise ValueError(f"tags must be a list, got {type(raw).__name__}") from None
        if len(values) > TAG_SLOT_COUNT:
            raise ValueError(
                f"tags has {len(values)} slots, at most {TAG_SLOT_COUNT} allowed"
            )
        values += [""] * (TAG_SLOT_COUNT - len(values))
        cleaned = []
        for value in values:
            if value is None:
                cleaned.append("")
            elif isinstance(value, str):
                cleaned.append(value)
            else:
                raise ValueError(f"tag slot value must be a string, got {type(value).__name__}")
        return TagSlots(*cleaned)

    def as_tuple(self) -> Tuple[str, str, str, str]:
        return (self.sphere, self.person, self.period, self.theme)

    def slot(self, dimension: GroupDimension) -> str:
        return self.as_tuple()[dimension.slot]

    def values(self) -> Tuple[str, ...]:
        """Non-empty values in slot order, without repeats."""
        seen = []
        for value in self.as_tuple():
            if value and value not in seen:
                seen.append(value)
        return tuple(seen)

    def contains(self, tag: str) -> bool:
        return bool(tag) and tag in self.as_tuple()

    @property
    def is_empty(self) -> bool:
        return not any(self.as_tuple())


@dataclass(frozen=True)
class Item:
    """A single illustrated, tagged record of the collection."""
    id: str
    title: str
    img: str
    description: str
    tags: TagSlots

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("Item id must be a non-empty string")
        # The cluster prefix is reserved for cluster-node ids
        if self.id.startswith("cluster_"):
            raise ValueError(f"Item id {self.id!r} uses the reserved 'cluster_' prefix")

    @staticmethod
    def from_record(record: Mapping[str, Any]) -> Item:
        """Build an item from a raw mapping as found in the JSON document."""
        raw_id = record.get("id")
        if raw_id is None:
            raise ValueError("record has no id")
        return Item(
            id=str(raw_id).strip(),
            title=str(record.get("title") or ""),
            img=str(record.get("img") or ""),
            description=str(record.get("description") or ""),
            tags=TagSlots.from_sequence(record.get("tags") or ()),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "img": self.img,
            "description": self.description,
            "tags": list(self.tags.as_tuple()),
        }
