"""
Item Store
==========

RESPONSIBILITY: Hold the immutable, ordered item collection
ALLOWED INPUTS: Raw records from the loader, or already-built Items
OUTPUTS: Items, filtered views, per-dimension value enumerations

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate the collection after construction
- Build graphs or know about clusters
- Guess at a record's identity

Integrity is checked once, at construction. In strict mode (the
default) a record with a missing or duplicate id rejects the whole
store with DataIntegrityError. In lenient mode the record is skipped
and kept as a RejectedRecord for inspection.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
import logging

from ..contracts.base import DataIntegrityError, GroupDimension, RejectedRecord
from ..contracts.items import Item
from .loader import load_item_store, read_records

logger = logging.getLogger(__name__)


class ItemStore:
    """Read-only ordered sequence of items, indexed by id."""

    def __init__(self, items: Iterable[Item], rejected: Tuple[RejectedRecord, ...] = ()):
        self._items: Tuple[Item, ...] = tuple(items)
        self._index: Dict[str, Item] = {}
        for position, item in enumerate(self._items):
            if item.id in self._index:
                raise DataIntegrityError(
                    f"Duplicate item id {item.id!r} at position {position}",
                    index=position,
                    item_id=item.id,
                )
            self._index[item.id] = item
        self._rejected = tuple(rejected)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        strict: bool = True
    ) -> ItemStore:
        """
        Build a store from raw mappings.

        Args:
            records: Mappings with id, title, img, description, tags.
            strict: Reject the whole collection on the first bad record
                when True; skip bad records when False.

        Raises:
            DataIntegrityError: In strict mode, on a malformed record or
                a duplicate id.
        """
        items: List[Item] = []
        rejected: List[RejectedRecord] = []
        seen = set()

        for index, record in enumerate(records):
            raw_id = record.get("id") if isinstance(record, Mapping) else None
            reason = None
            item = None

            if not isinstance(record, Mapping):
                reason = f"record is a {type(record).__name__}, expected an object"
            else:
                try:
                    item = Item.from_record(record)
                except ValueError as e:
                    reason = str(e)
                else:
                    if item.id in seen:
                        reason = f"duplicate id {item.id!r}"

            if reason is not None:
                item_id = str(raw_id) if raw_id is not None else None
                if strict:
                    raise DataIntegrityError(
                        f"Malformed item record at index {index}: {reason}",
                        index=index,
                        item_id=item_id,
                    )
                logger.warning("Skipping item record %d (%s): %s", index, item_id, reason)
                rejected.append(RejectedRecord(index=index, item_id=item_id, reason=reason))
                continue

            seen.add(item.id)
            items.append(item)

        return cls(items, rejected=tuple(rejected))

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._index

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._items

    @property
    def rejected(self) -> Tuple[RejectedRecord, ...]:
        """Records skipped by a lenient load (always empty when strict)."""
        return self._rejected

    def get(self, item_id: str) -> Optional[Item]:
        return self._index.get(item_id)

    def filter_by_tag(self, tag: str) -> Tuple[Item, ...]:
        """
        Items whose tags contain `tag` in any slot, in store order.
        An empty tag means no filter.
        """
        if not tag:
            return self._items
        return tuple(item for item in self._items if item.tags.contains(tag))

    def distinct_values(self, dimension: GroupDimension) -> Tuple[str, ...]:
        """Distinct non-empty values of the dimension's slot, first occurrence first."""
        values: List[str] = []
        for item in self._items:
            value = item.tags.slot(dimension)
            if value and value not in values:
                values.append(value)
        return tuple(values)

    def all_tags(self) -> Tuple[str, ...]:
        """Every distinct non-empty tag value, first occurrence first."""
        values: List[str] = []
        for item in self._items:
            for value in item.tags.values():
                if value not in values:
                    values.append(value)
        return tuple(values)


__all__ = ['ItemStore', 'load_item_store', 'read_records']
