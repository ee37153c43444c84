"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- Record types are frozen dataclasses
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# =============================================================================
# ERRORS
# =============================================================================

class TagnetError(Exception):
    """Base class for every error raised by this package."""


class DataIntegrityError(TagnetError):
    """
    The item collection violates an identity invariant.

    Raised at load time for a record with a missing id or an id that
    is already taken. Silent collisions would corrupt node identity.
    """

    def __init__(self, message: str, index: Optional[int] = None, item_id: Optional[str] = None):
        super().__init__(message)
        self.index = index
        self.item_id = item_id


class ItemStoreLoadError(TagnetError):
    """The item document could not be read or parsed."""


@dataclass(frozen=True)
class RejectedRecord:
    """
    A record skipped by a lenient load.
    Kept as data so the caller can inspect what was dropped.
    """
    index: int
    item_id: Optional[str]
    reason: str


# =============================================================================
# GROUPING DIMENSIONS
# =============================================================================

class GroupDimension(Enum):
    """
    The four grouping dimensions.

    Each dimension is bound to a fixed tag slot: the dimension of a tag
    is determined by its position, never by its value.
    """
    SPHERE = "Sphere"
    PERSON = "Person"
    PERIOD = "Period"
    THEME = "Theme"

    @property
    def slot(self) -> int:
        return _SLOT_INDEX[self]

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional[GroupDimension]:
        """
        Parse a dimension name.

        None and "" mean "no grouping". Matching is case-insensitive on
        the dimension value ("Sphere") and the member name ("SPHERE").
        """
        if raw is None or raw == "":
            return None
        if isinstance(raw, GroupDimension):
            return raw
        for dimension in cls:
            if raw.lower() in (dimension.value.lower(), dimension.name.lower()):
                return dimension
        raise ValueError(f"Unknown grouping dimension: {raw!r}")


_SLOT_INDEX = {
    GroupDimension.SPHERE: 0,
    GroupDimension.PERSON: 1,
    GroupDimension.PERIOD: 2,
    GroupDimension.THEME: 3,
}

TAG_SLOT_COUNT = len(_SLOT_INDEX)

# Sphere values are a fixed enumeration, not derived from the data.
DEFAULT_SPHERE_VALUES: Tuple[str, ...] = ("War", "Everyday-life", "Culture")
