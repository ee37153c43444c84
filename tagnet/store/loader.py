"""
Item document loader.

Reads the static item collection from a JSON file. Accepts either a
bare list of records or an object with an "items" list.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Mapping, Union
import json
import logging

from ..contracts.base import ItemStoreLoadError

if TYPE_CHECKING:
    from . import ItemStore

logger = logging.getLogger(__name__)


def read_records(path: Union[str, Path]) -> List[Mapping[str, Any]]:
    """Read raw item records from a JSON document."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ItemStoreLoadError(f"Cannot read item document {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ItemStoreLoadError(f"Item document {path} is not valid JSON: {e}") from e

    if isinstance(data, Mapping):
        data = data.get("items")
    if not isinstance(data, list):
        raise ItemStoreLoadError(
            f"Item document {path} must hold a list of records or an 'items' list"
        )
    return data


def load_item_store(path: Union[str, Path], strict: bool = True) -> "ItemStore":
    """
    Load an ItemStore from disk.

    Raises:
        ItemStoreLoadError: The file is missing, unreadable or not JSON.
        DataIntegrityError: Strict mode and a record is malformed.
    """
    from . import ItemStore

    records = read_records(path)
    store = ItemStore.from_records(records, strict=strict)
    logger.info(
        "Loaded %d items from %s (%d rejected)",
        len(store), path, len(store.rejected)
    )
    return store
