"""Output file merge writer

The output file is a single JSON array of item objects. Writing merges by
``id``: items whose id already exists (in the file or earlier in the same
batch) are skipped, and the whole array is rewritten.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from item_factory.core.logging import get_logger

from .jsonio import read_json, write_json

logger = get_logger(__name__)


@dataclass
class WriteResult:
    success: bool
    added_count: int = 0
    skipped_duplicates: int = 0
    skipped_missing_id: int = 0
    total_count: int = 0
    added_ids: tuple[str, ...] = ()


def _item_id(item: Any) -> str | None:
    if isinstance(item, dict) and isinstance(item.get("id"), str):
        return item["id"]
    return None


def _read_array(path: Path) -> list[Any]:
    """Existing array, or [] for a missing/unreadable/non-array file."""
    if not path.is_file():
        return []
    try:
        data = read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read existing file %s: %s", path, e)
        return []
    if not isinstance(data, list):
        logger.warning("Existing file %s is not a JSON array, starting fresh", path)
        return []
    return data


def get_existing_ids(path: str | Path) -> set[str]:
    """ids of every object element with a string id. Never raises."""
    ids: set[str] = set()
    for item in _read_array(Path(path)):
        item_id = _item_id(item)
        if item_id is not None:
            ids.add(item_id)
    return ids


def write_items(
    items: Iterable[dict[str, Any]],
    path: str | Path,
    merge_with_existing: bool = True,
) -> WriteResult:
    """Append new items to the array at ``path``, skipping known ids.

    Fails only when ``items`` is empty or the file cannot be written.
    """
    items = list(items)
    if not items:
        logger.warning("No items to write")
        return WriteResult(success=False)

    path = Path(path)
    output = _read_array(path) if merge_with_existing else []
    known = {i for i in (_item_id(x) for x in output) if i is not None}

    added: list[str] = []
    duplicates = 0
    missing = 0
    for index, item in enumerate(items):
        item_id = _item_id(item)
        if item_id is None:
            logger.warning("Item at index %d missing 'id' field, skipping", index)
            missing += 1
            continue
        if item_id in known:
            logger.debug("Skipping duplicate id: %s", item_id)
            duplicates += 1
            continue
        output.append(item)
        known.add(item_id)
        added.append(item_id)

    try:
        write_json(path, output)
    except (OSError, ValueError) as e:
        logger.error("Failed to write file %s: %s", path, e)
        return WriteResult(
            success=False,
            skipped_duplicates=duplicates,
            skipped_missing_id=missing,
        )

    logger.info(
        "Wrote %d new items to %s (total: %d items, %d duplicates skipped)",
        len(added),
        path,
        len(output),
        duplicates,
    )
    return WriteResult(
        success=True,
        added_count=len(added),
        skipped_duplicates=duplicates,
        skipped_missing_id=missing,
        total_count=len(output),
        added_ids=tuple(added),
    )
