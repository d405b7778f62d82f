"""Per-type id ledger, independent of any output file

Stored as ``{registry_dir}/id_registry_<type slug>.json`` with the shape
``{"ids": [sorted ids]}``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from item_factory.core.logging import get_logger
from item_factory.core.profile.models import type_slug

from .jsonio import read_json, write_json

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistryUpdate:
    type_name: str
    before_count: int
    added_count: int
    after_count: int


class IdRegistry:
    """Previously issued item ids, per item type."""

    def __init__(self, registry_dir: str | Path) -> None:
        self._dir = Path(registry_dir)

    def registry_path(self, type_name: str) -> Path:
        return self._dir / f"id_registry_{type_slug(type_name) or 'item'}.json"

    def load_ids(self, type_name: str) -> set[str]:
        """Empty set when the ledger is missing or unreadable."""
        path = self.registry_path(type_name)
        if not path.is_file():
            return set()
        try:
            data = read_json(path)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to parse registry (%s): %s", path, e)
            return set()

        if not isinstance(data, dict) or not isinstance(data.get("ids"), list):
            logger.warning("Registry %s has no 'ids' array", path)
            return set()
        return {v for v in data["ids"] if isinstance(v, str)}

    def save_ids(self, type_name: str, ids: Iterable[str]) -> bool:
        path = self.registry_path(type_name)
        try:
            write_json(path, {"ids": sorted(set(ids))})
        except OSError as e:
            logger.error("Failed to write registry %s: %s", path, e)
            return False
        return True

    def append(
        self, type_name: str, items: Iterable[dict[str, Any]]
    ) -> RegistryUpdate | None:
        """Union the items' ids into the ledger.

        Returns None when there is nothing to add or the save fails; in
        the latter case the ledger on disk is unchanged.
        """
        new_ids = {
            item["id"]
            for item in items
            if isinstance(item, dict) and isinstance(item.get("id"), str)
        }
        if not new_ids:
            return None

        ids = self.load_ids(type_name)
        before = len(ids)
        merged = ids | new_ids
        if not self.save_ids(type_name, merged):
            return None

        update = RegistryUpdate(
            type_name=type_name,
            before_count=before,
            added_count=len(merged) - before,
            after_count=len(merged),
        )
        logger.info(
            "Added %d new IDs to registry '%s' (total: %d)",
            update.added_count,
            type_name.lower(),
            update.after_count,
        )
        return update
