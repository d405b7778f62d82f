"""File-backed profile stores

One JSON document per profile, ``{id}.json``, inside an explicit
directory passed to the constructor. Loads never raise: a missing or
unreadable file yields an empty profile (``id == ""``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator

from item_factory.core.logging import get_logger
from item_factory.core.storage.jsonio import read_json, write_json

from .codec import (
    player_profile_from_dict,
    player_profile_to_dict,
    profile_from_dict,
    profile_to_dict,
)
from .defaults import (
    DEFAULT_ITEM_TYPES,
    build_default_player_profile,
    build_default_profile,
    default_profile_id,
)
from .models import ItemProfile, PlayerProfile
from .normalize import normalize_profile

logger = get_logger(__name__)

_LOAD_ERRORS = (OSError, json.JSONDecodeError, TypeError, ValueError, KeyError)


def _field_name_errors(profile: ItemProfile) -> list[str]:
    errors = []
    seen: set[str] = set()
    for f in profile.fields:
        if not f.name:
            errors.append("Field name cannot be empty")
            continue
        if f.name in seen:
            errors.append(f"Duplicate field name: {f.name}")
        seen.add(f.name)
    return errors


def _json_files(directory: Path) -> Iterator[Path]:
    if not directory.is_dir():
        return iter(())
    return iter(sorted(p for p in directory.glob("*.json") if p.is_file()))


class ProfileStore:
    """Item profile storage rooted at ``profiles_dir``."""

    def __init__(self, profiles_dir: str | Path) -> None:
        self._dir = Path(profiles_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def profile_path(self, profile_id: str) -> Path:
        return self._dir / f"{profile_id}.json"

    # === Load ===

    def load(self, profile_id: str) -> ItemProfile:
        if not profile_id:
            return ItemProfile()
        return self.load_from_path(self.profile_path(profile_id))

    def load_from_path(self, path: str | Path) -> ItemProfile:
        """Load + normalize. Empty profile when missing or unparsable."""
        path = Path(path)
        if not path.is_file():
            return ItemProfile()

        try:
            profile = profile_from_dict(read_json(path))
        except _LOAD_ERRORS as e:
            logger.warning("Failed to load profile %s: %s", path, e)
            return ItemProfile()

        if profile.is_empty:
            logger.warning("Profile file has no id: %s", path)
            return ItemProfile()
        return normalize_profile(profile)

    # === Save / delete ===

    def save(self, profile: ItemProfile) -> bool:
        """Rewrite the whole profile file. False on empty id, invalid
        field names, or I/O failure."""
        if not profile.id:
            logger.error("Cannot save profile with empty id")
            return False

        normalized = normalize_profile(profile)
        errors = _field_name_errors(normalized)
        if errors:
            logger.error(
                "Refusing to save invalid profile %s: %s",
                profile.id,
                "; ".join(errors),
            )
            return False

        path = self.profile_path(profile.id)
        try:
            write_json(path, profile_to_dict(normalized))
        except OSError as e:
            logger.error("Failed to write profile %s: %s", path, e)
            return False

        logger.info("Saved profile %s -> %s", profile.id, path)
        return True

    def delete(self, profile_id: str) -> bool:
        path = self.profile_path(profile_id)
        if not profile_id or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to delete profile %s: %s", path, e)
            return False
        logger.info("Deleted profile %s", profile_id)
        return True

    def exists(self, profile_id: str) -> bool:
        return bool(profile_id) and self.profile_path(profile_id).is_file()

    # === Queries ===

    def list_all(self) -> dict[str, ItemProfile]:
        result: dict[str, ItemProfile] = {}
        for path in _json_files(self._dir):
            profile = self.load_from_path(path)
            if not profile.is_empty:
                result[profile.id] = profile
        return result

    def list_by_type(self, item_type_name: str) -> list[ItemProfile]:
        return [
            p for p in self.list_all().values() if p.item_type_name == item_type_name
        ]

    def get_default(self, item_type_name: str) -> ItemProfile:
        """default_<type> file, then any is_default profile of the type,
        then bootstrap the built-in defaults once and retry."""
        profile = self._find_default(item_type_name)
        if not profile.is_empty:
            return profile

        logger.info(
            "No default profile for '%s'. Creating default profiles...",
            item_type_name,
        )
        if self.ensure_defaults():
            profile = self._find_default(item_type_name)
        return profile

    def _find_default(self, item_type_name: str) -> ItemProfile:
        profile = self.load(default_profile_id(item_type_name))
        if not profile.is_empty:
            return profile
        for candidate in self.list_by_type(item_type_name):
            if candidate.is_default:
                return candidate
        return ItemProfile()

    def ensure_defaults(self) -> list[str]:
        """Write missing built-in default profiles. Returns created ids."""
        created = []
        for type_name in DEFAULT_ITEM_TYPES:
            profile_id = default_profile_id(type_name)
            if self.exists(profile_id):
                continue
            if self.save(build_default_profile(type_name)):
                created.append(profile_id)
            else:
                logger.warning("Failed to create default profile for %s", type_name)
        return created

    # === Validation ===

    @staticmethod
    def validate(profile: ItemProfile) -> tuple[bool, list[str]]:
        """Collect every violation instead of stopping at the first."""
        errors: list[str] = []
        if not profile.id:
            errors.append("Profile ID cannot be empty")
        if not profile.item_type_name:
            errors.append("Item type name cannot be empty")
        if not profile.fields:
            errors.append("Profile must have at least one field")
        errors.extend(_field_name_errors(profile))
        return (not errors, errors)


class PlayerProfileStore:
    """Player profile storage rooted at ``profiles_dir``."""

    def __init__(self, profiles_dir: str | Path) -> None:
        self._dir = Path(profiles_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def profile_path(self, profile_id: str) -> Path:
        return self._dir / f"{profile_id}.json"

    def load(self, profile_id: str) -> PlayerProfile:
        if not profile_id:
            return PlayerProfile()
        return self.load_from_path(self.profile_path(profile_id))

    def load_from_path(self, path: str | Path) -> PlayerProfile:
        path = Path(path)
        if not path.is_file():
            return PlayerProfile()
        try:
            return player_profile_from_dict(read_json(path))
        except _LOAD_ERRORS as e:
            logger.warning("Failed to load player profile %s: %s", path, e)
            return PlayerProfile()

    def save(self, profile: PlayerProfile) -> bool:
        if not profile.id:
            logger.error("Cannot save player profile with empty id")
            return False
        path = self.profile_path(profile.id)
        try:
            write_json(path, player_profile_to_dict(profile))
        except OSError as e:
            logger.error("Failed to write player profile %s: %s", path, e)
            return False
        return True

    def delete(self, profile_id: str) -> bool:
        path = self.profile_path(profile_id)
        if not profile_id or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to delete player profile %s: %s", path, e)
            return False
        return True

    def exists(self, profile_id: str) -> bool:
        return bool(profile_id) and self.profile_path(profile_id).is_file()

    def list_all(self) -> dict[str, PlayerProfile]:
        result: dict[str, PlayerProfile] = {}
        for path in _json_files(self._dir):
            profile = self.load_from_path(path)
            if not profile.is_empty:
                result[profile.id] = profile
        return result

    def get_default(self) -> PlayerProfile:
        """First is_default profile in filename order, else the first
        loadable one, else empty."""
        profiles = list(self.list_all().values())
        for profile in profiles:
            if profile.is_default:
                return profile
        return profiles[0] if profiles else PlayerProfile()

    def ensure_default(self) -> bool:
        """Create ``default_player.json`` when no player profile exists."""
        if self.list_all():
            return False
        return self.save(build_default_player_profile())
