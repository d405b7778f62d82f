"""displayName / id synthesis for generated items

The id is always re-derived from displayName, even when the model supplied
one, so that ids are stable across runs and providers.
"""

from __future__ import annotations

import re
from typing import Any

from item_factory.core.profile.models import (
    DISPLAY_NAME_FIELD,
    ID_FIELD,
    type_slug,
)

MAX_ID_SUFFIX_LENGTH = 30

FALLBACK_NAME_KEYS = ("name", "title", "weaponName", "itemName", "foodName")

# Generic words that add nothing to an item's identity.
DESCRIPTOR_WORDS = (
    "the",
    "of",
    "enhanced",
    "improved",
    "advanced",
    "standard",
    "basic",
    "deluxe",
    "premium",
    "superior",
    "custom",
    "modified",
    "tactical",
    "special",
    "edition",
    "version",
)

# Longest names first so "heckler & koch" wins over partial matches.
MANUFACTURER_ABBREVIATIONS = (
    ("heckler & koch", "hk"),
    ("heckler and koch", "hk"),
    ("smith & wesson", "sw"),
    ("smith and wesson", "sw"),
    ("fabrique nationale", "fn"),
    ("sig sauer", "sig"),
    ("kalashnikov", "ak"),
    ("remington", "rem"),
    ("winchester", "win"),
    ("springfield", "sprg"),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def _whole_token(phrase: str) -> re.Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(phrase) + r"(?![a-z0-9])")


_MANUFACTURER_PATTERNS = [
    (_whole_token(name), abbr) for name, abbr in MANUFACTURER_ABBREVIATIONS
]
_DESCRIPTOR_PATTERNS = [_whole_token(word) for word in DESCRIPTOR_WORDS]


def id_slug(item_type_name: str) -> str:
    """Type prefix for ids. "item" when the type has no alphanumerics."""
    return type_slug(item_type_name) or "item"


def _non_blank_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def resolve_display_name(
    item: dict[str, Any], item_type_name: str, position: int
) -> str:
    """Existing displayName, else the first fallback key, else a synthesized name.

    ``position`` is 1-based.
    """
    current = item.get(DISPLAY_NAME_FIELD)
    if _non_blank_str(current):
        return current

    for key in FALLBACK_NAME_KEYS:
        value = item.get(key)
        if _non_blank_str(value):
            return value

    return f"{item_type_name or 'Item'} Item {position}"


def derive_id_suffix(display_name: str) -> str:
    text = display_name.lower()
    for pattern, abbr in _MANUFACTURER_PATTERNS:
        text = pattern.sub(abbr, text)
    for pattern in _DESCRIPTOR_PATTERNS:
        text = pattern.sub(" ", text)
    return _NON_ALNUM.sub("", text)[:MAX_ID_SUFFIX_LENGTH]


def derive_id(display_name: str, item_type_name: str, position: int) -> str:
    """"FN SCAR-17S Enhanced" + "Weapon" -> "weapon_fnscar17s"."""
    suffix = derive_id_suffix(display_name) or str(position)
    return f"{id_slug(item_type_name)}_{suffix}"


def assign_identity(
    item: dict[str, Any], item_type_name: str, position: int
) -> None:
    """Set displayName (if missing) and id on ``item`` in place."""
    display_name = resolve_display_name(item, item_type_name, position)
    item[DISPLAY_NAME_FIELD] = display_name
    item[ID_FIELD] = derive_id(display_name, item_type_name, position)
