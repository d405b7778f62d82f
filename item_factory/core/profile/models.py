"""Profile domain models (storage independent)"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Generated items are plain JSON objects shaped by the producing profile.
GeneratedItem = dict[str, Any]

ID_FIELD = "id"
DISPLAY_NAME_FIELD = "displayName"
IDENTITY_FIELDS = (ID_FIELD, DISPLAY_NAME_FIELD)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class FieldType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @classmethod
    def parse(cls, text: Optional[str]) -> "FieldType":
        """Lenient conversion from profile text. Unknown values become STRING."""
        if not text:
            return cls.STRING
        lowered = text.strip().lower()
        return _FIELD_TYPE_ALIASES.get(lowered, cls.STRING)

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.FLOAT)

    @property
    def has_length(self) -> bool:
        return self in (FieldType.STRING, FieldType.ARRAY)


_FIELD_TYPE_ALIASES: dict[str, FieldType] = {
    "string": FieldType.STRING,
    "integer": FieldType.INTEGER,
    "int": FieldType.INTEGER,
    "float": FieldType.FLOAT,
    "double": FieldType.FLOAT,
    "boolean": FieldType.BOOLEAN,
    "bool": FieldType.BOOLEAN,
    "array": FieldType.ARRAY,
    "object": FieldType.OBJECT,
}


@dataclass
class RelationshipConstraint:
    """Advisory comparison between two fields of the same item."""

    operator: str  # ">=", "<=", ">", "<", "==", "!="
    target_field: str
    description: str = ""
    offset: float = 0.0  # fieldA >= fieldB + offset


@dataclass
class FieldValidation:
    required: bool = False
    min_length: int = 0  # 0 = unbounded (string/array)
    max_length: int = 0
    min_value: float = 0.0  # 0 = unbounded (integer/float)
    max_value: float = 0.0
    allowed_values: list[str] = field(default_factory=list)
    relationship_constraints: list[RelationshipConstraint] = field(
        default_factory=list
    )
    custom_constraint: str = ""
    regex_pattern: str = ""

    def __post_init__(self) -> None:
        # ordered set semantics
        self.allowed_values = list(dict.fromkeys(self.allowed_values))

    @property
    def has_min_value(self) -> bool:
        return self.min_value != 0

    @property
    def has_max_value(self) -> bool:
        return self.max_value != 0


@dataclass
class ProfileField:
    name: str  # JSON key in generated items
    type: FieldType = FieldType.STRING
    display_name: str = ""
    description: str = ""
    category: str = ""
    display_order: int = 0
    default_value: Any = None  # None = no default
    validation: FieldValidation = field(default_factory=FieldValidation)

    @property
    def is_identity(self) -> bool:
        return self.name in IDENTITY_FIELDS


@dataclass
class ItemProfile:
    """Schema for one item type. Stored as ``{id}.json``."""

    id: str = ""
    display_name: str = ""
    description: str = ""
    item_type_name: str = ""  # "Food", "Weapon", ...
    version: int = 1
    is_default: bool = False
    custom_context: str = ""  # world-building text injected into prompts
    fields: list[ProfileField] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Empty id is the "not found" sentinel."""
        return not self.id

    @property
    def type_slug(self) -> str:
        return type_slug(self.item_type_name)

    def get_field(self, name: str) -> Optional[ProfileField]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def has_field(self, name: str) -> bool:
        return self.get_field(name) is not None

    def fields_by_category(self, category: str) -> list[ProfileField]:
        return [f for f in self.fields if f.category == category]

    def sorted_fields(self) -> list[ProfileField]:
        """display_order ascending. sorted() is stable, ties keep insertion order."""
        return sorted(self.fields, key=lambda f: f.display_order)

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclass
class PlayerSettings:
    """Player maximums, used as prompt context only."""

    max_hunger: int = 100
    max_thirst: int = 100
    max_health: int = 100
    max_stamina: int = 100
    max_weight: int = 50000  # grams
    max_energy: int = 100


@dataclass
class PlayerStatField:
    name: str
    display_name: str = ""
    description: str = ""
    value: Any = 0
    display_order: int = 0


@dataclass
class PlayerStatSection:
    name: str
    display_name: str = ""
    description: str = ""
    display_order: int = 0
    fields: list[PlayerStatField] = field(default_factory=list)

    def sorted_fields(self) -> list[PlayerStatField]:
        return sorted(self.fields, key=lambda f: f.display_order)


@dataclass
class PlayerProfile:
    id: str = ""
    display_name: str = ""
    description: str = ""
    version: int = 1
    is_default: bool = False
    player_settings: PlayerSettings = field(default_factory=PlayerSettings)
    stat_sections: list[PlayerStatSection] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.id

    def sorted_sections(self) -> list[PlayerStatSection]:
        return sorted(self.stat_sections, key=lambda s: s.display_order)


def type_slug(item_type_name: str) -> str:
    """"Weapon Component" -> "weaponcomponent"."""
    return _NON_ALNUM.sub("", item_type_name.lower())
