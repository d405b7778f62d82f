"""Built-in default profiles

Created on first use when a profiles directory has no ``default_<type>``
profile. Types without dedicated fields get only the shared base fields.
"""

from __future__ import annotations

from typing import Any, Optional

from .models import (
    FieldType,
    FieldValidation,
    ItemProfile,
    PlayerProfile,
    PlayerSettings,
    PlayerStatField,
    PlayerStatSection,
    ProfileField,
    RelationshipConstraint,
)

DEFAULT_ITEM_TYPES = (
    "Food",
    "Drink",
    "Medicine",
    "Material",
    "Weapon",
    "WeaponComponent",
    "Ammo",
    "Armor",
    "Clothing",
)

DEFAULT_PLAYER_PROFILE_ID = "default_player"


def default_profile_id(item_type_name: str) -> str:
    return f"default_{item_type_name}".lower()


def _field(
    name: str,
    field_type: FieldType,
    display_name: str,
    description: str,
    category: str,
    order: int,
    required: bool = False,
    min_value: float = 0.0,
    max_value: float = 0.0,
    allowed: Optional[list[str]] = None,
    default: Any = None,
) -> ProfileField:
    return ProfileField(
        name=name,
        type=field_type,
        display_name=display_name,
        description=description,
        category=category,
        display_order=order,
        default_value=default,
        validation=FieldValidation(
            required=required,
            min_value=min_value,
            max_value=max_value,
            allowed_values=list(allowed or []),
        ),
    )


def _restore(name: str, label: str, order: int, minimum: float = 0.0) -> ProfileField:
    return _field(
        name,
        FieldType.INTEGER,
        label,
        f"Amount of {label.split()[0].lower()} restored (0-100)",
        "Effects",
        order,
        min_value=minimum,
        max_value=100,
    )


def _base_fields(item_type_name: str) -> list[ProfileField]:
    s = FieldType.STRING
    return [
        _field("id", s, "ID", "Unique item identifier", "Identity", 0, True),
        _field("displayName", s, "Display Name", "User-facing name", "Identity", 1, True),
        _field("category", s, "Category", "Item category", "Identity", 2, True,
               allowed=[item_type_name]),
        _field("rarity", s, "Rarity", "Item rarity", "Identity", 3, True,
               allowed=["Common", "Uncommon", "Rare"]),
        _field("maxStack", FieldType.INTEGER, "Max Stack", "Maximum stack size",
               "Inventory", 4, min_value=1, max_value=999, default=1),
        _field("description", s, "Description", "Item description", "Identity", 99, True),
    ]


def _spoilage_fields(kind: str) -> list[ProfileField]:
    return [
        _field("spoils", FieldType.BOOLEAN, "Spoils",
               f"Whether this {kind} item spoils over time", "Spoilage", 20),
        _field("spoilTimeMinutes", FieldType.INTEGER, "Spoil Time (minutes)",
               "Time until spoilage in minutes", "Spoilage", 21, max_value=10000),
    ]


def _type_fields(item_type_name: str) -> list[ProfileField]:
    if item_type_name == "Food":
        hunger = _restore("hungerRestore", "Hunger Restore", 10)
        hunger.validation.relationship_constraints.append(
            RelationshipConstraint(
                operator=">=",
                target_field="thirstRestore",
                description="Food items primarily restore hunger, "
                "so hungerRestore should be >= thirstRestore",
            )
        )
        return [
            hunger,
            _restore("thirstRestore", "Thirst Restore", 11),
            _restore("healthRestore", "Health Restore", 12),
            *_spoilage_fields("food"),
        ]

    if item_type_name == "Drink":
        thirst = _restore("thirstRestore", "Thirst Restore", 11, minimum=10)
        thirst.validation.relationship_constraints.append(
            RelationshipConstraint(
                operator=">=",
                target_field="hungerRestore",
                description="Drink items primarily restore thirst, "
                "so thirstRestore should be >= hungerRestore",
            )
        )
        return [
            _restore("hungerRestore", "Hunger Restore", 10),
            thirst,
            _restore("healthRestore", "Health Restore", 12),
            *_spoilage_fields("drink"),
        ]

    if item_type_name == "Medicine":
        return [_restore("healthRestore", "Health Restore", 10, minimum=10)]

    if item_type_name == "Material":
        return [
            _field("materialType", FieldType.STRING, "Material Type",
                   "Type of material (e.g., Wood, Metal, Stone)", "Properties", 10),
            _field("hardness", FieldType.INTEGER, "Hardness",
                   "Material hardness (0-100)", "Properties", 11, max_value=100),
            _field("flammability", FieldType.INTEGER, "Flammability",
                   "Material flammability (0-100)", "Properties", 12, max_value=100),
            _field("value", FieldType.INTEGER, "Value", "Material value",
                   "Properties", 13, max_value=1000),
        ]

    return []


def build_default_profile(item_type_name: str) -> ItemProfile:
    base = _base_fields(item_type_name)
    # description stays last (display_order 99)
    fields = base[:-1] + _type_fields(item_type_name) + base[-1:]
    return ItemProfile(
        id=default_profile_id(item_type_name),
        display_name=f"Default {item_type_name} Profile",
        description=f"Default profile for {item_type_name} items",
        item_type_name=item_type_name,
        version=1,
        is_default=True,
        fields=fields,
    )


def build_default_player_profile() -> PlayerProfile:
    return PlayerProfile(
        id=DEFAULT_PLAYER_PROFILE_ID,
        display_name="Default Player",
        description="Baseline survival player used to balance generated items",
        version=1,
        is_default=True,
        player_settings=PlayerSettings(),
        stat_sections=[
            PlayerStatSection(
                name="survival",
                display_name="Survival",
                description="Needs that decay over time",
                display_order=0,
                fields=[
                    PlayerStatField("hunger", "Hunger", "Current hunger", 100, 0),
                    PlayerStatField("thirst", "Thirst", "Current thirst", 100, 1),
                ],
            ),
            PlayerStatSection(
                name="vitals",
                display_name="Vitals",
                description="Combat related stats",
                display_order=1,
                fields=[
                    PlayerStatField("health", "Health", "Current health", 100, 0),
                    PlayerStatField("stamina", "Stamina", "Current stamina", 100, 1),
                ],
            ),
        ],
    )
