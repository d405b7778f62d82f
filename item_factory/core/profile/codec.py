"""Profile JSON <-> dataclass conversion

On-disk keys are camelCase. Conversion errors raise ``ValueError`` /
``TypeError`` / ``KeyError``; the stores turn those into empty profiles.
"""

from __future__ import annotations

from typing import Any

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


def _str(raw: dict, key: str, default: str = "") -> str:
    value = raw.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _int(raw: dict, key: str, default: int = 0) -> int:
    value = raw.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {type(value).__name__}")
    return int(value)


def _float(raw: dict, key: str, default: float = 0.0) -> float:
    value = raw.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {type(value).__name__}")
    return float(value)


def _bool(raw: dict, key: str, default: bool = False) -> bool:
    value = raw.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean, got {type(value).__name__}")
    return value


def _object(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise TypeError(f"{what} must be a JSON object")
    return raw


# === Item profile ===


def validation_from_dict(raw: dict) -> FieldValidation:
    raw = _object(raw, "validation")
    constraints = []
    for c in raw.get("relationshipConstraints") or []:
        c = _object(c, "relationship constraint")
        constraints.append(
            RelationshipConstraint(
                operator=_str(c, "operator"),
                target_field=_str(c, "targetField"),
                description=_str(c, "description"),
                offset=_float(c, "offset"),
            )
        )

    allowed = [v for v in raw.get("allowedValues") or [] if isinstance(v, str)]

    return FieldValidation(
        required=_bool(raw, "isRequired"),
        min_length=_int(raw, "minLength"),
        max_length=_int(raw, "maxLength"),
        min_value=_float(raw, "minValue"),
        max_value=_float(raw, "maxValue"),
        allowed_values=allowed,
        relationship_constraints=constraints,
        custom_constraint=_str(raw, "customConstraint"),
        regex_pattern=_str(raw, "regexPattern"),
    )


def validation_to_dict(validation: FieldValidation) -> dict[str, Any]:
    data: dict[str, Any] = {
        "isRequired": validation.required,
        "minLength": validation.min_length,
        "maxLength": validation.max_length,
        "minValue": validation.min_value,
        "maxValue": validation.max_value,
        "allowedValues": list(validation.allowed_values),
        "relationshipConstraints": [
            {
                "description": c.description,
                "operator": c.operator,
                "targetField": c.target_field,
                **({"offset": c.offset} if c.offset else {}),
            }
            for c in validation.relationship_constraints
        ],
        "customConstraint": validation.custom_constraint,
    }
    if validation.regex_pattern:
        data["regexPattern"] = validation.regex_pattern
    return data


def field_from_dict(raw: dict) -> ProfileField:
    raw = _object(raw, "field")
    validation = (
        validation_from_dict(raw["validation"])
        if raw.get("validation") is not None
        else FieldValidation()
    )
    return ProfileField(
        name=_str(raw, "name"),
        type=FieldType.parse(_str(raw, "type", "string")),
        display_name=_str(raw, "displayName"),
        description=_str(raw, "description"),
        category=_str(raw, "category"),
        display_order=_int(raw, "displayOrder"),
        default_value=raw.get("defaultValue"),
        validation=validation,
    )


def field_to_dict(f: ProfileField) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": f.name,
        "type": f.type.value,
        "displayName": f.display_name,
        "description": f.description,
        "category": f.category,
        "displayOrder": f.display_order,
    }
    if f.default_value is not None:
        data["defaultValue"] = f.default_value
    data["validation"] = validation_to_dict(f.validation)
    return data


def profile_from_dict(raw: dict) -> ItemProfile:
    raw = _object(raw, "profile")
    fields_raw = raw.get("fields") or []
    if not isinstance(fields_raw, list):
        raise TypeError("'fields' must be an array")
    metadata = raw.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise TypeError("'metadata' must be an object")

    return ItemProfile(
        id=_str(raw, "id"),
        display_name=_str(raw, "displayName"),
        description=_str(raw, "description"),
        item_type_name=_str(raw, "itemTypeName"),
        version=_int(raw, "version", 1),
        is_default=_bool(raw, "isDefault"),
        custom_context=_str(raw, "customContext"),
        fields=[field_from_dict(f) for f in fields_raw],
        metadata=dict(metadata),
    )


def profile_to_dict(profile: ItemProfile) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": profile.id,
        "displayName": profile.display_name,
        "description": profile.description,
        "itemTypeName": profile.item_type_name,
        "version": profile.version,
        "isDefault": profile.is_default,
    }
    if profile.custom_context:
        data["customContext"] = profile.custom_context
    data["fields"] = [field_to_dict(f) for f in profile.fields]
    data["metadata"] = dict(profile.metadata)
    return data


# === Player profile ===


def player_settings_from_dict(raw: dict) -> PlayerSettings:
    raw = _object(raw, "playerSettings")
    defaults = PlayerSettings()
    return PlayerSettings(
        max_hunger=_int(raw, "maxHunger", defaults.max_hunger),
        max_thirst=_int(raw, "maxThirst", defaults.max_thirst),
        max_health=_int(raw, "maxHealth", defaults.max_health),
        max_stamina=_int(raw, "maxStamina", defaults.max_stamina),
        max_weight=_int(raw, "maxWeight", defaults.max_weight),
        max_energy=_int(raw, "maxEnergy", defaults.max_energy),
    )


def player_profile_from_dict(raw: dict) -> PlayerProfile:
    raw = _object(raw, "player profile")

    sections = []
    for s in raw.get("statSections") or []:
        s = _object(s, "stat section")
        sections.append(
            PlayerStatSection(
                name=_str(s, "name"),
                display_name=_str(s, "displayName"),
                description=_str(s, "description"),
                display_order=_int(s, "displayOrder"),
                fields=[
                    PlayerStatField(
                        name=_str(f, "name"),
                        display_name=_str(f, "displayName"),
                        description=_str(f, "description"),
                        value=f.get("value", 0),
                        display_order=_int(f, "displayOrder"),
                    )
                    for f in (_object(x, "stat field") for x in s.get("fields") or [])
                ],
            )
        )

    settings_raw = raw.get("playerSettings")
    return PlayerProfile(
        id=_str(raw, "id"),
        display_name=_str(raw, "displayName"),
        description=_str(raw, "description"),
        version=_int(raw, "version", 1),
        is_default=_bool(raw, "isDefault"),
        player_settings=(
            player_settings_from_dict(settings_raw)
            if settings_raw is not None
            else PlayerSettings()
        ),
        stat_sections=sections,
    )


def player_profile_to_dict(profile: PlayerProfile) -> dict[str, Any]:
    ps = profile.player_settings
    return {
        "id": profile.id,
        "displayName": profile.display_name,
        "description": profile.description,
        "version": profile.version,
        "isDefault": profile.is_default,
        "playerSettings": {
            "maxHunger": ps.max_hunger,
            "maxThirst": ps.max_thirst,
            "maxHealth": ps.max_health,
            "maxStamina": ps.max_stamina,
            "maxWeight": ps.max_weight,
            "maxEnergy": ps.max_energy,
        },
        "statSections": [
            {
                "name": s.name,
                "displayName": s.display_name,
                "description": s.description,
                "displayOrder": s.display_order,
                "fields": [
                    {
                        "name": f.name,
                        "displayName": f.display_name,
                        "description": f.description,
                        "value": f.value,
                        "displayOrder": f.display_order,
                    }
                    for f in s.fields
                ],
            }
            for s in profile.stat_sections
        ],
    }
