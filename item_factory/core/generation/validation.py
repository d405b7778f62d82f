"""Schema-directed checks on a single generated item."""

from __future__ import annotations

import copy
import math
from typing import Any

from item_factory.core.profile.models import FieldType, ItemProfile, ProfileField


def apply_defaults(item: dict[str, Any], profile: ItemProfile) -> None:
    """Fill absent or null fields that declare a default. Mutates ``item``."""
    for f in profile.fields:
        if f.default_value is None:
            continue
        if item.get(f.name) is None:
            item[f.name] = copy.deepcopy(f.default_value)


def _fmt(bound: float, field_type: FieldType) -> str:
    if field_type == FieldType.INTEGER and float(bound).is_integer():
        return str(int(bound))
    return f"{bound:g}"


def matches_type(value: Any, field_type: FieldType) -> bool:
    """JSON type check. bool is never a number; 3.0 is not an integer."""
    if field_type == FieldType.STRING:
        return isinstance(value, str)
    if field_type == FieldType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if field_type == FieldType.FLOAT:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if field_type == FieldType.BOOLEAN:
        return isinstance(value, bool)
    if field_type == FieldType.ARRAY:
        return isinstance(value, list)
    if field_type == FieldType.OBJECT:
        return isinstance(value, dict)
    return False


def validate_field_value(f: ProfileField, value: Any) -> list[str]:
    if not matches_type(value, f.type):
        return [
            f"Field '{f.name}' must be of type {f.type.value}, "
            f"got {type(value).__name__}"
        ]

    if isinstance(value, float) and not math.isfinite(value):
        return [f"Field '{f.name}' must be a finite number (got {value})"]

    rules = f.validation
    errors: list[str] = []

    if f.type.has_length:
        length = len(value)
        unit = "characters" if f.type == FieldType.STRING else "elements"
        if rules.min_length > 0 and length < rules.min_length:
            errors.append(
                f"Field '{f.name}' must have at least {rules.min_length} {unit}"
            )
        if rules.max_length > 0 and length > rules.max_length:
            errors.append(
                f"Field '{f.name}' must have at most {rules.max_length} {unit}"
            )

    if f.type.is_numeric:
        if rules.has_min_value and value < rules.min_value:
            errors.append(
                f"Field '{f.name}' must be >= {_fmt(rules.min_value, f.type)} "
                f"(got {value})"
            )
        if rules.has_max_value and value > rules.max_value:
            errors.append(
                f"Field '{f.name}' must be <= {_fmt(rules.max_value, f.type)} "
                f"(got {value})"
            )

    if f.type == FieldType.STRING and rules.allowed_values:
        if value not in rules.allowed_values:
            errors.append(
                f"Field '{f.name}' has invalid value '{value}'. "
                f"Allowed: {', '.join(rules.allowed_values)}"
            )

    return errors


def validate_item(item: dict[str, Any], profile: ItemProfile) -> list[str]:
    """Every violation in ``item``; empty list means valid.

    Null values count as absent. Keys not in the profile are ignored.
    """
    errors: list[str] = []
    for f in profile.fields:
        value = item.get(f.name)
        if value is None:
            if f.validation.required:
                errors.append(f"Required field '{f.name}' is missing")
            continue
        errors.extend(validate_field_value(f, value))
    return errors
