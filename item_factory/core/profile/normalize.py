"""Identity-field normalization applied to every loaded or saved profile."""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import Optional

from .models import (
    DISPLAY_NAME_FIELD,
    ID_FIELD,
    FieldType,
    ItemProfile,
    ProfileField,
)


def _identity_field(
    existing: Optional[ProfileField],
    name: str,
    display_name: str,
    description: str,
) -> ProfileField:
    if existing is None:
        f = ProfileField(
            name=name,
            type=FieldType.STRING,
            display_name=display_name,
            description=description,
            category="Identity",
        )
    else:
        f = copy.deepcopy(existing)
        f.type = FieldType.STRING
    f.validation.required = True
    return f


def normalize_profile(profile: ItemProfile) -> ItemProfile:
    """Return a copy whose first two fields are ``id`` and ``displayName``.

    Both are required strings whose display_order sorts before every other
    field. The remaining fields keep their relative order and display
    orders. Normalizing an already normalized profile returns an equal
    profile.
    """
    id_field = _identity_field(
        profile.get_field(ID_FIELD), ID_FIELD, "ID", "Unique item identifier"
    )
    name_field = _identity_field(
        profile.get_field(DISPLAY_NAME_FIELD),
        DISPLAY_NAME_FIELD,
        "Display Name",
        "User-facing name",
    )

    others = [
        copy.deepcopy(f)
        for f in profile.fields
        if f.name not in (ID_FIELD, DISPLAY_NAME_FIELD)
    ]
    min_other = min((f.display_order for f in others), default=2)

    already_first = id_field.display_order < name_field.display_order < min_other
    if not already_first:
        id_field.display_order = min(0, min_other - 2)
        name_field.display_order = id_field.display_order + 1

    return replace(
        profile,
        fields=[id_field, name_field, *others],
        metadata=copy.deepcopy(profile.metadata),
    )


def is_normalized(profile: ItemProfile) -> bool:
    return normalize_profile(profile) == profile
