"""Profile schema model + file-backed stores"""

from .models import (
    DISPLAY_NAME_FIELD,
    ID_FIELD,
    FieldType,
    FieldValidation,
    GeneratedItem,
    ItemProfile,
    PlayerProfile,
    PlayerSettings,
    PlayerStatField,
    PlayerStatSection,
    ProfileField,
    RelationshipConstraint,
    type_slug,
)
from .normalize import normalize_profile
from .store import PlayerProfileStore, ProfileStore

__all__ = [
    "DISPLAY_NAME_FIELD",
    "ID_FIELD",
    "FieldType",
    "FieldValidation",
    "GeneratedItem",
    "ItemProfile",
    "PlayerProfile",
    "PlayerSettings",
    "PlayerStatField",
    "PlayerStatSection",
    "ProfileField",
    "RelationshipConstraint",
    "type_slug",
    "normalize_profile",
    "PlayerProfileStore",
    "ProfileStore",
]
