"""Item / player profile API endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from item_factory.api.schemas import (
    ErrorResponse,
    PlayerProfileSummary,
    ProfileSummary,
    ValidationResponse,
)
from item_factory.core.logging import get_logger
from item_factory.core.profile import (
    ItemProfile,
    PlayerProfile,
    PlayerProfileStore,
    ProfileStore,
)
from item_factory.core.profile.codec import (
    player_profile_to_dict,
    profile_from_dict,
    profile_to_dict,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])
player_router = APIRouter(prefix="/player-profiles", tags=["player-profiles"])

_DECODE_ERRORS = (TypeError, ValueError, KeyError)


def get_profile_store(request: Request) -> ProfileStore:
    """ProfileStore instance (dependency injection)"""
    store: ProfileStore = request.app.state.profile_store
    return store


def get_player_profile_store(request: Request) -> PlayerProfileStore:
    """PlayerProfileStore instance (dependency injection)"""
    store: PlayerProfileStore = request.app.state.player_profile_store
    return store


def _summary(profile: ItemProfile) -> ProfileSummary:
    return ProfileSummary(
        id=profile.id,
        display_name=profile.display_name,
        item_type_name=profile.item_type_name,
        version=profile.version,
        is_default=profile.is_default,
        field_count=len(profile.fields),
    )


def _player_summary(profile: PlayerProfile) -> PlayerProfileSummary:
    return PlayerProfileSummary(
        id=profile.id,
        display_name=profile.display_name,
        is_default=profile.is_default,
        section_count=len(profile.stat_sections),
    )


def _decode(raw: dict[str, Any]) -> ItemProfile:
    try:
        return profile_from_dict(raw)
    except _DECODE_ERRORS as e:
        raise HTTPException(status_code=422, detail=[f"Invalid profile document: {e}"])


# === Item profiles ===


@router.get("", response_model=list[ProfileSummary])
def list_profiles(
    item_type: Optional[str] = None,
    store: ProfileStore = Depends(get_profile_store),
) -> list[ProfileSummary]:
    """Profiles sorted by id, optionally filtered by item type."""
    if item_type:
        profiles = store.list_by_type(item_type)
    else:
        profiles = list(store.list_all().values())
    return [_summary(p) for p in profiles]


@router.post("/validate", response_model=ValidationResponse)
def validate_profile(
    raw: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
) -> ValidationResponse:
    profile = _decode(raw)
    valid, errors = store.validate(profile)
    return ValidationResponse(valid=valid, errors=errors)


@router.get(
    "/{profile_id}",
    responses={404: {"model": ErrorResponse}},
)
def get_profile(
    profile_id: str,
    store: ProfileStore = Depends(get_profile_store),
) -> dict[str, Any]:
    """Full profile document, normalized."""
    profile = store.load(profile_id)
    if profile.is_empty:
        raise HTTPException(status_code=404, detail=f"Profile not found: {profile_id}")
    return profile_to_dict(profile)


@router.put(
    "/{profile_id}",
    responses={422: {"model": ErrorResponse}},
)
def put_profile(
    profile_id: str,
    raw: dict[str, Any] = Body(...),
    store: ProfileStore = Depends(get_profile_store),
) -> dict[str, Any]:
    """
    Create or replace a profile.

    The body id may be omitted; when present it must match the path.
    """
    raw = {**raw, "id": raw.get("id") or profile_id}
    if raw["id"] != profile_id:
        raise HTTPException(
            status_code=422,
            detail=[f"Body id '{raw['id']}' does not match path id '{profile_id}'"],
        )

    profile = _decode(raw)
    valid, errors = store.validate(profile)
    if not valid:
        raise HTTPException(status_code=422, detail=errors)

    if not store.save(profile):
        raise HTTPException(status_code=500, detail=f"Failed to save profile: {profile_id}")

    logger.info("Profile saved: %s", profile_id)
    return profile_to_dict(store.load(profile_id))


@router.delete(
    "/{profile_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
def delete_profile(
    profile_id: str,
    store: ProfileStore = Depends(get_profile_store),
) -> Response:
    if not store.exists(profile_id):
        raise HTTPException(status_code=404, detail=f"Profile not found: {profile_id}")
    if not store.delete(profile_id):
        raise HTTPException(status_code=500, detail=f"Failed to delete profile: {profile_id}")
    return Response(status_code=204)


# === Player profiles ===


@player_router.get("", response_model=list[PlayerProfileSummary])
def list_player_profiles(
    store: PlayerProfileStore = Depends(get_player_profile_store),
) -> list[PlayerProfileSummary]:
    return [_player_summary(p) for p in store.list_all().values()]


@player_router.get(
    "/{profile_id}",
    responses={404: {"model": ErrorResponse}},
)
def get_player_profile(
    profile_id: str,
    store: PlayerProfileStore = Depends(get_player_profile_store),
) -> dict[str, Any]:
    profile = store.load(profile_id)
    if profile.is_empty:
        raise HTTPException(
            status_code=404, detail=f"Player profile not found: {profile_id}"
        )
    return player_profile_to_dict(profile)
