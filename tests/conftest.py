"""Shared test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from item_factory.api.generation import router as generation_router
from item_factory.api.health import router as health_router
from item_factory.api.profiles import player_router, router as profile_router
from item_factory.core.profile import (
    ItemProfile,
    PlayerProfile,
    PlayerProfileStore,
    ProfileStore,
)
from item_factory.core.profile.defaults import (
    build_default_player_profile,
    build_default_profile,
)
from item_factory.core.storage import IdRegistry
from item_factory.services.ai import MockProvider
from item_factory.services.generation_service import GenerationService

FIXED_TIMESTAMP = "2025-01-01T00:00:00+00:00"


@pytest.fixture()
def food_profile() -> ItemProfile:
    """Built-in Food profile (id, displayName, category, rarity, maxStack,
    hunger/thirst/health restore, spoilage, description)."""
    return build_default_profile("Food")


@pytest.fixture()
def player_profile() -> PlayerProfile:
    return build_default_player_profile()


@pytest.fixture()
def profile_store(tmp_path) -> ProfileStore:
    return ProfileStore(tmp_path / "ItemProfiles")


@pytest.fixture()
def player_profile_store(tmp_path) -> PlayerProfileStore:
    return PlayerProfileStore(tmp_path / "PlayerProfiles")


@pytest.fixture()
def id_registry(tmp_path) -> IdRegistry:
    return IdRegistry(tmp_path / "Registry")


@pytest.fixture()
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture()
def generation_service(
    tmp_path, profile_store, player_profile_store, id_registry, mock_provider
) -> GenerationService:
    return GenerationService(
        profiles=profile_store,
        player_profiles=player_profile_store,
        registry=id_registry,
        provider=mock_provider,
        output_dir=tmp_path / "ItemJson",
        clock=lambda: FIXED_TIMESTAMP,
    )


@pytest.fixture()
def app(profile_store, player_profile_store, generation_service) -> FastAPI:
    """App with routers and state wired to tmp directories (no lifespan)."""
    application = FastAPI()
    application.include_router(health_router)
    application.include_router(profile_router)
    application.include_router(player_router)
    application.include_router(generation_router)

    profile_store.ensure_defaults()
    player_profile_store.ensure_default()
    application.state.profile_store = profile_store
    application.state.player_profile_store = player_profile_store
    application.state.generation_service = generation_service
    return application


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    """FastAPI TestClient over tmp-directory stores and MockProvider."""
    return TestClient(app)
