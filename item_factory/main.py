"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from item_factory.api.generation import router as generation_router
from item_factory.api.health import router as health_router
from item_factory.api.profiles import player_router as player_profile_router
from item_factory.api.profiles import router as profile_router
from item_factory.config import settings
from item_factory.core.logging import get_logger, setup_logging
from item_factory.core.profile import PlayerProfileStore, ProfileStore
from item_factory.core.prompt import PromptTemplateLoader
from item_factory.core.storage import IdRegistry
from item_factory.services.ai import get_ai_provider
from item_factory.services.generation_service import GenerationService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Loading profile stores from %s", settings.PROFILES_DIR)
    profile_store = ProfileStore(settings.PROFILES_DIR)
    created = profile_store.ensure_defaults()
    if created:
        logger.info("Created default profiles: %s", ", ".join(created))

    player_profile_store = PlayerProfileStore(settings.PLAYER_PROFILES_DIR)
    player_profile_store.ensure_default()

    app.state.profile_store = profile_store
    app.state.player_profile_store = player_profile_store

    logger.info("Initializing AI provider...")
    ai_provider = get_ai_provider()
    logger.info("AI provider initialized: %s", ai_provider.name)

    app.state.generation_service = GenerationService(
        profiles=profile_store,
        player_profiles=player_profile_store,
        registry=IdRegistry(settings.REGISTRY_DIR),
        provider=ai_provider,
        output_dir=settings.OUTPUT_DIR,
        template_loader=PromptTemplateLoader(settings.PROMPTS_DIR),
    )
    logger.info("GenerationService initialized.")

    yield

    logger.info("Shutting down...")


app = FastAPI(title="Item Factory", lifespan=lifespan)

app.include_router(health_router)
app.include_router(profile_router)
app.include_router(player_profile_router)
app.include_router(generation_router)
