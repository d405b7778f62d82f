"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage directories
    PROFILES_DIR: str = "ItemProfiles"
    PLAYER_PROFILES_DIR: str = "PlayerProfiles"
    REGISTRY_DIR: str = "Registry"
    PROMPTS_DIR: str = "prompts"
    OUTPUT_DIR: str = "ItemJson"

    DEFAULT_ITEM_COUNT: int = 5
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: str = "mock"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None
    AI_BASE_URL: Optional[str] = None


settings = Settings()
