"""Configuration management using pydantic-settings.

Settings come from the process environment (optionally a .env file):
- TELEGRAM_BOT_TOKEN: bot credential for the Telegram Bot API
- EMOJI_PACKS: comma-separated default pack names for sync
- EMOJI_DATA_DIR: directory holding the pack cache and previews
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


CACHE_FILENAME = "emoji-cache.json"
PREVIEWS_DIRNAME = "previews"


class AppSettings(BaseSettings):
    """Application settings with validation."""

    telegram_bot_token: str | None = Field(
        default=None, validation_alias="TELEGRAM_BOT_TOKEN"
    )
    emoji_packs: str = Field(default="", validation_alias="EMOJI_PACKS")
    data_dir: Path = Field(default=Path("data"), validation_alias="EMOJI_DATA_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("telegram_bot_token", mode="before")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        """Treat an empty TELEGRAM_BOT_TOKEN as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def pack_names(self) -> list[str]:
        """Default pack names parsed from EMOJI_PACKS."""
        return [name.strip() for name in self.emoji_packs.split(",") if name.strip()]

    @property
    def cache_file(self) -> Path:
        return self.data_dir / CACHE_FILENAME

    @property
    def previews_dir(self) -> Path:
        return self.data_dir / PREVIEWS_DIRNAME


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Cached AppSettings instance
    """
    return AppSettings()


def load_settings(**overrides: object) -> AppSettings:
    """Load settings afresh, applying explicit overrides (e.g. from CLI flags)."""
    get_settings.cache_clear()
    settings = get_settings()
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings
