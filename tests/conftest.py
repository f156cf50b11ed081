"""Shared fixtures for telegram-emoji tests."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from PIL import Image

from telegram_emoji.config.settings import AppSettings
from telegram_emoji.store.models import CachedEmoji, CachedPack
from telegram_emoji.store.pack_store import PackStore


def _make_emoji(
    custom_emoji_id: str = "5368324170671202286",
    emoji: str = "🔥",
    set_name: str = "NeonIcons",
    thumbnail_file_id: str | None = "thumb-1",
) -> CachedEmoji:
    """Build a CachedEmoji with sensible defaults."""
    return CachedEmoji(
        custom_emoji_id=custom_emoji_id,
        emoji=emoji,
        set_name=set_name,
        thumbnail_file_id=thumbnail_file_id,
    )


def _make_pack(
    name: str = "NeonIcons",
    title: str = "Neon Icons",
    emojis: list[CachedEmoji] | None = None,
    preview_path: str | None = None,
) -> CachedPack:
    """Build a CachedPack; default emojis are 🔥 and 🐱."""
    if emojis is None:
        emojis = [
            _make_emoji("5368324170671202286", "🔥", name, "thumb-1"),
            _make_emoji("5368324170671202287", "🐱", name, "thumb-2"),
        ]
    return CachedPack(name=name, title=title, emojis=emojis, preview_path=preview_path)


@pytest.fixture
def make_emoji() -> Callable[..., CachedEmoji]:
    """Factory for CachedEmoji records."""
    return _make_emoji


@pytest.fixture
def make_pack() -> Callable[..., CachedPack]:
    """Factory for CachedPack records."""
    return _make_pack


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Factory for small solid-color PNG blobs."""

    def _make(
        width: int = 64,
        height: int = 64,
        color: tuple[int, int, int, int] = (255, 0, 0, 255),
    ) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def store(tmp_path) -> PackStore:
    """An empty store backed by a temp file."""
    return PackStore(tmp_path / "emoji-cache.json")


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    """Settings with a bot token and a temp data directory."""
    return AppSettings(
        telegram_bot_token="123:test-token",
        emoji_packs="",
        data_dir=tmp_path,
    )


@pytest.fixture
def sticker_set() -> dict:
    """Sample getStickerSet result for a custom emoji set."""
    return {
        "name": "NeonIcons",
        "title": "Neon Icons",
        "sticker_type": "custom_emoji",
        "stickers": [
            {
                "file_id": "file-1",
                "file_unique_id": "uniq-1",
                "type": "custom_emoji",
                "width": 100,
                "height": 100,
                "emoji": "🔥",
                "custom_emoji_id": "5368324170671202286",
                "thumbnail": {
                    "file_id": "thumb-1",
                    "file_unique_id": "tu-1",
                    "width": 100,
                    "height": 100,
                },
            },
            {
                "file_id": "file-2",
                "file_unique_id": "uniq-2",
                "type": "custom_emoji",
                "width": 100,
                "height": 100,
                "emoji": "🐱",
                "custom_emoji_id": "5368324170671202287",
                "thumbnail": {
                    "file_id": "thumb-2",
                    "file_unique_id": "tu-2",
                    "width": 100,
                    "height": 100,
                },
            },
            {
                "file_id": "file-3",
                "file_unique_id": "uniq-3",
                "type": "regular",
                "width": 512,
                "height": 512,
            },
        ],
    }
