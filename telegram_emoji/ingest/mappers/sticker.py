"""Sticker API JSON to cache record mapper."""

from __future__ import annotations

from typing import Any

from telegram_emoji.store.models import CachedEmoji

# Shown when Telegram omits the fallback emoji
UNKNOWN_GLYPH = "❓"


def map_sticker(data: dict[str, Any], set_name: str) -> CachedEmoji:
    """Convert a Bot API Sticker object to a CachedEmoji.

    Args:
        data: Raw sticker object from getStickerSet
        set_name: Name of the owning sticker set

    Returns:
        CachedEmoji for the sticker
    """
    # Regular stickers have no custom_emoji_id; file_unique_id is stable
    emoji_id = data.get("custom_emoji_id") or data["file_unique_id"]

    thumbnail_file_id = None
    if data.get("thumbnail"):
        thumbnail_file_id = data["thumbnail"]["file_id"]

    return CachedEmoji(
        custom_emoji_id=str(emoji_id),
        emoji=data.get("emoji") or UNKNOWN_GLYPH,
        set_name=set_name,
        thumbnail_file_id=thumbnail_file_id,
    )
