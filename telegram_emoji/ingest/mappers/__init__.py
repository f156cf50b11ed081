"""Mappers for converting Telegram API JSON to cache records."""

from telegram_emoji.ingest.mappers.sticker import UNKNOWN_GLYPH, map_sticker
from telegram_emoji.ingest.mappers.sticker_set import map_sticker_set_line

__all__ = [
    "UNKNOWN_GLYPH",
    "map_sticker",
    "map_sticker_set_line",
]
