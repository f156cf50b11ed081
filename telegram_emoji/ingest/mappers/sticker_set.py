"""Sticker set JSON to summary line mapper."""

from __future__ import annotations

from typing import Any


def map_sticker_set_line(data: dict[str, Any]) -> str:
    """Render a sticker set object as ``<name> — <title> (<n> emojis)``.

    Works for both Bot API StickerSet objects and fstik search results.
    """
    count = len(data.get("stickers") or [])
    return f"{data['name']} — {data.get('title', data['name'])} ({count} emojis)"
