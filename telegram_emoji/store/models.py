"""Pack store data model.

Packs are LATEST-STATE SNAPSHOTS: each sync overwrites the previous record
for the same pack name. Nothing is merged and nothing is ever evicted.

The field names follow the Telegram Bot API vocabulary so that the
persisted document reads like the API objects it was derived from:
- custom_emoji_id is the authoritative identity of an emoji
- emoji is the unicode fallback glyph (not unique)
- thumbnail_file_id lets a single thumbnail be re-downloaded later
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, Field

from telegram_emoji.utils.time import utcnow


class CachedEmoji(BaseModel):
    """One custom emoji inside a cached pack."""

    custom_emoji_id: str
    emoji: str
    set_name: str
    thumbnail_file_id: str | None = None


class CachedPack(BaseModel):
    """A synced custom emoji pack.

    The order of ``emojis`` is significant: it defines the sprite-sheet grid
    position and the 1-based ``#k`` addressing used by the tools.
    """

    name: str
    title: str
    emojis: list[CachedEmoji] = Field(default_factory=list)
    synced_at: datetime = Field(default_factory=utcnow)
    # Stale whenever emojis change without re-rendering
    preview_path: str | None = None

    def emoji_at(self, index: int) -> CachedEmoji | None:
        """Return the emoji at a 1-based index, or None when out of range."""
        if index < 1 or index > len(self.emojis):
            return None
        return self.emojis[index - 1]

    def find_emoji(self, custom_emoji_id: str) -> tuple[int, CachedEmoji] | None:
        """Return (1-based index, emoji) for an id, or None."""
        for position, emoji in enumerate(self.emojis, start=1):
            if emoji.custom_emoji_id == custom_emoji_id:
                return position, emoji
        return None


class StoreDocument(BaseModel):
    """The whole persisted store: pack name -> pack."""

    packs: dict[str, CachedPack] = Field(default_factory=dict)


@dataclass(frozen=True)
class PackSummary:
    """Listing entry for a cached pack."""

    name: str
    title: str
    count: int
