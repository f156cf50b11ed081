"""Pack sync: fetch, render the preview, then replace the store entry.

The store entry for a pack is only written after both the fetch and the
preview succeed, so a failed sync leaves the previous snapshot intact.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from telegram_emoji.ingest.fetcher import fetch_pack
from telegram_emoji.store.models import CachedPack
from telegram_emoji.utils.time import utcnow

if TYPE_CHECKING:
    from telegram_emoji.ingest.client import TelegramClient
    from telegram_emoji.preview.sprite import SpriteComposer
    from telegram_emoji.store.pack_store import PackStore


@dataclass
class SyncResult:
    """Outcome of syncing one pack name."""

    name: str
    pack: CachedPack | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.pack is not None

    def line(self) -> str:
        """One-line summary used by the tool and CLI output."""
        if self.pack is None:
            return f"✗ {self.name}: {self.error}"
        return (
            f"✓ {self.name} ({self.pack.title}): "
            f"{len(self.pack.emojis)} emojis synced with preview"
        )


async def sync_pack(
    client: "TelegramClient",
    store: "PackStore",
    composer: "SpriteComposer",
    name: str,
) -> CachedPack:
    """Sync one pack and store it, replacing any previous record.

    Raises:
        EmojiToolkitError: Fetching the sticker set failed
        OSError: The preview or the store could not be written
    """
    fetched = await fetch_pack(client, name)
    preview_path = composer.compose(name, fetched.emojis, fetched.thumbnails)

    pack = CachedPack(
        name=name,
        title=fetched.title,
        emojis=fetched.emojis,
        synced_at=utcnow(),
        preview_path=str(preview_path),
    )
    store.put(pack)
    return pack
