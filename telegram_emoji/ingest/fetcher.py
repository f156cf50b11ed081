"""Pack fetching: sticker set metadata plus thumbnail blobs.

One metadata request, then one thumbnail download per sticker, all in
flight at once. Each download is bounded on its own and a failure degrades
only that sticker's thumbnail to an empty blob.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from telegram_emoji.ingest.logger import logger
from telegram_emoji.ingest.mappers import map_sticker
from telegram_emoji.store.models import CachedEmoji

if TYPE_CHECKING:
    from telegram_emoji.ingest.client import TelegramClient


THUMBNAIL_TIMEOUT = 30.0  # seconds, per download


@dataclass
class FetchedPack:
    """A sticker set as downloaded; emojis[i] pairs with thumbnails[i]."""

    name: str
    title: str
    emojis: list[CachedEmoji] = field(default_factory=list)
    thumbnails: list[bytes] = field(default_factory=list)

    @property
    def thumbnail_coverage(self) -> int:
        return sum(1 for blob in self.thumbnails if blob)


async def _download_thumbnail(client: "TelegramClient", file_id: str | None) -> bytes:
    if not file_id:
        return b""
    return await asyncio.wait_for(client.download_file(file_id), THUMBNAIL_TIMEOUT)


async def download_thumbnails(
    client: "TelegramClient", name: str, emojis: list[CachedEmoji]
) -> list[bytes]:
    """Download every thumbnail concurrently, folding failures to b""."""
    results: list[Any] = await asyncio.gather(
        *(_download_thumbnail(client, e.thumbnail_file_id) for e in emojis),
        return_exceptions=True,
    )

    thumbnails: list[bytes] = []
    for index, result in enumerate(results):
        if isinstance(result, BaseException):
            reason = "timeout" if isinstance(result, TimeoutError) else str(result)
            logger.thumbnail_failed(name, index, reason or type(result).__name__)
            thumbnails.append(b"")
        else:
            thumbnails.append(result)
    return thumbnails


async def fetch_pack(client: "TelegramClient", name: str) -> FetchedPack:
    """Fetch a custom emoji set and its thumbnails.

    Raises:
        NotConfiguredError: No bot token configured
        RemoteError: The getStickerSet call failed
        RequestTimeoutError: The getStickerSet call timed out
    """
    sticker_set = await client.get_sticker_set(name)
    emojis = [map_sticker(s, name) for s in sticker_set.get("stickers", [])]

    thumbnails = await download_thumbnails(client, name, emojis)
    fetched = FetchedPack(
        name=name,
        title=sticker_set.get("title", name),
        emojis=emojis,
        thumbnails=thumbnails,
    )
    logger.thumbnails_fetched(name, fetched.thumbnail_coverage, len(emojis))
    return fetched
