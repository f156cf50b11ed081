"""Tool operations exposed to MCP clients.

Each operation is a single request/response call that returns a list of
content parts (plain strings and PNG images). Failures of the operation
itself are reported as text; they never escape to the transport.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from telegram_emoji.config.settings import AppSettings
from telegram_emoji.errors import (
    EmojiToolkitError,
    NotFoundError,
    PayloadTooLargeError,
    TelegramAPIError,
)
from telegram_emoji.formatting import OutputFormat, resolve_placeholders
from telegram_emoji.ingest.client import TelegramClient
from telegram_emoji.ingest.fstik import FstikClient
from telegram_emoji.ingest.mappers import map_sticker_set_line
from telegram_emoji.ingest.sync import SyncResult, sync_pack
from telegram_emoji.preview.sprite import SpriteComposer, render_thumbnail
from telegram_emoji.store.models import CachedEmoji, CachedPack
from telegram_emoji.store.pack_store import PackStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PngImage:
    """PNG bytes returned alongside text."""

    data: bytes


Content = Union[str, PngImage]


class EmojiTools:
    """The operation façade over the store, composer and remote clients.

    Built once at process start; the store it holds is the only state
    shared between calls.
    """

    def __init__(
        self,
        settings: AppSettings,
        store: PackStore,
        composer: SpriteComposer,
        telegram_factory: Callable[[], TelegramClient] | None = None,
        fstik_factory: Callable[[], FstikClient] | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.composer = composer
        self._telegram_factory = telegram_factory or (
            lambda: TelegramClient(token=settings.telegram_bot_token)
        )
        self._fstik_factory = fstik_factory or FstikClient
        # Serializes syncs; the store has a single writer
        self._sync_lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    async def search_packs(self, query: str, limit: int = 10) -> list[Content]:
        """Search the fstik catalogue for custom emoji sets."""
        try:
            async with self._fstik_factory() as fstik:
                sets = await fstik.search_sticker_sets(query, limit)
        except EmojiToolkitError as e:
            return [f"fstik search error: {e}"]

        if not sets:
            return [f'No packs found for "{query}"']
        return ["\n".join(map_sticker_set_line(s) for s in sets)]

    # -------------------------------------------------------------------------
    # Sync
    # -------------------------------------------------------------------------

    async def sync_emoji_pack(self, pack_name: str | None = None) -> list[Content]:
        """Sync one pack, or every pack in EMOJI_PACKS when none is given."""
        names = [pack_name] if pack_name else self.settings.pack_names
        if not names:
            return ["No pack name provided and EMOJI_PACKS env is empty."]

        results: list[SyncResult] = []
        async with self._sync_lock, self._telegram_factory() as client:
            for name in names:
                try:
                    pack = await sync_pack(client, self.store, self.composer, name)
                except (EmojiToolkitError, OSError) as e:
                    logger.warning(f"Sync of {name} failed: {e}")
                    results.append(SyncResult(name=name, error=str(e)))
                else:
                    results.append(SyncResult(name=name, pack=pack))

        return ["\n".join(r.line() for r in results)]

    # -------------------------------------------------------------------------
    # Browsing
    # -------------------------------------------------------------------------

    def list_packs(self) -> list[Content]:
        packs = self.store.list_packs()
        if not packs:
            return [
                "No packs synced yet. Use search_packs to find packs, "
                "then sync_emoji_pack to download."
            ]
        return ["\n".join(f"{p.name} — {p.title} ({p.count} emojis)" for p in packs)]

    def get_pack(self, pack_name: str) -> list[Content]:
        """Listing of a cached pack plus its sprite-sheet preview."""
        try:
            pack = self.store.require(pack_name)
        except NotFoundError:
            return [f'Pack "{pack_name}" not found. Run sync_emoji_pack first.']

        lines = [
            f"#{i}  {e.emoji}  id:{e.custom_emoji_id}"
            for i, e in enumerate(pack.emojis, start=1)
        ]
        content: list[Content] = [
            f"{pack.title} ({len(pack.emojis)} emojis)\n\n" + "\n".join(lines)
        ]

        preview = self._read_preview(pack)
        if preview is None:
            content.append(
                "\n⚠️ No preview image available. Re-sync pack to generate one."
            )
        else:
            content.append(PngImage(preview))
        return content

    def _read_preview(self, pack: CachedPack) -> bytes | None:
        if not pack.preview_path:
            return None
        path = Path(pack.preview_path)
        try:
            return path.read_bytes()
        except OSError as e:
            logger.warning(f"Cannot read preview {path}: {e}")
            return None

    async def get_emoji(
        self,
        pack_name: str,
        index: int | None = None,
        emoji_id: str | None = None,
    ) -> list[Content]:
        """One emoji by 1-based index (preferred) or id, with a large image."""
        try:
            pack = self.store.require(pack_name)
        except NotFoundError:
            return [f'Pack "{pack_name}" not found.']

        found: tuple[int, CachedEmoji] | None = None
        if index is not None:
            emoji = pack.emoji_at(index)
            found = (index, emoji) if emoji else None
        elif emoji_id:
            found = pack.find_emoji(emoji_id)

        if found is None:
            return [
                "Emoji not found. Use get_pack to see the sprite sheet with index numbers."
            ]

        position, emoji = found
        content: list[Content] = [
            f"#{position}  {emoji.emoji}  id: {emoji.custom_emoji_id}\n"
            f"pack: {emoji.set_name}"
        ]

        # Re-download just this thumbnail via its cached file_id
        if self.settings.telegram_bot_token and emoji.thumbnail_file_id:
            try:
                async with self._telegram_factory() as client:
                    blob = await client.download_file(emoji.thumbnail_file_id)
                content.append(PngImage(render_thumbnail(blob)))
            except EmojiToolkitError as e:
                logger.warning(f"Cannot load emoji {emoji.custom_emoji_id}: {e}")
                content.append("(Could not load preview image)")
        return content

    def search_emoji(self, query: str) -> list[Content]:
        results = self.store.search_emoji(query)
        if not results:
            return [f'No emojis found for "{query}"']
        return [
            "\n".join(
                f"{e.emoji}  id:{e.custom_emoji_id}  pack:{e.set_name}"
                for e in results
            )
        ]

    # -------------------------------------------------------------------------
    # Messaging
    # -------------------------------------------------------------------------

    def format_message(self, text: str, format: str = "html") -> list[Content]:
        """Rewrite {id} and :glyph: placeholders into custom emoji markup."""
        try:
            output_format = OutputFormat(format)
        except ValueError:
            return [f'Unknown format "{format}". Use "html" or "markdownv2".']
        return [resolve_placeholders(text, output_format, self.store.all_emojis())]

    async def send_message(self, chat_id: str, text: str) -> list[Content]:
        """Send an HTML message through the bot."""
        if not self.settings.telegram_bot_token:
            return ["TELEGRAM_BOT_TOKEN not set"]

        try:
            async with self._telegram_factory() as client:
                message = await client.send_message(chat_id, text)
        except PayloadTooLargeError as e:
            return [str(e)]
        except TelegramAPIError as e:
            return [f"Telegram error: {e.message}"]
        except EmojiToolkitError as e:
            return [f"Telegram error: {e}"]
        return [f"✓ Message sent (id: {message['message_id']})"]
