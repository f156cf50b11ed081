"""Command-line orchestration for pack syncs.

Syncs each requested pack in turn with rich per-pack output and a final
summary panel. A failing pack is reported and the run moves on.
"""

from __future__ import annotations

import time

from telegram_emoji.config.settings import AppSettings
from telegram_emoji.errors import EmojiToolkitError
from telegram_emoji.ingest.client import TelegramClient
from telegram_emoji.ingest.logger import logger
from telegram_emoji.ingest.sync import SyncResult, sync_pack
from telegram_emoji.preview.sprite import SpriteComposer
from telegram_emoji.store.pack_store import PackStore


class SyncOrchestrator:
    """Orchestrates syncing a list of packs into one store."""

    def __init__(
        self, settings: AppSettings, store: PackStore, composer: SpriteComposer
    ) -> None:
        self.settings = settings
        self.store = store
        self.composer = composer
        self.results: list[SyncResult] = []

    async def run(self, names: list[str]) -> list[SyncResult]:
        """Sync every name and print a summary."""
        start_time = time.time()

        async with TelegramClient(token=self.settings.telegram_bot_token) as client:
            for name in names:
                with logger.block(name) as block:
                    block.progress("fetching sticker set...")
                    try:
                        pack = await sync_pack(client, self.store, self.composer, name)
                    except (EmojiToolkitError, OSError) as e:
                        result = SyncResult(name=name, error=str(e))
                        block.result(str(e), success=False)
                    else:
                        result = SyncResult(name=name, pack=pack)
                        block.field("title", pack.title)
                        block.field("preview", pack.preview_path, color="cyan")
                        block.result(f"{len(pack.emojis)} emojis synced")
                self.results.append(result)

        self._log_summary(time.time() - start_time)
        return self.results

    def _log_summary(self, elapsed: float) -> None:
        synced = [r for r in self.results if r.ok]
        logger.summary(
            packs=len(synced),
            failed=len(self.results) - len(synced),
            emojis=sum(len(r.pack.emojis) for r in synced if r.pack),
            elapsed=elapsed,
        )


async def run_sync(settings: AppSettings, names: list[str]) -> list[SyncResult]:
    """Entry point for running a sync from the command line."""
    store = PackStore(settings.cache_file)
    composer = SpriteComposer(settings.previews_dir)
    orchestrator = SyncOrchestrator(settings, store, composer)
    return await orchestrator.run(names)
