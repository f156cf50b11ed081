"""Unit tests for telegram_emoji.ingest.run and telegram_emoji.ingest.sync."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from telegram_emoji.errors import TelegramAPIError
from telegram_emoji.ingest.fetcher import FetchedPack
from telegram_emoji.ingest.run import SyncOrchestrator, run_sync
from telegram_emoji.ingest.sync import SyncResult, sync_pack
from telegram_emoji.preview.sprite import SpriteComposer


def _patch_client(mock_client_cls: MagicMock) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client_cls.return_value.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return mock_client


# ---------------------------------------------------------------------------
# TestSyncResult
# ---------------------------------------------------------------------------


class TestSyncResult:
    """Tests for SyncResult.line."""

    def test_success_line(self, make_pack):
        result = SyncResult(name="NeonIcons", pack=make_pack())

        assert result.ok
        assert result.line() == "✓ NeonIcons (Neon Icons): 2 emojis synced with preview"

    def test_failure_line(self):
        result = SyncResult(name="Broken", error="Telegram API error 400: nope")

        assert not result.ok
        assert result.line() == "✗ Broken: Telegram API error 400: nope"


# ---------------------------------------------------------------------------
# TestSyncPack
# ---------------------------------------------------------------------------


class TestSyncPack:
    """Tests for sync_pack."""

    @pytest.mark.asyncio
    @patch("telegram_emoji.ingest.sync.fetch_pack", new_callable=AsyncMock)
    async def test_stores_pack_with_preview(
        self, mock_fetch, store, make_pack, png_bytes, tmp_path
    ):
        emojis = make_pack().emojis
        mock_fetch.return_value = FetchedPack(
            name="NeonIcons",
            title="Neon Icons",
            emojis=emojis,
            thumbnails=[png_bytes(), b""],
        )
        composer = SpriteComposer(tmp_path / "previews")

        pack = await sync_pack(AsyncMock(), store, composer, "NeonIcons")

        assert pack.emojis == emojis
        assert pack.preview_path == str(tmp_path / "previews" / "NeonIcons.png")
        assert (tmp_path / "previews" / "NeonIcons.png").exists()
        assert store.get("NeonIcons") == pack

    @pytest.mark.asyncio
    @patch("telegram_emoji.ingest.sync.fetch_pack", new_callable=AsyncMock)
    async def test_fetch_error_leaves_store_untouched(
        self, mock_fetch, store, make_pack, tmp_path
    ):
        previous = make_pack()
        store.put(previous)
        mock_fetch.side_effect = TelegramAPIError(400, "STICKERSET_INVALID")
        composer = MagicMock(spec=SpriteComposer)

        with pytest.raises(TelegramAPIError):
            await sync_pack(AsyncMock(), store, composer, "NeonIcons")

        composer.compose.assert_not_called()
        assert store.get("NeonIcons") == previous

    @pytest.mark.asyncio
    @patch("telegram_emoji.ingest.sync.fetch_pack", new_callable=AsyncMock)
    async def test_preview_write_failure_propagates(self, mock_fetch, store, make_pack):
        mock_fetch.return_value = FetchedPack(
            name="NeonIcons", title="Neon Icons", emojis=make_pack().emojis
        )
        composer = MagicMock(spec=SpriteComposer)
        composer.compose.side_effect = PermissionError("read-only")

        with pytest.raises(OSError):
            await sync_pack(AsyncMock(), store, composer, "NeonIcons")

        assert store.get("NeonIcons") is None


# ---------------------------------------------------------------------------
# TestSyncOrchestrator
# ---------------------------------------------------------------------------


class TestSyncOrchestrator:
    """Tests for SyncOrchestrator.run."""

    @pytest.mark.asyncio
    @patch("telegram_emoji.ingest.run.sync_pack", new_callable=AsyncMock)
    @patch("telegram_emoji.ingest.run.TelegramClient")
    @patch("telegram_emoji.ingest.run.logger")
    async def test_continues_after_failure(
        self, mock_logger, mock_client_cls, mock_sync_pack, settings, store, make_pack
    ):
        mock_client = _patch_client(mock_client_cls)
        good = make_pack()

        async def fake_sync(client, store_, composer, name):
            if name == "Broken":
                raise TelegramAPIError(400, "STICKERSET_INVALID")
            return good

        mock_sync_pack.side_effect = fake_sync
        orch = SyncOrchestrator(settings, store, MagicMock(spec=SpriteComposer))

        results = await orch.run(["Broken", "NeonIcons"])

        assert [r.ok for r in results] == [False, True]
        assert "STICKERSET_INVALID" in results[0].error
        assert mock_sync_pack.await_args_list[1].args[0] is mock_client
        mock_client_cls.assert_called_once_with(token="123:test-token")
        mock_logger.summary.assert_called_once()
        summary_kwargs = mock_logger.summary.call_args.kwargs
        assert summary_kwargs["packs"] == 1
        assert summary_kwargs["failed"] == 1
        assert summary_kwargs["emojis"] == 2

    @pytest.mark.asyncio
    @patch("telegram_emoji.ingest.run.sync_pack", new_callable=AsyncMock)
    @patch("telegram_emoji.ingest.run.TelegramClient")
    @patch("telegram_emoji.ingest.run.logger")
    async def test_unexpected_error_propagates(
        self, _logger, mock_client_cls, mock_sync_pack, settings, store
    ):
        _patch_client(mock_client_cls)
        mock_sync_pack.side_effect = RuntimeError("boom")
        orch = SyncOrchestrator(settings, store, MagicMock(spec=SpriteComposer))

        with pytest.raises(RuntimeError, match="boom"):
            await orch.run(["NeonIcons"])


class TestRunSync:
    """Tests for run_sync."""

    @pytest.mark.asyncio
    @patch.object(SyncOrchestrator, "run", new_callable=AsyncMock)
    async def test_builds_store_under_data_dir(self, mock_run, settings):
        mock_run.return_value = []

        await run_sync(settings, ["NeonIcons"])

        mock_run.assert_awaited_once_with(["NeonIcons"])
