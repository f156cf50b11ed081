"""Rich-based logging utilities for the emoji pack sync pipeline.

Provides console output for pack syncs and color-coded messages for
rate limits and degraded thumbnail downloads.
"""

from __future__ import annotations

from typing import Any

from telegram_emoji.utils.pipeline_logger import BasePipelineLogger


class SyncLogger(BasePipelineLogger):
    """Logger for emoji pack sync operations with rich output.

    Extends BasePipelineLogger with sync-specific methods for
    rate limiting, thumbnail downloads and the final summary.
    """

    def __init__(self) -> None:
        super().__init__(__name__)

    # -------------------------------------------------------------------------
    # Sync-specific: Rate Limiting
    # -------------------------------------------------------------------------

    def rate_limit(self, retry_after: float) -> None:
        """Log a rate limit warning with retry time."""
        self._logger.warning(f"Rate limited. Waiting {retry_after:.1f}s...")

    # -------------------------------------------------------------------------
    # Sync-specific: Thumbnails
    # -------------------------------------------------------------------------

    def thumbnail_failed(self, pack_name: str, index: int, reason: str) -> None:
        """Log a thumbnail that degraded to an empty blob."""
        self._logger.warning(
            f"Thumbnail #{index + 1} of {pack_name} unavailable ({reason})"
        )

    def thumbnails_fetched(self, pack_name: str, fetched: int, total: int) -> None:
        """Log thumbnail coverage for a pack."""
        self._logger.info(f"{pack_name}: {fetched}/{total} thumbnails downloaded")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def summary(
        self,
        packs: int = 0,
        failed: int = 0,
        emojis: int = 0,
        elapsed: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Print final sync summary."""
        self.print_summary(
            "Sync",
            elapsed=elapsed,
            stats={
                "Packs synced": packs,
                "Packs failed": failed,
                "Emojis cached": emojis,
            },
            style="cyan" if not failed else "yellow",
        )


# Global logger instance
logger = SyncLogger()
