"""CLI entry point for telegram_emoji.ingest.

Usage:
    python -m telegram_emoji.ingest                   # Sync packs from EMOJI_PACKS
    python -m telegram_emoji.ingest NeonIcons         # Sync a specific pack
    python -m telegram_emoji.ingest --data-dir ./data # Use another cache directory
    python -m telegram_emoji.ingest --debug           # Show debug info
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from telegram_emoji.config.settings import load_settings
from telegram_emoji.ingest.logger import logger
from telegram_emoji.ingest.run import run_sync
from telegram_emoji.utils.logging import setup_logging


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sync Telegram custom emoji packs into the local cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m telegram_emoji.ingest
      Sync every pack listed in EMOJI_PACKS

  python -m telegram_emoji.ingest NeonIcons AnimatedCats
      Sync only the named packs

  python -m telegram_emoji.ingest --debug
      Enable debug logging including third-party libraries
        """,
    )

    parser.add_argument(
        "packs",
        nargs="*",
        help="Sticker set names to sync (default: EMOJI_PACKS)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory for the pack cache and previews (default: EMOJI_DATA_DIR)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with third-party library logs",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Optional file to write logs to",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if (args.debug or args.verbose) else logging.INFO,
        log_file=args.log_file,
        debug_third_party=args.debug,
    )

    overrides = {"data_dir": args.data_dir} if args.data_dir else {}
    settings = load_settings(**overrides)

    names = args.packs or settings.pack_names
    if not names:
        logger.error("No pack names given and EMOJI_PACKS is empty.")
        sys.exit(2)

    try:
        results = asyncio.run(run_sync(settings, names))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise

    if not all(r.ok for r in results):
        sys.exit(1)
    logger.success("Sync complete!")


if __name__ == "__main__":
    main()
