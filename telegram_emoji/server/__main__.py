"""CLI entry point for the telegram_emoji MCP server.

Usage:
    python -m telegram_emoji.server                    # Serve over stdio
    python -m telegram_emoji.server --data-dir ./data  # Use another cache directory
    python -m telegram_emoji.server --debug            # Show debug info
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from telegram_emoji.config.settings import load_settings
from telegram_emoji.preview.sprite import SpriteComposer
from telegram_emoji.server.app import build_server
from telegram_emoji.server.tools import EmojiTools
from telegram_emoji.store.pack_store import PackStore
from telegram_emoji.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Telegram custom emoji MCP server (stdio)",
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

    # A corrupt store is fatal: there is no defined recovery
    store = PackStore(settings.cache_file)
    composer = SpriteComposer(settings.previews_dir)
    server = build_server(EmojiTools(settings, store, composer))

    logger.info(f"{server.name} MCP server running (cache: {settings.cache_file})")
    try:
        server.run(transport="stdio")
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise


if __name__ == "__main__":
    main()
