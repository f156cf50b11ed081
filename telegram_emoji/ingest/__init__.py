"""Emoji pack ingest.

This package downloads custom emoji sets from the Telegram Bot API,
renders their previews and writes them into the pack store.

Usage:
    python -m telegram_emoji.ingest                 # Sync packs from EMOJI_PACKS
    python -m telegram_emoji.ingest NeonIcons Cats  # Sync specific packs
"""
