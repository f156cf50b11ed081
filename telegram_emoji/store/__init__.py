"""Persistent cache of synced emoji packs."""

from telegram_emoji.store.models import (
    CachedEmoji,
    CachedPack,
    PackSummary,
    StoreDocument,
)
from telegram_emoji.store.pack_store import PackStore

__all__ = [
    "CachedEmoji",
    "CachedPack",
    "PackStore",
    "PackSummary",
    "StoreDocument",
]
