"""File-backed pack store.

The entire store is one JSON document. It is loaded once when the store is
constructed and rewritten in full after every mutation, using a temp file
and an atomic rename so a crash never leaves a half-written document.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path

from pydantic import ValidationError

from telegram_emoji.errors import NotFoundError, StoreCorruptedError
from telegram_emoji.store.models import (
    CachedEmoji,
    CachedPack,
    PackSummary,
    StoreDocument,
)
from telegram_emoji.utils.text import normalize_query, strip_variation_selectors

logger = logging.getLogger(__name__)


class PackStore:
    """Durable mapping from pack name to CachedPack.

    Construct one instance at process start and pass it to whatever needs
    it; there is no module-level store.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._document = self._load()

    def _load(self) -> StoreDocument:
        """Read the backing document; a missing file is an empty store."""
        if not self.path.exists():
            return StoreDocument()
        try:
            return StoreDocument.model_validate_json(
                self.path.read_text(encoding="utf-8")
            )
        except (ValidationError, ValueError) as e:
            raise StoreCorruptedError(
                f"Cannot parse pack store {self.path}: {e}"
            ) from e

    def save(self) -> None:
        """Persist the whole store synchronously."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(
            self._document.model_dump(mode="json", exclude_none=True),
            ensure_ascii=False,
            indent=2,
        )
        temp_path = self.path.with_name(
            f".{self.path.name}.{os.getpid()}.{time.time_ns()}.tmp"
        )
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            temp_path.replace(self.path)
        finally:
            temp_path.unlink(missing_ok=True)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def put(self, pack: CachedPack) -> None:
        """Replace any record under pack.name and persist the store.

        A failed write rolls the in-memory record back to what is on disk.
        """
        previous = self._document.packs.get(pack.name)
        self._document.packs[pack.name] = pack
        try:
            self.save()
        except OSError:
            if previous is None:
                del self._document.packs[pack.name]
            else:
                self._document.packs[pack.name] = previous
            raise
        logger.debug(f"Stored pack {pack.name} ({len(pack.emojis)} emojis)")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, name: str) -> CachedPack | None:
        """Point lookup by pack name."""
        return self._document.packs.get(name)

    def require(self, name: str) -> CachedPack:
        """Like get, but a missing pack raises NotFoundError."""
        pack = self.get(name)
        if pack is None:
            raise NotFoundError(f"Pack {name!r} is not in the store")
        return pack

    def list_packs(self) -> list[PackSummary]:
        """One summary per pack, in insertion order."""
        return [
            PackSummary(name=p.name, title=p.title, count=len(p.emojis))
            for p in self._document.packs.values()
        ]

    def all_emojis(self) -> list[CachedEmoji]:
        """Every cached emoji, pack order then in-pack order."""
        return [e for pack in self._document.packs.values() for e in pack.emojis]

    def search_emoji(self, query: str) -> list[CachedEmoji]:
        """Find emojis whose fallback glyph or id contains the query.

        Variation selectors are ignored on both sides, so "🔥" and "🔥\\ufe0f"
        behave identically. A blank query matches nothing.
        """
        if not query or not query.strip():
            return []
        needle = normalize_query(query)
        if not needle:
            return []

        return [
            emoji
            for emoji in self.all_emojis()
            if needle in strip_variation_selectors(emoji.emoji.casefold())
            or needle in emoji.custom_emoji_id.casefold()
        ]
