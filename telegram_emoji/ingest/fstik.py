"""fstik.app catalogue client.

fstik indexes public Telegram sticker sets. Only its search endpoint is
used, restricted to custom emoji sets; syncing itself goes through the
Bot API so that real custom_emoji_id values are cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from telegram_emoji.errors import FstikAPIError, RequestTimeoutError


BASE_URL = "https://api.fstik.app"

REQUEST_TIMEOUT = 30.0  # seconds

HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "Origin": "https://fstik.app",
    "Referer": "https://fstik.app/",
}


@dataclass
class FstikClient:
    """Async client for the fstik sticker-set search API."""

    def __post_init__(self) -> None:
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FstikClient":
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            headers=HEADERS,
            timeout=REQUEST_TIMEOUT,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search_sticker_sets(
        self, query: str, limit: int = 10, skip: int = 0
    ) -> list[dict[str, Any]]:
        """Search custom emoji sets by keyword.

        Args:
            query: Free-text search (e.g. "neon", "cat")
            limit: Max number of sets to return
            skip: Offset for paging

        Returns:
            Sticker set objects with name, title and stickers
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")

        body = {
            "query": query,
            "limit": limit,
            "skip": skip,
            "type": "",
            "user_token": None,
            "kind": "custom_emoji",
        }
        try:
            response = await self._client.post("/searchStickerSet", json=body)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"fstik search timed out after {REQUEST_TIMEOUT:.0f}s"
            ) from e
        except httpx.HTTPError as e:
            raise FstikAPIError(f"fstik request failed: {e}") from e

        if response.status_code != 200:
            raise FstikAPIError(f"fstik HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise FstikAPIError("fstik returned invalid JSON") from e
        if not isinstance(data, dict) or not data.get("ok"):
            raise FstikAPIError("fstik API error")

        try:
            sticker_sets = data["result"]["stickerSets"]
        except (KeyError, TypeError) as e:
            raise FstikAPIError("fstik response has no stickerSets") from e
        if not isinstance(sticker_sets, list) or not all(
            isinstance(s, dict) and s.get("name") for s in sticker_sets
        ):
            raise FstikAPIError("fstik returned a malformed sticker set")
        return sticker_sets
