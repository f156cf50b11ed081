"""Telegram Bot API client.

This module provides an async HTTP client for the Telegram Bot API with:
- A fixed per-request timeout
- Automatic rate limit handling (429 responses with retry_after)
- Translation of HTTP, API and timeout failures into toolkit errors
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from telegram_emoji.errors import (
    NotConfiguredError,
    PayloadTooLargeError,
    RemoteError,
    RequestTimeoutError,
    TelegramAPIError,
)
from telegram_emoji.ingest.logger import logger


BASE_URL = "https://api.telegram.org"

REQUEST_TIMEOUT = 30.0  # seconds
MAX_RATE_LIMIT_RETRIES = 5
DEFAULT_RETRY_AFTER = 1.0  # seconds

MESSAGE_LIMIT = 4096


def _error_description(response: httpx.Response) -> str:
    """Extract Telegram's description from an error response."""
    try:
        return response.json().get("description") or response.text
    except Exception:
        return response.text or f"HTTP {response.status_code}"


@dataclass
class TelegramClient:
    """Async Telegram Bot API client.

    Usage:
        async with TelegramClient(token=settings.telegram_bot_token) as client:
            sticker_set = await client.get_sticker_set("NeonIcons")
    """

    token: str | None

    def __post_init__(self) -> None:
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TelegramClient":
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=REQUEST_TIMEOUT,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_token(self) -> str:
        if not self.token:
            raise NotConfiguredError(
                "TELEGRAM_BOT_TOKEN not set; it is required to talk to the Bot API"
            )
        return self.token

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Issue one HTTP request, retrying only on rate limits."""
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")

        rate_limit_retries = 0
        while True:
            try:
                response = await self._client.request(
                    method, path, params=params, json=json
                )
            except httpx.TimeoutException as e:
                raise RequestTimeoutError(
                    f"Telegram request timed out after {REQUEST_TIMEOUT:.0f}s"
                ) from e
            except httpx.HTTPError as e:
                raise RemoteError(f"Telegram request failed: {e}") from e

            if response.status_code != 429:
                return response

            rate_limit_retries += 1
            if rate_limit_retries > MAX_RATE_LIMIT_RETRIES:
                raise TelegramAPIError(429, "Max rate limit retries exceeded")
            retry_after = DEFAULT_RETRY_AFTER
            try:
                retry_after = float(
                    response.json()["parameters"]["retry_after"]
                )
            except Exception:
                pass
            logger.rate_limit(retry_after)
            await asyncio.sleep(retry_after)

    async def _call(
        self,
        api_method: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Call a Bot API method and return its ``result`` payload."""
        token = self._require_token()
        http_method = "POST" if json is not None else "GET"
        response = await self._send(
            http_method, f"/bot{token}/{api_method}", params=params, json=json
        )

        if response.status_code != 200:
            raise TelegramAPIError(response.status_code, _error_description(response))

        try:
            data = response.json()
        except ValueError as e:
            raise TelegramAPIError(200, f"Invalid JSON from {api_method}") from e
        if not data.get("ok"):
            raise TelegramAPIError(
                data.get("error_code", 200), data.get("description", "unknown error")
            )
        return data["result"]

    # -------------------------------------------------------------------------
    # Sticker endpoints
    # -------------------------------------------------------------------------

    async def get_sticker_set(self, name: str) -> dict[str, Any]:
        """Fetch a sticker set (including custom emoji sets) by name."""
        return await self._call("getStickerSet", params={"name": name})

    # -------------------------------------------------------------------------
    # File endpoints
    # -------------------------------------------------------------------------

    async def get_file_path(self, file_id: str) -> str:
        """Resolve a file_id to its download path on the file server."""
        result = await self._call("getFile", params={"file_id": file_id})
        return result["file_path"]

    async def download_file(self, file_id: str) -> bytes:
        """Download the raw bytes of a file by file_id."""
        token = self._require_token()
        file_path = await self.get_file_path(file_id)
        response = await self._send("GET", f"/file/bot{token}/{file_path}")
        if response.status_code != 200:
            raise TelegramAPIError(response.status_code, "Download failed")
        return response.content

    # -------------------------------------------------------------------------
    # Message endpoints
    # -------------------------------------------------------------------------

    async def send_message(
        self, chat_id: str, text: str, parse_mode: str = "HTML"
    ) -> dict[str, Any]:
        """Send a text message and return the sent Message object.

        Texts over the Bot API limit are rejected before any request is made.
        """
        if len(text) > MESSAGE_LIMIT:
            raise PayloadTooLargeError(len(text), MESSAGE_LIMIT)
        return await self._call(
            "sendMessage",
            json={"chat_id": chat_id, "text": text, "parse_mode": parse_mode},
        )
