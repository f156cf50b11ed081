"""Exception hierarchy for the emoji toolkit.

Per-item failures (a single thumbnail download or decode) are recovered
where they happen; everything else surfaces as one of these exceptions and
is turned into a text result by the tool layer.
"""

from __future__ import annotations


class EmojiToolkitError(Exception):
    """Base class for all toolkit errors."""


class NotConfiguredError(EmojiToolkitError):
    """Raised when a required credential (the bot token) is missing."""


class RemoteError(EmojiToolkitError):
    """Raised when an upstream HTTP or API call fails."""

    status_code: int | None = None


class TelegramAPIError(RemoteError):
    """Raised when the Telegram Bot API returns an error."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Telegram API error {status_code}: {message}")


class FstikAPIError(RemoteError):
    """Raised when the fstik catalogue search fails."""


class RequestTimeoutError(EmojiToolkitError):
    """Raised when a network call exceeds its time bound."""


class NotFoundError(EmojiToolkitError):
    """Raised when a pack or emoji is absent from the store."""


class DecodeError(EmojiToolkitError):
    """Raised when thumbnail bytes cannot be decoded as an image."""


class PayloadTooLargeError(EmojiToolkitError):
    """Raised when an outbound message exceeds Telegram's length limit."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Message too long: {length}/{limit} chars")


class StoreCorruptedError(EmojiToolkitError):
    """Raised when the persisted pack store cannot be parsed.

    There is no recovery policy for this; it is fatal at startup.
    """
