"""Message formatting with custom emoji placeholders."""

from telegram_emoji.formatting.placeholders import (
    OutputFormat,
    emoji_markup,
    resolve_placeholders,
)

__all__ = [
    "OutputFormat",
    "emoji_markup",
    "resolve_placeholders",
]
