"""Placeholder resolution into Telegram custom emoji markup.

Two placeholder forms are rewritten, in this order:

    {5368324170671202286}   literal custom_emoji_id
    :🔥:                    lookup by fallback glyph

The two passes treat misses differently. An id placeholder is taken
as a deliberate reference and always becomes markup, with ``❓`` standing in
for the unknown glyph. A glyph placeholder that matches nothing is left
exactly as written.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from telegram_emoji.ingest.mappers import UNKNOWN_GLYPH
from telegram_emoji.store.models import CachedEmoji
from telegram_emoji.utils.text import strip_variation_selectors


ID_PLACEHOLDER = re.compile(r"\{([0-9]+)\}")
GLYPH_PLACEHOLDER = re.compile(r":([^:]+):")


class OutputFormat(str, Enum):
    """Telegram parse modes that support custom emoji."""

    HTML = "html"
    MARKDOWN_V2 = "markdownv2"


def emoji_markup(emoji_id: str, glyph: str, output_format: OutputFormat) -> str:
    """Markup for one custom emoji in the given parse mode."""
    if output_format is OutputFormat.HTML:
        return f'<tg-emoji emoji-id="{emoji_id}">{glyph}</tg-emoji>'
    return f"![{glyph}](tg://emoji?id={emoji_id})"


def resolve_id_placeholders(
    text: str, emojis: Sequence[CachedEmoji], output_format: OutputFormat
) -> str:
    """Rewrite every ``{digits}``; unknown ids get the ``❓`` glyph."""
    by_id: dict[str, CachedEmoji] = {}
    for emoji in emojis:
        by_id.setdefault(emoji.custom_emoji_id, emoji)

    def replace(match: re.Match[str]) -> str:
        emoji_id = match.group(1)
        emoji = by_id.get(emoji_id)
        glyph = emoji.emoji if emoji else UNKNOWN_GLYPH
        return emoji_markup(emoji_id, glyph, output_format)

    return ID_PLACEHOLDER.sub(replace, text)


def resolve_glyph_placeholders(
    text: str, emojis: Sequence[CachedEmoji], output_format: OutputFormat
) -> str:
    """Rewrite every ``:glyph:`` that matches a cached emoji; leave misses alone."""
    by_glyph: dict[str, CachedEmoji] = {}
    for emoji in emojis:
        by_glyph.setdefault(strip_variation_selectors(emoji.emoji), emoji)

    def replace(match: re.Match[str]) -> str:
        emoji = by_glyph.get(strip_variation_selectors(match.group(1)))
        if emoji is None:
            return match.group(0)
        return emoji_markup(emoji.custom_emoji_id, emoji.emoji, output_format)

    return GLYPH_PLACEHOLDER.sub(replace, text)


def resolve_placeholders(
    text: str,
    output_format: OutputFormat | str,
    emojis: Sequence[CachedEmoji],
) -> str:
    """Rewrite id placeholders, then glyph placeholders.

    Args:
        text: Message text containing placeholders
        output_format: "html" or "markdownv2"
        emojis: Every cached emoji, used as a read-only lookup table

    Returns:
        The rewritten text
    """
    output_format = OutputFormat(output_format)
    text = resolve_id_placeholders(text, emojis, output_format)
    return resolve_glyph_placeholders(text, emojis, output_format)
