# telegram_emoji/utils/text.py
from __future__ import annotations

import re

# U+FE00..U+FE0F, including U+FE0F (emoji presentation selector)
_VARIATION_SELECTORS = re.compile("[\ufe00-\ufe0f]")


def strip_variation_selectors(value: str) -> str:
    """
    Remove unicode variation selectors so that the same emoji written with
    and without a presentation marker compares equal.
    """
    return _VARIATION_SELECTORS.sub("", value)


def normalize_query(value: str) -> str:
    """Trim, case-fold and strip variation selectors from a search term."""
    return strip_variation_selectors(value.strip().casefold())
