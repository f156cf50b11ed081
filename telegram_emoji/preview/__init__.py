"""Sprite-sheet previews for emoji packs."""

from telegram_emoji.preview.sprite import (
    SpriteComposer,
    cell_label,
    cell_origin,
    cell_position,
    grid_rows,
    render_thumbnail,
)

__all__ = [
    "SpriteComposer",
    "cell_label",
    "cell_origin",
    "cell_position",
    "grid_rows",
    "render_thumbnail",
]
