"""Sprite-sheet rendering for emoji packs.

Lays out a pack's thumbnails in a fixed 8-column grid. Each cell is a
square thumbnail area with a label strip underneath:

    +--------+--------+--   --+--------+
    | thumb  | thumb  |  ...  | thumb  |   THUMB_SIZE
    | #1 …   | #2 …   |       | #8 …   |   LABEL_HEIGHT
    +--------+--------+--   --+--------+
    | #9 …   | ...

Cell positions and labels depend only on emoji order, so the same pack
always renders to the same layout.
"""

from __future__ import annotations

import io
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from telegram_emoji.errors import DecodeError
from telegram_emoji.store.models import CachedEmoji

logger = logging.getLogger(__name__)


GRID_COLS = 8
THUMB_SIZE = 100
LABEL_HEIGHT = 20
CELL_WIDTH = THUMB_SIZE
CELL_HEIGHT = THUMB_SIZE + LABEL_HEIGHT

FULL_SIZE = 256

LABEL_FONT_SIZE = 11
LABEL_COLOR = (102, 102, 102, 255)
LABEL_OFFSET = (2, 3)
BACKGROUND = (255, 255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)

SHORT_ID_LENGTH = 6

# Tried in order; Pillow's bundled font is the last resort
MONOSPACE_FONTS = (
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
    "Menlo.ttc",
    "consola.ttf",
    "cour.ttf",
)


# -----------------------------------------------------------------------------
# Grid math
# -----------------------------------------------------------------------------


def grid_rows(count: int) -> int:
    """Number of grid rows needed for ``count`` emojis."""
    return math.ceil(count / GRID_COLS)


def cell_position(index: int) -> tuple[int, int]:
    """(column, row) of the 0-based emoji index."""
    return index % GRID_COLS, index // GRID_COLS


def cell_origin(index: int) -> tuple[int, int]:
    """Top-left pixel of the thumbnail area for the 0-based emoji index."""
    col, row = cell_position(index)
    return col * CELL_WIDTH, row * CELL_HEIGHT


def canvas_size(count: int) -> tuple[int, int]:
    """Canvas (width, height) for ``count`` emojis.

    An empty pack still gets one blank row so a valid image is written.
    """
    rows = max(grid_rows(count), 1)
    return GRID_COLS * CELL_WIDTH, rows * CELL_HEIGHT


def cell_label(index: int, emoji: CachedEmoji) -> str:
    """Label text for the 0-based emoji index, e.g. ``#3 …202286``.

    The fallback glyph is not drawn.
    """
    return f"#{index + 1} …{emoji.custom_emoji_id[-SHORT_ID_LENGTH:]}"


# -----------------------------------------------------------------------------
# Image helpers
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def _label_font() -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for name in MONOSPACE_FONTS:
        try:
            return ImageFont.truetype(name, LABEL_FONT_SIZE)
        except OSError:
            continue
    logger.debug("No monospace TrueType font found, using Pillow default")
    return ImageFont.load_default(LABEL_FONT_SIZE)


def fit_contain(blob: bytes, size: int) -> Image.Image:
    """Decode ``blob`` and fit it inside a ``size`` square.

    Aspect ratio is preserved, the image is centred and the remaining area
    is fully transparent. Nothing is ever cropped.

    Raises:
        DecodeError: The bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(blob)) as source:
            source.load()
            image = source.convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as e:
        raise DecodeError(f"Cannot decode thumbnail: {e}") from e

    scale = min(size / image.width, size / image.height)
    width = max(1, round(image.width * scale))
    height = max(1, round(image.height * scale))
    image = image.resize((width, height), Image.Resampling.LANCZOS)

    tile = Image.new("RGBA", (size, size), TRANSPARENT)
    tile.paste(image, ((size - width) // 2, (size - height) // 2))
    return tile


def render_thumbnail(blob: bytes, size: int = FULL_SIZE) -> bytes:
    """Render a single thumbnail as a ``size`` x ``size`` PNG."""
    buffer = io.BytesIO()
    fit_contain(blob, size).save(buffer, format="PNG")
    return buffer.getvalue()


# -----------------------------------------------------------------------------
# Composer
# -----------------------------------------------------------------------------


class SpriteComposer:
    """Renders one PNG sprite sheet per pack into ``previews_dir``."""

    def __init__(self, previews_dir: str | Path) -> None:
        self.previews_dir = Path(previews_dir)

    def preview_path(self, pack_name: str) -> Path:
        return self.previews_dir / f"{pack_name}.png"

    def render(
        self, emojis: Sequence[CachedEmoji], thumbnails: Sequence[bytes]
    ) -> Image.Image:
        """Compose the sprite sheet in memory.

        A missing, empty or undecodable thumbnail leaves its cell blank;
        every cell still gets its label.
        """
        canvas = Image.new("RGBA", canvas_size(len(emojis)), BACKGROUND)
        draw = ImageDraw.Draw(canvas)
        font = _label_font()

        for index, emoji in enumerate(emojis):
            x, y = cell_origin(index)

            blob = thumbnails[index] if index < len(thumbnails) else b""
            if blob:
                try:
                    canvas.alpha_composite(fit_contain(blob, THUMB_SIZE), dest=(x, y))
                except DecodeError as e:
                    logger.warning(
                        f"Skipping thumbnail #{index + 1} ({emoji.custom_emoji_id}): {e}"
                    )

            draw.text(
                (x + LABEL_OFFSET[0], y + THUMB_SIZE + LABEL_OFFSET[1]),
                cell_label(index, emoji),
                fill=LABEL_COLOR,
                font=font,
            )

        return canvas

    def compose(
        self,
        pack_name: str,
        emojis: Sequence[CachedEmoji],
        thumbnails: Sequence[bytes],
    ) -> Path:
        """Render and write the sprite sheet, replacing any previous one.

        Returns:
            Path of the written PNG
        """
        self.previews_dir.mkdir(parents=True, exist_ok=True)
        out_path = self.preview_path(pack_name)
        self.render(emojis, thumbnails).save(out_path, format="PNG")
        logger.debug(f"Wrote preview for {pack_name} to {out_path}")
        return out_path
