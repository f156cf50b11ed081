"""Tests for telegram_emoji.preview.sprite."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from telegram_emoji.errors import DecodeError
from telegram_emoji.preview.sprite import (
    BACKGROUND,
    CELL_HEIGHT,
    FULL_SIZE,
    GRID_COLS,
    THUMB_SIZE,
    SpriteComposer,
    canvas_size,
    cell_label,
    cell_origin,
    cell_position,
    fit_contain,
    grid_rows,
    render_thumbnail,
)

RED = (255, 0, 0, 255)


# -----------------------------------------------------------------------------
# Grid math
# -----------------------------------------------------------------------------


class TestGridMath:
    """Tests for the pure layout helpers."""

    @pytest.mark.parametrize(
        "count,rows",
        [(0, 0), (1, 1), (8, 1), (9, 2), (16, 2), (17, 3)],
    )
    def test_grid_rows(self, count: int, rows: int) -> None:
        assert grid_rows(count) == rows

    def test_ninth_emoji_starts_second_row(self) -> None:
        assert cell_position(8) == (0, 1)
        assert cell_origin(8) == (0, CELL_HEIGHT)
        assert cell_origin(8) == (0, 120)

    def test_last_column(self) -> None:
        assert cell_position(7) == (7, 0)
        assert cell_origin(7) == (700, 0)

    def test_canvas_size(self) -> None:
        assert canvas_size(17) == (GRID_COLS * THUMB_SIZE, 3 * CELL_HEIGHT)

    def test_empty_pack_gets_one_row(self) -> None:
        assert canvas_size(0) == (800, 120)

    def test_cell_label_uses_one_based_index_and_id_suffix(self, make_emoji) -> None:
        emoji = make_emoji("5368324170671202286")

        assert cell_label(0, emoji) == "#1 …202286"
        assert cell_label(16, emoji) == "#17 …202286"

    def test_cell_label_short_id(self, make_emoji) -> None:
        assert cell_label(2, make_emoji("42")) == "#3 …42"


# -----------------------------------------------------------------------------
# Image helpers
# -----------------------------------------------------------------------------


class TestFitContain:
    """Tests for fit_contain."""

    def test_preserves_aspect_ratio_and_centres(self, png_bytes) -> None:
        tile = fit_contain(png_bytes(200, 100), 100)

        assert tile.size == (100, 100)
        # 200x100 scales to 100x50, centred vertically
        assert tile.getpixel((50, 10)) == (0, 0, 0, 0)
        assert tile.getpixel((50, 50)) == RED
        assert tile.getpixel((50, 90)) == (0, 0, 0, 0)

    def test_upscales_small_images(self, png_bytes) -> None:
        tile = fit_contain(png_bytes(10, 10), 100)

        assert tile.getpixel((5, 5)) == RED
        assert tile.getpixel((95, 95)) == RED

    @pytest.mark.parametrize("blob", [b"not an image", b""])
    def test_undecodable_raises(self, blob: bytes) -> None:
        with pytest.raises(DecodeError):
            fit_contain(blob, 100)


class TestRenderThumbnail:
    """Tests for render_thumbnail."""

    def test_renders_full_size_png(self, png_bytes) -> None:
        data = render_thumbnail(png_bytes(64, 32))

        with Image.open(io.BytesIO(data)) as image:
            assert image.format == "PNG"
            assert image.size == (FULL_SIZE, FULL_SIZE)

    def test_undecodable_raises(self) -> None:
        with pytest.raises(DecodeError):
            render_thumbnail(b"")


# -----------------------------------------------------------------------------
# Composer
# -----------------------------------------------------------------------------


class TestSpriteComposer:
    """Tests for SpriteComposer."""

    def test_render_places_thumbnails_in_grid(self, make_emoji, png_bytes) -> None:
        emojis = [make_emoji(str(i)) for i in range(9)]
        thumbnails = [png_bytes() for _ in emojis]

        canvas = SpriteComposer("unused").render(emojis, thumbnails)

        assert canvas.size == (800, 240)
        assert canvas.getpixel((50, 50)) == RED
        # Ninth thumbnail sits at the start of the second row
        assert canvas.getpixel((50, 120 + 50)) == RED
        # Nothing was placed in the second row's second cell
        assert canvas.getpixel((150, 120 + 50)) == BACKGROUND

    def test_bad_thumbnail_leaves_cell_blank(self, make_emoji, png_bytes) -> None:
        emojis = [make_emoji("1"), make_emoji("2"), make_emoji("3")]
        thumbnails = [b"garbage", b"", png_bytes()]

        canvas = SpriteComposer("unused").render(emojis, thumbnails)

        assert canvas.getpixel((50, 50)) == BACKGROUND
        assert canvas.getpixel((150, 50)) == BACKGROUND
        assert canvas.getpixel((250, 50)) == RED

    def test_every_cell_gets_a_label(self, make_emoji) -> None:
        emojis = [make_emoji("1"), make_emoji("2")]

        canvas = SpriteComposer("unused").render(emojis, [b"", b""])

        for index in range(2):
            x, y = cell_origin(index)
            strip = canvas.crop((x, y + THUMB_SIZE, x + THUMB_SIZE, y + CELL_HEIGHT))
            assert len(strip.getcolors(maxcolors=4096)) > 1
        # Third cell has no emoji and stays empty
        x, y = cell_origin(2)
        strip = canvas.crop((x, y + THUMB_SIZE, x + THUMB_SIZE, y + CELL_HEIGHT))
        assert strip.getcolors() == [(THUMB_SIZE * 20, BACKGROUND)]

    def test_short_thumbnail_list_is_tolerated(self, make_emoji, png_bytes) -> None:
        emojis = [make_emoji("1"), make_emoji("2")]

        canvas = SpriteComposer("unused").render(emojis, [png_bytes()])

        assert canvas.getpixel((150, 50)) == BACKGROUND

    def test_compose_writes_png(self, tmp_path, make_emoji, png_bytes) -> None:
        composer = SpriteComposer(tmp_path / "previews")
        emojis = [make_emoji(str(i)) for i in range(17)]

        path = composer.compose("NeonIcons", emojis, [png_bytes()] * 17)

        assert path == tmp_path / "previews" / "NeonIcons.png"
        with Image.open(path) as image:
            assert image.size == (800, 360)

    def test_compose_overwrites_previous_preview(
        self, tmp_path, make_emoji, png_bytes
    ) -> None:
        composer = SpriteComposer(tmp_path)
        composer.compose("NeonIcons", [make_emoji(str(i)) for i in range(9)], [])

        path = composer.compose("NeonIcons", [make_emoji("1")], [png_bytes()])

        with Image.open(path) as image:
            assert image.size == (800, 120)

    def test_compose_empty_pack(self, tmp_path) -> None:
        path = SpriteComposer(tmp_path).compose("Empty", [], [])

        with Image.open(path) as image:
            assert image.size == (800, 120)
