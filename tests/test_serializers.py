# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""Tests for the runtime serializers (block, json, css, gpl)."""

import json

import numpy as np
import pytest

from imgpal import derive_palette
from imgpal.runtime import (
    BlockFormat,
    SerializerFormat,
    to_css,
    to_gpl,
    to_json,
    to_palette_block,
)
from imgpal.schema import Palette, PaletteType


def _two_tone_image(rgb1, rgb2, height=20, width=40):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, : width // 2] = rgb1
    img[:, width // 2 :] = rgb2
    return img


@pytest.fixture
def div_palette():
    return Palette(
        colors=("#FF0000", "#FF8080", "#FFFFFF", "#8080FF", "#0000FF"),
        type=PaletteType.DIVERGENT,
        controls=("#FF0000", "#FFFFFF", "#0000FF"),
    )


@pytest.fixture
def qual_palette():
    return Palette(
        colors=("#E41A1C", "#377EB8", "#4DAF4A"),
        type=PaletteType.QUALITATIVE,
    )


# ---------------------------------------------------------------------------
# to_palette_block: XML
# ---------------------------------------------------------------------------

class TestBlockXML:

    def test_header(self, qual_palette):
        block = to_palette_block(qual_palette)
        first = block.splitlines()[0]
        assert first == '<palette version="1.0" type="qual" size="3">'
        assert block.endswith("</palette>")

    def test_colors_in_order(self, qual_palette):
        lines = to_palette_block(qual_palette).splitlines()
        assert lines[1] == '  <color index="1" hex="#E41A1C"/>'
        assert lines[3] == '  <color index="3" hex="#4DAF4A"/>'

    def test_controls_opt_in(self, div_palette):
        assert "<controls>" not in to_palette_block(div_palette)
        block = to_palette_block(div_palette, include_controls=True)
        assert "<controls>" in block
        assert block.count("<control hex=") == 3

    def test_custom_tag(self, qual_palette):
        block = to_palette_block(qual_palette, tag_name="swatches")
        assert block.startswith("<swatches ")
        assert block.endswith("</swatches>")


# ---------------------------------------------------------------------------
# to_palette_block: JSON / Markdown
# ---------------------------------------------------------------------------

class TestBlockJSON:

    def test_wrapped(self, qual_palette):
        data = json.loads(to_palette_block(qual_palette, format=BlockFormat.JSON))
        assert list(data) == ["palette"]
        assert data["palette"]["colors"] == list(qual_palette)

    def test_controls_dropped_by_default(self, div_palette):
        data = json.loads(to_palette_block(div_palette, format=BlockFormat.JSON))
        assert "controls" not in data["palette"]

    def test_controls_included(self, div_palette):
        block = to_palette_block(
            div_palette, format=BlockFormat.JSON, include_controls=True
        )
        assert json.loads(block)["palette"]["controls"] == list(div_palette.controls)


class TestBlockMarkdown:

    def test_table(self, div_palette):
        md = to_palette_block(div_palette, format=BlockFormat.MARKDOWN)
        assert md.startswith("**Palette** (divergent, 5 colors)")
        assert "| # | Hex |" in md
        assert "| 3 | `#FFFFFF` |" in md
        assert "Controls" not in md

    def test_controls_line(self, div_palette):
        md = to_palette_block(
            div_palette, format=BlockFormat.MARKDOWN, include_controls=True
        )
        assert md.splitlines()[-1].startswith("Controls: `#FF0000`")


# ---------------------------------------------------------------------------
# to_json
# ---------------------------------------------------------------------------

class TestToJSON:

    def test_compact(self, div_palette):
        text = to_json(div_palette)
        assert "\n" not in text
        assert ", " not in text
        assert Palette.from_json(text) == div_palette

    def test_pretty(self, div_palette):
        text = to_json(div_palette, format=SerializerFormat.JSON_PRETTY)
        assert "\n" in text
        assert json.loads(text) == div_palette.to_dict()


# ---------------------------------------------------------------------------
# Swatch files
# ---------------------------------------------------------------------------

class TestCSS:

    def test_custom_properties(self, qual_palette):
        css = to_css(qual_palette)
        assert css.splitlines() == [
            ":root {",
            "  --palette-1: #E41A1C;",
            "  --palette-2: #377EB8;",
            "  --palette-3: #4DAF4A;",
            "}",
        ]

    def test_prefix_and_selector(self, qual_palette):
        css = to_css(qual_palette, prefix="brand", selector=".theme")
        assert css.startswith(".theme {")
        assert "--brand-2: #377EB8;" in css

    def test_empty_prefix_raises(self, qual_palette):
        with pytest.raises(ValueError, match="prefix"):
            to_css(qual_palette, prefix="")


class TestGPL:

    def test_format(self, div_palette):
        gpl = to_gpl(div_palette, name="sunset")
        lines = gpl.splitlines()
        assert lines[:4] == ["GIMP Palette", "Name: sunset", "Columns: 5", "#"]
        assert lines[4] == "255   0   0\t#FF0000"
        assert lines[6] == "255 255 255\t#FFFFFF"
        assert len(lines) == 9
        assert gpl.endswith("\n")


# ---------------------------------------------------------------------------
# Derived palettes go through unchanged
# ---------------------------------------------------------------------------

class TestDerivedPalette:

    def test_order_preserved(self):
        pal = derive_palette(
            _two_tone_image([255, 0, 0], [0, 0, 255]), n=4, type="div", seed=0
        )
        data = json.loads(to_json(pal))
        assert data["colors"] == list(pal)
        assert data["controls"] == list(pal.controls)
        css_values = [line.split(": ")[1].rstrip(";") for line in to_css(pal).splitlines()[1:-1]]
        assert css_values == list(pal)
