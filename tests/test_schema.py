# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""Tests for schema types and serialization roundtrips."""

import json

import pytest

from imgpal.schema import SCHEMA_VERSION, ColorCluster, Palette, PaletteType


class TestPaletteType:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("qual", PaletteType.QUALITATIVE),
            ("Qualitative", PaletteType.QUALITATIVE),
            ("SEQ", PaletteType.SEQUENTIAL),
            ("sequential", PaletteType.SEQUENTIAL),
            (" div ", PaletteType.DIVERGENT),
            (PaletteType.DIVERGENT, PaletteType.DIVERGENT),
        ],
    )
    def test_parse(self, value, expected):
        assert PaletteType.parse(value) is expected

    @pytest.mark.parametrize("value", ["rainbow", "", 3, None])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError, match="Palette type"):
            PaletteType.parse(value)


class TestColorCluster:

    def test_valid_cluster(self):
        c = ColorCluster(h=200.0, s=0.5, v=0.8, count=12)
        assert c.hsv == (200.0, 0.5, 0.8)
        assert c.count == 12

    def test_hex(self):
        assert ColorCluster(0.0, 1.0, 1.0).hex == "#FF0000"
        assert ColorCluster(240.0, 1.0, 1.0).hex == "#0000FF"
        assert ColorCluster(0.0, 0.0, 1.0).hex == "#FFFFFF"

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"h": 360.0, "s": 0.5, "v": 0.5}, "Hue"),
            ({"h": -1.0, "s": 0.5, "v": 0.5}, "Hue"),
            ({"h": 10.0, "s": 1.5, "v": 0.5}, "Saturation"),
            ({"h": 10.0, "s": 0.5, "v": -0.1}, "Value"),
            ({"h": 10.0, "s": 0.5, "v": 0.5, "count": -1}, "Count"),
        ],
    )
    def test_invalid(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            ColorCluster(**kwargs)

    def test_frozen(self):
        c = ColorCluster(10.0, 0.5, 0.5)
        with pytest.raises(AttributeError):
            c.h = 20.0

    def test_to_dict_roundtrip(self):
        c = ColorCluster(h=33.0, s=0.25, v=0.75, count=4)
        assert ColorCluster.from_dict(c.to_dict()) == c

    def test_from_dict_default_count(self):
        assert ColorCluster.from_dict({"h": 1.0, "s": 0.0, "v": 0.0}).count == 0


class TestPalette:

    def _seq(self):
        return Palette(
            colors=("#FF0000", "#FF8080", "#FFFFFF"),
            type=PaletteType.SEQUENTIAL,
            controls=("#FF0000", "#FFFFFF"),
        )

    def test_sequence_behavior(self):
        pal = self._seq()
        assert len(pal) == 3
        assert list(pal) == ["#FF0000", "#FF8080", "#FFFFFF"]
        assert pal[0] == "#FF0000"
        assert pal[-1] == "#FFFFFF"
        assert pal[1:] == ("#FF8080", "#FFFFFF")

    def test_default_version(self):
        assert self._seq().version == SCHEMA_VERSION

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="empty"):
            Palette(colors=(), type=PaletteType.QUALITATIVE)

    @pytest.mark.parametrize("bad", ["FF0000", "#FF00", "#GG0000", "red"])
    def test_bad_color_raises(self, bad):
        with pytest.raises(ValueError, match="RRGGBB"):
            Palette(colors=("#000000", bad), type=PaletteType.QUALITATIVE)

    def test_bad_control_raises(self):
        with pytest.raises(ValueError, match="RRGGBB"):
            Palette(
                colors=("#000000",),
                type=PaletteType.SEQUENTIAL,
                controls=("000000",),
            )

    def test_qualitative_rejects_controls(self):
        with pytest.raises(ValueError, match="controls"):
            Palette(
                colors=("#000000",),
                type=PaletteType.QUALITATIVE,
                controls=("#000000",),
            )

    def test_duplicates_allowed(self):
        pal = Palette(colors=("#123456",) * 3, type=PaletteType.SEQUENTIAL)
        assert len(pal) == 3

    def test_to_dict(self):
        d = self._seq().to_dict()
        assert d == {
            "version": SCHEMA_VERSION,
            "type": "seq",
            "colors": ["#FF0000", "#FF8080", "#FFFFFF"],
            "controls": ["#FF0000", "#FFFFFF"],
        }

    def test_to_dict_omits_empty_controls(self):
        pal = Palette(colors=("#000000", "#FFFFFF"), type=PaletteType.QUALITATIVE)
        assert "controls" not in pal.to_dict()

    def test_dict_roundtrip(self):
        pal = self._seq()
        assert Palette.from_dict(pal.to_dict()) == pal

    def test_json_roundtrip(self):
        pal = self._seq()
        text = pal.to_json()
        assert json.loads(text)["type"] == "seq"
        assert Palette.from_json(text) == pal

    def test_compact_json(self):
        text = self._seq().to_json(indent=None)
        assert "\n" not in text
