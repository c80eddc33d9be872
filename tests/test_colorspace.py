# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""Tests for color space conversions (RGB ↔ HSV ↔ hex)."""

import numpy as np
import pytest

from imgpal.derive.colorspace import (
    rgb_to_hsv,
    hsv_to_rgb,
    encode_hex,
    encode_hex_batch,
    encode_hex_batch255,
    hsv_to_hex,
    hsv_to_hex_batch,
    is_hex_color,
    hex_to_rgb,
    hex_to_rgb255,
    hex_to_rgb255_batch,
)


class TestRGBToHSV:

    @pytest.mark.parametrize(
        "rgb, expected",
        [
            ((1.0, 0.0, 0.0), (0.0, 1.0, 1.0)),
            ((0.0, 1.0, 0.0), (120.0, 1.0, 1.0)),
            ((0.0, 0.0, 1.0), (240.0, 1.0, 1.0)),
            ((1.0, 1.0, 0.0), (60.0, 1.0, 1.0)),
            ((1.0, 0.0, 1.0), (300.0, 1.0, 1.0)),
        ],
    )
    def test_primaries(self, rgb, expected):
        np.testing.assert_allclose(rgb_to_hsv(rgb), expected, atol=1e-12)

    def test_white_is_achromatic(self):
        np.testing.assert_allclose(rgb_to_hsv([1.0, 1.0, 1.0]), [0.0, 0.0, 1.0])

    def test_black_is_zero(self):
        np.testing.assert_allclose(rgb_to_hsv([0.0, 0.0, 0.0]), [0.0, 0.0, 0.0])

    def test_value_is_channel_max(self):
        hsv = rgb_to_hsv([0.2, 0.6, 0.4])
        assert hsv[2] == pytest.approx(0.6)
        assert hsv[1] == pytest.approx((0.6 - 0.2) / 0.6)

    def test_batch_shape_preserved(self):
        rgb = np.random.default_rng(0).random((4, 5, 3))
        assert rgb_to_hsv(rgb).shape == (4, 5, 3)

    def test_ranges(self):
        hsv = rgb_to_hsv(np.random.default_rng(1).random((500, 3)))
        assert np.all((hsv[:, 0] >= 0.0) & (hsv[:, 0] < 360.0))
        assert np.all((hsv[:, 1] >= 0.0) & (hsv[:, 1] <= 1.0))
        assert np.all((hsv[:, 2] >= 0.0) & (hsv[:, 2] <= 1.0))


class TestHSVRoundtrip:

    def test_batch_roundtrip(self):
        rgb = np.random.default_rng(42).random((200, 3))
        recovered = hsv_to_rgb(rgb_to_hsv(rgb))
        np.testing.assert_allclose(recovered, rgb, atol=1e-10)

    def test_hue_wraps(self):
        np.testing.assert_allclose(
            hsv_to_rgb([360.0, 1.0, 1.0]), hsv_to_rgb([0.0, 1.0, 1.0])
        )

    def test_zero_saturation_is_gray(self):
        np.testing.assert_allclose(hsv_to_rgb([200.0, 0.0, 0.4]), [0.4, 0.4, 0.4])


class TestHexEncoding:

    def test_encode_primaries(self):
        assert encode_hex(1.0, 0.0, 0.0) == "#FF0000"
        assert encode_hex(0.0, 1.0, 0.0) == "#00FF00"
        assert encode_hex(0.0, 0.0, 1.0) == "#0000FF"

    def test_encode_rounds_half_up(self):
        assert encode_hex(0.5, 0.5, 0.5) == "#808080"

    def test_encode_clips(self):
        assert encode_hex(1.2, -0.1, 0.0) == "#FF0000"

    def test_encode_batch(self):
        rgb = np.array([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0]])
        assert encode_hex_batch(rgb) == ("#FFFFFF", "#000000")

    def test_encode_batch255(self):
        assert encode_hex_batch255([[57, 65, 200], [127.5, 0, 300]]) == (
            "#3941C8",
            "#8000FF",
        )

    def test_hsv_to_hex(self):
        assert hsv_to_hex(120.0, 1.0, 1.0) == "#00FF00"
        assert hsv_to_hex_batch([[0.0, 0.0, 1.0], [240.0, 1.0, 1.0]]) == (
            "#FFFFFF",
            "#0000FF",
        )


class TestHexParsing:

    def test_parse_with_hash(self):
        assert hex_to_rgb255("#3941C8") == (57, 65, 200)

    def test_parse_without_hash_lowercase(self):
        assert hex_to_rgb255("3941c8") == (57, 65, 200)

    def test_parse_normalized(self):
        assert hex_to_rgb("#FF0000") == (1.0, 0.0, 0.0)

    def test_parse_batch(self):
        arr = hex_to_rgb255_batch(["#000000", "#FFFFFF"])
        np.testing.assert_array_equal(arr, [[0, 0, 0], [255, 255, 255]])

    @pytest.mark.parametrize("bad", ["#FFF", "#GGGGGG", "red", "", "#1234567"])
    def test_invalid_raises(self, bad):
        with pytest.raises(ValueError, match="hex color"):
            hex_to_rgb255(bad)

    def test_is_hex_color(self):
        assert is_hex_color("#A1B2C3")
        assert not is_hex_color("#A1B2C")
        assert not is_hex_color(0xFFFFFF)

    def test_encode_parse_roundtrip_exact(self):
        for hex_val in ("#000000", "#010203", "#7F8081", "#FFFFFF"):
            assert encode_hex(*hex_to_rgb(hex_val)) == hex_val
