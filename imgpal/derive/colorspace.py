# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chain: RGB [0,1] ↔ HSV, plus hexadecimal encoding.

HSV convention used throughout imgpal:
- H: hue in degrees [0, 360), 0 for achromatic colors
- S: saturation [0, 1]
- V: value (brightness) [0, 1]

All conversions are pure NumPy and accept arrays of shape (..., 3).
"""

from __future__ import annotations

import re
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray


_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


# =============================================================================
# RGB ↔ HSV
# =============================================================================


def rgb_to_hsv(rgb: ArrayLike) -> NDArray[np.float64]:
    """
    Convert RGB values [0,1] to HSV.

    Args:
        rgb: Array of shape (..., 3) with RGB values [0, 1]

    Returns:
        Array of shape (..., 3) with (H, S, V); H in degrees [0, 360)
    """
    rgb = np.asarray(rgb, dtype=np.float64)

    r = rgb[..., 0]
    g = rgb[..., 1]
    b = rgb[..., 2]

    mx = np.max(rgb, axis=-1)
    mn = np.min(rgb, axis=-1)
    delta = mx - mn

    # Avoid division by zero for achromatic pixels; hue/saturation set to 0 below
    safe_delta = np.where(delta > 0, delta, 1.0)
    safe_mx = np.where(mx > 0, mx, 1.0)

    h = np.where(
        mx == r,
        ((g - b) / safe_delta) % 6.0,
        np.where(
            mx == g,
            (b - r) / safe_delta + 2.0,
            (r - g) / safe_delta + 4.0,
        ),
    )
    h = np.where(delta > 0, h * 60.0, 0.0) % 360.0

    s = np.where(mx > 0, delta / safe_mx, 0.0)

    return np.stack([h, s, mx], axis=-1)


def hsv_to_rgb(hsv: ArrayLike) -> NDArray[np.float64]:
    """
    Convert HSV to RGB values [0,1].

    Inverse of rgb_to_hsv. Hue is taken modulo 360.

    Args:
        hsv: Array of shape (..., 3) with (H in degrees, S, V)

    Returns:
        Array of shape (..., 3) with RGB values [0, 1]
    """
    hsv = np.asarray(hsv, dtype=np.float64)

    h = (hsv[..., 0] % 360.0) / 60.0
    s = hsv[..., 1]
    v = hsv[..., 2]

    def channel(n: float) -> NDArray[np.float64]:
        k = (n + h) % 6.0
        return v - v * s * np.clip(np.minimum(k, 4.0 - k), 0.0, 1.0)

    rgb = np.stack([channel(5.0), channel(3.0), channel(1.0)], axis=-1)
    return np.clip(rgb, 0.0, 1.0)


# =============================================================================
# Hex encoding
# =============================================================================


def _to_bytes(rgb: ArrayLike) -> NDArray[np.int64]:
    """Scale [0,1] channels to 0-255, rounding half up."""
    rgb = np.clip(np.asarray(rgb, dtype=np.float64), 0.0, 1.0)
    return np.floor(rgb * 255.0 + 0.5).astype(np.int64)


def encode_hex(r: float, g: float, b: float) -> str:
    """
    Encode an RGB color [0,1] as a hex string.

    Returns:
        Hex string like "#3941C8"
    """
    rr, gg, bb = _to_bytes([r, g, b])
    return f"#{rr:02X}{gg:02X}{bb:02X}"


def encode_hex_batch(rgb: ArrayLike) -> tuple[str, ...]:
    """
    Encode an array of RGB colors [0,1] of shape (N, 3) as hex strings.
    """
    rgb = np.asarray(rgb, dtype=np.float64).reshape(-1, 3)
    return tuple(f"#{r:02X}{g:02X}{b:02X}" for r, g, b in _to_bytes(rgb))


def encode_hex_batch255(rgb255: ArrayLike) -> tuple[str, ...]:
    """
    Encode an (N, 3) array of 0-255 channel values as hex strings.

    Values are rounded half up and clipped, without a round trip through
    [0, 1], so integral inputs encode exactly.
    """
    rgb255 = np.clip(np.asarray(rgb255, dtype=np.float64).reshape(-1, 3), 0.0, 255.0)
    values = np.floor(rgb255 + 0.5).astype(np.int64)
    return tuple(f"#{r:02X}{g:02X}{b:02X}" for r, g, b in values)


def hsv_to_hex(h: float, s: float, v: float) -> str:
    """Convert a single HSV color to a hex string."""
    r, g, b = hsv_to_rgb([h, s, v])
    return encode_hex(r, g, b)


def hsv_to_hex_batch(hsv: ArrayLike) -> tuple[str, ...]:
    """Convert an (N, 3) array of HSV colors to hex strings."""
    return encode_hex_batch(hsv_to_rgb(hsv))


def is_hex_color(value: object) -> bool:
    """True if value is a "#RRGGBB" (or "RRGGBB") string."""
    return isinstance(value, str) and _HEX_RE.match(value) is not None


def hex_to_rgb255(hex_color: str) -> tuple[int, int, int]:
    """
    Parse a hex color string into integer channels 0-255.

    Args:
        hex_color: Hex string like "#3941C8" or "3941C8"

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    m = _HEX_RE.match(hex_color) if isinstance(hex_color, str) else None
    if m is None:
        raise ValueError(f"Expected hex color like '#RRGGBB', got {hex_color!r}")
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """Parse a hex color string into RGB channels [0, 1]."""
    r, g, b = hex_to_rgb255(hex_color)
    return r / 255.0, g / 255.0, b / 255.0


def hex_to_rgb255_batch(colors: Sequence[str]) -> NDArray[np.float64]:
    """Parse hex colors into an (N, 3) float array of 0-255 channels."""
    return np.array([hex_to_rgb255(c) for c in colors], dtype=np.float64).reshape(-1, 3)
