# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Color distribution filtering.

Trims the pixel cloud before quantization:
1. bw: drops near-black and near-white pixels in RGB space
2. brightness / saturation: trims quantile tails of HSV value and saturation

If near-black/white has already been trimmed, the quantile trims apply to
what remains of the distribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imgpal.derive.colorspace import rgb_to_hsv
from imgpal.errors import EmptyDistributionError, InvalidParameterError

logger = logging.getLogger(__name__)

# No-op thresholds: keep everything
FULL_RANGE: tuple[float, float] = (0.0, 1.0)


@dataclass(frozen=True, eq=False)
class PixelSamples:
    """
    Filtered pixel cloud.

    Row i of ``rgb`` and row i of ``hsv`` describe the same pixel.
    Order carries no meaning.

    Attributes:
        rgb: (N, 3) array of RGB values [0, 1]
        hsv: (N, 3) array of (H in degrees, S, V)
    """
    rgb: NDArray[np.float64]
    hsv: NDArray[np.float64]

    def __len__(self) -> int:
        return len(self.hsv)

    def distinct_count(self) -> int:
        """Number of distinct (h, s, v) tuples in the sample."""
        if len(self.hsv) == 0:
            return 0
        return len(np.unique(self.hsv, axis=0))


def validate_range(name: str, value: ArrayLike) -> tuple[float, float]:
    """
    Check a (lo, hi) probability/threshold pair.

    Raises:
        InvalidParameterError: Unless 0 <= lo <= hi <= 1
    """
    try:
        lo, hi = (float(x) for x in value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            name, f"expected a (lo, hi) pair, got {value!r}"
        ) from e
    if not (0.0 <= lo <= hi <= 1.0):
        raise InvalidParameterError(
            name, f"need 0 <= lo <= hi <= 1, got ({lo}, {hi})"
        )
    return lo, hi


def as_rgb_array(pixels: ArrayLike) -> NDArray[np.float64]:
    """
    Normalize a pixel grid to an (N, 3) float array in [0, 1].

    Accepts (H, W, 3) or (N, 3) arrays; uint8 input is scaled by 1/255.

    Raises:
        InvalidParameterError: On bad shape, empty input, or out-of-range floats
    """
    arr = np.asarray(pixels)

    if arr.ndim not in (2, 3) or arr.shape[-1] != 3:
        raise InvalidParameterError(
            "pixels", f"expected (H, W, 3) or (N, 3) array, got shape {arr.shape}"
        )
    if arr.size == 0:
        raise InvalidParameterError("pixels", "image has no pixels")

    if arr.dtype == np.uint8:
        rgb = arr.astype(np.float64) / 255.0
    elif np.issubdtype(arr.dtype, np.floating) or np.issubdtype(arr.dtype, np.integer):
        rgb = arr.astype(np.float64)
        if not np.all(np.isfinite(rgb)) or rgb.min() < 0.0 or rgb.max() > 1.0:
            raise InvalidParameterError(
                "pixels", "non-uint8 pixel values must lie in [0, 1]"
            )
    else:
        raise InvalidParameterError("pixels", f"unsupported dtype {arr.dtype}")

    return rgb.reshape(-1, 3)


def filter_distribution(
    pixels: ArrayLike,
    bw: ArrayLike = FULL_RANGE,
    brightness: ArrayLike = FULL_RANGE,
    saturation: ArrayLike = FULL_RANGE,
) -> PixelSamples:
    """
    Filter a pixel grid down to the colors eligible for a palette.

    A pixel survives the bw trim if max(r, g, b) >= bw[0] and
    min(r, g, b) <= bw[1]. Brightness (V) and saturation (S) are then
    trimmed to the given quantiles of the survivors, bounds inclusive.

    Args:
        pixels: (H, W, 3) or (N, 3) RGB array (uint8, or float in [0, 1])
        bw: (lo, hi) RGB thresholds for near-black / near-white
        brightness: (lo, hi) quantile probabilities for V
        saturation: (lo, hi) quantile probabilities for S

    Returns:
        PixelSamples holding the surviving pixels

    Raises:
        InvalidParameterError: On malformed pixels or thresholds
        EmptyDistributionError: If a trim stage removes every pixel
    """
    bw = validate_range("bw", bw)
    brightness = validate_range("brightness", brightness)
    saturation = validate_range("saturation", saturation)
    rgb = as_rgb_array(pixels)

    # Near-black / near-white trim in RGB space
    mx = rgb.max(axis=1)
    mn = rgb.min(axis=1)
    rgb = rgb[(mx >= bw[0]) & (mn <= bw[1])]
    if len(rgb) == 0:
        raise EmptyDistributionError("bw", {"bw": bw})

    hsv = rgb_to_hsv(rgb)

    # Quantile trim in HSV space
    v_lo, v_hi = np.quantile(hsv[:, 2], brightness)
    s_lo, s_hi = np.quantile(hsv[:, 1], saturation)
    keep = (
        (hsv[:, 2] >= v_lo) & (hsv[:, 2] <= v_hi)
        & (hsv[:, 1] >= s_lo) & (hsv[:, 1] <= s_hi)
    )
    if not np.any(keep):
        raise EmptyDistributionError(
            "brightness/saturation",
            {"brightness": brightness, "saturation": saturation},
        )

    logger.debug(
        "Filtered %d -> %d pixels (bw survivors %d)",
        len(mx), int(keep.sum()), len(rgb),
    )
    return PixelSamples(rgb=rgb[keep], hsv=hsv[keep])
