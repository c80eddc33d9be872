# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Quantize an image against a palette.

Each pixel is replaced by its nearest palette color (Euclidean distance in
RGB). Useful for previewing how an image reads in a derived palette.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imgpal.derive.colorspace import hex_to_rgb255_batch
from imgpal.derive.filter import as_rgb_array
from imgpal.derive.quantize import block_rows


def nearest_palette_index(
    pixels: ArrayLike,
    palette: Sequence[str],
) -> NDArray[np.int64]:
    """
    Index of the nearest palette color for every pixel.

    Args:
        pixels: (H, W, 3) or (N, 3) RGB array (uint8, or float in [0, 1])
        palette: Hex colors

    Returns:
        Array of indices with the pixel grid's shape minus the channel axis
    """
    if len(palette) == 0:
        raise ValueError("Palette cannot be empty")

    shape = np.shape(pixels)[:-1]
    rgb = as_rgb_array(pixels) * 255.0
    targets = hex_to_rgb255_batch(list(palette))

    labels = np.empty(len(rgb), dtype=np.int64)
    rows = block_rows(len(targets))
    for start in range(0, len(rgb), rows):
        block = rgb[start:start + rows]
        dists = np.sum(
            (block[:, np.newaxis, :] - targets[np.newaxis, :, :]) ** 2,
            axis=2,
        )
        labels[start:start + rows] = np.argmin(dists, axis=1)
    return labels.reshape(shape)


def quantize_image(
    pixels: ArrayLike,
    palette: Sequence[str],
) -> NDArray[np.uint8]:
    """
    Map every pixel to its nearest palette color.

    Returns:
        uint8 array with the input's shape, holding only palette colors
    """
    targets = hex_to_rgb255_batch(list(palette)).astype(np.uint8)
    return targets[nearest_palette_index(pixels, palette)]
