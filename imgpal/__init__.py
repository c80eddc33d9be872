# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Imgpal -- Color palettes derived from image pixels.

Builds qualitative, sequential and divergent palettes from the color
distribution of an image instead of picking colors by hand.

Quick start::

    from imgpal import derive_palette

    pal = derive_palette("image.png", n=5, type="seq", seed=1)
    list(pal)       # ['#1B3A6F', ...]
    pal.to_json()   # JSON with type and ramp controls
"""

from __future__ import annotations

__version__ = "1.0.0"

from imgpal.derive import derive_palette, load_image, quantize_image
from imgpal.errors import (
    EmptyDistributionError,
    InvalidParameterError,
    PaletteError,
)
from imgpal.schema import (
    ColorCluster,
    Palette,
    PaletteType,
)

__all__ = [
    # Core API
    "derive_palette",
    "load_image",
    "quantize_image",
    "Palette",
    # Types (commonly needed)
    "PaletteType",
    "ColorCluster",
    # Errors
    "PaletteError",
    "InvalidParameterError",
    "EmptyDistributionError",
    # Version
    "__version__",
]
