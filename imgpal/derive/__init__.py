# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Palette derivation core for imgpal.

This module provides color filtering, HSV quantization, palette assembly
and ramp interpolation over decoded pixel data.
"""

from imgpal.derive.extract import derive_palette, load_image
from imgpal.derive.quantmap import quantize_image

__all__ = ["derive_palette", "load_image", "quantize_image"]
