# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Swatch file serializers.

Formats a Palette for design tools:
1. CSS custom properties (``--palette-1: #FF0000;``)
2. GIMP palette files (``.gpl``), also read by Inkscape and Krita
"""

from __future__ import annotations

from imgpal.derive.colorspace import hex_to_rgb255
from imgpal.schema import Palette


def to_css(
    palette: Palette,
    *,
    prefix: str = "palette",
    selector: str = ":root",
) -> str:
    """Serialize a Palette as CSS custom properties.

    Example::

        :root {
          --palette-1: #2A5DB0;
          --palette-2: #FFFFFF;
        }
    """
    if not prefix:
        raise ValueError("CSS prefix cannot be empty")

    lines = [f"{selector} {{"]
    for i, hex_val in enumerate(palette, 1):
        lines.append(f"  --{prefix}-{i}: {hex_val};")
    lines.append("}")
    return "\n".join(lines)


def to_gpl(palette: Palette, *, name: str = "imgpal") -> str:
    """Serialize a Palette as a GIMP palette file.

    Columns are set to the palette size so the swatches display as a
    single row in palette order.
    """
    lines = [
        "GIMP Palette",
        f"Name: {name}",
        f"Columns: {len(palette)}",
        "#",
    ]
    for hex_val in palette:
        r, g, b = hex_to_rgb255(hex_val)
        lines.append(f"{r:3d} {g:3d} {b:3d}\t{hex_val}")
    return "\n".join(lines) + "\n"
