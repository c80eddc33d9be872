# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Schema definitions for derived palettes.

All types in this module are immutable (frozen dataclasses).
Once a palette is produced, its order is fixed.
"""

from imgpal.schema.palette import (
    SCHEMA_VERSION,
    ColorCluster,
    Palette,
    PaletteType,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Core types
    "ColorCluster",
    "Palette",
    "PaletteType",
]
