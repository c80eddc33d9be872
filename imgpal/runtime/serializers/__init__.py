# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Serializers for Palette output.

Each serializer formats a Palette for a specific consumer.
All serializers preserve palette order exactly.
"""

from imgpal.runtime.serializers.base import SerializerFormat
from imgpal.runtime.serializers.block import BlockFormat, to_json, to_palette_block
from imgpal.runtime.serializers.swatch import to_css, to_gpl

__all__ = [
    "SerializerFormat",
    "BlockFormat",
    "to_json",
    "to_palette_block",
    "to_css",
    "to_gpl",
]
