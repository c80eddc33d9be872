# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Output runtime for imgpal.

Serialization of Palette data for downstream tools:

1. Text blocks -- XML, JSON or Markdown
2. CSS -- custom properties for stylesheets
3. GPL -- GIMP palette files

The output layer never modifies palette content or order.
"""

from imgpal.runtime.serializers import (
    BlockFormat,
    SerializerFormat,
    to_css,
    to_gpl,
    to_json,
    to_palette_block,
)

__all__ = [
    "to_palette_block",
    "to_json",
    "to_css",
    "to_gpl",
    "SerializerFormat",
    "BlockFormat",
]
