# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Text block serializer.

Formats a Palette as a structured block (XML, JSON, or Markdown) for
embedding in documents, reports or configuration.
"""

from __future__ import annotations

import json
from enum import Enum

from imgpal.runtime.serializers.base import SerializerFormat, json_separators
from imgpal.schema import Palette


class BlockFormat(Enum):
    """Block format options."""

    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"


def to_palette_block(
    palette: Palette,
    *,
    format: BlockFormat = BlockFormat.XML,
    include_controls: bool = False,
    tag_name: str = "palette",
) -> str:
    """Serialize a Palette as a text block.

    Args:
        palette: The Palette to serialize.
        format: Block format (XML, JSON, or MARKDOWN).
        include_controls: Include ramp control colors (sequential/divergent).
        tag_name: XML tag / JSON key for the block.

    Returns:
        Formatted block string.

    Example (XML)::

        <palette version="1.0" type="div" size="3">
          <color index="1" hex="#2A5DB0"/>
          <color index="2" hex="#FFFFFF"/>
          <color index="3" hex="#E0C21F"/>
        </palette>
    """
    if format == BlockFormat.XML:
        return _to_xml(palette, include_controls, tag_name)
    elif format == BlockFormat.JSON:
        return _to_json(palette, include_controls, tag_name)
    else:
        return _to_markdown(palette, include_controls)


def to_json(
    palette: Palette,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
) -> str:
    """Serialize a Palette as compact or pretty JSON."""
    return json.dumps(palette.to_dict(), **json_separators(format))


def _to_xml(palette: Palette, include_controls: bool, tag_name: str) -> str:
    """Generate XML block."""
    lines = [
        f'<{tag_name} version="{palette.version}" '
        f'type="{palette.type.value}" size="{len(palette)}">'
    ]
    for i, hex_val in enumerate(palette, 1):
        lines.append(f'  <color index="{i}" hex="{hex_val}"/>')

    if include_controls and palette.controls:
        lines.append("  <controls>")
        for hex_val in palette.controls:
            lines.append(f'    <control hex="{hex_val}"/>')
        lines.append("  </controls>")

    lines.append(f"</{tag_name}>")
    return "\n".join(lines)


def _to_json(palette: Palette, include_controls: bool, tag_name: str) -> str:
    """Generate JSON block with wrapper."""
    data = palette.to_dict()
    if not include_controls:
        data.pop("controls", None)
    return json.dumps({tag_name: data}, indent=2)


def _to_markdown(palette: Palette, include_controls: bool) -> str:
    """Generate a markdown table, one row per swatch."""
    lines = [
        f"**Palette** ({palette.type.name.lower()}, {len(palette)} colors)",
        "",
        "| # | Hex |",
        "|---|-----|",
    ]
    for i, hex_val in enumerate(palette, 1):
        lines.append(f"| {i} | `{hex_val}` |")

    if include_controls and palette.controls:
        lines.append("")
        lines.append("Controls: " + " → ".join(f"`{c}`" for c in palette.controls))

    return "\n".join(lines)
