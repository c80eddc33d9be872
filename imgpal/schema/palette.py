# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Palette v1.0: canonical schema for derived palettes.

Design principles:
- Immutable: All types are frozen dataclasses
- Ordered: Palette order is visual adjacency and is never re-sorted
- Serializable: JSON-ready

HSV Color Space (as used by imgpal):
- H (Hue): 0-360 degrees (0=red, 120=green, 240=blue)
- S (Saturation): 0.0 = gray, 1.0 = fully saturated
- V (Value): 0.0 = black, 1.0 = full brightness
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union, overload


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"


# =============================================================================
# Palette Type
# =============================================================================


class PaletteType(Enum):
    """
    Palette assembly strategy.

    - QUALITATIVE: distinct categories, maximally separated colors
    - SEQUENTIAL: ordered ramp through the image's colors
    - DIVERGENT: two poles meeting at a center color
    """
    QUALITATIVE = "qual"
    SEQUENTIAL = "seq"
    DIVERGENT = "div"

    @classmethod
    def parse(cls, value: Union[str, PaletteType]) -> PaletteType:
        """
        Accept an enum member, a short value ("qual") or a long name
        ("qualitative"), case-insensitive.

        Raises:
            ValueError: If value names no palette type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Palette type must be one of {choices}, got {value!r}")


# =============================================================================
# Color Cluster
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorCluster:
    """
    A quantized color: one k-means centroid in HSV space.

    Attributes:
        h: Hue in degrees [0, 360)
        s: Saturation [0, 1]
        v: Value [0, 1]
        count: Number of filtered pixels assigned to this centroid
    """
    h: float
    s: float
    v: float
    count: int = 0

    def __post_init__(self) -> None:
        """Validate HSV values are within expected ranges."""
        if not 0.0 <= self.h < 360.0:
            raise ValueError(f"Hue must be 0-360, got {self.h}")
        if not 0.0 <= self.s <= 1.0:
            raise ValueError(f"Saturation must be 0-1, got {self.s}")
        if not 0.0 <= self.v <= 1.0:
            raise ValueError(f"Value must be 0-1, got {self.v}")
        if self.count < 0:
            raise ValueError(f"Count must be >= 0, got {self.count}")

    @property
    def hsv(self) -> tuple[float, float, float]:
        return (self.h, self.s, self.v)

    @property
    def hex(self) -> str:
        """Hex color string like "#3941C8"."""
        from imgpal.derive.colorspace import hsv_to_hex
        return hsv_to_hex(self.h, self.s, self.v)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"h": self.h, "s": self.s, "v": self.v, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict) -> ColorCluster:
        """Deserialize from dictionary."""
        return cls(
            h=data["h"],
            s=data["s"],
            v=data["v"],
            count=data.get("count", 0),
        )


# =============================================================================
# Palette
# =============================================================================


@dataclass(frozen=True, slots=True)
class Palette:
    """
    A derived color palette.

    Behaves as a read-only sequence of hex strings, so ``list(palette)``,
    ``palette[0]`` and ``len(palette)`` work directly.

    Attributes:
        colors: Hex colors ("#RRGGBB"), in display order
        type: Strategy that produced the palette
        controls: Ramp control colors for sequential/divergent palettes.
            Empty for qualitative palettes (no interpolation).
        version: Schema version

    Usage:
        palette = Palette(
            colors=("#FF0000", "#FF8080", "#FFFFFF"),
            type=PaletteType.SEQUENTIAL,
            controls=("#FF0000", "#FFFFFF"),
        )
    """
    colors: tuple[str, ...]
    type: PaletteType
    controls: tuple[str, ...] = ()
    version: str = field(default=SCHEMA_VERSION)

    def __post_init__(self) -> None:
        """Validate palette structure."""
        # Import here to avoid circular imports
        from imgpal.derive.colorspace import is_hex_color

        if not self.colors:
            raise ValueError("Palette cannot be empty")
        for c in self.colors + self.controls:
            if not is_hex_color(c) or not c.startswith("#"):
                raise ValueError(f"Palette colors must be '#RRGGBB' strings, got {c!r}")
        if self.type is PaletteType.QUALITATIVE and self.controls:
            raise ValueError("Qualitative palettes have no ramp controls")

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.colors)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index):
        return self.colors[index]

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON output."""
        result = {
            "version": self.version,
            "type": self.type.value,
            "colors": list(self.colors),
        }
        if self.controls:
            result["controls"] = list(self.controls)
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> Palette:
        """Deserialize from dictionary."""
        return cls(
            colors=tuple(data["colors"]),
            type=PaletteType.parse(data["type"]),
            controls=tuple(data.get("controls", ())),
            version=data.get("version", SCHEMA_VERSION),
        )

    @classmethod
    def from_json(cls, json_str: str) -> Palette:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))
