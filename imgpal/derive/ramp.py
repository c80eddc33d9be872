# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""Piecewise-linear color ramps through hex control colors."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from imgpal.derive.colorspace import encode_hex_batch255, hex_to_rgb255_batch


def ramp(controls: Sequence[str], n: int) -> tuple[str, ...]:
    """
    Sample n colors from a gradient through the control colors.

    Controls sit at equal spacing on [0, 1] and the gradient is linear in
    RGB between neighbours. Samples are evenly spaced over [0, 1], so the
    first and last outputs are exactly the first and last controls
    (for n == 1, only the first control is returned).

    Args:
        controls: Hex control colors, in ramp order
        n: Number of colors to produce

    Returns:
        Tuple of n hex strings
    """
    if not controls:
        raise ValueError("Ramp needs at least one control color")
    if n < 1:
        raise ValueError(f"Ramp size must be >= 1, got {n}")

    rgb = hex_to_rgb255_batch(controls)
    if len(rgb) == 1:
        return encode_hex_batch255(np.repeat(rgb, n, axis=0))

    knots = np.linspace(0.0, 1.0, len(rgb))
    t = np.linspace(0.0, 1.0, n)
    sampled = np.stack(
        [np.interp(t, knots, rgb[:, c]) for c in range(3)],
        axis=-1,
    )
    return encode_hex_batch255(sampled)
