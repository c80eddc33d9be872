# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Error types raised by the palette pipeline.

All errors are terminal for the call. They carry enough context (which
parameter, which stage, which thresholds) for the caller to adjust inputs.
"""

from __future__ import annotations

from typing import Optional


class PaletteError(Exception):
    """Base class for all imgpal errors."""


class InvalidParameterError(PaletteError, ValueError):
    """
    A precondition on the inputs was violated.

    Raised before any computation is attempted.

    Attributes:
        parameter: Name of the offending argument
    """

    def __init__(self, parameter: str, message: str) -> None:
        self.parameter = parameter
        super().__init__(f"Invalid {parameter}: {message}")


class EmptyDistributionError(PaletteError, ValueError):
    """
    The distribution filter removed every pixel.

    Attributes:
        stage: Filter stage that emptied the distribution
            ("bw" or "brightness/saturation")
        thresholds: The thresholds in effect at that stage
    """

    def __init__(self, stage: str, thresholds: Optional[dict] = None) -> None:
        self.stage = stage
        self.thresholds = dict(thresholds or {})
        detail = ", ".join(f"{k}={v}" for k, v in self.thresholds.items())
        msg = f"No pixels left after {stage} trim"
        if detail:
            msg += f" ({detail}); loosen the thresholds"
        super().__init__(msg)
