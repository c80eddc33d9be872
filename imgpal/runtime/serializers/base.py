# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from enum import Enum


class SerializerFormat(Enum):
    """Output format for JSON serializers."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"


def json_separators(format: SerializerFormat) -> dict:
    """Keyword arguments for json.dumps matching the format."""
    if format == SerializerFormat.JSON_PRETTY:
        return {"indent": 2}
    return {"separators": (",", ":")}
