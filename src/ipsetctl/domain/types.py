"""Enumerations shared across layers."""

from __future__ import annotations

from enum import StrEnum


class Scope(StrEnum):
    """Where an IP set lives. One value is fixed per deployment."""

    REGIONAL = "REGIONAL"
    CLOUDFRONT = "CLOUDFRONT"


class MutationKind(StrEnum):
    """The two mutation intents a caller can request."""

    APPEND = "append"
    REMOVE = "remove"
