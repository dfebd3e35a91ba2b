from __future__ import annotations

from typing import Optional


class QueryMapError(Exception):
    """Base class for Query-Map Errors."""


class ParseError(QueryMapError, ValueError):
    """Raise when a query string cannot be tokenized or decoded."""

    def __init__(self, reason: str, position: Optional[int] = None):
        self.reason = reason
        self.position = position
        message = reason if position is None else f"{reason} (at position {position})"
        super().__init__(message)


class DeserializationError(QueryMapError, ValueError):
    """Raise when a value is neither a scalar nor a sequence of scalars."""
