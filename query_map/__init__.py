""" Query-Map -- Ordered multi-value maps for query strings and key-value payloads """
from __future__ import annotations

from .errors import DeserializationError, ParseError, QueryMapError
from .forms import QueryStringParser, encode_query, parse_qsl, parse_query
from .multimap import QueryMap
from .serde import Many, One, from_value, loads

__all__ = (
    # Errors
    "DeserializationError",
    "ParseError",
    "QueryMapError",
    # Map
    "QueryMap",
    # Query strings
    "QueryStringParser",
    "encode_query",
    "parse_qsl",
    "parse_query",
    # Structured data
    "Many",
    "One",
    "from_value",
    "loads",
)
