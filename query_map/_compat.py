"""Compatability layer."""

from __future__ import annotations

from contextlib import suppress
from json import JSONDecodeError, dumps, loads
from typing import Any, Union

__all__ = (
    "JSON_DECODE_ERRORS",
    "json_dumps",
    "json_loads",
)

JSON_DECODE_ERRORS: tuple[type[Exception], ...] = (JSONDecodeError, UnicodeDecodeError)


def json_dumps(content) -> bytes:
    """Emulate orjson."""
    return dumps(  # type: ignore [call-arg]
        content,
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def json_loads(obj: Union[bytes, str]) -> Any:
    """Emulate orjson."""
    if isinstance(obj, bytes):
        obj = obj.decode("utf-8")
    return loads(obj)


with suppress(ImportError):
    from ujson import JSONDecodeError as UJSONDecodeError
    from ujson import dumps as udumps
    from ujson import loads as json_loads  # type: ignore[assignment]

    JSON_DECODE_ERRORS = (*JSON_DECODE_ERRORS, UJSONDecodeError)

    def json_dumps(content) -> bytes:
        """Emulate orjson."""
        return udumps(content, ensure_ascii=False).encode("utf-8")


with suppress(ImportError):
    from orjson import JSONDecodeError as OJSONDecodeError
    from orjson import dumps as json_dumps  # type: ignore[assignment,no-redef]
    from orjson import loads as json_loads  # type: ignore[assignment,no-redef]

    JSON_DECODE_ERRORS = (*JSON_DECODE_ERRORS, OJSONDecodeError)


# ruff: noqa: PGH003, F811
