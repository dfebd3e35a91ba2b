"""Convert generic key-value structures (e.g. decoded JSON) to
:class:`query_map.QueryMap` and back.

Values may either be a single scalar or a sequence of scalars, to handle both single
and multi value data:

.. code-block:: python

    qm = from_value({"foo": "bar", "baz": ["a", "b"]})
    assert qm.first("foo") == "bar"
    assert qm.all("baz") == ("a", "b")

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Union

from ._compat import JSON_DECODE_ERRORS, json_dumps, json_loads
from .errors import DeserializationError
from .logs import logger
from .multimap import QueryMap
from .types import TV


@dataclass(frozen=True)
class One(Generic[TV]):
    """A single scalar value."""

    value: TV

    def to_tuple(self) -> tuple[TV, ...]:
        return (self.value,)


@dataclass(frozen=True)
class Many(Generic[TV]):
    """A sequence of scalar values."""

    values: tuple[TV, ...]

    def to_tuple(self) -> tuple[TV, ...]:
        return self.values


OneOrMany = Union[One[TV], Many[TV]]


def one_or_many(value: Any, value_type: type[TV] = str, key: str = "") -> OneOrMany[TV]:  # type: ignore[assignment]
    """Tag the given value as :class:`One` or :class:`Many`.

    :raises DeserializationError: the value is neither an instance of `value_type`
                                  nor a list of them
    """
    if isinstance(value, value_type):
        return One(value)

    if isinstance(value, (list, tuple)):
        for item in value:
            if not isinstance(item, value_type):
                raise DeserializationError(
                    f"Invalid item for key {key!r}: expected {value_type.__name__}, "
                    f"got {type(item).__name__}"
                )
        return Many(tuple(value))

    raise DeserializationError(
        f"Invalid value for key {key!r}: expected {value_type.__name__} "
        f"or a sequence of {value_type.__name__}, got {type(value).__name__}"
    )


def from_value(payload: Any, value_type: type[TV] = str) -> QueryMap[TV]:  # type: ignore[assignment]
    """Fold the given mapping into a :class:`query_map.QueryMap`.

    Every value is checked independently, so single and multi values may be mixed.
    """
    if not isinstance(payload, Mapping):
        raise DeserializationError(f"Expected a mapping, got {type(payload).__name__}")

    try:
        return QueryMap(
            {
                key: one_or_many(value, value_type, key).to_tuple()
                for key, value in payload.items()
            }
        )
    except DeserializationError as exc:
        logger.debug("Failed to deserialize a query map: %s", exc)
        raise


def loads(data: Union[str, bytes], value_type: type[TV] = str) -> QueryMap[TV]:  # type: ignore[assignment]
    """Decode the given JSON document into a :class:`query_map.QueryMap`."""
    try:
        payload = json_loads(data)
    except JSON_DECODE_ERRORS as exc:
        raise DeserializationError(f"Invalid JSON: {exc}") from exc

    return from_value(payload, value_type)


def to_value(qm: QueryMap[TV]) -> dict[str, list[TV]]:
    """Serialize the map as a mapping of keys to lists of values."""
    return qm.to_dict()


def dumps(qm: QueryMap) -> bytes:
    """Encode the map as JSON."""
    return json_dumps(to_value(qm))
