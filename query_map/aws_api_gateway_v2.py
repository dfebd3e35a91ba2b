"""Query string parameters in the AWS API Gateway (HTTP API, payload v2) format.

API Gateway v2 joins repeated query parameters with commas
(``{"key": "value1,value2"}``) and sends ``null`` when the request has no query.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .constants import AWS_VALUE_SEPARATOR
from .errors import DeserializationError
from .logs import logger
from .multimap import QueryMap
from .serde import One, one_or_many


def deserialize(payload: Any) -> QueryMap[str]:
    """Deserialize the given mapping, splitting single values on commas.

    This function assumes that all values have been initialized.
    """
    if not isinstance(payload, Mapping):
        raise DeserializationError(f"Expected a mapping, got {type(payload).__name__}")

    data: dict[str, tuple[str, ...]] = {}
    try:
        for key, value in payload.items():
            tagged = one_or_many(value, str, key)
            if isinstance(tagged, One):
                data[key] = tuple(tagged.value.split(AWS_VALUE_SEPARATOR))
            else:
                data[key] = tagged.values

    except DeserializationError as exc:
        logger.debug("Failed to deserialize API Gateway query parameters: %s", exc)
        raise

    return QueryMap(data)


def deserialize_optional(payload: Any) -> Optional[QueryMap[str]]:
    """Deserialize `null` values into `None`."""
    if payload is None:
        return None
    return deserialize(payload)


def deserialize_empty(payload: Any) -> QueryMap[str]:
    """Deserialize `null` values into empty maps."""
    if payload is None:
        return QueryMap()
    return deserialize(payload)


def serialize_query_string_parameters(qm: QueryMap[str]) -> dict[str, str]:
    """Serialize the map, joining every key's values with commas."""
    return {key: AWS_VALUE_SEPARATOR.join(values) for key, values in qm.items()}
