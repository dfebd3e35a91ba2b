"""Query-Map includes a `query_map.QueryMap` class, a read-only view into data
which may contain multiple values per key.

Internally data is always represented as many values:

.. code-block:: python

    qm = QueryMap.from_single({"foo": "bar"})
    assert qm.first("foo") == "bar"
    assert qm.all("foo") == ("bar",)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Optional, Sequence

from multidict import MultiDict

from .types import TV

if TYPE_CHECKING:
    from multidict import MultiDictProxy
    from yarl import URL

    from .types import TMultiMapping, TRawQuery, TSingleMapping


class QueryMap(Mapping[str, Sequence[TV]]):
    """Represent a map of string keys to ordered sequences of values.

    :param data: a mapping of keys to sequences of values, taken as-is

    """

    __slots__ = ("_data",)

    def __init__(self, data: Optional[TMultiMapping[TV]] = None):
        """Create a map from the given multi-value mapping.

        :raises TypeError: a value is a string (use :meth:`from_single` for single values)
        """
        self._data: dict[str, tuple[TV, ...]] = (
            {key: as_values(key, values) for key, values in data.items()} if data else {}
        )

    @classmethod
    def from_multi(cls, data: TMultiMapping[TV]) -> QueryMap[TV]:
        """Create a map from a mapping of keys to sequences of values."""
        return cls(data)

    @classmethod
    def from_single(cls, data: TSingleMapping[TV]) -> QueryMap[TV]:
        """Create a map from a mapping of keys to single values.

        Each value is promoted to a one-element sequence.
        """
        qm: QueryMap[TV] = cls()
        qm._data = {key: (value,) for key, value in data.items()}
        return qm

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, TV]]) -> QueryMap[TV]:
        """Fold ordered `(key, value)` pairs, keeping the order values appear in."""
        grouped: dict[str, list[TV]] = {}
        for key, value in pairs:
            values = grouped.get(key)
            if values is None:
                grouped[key] = [value]
            else:
                values.append(value)

        return cls(grouped)

    @classmethod
    def from_multidict(cls, data: MultiDict[TV] | MultiDictProxy[TV]) -> QueryMap[TV]:
        """Create a map from a :py:class:`multidict.MultiDict` (or a proxy, e.g.
        :py:attr:`yarl.URL.query`).
        """
        return cls.from_pairs((str(key), value) for key, value in data.items())

    @classmethod
    def parse(cls, query: TRawQuery, **options) -> QueryMap[str]:
        """Parse the given form-encoded string.

        See :py:func:`query_map.forms.parse_query` for the options.
        """
        from .forms import parse_query

        return parse_query(query, **options)

    @classmethod
    def from_url(cls, url: str | URL, **options) -> QueryMap[str]:
        """Parse the query component of the given URL."""
        from yarl import URL

        if not isinstance(url, URL):
            url = URL(url, encoded=True)

        return cls.parse(url.raw_query_string, **options)

    def first(self, key: str) -> Optional[TV]:
        """Return the first value associated with the key."""
        values = self._data.get(key)
        if values:
            return values[0]
        return None

    def all(self, key: str) -> Optional[tuple[TV, ...]]:
        """Return all values associated with the key."""
        return self._data.get(key)

    def is_empty(self) -> bool:
        """Return true if there are no elements in the map."""
        return not self._data

    def pairs(self) -> Iterator[tuple[str, TV]]:
        """Iterate over every `(key, value)` occurrence."""
        for key, values in self._data.items():
            for value in values:
                yield key, value

    def to_dict(self) -> dict[str, list[TV]]:
        """Convert the map back to a plain mapping of lists."""
        return {key: list(values) for key, values in self._data.items()}

    def to_multidict(self) -> MultiDict[TV]:
        """Convert the map to a :py:class:`multidict.MultiDict`."""
        return MultiDict(list(self.pairs()))

    def to_query_string(self, **options) -> str:
        """Encode the map as a form-encoded string."""
        from .forms import encode_query

        return encode_query(self, **options)

    def copy(self) -> QueryMap[TV]:
        qm: QueryMap[TV] = self.__class__()
        qm._data = dict(self._data)
        return qm

    def __getitem__(self, key: str) -> tuple[TV, ...]:
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, QueryMap):
            return self._data == other._data

        if isinstance(other, Mapping):
            try:
                return self._data == {key: as_values(key, values) for key, values in other.items()}
            except TypeError:
                return False

        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()!r})"


def as_values(key: str, values: Iterable[TV]) -> tuple[TV, ...]:
    if isinstance(values, (str, bytes, bytearray)):
        raise TypeError(f"Values for key {key!r} must be a sequence, got {type(values).__name__}")
    return tuple(values)
