"""Work with form-encoded query strings.

The streaming parser is based on a great work of Andrew Dunham
(https://github.com/andrew-d/python-multipart) and has been changed to emit
bare keys and to fail on malformed escapes.

The original code is licensed by Apache2 license.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Iterable, Optional
from urllib.parse import quote_plus, unquote_to_bytes

from .constants import DEFAULT_CHARSET, PAIR_SEPARATOR, VALUE_SEPARATOR
from .errors import ParseError
from .logs import logger
from .multimap import QueryMap

if TYPE_CHECKING:
    from .types import TPair, TRawQuery, TTokenizer

STATE_BEFORE_FIELD = 0
STATE_FIELD_NAME = 1
STATE_FIELD_DATA = 2

INVALID_ESCAPE_RE = re.compile(rb"%(?![0-9A-Fa-f]{2})")


class QueryStringParser:
    """This is a streaming querystring parser. It will consume data, and call
    the callbacks given when it has data.

    .. list-table::
       :widths: 15 10 30
       :header-rows: 1

       * - callback name
         - parameters
         - description
       * - field_start
         - data, start, end
         - called when a new field is encountered, start points to the field.
       * - field_name
         - data, start, end
         - called when a portion of a field's name is encountered.
       * - field_data
         - data, start, end
         - called when a portion of a field's data is encountered.
       * - field_end
         - data, start, end
         - called when the end of a field is encountered.
       * - end
         - data, start, end
         - called when the parser is finished parsing all data.

    The "data" parameter is a bytestring. "start" and "end" are integer indexes into the "data"
    string that represent the data of interest. Notification callbacks receive an empty
    bytestring.

    :param callbacks: a dictionary of callbacks.
    :param max_size: the maximum size of data to parse, a larger query raises
                     :class:`query_map.errors.ParseError`. defaults to 0 (unlimited)
    :param separator: the pairs separator. defaults to `&`
    """

    __slots__ = "callbacks", "cursize", "max_size", "state", "separator"

    def __init__(
        self,
        callbacks: dict[str, Callable[[bytes, int, int], None]],
        max_size: int = 0,
        separator: bytes = PAIR_SEPARATOR,
    ):
        self.callbacks = callbacks
        self.cursize = 0
        self.max_size = max_size
        if len(separator) != 1:
            raise ValueError(f"Separator must be a single byte, got {separator!r}")

        self.separator = separator[0]

        self.state = STATE_BEFORE_FIELD

    def callback(self, name: str, data: bytes, start: int, end: int):
        func = self.callbacks.get(name)
        if func is not None:
            func(data, start, end)

    def write(self, data: bytes) -> int:
        """Consume the given chunk and return the number of processed bytes."""
        data_len = len(data)
        if self.max_size and self.cursize + data_len > self.max_size:
            raise ParseError("Query exceeds max_size", self.max_size)

        idx = 0
        state = self.state
        separator = self.separator
        equal = VALUE_SEPARATOR[0]

        while idx < data_len:
            if state == STATE_BEFORE_FIELD:
                if data[idx] != separator:
                    self.callback("field_start", data, idx, idx)
                    idx -= 1
                    state = STATE_FIELD_NAME

            elif state == STATE_FIELD_NAME:
                sep_pos = data.find(separator, idx, data_len)
                end = data_len if sep_pos == -1 else sep_pos
                equals_pos = data.find(equal, idx, end)

                if equals_pos != -1:
                    self.callback("field_name", data, idx, equals_pos)
                    idx = equals_pos
                    state = STATE_FIELD_DATA

                elif sep_pos == -1:
                    self.callback("field_name", data, idx, data_len)
                    idx = data_len

                else:
                    self.callback("field_name", data, idx, sep_pos)
                    self.callback("field_end", b"", 0, 0)
                    idx = sep_pos
                    state = STATE_BEFORE_FIELD

            elif state == STATE_FIELD_DATA:
                sep_pos = data.find(separator, idx, data_len)
                if sep_pos == -1:
                    self.callback("field_data", data, idx, data_len)
                    idx = data_len

                else:
                    self.callback("field_data", data, idx, sep_pos)
                    self.callback("field_end", b"", 0, 0)
                    idx = sep_pos
                    state = STATE_BEFORE_FIELD

            else:
                raise ParseError(f"Reached an unknown state {state}", self.cursize + idx)

            idx += 1

        self.state = state
        self.cursize += data_len
        return data_len

    def finalize(self):
        """Finalize this parser, which signals to that we are finished parsing,
        if we're still in the middle of a field, an on_field_end callback, and
        then the on_end callback.
        """
        if self.state != STATE_BEFORE_FIELD:
            self.callback("field_end", b"", 0, 0)
            self.state = STATE_BEFORE_FIELD
        self.callback("end", b"", 0, 0)


class PairsReader:
    """Collect decoded `(key, value)` pairs from a :class:`QueryStringParser`."""

    __slots__ = "pairs", "curname", "curvalue", "charset", "consumed", "field_offset", "parser"

    def __init__(
        self,
        charset: str = DEFAULT_CHARSET,
        max_size: int = 0,
        separator: bytes = PAIR_SEPARATOR,
    ):
        self.charset = charset
        self.curname = bytearray()
        self.curvalue = bytearray()
        self.pairs: list[TPair] = []
        self.consumed = 0
        self.field_offset = 0
        self.parser = QueryStringParser(
            {
                "field_start": self.on_field_start,
                "field_name": self.on_field_name,
                "field_data": self.on_field_data,
                "field_end": self.on_field_end,
            },
            max_size=max_size,
            separator=separator,
        )

    def feed(self, chunk: bytes):
        self.consumed += self.parser.write(chunk)

    def close(self) -> list[TPair]:
        self.parser.finalize()
        return self.pairs

    def on_field_start(self, data: bytes, start: int, end: int):
        self.field_offset = self.consumed + start

    def on_field_name(self, data: bytes, start: int, end: int):
        self.curname += data[start:end]

    def on_field_data(self, data: bytes, start: int, end: int):
        self.curvalue += data[start:end]

    def on_field_end(self, data: bytes, start: int, end: int):
        name = unquote_plus(self.curname, self.charset, self.field_offset)
        value = unquote_plus(self.curvalue, self.charset, self.field_offset)
        self.pairs.append((name, value))
        self.curname.clear()
        self.curvalue.clear()


def unquote_plus(value: bytearray, charset: str = DEFAULT_CHARSET, offset: int = 0) -> str:
    """Decode a form-encoded field, failing on malformed escapes."""
    invalid = INVALID_ESCAPE_RE.search(value)
    if invalid is not None:
        raise ParseError(
            f"Invalid percent-escape {bytes(value[invalid.start() : invalid.start() + 3])!r}",
            offset,
        )

    raw = unquote_to_bytes(bytes(value.replace(b"+", b" ")))
    try:
        return raw.decode(charset)
    except UnicodeDecodeError as exc:
        raise ParseError(f"Invalid {charset} sequence {raw[exc.start : exc.end]!r}", offset) from exc


def parse_qsl(
    query: TRawQuery,
    charset: str = DEFAULT_CHARSET,
    max_size: int = 0,
    separator: bytes = PAIR_SEPARATOR,
) -> list[TPair]:
    """Split the given form-encoded string into decoded `(key, value)` pairs.

    A key without `=` is paired with an empty string. Malformed percent-escapes and bytes
    which are not valid for the charset raise :class:`query_map.errors.ParseError`.
    """
    if isinstance(query, str):
        try:
            data = query.encode(charset)
        except UnicodeEncodeError as exc:
            raise ParseError(f"Query is not encodable with {charset}", exc.start) from exc
    else:
        data = bytes(query)

    reader = PairsReader(charset, max_size=max_size, separator=separator)
    reader.feed(data)
    return reader.close()


def parse_query(query: TRawQuery, tokenizer: Optional[TTokenizer] = None, **options) -> QueryMap[str]:
    """Parse the given form-encoded string into a :class:`query_map.QueryMap`.

    .. code-block:: python

        qm = parse_query("foo=bar&baz=quux&foo=qux")
        assert qm.all("foo") == ("bar", "qux")

    :param query: a form-encoded string (or bytes)
    :param tokenizer: a callable which splits the query into decoded `(key, value)` pairs,
                      defaults to :func:`parse_qsl`
    :param options: keyword options passed to the tokenizer
    """
    if tokenizer is None:
        tokenizer = parse_qsl

    try:
        pairs: Iterable[TPair] = tokenizer(query, **options)
        return QueryMap.from_pairs(pairs)

    except ParseError as exc:
        logger.debug("Failed to parse query string %r: %s", query, exc)
        raise


def encode_query(qm: QueryMap, safe: str = "", charset: str = DEFAULT_CHARSET) -> str:
    """Encode the given map as a form-encoded string."""
    return PAIR_SEPARATOR.decode().join(
        f"{quote_plus(str(key), safe=safe, encoding=charset)}"
        f"={quote_plus(str(value), safe=safe, encoding=charset)}"
        for key, value in qm.pairs()
    )


#  pylama:ignore=D
