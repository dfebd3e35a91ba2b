"""Test query strings parsing."""
from __future__ import annotations

import pytest


def test_parse_query():
    from query_map import parse_query

    qm = parse_query("foo=bar&baz=quux&foo=qux")
    assert qm.all("foo") == ("bar", "qux")
    assert qm.all("baz") == ("quux",)
    assert qm.all("missing") is None


def test_parse_query_empty():
    from query_map import parse_query

    qm = parse_query("")
    assert len(qm) == 0
    assert qm.is_empty()

    assert parse_query(b"").is_empty()
    assert parse_query("&&").is_empty()


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("a=1", [("a", "1")]),
        ("a=1%202", [("a", "1 2")]),
        ("a=1+2", [("a", "1 2")]),
        ("a%26b=c%3Dd", [("a&b", "c=d")]),
        ("name=%D0%BF%D1%80%D0%B8%D0%B2%D0%B5%D1%82", [("name", "привет")]),
        ("flag", [("flag", "")]),
        ("flag&a=1", [("flag", ""), ("a", "1")]),
        ("a=1&flag", [("a", "1"), ("flag", "")]),
        ("a=", [("a", "")]),
        ("=b", [("", "b")]),
        ("a=b=c", [("a", "b=c")]),
        ("a=1&&b=2&", [("a", "1"), ("b", "2")]),
        ("a=1;b=2", [("a", "1;b=2")]),
        (b"a=1&b=%2B", [("a", "1"), ("b", "+")]),
    ],
)
def test_parse_qsl(query, expected):
    from query_map import parse_qsl

    assert parse_qsl(query) == expected


@pytest.mark.parametrize("query", ["a=%", "a=%2", "a=%zz", "%=1", "a=1&b=100%", "a=%%41"])
def test_parse_malformed_escape(query):
    from query_map import ParseError, parse_query

    with pytest.raises(ParseError) as info:
        parse_query(query)

    assert "percent-escape" in info.value.reason


def test_parse_error_position():
    from query_map import ParseError, parse_qsl

    with pytest.raises(ParseError) as info:
        parse_qsl("a=1&b=%zz")

    assert info.value.position == 4
    assert isinstance(info.value, ValueError)


def test_parse_invalid_charset():
    from query_map import ParseError, parse_qsl

    with pytest.raises(ParseError) as info:
        parse_qsl("a=%FF")

    assert isinstance(info.value.__cause__, UnicodeDecodeError)

    assert parse_qsl("a=%FF", charset="latin-1") == [("a", "ÿ")]

    with pytest.raises(ParseError):
        parse_qsl("a=ÿ€", charset="latin-1")


def test_parse_query_tokenizer(fake_tokenizer):
    from query_map import parse_query

    qm = parse_query("ignored", tokenizer=fake_tokenizer, charset="latin-1")
    assert qm.all("a") == ("1", "3")
    assert qm.all("b") == ("2",)
    assert fake_tokenizer.calls == [("ignored", {"charset": "latin-1"})]


def test_parse_query_tokenizer_error():
    from query_map import ParseError, parse_query

    def tokenizer(query):
        yield ("a", "1")
        raise ParseError("broken")

    with pytest.raises(ParseError, match="broken"):
        parse_query("a=1", tokenizer=tokenizer)


def test_parse_occurrences():
    from urllib.parse import parse_qsl as reference

    from query_map import parse_query

    query = "x=1&y=a+b&x=2&z=%2F&x=3&y=c"
    qm = parse_query(query)
    assert sorted(qm.pairs()) == sorted(reference(query, keep_blank_values=True))
    assert qm.all("x") == ("1", "2", "3")
    assert qm.all("y") == ("a b", "c")


def test_query_string_parser_chunks():
    from query_map.forms import PairsReader

    reader = PairsReader()
    for chunk in (b"answer=42&na", b"mes=bob&test", b"&names=al", b"ice&last"):
        reader.feed(chunk)

    assert reader.close() == [
        ("answer", "42"),
        ("names", "bob"),
        ("test", ""),
        ("names", "alice"),
        ("last", ""),
    ]


def test_query_string_parser_callbacks():
    from query_map import QueryStringParser

    events = []

    def on(name):
        def callback(data, start, end):
            events.append((name, bytes(data[start:end])))

        return callback

    parser = QueryStringParser(
        {name: on(name) for name in ("field_start", "field_name", "field_data", "field_end", "end")}
    )
    parser.write(b"a=1&b")
    parser.finalize()
    assert events == [
        ("field_start", b""),
        ("field_name", b"a"),
        ("field_data", b"1"),
        ("field_end", b""),
        ("field_start", b""),
        ("field_name", b"b"),
        ("field_end", b""),
        ("end", b""),
    ]


def test_parse_max_size():
    from query_map import ParseError, parse_qsl, parse_query

    assert parse_qsl("a=1&b=2", max_size=7) == [("a", "1"), ("b", "2")]

    with pytest.raises(ParseError, match="exceeds max_size"):
        parse_query("a=1&b=2&c=3", max_size=5)

    with pytest.raises(ParseError) as info:
        parse_query("a=abcdef", max_size=4)

    assert info.value.position == 4


def test_parse_max_size_chunks():
    from query_map import ParseError
    from query_map.forms import PairsReader

    reader = PairsReader(max_size=6)
    reader.feed(b"a=1&")
    with pytest.raises(ParseError):
        reader.feed(b"b=2")


@pytest.mark.parametrize("separator", [b"", b"&&"])
def test_parser_invalid_separator(separator):
    from query_map import QueryStringParser, parse_qsl

    with pytest.raises(ValueError, match="single byte"):
        QueryStringParser({}, separator=separator)

    with pytest.raises(ValueError, match="single byte"):
        parse_qsl("a=1", separator=separator)


def test_parse_custom_separator():
    from query_map import parse_qsl

    assert parse_qsl("a=1;b=2", separator=b";") == [("a", "1"), ("b", "2")]


def test_encode_query():
    from query_map import QueryMap, encode_query

    assert encode_query(QueryMap()) == ""
    assert encode_query(QueryMap({"a b": ["c/d"]})) == "a+b=c%2Fd"
    assert encode_query(QueryMap({"a": ["c/d"]}), safe="/") == "a=c/d"
