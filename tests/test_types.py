from __future__ import annotations


def test_types_available():
    from query_map import types

    assert types.TV
    assert types.TPair
    assert types.TTokenizer
    assert types.TRawQuery
    assert types.TMultiMapping
    assert types.TSingleMapping


def test_errors():
    from query_map import DeserializationError, ParseError, QueryMapError

    assert issubclass(ParseError, QueryMapError)
    assert issubclass(ParseError, ValueError)
    assert issubclass(DeserializationError, QueryMapError)

    exc = ParseError("Invalid percent-escape", 3)
    assert exc.reason == "Invalid percent-escape"
    assert exc.position == 3
    assert str(exc) == "Invalid percent-escape (at position 3)"
    assert str(ParseError("broken")) == "broken"
