from __future__ import annotations

import pytest


@pytest.fixture()
def raw_map():
    return {"foo": ["bar", "baz"], "single": ["one"], "empty": []}


@pytest.fixture()
def qm(raw_map):
    from query_map import QueryMap

    return QueryMap(raw_map)


@pytest.fixture()
def fake_tokenizer():
    calls = []

    def tokenizer(query, **options):
        calls.append((query, options))
        return iter([("a", "1"), ("b", "2"), ("a", "3")])

    tokenizer.calls = calls
    return tokenizer
