from __future__ import annotations


def test_compat_json():
    from query_map._compat import json_dumps, json_loads

    data = json_dumps({"test": ["42"]})
    assert data
    assert isinstance(data, bytes)

    data = json_loads(data)
    assert data
    assert data == {"test": ["42"]}
