"""Tests for multi-key sorting."""

from tfctl.sorting import SortKey, parse_sort_spec, sort_dataset


def test_parse_sort_spec():
    assert parse_sort_spec("name") == [SortKey("name")]
    assert parse_sort_spec("-name") == [SortKey("name", descending=True)]
    assert parse_sort_spec("!name") == [SortKey("name", case_sensitive=True)]
    assert parse_sort_spec("!-name") == parse_sort_spec("-!name")
    assert parse_sort_spec("") == []
    assert parse_sort_spec(" , -") == []


def test_descending():
    rows = [{"name": "a"}, {"name": "c"}, {"name": "b"}]
    sort_dataset(rows, "-name")
    assert [r["name"] for r in rows] == ["c", "b", "a"]


def test_case_insensitive_by_default():
    rows = [{"name": "b"}, {"name": "A"}, {"name": "a"}, {"name": "B"}]
    sort_dataset(rows, "name")
    assert [r["name"] for r in rows] == ["A", "a", "b", "B"]


def test_case_sensitive():
    rows = [{"name": "b"}, {"name": "A"}, {"name": "a"}, {"name": "B"}]
    sort_dataset(rows, "!name")
    assert [r["name"] for r in rows] == ["A", "B", "a", "b"]


def test_numbers_sort_numerically():
    rows = [{"n": 10}, {"n": 9}, {"n": 100}]
    sort_dataset(rows, "n")
    assert [r["n"] for r in rows] == [9, 10, 100]


def test_multi_key_tie_break():
    rows = [
        {"count": 2, "name": "a"},
        {"count": 1, "name": "z"},
        {"count": 2, "name": "b"},
        {"count": 1, "name": "y"},
    ]
    sort_dataset(rows, "count,-name")
    assert [(r["count"], r["name"]) for r in rows] == [
        (1, "z"),
        (1, "y"),
        (2, "b"),
        (2, "a"),
    ]


def test_sort_is_stable():
    rows = [{"k": 1, "i": 0}, {"k": 0, "i": 1}, {"k": 1, "i": 2}, {"k": 0, "i": 3}]
    sort_dataset(rows, "k")
    assert [r["i"] for r in rows] == [1, 3, 0, 2]


def test_missing_values_sort_first():
    rows = [{"name": "b"}, {}, {"name": "a"}]
    sort_dataset(rows, "name")
    assert [r.get("name") for r in rows] == [None, "a", "b"]


def test_empty_spec_keeps_order():
    rows = [{"n": 2}, {"n": 1}]
    assert sort_dataset(rows, "") == [{"n": 2}, {"n": 1}]
