"""Tests for dotted path resolution."""

from tfctl.driller import drill


def test_simple_key():
    assert drill({"name": "alice"}, "name") == "alice"


def test_nested_key():
    doc = {"user": {"profile": {"name": "alice"}}}
    assert drill(doc, "user.profile.name") == "alice"


def test_missing_key_returns_none():
    assert drill({"user": {}}, "user.name") is None
    assert drill({"user": "alice"}, "user.name") is None


def test_empty_path_returns_document():
    doc = {"a": 1}
    assert drill(doc, "") is doc


def test_array_index():
    doc = {"items": [{"id": "a"}, {"id": "b"}]}
    assert drill(doc, "items[1].id") == "b"


def test_array_index_out_of_range():
    doc = {"items": ["a", "b"]}
    assert drill(doc, "items[5]") is None
    assert drill(doc, "items[-1]") is None


def test_nested_indexes():
    doc = {"grid": [[1, 2], [3, 4]]}
    assert drill(doc, "grid[1][0]") == 3


def test_single_element_list_is_unwrapped():
    assert drill({"items": ["only"]}, "items") == "only"


def test_single_element_list_is_drilled_through():
    doc = {"instances": [{"attributes": {"id": "i-1"}}]}
    assert drill(doc, "instances.attributes.id") == "i-1"


def test_longer_lists_are_returned_whole():
    assert drill({"tags": ["a", "b"]}, "tags") == ["a", "b"]


def test_falsy_values_are_returned():
    doc = {"enabled": False, "count": 0}
    assert drill(doc, "enabled") is False
    assert drill(doc, "count") == 0


def test_unwrap_disabled_keeps_final_list():
    doc = {"tags": ["dev"], "instances": [{"attributes": {"tags": ["a"]}}]}
    assert drill(doc, "tags", unwrap=False) == ["dev"]
    assert drill(doc, "instances.attributes.tags", unwrap=False) == ["a"]
    assert drill(doc, "instances.attributes.tags") == "a"
