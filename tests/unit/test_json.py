"""Tests for JSON helpers."""

import pytest

from core.json import (
    JSONParseError,
    extract_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
)


@pytest.mark.unit
def test_extract_json_plain():
    assert extract_json('{"elements": []}') == {"elements": []}


@pytest.mark.unit
def test_extract_json_from_markdown_fence():
    text = 'Here is the page:\n```json\n{"elements": [{"type": "button"}]}\n```'
    assert extract_json(text)["elements"][0]["type"] == "button"


@pytest.mark.unit
def test_extract_json_strict_rejects_invalid():
    with pytest.raises(JSONParseError):
        extract_json('{"elements": [1, 2,}', repair=False)


@pytest.mark.unit
def test_extract_json_repairs_trailing_comma():
    assert extract_json('{"elements": [1, 2,]}') == {"elements": [1, 2]}


@pytest.mark.unit
def test_extract_json_no_object():
    with pytest.raises(JSONParseError):
        extract_json("no json here")


@pytest.mark.unit
def test_safe_json_dumps_sorted_and_indented():
    assert safe_json_dumps({"b": 1, "a": 2}, sort_keys=True) == '{"a":2,"b":1}'
    assert safe_json_dumps({"a": [1]}, indent=2) == '{\n  "a": [\n    1\n  ]\n}'


@pytest.mark.unit
def test_validate_json_size_counts_bytes():
    validate_json_size("ab", max_size=2)
    with pytest.raises(JSONParseError):
        validate_json_size("é", max_size=1)


@pytest.mark.unit
def test_validate_json_depth():
    validate_json_depth({"a": {"b": 1}}, max_depth=2)
    with pytest.raises(JSONParseError):
        validate_json_depth({"a": {"b": {"c": 1}}}, max_depth=2)
