"""Tests for ID generation system."""

from datetime import datetime

import pytest

from core.id import (
    Prefix,
    extract_prefix,
    extract_timestamp,
    is_drag_id,
    is_element_id,
    is_export_id,
    is_valid,
    new_drag_id,
    new_element_id,
    new_export_id,
    sequential_factory,
)


class TestGeneration:
    """Test basic ID generation."""

    def test_generate_unique_ids(self):
        """IDs should be unique."""
        ids = {new_element_id() for _ in range(100)}
        assert len(ids) == 100

    def test_prefixes(self):
        """Each id family carries its prefix."""
        assert new_element_id().startswith(f"{Prefix.ELEMENT}_")
        assert new_drag_id().startswith(f"{Prefix.DRAG}_")
        assert new_export_id().startswith(f"{Prefix.EXPORT}_")

    def test_ids_sortable(self):
        """Later ids sort after earlier ones."""
        first = new_element_id()
        second = new_element_id()
        assert first < second


class TestSequentialFactory:
    """Test deterministic id factory."""

    def test_sequence(self):
        factory = sequential_factory()
        assert [factory() for _ in range(3)] == ["el_1", "el_2", "el_3"]

    def test_custom_prefix_and_start(self):
        factory = sequential_factory("node", start=10)
        assert factory() == "node_10"
        assert factory() == "node_11"

    def test_factories_independent(self):
        a, b = sequential_factory(), sequential_factory()
        a()
        assert b() == "el_1"


class TestValidation:
    """Test id parsing and type guards."""

    def test_is_valid(self):
        assert is_valid(new_element_id())
        assert not is_valid("el_1")
        assert not is_valid("not-an-id")

    def test_type_guards(self):
        element_id = new_element_id()
        assert is_element_id(element_id)
        assert not is_drag_id(element_id)
        assert is_drag_id(new_drag_id())
        assert is_export_id(new_export_id())

    def test_extract_prefix(self):
        assert extract_prefix(new_export_id()) == "exp"
        assert extract_prefix("plain") is None

    def test_extract_timestamp(self):
        timestamp = extract_timestamp(new_element_id())
        assert isinstance(timestamp, datetime)
        assert extract_timestamp("garbage") is None
