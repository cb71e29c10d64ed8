"""Tests for FieldLocation path identifiers."""

import pytest

from fieldwalk import FieldLocation


def test_root_is_empty():
    root = FieldLocation.root()

    assert root.is_root()
    assert str(root) == ""


def test_nested_fields_join_with_dots():
    location = FieldLocation.root().field("a").field("b").field("c")

    assert str(location) == "a.b.c"
    assert location.segments == ("a", "b", "c")


def test_index_segments_attach_without_dot():
    location = FieldLocation.root().field("books").element(0).field("title")

    assert location.segments == ("books", "[0]", "title")
    assert str(location) == "books[0].title"


def test_nested_indexes():
    location = FieldLocation.root().field("grid").element(1).element(2)

    assert str(location) == "grid[1][2]"


def test_root_element():
    assert str(FieldLocation.root().element(3)) == "[3]"


def test_map_segments_use_key_repr():
    prices = FieldLocation.root().field("prices")

    assert str(prices.key("eur")) == "prices.key('eur')"
    assert str(prices.value("eur")) == "prices.value('eur')"
    assert str(prices.value(7)) == "prices.value(7)"


def test_locations_are_hashable_and_immutable():
    location = FieldLocation(("a",))

    assert {location: 1}[FieldLocation(("a",))] == 1
    with pytest.raises(AttributeError):
        location.segments = ()  # type: ignore[misc]
