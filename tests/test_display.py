"""Display-string helper tests: natural forms and the JSON fallback."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from fallible._display import to_display_string

pytestmark = pytest.mark.unit


class Opaque:
    def __init__(self) -> None:
        self.x = 1
        self.tags = ["a"]


class Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("no string form")


class Slotted:
    __slots__ = ("x",)

    def __init__(self) -> None:
        self.x = 1


@dataclass
class Point:
    x: int
    y: int


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("x", "x"),
        (42, "42"),
        (None, "None"),
        ([1, 2, 3], "[1, 2, 3]"),
        (Point(1, 2), "Point(x=1, y=2)"),
        ({"a": 1}, '{"a":1}'),
        ({}, "{}"),
    ],
)
def test_natural_and_structured_forms(value: object, expected: str) -> None:
    assert to_display_string(value) == expected


def test_plain_objects_serialize_their_attributes() -> None:
    assert to_display_string(Opaque()) == '{"x":1,"tags":["a"]}'


def test_unserializable_mapping_keeps_natural_form() -> None:
    value = {"a": {1, 2}}

    assert to_display_string(value) == str(value)


def test_circular_mapping_keeps_natural_form() -> None:
    value: dict[str, object] = {}
    value["self"] = value

    assert to_display_string(value) == str(value)


def test_slotted_objects_keep_natural_form() -> None:
    value = Slotted()

    assert to_display_string(value) == str(value)


class Inner:
    def __init__(self) -> None:
        self.a = 1


class Outer:
    def __init__(self) -> None:
        self.inner = Inner()


def test_nested_plain_objects_serialize_recursively() -> None:
    assert to_display_string(Outer()) == '{"inner":{"a":1}}'


def test_plain_objects_inside_mappings_serialize() -> None:
    assert to_display_string({"k": Inner()}) == '{"k":{"a":1}}'


def test_nested_unserializable_value_keeps_natural_form() -> None:
    value = {"k": Inner(), "slots": Slotted()}

    assert to_display_string(value) == str(value)


def test_failing_str_falls_back_to_default_repr() -> None:
    assert to_display_string(Unprintable()).startswith("<")
