"""Tests for canonical node types and classification."""

from __future__ import annotations

from datetime import date, datetime, time

import pytest

from field_digest.classify import is_collection, scalar_kind, to_scalar
from field_digest.nodes import OrderedList, OrderedMap, Scalar, to_plain


def test_ordered_map_mapping_protocol() -> None:
    node = OrderedMap((("b", Scalar("integer", 1)), ("a", Scalar("text", "x"))))

    assert list(node) == ["b", "a"]
    assert node.keys() == ("b", "a")
    assert len(node) == 2
    assert "a" in node
    assert "c" not in node
    assert node["a"] == Scalar("text", "x")
    with pytest.raises(KeyError):
        node["c"]


def test_ordered_map_equality_is_order_sensitive() -> None:
    first = OrderedMap((("a", Scalar("integer", 1)), ("b", Scalar("integer", 2))))
    second = OrderedMap((("b", Scalar("integer", 2)), ("a", Scalar("integer", 1))))

    assert first != second


def test_to_plain_preserves_order() -> None:
    tree = OrderedMap(
        (
            ("z", Scalar("text", "last")),
            ("items", OrderedList((Scalar("boolean", False), OrderedMap()))),
        )
    )

    plain = to_plain(tree)

    assert plain == {"z": "last", "items": [False, {}]}
    assert list(plain) == ["z", "items"]  # type: ignore[arg-type]


def test_to_plain_rejects_foreign_objects() -> None:
    with pytest.raises(TypeError):
        to_plain({"not": "a node"})  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        ("text", "text"),
        (True, "boolean"),
        (7, "integer"),
        (2.5, "float"),
        (datetime(2024, 1, 1), "temporal"),
        (date(2024, 1, 1), "temporal"),
        (time(12, 0), "temporal"),
        (b"raw", None),
        (object(), None),
    ],
)
def test_scalar_kind(value: object, kind: str | None) -> None:
    assert scalar_kind(value) == kind


def test_to_scalar_normalises_negative_zero() -> None:
    scalar = to_scalar(-0.0)

    assert scalar == Scalar("float", 0.0)
    assert repr(scalar.value) == "0.0"  # type: ignore[union-attr]
    assert to_scalar(-1.5) == Scalar("float", -1.5)


def test_to_scalar_converts_temporal_values() -> None:
    assert to_scalar(time(9, 15)) == Scalar("temporal", "09:15:00")
    assert to_scalar(object()) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ([1, 2], True),
        ((1,), True),
        ({1, 2}, True),
        (frozenset(), True),
        ("text", False),
        (b"bytes", False),
        ({"a": 1}, False),
        (42, False),
    ],
)
def test_is_collection(value: object, expected: bool) -> None:
    assert is_collection(value) is expected
