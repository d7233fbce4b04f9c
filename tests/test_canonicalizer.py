"""Tests for canonical tree construction."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from field_digest.canonicalizer import Canonicalizer, canonicalize
from field_digest.errors import CanonicalizationDepthError, FieldAccessError
from field_digest.nodes import OrderedList, OrderedMap, Scalar
from field_digest.schema import SchemaRegistry
from sample_models import (
    NameOnly,
    Node,
    Parent,
    ParentWithList,
    Person,
    PersonReordered,
)


@pytest.fixture
def canonicalizer(registry: SchemaRegistry) -> Canonicalizer:
    return Canonicalizer(registry)


def test_none_root_is_empty_map(canonicalizer: Canonicalizer) -> None:
    assert canonicalizer.canonicalize(None) == OrderedMap()


def test_fields_follow_order_keys(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(PersonReordered("John Doe", 30))

    assert tree.keys() == ("name", "age")
    assert tree["name"] == Scalar("text", "John Doe")
    assert tree["age"] == Scalar("integer", 30)


def test_unselected_attributes_are_ignored(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(Person("John Doe", 30, nickname="JD"))

    assert "nickname" not in tree


def test_absent_field_matches_undeclared_field(canonicalizer: Canonicalizer) -> None:
    with_absent = canonicalizer.canonicalize(Person("John Doe", None))
    undeclared = canonicalizer.canonicalize(NameOnly("John Doe"))

    assert with_absent == undeclared
    assert "age" not in with_absent


def test_nested_value_becomes_map(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(Parent("Parent", 40, Person("Child", 12)))

    child = tree["child"]
    assert isinstance(child, OrderedMap)
    assert child == OrderedMap(
        (("name", Scalar("text", "Child")), ("age", Scalar("integer", 12)))
    )


def test_list_preserves_order_and_skips_none(canonicalizer: Canonicalizer) -> None:
    children = [Person("B", 2), None, Person("A", 1)]

    tree = canonicalizer.canonicalize(ParentWithList("Parent", 40, children))

    items = tree["children"]
    assert isinstance(items, OrderedList)
    assert len(items) == 2
    assert [item["name"] for item in items] == [  # type: ignore[index]
        Scalar("text", "B"),
        Scalar("text", "A"),
    ]


def test_empty_collection_is_kept(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(ParentWithList("Parent", 40, []))

    assert tree["children"] == OrderedList()


def test_collection_of_scalars_and_nested_lists(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(ParentWithList("P", 1, ("x", 2, [True, None])))

    assert tree["children"] == OrderedList(
        (
            Scalar("text", "x"),
            Scalar("integer", 2),
            OrderedList((Scalar("boolean", True),)),
        )
    )


def test_temporal_scalars_use_isoformat(canonicalizer: Canonicalizer) -> None:
    moment = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

    tree = canonicalizer.canonicalize(Parent(moment, date(2024, 5, 1)))

    assert tree["name"] == Scalar("temporal", "2024-05-01T12:30:00+00:00")
    assert tree["age"] == Scalar("temporal", "2024-05-01")


def test_boolean_and_integer_are_distinct(canonicalizer: Canonicalizer) -> None:
    as_bool = canonicalizer.canonicalize(Person("x", True))
    as_int = canonicalizer.canonicalize(Person("x", 1))

    assert as_bool != as_int


def test_undeclared_nested_type_is_empty_map(canonicalizer: Canonicalizer) -> None:
    tree = canonicalizer.canonicalize(Parent("Parent", 40, object()))

    assert tree["child"] == OrderedMap()


def test_field_access_error(canonicalizer: Canonicalizer) -> None:
    class Broken:
        __hashable_fields__ = {"name": 1}

        @property
        def name(self) -> str:
            raise AttributeError("not loaded")

    with pytest.raises(FieldAccessError, match="Broken.name"):
        canonicalizer.canonicalize(Broken())


def test_depth_guard_allows_max_depth(registry: SchemaRegistry) -> None:
    chain = Node("c", Node("b", Node("a")))

    tree = Canonicalizer(registry, max_depth=2).canonicalize(chain)

    assert tree["next"]["next"]["label"] == Scalar("text", "a")  # type: ignore[index]


def test_depth_guard_rejects_deeper_chain(registry: SchemaRegistry) -> None:
    chain = Node("d", Node("c", Node("b", Node("a"))))

    with pytest.raises(CanonicalizationDepthError):
        Canonicalizer(registry, max_depth=2).canonicalize(chain)


def test_self_referential_list_hits_depth_guard(registry: SchemaRegistry) -> None:
    loop: list[object] = []
    loop.append(loop)

    with pytest.raises(CanonicalizationDepthError):
        Canonicalizer(registry, max_depth=8).canonicalize(ParentWithList("P", 1, loop))


def test_negative_max_depth_rejected(registry: SchemaRegistry) -> None:
    with pytest.raises(ValueError):
        Canonicalizer(registry, max_depth=-1)


def test_module_canonicalize_uses_default_registry() -> None:
    tree = canonicalize(Person("John Doe", 30))

    assert tree.keys() == ("name", "age")
