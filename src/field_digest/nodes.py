"""Canonical tree node types.

A canonical tree is built from exactly three node classes. Absent values are
pruned during canonicalization and never appear as nodes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal, TypeAlias

__all__ = [
    "CanonicalNode",
    "OrderedList",
    "OrderedMap",
    "Scalar",
    "ScalarKind",
    "ScalarValue",
    "to_plain",
]

ScalarKind = Literal["text", "boolean", "integer", "float", "temporal"]
ScalarValue: TypeAlias = str | bool | int | float


@dataclass(frozen=True, slots=True)
class Scalar:
    """Leaf value in its JSON-native form.

    Attributes:
        kind: Scalar category. Participates in equality so that ``True`` and
            ``1`` never compare equal.
        value: JSON-native payload. Temporal values are stored as ISO-8601
            text.
    """

    kind: ScalarKind
    value: ScalarValue


@dataclass(frozen=True, slots=True)
class OrderedMap:
    """Field name to node mapping in field-selection order."""

    entries: tuple[tuple[str, CanonicalNode], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.entries)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.entries)

    def __getitem__(self, name: str) -> CanonicalNode:
        for key, node in self.entries:
            if key == name:
                return node
        raise KeyError(name)

    def keys(self) -> tuple[str, ...]:
        """Return field names in insertion order."""

        return tuple(name for name, _ in self.entries)


@dataclass(frozen=True, slots=True)
class OrderedList:
    """Collection items in source iteration order."""

    items: tuple[CanonicalNode, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CanonicalNode]:
        return iter(self.items)

    def __getitem__(self, index: int) -> CanonicalNode:
        return self.items[index]


CanonicalNode: TypeAlias = Scalar | OrderedMap | OrderedList


def to_plain(node: CanonicalNode) -> object:
    """Convert ``node`` to plain ``dict``/``list``/scalar structures.

    Dictionaries preserve insertion order, so the result can be handed to an
    order-preserving serializer without losing the canonical field order.

    Raises:
        TypeError: If ``node`` is not one of the canonical node classes.
    """

    if isinstance(node, Scalar):
        return node.value
    if isinstance(node, OrderedMap):
        return {name: to_plain(child) for name, child in node.entries}
    if isinstance(node, OrderedList):
        return [to_plain(item) for item in node.items]
    raise TypeError(f"Not a canonical node: {type(node).__name__}")
