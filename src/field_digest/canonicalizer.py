"""Recursive canonicalization of hashable values into canonical trees."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final

from field_digest.classify import is_collection, to_scalar
from field_digest.errors import CanonicalizationDepthError
from field_digest.nodes import CanonicalNode, OrderedList, OrderedMap
from field_digest.schema import SchemaProvider, default_registry

__all__ = ["DEFAULT_MAX_DEPTH", "Canonicalizer", "canonicalize"]

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH: Final[int] = 256


class Canonicalizer:
    """Build canonical trees from values using a :class:`SchemaProvider`.

    Instances hold no per-call state and may be shared between threads as long
    as the provider supports concurrent reads.

    Args:
        provider: Field schema provider. Defaults to
            :data:`field_digest.schema.default_registry`.
        max_depth: Maximum nesting of maps and lists below the root.
            Cyclic graphs trip this guard and raise
            :class:`~field_digest.errors.CanonicalizationDepthError`.
    """

    def __init__(
        self,
        provider: SchemaProvider | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        self.provider: SchemaProvider = (
            provider if provider is not None else default_registry
        )
        self.max_depth = max_depth

    def canonicalize(self, value: object | None) -> OrderedMap:
        """Return the canonical tree of ``value``.

        ``None`` yields an empty :class:`OrderedMap`.

        Raises:
            FieldAccessError: If a declared field cannot be read.
            CanonicalizationDepthError: If nesting exceeds ``max_depth``.
        """

        return self._map(value, 0)

    def _map(self, value: object | None, depth: int) -> OrderedMap:
        if value is None:
            return OrderedMap()
        if depth > self.max_depth:
            raise CanonicalizationDepthError(self.max_depth, type(value))

        descriptors = self.provider.fields_of(type(value))
        entries: list[tuple[str, CanonicalNode]] = []
        for descriptor in descriptors:
            field_value = self.provider.read(value, descriptor)
            if field_value is None:
                continue
            entries.append((descriptor.name, self._node(field_value, depth + 1)))

        LOGGER.debug(
            "Canonicalized value",
            extra={
                "value_type": type(value).__qualname__,
                "field_count": len(entries),
                "depth": depth,
            },
        )
        return OrderedMap(tuple(entries))

    def _node(self, value: object, depth: int) -> CanonicalNode:
        if is_collection(value):
            return self._list(value, depth)  # type: ignore[arg-type]
        scalar = to_scalar(value)
        if scalar is not None:
            return scalar
        return self._map(value, depth)

    def _list(self, items: Iterable[object], depth: int) -> OrderedList:
        if depth > self.max_depth:
            raise CanonicalizationDepthError(self.max_depth, type(items))
        # Element order is the source iteration order; items are never sorted.
        nodes = tuple(self._node(item, depth + 1) for item in items if item is not None)
        return OrderedList(nodes)


def canonicalize(
    value: object | None,
    *,
    provider: SchemaProvider | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> OrderedMap:
    """Canonicalize ``value`` with a throwaway :class:`Canonicalizer`."""

    return Canonicalizer(provider, max_depth=max_depth).canonicalize(value)
