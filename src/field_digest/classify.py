"""Classification of field values into scalars, collections and complex values."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from datetime import date, datetime, time
from typing import Final, cast

from field_digest.nodes import Scalar, ScalarKind

__all__ = ["SCALAR_TYPES", "is_collection", "scalar_kind", "to_scalar"]

# ``bool`` must precede ``int``: it is an ``int`` subclass.
SCALAR_TYPES: Final[tuple[tuple[type, ScalarKind], ...]] = (
    (str, "text"),
    (bool, "boolean"),
    (int, "integer"),
    (float, "float"),
    (datetime, "temporal"),
    (date, "temporal"),
    (time, "temporal"),
)

_NON_COLLECTION_TYPES: Final[tuple[type, ...]] = (str, bytes, bytearray, memoryview)


def scalar_kind(value: object) -> ScalarKind | None:
    """Return the scalar kind of ``value`` or ``None`` for non-scalars."""

    for scalar_type, kind in SCALAR_TYPES:
        if isinstance(value, scalar_type):
            return kind
    return None


def to_scalar(value: object) -> Scalar | None:
    """Wrap ``value`` in a :class:`Scalar` node when it is a registered scalar.

    Temporal values are carried as ISO-8601 text; other scalars keep their
    JSON-native Python value. Negative zero is normalised to ``0.0``.
    """

    if isinstance(value, (datetime, date, time)):
        return Scalar("temporal", value.isoformat())
    kind = scalar_kind(value)
    if kind is None:
        return None
    if kind == "boolean":
        return Scalar(kind, bool(value))
    if kind == "integer":
        return Scalar(kind, int(cast(int, value)))
    if kind == "float":
        # -0.0 == 0.0 but serialises differently; equal nodes must encode alike.
        return Scalar(kind, float(cast(float, value)) + 0.0)
    return Scalar(kind, str(value))


def is_collection(value: object) -> bool:
    """Return ``True`` for sized iterables canonicalized as ordered lists.

    Text and byte strings are not collections. Mappings are complex values
    and go through the field schema like any other object.
    """

    if isinstance(value, _NON_COLLECTION_TYPES) or isinstance(value, Mapping):
        return False
    return isinstance(value, Collection)
