"""Deterministic byte encoding of canonical trees."""

from __future__ import annotations

import json
from typing import Protocol

from field_digest.errors import EncodingError
from field_digest.nodes import CanonicalNode, to_plain

__all__ = ["CanonicalEncoder", "JsonCanonicalEncoder"]


class CanonicalEncoder(Protocol):
    """Serializer contract for canonical trees.

    Implementations must be deterministic and preserve map key order and list
    element order exactly.
    """

    def encode(self, node: CanonicalNode) -> bytes:
        """Return the byte encoding of ``node``."""


class JsonCanonicalEncoder:
    """Compact UTF-8 JSON encoder.

    Keys are emitted in canonical insertion order, never sorted. Non-finite
    floats are rejected because JSON has no representation for them.

    Args:
        ensure_ascii: Escape non-ASCII characters. Changing this changes the
            bytes, and therefore every hash, for non-ASCII text.
    """

    def __init__(self, *, ensure_ascii: bool = True) -> None:
        self.ensure_ascii = ensure_ascii

    def encode(self, node: CanonicalNode) -> bytes:
        """Encode ``node`` to bytes.

        Raises:
            EncodingError: If the tree contains a value JSON cannot represent
                deterministically (NaN, infinities) or a non-node object.
        """

        try:
            text = json.dumps(
                to_plain(node),
                separators=(",", ":"),
                ensure_ascii=self.ensure_ascii,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Cannot encode canonical tree: {exc}") from exc
        return text.encode("utf-8")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ensure_ascii={self.ensure_ascii!r})"
