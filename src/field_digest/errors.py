"""Exception hierarchy for :mod:`field_digest`."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "CanonicalizationDepthError",
    "EncodingError",
    "FieldAccessError",
    "FieldDigestError",
    "SchemaError",
    "UnsupportedAlgorithmError",
]


class FieldDigestError(Exception):
    """Base class for every error raised by the hashing pipeline."""


class UnsupportedAlgorithmError(FieldDigestError, ValueError):
    """Raised when a digest algorithm is not present in the registry.

    Attributes:
        algorithm: The identifier that failed to resolve.
        supported: Sorted tuple of identifiers that would have been accepted.
    """

    def __init__(self, algorithm: object, supported: Iterable[str]) -> None:
        self.algorithm = algorithm
        self.supported = tuple(sorted(supported))
        super().__init__(
            f"Unsupported digest algorithm {algorithm!r}; "
            f"expected one of: {', '.join(self.supported)}"
        )


class FieldAccessError(FieldDigestError, AttributeError):
    """Raised when a declared hashable field cannot be read from an instance."""

    def __init__(self, owner: type, field_name: str, reason: str | None = None) -> None:
        self.owner = owner
        self.field_name = field_name
        message = f"Cannot read hashable field {owner.__qualname__}.{field_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EncodingError(FieldDigestError, ValueError):
    """Raised when a canonical tree cannot be encoded deterministically."""


class CanonicalizationDepthError(FieldDigestError, RecursionError):
    """Raised when a value nests deeper than the configured maximum.

    Cyclic object graphs are not supported; the depth guard turns them into
    this error instead of a stack overflow.
    """

    def __init__(self, max_depth: int, value_type: type) -> None:
        self.max_depth = max_depth
        self.value_type = value_type
        super().__init__(
            f"Maximum canonicalization depth {max_depth} exceeded while "
            f"visiting {value_type.__qualname__} (cyclic graph?)"
        )


class SchemaError(FieldDigestError, TypeError):
    """Raised when a hashable field declaration is malformed."""
