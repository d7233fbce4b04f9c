"""Hash pipeline: canonicalize, encode, digest, Base64.

Typical usage::

    from field_digest import hash_object, hashable

    @hashable({"name": 1, "age": 2})
    class Person:
        def __init__(self, name, age):
            self.name = name
            self.age = age

    hash_object(Person("John Doe", 30))            # default algorithm
    hash_object(Person("John Doe", 30), "SHA-512")
"""

from __future__ import annotations

import base64
import logging
from functools import lru_cache

from field_digest.algorithms import (
    DEFAULT_ALGORITHM,
    HashAlgorithm,
    resolve_algorithm,
    supported_algorithms as _supported_algorithms,
)
from field_digest.canonicalizer import DEFAULT_MAX_DEPTH, Canonicalizer
from field_digest.config_loader import DigestConfig, load_config
from field_digest.encoding import CanonicalEncoder, JsonCanonicalEncoder
from field_digest.errors import FieldDigestError
from field_digest.nodes import OrderedMap
from field_digest.schema import SchemaProvider

__all__ = [
    "ObjectHasher",
    "get_default_hasher",
    "hash_object",
    "reset_default_hasher",
    "supported_algorithms",
]

LOGGER = logging.getLogger(__name__)


class ObjectHasher:
    """Stateless service bundling provider, encoder and default algorithm.

    Args:
        provider: Field schema provider, defaults to the module registry.
        encoder: Canonical encoder, defaults to :class:`JsonCanonicalEncoder`.
        default_algorithm: Algorithm used when :meth:`hash` is called without
            one.
        max_depth: Canonicalization depth guard.

    Raises:
        UnsupportedAlgorithmError: If ``default_algorithm`` is not registered.
    """

    def __init__(
        self,
        provider: SchemaProvider | None = None,
        encoder: CanonicalEncoder | None = None,
        *,
        default_algorithm: str | HashAlgorithm = DEFAULT_ALGORITHM,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.default_algorithm = resolve_algorithm(default_algorithm)
        self.encoder: CanonicalEncoder = encoder or JsonCanonicalEncoder()
        self._canonicalizer = Canonicalizer(provider, max_depth=max_depth)

    @classmethod
    def from_config(
        cls, config: DigestConfig, provider: SchemaProvider | None = None
    ) -> ObjectHasher:
        """Build a hasher from a loaded :class:`DigestConfig`.

        The encoder is always the default :class:`JsonCanonicalEncoder`, so
        configuration never changes the bytes digested for a value.
        """

        return cls(
            provider,
            JsonCanonicalEncoder(),
            default_algorithm=config.hashing.default_algorithm,
            max_depth=config.hashing.max_depth,
        )

    @property
    def provider(self) -> SchemaProvider:
        return self._canonicalizer.provider

    @property
    def max_depth(self) -> int:
        return self._canonicalizer.max_depth

    def canonicalize(self, value: object | None) -> OrderedMap:
        """Return the canonical tree hashed for ``value``."""

        return self._canonicalizer.canonicalize(value)

    def encode(self, value: object | None) -> bytes:
        """Return the canonical bytes fed to the digest function."""

        return self.encoder.encode(self.canonicalize(value))

    def digest(
        self, value: object | None, algorithm: str | HashAlgorithm | None = None
    ) -> bytes:
        """Return the raw digest bytes of ``value``.

        Raises:
            UnsupportedAlgorithmError: If ``algorithm`` is not registered.
            FieldAccessError: If a declared field cannot be read.
            EncodingError: If the canonical tree cannot be encoded.
            CanonicalizationDepthError: If nesting exceeds ``max_depth``.
        """

        # Resolve first: an unknown algorithm must fail before any work is done.
        resolved = (
            self.default_algorithm if algorithm is None else resolve_algorithm(algorithm)
        )
        try:
            payload = self.encode(value)
        except FieldDigestError as exc:
            LOGGER.debug(
                "Hashing failed",
                extra={
                    "algorithm": resolved.identifier,
                    "value_type": type(value).__qualname__,
                    "error": type(exc).__name__,
                },
            )
            raise
        LOGGER.debug(
            "Hashing value",
            extra={
                "algorithm": resolved.identifier,
                "value_type": type(value).__qualname__,
                "payload_bytes": len(payload),
            },
        )
        return resolved.digest(payload)

    def hash(
        self, value: object | None, algorithm: str | HashAlgorithm | None = None
    ) -> str:
        """Return the Base64 digest of ``value``'s hashable fields.

        ``None`` hashes to the digest of an empty canonical map rather than
        failing.
        """

        return base64.b64encode(self.digest(value, algorithm)).decode("ascii")

    @staticmethod
    def supported_algorithms() -> frozenset[str]:
        """Return the registered algorithm identifiers."""

        return _supported_algorithms()

    def __repr__(self) -> str:
        algorithm = self.default_algorithm.identifier
        return (
            f"{type(self).__name__}(default_algorithm={algorithm!r}, "
            f"encoder={self.encoder!r}, max_depth={self.max_depth!r})"
        )


@lru_cache(maxsize=1)
def _configured_hasher() -> ObjectHasher:
    """Return the process-wide pipeline with the built-in default algorithm.

    Only ``max_depth`` is taken from configuration; the configured default
    algorithm is resolved separately by :func:`get_default_hasher`.
    """

    config = load_config()
    return ObjectHasher(max_depth=config.hashing.max_depth)


@lru_cache(maxsize=1)
def get_default_hasher() -> ObjectHasher:
    """Return the process-wide hasher built once from :func:`load_config`.

    Raises:
        UnsupportedAlgorithmError: If the configured default algorithm is not
            registered.
    """

    hasher = ObjectHasher.from_config(load_config())
    LOGGER.debug(
        "Built default hasher",
        extra={"algorithm": hasher.default_algorithm.identifier},
    )
    return hasher


def reset_default_hasher() -> None:
    """Discard the process-wide hashers so the next call reloads configuration."""

    get_default_hasher.cache_clear()
    _configured_hasher.cache_clear()


def hash_object(
    value: object | None, algorithm: str | HashAlgorithm | None = None
) -> str:
    """Hash ``value`` with ``algorithm`` or the configured default.

    The configured default algorithm is only consulted when ``algorithm`` is
    omitted, so a misconfigured default never affects explicit calls.

    Raises:
        UnsupportedAlgorithmError: If the requested algorithm (or, when
            omitted, the configured default) is not registered.
        FieldAccessError: If a declared field cannot be read.
        EncodingError: If the canonical tree cannot be encoded.
    """

    if algorithm is None:
        return get_default_hasher().hash(value)
    return _configured_hasher().hash(value, algorithm)


def supported_algorithms() -> frozenset[str]:
    """Return the registered algorithm identifiers (non-empty, immutable)."""

    return _supported_algorithms()
