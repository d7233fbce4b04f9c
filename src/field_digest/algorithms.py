"""Registry of supported digest algorithms."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from field_digest.errors import UnsupportedAlgorithmError

__all__ = [
    "ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "HashAlgorithm",
    "resolve_algorithm",
    "supported_algorithms",
]


@dataclass(frozen=True, slots=True)
class HashAlgorithm:
    """A digest function keyed by a public identifier.

    Attributes:
        identifier: Public name used by callers, e.g. ``"SHA-256"``.
        hashlib_name: Name passed to :func:`hashlib.new`.
    """

    identifier: str
    hashlib_name: str

    def digest(self, data: bytes) -> bytes:
        """Return the raw digest of ``data``."""

        return hashlib.new(self.hashlib_name, data).digest()

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.hashlib_name).digest_size

    def __str__(self) -> str:
        return self.identifier


def _build_registry(*algorithms: HashAlgorithm) -> Mapping[str, HashAlgorithm]:
    return MappingProxyType({algorithm.identifier: algorithm for algorithm in algorithms})


# Only algorithms in ``hashlib.algorithms_guaranteed`` so the set is the same
# on every interpreter build.
ALGORITHMS: Final[Mapping[str, HashAlgorithm]] = _build_registry(
    HashAlgorithm("MD5", "md5"),
    HashAlgorithm("SHA-1", "sha1"),
    HashAlgorithm("SHA-224", "sha224"),
    HashAlgorithm("SHA-256", "sha256"),
    HashAlgorithm("SHA-384", "sha384"),
    HashAlgorithm("SHA-512", "sha512"),
    HashAlgorithm("SHA3-256", "sha3_256"),
    HashAlgorithm("SHA3-512", "sha3_512"),
    HashAlgorithm("BLAKE2b", "blake2b"),
    HashAlgorithm("BLAKE2s", "blake2s"),
)

DEFAULT_ALGORITHM: Final[str] = "SHA-256"

_SUPPORTED: Final[frozenset[str]] = frozenset(ALGORITHMS)
_BY_FOLDED_NAME: Final[Mapping[str, HashAlgorithm]] = MappingProxyType(
    {identifier.casefold(): algorithm for identifier, algorithm in ALGORITHMS.items()}
)


def supported_algorithms() -> frozenset[str]:
    """Return the identifiers accepted by :func:`resolve_algorithm`."""

    return _SUPPORTED


def resolve_algorithm(algorithm: str | HashAlgorithm) -> HashAlgorithm:
    """Resolve an identifier (case-insensitive) to a registered algorithm.

    Args:
        algorithm: Identifier such as ``"SHA-256"`` or a registered
            :class:`HashAlgorithm` instance.

    Raises:
        UnsupportedAlgorithmError: If ``algorithm`` is not registered.
    """

    if isinstance(algorithm, HashAlgorithm):
        registered = ALGORITHMS.get(algorithm.identifier)
        if registered == algorithm:
            return registered
        raise UnsupportedAlgorithmError(algorithm.identifier, _SUPPORTED)
    if isinstance(algorithm, str):
        resolved = _BY_FOLDED_NAME.get(algorithm.strip().casefold())
        if resolved is not None:
            return resolved
    raise UnsupportedAlgorithmError(algorithm, _SUPPORTED)
