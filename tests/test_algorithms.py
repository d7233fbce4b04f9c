"""Tests for the digest algorithm registry."""

from __future__ import annotations

import hashlib

import pytest

from field_digest.algorithms import (
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    HashAlgorithm,
    resolve_algorithm,
    supported_algorithms,
)
from field_digest.errors import UnsupportedAlgorithmError


def test_default_algorithm_is_registered() -> None:
    assert DEFAULT_ALGORITHM in supported_algorithms()


def test_registry_only_uses_guaranteed_algorithms() -> None:
    for algorithm in ALGORITHMS.values():
        assert algorithm.hashlib_name in hashlib.algorithms_guaranteed


def test_resolve_is_case_insensitive() -> None:
    assert resolve_algorithm("sha-256") is ALGORITHMS["SHA-256"]
    assert resolve_algorithm(" SHA-256 ") is ALGORITHMS["SHA-256"]


def test_resolve_accepts_registered_instance() -> None:
    algorithm = ALGORITHMS["SHA-512"]

    assert resolve_algorithm(algorithm) is algorithm


def test_resolve_rejects_unregistered_instance() -> None:
    with pytest.raises(UnsupportedAlgorithmError):
        resolve_algorithm(HashAlgorithm("SHA-256", "md5"))


@pytest.mark.parametrize("identifier", ["MD9", "", "sha256", None, 256])
def test_resolve_rejects_unknown(identifier: object) -> None:
    with pytest.raises(UnsupportedAlgorithmError) as excinfo:
        resolve_algorithm(identifier)  # type: ignore[arg-type]

    assert excinfo.value.algorithm == identifier
    assert list(excinfo.value.supported) == sorted(supported_algorithms())


def test_digest_matches_hashlib() -> None:
    algorithm = ALGORITHMS["SHA-256"]

    assert algorithm.digest(b"payload") == hashlib.sha256(b"payload").digest()
    assert algorithm.digest_size == 32
    assert str(algorithm) == "SHA-256"


def test_registry_is_read_only() -> None:
    with pytest.raises(TypeError):
        ALGORITHMS["MD9"] = HashAlgorithm("MD9", "md5")  # type: ignore[index]
