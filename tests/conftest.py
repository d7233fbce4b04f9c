"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from field_digest.hashing import ObjectHasher, reset_default_hasher  # noqa: E402
from field_digest.schema import SchemaRegistry  # noqa: E402

_ENV_VARS = (
    "FIELD_DIGEST_DEFAULT_ALGORITHM",
    "FIELD_DIGEST_MAX_DEPTH",
    "FIELD_DIGEST_CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear field_digest environment variables and the cached default hasher."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_default_hasher()
    yield
    reset_default_hasher()


@pytest.fixture
def registry() -> SchemaRegistry:
    """Fresh schema registry isolated from the module default."""

    return SchemaRegistry()


@pytest.fixture
def hasher(registry: SchemaRegistry) -> ObjectHasher:
    """SHA-256 hasher bound to the isolated registry."""

    return ObjectHasher(registry, default_algorithm="SHA-256")
