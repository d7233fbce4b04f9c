"""Field Digest - deterministic hashing of selected object fields."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "CanonicalizationDepthError",
    "Canonicalizer",
    "EncodingError",
    "FieldAccessError",
    "FieldDigestError",
    "HashableField",
    "ObjectHasher",
    "SchemaError",
    "SchemaRegistry",
    "UnsupportedAlgorithmError",
    "canonicalize",
    "hash_object",
    "hashable",
    "hashable_field",
    "supported_algorithms",
]

if TYPE_CHECKING:
    from .canonicalizer import Canonicalizer, canonicalize
    from .errors import (
        CanonicalizationDepthError,
        EncodingError,
        FieldAccessError,
        FieldDigestError,
        SchemaError,
        UnsupportedAlgorithmError,
    )
    from .hashing import ObjectHasher, hash_object, supported_algorithms
    from .schema import HashableField, SchemaRegistry, hashable, hashable_field


def __getattr__(name: str) -> Any:
    """Lazily import submodules so pydantic is only loaded when needed."""

    module_map = {
        "CanonicalizationDepthError": "errors",
        "Canonicalizer": "canonicalizer",
        "EncodingError": "errors",
        "FieldAccessError": "errors",
        "FieldDigestError": "errors",
        "HashableField": "schema",
        "ObjectHasher": "hashing",
        "SchemaError": "errors",
        "SchemaRegistry": "schema",
        "UnsupportedAlgorithmError": "errors",
        "canonicalize": "canonicalizer",
        "hash_object": "hashing",
        "hashable": "schema",
        "hashable_field": "schema",
        "supported_algorithms": "hashing",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
