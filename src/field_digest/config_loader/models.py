"""Typed configuration dataclasses for :mod:`field_digest.config_loader`."""

from __future__ import annotations

from dataclasses import dataclass, field

from field_digest.algorithms import DEFAULT_ALGORITHM
from field_digest.canonicalizer import DEFAULT_MAX_DEPTH


@dataclass(slots=True)
class HashingSettings:
    """Settings for the hash pipeline.

    Neither knob changes the bytes produced for a given value and algorithm:
    one picks the algorithm used when callers omit it, the other bounds how
    deep canonicalization may recurse before failing.

    Attributes:
        default_algorithm: Algorithm identifier used when callers omit one.
            Validated against the registry only when it is actually used.
        max_depth: Canonicalization depth guard.
    """

    default_algorithm: str = DEFAULT_ALGORITHM
    max_depth: int = DEFAULT_MAX_DEPTH


@dataclass(slots=True)
class DigestConfig:
    """Strongly typed configuration container for field hashing."""

    hashing: HashingSettings = field(default_factory=HashingSettings)
