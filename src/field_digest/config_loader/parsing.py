"""Parsing and transformation helpers for :mod:`field_digest.config_loader`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace

from field_digest.config_loader.models import DigestConfig
from field_digest.settings import FieldDigestSettings


def apply_environment_overrides(
    config: DigestConfig, settings: FieldDigestSettings
) -> DigestConfig:
    """Return ``config`` with ``FIELD_DIGEST_*`` environment values applied.

    Args:
        config: Base configuration instance.
        settings: Environment-derived settings.
    """

    hashing = config.hashing
    if settings.default_algorithm:
        hashing = replace(hashing, default_algorithm=settings.default_algorithm)
    if settings.max_depth is not None:
        hashing = replace(hashing, max_depth=settings.max_depth)
    return replace(config, hashing=hashing)


def apply_structured_overrides(
    config: DigestConfig, data: Mapping[str, object]
) -> DigestConfig:
    """Return ``config`` updated from the ``hashing`` section of a config file.

    Unknown sections are ignored, as are values of the wrong type.

    Args:
        config: Base configuration instance.
        data: Mapping parsed from configuration file.
    """

    section = data.get("hashing")
    if not isinstance(section, Mapping):
        return config

    hashing = config.hashing
    algorithm = _coerce_algorithm(section.get("default_algorithm"))
    if algorithm is not None:
        hashing = replace(hashing, default_algorithm=algorithm)
    max_depth = _coerce_depth(section.get("max_depth"))
    if max_depth is not None:
        hashing = replace(hashing, max_depth=max_depth)
    return replace(config, hashing=hashing)


def _coerce_algorithm(value: object) -> str | None:
    """Return a stripped, non-empty algorithm identifier or ``None``."""

    if not isinstance(value, str):
        return None
    return value.strip() or None


def _coerce_depth(value: object) -> int | None:
    """Parse a non-negative depth from an integer or numeric string.

    Returns:
        The depth when ``value`` is a usable integer, otherwise ``None``.
    """

    if isinstance(value, bool):
        return None
    depth: int | None = None
    if isinstance(value, int):
        depth = value
    elif isinstance(value, float) and value.is_integer():
        depth = int(value)
    elif isinstance(value, str):
        try:
            depth = int(value.strip())
        except ValueError:
            return None
    if depth is None or depth < 0:
        return None
    return depth
