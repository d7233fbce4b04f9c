"""Public entry points for the :mod:`field_digest` configuration loader."""

from __future__ import annotations

from field_digest.config_loader.models import DigestConfig, HashingSettings
from field_digest.config_loader.parsing import (
    apply_environment_overrides,
    apply_structured_overrides,
)
from field_digest.config_loader.sources import load_structured_config
from field_digest.settings import FieldDigestSettings, get_settings

__all__ = [
    "DigestConfig",
    "HashingSettings",
    "load_config",
]


def load_config(
    path: str | None = None, *, settings: FieldDigestSettings | None = None
) -> DigestConfig:
    """Load configuration from environment and optional file sources.

    Defaults are overridden by environment variables, which are in turn
    overridden by the configuration file.

    Args:
        path: Optional explicit path to a configuration file. When omitted the
            loader inspects ``FIELD_DIGEST_CONFIG_PATH``; without either no file
            is read.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`field_digest.settings.get_settings` is used.

    Returns:
        Fully populated :class:`DigestConfig` instance.
    """

    env_settings = settings or get_settings()
    base = apply_environment_overrides(DigestConfig(), env_settings)
    structured = load_structured_config(path, env_settings)
    if structured is None:
        return base
    return apply_structured_overrides(base, structured)
