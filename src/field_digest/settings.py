"""Environment-backed settings primitives for :mod:`field_digest`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["FieldDigestSettings", "get_settings"]


class FieldDigestSettings(BaseSettings):
    """Expose environment-derived configuration knobs for field hashing.

    All environment lookups go through this class. Attributes default to
    ``None`` (or an inline default) when the variable is not present.

    Attributes:
        default_algorithm: Digest algorithm used when a caller does not pass
            one explicitly.
        max_depth: Override for the canonicalization depth guard.
        config_path: Explicit path to a JSON or YAML configuration file.
    """

    default_algorithm: str | None = Field(
        default=None, alias="FIELD_DIGEST_DEFAULT_ALGORITHM"
    )
    max_depth: int | None = Field(default=None, alias="FIELD_DIGEST_MAX_DEPTH")
    config_path: str | None = Field(default=None, alias="FIELD_DIGEST_CONFIG_PATH")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("max_depth", mode="before")
    @classmethod
    def _parse_optional_int(cls, value: object) -> int | None:
        """Parse optional integer fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed non-negative integer when conversion succeeds, otherwise
            ``None``.
        """

        parsed: int | None = None
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            parsed = value
        elif isinstance(value, float) and value.is_integer():
            parsed = int(value)
        elif isinstance(value, str):
            try:
                parsed = int(value.strip())
            except ValueError:
                return None
        if parsed is None or parsed < 0:
            return None
        return parsed

    @field_validator("default_algorithm", "config_path", mode="before")
    @classmethod
    def _blank_as_none(cls, value: object) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None


def get_settings() -> FieldDigestSettings:
    """Return a :class:`FieldDigestSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return FieldDigestSettings()
