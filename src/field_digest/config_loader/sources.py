"""Configuration file discovery for :mod:`field_digest.config_loader`.

A file is read only when a path is given explicitly or through
``FIELD_DIGEST_CONFIG_PATH``. There is no search relative to the working
directory, so the same process configuration is seen from any cwd.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, TextIO, cast

from field_digest.settings import FieldDigestSettings

LOGGER = logging.getLogger(__name__)


class YamlModule(Protocol):
    """Protocol describing the subset of PyYAML used by the loader."""

    YAMLError: type[Exception]

    def safe_load(self, stream: TextIO | str) -> object:
        """Parse YAML content from a text stream or string."""


def load_structured_config(
    path: str | None, settings: FieldDigestSettings
) -> dict[str, object] | None:
    """Read the configuration file named by ``path`` or the environment.

    Args:
        path: Explicit configuration path provided by the caller.
        settings: Environment-derived settings supplying
            ``FIELD_DIGEST_CONFIG_PATH`` when ``path`` is omitted.

    Returns:
        The parsed top-level mapping, or ``None`` when no file is configured
        or the file is missing, unreadable or malformed.
    """

    location = path if path is not None else settings.config_path
    if not location:
        return None
    candidate = Path(location)
    data = _read_config_file(candidate)
    if data is not None:
        LOGGER.debug("Loaded configuration", extra={"config_path": str(candidate)})
    return data


def _read_config_file(path: Path) -> dict[str, object] | None:
    if not path.is_file():
        return None
    suffix = path.suffix.lower()
    if suffix == ".json":
        return _read_json(path)
    if suffix in {".yml", ".yaml"}:
        return _read_yaml(path)
    LOGGER.warning(
        "Ignoring configuration with unknown suffix", extra={"config_path": str(path)}
    )
    return None


def _read_json(path: Path) -> dict[str, object] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return None
    except json.JSONDecodeError:
        LOGGER.warning(
            "Ignoring malformed JSON configuration", extra={"config_path": str(path)}
        )
        return None
    return _string_keyed(data)


def _read_yaml(path: Path) -> dict[str, object] | None:
    module = _import_yaml_module()
    if module is None:
        return None
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = module.safe_load(handle)
    except (OSError, UnicodeDecodeError):
        return None
    except module.YAMLError:
        LOGGER.warning(
            "Ignoring malformed YAML configuration", extra={"config_path": str(path)}
        )
        return None
    return _string_keyed(data)


def _import_yaml_module() -> YamlModule | None:
    """Import PyYAML lazily so JSON-only deployments never load it."""

    try:
        import yaml
    except ModuleNotFoundError:
        return None
    return cast(YamlModule, yaml)


def _string_keyed(value: object) -> dict[str, object] | None:
    """Return ``value`` restricted to its string keys, or ``None`` if not a dict."""

    if not isinstance(value, dict):
        return None
    return {key: item for key, item in value.items() if isinstance(key, str)}
