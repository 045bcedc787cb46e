#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration models and loading for shipsrc.

The configuration file is TOML with a single ``[publisher]`` table::

    [publisher]
    enabled = true
    staging_root = "/var/lib/shipsrc/staging"
    default_branch = "main"

``SHIPSRC_ENABLED`` and ``SHIPSRC_STAGING_ROOT`` override the file values.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
import tempfile
import tomllib
from typing import Any

from attrs import define, field, fields, validators
from provide.foundation.logger import get_logger
from provide.foundation.parsers import parse_bool

log = get_logger(__name__)

ENV_ENABLED = "SHIPSRC_ENABLED"
ENV_STAGING_ROOT = "SHIPSRC_STAGING_ROOT"


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed or is invalid."""


def _default_staging_root() -> Path:
    return Path(tempfile.gettempdir()) / "shipsrc"


def _to_schemes(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    return tuple(str(scheme).lower() for scheme in value)


def _non_empty(instance: Any, attribute: Any, value: str) -> None:
    if not value.strip():
        raise ValueError(f"'{attribute.name}' must be a non-empty string")


def _schemes_not_empty(instance: Any, attribute: Any, value: tuple[str, ...]) -> None:
    if not value:
        raise ValueError("'allowed_schemes' must list at least one scheme")


@define(frozen=True)
class PublisherConfig:
    """Settings for the RepositoryPublisher."""

    enabled: bool = field(default=True, validator=validators.instance_of(bool))
    staging_root: Path = field(factory=_default_staging_root, converter=Path)
    default_branch: str = field(default="main", validator=[validators.instance_of(str), _non_empty])
    remote_name: str = field(default="origin", validator=[validators.instance_of(str), _non_empty])
    allowed_schemes: tuple[str, ...] = field(
        default=("http", "https"), converter=_to_schemes, validator=_schemes_not_empty
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "staging_root": str(self.staging_root),
            "default_branch": self.default_branch,
            "remote_name": self.remote_name,
            "allowed_schemes": list(self.allowed_schemes),
        }


def _apply_env_overrides(values: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    if environ.get(ENV_ENABLED):
        try:
            values["enabled"] = parse_bool(environ[ENV_ENABLED])
        except ValueError as e:
            raise ConfigurationError(f"Environment variable {ENV_ENABLED} must be a boolean: {e}") from e
    if environ.get(ENV_STAGING_ROOT):
        values["staging_root"] = environ[ENV_STAGING_ROOT]
    return values


def build_config(data: Mapping[str, Any], environ: Mapping[str, str] | None = None) -> PublisherConfig:
    """Build a PublisherConfig from the ``[publisher]`` table contents plus environment overrides."""
    known = {a.name for a in fields(PublisherConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown publisher settings: {', '.join(sorted(unknown))}")

    values = _apply_env_overrides(dict(data), os.environ if environ is None else environ)
    try:
        return PublisherConfig(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid publisher configuration: {e}") from e


def load_config(config_path: Path | None, environ: Mapping[str, str] | None = None) -> PublisherConfig:
    """Load the publisher configuration.

    Args:
        config_path: TOML file to read, or None for defaults plus environment
        environ: Environment to read overrides from (defaults to ``os.environ``)

    Raises:
        FileNotFoundError: If ``config_path`` does not exist
        ConfigurationError: If the file is not valid TOML or holds invalid values
    """
    if config_path is None:
        return build_config({}, environ)

    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        document = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Cannot parse {config_path}: {e}") from e

    section = document.get("publisher", {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"'publisher' in {config_path} must be a table")

    config = build_config(section, environ)
    log.debug("Configuration loaded", path=str(config_path), **config.to_dict())
    return config


# 🔼⚙️🔚
