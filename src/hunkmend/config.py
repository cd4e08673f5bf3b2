"""Settings for the edit tool and command line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

DEFAULT_CONFIG_NAME = "hunkmend.yaml"
_DEFAULT_MAX_PATCH_BYTES = 200_000
_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be used."""


class EditSettings(BaseModel):
    """Knobs consulted by :func:`hunkmend.tools.edit.edit_file`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_patch_bytes: int = _DEFAULT_MAX_PATCH_BYTES
    allow_partial_writes: bool = False
    normalise_line_endings: bool = True
    enforce_lf: bool = True
    log_level: str = "WARNING"


def _read_config_file(config_path: Path) -> Mapping[str, Any]:
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as error:
        raise ConfigError(f"Failed to parse config {config_path}: {error}") from error
    if not isinstance(loaded, Mapping):
        raise ConfigError(f"Configuration must be a mapping at the top level: {config_path}")
    return loaded


def _apply_env_overrides(values: dict[str, Any], env: Mapping[str, str]) -> None:
    env_limit = env.get("HUNKMEND_MAX_PATCH_BYTES")
    if env_limit is not None:
        try:
            parsed = int(str(env_limit).strip())
            if parsed > 0:
                values["max_patch_bytes"] = parsed
        except ValueError:
            pass

    env_partial = env.get("HUNKMEND_ALLOW_PARTIAL")
    if env_partial is not None:
        values["allow_partial_writes"] = env_partial.strip().lower() in _TRUTHY


def load_settings(
    config_path: Path | str | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> EditSettings:
    """Load the ``edit`` section of a YAML config, then apply environment overrides.

    A missing file yields the defaults.
    """
    path = Path(config_path) if config_path is not None else Path(DEFAULT_CONFIG_NAME)
    config = _read_config_file(path)

    section = config.get("edit") or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"The 'edit' section must be a mapping: {path}")

    values = dict(section)
    _apply_env_overrides(values, env if env is not None else os.environ)

    try:
        return EditSettings(**values)
    except ValidationError as error:
        raise ConfigError(f"Invalid edit settings in {path}: {error}") from error


__all__ = ["ConfigError", "DEFAULT_CONFIG_NAME", "EditSettings", "load_settings"]
