"""Locate and read the composer settings file."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "COMPOSER_CONFIG"
DEFAULT_CONFIG_RELPATH = Path("config") / "config.yaml"


def discover_config_file(start: str | os.PathLike[str] | None = None) -> Path:
    """Walk up from `start` (default: cwd) to the nearest `config/config.yaml`."""

    origin = Path(start) if start is not None else Path.cwd()
    origin = origin.resolve()
    search_from = origin.parent if origin.is_file() else origin

    for directory in (search_from, *search_from.parents):
        candidate = directory / DEFAULT_CONFIG_RELPATH
        if candidate.is_file():
            return candidate

    raise FileNotFoundError(f"No {DEFAULT_CONFIG_RELPATH.as_posix()} found at or above {search_from}")


def resolve_config_path(
    config_path: str | os.PathLike[str] | None = None,
    *,
    env_var: str = CONFIG_ENV_VAR,
) -> Path:
    """Pick the settings file: explicit argument, then `env_var`, then discovery."""

    if config_path is not None and str(config_path).strip():
        chosen = str(config_path).strip()
    else:
        chosen = os.environ.get(env_var, "").strip()

    if not chosen:
        return discover_config_file()

    path = Path(os.path.expandvars(chosen)).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    return path


def read_yaml_settings(path: str | os.PathLike[str]) -> dict[str, Any]:
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ValueError(
            f"Settings in {path} must be a YAML mapping, got {type(document).__name__}"
        )
    return dict(document)
