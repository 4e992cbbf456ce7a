from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from composer.foundation.config_io import CONFIG_ENV_VAR, read_yaml_settings, resolve_config_path
from composer.foundation.logging_utils import DEFAULT_LOG_FORMAT

_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0"})

LOG_LEVELS: Mapping[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.FATAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def parse_bool(value: Any, path: str) -> bool:
    """Accept real bools, 0/1, and on/off style words; anything else is an error."""

    if value is True or value is False:
        return value
    if type(value) is int and value in (0, 1):
        return value == 1
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS or word in _FALSE_WORDS:
            return word in _TRUE_WORDS
    raise ValueError(f"Invalid boolean for {path}: {value!r}")


def parse_log_level(value: Any, path: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid config type for {path}: expected log level, got bool")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Invalid log level for {path}: {value!r}")
        return value
    if isinstance(value, str):
        level = LOG_LEVELS.get(value.strip().upper())
        if level is None:
            raise ValueError(f"Unknown log level for {path}: {value!r}")
        return level
    raise ValueError(f"Invalid config type for {path}: expected log level, got {type(value).__name__}")


def parse_optional_str(value: Any, path: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Invalid config type for {path}: expected string, got {type(value).__name__}")
    text = value.strip()
    return text or None


def parse_required_str(value: Any, path: str) -> str:
    text = parse_optional_str(value, path)
    if text is None:
        raise ValueError(f"Missing required config value: {path}")
    return text


@dataclass(frozen=True)
class LoggingConfig:
    logger_name: str = "composer"
    level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_dir: str | None = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass(frozen=True)
class ComposerConfig:
    strict: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def from_dict(cfg: Mapping[str, Any]) -> tuple["ComposerConfig", list[str]]:
        """
        Parse and validate configuration, returning (ComposerConfig, warnings).

        Raises:
            ValueError: if values are invalid, or unknown keys are present with `strict: true`.
        """

        if not isinstance(cfg, Mapping):
            raise ValueError("Config must be a mapping")

        warnings: list[str] = []

        strict = False
        if "strict" in cfg:
            strict = parse_bool(cfg.get("strict"), "strict")

        schema: Mapping[str, Any] = {
            "strict": None,
            "logging": {
                "logger_name": None,
                "level": None,
                "file_level": None,
                "log_dir": None,
                "format": None,
            },
        }

        def collect_unknown_keys(mapping: Any, schema: Mapping[str, Any], *, prefix: str) -> list[str]:
            if not isinstance(mapping, Mapping):
                return []
            unknown: list[str] = []
            for key, value in mapping.items():
                path = f"{prefix}.{key}" if prefix else str(key)
                if key not in schema:
                    unknown.append(path)
                    continue
                subschema = schema[key]
                if isinstance(subschema, Mapping):
                    unknown.extend(collect_unknown_keys(value, subschema, prefix=path))
            return unknown

        unknown_keys = collect_unknown_keys(cfg, schema, prefix="")
        if unknown_keys:
            if strict:
                raise ValueError("Unknown config keys: " + ", ".join(unknown_keys))
            warnings.extend(f"Unknown config key: {key}" for key in unknown_keys)

        raw_logging = cfg.get("logging")
        if raw_logging is None:
            raw_logging = {}
        if not isinstance(raw_logging, Mapping):
            raise ValueError("Invalid config type for logging: expected mapping")

        defaults = LoggingConfig()
        logging_cfg = LoggingConfig(
            logger_name=(
                parse_required_str(raw_logging["logger_name"], "logging.logger_name")
                if "logger_name" in raw_logging
                else defaults.logger_name
            ),
            level=(
                parse_log_level(raw_logging["level"], "logging.level")
                if raw_logging.get("level") is not None
                else defaults.level
            ),
            file_level=(
                parse_log_level(raw_logging["file_level"], "logging.file_level")
                if raw_logging.get("file_level") is not None
                else defaults.file_level
            ),
            log_dir=parse_optional_str(raw_logging.get("log_dir"), "logging.log_dir"),
            format=(
                parse_required_str(raw_logging["format"], "logging.format")
                if raw_logging.get("format") is not None
                else defaults.format
            ),
        )

        return ComposerConfig(strict=strict, logging=logging_cfg), warnings


def load_composer_config(
    config_path: str | os.PathLike[str] | None = None,
    *,
    env_var: str = CONFIG_ENV_VAR,
) -> tuple[ComposerConfig, list[str], Path]:
    """Resolve, read and validate the settings file; returns (config, warnings, path)."""

    path = resolve_config_path(config_path, env_var=env_var)
    cfg, warnings = ComposerConfig.from_dict(read_yaml_settings(path))
    return cfg, warnings, path
