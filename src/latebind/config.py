"""Bootstrap manifest loading and validation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("latebind.yaml")
DEFAULT_LOG_LEVEL = "info"
CONFIG_ENV_VAR = "LATEBIND_CONFIG"


class ConfigError(ValueError):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class LoggingConfig:
    """Logging-related configuration."""

    level: str = DEFAULT_LOG_LEVEL
    file: Path | None = None


@dataclass(frozen=True)
class Config:
    """Fully parsed manifest."""

    entry: str | None
    modules: dict[str, str] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Path | str | None = None) -> Config:
    """Load and validate the manifest from YAML."""

    config_path = _resolve_config_path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a mapping.")

    LOGGER.debug("Loaded manifest from %s", config_path)
    return _parse_config(raw)


def _resolve_config_path(explicit: Path | str | None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _parse_config(raw: dict[str, Any]) -> Config:
    modules = _parse_modules(raw.get("modules"))
    entry = _parse_entry(raw.get("entry"))
    if entry is not None and entry not in modules:
        LOGGER.warning("Entry module '%s' is not listed under 'modules'.", entry)
    return Config(
        entry=entry,
        modules=modules,
        logging=_parse_logging(raw.get("logging")),
    )


def _parse_entry(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError("entry must be a non-empty string.")
    return value.strip()


def _parse_modules(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("modules must be a mapping of module name to factory reference.")

    modules: dict[str, str] = {}
    for name, reference in value.items():
        if not isinstance(name, str) or not name:
            raise ConfigError(f"modules: invalid module name {name!r}.")
        if not isinstance(reference, str) or ":" not in reference:
            raise ConfigError(
                f"modules.{name} must be a 'package.module:attribute' reference."
            )
        modules[name] = reference.strip()
    return modules


def _parse_logging(value: Any) -> LoggingConfig:
    if value is None:
        return LoggingConfig()
    if not isinstance(value, dict):
        raise ConfigError("logging must be a mapping.")
    level = str(value.get("level", DEFAULT_LOG_LEVEL)).lower()
    file_value = value.get("file")
    if file_value is not None and not isinstance(file_value, str):
        raise ConfigError("logging.file must be a string path.")
    log_file = Path(file_value).expanduser() if file_value else None
    return LoggingConfig(level=level, file=log_file)


__all__ = [
    "Config",
    "ConfigError",
    "LoggingConfig",
    "load_config",
]
