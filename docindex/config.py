"""Page manifests — which data files make up a page and how it is assembled.

A manifest is a small YAML file::

    title: syn
    install_registrar: last   # "first" or "last"
    log_level: INFO
    implementors:
      - implementors/core/hash/trait.Hash.js
    sidebar:
      - syn/sidebar-items.js

Relative paths are resolved against the manifest's directory. The
``DOCINDEX_LOG_LEVEL`` environment variable overrides ``log_level``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from docindex.exceptions import ConfigError

LOG_LEVEL_ENV = "DOCINDEX_LOG_LEVEL"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class RegistrarTiming(Enum):
    """When the implementor registrar is installed relative to the data files."""

    FIRST = "first"  # Before any contributor runs
    LAST = "last"  # After every contributor has run


@dataclass
class PageConfig:
    """A page manifest."""

    title: str = ""
    implementors: list[Path] = field(default_factory=list)
    sidebar: list[Path] = field(default_factory=list)
    install_registrar: RegistrarTiming = RegistrarTiming.LAST
    log_level: str = "WARNING"

    @property
    def scripts(self) -> list[Path]:
        """Data files in load order: sidebar first, as the page header does."""
        return self.sidebar + self.implementors

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_config(path: str | Path) -> PageConfig:
    """Load a page manifest from a YAML file."""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Manifest not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: manifest must be a mapping")

    base = path.parent
    try:
        timing = RegistrarTiming(data.get("install_registrar", "last"))
    except ValueError as e:
        raise ConfigError(
            f"{path}: install_registrar must be 'first' or 'last', "
            f"got {data.get('install_registrar')!r}"
        ) from e

    config = PageConfig(
        title=str(data.get("title", path.stem)),
        implementors=[_resolve(base, p) for p in _path_list(data, "implementors", path)],
        sidebar=[_resolve(base, p) for p in _path_list(data, "sidebar", path)],
        install_registrar=timing,
        log_level=str(data.get("log_level", "WARNING")).upper(),
    )
    apply_env_overrides(config)

    if config.log_level not in VALID_LOG_LEVELS:
        raise ConfigError(f"{path}: invalid log level '{config.log_level}'")

    return config


def apply_env_overrides(config: PageConfig) -> PageConfig:
    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        config.log_level = level.upper()
    return config


def _path_list(data: dict, key: str, source: Path) -> list[str]:
    value = data.get(key) or []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{source}: '{key}' must be a list of paths")
    return value


def _resolve(base: Path, value: str) -> Path:
    p = Path(value)
    return p if p.is_absolute() else base / p
