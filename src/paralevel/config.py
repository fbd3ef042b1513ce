"""Configuration for the paralevel CLI.

Read from $PARALEVEL_CONFIG, else ./.paralevel.yml. A missing file is
not an error; every setting has a default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml


CONFIG_ENV = "PARALEVEL_CONFIG"
CONFIG_FILENAME = ".paralevel.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file exists but is malformed."""


@dataclass(frozen=True)
class Config:
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    new_level_width: int = 9
    new_level_height: int = 9
    block_size: int = 3


def config_path(work_dir: Path | None = None) -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return (work_dir or Path.cwd()) / CONFIG_FILENAME


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid config: '{name}' must be a mapping")
    return section


def _positive_int(section: dict, key: str, default: int, where: str) -> int:
    value: Any = section.get(key, default)
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise ConfigError(f"Invalid config: '{where}.{key}' must be a positive integer")
    return value


def load_config(work_dir: Path | None = None) -> Config:
    path = config_path(work_dir)
    if not path.exists():
        return Config()

    try:
        cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"Invalid config in {path}: expected a mapping")

    log = _section(cfg, "logging")
    level = str(log.get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Invalid config: unknown logging level '{level}'")
    log_file = log.get("file")

    new_level = _section(cfg, "new_level")
    editor = _section(cfg, "editor")

    return Config(
        log_level=level,
        log_file=Path(log_file) if log_file else None,
        new_level_width=_positive_int(new_level, "width", 9, "new_level"),
        new_level_height=_positive_int(new_level, "height", 9, "new_level"),
        block_size=_positive_int(editor, "block_size", 3, "editor"),
    )


def configure_logging(config: Config, *, verbose: bool = False) -> None:
    kwargs: dict[str, Any] = {
        "level": logging.DEBUG if verbose else config.log_level,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    }
    if config.log_file is not None:
        kwargs["filename"] = config.log_file
    logging.basicConfig(**kwargs)
