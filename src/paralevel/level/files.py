from __future__ import annotations

import logging
import os
from pathlib import Path

from paralevel.level.errors import LevelFileError
from paralevel.level.parser import parse_level
from paralevel.level.serializer import serialize_level
from paralevel.level.types import Level


logger = logging.getLogger(__name__)


def load_level(path: Path) -> Level:
    """Read and parse a level file. ParseError propagates as-is."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LevelFileError(f"Failed to read level from {path}: {e}") from e
    level = parse_level(text)
    logger.debug("Loaded level from %s", path)
    return level


def save_level(level: Level, path: Path) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        # Atomic-ish write: write temp then replace.
        tmp.write_text(serialize_level(level), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as e:
        # best-effort cleanup
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError:
            pass
        raise LevelFileError(f"Failed to save level to {path}: {e}") from e
    logger.debug("Saved level to %s", path)
