"""YAML edit scripts.

A script replays a sequence of editor actions against a level, e.g.:

    steps:
      - tool: wall
      - use: [2, 3]
      - tool: {floor: PlayerButton}
      - use: [4, 4]
      - undo
      - pick: "0.1"

Each step is either a bare action name (undo, redo, up) or a mapping
with exactly one action key.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from paralevel.editor.state import (
    Action,
    BlockTool,
    Erase,
    FloorTool,
    GoUp,
    PickBlock,
    PickBlockById,
    Redo,
    RefTool,
    SelectTool,
    SetTool,
    Tool,
    Undo,
    UseTool,
    WallTool,
)
from paralevel.level.tree import parse_path


class ScriptError(ValueError):
    """Raised for a malformed edit script. `step` is 1-based, 0 for the whole document."""

    def __init__(self, message: str, step: int = 0) -> None:
        super().__init__(f"Step {step}: {message}" if step else message)
        self.step = step


_BARE_ACTIONS = {
    "undo": Undo,
    "redo": Redo,
    "up": GoUp,
}


def _cell(value: Any, step: int) -> tuple[int, int]:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise ScriptError(f"expected a cell [x, y], got {value!r}", step)
    return value[0], value[1]


def _tool(value: Any, step: int) -> Tool:
    if value == "select":
        return SelectTool()
    if value == "wall":
        return WallTool()
    if value == "block":
        return BlockTool()
    if value == "ref":
        return RefTool()
    if isinstance(value, dict) and len(value) == 1:
        (name, arg), = value.items()
        if name == "floor" and arg in ("Button", "PlayerButton"):
            return FloorTool(floor_kind=arg)
        if name == "ref" and (arg is None or (isinstance(arg, int) and not isinstance(arg, bool))):
            return RefTool(target_id=arg)
    raise ScriptError(f"unknown tool {value!r}", step)


def parse_step(raw: Any, step: int) -> Action:
    if isinstance(raw, str):
        action = _BARE_ACTIONS.get(raw)
        if action is None:
            raise ScriptError(f"unknown action {raw!r}", step)
        return action()

    if not isinstance(raw, dict) or len(raw) != 1:
        raise ScriptError("each step must be an action name or a single-key mapping", step)

    (name, value), = raw.items()
    if name in _BARE_ACTIONS:
        return _BARE_ACTIONS[name]()
    if name == "tool":
        return SetTool(_tool(value, step))
    if name == "use":
        return UseTool(*_cell(value, step))
    if name == "erase":
        return Erase(*_cell(value, step))
    if name == "pick":
        # YAML reads an unquoted 0.10 as the float 0.1
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ScriptError(f"pick needs a quoted block path such as \"0.1\", got {value!r}", step)
        try:
            return PickBlock(parse_path(str(value)))
        except ValueError as e:
            raise ScriptError(str(e), step) from e
    if name == "pick_id":
        if not isinstance(value, int) or isinstance(value, bool):
            raise ScriptError(f"pick_id needs an integer, got {value!r}", step)
        return PickBlockById(value)
    raise ScriptError(f"unknown action {name!r}", step)


def parse_script(text: str) -> list[Action]:
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ScriptError(f"Invalid YAML: {e}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("steps"), list):
        raise ScriptError("script must be a mapping with a 'steps' list")

    return [parse_step(raw, i) for i, raw in enumerate(doc["steps"], 1)]


def load_script(path: Path) -> list[Action]:
    """Read and parse a script file. OSError propagates."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ScriptError(f"Failed to read script {path}: {e}") from e
    return parse_script(text)
