"""Editor session state and actions.

This is the data side of an interactive level editor: which block is
open, which tool is active, and the undo history. Input handling,
rendering and viewport live elsewhere and talk to this module only
through actions.

Architecture:
- Actions are frozen dataclasses representing state transitions
- reduce(state, action) applies one action to the state
- EditorState.dispatch(action) is shorthand for reduce(self, action)
- Every level change goes through replace_at + push_edit, so it is undoable
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from paralevel.level.cells import (
    add_block,
    add_ref,
    hit_test,
    is_within,
    remove_at,
    toggle_wall,
    upsert_floor,
)
from paralevel.level.errors import ParseError
from paralevel.level.history import HistoryState, push_edit, redo, undo
from paralevel.level.parser import parse_level
from paralevel.level.serializer import serialize_level
from paralevel.level.tree import find_path_by_id, format_path, next_block_id, replace_at, resolve
from paralevel.level.types import Block, Button, Level, PlayerButton, create_empty_level


logger = logging.getLogger(__name__)


# =============================================================================
# Tools
# =============================================================================

FloorKind = Literal["Button", "PlayerButton"]


@dataclass(frozen=True)
class SelectTool:
    """Click a child block to open it, or a cell object to select it."""
    pass


@dataclass(frozen=True)
class WallTool:
    pass


@dataclass(frozen=True)
class FloorTool:
    floor_kind: FloorKind = "Button"


@dataclass(frozen=True)
class BlockTool:
    pass


@dataclass(frozen=True)
class RefTool:
    target_id: Optional[int] = None


Tool = Union[SelectTool, WallTool, FloorTool, BlockTool, RefTool]

_FLOOR_TYPES = {"Button": Button, "PlayerButton": PlayerButton}


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class SetTool:
    tool: Tool


@dataclass(frozen=True)
class UseTool:
    """Apply the current tool at a cell of the open block."""
    x: int
    y: int


@dataclass(frozen=True)
class Erase:
    """Remove leaf objects at a cell of the open block."""
    x: int
    y: int


@dataclass(frozen=True)
class GoUp:
    """Open the parent of the current block."""
    pass


@dataclass(frozen=True)
class PickBlock:
    path: tuple[int, ...]


@dataclass(frozen=True)
class PickBlockById:
    block_id: int


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class Import:
    """Replace the session with a level parsed from text."""
    text: str


Action = Union[
    SetTool,
    UseTool,
    Erase,
    GoUp,
    PickBlock,
    PickBlockById,
    Undo,
    Redo,
    Import,
]


# =============================================================================
# Reducer
# =============================================================================


def _commit(state: "EditorState", block: Block) -> None:
    """Store an edited copy of the open block as a new undoable level."""
    level = replace_at(state.level, state.selected_path, block)
    state.history = push_edit(state.history, level)
    logger.debug("Committed edit to block at %s", format_path(state.selected_path))


def _use_tool(state: "EditorState", x: int, y: int) -> None:
    block = state.selected_block
    if block is None or not is_within(block, x, y):
        return

    match state.tool:
        case SelectTool():
            hit = hit_test(block, x, y)
            if hit is None:
                state.selected_child = None
            elif hit.kind == "block":
                state.selected_path = state.selected_path + [hit.index]
                state.selected_child = None
            else:
                state.selected_child = hit.index

        case WallTool():
            _commit(state, toggle_wall(block, x, y))

        case FloorTool(floor_kind=floor_kind):
            _commit(state, upsert_floor(block, x, y, _FLOOR_TYPES[floor_kind]()))

        case BlockTool():
            size = state.block_size
            _commit(state, add_block(block, x, y, size, size, next_block_id(state.level)))

        case RefTool(target_id=target_id):
            if target_id is None:
                state.last_error = "Pick a target block id for Ref first."
                return
            _commit(state, add_ref(block, x, y, target_id))


def reduce(state: "EditorState", action: Action) -> None:
    """
    Apply an action to mutate state.

    Level values themselves are never mutated; the session swaps in new
    ones through its history.
    """
    match action:
        case SetTool(tool=tool):
            state.tool = tool
            state.last_error = None

        case UseTool(x=x, y=y):
            _use_tool(state, x, y)

        case Erase(x=x, y=y):
            block = state.selected_block
            if block is None or not is_within(block, x, y):
                return
            _commit(state, remove_at(block, x, y))
            state.selected_child = None

        case GoUp():
            if state.can_go_up:
                state.selected_path = state.selected_path[:-1]
                state.selected_child = None

        case PickBlock(path=path):
            state.selected_path = list(path)
            state.selected_child = None

        case PickBlockById(block_id=block_id):
            path = find_path_by_id(state.level, block_id)
            if path is None:
                state.last_error = f"No block with id {block_id}"
                return
            state.selected_path = list(path)
            state.selected_child = None

        case Undo():
            state.history = undo(state.history)

        case Redo():
            state.history = redo(state.history)

        case Import(text=text):
            try:
                level = parse_level(text)
            except ParseError as e:
                state.last_error = str(e)
                return
            state.history = HistoryState(level=level)
            state.selected_path = [0]
            state.tool = SelectTool()
            state.selected_child = None
            state.last_error = None


# =============================================================================
# Editor State
# =============================================================================


@dataclass
class EditorState:
    """
    One editing session over one level.

    This is a mutable dataclass. State changes happen via dispatch(action),
    which calls the reduce function to apply transitions.
    """

    history: HistoryState = field(default_factory=lambda: HistoryState(level=create_empty_level()))

    # Path of the block being edited (indexes through roots/children)
    selected_path: list[int] = field(default_factory=lambda: [0])

    tool: Tool = field(default_factory=SelectTool)

    # Index of the selected leaf in the open block, if any
    selected_child: Optional[int] = None

    last_error: Optional[str] = None

    # Side length of blocks placed by BlockTool
    block_size: int = 3

    def dispatch(self, action: Action) -> None:
        """Apply an action to update state."""
        reduce(self, action)

    @property
    def level(self) -> Level:
        return self.history.level

    @property
    def selected_block(self) -> Optional[Block]:
        return resolve(self.level, self.selected_path)

    @property
    def can_go_up(self) -> bool:
        return len(self.selected_path) > 1


def export_text(state: EditorState) -> str:
    return serialize_level(state.level)
