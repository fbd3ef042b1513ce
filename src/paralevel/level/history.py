"""Linear undo/redo over whole-Level snapshots.

- `past` holds earlier levels, most recent last
- `future` holds undone levels, next redo first
- A new edit clears `future` (no branching)

Snapshots are complete Level values, so undo and redo are plain swaps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from paralevel.level.types import Level


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryState:
    level: Level
    past: tuple[Level, ...] = ()
    future: tuple[Level, ...] = ()

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


def push_edit(state: HistoryState, level: Level) -> HistoryState:
    """Commit `level` as the current level and clear redo history."""
    return HistoryState(level=level, past=state.past + (state.level,), future=())


def undo(state: HistoryState) -> HistoryState:
    if not state.past:
        logger.debug("undo: nothing to undo")
        return state
    return HistoryState(
        level=state.past[-1],
        past=state.past[:-1],
        future=(state.level,) + state.future,
    )


def redo(state: HistoryState) -> HistoryState:
    if not state.future:
        logger.debug("redo: nothing to redo")
        return state
    return HistoryState(
        level=state.future[0],
        past=state.past + (state.level,),
        future=state.future[1:],
    )
