"""`paralevel apply` command: replay a YAML edit script against a level."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from paralevel.cli.common import get_config
from paralevel.editor.script import ScriptError, load_script
from paralevel.editor.state import EditorState
from paralevel.level.errors import LevelFileError, ParseError
from paralevel.level.files import load_level, save_level
from paralevel.level.history import HistoryState


logger = logging.getLogger(__name__)


def register(app: typer.Typer):
    @app.command()
    def apply(
        ctx: typer.Context,
        path: Path = typer.Argument(..., help="Level file"),
        script: Path = typer.Argument(..., help="YAML edit script"),
        output: Optional[Path] = typer.Option(
            None, "--output", "-o", help="Write here instead of in place"
        ),
    ):
        """Run an edit script (tools, clicks, undo/redo) and save the result."""
        try:
            level = load_level(path)
            actions = load_script(script)
        except (ParseError, LevelFileError, ScriptError) as e:
            print(str(e))
            sys.exit(1)
        except OSError as e:
            print(f"Failed to read script {script}: {e}")
            sys.exit(1)

        state = EditorState(
            history=HistoryState(level=level),
            block_size=get_config(ctx).block_size,
        )
        for step, action in enumerate(actions, 1):
            state.dispatch(action)
            if state.last_error is not None:
                print(f"! Step {step}: {state.last_error}")
                logger.info("Step %d (%s): %s", step, action, state.last_error)
                state.last_error = None

        target = output or path
        try:
            save_level(state.level, target)
        except LevelFileError as e:
            print(str(e))
            sys.exit(1)

        print(
            f"✓ Applied {len(actions)} step(s): "
            f"{len(state.history.past)} edit(s) kept, {len(state.history.future)} undone"
        )
