"""Edit commands: paralevel edit wall|floor|ref|block|remove

Each command makes one edit to the block at --block (default: the first
root) and saves the level in place.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional

import typer

from paralevel.cli.common import get_config, resolve_block_or_exit
from paralevel.level.cells import add_block, add_ref, is_within, remove_at, toggle_wall, upsert_floor
from paralevel.level.errors import LevelFileError, ParseError
from paralevel.level.files import load_level, save_level
from paralevel.level.tree import format_path, next_block_id, replace_at
from paralevel.level.types import (
    Block,
    Break,
    Button,
    DemoEnd,
    FastTravel,
    FloorType,
    Gallery,
    Info,
    Level,
    PlayerButton,
    Portal,
)


FLOOR_TYPES: dict[str, type] = {
    "Button": Button,
    "PlayerButton": PlayerButton,
    "Portal": Portal,
    "Info": Info,
    "Break": Break,
    "FastTravel": FastTravel,
    "Gallery": Gallery,
    "DemoEnd": DemoEnd,
}
FLOOR_KINDS = tuple(FLOOR_TYPES)

BLOCK_OPTION = typer.Option("0", "--block", "-b", help="Block path, e.g. 0.2")


def _floor_type(kind: str, text: Optional[str]) -> FloorType:
    if kind == "Portal":
        return Portal(scene_name=text or "")
    if kind == "Info":
        return Info(text=text or "")
    return FLOOR_TYPES[kind]()


def _edit_block(
    path: Path,
    selector: str,
    x: int,
    y: int,
    edit: Callable[[Level, Block], Block],
) -> str:
    """Load, edit the selected block at a cell, save. Returns the block path."""
    try:
        level = load_level(path)
    except (ParseError, LevelFileError) as e:
        print(str(e))
        sys.exit(1)

    block_path, block = resolve_block_or_exit(level, selector)
    if not is_within(block, x, y):
        print(f"Cell ({x}, {y}) is outside block {format_path(block_path)} ({block.width}x{block.height})")
        sys.exit(1)

    level = replace_at(level, block_path, edit(level, block))
    try:
        save_level(level, path)
    except LevelFileError as e:
        print(str(e))
        sys.exit(1)
    return format_path(block_path)


def register(app: typer.Typer):
    @app.command()
    def wall(
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        block: str = BLOCK_OPTION,
    ):
        """Toggle a wall at a cell."""
        where = _edit_block(path, block, x, y, lambda _, b: toggle_wall(b, x, y))
        print(f"✓ Wall toggled at ({x}, {y}) in block {where}")

    @app.command()
    def floor(
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        kind: str = typer.Argument(..., help="Button, PlayerButton, Portal, Info, Break, ..."),
        text: Optional[str] = typer.Option(None, "--text", "-t", help="Scene name (Portal) or text (Info)"),
        block: str = BLOCK_OPTION,
    ):
        """Set the floor at a cell."""
        if kind not in FLOOR_KINDS:
            print(f"Unknown floor type: {kind} (choose from {', '.join(FLOOR_KINDS)})")
            sys.exit(1)

        floor_type = _floor_type(kind, text)
        where = _edit_block(path, block, x, y, lambda _, b: upsert_floor(b, x, y, floor_type))
        print(f"✓ Floor {kind} set at ({x}, {y}) in block {where}")

    @app.command()
    def ref(
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        target: int = typer.Argument(..., help="Id of the referenced block"),
        block: str = BLOCK_OPTION,
    ):
        """Place a reference to another block at a cell."""
        where = _edit_block(path, block, x, y, lambda _, b: add_ref(b, x, y, target))
        print(f"✓ Ref to #{target} placed at ({x}, {y}) in block {where}")

    @app.command("block")
    def add_child_block(
        ctx: typer.Context,
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        width: Optional[int] = typer.Option(None, min=1, help="Child width (default: editor.block_size)"),
        height: Optional[int] = typer.Option(None, min=1, help="Child height (default: editor.block_size)"),
        block_id: Optional[int] = typer.Option(None, "--id", help="Child id (default: next free id)"),
        block: str = BLOCK_OPTION,
    ):
        """Add a child block at a cell."""
        size = get_config(ctx).block_size
        w = width or size
        h = height or size
        placed: list[int] = []

        def edit(level: Level, parent: Block) -> Block:
            new_id = block_id if block_id is not None else next_block_id(level)
            placed.append(new_id)
            return add_block(parent, x, y, w, h, new_id)

        where = _edit_block(path, block, x, y, edit)
        print(f"✓ Block #{placed[0]} ({w}x{h}) added at ({x}, {y}) in block {where}")

    @app.command()
    def remove(
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        block: str = BLOCK_OPTION,
    ):
        """Remove walls, floors and refs at a cell."""
        where = _edit_block(path, block, x, y, lambda _, b: remove_at(b, x, y))
        print(f"✓ Cell ({x}, {y}) cleared in block {where}")
