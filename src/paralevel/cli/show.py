"""Read-only commands: paralevel tree|blocks|hit"""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from paralevel.cli.common import child_path, describe, resolve_block_or_exit
from paralevel.level.cells import hit_test
from paralevel.level.errors import LevelFileError, ParseError
from paralevel.level.files import load_level
from paralevel.level.tree import format_path, list_all_blocks
from paralevel.level.types import Block, Level


def _load_or_exit(path: Path) -> Level:
    try:
        return load_level(path)
    except (ParseError, LevelFileError) as e:
        print(str(e))
        sys.exit(1)


def _print_block(block: Block, path: tuple[int, ...], depth: int) -> None:
    indent = "  " * depth
    print(f"{indent}[{format_path(path)}] {describe(block)}")
    for index, child in enumerate(block.children):
        if isinstance(child, Block):
            _print_block(child, path + (index,), depth + 1)
        else:
            print(f"{indent}  {describe(child)}")


def register(app: typer.Typer):
    @app.command()
    def tree(path: Path = typer.Argument(..., help="Level file")):
        """Show the block tree with block paths."""
        level = _load_or_exit(path)

        print(f"version {level.header.version}")
        for index, root in enumerate(level.roots):
            _print_block(root, (index,), 0)

    @app.command()
    def blocks(path: Path = typer.Argument(..., help="Level file")):
        """List blocks by id with their paths."""
        level = _load_or_exit(path)

        for block_id, block_path in list_all_blocks(level):
            print(f"#{block_id}\t{format_path(block_path)}")

    @app.command()
    def hit(
        path: Path = typer.Argument(..., help="Level file"),
        x: int = typer.Argument(...),
        y: int = typer.Argument(...),
        block: str = typer.Option("0", "--block", "-b", help="Block path, e.g. 0.2"),
    ):
        """Show what a click on cell (x, y) of a block would pick."""
        level = _load_or_exit(path)
        block_path, target = resolve_block_or_exit(level, block)

        found = hit_test(target, x, y)
        if found is None:
            print(f"Nothing at ({x}, {y})")
            return

        child = target.children[found.index]
        if found.kind == "block":
            print(f"Block [{child_path(block_path, found.index)}] {describe(child)}")
        else:
            print(f"Leaf [{found.index}] {describe(child)}")
