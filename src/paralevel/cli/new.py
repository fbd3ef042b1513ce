"""`paralevel new` command."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from paralevel.cli.common import get_config
from paralevel.level.errors import LevelFileError
from paralevel.level.files import save_level
from paralevel.level.types import create_empty_level


def register(app: typer.Typer):
    @app.command()
    def new(
        ctx: typer.Context,
        path: Path = typer.Argument(..., help="Level file to create"),
        width: Optional[int] = typer.Option(None, min=1, help="Root block width"),
        height: Optional[int] = typer.Option(None, min=1, help="Root block height"),
        force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
    ):
        """Create an empty level."""
        cfg = get_config(ctx)
        if path.exists() and not force:
            print(f"Refusing to overwrite {path} (use --force)")
            sys.exit(1)

        w = width or cfg.new_level_width
        h = height or cfg.new_level_height
        try:
            save_level(create_empty_level(width=w, height=h), path)
        except LevelFileError as e:
            print(str(e))
            sys.exit(1)

        print(f"✓ Level created: {path} ({w}x{h})")
