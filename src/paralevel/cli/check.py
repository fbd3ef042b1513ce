"""Validation and formatting commands: paralevel check|fmt"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from paralevel.level.errors import LevelFileError, ParseError
from paralevel.level.files import load_level, save_level
from paralevel.level.parser import parse_level
from paralevel.level.serializer import serialize_level
from paralevel.level.tree import walk_blocks


def register(app: typer.Typer):
    @app.command()
    def check(path: Path = typer.Argument(..., help="Level file")):
        """Parse a level file and report problems."""
        try:
            level = load_level(path)
        except (ParseError, LevelFileError) as e:
            print(str(e))
            sys.exit(1)

        block_count = sum(1 for _ in walk_blocks(level))
        print(
            f"✓ Level OK (version {level.header.version}, "
            f"{len(level.roots)} root(s), {block_count} block(s))"
        )

    @app.command()
    def fmt(
        path: Path = typer.Argument(..., help="Level file"),
        check_only: bool = typer.Option(
            False, "--check", help="Only report whether the file is canonical"
        ),
        output: Optional[Path] = typer.Option(
            None, "--output", "-o", help="Write here instead of in place"
        ),
    ):
        """Rewrite a level file in canonical form."""
        try:
            original = path.read_text(encoding="utf-8")
            level = parse_level(original)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Failed to read level from {path}: {e}")
            sys.exit(1)
        except ParseError as e:
            print(str(e))
            sys.exit(1)

        canonical = serialize_level(level)
        if check_only:
            if canonical != original:
                print(f"Not canonical: {path}")
                sys.exit(1)
            print(f"✓ Canonical: {path}")
            return

        target = output or path
        try:
            save_level(level, target)
        except LevelFileError as e:
            print(str(e))
            sys.exit(1)

        status = "unchanged" if canonical == original and target == path else "written"
        print(f"✓ Level {status}: {target}")
