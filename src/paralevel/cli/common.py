"""Helpers shared by CLI commands."""

from __future__ import annotations

import sys

import typer

from paralevel.config import Config
from paralevel.level.schema import encode_floor_type
from paralevel.level.tree import format_path, parse_path, resolve
from paralevel.level.types import Block, Floor, Level, Obj, Ref, Wall


def get_config(ctx: typer.Context) -> Config:
    """Config loaded by the app callback (defaults when run without it)."""
    obj = ctx.find_root().obj
    return obj if isinstance(obj, Config) else Config()


def resolve_block_or_exit(level: Level, selector: str) -> tuple[tuple[int, ...], Block]:
    """Resolve a dotted block path, or print why not and exit."""
    try:
        path = parse_path(selector)
    except ValueError as e:
        print(str(e))
        sys.exit(1)

    block = resolve(level, path)
    if block is None:
        print(f"Block not found: {selector or '(empty path)'}")
        sys.exit(1)
    return path, block


def describe(obj: Obj) -> str:
    """One-line human description of a level object."""
    if isinstance(obj, Block):
        return f"Block #{obj.id} {obj.width}x{obj.height} at ({obj.x}, {obj.y})"
    if isinstance(obj, Ref):
        return f"Ref ({obj.x}, {obj.y}) -> #{obj.id}"
    if isinstance(obj, Wall):
        return f"Wall ({obj.x}, {obj.y})"
    if isinstance(obj, Floor):
        payload = encode_floor_type(obj.type)
        return f"Floor ({obj.x}, {obj.y}) {payload}".rstrip()
    return repr(obj)


def child_path(path: tuple[int, ...], index: int) -> str:
    return format_path(path + (index,))
