"""Header codec.

The header is a run of `key value...` lines ending at a line that is just
`#`. Known keys fill Header fields; anything else (including a known key
with a value we don't understand) is kept verbatim in Header.unknown so a
parse/serialize cycle reproduces it in place.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from paralevel.level.errors import ParseError
from paralevel.level.schema import to_int
from paralevel.level.types import DRAW_STYLES, Header


TERMINATOR = "#"


def parse_header(lines: Sequence[str]) -> tuple[Header, int]:
    """Parse header lines.

    `lines` must already have trailing whitespace stripped. Returns the
    header and the index of the first body line (just past the terminator,
    or len(lines) if no terminator was found).
    """
    version: int | None = None
    header = Header(version=0)
    unknown: list[str] = []

    index = 0
    while index < len(lines):
        line = lines[index]
        lineno = index + 1
        index += 1

        stripped = line.strip()
        if not stripped:
            continue
        if stripped == TERMINATOR:
            break

        tokens = stripped.split()
        key, args = tokens[0], tokens[1:]

        if key == "version":
            version = _parse_version(args, lineno)
        elif key == "attempt_order":
            header = replace(header, attempt_order=" ".join(args))
        elif key == "shed":
            header = replace(header, shed=True)
        elif key == "inner_push":
            header = replace(header, inner_push=True)
        elif key == "draw_style" and args and args[0] in DRAW_STYLES:
            header = replace(header, draw_style=args[0])
        elif key == "custom_level_music":
            header = replace(header, custom_level_music=to_int(args[0] if args else None, -1))
        elif key == "custom_level_palette":
            header = replace(header, custom_level_palette=to_int(args[0] if args else None, -1))
        else:
            unknown.append(line)

    if version is None:
        raise ParseError("Missing version header", 1)

    return replace(header, version=version, unknown=tuple(unknown)), index


def _parse_version(args: Sequence[str], lineno: int) -> int:
    try:
        value = float(args[0])
    except (IndexError, ValueError):
        raise ParseError("Invalid version", lineno) from None
    if not math.isfinite(value):
        raise ParseError("Invalid version", lineno)
    return math.trunc(value)


def serialize_header(header: Header) -> list[str]:
    """Header lines in canonical order, terminator included."""
    out = [f"version {header.version}"]
    if header.attempt_order is not None:
        out.append(f"attempt_order {header.attempt_order}".rstrip())
    if header.shed:
        out.append("shed")
    if header.inner_push:
        out.append("inner_push")
    if header.draw_style is not None:
        out.append(f"draw_style {header.draw_style}")
    if header.custom_level_music is not None:
        out.append(f"custom_level_music {header.custom_level_music}")
    if header.custom_level_palette is not None:
        out.append(f"custom_level_palette {header.custom_level_palette}")
    out.extend(header.unknown)
    out.append(TERMINATOR)
    return out
