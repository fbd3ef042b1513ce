"""Level text parser.

Body nesting is carried only by leading tabs: a line at depth d belongs
to the most recent Block line at depth d - 1. The builder keeps a stack
of open Blocks, one per ancestor depth, and truncates it on every line.

Parsing is all-or-nothing. Any problem raises ParseError and no partial
Level is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Union

from paralevel.level.errors import ParseError
from paralevel.level.header import parse_header
from paralevel.level.schema import decode_object
from paralevel.level.types import Block, Leaf, Level


logger = logging.getLogger(__name__)


@dataclass
class _OpenBlock:
    """A Block still collecting children while the parse is in progress."""

    block: Block
    children: list[Union["_OpenBlock", Leaf]] = field(default_factory=list)

    def close(self) -> Block:
        children = tuple(c.close() if isinstance(c, _OpenBlock) else c for c in self.children)
        return replace(self.block, children=children)


def split_lines(text: str) -> list[str]:
    """Split on any newline convention and strip trailing spaces and tabs."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return [line.rstrip(" \t") for line in text.split("\n")]


def parse_level(text: str) -> Level:
    lines = split_lines(text)
    header, start = parse_header(lines)

    roots: list[_OpenBlock] = []
    stack: list[_OpenBlock] = []
    leaves = 0

    for index in range(start, len(lines)):
        line = lines[index]
        lineno = index + 1

        content = line.lstrip("\t")
        depth = len(line) - len(content)
        content = content.strip()
        if not content:
            continue

        del stack[depth:]
        if depth > len(stack):
            raise ParseError("Invalid indentation (no parent block at that depth)", lineno)
        parent = stack[-1] if stack else None

        tokens = content.split()
        obj = decode_object(tokens[0], tokens[1:], lineno)

        if isinstance(obj, Block):
            node = _OpenBlock(obj)
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
            stack.append(node)
        else:
            if parent is None:
                raise ParseError(f"{obj.kind} must be inside a Block", lineno)
            parent.children.append(obj)
            leaves += 1

    if not roots:
        raise ParseError("No root Block found", len(lines))

    level = Level(header=header, roots=tuple(node.close() for node in roots))
    logger.debug(
        "Parsed level: version %s, %d root(s), %d leaf object(s), %d unknown header line(s)",
        header.version,
        len(level.roots),
        leaves,
        len(header.unknown),
    )
    return level
