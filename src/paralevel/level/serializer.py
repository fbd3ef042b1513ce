from __future__ import annotations

from typing import Iterator

from paralevel.level.header import serialize_header
from paralevel.level.schema import encode_object
from paralevel.level.types import Block, Level, Obj


def iter_body_lines(obj: Obj, depth: int = 0) -> Iterator[str]:
    """Pre-order walk: the object's line, then each child one tab deeper."""
    yield "\t" * depth + encode_object(obj)
    if isinstance(obj, Block):
        for child in obj.children:
            yield from iter_body_lines(child, depth + 1)


def serialize_level(level: Level) -> str:
    """Render a Level as level text. Inverse of parse_level."""
    out = serialize_header(level.header)
    for root in level.roots:
        out.extend(iter_body_lines(root))
    return "\n".join(out) + "\n"
