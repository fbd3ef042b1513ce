"""Tree addressing.

A path is a sequence of child indices: the first picks a root, each next
one picks a child of the previous Block. Paths only ever address Blocks.

Resolution never raises. A bad index, or a leaf where a Block is needed,
means "no match" because paths usually come from UI state that may be
stale by the time it is used.

Replacement rebuilds the spine from the root down to the addressed slot.
Untouched subtrees are shared with the old Level, which is safe because
every model value is frozen.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterator, Optional, Sequence

from paralevel.level.types import Block, Level


logger = logging.getLogger(__name__)

Path = tuple[int, ...]


def _child_block(block: Block, index: int) -> Optional[Block]:
    if not 0 <= index < len(block.children):
        return None
    child = block.children[index]
    return child if isinstance(child, Block) else None


def resolve(level: Level, path: Sequence[int]) -> Optional[Block]:
    """Return the Block at `path`, or None if the path does not lead to one."""
    if not path:
        return None
    first = path[0]
    if not 0 <= first < len(level.roots):
        return None
    current = level.roots[first]
    for index in path[1:]:
        current = _child_block(current, index)
        if current is None:
            return None
    return current


def _replace_in(block: Block, rest: Sequence[int], new_block: Block) -> Block:
    if not rest:
        return new_block
    index = rest[0]
    children = list(block.children)
    children[index] = _replace_in(block.children[index], rest[1:], new_block)
    return replace(block, children=tuple(children))


def replace_at(level: Level, path: Sequence[int], block: Block) -> Level:
    """Return a new Level with the Block at `path` replaced by `block`.

    If `path` does not resolve, the result equals `level`.
    """
    if resolve(level, path) is None:
        logger.debug("replace_at: path %s does not resolve, no change", format_path(path))
        return replace(level)

    roots = list(level.roots)
    roots[path[0]] = _replace_in(roots[path[0]], path[1:], block)
    return replace(level, roots=tuple(roots))


# =============================================================================
# Walking and lookup
# =============================================================================


def walk_blocks(level: Level) -> Iterator[tuple[Path, Block]]:
    """Yield (path, block) for every Block, depth-first pre-order."""

    def walk(block: Block, path: Path) -> Iterator[tuple[Path, Block]]:
        yield path, block
        for index, child in enumerate(block.children):
            if isinstance(child, Block):
                yield from walk(child, path + (index,))

    for index, root in enumerate(level.roots):
        yield from walk(root, (index,))


def list_all_blocks(level: Level) -> list[tuple[int, Path]]:
    """All (id, path) pairs, sorted by id. Ties keep tree order."""
    return sorted(((block.id, path) for path, block in walk_blocks(level)), key=lambda item: item[0])


def next_block_id(level: Level) -> int:
    """An id one past the largest in use (0 for a level with no blocks)."""
    return max((block.id for _, block in walk_blocks(level)), default=-1) + 1


def find_path_by_id(level: Level, block_id: int) -> Optional[Path]:
    for found_id, path in list_all_blocks(level):
        if found_id == block_id:
            return path
    return None


# =============================================================================
# Textual form
# =============================================================================


def parse_path(text: str) -> Path:
    """Parse a dotted path such as "0.2.1". The empty string is the empty path."""
    text = text.strip()
    if not text:
        return ()
    try:
        indices = tuple(int(part) for part in text.split("."))
    except ValueError:
        raise ValueError(f"Invalid block path: {text!r}") from None
    if any(i < 0 for i in indices):
        raise ValueError(f"Invalid block path: {text!r}")
    return indices


def format_path(path: Sequence[int]) -> str:
    return ".".join(str(i) for i in path)
