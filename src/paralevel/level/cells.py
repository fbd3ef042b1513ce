"""Cell-level edits and hit-testing within a single Block.

Every helper takes a Block and returns a new Block; the input is left
as-is. Coordinates are cells in the block's own grid. Child Blocks are
never removed or overwritten by a cell edit.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Optional

from paralevel.level.types import Block, Floor, FloorType, Obj, Ref, Wall


def _at(obj: Obj, x: int, y: int) -> bool:
    return obj.x == x and obj.y == y


def _is_leaf_at(obj: Obj, x: int, y: int) -> bool:
    return not isinstance(obj, Block) and _at(obj, x, y)


def is_within(block: Block, x: int, y: int) -> bool:
    return 0 <= x < block.width and 0 <= y < block.height


def toggle_wall(block: Block, x: int, y: int) -> Block:
    """Remove the Wall at (x, y) if there is one, else add one."""
    for index, child in enumerate(block.children):
        if isinstance(child, Wall) and _at(child, x, y):
            return replace(block, children=block.children[:index] + block.children[index + 1 :])
    return replace(block, children=block.children + (Wall(x=x, y=y),))


def upsert_floor(block: Block, x: int, y: int, floor_type: FloorType) -> Block:
    """Set the Floor at (x, y), in place if one exists there, else appended."""
    floor = Floor(x=x, y=y, type=floor_type)
    for index, child in enumerate(block.children):
        if isinstance(child, Floor) and _at(child, x, y):
            children = list(block.children)
            children[index] = floor
            return replace(block, children=tuple(children))
    return replace(block, children=block.children + (floor,))


def remove_at(block: Block, x: int, y: int) -> Block:
    """Remove every leaf object at (x, y)."""
    return replace(block, children=tuple(c for c in block.children if not _is_leaf_at(c, x, y)))


def add_block(block: Block, x: int, y: int, width: int, height: int, block_id: int) -> Block:
    """Append a new empty child Block. It takes its color from the parent."""
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be > 0")
    child = Block(
        x=x,
        y=y,
        id=block_id,
        width=width,
        height=height,
        hue=block.hue,
        sat=block.sat,
        val=block.val,
        zoomfactor=1.0,
    )
    return replace(block, children=block.children + (child,))


def add_ref(block: Block, x: int, y: int, target_id: int) -> Block:
    """Place a Ref to `target_id` at (x, y), replacing any leaf already there."""
    kept = tuple(c for c in block.children if not _is_leaf_at(c, x, y))
    return replace(block, children=kept + (Ref(x=x, y=y, id=target_id),))


# =============================================================================
# Hit-testing
# =============================================================================


@dataclass(frozen=True)
class Hit:
    kind: Literal["block", "leaf"]
    index: int


def hit_test(block: Block, x: int, y: int) -> Optional[Hit]:
    """Find the child under cell (x, y).

    Child Blocks win over leaves even though leaves draw on top, and later
    children win over earlier ones.
    """
    children = block.children
    for index in range(len(children) - 1, -1, -1):
        child = children[index]
        if isinstance(child, Block) and (
            child.x <= x < child.x + child.width and child.y <= y < child.y + child.height
        ):
            return Hit("block", index)
    for index in range(len(children) - 1, -1, -1):
        if _is_leaf_at(children[index], x, y):
            return Hit("leaf", index)
    return None
