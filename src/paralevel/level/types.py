"""Level data model.

A Level is a header plus a forest of root Blocks. Blocks own an ordered
tuple of children (Blocks and leaf objects). Order is z-order: earlier
children render below later ones, later ones win hit-testing.

All values are frozen; edits build new values (see tree.py and cells.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Union


DrawStyle = Literal["tui", "grid", "oldstyle"]
DRAW_STYLES: tuple[str, ...] = ("tui", "grid", "oldstyle")


@dataclass(frozen=True)
class Header:
    version: int
    attempt_order: Optional[str] = None
    shed: bool = False
    inner_push: bool = False
    draw_style: Optional[DrawStyle] = None
    custom_level_music: Optional[int] = None
    custom_level_palette: Optional[int] = None
    # Unrecognized header lines, verbatim and in original order
    unknown: tuple[str, ...] = ()


# =============================================================================
# Floor types
# =============================================================================


@dataclass(frozen=True)
class Button:
    pass


@dataclass(frozen=True)
class PlayerButton:
    pass


@dataclass(frozen=True)
class Portal:
    scene_name: str = ""


@dataclass(frozen=True)
class Info:
    text: str = ""


@dataclass(frozen=True)
class Break:
    pass


@dataclass(frozen=True)
class FastTravel:
    pass


@dataclass(frozen=True)
class Gallery:
    pass


@dataclass(frozen=True)
class DemoEnd:
    pass


@dataclass(frozen=True)
class UnknownFloor:
    """Unrecognized floor payload, kept as raw text so it re-serializes as-is."""

    raw: str = ""


FloorType = Union[
    Button,
    PlayerButton,
    Portal,
    Info,
    Break,
    FastTravel,
    Gallery,
    DemoEnd,
    UnknownFloor,
]


# =============================================================================
# Objects
# =============================================================================


@dataclass(frozen=True)
class Wall:
    x: int
    y: int
    player: bool = False
    possessable: bool = False
    playerorder: int = 0

    kind = "Wall"


@dataclass(frozen=True)
class Floor:
    x: int
    y: int
    type: FloorType = field(default_factory=Button)

    kind = "Floor"


@dataclass(frozen=True)
class Ref:
    """A cell that stands for another block, by id.

    The target id is a plain value. Nothing here resolves it.
    """

    x: int
    y: int
    id: int
    exitblock: bool = False
    infexit: bool = False
    infexitnum: int = 0
    infenter: bool = False
    infenternum: int = 0
    infenterid: int = -1
    player: bool = False
    possessable: bool = False
    playerorder: int = 0
    fliph: bool = False
    floatinspace: bool = False
    specialeffect: int = 0

    kind = "Ref"


@dataclass(frozen=True)
class Block:
    x: int
    y: int
    id: int
    width: int = 1
    height: int = 1
    hue: float = 0.6
    sat: float = 0.8
    val: float = 1.0
    zoomfactor: float = 1.0
    fillwithwalls: bool = False
    player: bool = False
    possessable: bool = False
    playerorder: int = 0
    fliph: bool = False
    floatinspace: bool = False
    specialeffect: int = 0
    children: tuple["Obj", ...] = ()

    kind = "Block"


Leaf = Union[Ref, Wall, Floor]
Obj = Union[Block, Ref, Wall, Floor]


@dataclass(frozen=True)
class Level:
    header: Header
    roots: tuple[Block, ...]


def create_empty_level(width: int = 9, height: int = 9) -> Level:
    """A fresh level: version 4 header and a single empty root block, id 0."""
    return Level(
        header=Header(version=4),
        roots=(
            Block(
                x=-1,
                y=-1,
                id=0,
                width=width,
                height=height,
                hue=0.6,
                sat=0.8,
                val=1.0,
                zoomfactor=1.0,
            ),
        ),
    )
