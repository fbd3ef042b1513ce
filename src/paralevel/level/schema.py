"""Object schema: the fixed positional fields of each object kind.

Each object line is `<Kind> <field> <field> ...`. Field order, types and
fallback defaults live in one table per kind, which drives both decoding
and encoding so the two can't drift apart.

Numbers are lenient on the way in: a missing or non-numeric token falls
back to the field default, integers truncate toward zero, and booleans
are true only for the literal token "1".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal, Optional, Sequence

from paralevel.level.errors import ParseError
from paralevel.level.types import (
    Block,
    Break,
    Button,
    DemoEnd,
    FastTravel,
    Floor,
    FloorType,
    Gallery,
    Info,
    Obj,
    PlayerButton,
    Portal,
    Ref,
    UnknownFloor,
    Wall,
)


FieldType = Literal["int", "float", "bool"]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: FieldType
    default: Any = 0


BLOCK_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("x", "int"),
    FieldSpec("y", "int"),
    FieldSpec("id", "int"),
    FieldSpec("width", "int", 1),
    FieldSpec("height", "int", 1),
    FieldSpec("hue", "float", 0.6),
    FieldSpec("sat", "float", 0.8),
    FieldSpec("val", "float", 1.0),
    FieldSpec("zoomfactor", "float", 1.0),
    FieldSpec("fillwithwalls", "bool", False),
    FieldSpec("player", "bool", False),
    FieldSpec("possessable", "bool", False),
    FieldSpec("playerorder", "int"),
    FieldSpec("fliph", "bool", False),
    FieldSpec("floatinspace", "bool", False),
    FieldSpec("specialeffect", "int"),
)

REF_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("x", "int"),
    FieldSpec("y", "int"),
    FieldSpec("id", "int"),
    FieldSpec("exitblock", "bool", False),
    FieldSpec("infexit", "bool", False),
    FieldSpec("infexitnum", "int"),
    FieldSpec("infenter", "bool", False),
    FieldSpec("infenternum", "int"),
    FieldSpec("infenterid", "int", -1),
    FieldSpec("player", "bool", False),
    FieldSpec("possessable", "bool", False),
    FieldSpec("playerorder", "int"),
    FieldSpec("fliph", "bool", False),
    FieldSpec("floatinspace", "bool", False),
    FieldSpec("specialeffect", "int"),
)

WALL_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("x", "int"),
    FieldSpec("y", "int"),
    FieldSpec("player", "bool", False),
    FieldSpec("possessable", "bool", False),
    FieldSpec("playerorder", "int"),
)

FLOOR_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("x", "int"),
    FieldSpec("y", "int"),
)

# Floor types without parameters, by keyword
_SIMPLE_FLOORS: dict[str, type] = {
    "Button": Button,
    "PlayerButton": PlayerButton,
    "Break": Break,
    "FastTravel": FastTravel,
    "Gallery": Gallery,
    "DemoEnd": DemoEnd,
}


# =============================================================================
# Numbers
# =============================================================================


def _to_number(token: Optional[str]) -> Optional[float]:
    if token is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def to_int(token: Optional[str], default: int = 0) -> int:
    value = _to_number(token)
    if value is None:
        return default
    return math.trunc(value)


def to_float(token: Optional[str], default: float = 0.0) -> float:
    value = _to_number(token)
    if value is None:
        return default
    return value


def to_bool(token: Optional[str]) -> bool:
    return token == "1"


def format_float(value: float) -> str:
    """Render a float the way level files write numbers.

    Integral values drop the fractional part. Values down to 1e-6 are
    written positionally in full. Smaller ones are written with 6 fixed
    decimals, trailing zeros stripped.
    """
    if not math.isfinite(value):
        return "0"
    if float(value).is_integer():
        return str(int(value))
    text = repr(float(value))
    if "e" in text or "E" in text:
        if abs(value) >= 1e-6:
            text = format(Decimal(text), "f")
        else:
            text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text


def _decode_field(spec: FieldSpec, token: Optional[str]) -> Any:
    if spec.type == "int":
        return to_int(token, spec.default)
    if spec.type == "float":
        return to_float(token, spec.default)
    return to_bool(token)


def _encode_field(spec: FieldSpec, value: Any) -> str:
    if spec.type == "int":
        return str(int(value))
    if spec.type == "float":
        return format_float(value)
    return "1" if value else "0"


def decode_fields(specs: Sequence[FieldSpec], args: Sequence[str]) -> dict[str, Any]:
    """Map positional tokens onto named fields; missing tokens get defaults."""
    values: dict[str, Any] = {}
    for i, spec in enumerate(specs):
        token = args[i] if i < len(args) else None
        values[spec.name] = _decode_field(spec, token)
    return values


def encode_fields(specs: Sequence[FieldSpec], obj: Any) -> list[str]:
    return [_encode_field(spec, getattr(obj, spec.name)) for spec in specs]


# =============================================================================
# Floor types
# =============================================================================


def decode_floor_type(raw: str) -> FloorType:
    tokens = raw.split()
    if not tokens:
        return UnknownFloor(raw="")

    head = tokens[0]
    simple = _SIMPLE_FLOORS.get(head)
    if simple is not None:
        return simple()
    if head == "Portal":
        return Portal(scene_name=" ".join(tokens[1:]))
    if head == "Info":
        # Spaces separate tokens, so Info text stores them as underscores
        return Info(text=" ".join(tokens[1:]).replace("_", " "))
    return UnknownFloor(raw=raw)


def encode_floor_type(floor_type: FloorType) -> str:
    match floor_type:
        case Portal(scene_name=scene_name):
            return f"Portal {scene_name}".rstrip()
        case Info(text=text):
            return f"Info {text.replace(' ', '_')}".rstrip()
        case UnknownFloor(raw=raw):
            return raw
        case _:
            return type(floor_type).__name__


# =============================================================================
# Objects
# =============================================================================


def decode_object(keyword: str, args: Sequence[str], line: int) -> Obj:
    """Decode one object line (keyword plus its positional tokens)."""
    if keyword == "Block":
        return Block(**decode_fields(BLOCK_FIELDS, args))
    if keyword == "Ref":
        return Ref(**decode_fields(REF_FIELDS, args))
    if keyword == "Wall":
        return Wall(**decode_fields(WALL_FIELDS, args))
    if keyword == "Floor":
        pos = decode_fields(FLOOR_FIELDS, args)
        return Floor(type=decode_floor_type(" ".join(args[2:])), **pos)
    raise ParseError(f"Unknown object kind: {keyword}", line)


def encode_object(obj: Obj) -> str:
    """Encode one object as its line text, without indentation or children."""
    match obj:
        case Block():
            tokens = encode_fields(BLOCK_FIELDS, obj)
        case Ref():
            tokens = encode_fields(REF_FIELDS, obj)
        case Wall():
            tokens = encode_fields(WALL_FIELDS, obj)
        case Floor():
            tokens = encode_fields(FLOOR_FIELDS, obj)
            payload = encode_floor_type(obj.type)
            if payload:
                tokens.append(payload)
        case _:
            raise TypeError(f"Not a level object: {obj!r}")
    return " ".join([obj.kind, *tokens])
