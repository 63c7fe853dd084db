"""Grid topologies: the square and hexagonal direction sets.

Piece ``i`` has type ``i + 1``; the type is a bitmask over the ordinals of the
topology's directions, and a set bit means the piece has a beam on that side.

Square grid (ordinals)::

         0
       . | .
     3 --+-- 1      index 9 = type 10 = RIGHT | LEFT, a horizontal bar.
       . | .
         2

Hex grid, offset columns. Odd columns sit half a cell lower than even ones::

     +---+       +---+
    /     \\     /     \\                 0
   +  0,0  +---+  2,0  +              +---+
    \\     /     \\     /          5   /     \\  1
     +---+  1,0  +---+               +   .   +
    /     \\     /     \\          4   \\     /  2
   +  0,1  +---+  2,1  +              +---+
    \\     /     \\     /                 3
     +---+  1,1  +---+
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, NamedTuple, Tuple, Union

from .types import Pos


def piece_type(piece_index: int) -> int:
    """Return the side bitmask of a piece."""

    return piece_index + 1


def has_path(ordinal: int, piece_index: int) -> bool:
    """Return whether the piece has a beam on the side with the given ordinal."""

    mask = 1 << ordinal
    return (piece_type(piece_index) & mask) == mask


class RectDirection(Enum):
    """Sides of a square cell."""

    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def opposite(self) -> "RectDirection":
        return _RECT_RULES[self].opposite

    def step(self, pos: Pos) -> Pos:
        return _RECT_RULES[self].step(pos)

    def has_path(self, piece_index: int) -> bool:
        return has_path(self.value, piece_index)


class HexDirection(Enum):
    """Sides of a hex cell in the offset-column layout."""

    NORTH = 0
    NORTH_EAST = 1
    SOUTH_EAST = 2
    SOUTH = 3
    SOUTH_WEST = 4
    NORTH_WEST = 5

    def opposite(self) -> "HexDirection":
        return _HEX_RULES[self].opposite

    def step(self, pos: Pos) -> Pos:
        return _HEX_RULES[self].step(pos)

    def has_path(self, piece_index: int) -> bool:
        return has_path(self.value, piece_index)


Direction = Union[RectDirection, HexDirection]


class _Rule(NamedTuple):
    step: Callable[[Pos], Pos]
    opposite: Direction


_RECT_RULES: Dict[RectDirection, _Rule] = {
    RectDirection.UP: _Rule(lambda p: Pos(p.x, p.y - 1), RectDirection.DOWN),
    RectDirection.RIGHT: _Rule(lambda p: Pos(p.x + 1, p.y), RectDirection.LEFT),
    RectDirection.DOWN: _Rule(lambda p: Pos(p.x, p.y + 1), RectDirection.UP),
    RectDirection.LEFT: _Rule(lambda p: Pos(p.x - 1, p.y), RectDirection.RIGHT),
}

# The row offset of a diagonal step depends on the parity of the starting column.
_HEX_RULES: Dict[HexDirection, _Rule] = {
    HexDirection.NORTH: _Rule(lambda p: Pos(p.x, p.y - 1), HexDirection.SOUTH),
    HexDirection.NORTH_EAST: _Rule(lambda p: Pos(p.x + 1, p.y + (p.x & 1) - 1), HexDirection.SOUTH_WEST),
    HexDirection.SOUTH_EAST: _Rule(lambda p: Pos(p.x + 1, p.y + (p.x & 1)), HexDirection.NORTH_WEST),
    HexDirection.SOUTH: _Rule(lambda p: Pos(p.x, p.y + 1), HexDirection.NORTH),
    HexDirection.SOUTH_WEST: _Rule(lambda p: Pos(p.x - 1, p.y + (p.x & 1)), HexDirection.NORTH_EAST),
    HexDirection.NORTH_WEST: _Rule(lambda p: Pos(p.x - 1, p.y + (p.x & 1) - 1), HexDirection.SOUTH_EAST),
}

RECT_DIRECTIONS: Tuple[RectDirection, ...] = tuple(RectDirection)
HEX_DIRECTIONS: Tuple[HexDirection, ...] = tuple(HexDirection)

TOPOLOGIES: Dict[str, Tuple[Direction, ...]] = {
    "rect": RECT_DIRECTIONS,
    "hex": HEX_DIRECTIONS,
}


def directions_for(topology: str) -> Tuple[Direction, ...]:
    """Return the ordered direction set for ``"rect"`` or ``"hex"``."""

    try:
        return TOPOLOGIES[topology]
    except KeyError as exc:
        raise ValueError(f"Unknown topology '{topology}'") from exc


def beam_directions(directions, piece_index: int) -> Tuple[Direction, ...]:
    """Return the directions in which the piece has a beam, in ordinal order."""

    return tuple(d for d in directions if d.has_path(piece_index))
