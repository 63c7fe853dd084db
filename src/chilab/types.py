"""Core value types for the China Labyrinth rule engine.

Coordinates:
- ``x`` is the column and grows to the right, ``y`` is the row and grows downward.
- A piece is identified by its index ``0..N-1``; its beam pattern is derived from
  that index (see :mod:`chilab.directions`), so pieces are never relabeled.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .directions import HexDirection, RectDirection

    Direction = Union[RectDirection, HexDirection]


@dataclass(frozen=True, order=True)
class Pos:
    """A grid position. Ordered by ``x`` first, then ``y``."""

    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """Half-open rectangle: ``left <= x < right`` and ``top <= y < bottom``."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


EMPTY_RECT = Rect(0, 0, 0, 0)


@dataclass(frozen=True)
class Progress:
    """Diagnostics describing how close an arrangement is to a solution.

    ``group_count`` is the number of disjoint connected groups, ``disconnection_count``
    the number of beams without a matching beam on the neighbouring piece, and
    ``overlap_count`` the number of piece sides without a beam that touch another piece.
    """

    group_count: int
    disconnection_count: int
    overlap_count: int

    def is_solved(self) -> bool:
        """A single group, no dangling beams, and no pieces touching without a beam."""

        return self.group_count == 1 and self.disconnection_count == 0 and self.overlap_count == 0


@dataclass(frozen=True)
class Step:
    """One step of a breadth-first search over a group.

    Every piece except the first is reached from an earlier step (``previous_step_index``
    is an index into the step sequence, not a piece index) by moving in ``direction``.
    The step sequence encodes the shape of the group.
    """

    piece_index: int
    previous_step_index: int = -1
    direction: Optional["Direction"] = None
