"""Bijective mapping between piece indices and grid positions."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .types import EMPTY_RECT, Pos, Rect

logger = logging.getLogger(__name__)

PosLike = Union[Pos, Tuple[int, int]]


def as_pos(pos: PosLike, y: Optional[int] = None) -> Pos:
    if y is not None:
        return Pos(pos, y)  # type: ignore[arg-type]
    if isinstance(pos, Pos):
        return pos
    x, y = pos
    return Pos(x, y)


def _build_index(positions: Sequence[Pos]) -> Dict[Pos, int]:
    index: Dict[Pos, int] = {}
    for i, pos in enumerate(positions):
        if pos in index:
            raise ValueError(f"duplicate piece position {pos} (pieces {index[pos]} and {i})")
        index[pos] = i
    return index


class ReadonlyPiecePositionIndex:
    """Read-only queries over an ordered list of piece positions.

    Piece ``i`` is at ``get(i)``; ``index_of`` is the O(1) reverse lookup. This is
    the interface handed to group finding, progress calculation and rendering.
    """

    _positions: List[Pos]
    _index: Dict[Pos, int]

    def size(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def get(self, i: int) -> Pos:
        """Return the position of piece ``i``; raises ``IndexError`` if out of range."""

        if not 0 <= i < len(self._positions):
            raise IndexError(f"piece index {i} out of range [0, {len(self._positions)})")
        return self._positions[i]

    def index_of(self, pos: PosLike, y: Optional[int] = None) -> Optional[int]:
        """Return the index of the piece at ``pos`` (or ``(x, y)``), or ``None``."""

        return self._index.get(as_pos(pos, y))

    def contains(self, pos: PosLike, y: Optional[int] = None) -> bool:
        return as_pos(pos, y) in self._index

    def __contains__(self, pos: object) -> bool:
        if isinstance(pos, tuple) and len(pos) == 2:
            pos = Pos(*pos)
        return pos in self._index

    def __iter__(self) -> Iterator[Pos]:
        return iter(tuple(self._positions))

    def to_list(self) -> List[Pos]:
        return list(self._positions)

    def bounding_rect(self) -> Rect:
        """Smallest rect with ``left <= x < right`` and ``top <= y < bottom`` for every piece."""

        if not self._positions:
            return EMPTY_RECT
        xs = [p.x for p in self._positions]
        ys = [p.y for p in self._positions]
        return Rect(min(xs), min(ys), max(xs) + 1, max(ys) + 1)


class PositionSnapshot(ReadonlyPiecePositionIndex):
    """Immutable copy of an index at one point in time."""

    def __init__(self, positions: Iterable[Pos] = ()) -> None:
        self._positions = list(positions)
        self._index = _build_index(self._positions)
        self._key = tuple(self._positions)

    def positions(self) -> Tuple[Pos, ...]:
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PositionSnapshot):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"PositionSnapshot({list(self._key)!r})"


class PiecePositionIndex(ReadonlyPiecePositionIndex):
    """Mutable position index owned by a single puzzle session.

    Invariant: no two pieces share a position, and every piece has exactly one.
    """

    def __init__(self, positions: Optional[Iterable[Pos]] = None) -> None:
        self._positions = []
        self._index = {}
        if positions is not None:
            self.assign(positions)

    def assign(self, positions: Iterable[Pos]) -> None:
        """Replace all positions. Raises ``ValueError`` on duplicates and leaves the index untouched."""

        new_positions = [as_pos(p) for p in positions]
        new_index = _build_index(new_positions)
        self._positions = new_positions
        self._index = new_index

    def copy(self) -> "PiecePositionIndex":
        clone = PiecePositionIndex()
        clone._positions = list(self._positions)
        clone._index = dict(self._index)
        return clone

    def snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(self._positions)

    def move_or_swap(self, i: int, dst: PosLike) -> None:
        """Move piece ``i`` to ``dst``.

        If ``dst`` is occupied by another piece, that piece takes piece ``i``'s old
        position. Either way piece ``i`` ends up at ``dst``.
        """

        src = self.get(i)
        dst = as_pos(dst)
        if src == dst:
            return
        j = self._index.get(dst)
        if j is None:
            del self._index[src]
            logger.debug("move piece %d %s -> %s", i, src, dst)
        else:
            self._positions[j] = src
            self._index[src] = j
            logger.debug("swap piece %d %s <-> piece %d %s", i, src, j, dst)
        self._positions[i] = dst
        self._index[dst] = i

    def __repr__(self) -> str:
        return f"PiecePositionIndex({self._positions!r})"
