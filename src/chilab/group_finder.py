"""Connected groups via breadth-first search.

A group is a maximal set of pieces connected by bidirectional beams: piece ``i``
reaches piece ``j`` in direction ``d`` only if ``i`` has a beam in ``d``, ``j``
occupies ``d.step(pos(i))`` and ``j`` has a beam in ``d.opposite()``.

Selections of pieces are represented as bitmasks, which caps the piece count at
:data:`MAX_MASK_PIECES`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .position_index import ReadonlyPiecePositionIndex
from .types import Pos, Step

MAX_MASK_PIECES = 64


class _Search:
    def __init__(self, directions: Sequence, index: ReadonlyPiecePositionIndex, record_steps: bool) -> None:
        self.directions = tuple(directions)
        self.index = index
        self.seen = [False] * index.size()
        self.queue: List[int] = []
        self.queue_pos = 0
        self.steps: Optional[List[Step]] = [] if record_steps else None

    def add(self, i: int, direction=None) -> bool:
        if self.seen[i]:
            return False
        self.seen[i] = True
        self.queue.append(i)
        if self.steps is not None:
            # The piece currently being expanded sits at queue_pos - 1.
            self.steps.append(Step(i, self.queue_pos - 1, direction))
        return True

    def drain(self) -> None:
        while self.queue_pos < len(self.queue):
            i = self.queue[self.queue_pos]
            self.queue_pos += 1
            pos = self.index.get(i)
            for d in self.directions:
                if not d.has_path(i):
                    continue
                j = self.index.index_of(d.step(pos))
                if j is not None and d.opposite().has_path(j):
                    self.add(j, d)


def count_groups(directions: Sequence, index: ReadonlyPiecePositionIndex) -> int:
    """Return the number of connected groups on the whole board."""

    search = _Search(directions, index, record_steps=False)
    groups = 0
    for i in range(index.size()):
        if search.add(i):
            groups += 1
            search.drain()
    return groups


def calculate_steps(directions: Sequence, index: ReadonlyPiecePositionIndex, first_piece: int) -> Tuple[Step, ...]:
    """Return the BFS steps of the group containing ``first_piece``; the seed comes first."""

    index.get(first_piece)
    search = _Search(directions, index, record_steps=True)
    search.add(first_piece)
    search.drain()
    return tuple(search.steps or ())


def get_pieces(steps: Iterable[Step]) -> Tuple[int, ...]:
    return tuple(step.piece_index for step in steps)


def get_piece_mask(steps: Iterable[Step]) -> int:
    """Return a bitmask of the pieces in ``steps``.

    Raises:
        ValueError: if a piece index does not fit in a 64-bit mask.
    """

    mask = 0
    for step in steps:
        if not 0 <= step.piece_index < MAX_MASK_PIECES:
            raise ValueError(
                f"piece index {step.piece_index} does not fit in a {MAX_MASK_PIECES}-bit selection mask"
            )
        mask |= 1 << step.piece_index
    return mask


def reconstruct_positions(steps: Sequence[Step], first_pos: Pos) -> Tuple[Pos, ...]:
    """Replay ``steps`` with the first piece placed at ``first_pos``."""

    positions: List[Pos] = []
    for n, step in enumerate(steps):
        if n == 0:
            positions.append(first_pos)
            continue
        if step.direction is None or not 0 <= step.previous_step_index < n:
            raise ValueError(f"step {n} does not refer to an earlier step")
        positions.append(step.direction.step(positions[step.previous_step_index]))
    return tuple(positions)


def is_dragged(mask: int, piece_index: int) -> bool:
    return (mask >> piece_index) & 1 == 1


def is_multi_drag(mask: int) -> bool:
    """Whether more than one bit is set."""

    return (mask & (mask - 1)) != 0


def get_dragged_index(mask: int) -> Optional[int]:
    """Lowest piece index in the mask, or ``None`` for an empty mask."""

    if mask == 0:
        return None
    return (mask & -mask).bit_length() - 1


def mask_to_pieces(mask: int) -> Tuple[int, ...]:
    return tuple(i for i in range(mask.bit_length()) if (mask >> i) & 1)
