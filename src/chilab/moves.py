"""Applying completed drags to a position index.

Group drags replay the BFS steps of the selected group onto the new anchor
position and call ``move_or_swap`` for each member in step order. Source and
destination cells may overlap: pieces are identified by index, not position,
and all destinations are distinct, so every group member lands where it should.

Pieces outside the group that occupy destination cells are swapped into the
vacated cells. When source and destination cells are disjoint this keeps their
relative layout::

    .......     .......
    .aa.b..     .b..aa.    moving the a's three cells right moves b and c
    .aa..c.  => ..c.aa.    three cells left, together
    .......     .......

When the sets overlap *and* destination cells are occupied, the displaced pieces
go to whichever vacated cell is processed next, which can break up their layout::

    .......     .......
    ..aa.b.     ...baa.    moving the a's two cells right moves the b's
    .aaa.b.  => .b.aaa.    left by different amounts
    .......     .......

That result is accepted as is; there is no better answer without touching cells
outside the source and destination sets.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .group_finder import get_dragged_index, get_piece_mask, get_pieces, is_multi_drag, reconstruct_positions
from .position_index import PiecePositionIndex, PosLike, ReadonlyPiecePositionIndex, as_pos
from .types import Step

logger = logging.getLogger(__name__)


def move_piece(index: PiecePositionIndex, piece: int, dst: PosLike) -> None:
    index.move_or_swap(piece, dst)


def move_group(index: PiecePositionIndex, steps: Sequence[Step], dst: PosLike) -> None:
    """Move the group described by ``steps`` so that its first piece lands on ``dst``."""

    if not steps:
        return
    destinations = reconstruct_positions(steps, as_pos(dst))
    for piece, target in zip(get_pieces(steps), destinations):
        index.move_or_swap(piece, target)


def move_pieces(
    index: PiecePositionIndex,
    pieces: int,
    steps: Optional[Sequence[Step]],
    dst: PosLike,
) -> bool:
    """Complete a drag of the pieces in the ``pieces`` bitmask.

    ``steps`` must be given exactly when more than one piece is dragged, and must
    cover the same pieces as the mask. ``dst`` is the new position of the anchor
    piece: the only piece for a single drag, the first step for a group drag.

    Returns whether anything was moved.
    """

    if pieces == 0:
        return False
    if is_multi_drag(pieces) != (steps is not None):
        raise ValueError("steps must be provided if and only if more than one piece is dragged")
    if steps is not None and get_piece_mask(steps) != pieces:
        raise ValueError("steps do not match the dragged pieces")

    anchor = steps[0].piece_index if steps is not None else get_dragged_index(pieces)
    dst = as_pos(dst)
    if index.get(anchor) == dst:
        return False
    if steps is None:
        move_piece(index, anchor, dst)
    else:
        logger.debug("drag group of %d pieces anchored at %d to %s", len(steps), anchor, dst)
        move_group(index, steps, dst)
    return True


def diff_positions(old: ReadonlyPiecePositionIndex, new: ReadonlyPiecePositionIndex) -> Tuple[int, ...]:
    """Return the indices of pieces whose positions differ between two views."""

    if old.size() != new.size():
        raise ValueError(f"cannot diff {old.size()} positions against {new.size()}")
    return tuple(i for i, (a, b) in enumerate(zip(old, new)) if a != b)
