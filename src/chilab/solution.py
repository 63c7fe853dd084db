"""Win detection.

Progress is recomputed from scratch after every accepted move; boards are small
(at most 63 pieces and 6 directions), so there is no incremental bookkeeping.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .group_finder import count_groups
from .position_index import ReadonlyPiecePositionIndex
from .types import Progress

logger = logging.getLogger(__name__)


def count_disconnections(index: ReadonlyPiecePositionIndex, directions: Sequence) -> int:
    """Count beams that do not meet a reciprocal beam on the adjacent piece.

    A mismatch between two pieces that both have beams toward each other's cell is
    counted once from each side.
    """

    result = 0
    for i, pos in enumerate(index):
        for d in directions:
            if not d.has_path(i):
                continue
            j = index.index_of(d.step(pos))
            if j is None or not d.opposite().has_path(j):
                logger.debug("missing connection: piece %d at %s %s -> %s", i, pos, d.name, j)
                result += 1
    return result


def count_overlaps(index: ReadonlyPiecePositionIndex, directions: Sequence) -> int:
    """Count sides without a beam that touch another piece."""

    result = 0
    for i, pos in enumerate(index):
        for d in directions:
            if not d.has_path(i) and index.contains(d.step(pos)):
                result += 1
    return result


def calculate_progress(index: ReadonlyPiecePositionIndex, directions: Sequence) -> Progress:
    return Progress(
        group_count=count_groups(directions, index),
        disconnection_count=count_disconnections(index, directions),
        overlap_count=count_overlaps(index, directions),
    )


def is_solved(index: ReadonlyPiecePositionIndex, directions: Sequence) -> bool:
    return calculate_progress(index, directions).is_solved()
