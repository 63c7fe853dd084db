"""Plain-text board dumps for the CLI and the stdio adapter."""

from __future__ import annotations

from typing import List, Optional

from .position_index import ReadonlyPiecePositionIndex
from .types import Rect


def format_board(index: ReadonlyPiecePositionIndex, area: Optional[Rect] = None) -> str:
    """Render piece indices row by row; empty cells are shown as ``.``.

    ``area`` defaults to the bounding rect of the pieces.
    """

    rect = area or index.bounding_rect()
    lines: List[str] = []
    for y in range(rect.top, rect.bottom):
        cells: List[str] = []
        for x in range(rect.left, rect.right):
            piece = index.index_of(x, y)
            cells.append(" ." if piece is None else f"{piece:2d}")
        lines.append(" ".join(cells))
    return "\n".join(lines)


def format_progress(progress) -> str:
    status = "solved" if progress.is_solved() else "unsolved"
    return (
        f"groups={progress.group_count} disconnections={progress.disconnection_count} "
        f"overlaps={progress.overlap_count} {status}"
    )
