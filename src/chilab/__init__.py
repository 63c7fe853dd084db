"""China Labyrinth puzzle rule engine."""

from .types import EMPTY_RECT, Pos, Progress, Rect, Step
from .directions import HEX_DIRECTIONS, RECT_DIRECTIONS, HexDirection, RectDirection, directions_for
from .position_index import PiecePositionIndex, PositionSnapshot, ReadonlyPiecePositionIndex
from .group_finder import (
    MAX_MASK_PIECES,
    calculate_steps,
    count_groups,
    get_piece_mask,
    get_pieces,
    reconstruct_positions,
)
from .solution import calculate_progress
from .moves import diff_positions, move_group, move_piece, move_pieces
from .state_codec import StateDecodeError, decode_positions, encode_positions, validate_positions
from .puzzles import PuzzleConfig, preset_puzzle, random_piece_positions
from .session import AppState, PuzzleSession

__all__ = [
    "AppState",
    "EMPTY_RECT",
    "HEX_DIRECTIONS",
    "HexDirection",
    "MAX_MASK_PIECES",
    "PiecePositionIndex",
    "Pos",
    "PositionSnapshot",
    "Progress",
    "PuzzleConfig",
    "PuzzleSession",
    "RECT_DIRECTIONS",
    "ReadonlyPiecePositionIndex",
    "Rect",
    "RectDirection",
    "StateDecodeError",
    "Step",
    "calculate_progress",
    "calculate_steps",
    "count_groups",
    "decode_positions",
    "diff_positions",
    "directions_for",
    "encode_positions",
    "get_piece_mask",
    "get_pieces",
    "move_group",
    "move_piece",
    "move_pieces",
    "preset_puzzle",
    "random_piece_positions",
    "reconstruct_positions",
    "validate_positions",
]
