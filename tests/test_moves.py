import pytest

from chilab.directions import RECT_DIRECTIONS
from chilab.group_finder import calculate_steps, get_piece_mask, get_pieces
from chilab.moves import diff_positions, move_group, move_piece, move_pieces
from chilab.position_index import PiecePositionIndex
from chilab.types import Pos
from tests.test_group_finder import place

# 2x2 loop: 5 = RIGHT|DOWN, 11 = LEFT|DOWN, 2 = UP|RIGHT, 8 = UP|LEFT
SQUARE = {5: (1, 1), 11: (2, 1), 2: (1, 2), 8: (2, 2)}


def test_move_piece_to_empty_and_occupied_cells():
    index = PiecePositionIndex([Pos(0, 0), Pos(1, 0)])
    move_piece(index, 0, Pos(3, 0))
    assert index.to_list() == [Pos(3, 0), Pos(1, 0)]
    move_piece(index, 1, (3, 0))
    assert index.to_list() == [Pos(1, 0), Pos(3, 0)]


def test_group_drag_with_disjoint_cells_keeps_displaced_layout():
    # b = piece 0, c = piece 1
    index = place(12, {**SQUARE, 0: (4, 1), 1: (5, 2)})
    steps = calculate_steps(RECT_DIRECTIONS, index, 5)
    assert sorted(get_pieces(steps)) == [2, 5, 8, 11]

    move_group(index, steps, Pos(4, 1))

    assert [index.get(i) for i in (5, 11, 2, 8)] == [Pos(4, 1), Pos(5, 1), Pos(4, 2), Pos(5, 2)]
    assert index.get(0) == Pos(1, 1)
    assert index.get(1) == Pos(2, 2)


def test_group_drag_with_overlapping_cells():
    # 5 = RIGHT|DOWN, 11 = LEFT|DOWN, 10 = UP|LEFT|RIGHT, 8 = UP|LEFT, 1 = RIGHT
    group = {5: (2, 1), 11: (3, 1), 10: (2, 2), 8: (3, 2), 1: (1, 2)}
    # 0 = UP and 2 = UP|RIGHT, stacked without connecting
    index = place(12, {**group, 0: (5, 1), 2: (5, 2)})
    steps = calculate_steps(RECT_DIRECTIONS, index, 5)
    assert get_pieces(steps) == (5, 11, 10, 8, 1)

    assert move_pieces(index, get_piece_mask(steps), steps, Pos(4, 1))

    assert [index.get(i) for i in (5, 11, 10, 8, 1)] == [Pos(4, 1), Pos(5, 1), Pos(4, 2), Pos(5, 2), Pos(3, 2)]
    assert index.get(0) == Pos(3, 1)
    assert index.get(2) == Pos(1, 2)


def test_move_pieces_single_uses_mask_bit():
    index = PiecePositionIndex([Pos(0, 0), Pos(2, 0), Pos(4, 0)])
    assert move_pieces(index, 1 << 2, None, Pos(4, 4))
    assert index.get(2) == Pos(4, 4)


def test_move_pieces_noop_cases():
    index = PiecePositionIndex([Pos(0, 0), Pos(2, 0)])
    assert not move_pieces(index, 0, None, Pos(5, 5))
    assert not move_pieces(index, 1 << 1, None, Pos(2, 0))
    assert index.to_list() == [Pos(0, 0), Pos(2, 0)]


def test_move_pieces_checks_steps_precondition():
    index = place(12, SQUARE)
    steps = calculate_steps(RECT_DIRECTIONS, index, 5)
    with pytest.raises(ValueError):
        move_pieces(index, get_piece_mask(steps), None, Pos(4, 4))
    with pytest.raises(ValueError):
        move_pieces(index, 1 << 5, steps, Pos(4, 4))
    with pytest.raises(ValueError):
        move_pieces(index, (1 << 5) | (1 << 3), steps, Pos(4, 4))
    assert index.get(5) == Pos(1, 1)


def test_diff_positions():
    index = PiecePositionIndex([Pos(0, 0), Pos(1, 0), Pos(5, 5)])
    before = index.snapshot()
    index.move_or_swap(0, Pos(1, 0))
    assert diff_positions(before, index) == (0, 1)
    assert diff_positions(before, before) == ()
    with pytest.raises(ValueError):
        diff_positions(before, PiecePositionIndex([Pos(0, 0)]))
