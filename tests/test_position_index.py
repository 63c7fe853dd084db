import random

import pytest

from chilab.position_index import PiecePositionIndex, PositionSnapshot
from chilab.types import EMPTY_RECT, Pos, Rect


def build_index(*coords):
    return PiecePositionIndex(Pos(x, y) for x, y in coords)


def assert_bijection(index):
    for i in range(index.size()):
        assert index.index_of(index.get(i)) == i
    assert len(set(index)) == index.size()


def test_lookup_both_ways():
    index = build_index((0, 0), (2, 0), (4, 1))
    assert index.size() == 3
    assert index.get(2) == Pos(4, 1)
    assert index.index_of(Pos(2, 0)) == 1
    assert index.index_of(2, 0) == 1
    assert index.index_of(1, 1) is None
    assert index.contains(4, 1)
    assert Pos(0, 0) in index
    assert (4, 1) in index
    assert (3, 3) not in index


def test_get_out_of_range():
    index = build_index((0, 0))
    with pytest.raises(IndexError):
        index.get(1)
    with pytest.raises(IndexError):
        index.get(-1)


def test_assign_rejects_duplicates_and_keeps_state():
    index = build_index((0, 0), (1, 0))
    with pytest.raises(ValueError):
        index.assign([Pos(5, 5), Pos(6, 6), Pos(5, 5)])
    assert index.to_list() == [Pos(0, 0), Pos(1, 0)]
    assert index.index_of(5, 5) is None


def test_move_to_empty_cell():
    index = build_index((0, 0), (1, 0))
    index.move_or_swap(0, Pos(3, 3))
    assert index.get(0) == Pos(3, 3)
    assert index.index_of(0, 0) is None
    assert_bijection(index)


def test_move_onto_occupied_cell_swaps():
    index = build_index((0, 0), (1, 0))
    index.move_or_swap(0, (1, 0))
    assert index.get(0) == Pos(1, 0)
    assert index.get(1) == Pos(0, 0)
    assert_bijection(index)


def test_move_to_own_cell_is_noop():
    index = build_index((0, 0), (1, 0))
    index.move_or_swap(1, Pos(1, 0))
    assert index.to_list() == [Pos(0, 0), Pos(1, 0)]


def test_random_moves_keep_bijection():
    rng = random.Random(1234)
    index = PiecePositionIndex(Pos(2 * (i % 5), 2 * (i // 5)) for i in range(15))
    for _ in range(500):
        piece = rng.randrange(15)
        dst = Pos(rng.randrange(9), rng.randrange(9))
        index.move_or_swap(piece, dst)
        assert index.get(piece) == dst
        assert_bijection(index)


def test_bounding_rect():
    index = build_index((1, 2), (4, 0), (2, 5))
    assert index.bounding_rect() == Rect(1, 0, 5, 6)
    assert PiecePositionIndex().bounding_rect() == EMPTY_RECT
    assert EMPTY_RECT.is_empty()


def test_snapshot_is_isolated_from_later_moves():
    index = build_index((0, 0), (1, 0))
    before = index.snapshot()
    index.move_or_swap(0, Pos(1, 0))
    assert before.get(0) == Pos(0, 0)
    assert before.index_of(1, 0) == 1
    assert index.snapshot() != before
    assert not hasattr(before, "move_or_swap")


def test_snapshot_equality():
    a = PositionSnapshot([Pos(0, 0), Pos(1, 1)])
    b = build_index((0, 0), (1, 1)).snapshot()
    assert a == b
    assert hash(a) == hash(b)
    assert a.positions() == (Pos(0, 0), Pos(1, 1))


def test_copy_is_independent():
    index = build_index((0, 0), (1, 0))
    clone = index.copy()
    clone.move_or_swap(0, Pos(7, 7))
    assert index.get(0) == Pos(0, 0)
    assert clone.index_of(0, 0) is None
