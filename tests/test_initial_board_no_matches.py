import random

import pytest

from candyline.engine.board_generator import create_initial_board
from candyline.engine.matching import find_matches
from tests.helpers import assert_coordinates_consistent


def test_initial_board_has_no_matches():
    board = create_initial_board(8, 8, 1, rng=random.Random(42))
    assert not find_matches(board), 'Initial board should not contain any matches'


@pytest.mark.parametrize("rows,cols,level", [(3, 3, 1), (4, 4, 1), (8, 8, 1), (5, 7, 15), (11, 11, 900)])
def test_generated_boards_are_clean_in_nearly_all_trials(rows, cols, level):
    rng = random.Random(rows * 100 + cols + level)
    trials = 200
    dirty = sum(1 for _ in range(trials) if find_matches(create_initial_board(rows, cols, level, rng=rng)))
    assert dirty <= trials // 100, f"{dirty} of {trials} boards started with a match"


def test_generated_board_shape_and_coordinates():
    board = create_initial_board(5, 7, 3, rng=random.Random(3))
    assert (board.rows, board.cols) == (5, 7)
    assert board.is_full()
    assert_coordinates_consistent(board)


def test_generation_is_deterministic_for_a_seed():
    a = create_initial_board(6, 6, 12, rng=random.Random(99))
    b = create_initial_board(6, 6, 12, rng=random.Random(99))
    assert a.type_layout() == b.type_layout()


def test_rejects_empty_dimensions():
    with pytest.raises(ValueError):
        create_initial_board(0, 4, 1)
