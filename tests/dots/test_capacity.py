"""Unit tests for src/dots/capacity.py"""

from itertools import product

import pytest

from src.dots.board import Board
from src.dots.capacity import assign_capacities, capacity_of
from src.dots.cell import Move
from src.dots.levels import get_level_by_id


def _expected_open_capacity(row: int, col: int, grid_size: int) -> int:
    on_row_edge = row in (0, grid_size - 1)
    on_col_edge = col in (0, grid_size - 1)
    if on_row_edge and on_col_edge:
        return 2
    if on_row_edge or on_col_edge:
        return 3
    return 4


@pytest.mark.parametrize("grid_size", [2, 3, 5, 8])
def test_open_board_capacities(grid_size: int) -> None:
    """Corners 2, edges 3, interior 4"""
    board = Board.create(grid_size)
    assign_capacities(board)

    for row, col in product(range(grid_size), repeat=2):
        assert board.cell(row, col).capacity == _expected_open_capacity(
            row, col, grid_size
        )


def test_walls_reduce_neighbor_capacity() -> None:
    board = Board.create(3, [Move(1, 1)])
    assign_capacities(board)

    # every edge cell touches the wall in the middle
    assert board.cell(0, 1).capacity == 2
    assert board.cell(1, 0).capacity == 2
    # corners never touch it
    assert board.cell(0, 0).capacity == 2
    # the wall itself has no capacity
    assert board.cell(1, 1).capacity == 0


def test_capacity_of_single_cell_board() -> None:
    board = Board.create(1)
    assert capacity_of(0, 0, board) == 0


def test_cross_level_capacities() -> None:
    """5x5 with a blocked plus sign in the middle"""
    level = get_level_by_id("advanced-1")
    board = Board.create(level.grid_size, level.blocked_cells)
    assign_capacities(board)

    assert board.cell(1, 1).capacity == 2  # two walls next to it (right + below)
    assert board.cell(0, 2).capacity == 2  # edge cell above the cross
    assert board.cell(2, 0).capacity == 2  # edge cell left of the cross
    assert board.cell(0, 0).capacity == 2
    assert board.cell(1, 0).capacity == 3
    for wall in level.blocked_cells:
        assert board.cell(wall.row, wall.col).capacity == 0
