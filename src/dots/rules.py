"""
Placement and explosion rules

Key idea: these are plain queries on the board. Nothing here knows whose turn it is,
so the same checks serve both the human move path and the computer move path.
"""

from src.dots.board import Board
from src.dots.cell import Move, Owner


def is_valid_move(row: int, col: int, player: Owner, board: Board) -> bool:
    """
    A placement is legal if
    1. the coordinate is on the board
    2. the cell is not a wall
    3. the cell is empty, or already belongs to the player
    """
    if not board.in_bounds(row, col):
        return False

    cell = board.cell(row, col)
    if cell.is_blocked:
        return False

    return cell.dot_count == 0 or cell.owner == player


def should_explode(row: int, col: int, board: Board) -> bool:
    """Strictly over capacity. Sitting exactly at capacity is stable."""
    cell = board.cell(row, col)
    return cell.dot_count > cell.capacity


def valid_moves(player: Owner, board: Board) -> list[Move]:
    return [
        position
        for position in board.coordinates()
        if is_valid_move(position.row, position.col, player, board)
    ]


def cells_to_explode(board: Board) -> list[Move]:
    return [
        position
        for position in board.coordinates()
        if should_explode(position.row, position.col, board)
    ]
