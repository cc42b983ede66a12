"""
Explosion thresholds.

A cell holds as many dots as it has open orthogonal neighbors. One more and it explodes.
Corners: 2, edges: 3, interior: 4, minus one for every wall next to it.
"""

from src.dots.board import Board


def capacity_of(row: int, col: int, board: Board) -> int:
    """Count the in-bounds, non-blocked orthogonal neighbors (diagonals never count)"""
    return len(board.neighbors(row, col))


def assign_capacities(board: Board) -> None:
    """
    Run once per level, right after the board is created and before any dot gets placed.
    NOTE blocked cells keep capacity 0, capacities are never recomputed afterwards.
    """
    for position in board.coordinates():
        if board.cell(position.row, position.col).is_blocked:
            continue
        board.set_capacity(
            position.row, position.col, capacity_of(position.row, position.col, board)
        )
