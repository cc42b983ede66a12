"""Win detection: one color owns every playable cell."""

from typing import Optional

from src.dots.board import Board
from src.dots.cell import Owner


def check_win_condition(board: Board) -> Optional[Owner]:
    """
    Winner only when no playable cell is empty and exactly one color is on the board.

    NOTE a board where every cell is blocked has no empty cells but no colors either --> no winner.
    """
    counts = board.count_cells_by_owner()
    if counts["empty"] != 0:
        return None

    if counts["red"] > 0 and counts["blue"] == 0:
        return Owner.RED
    if counts["blue"] > 0 and counts["red"] == 0:
        return Owner.BLUE
    return None
