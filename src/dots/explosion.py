"""
Explosions and chain reactions
-----

A cell that goes over capacity explodes: it loses one capacity's worth of dots and pushes
one dot into every open orthogonal neighbor, taking that neighbor over for its owner.
Those neighbors may now be over capacity themselves, hence the repeated sweeps in settle_board().
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.dots.board import Board
from src.dots.cell import Move, Owner
from src.dots.rules import should_explode
from src.dots.win import check_win_condition

logger = logging.getLogger(__name__)

# Every explosion conserves dots, so a region holding more dots than its total capacity never settles.
DEFAULT_MAX_WAVES = 1000


@dataclass
class SettleResult:
    """What happened while settling the board after a placement"""

    waves: int = 0
    exploded: list[Move] = field(default_factory=list)
    winner: Optional[Owner] = None
    stable: bool = True


def explode_cell(row: int, col: int, board: Board) -> list[Move]:
    """
    Explode a single cell and return the coordinates that received a dot.

    1. remember the owner before touching anything
    2. remove exactly `capacity` dots (any surplus stays on the cell)
    3. every open neighbor gets +1 dot and is converted to the exploding owner

    NOTE a capacity-0 cell has nowhere to send its dots. It is drained to zero (and becomes empty again),
    otherwise it would satisfy dot_count > capacity forever.
    """
    cell = board.cell(row, col)
    exploding_owner = cell.owner

    if cell.capacity == 0:
        cell.dot_count = 0
        cell.owner = Owner.DEFAULT
        return []

    cell.dot_count -= cell.capacity

    affected = board.neighbors(row, col)
    for target in affected:
        neighbor = board.cell(target.row, target.col)
        neighbor.dot_count += 1
        neighbor.owner = exploding_owner
    return affected


def settle_board(board: Board, max_waves: int = DEFAULT_MAX_WAVES) -> SettleResult:
    """
    Run sweeps until nothing explodes anymore.
    ----

    * A sweep visits the cells in row-major order and explodes every cell that is over capacity at the moment it is visited.
      Later cells in the same sweep already see the dots added by earlier explosions (not double-buffered).
    * After a sweep with at least one explosion, check for a winner. If there is one: stop right away.
    * Stop when a sweep produces zero explosions.
    """
    result = SettleResult()
    while True:
        exploded_this_wave: list[Move] = []
        for position in board.coordinates():
            if should_explode(position.row, position.col, board):
                explode_cell(position.row, position.col, board)
                exploded_this_wave.append(position)

        if not exploded_this_wave:
            return result

        result.waves += 1
        result.exploded.extend(exploded_this_wave)
        logger.debug(
            "Explosion wave %d: %d cell(s) exploded", result.waves, len(exploded_this_wave)
        )

        winner = check_win_condition(board)
        if winner is not None:
            logger.debug("Chain reaction ended with winner %s", winner.value)
            result.winner = winner
            return result

        if result.waves >= max_waves:
            logger.warning(
                "Board did not settle after %d explosion waves, giving up", max_waves
            )
            result.stable = False
            return result
