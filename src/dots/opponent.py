"""
Computer opponent

Key idea: Use strategy pattern. Every difficulty tier owns a list of
"finders" (functions that look for a preferred cell). When none of a tier's finders produce a cell, the tier falls
back to the next easier one. The easiest tier simply picks a random legal cell.

    EXPERT --> HARD --> MEDIUM --> EASY

Finders only ever return legal cells for the computer's color.
"""

import logging
import random
from enum import Enum
from typing import Callable, Optional, Self

from src.core.exceptions import InvalidBoardError, NoValidMovesError
from src.dots.board import Board
from src.dots.cell import DIRECTIONS, Cell, Move, Owner
from src.dots.rules import is_valid_move, valid_moves

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = 1
    MEDIUM = 2
    HARD = 3
    EXPERT = 4

    @classmethod
    def parse(cls, name: str) -> Self:
        """Case-insensitive lookup. Anything unknown plays like the easy tier."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            logger.debug("Unknown difficulty %r, falling back to easy", name)
            return cls.EASY

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def fallback(self) -> Optional["Difficulty"]:
        return DIFFICULTY_FALLBACK[self]

    def __lt__(self, other: "Difficulty") -> bool:
        return self.value < other.value


DIFFICULTY_FALLBACK: dict[Difficulty, Optional[Difficulty]] = {
    Difficulty.EXPERT: Difficulty.HARD,
    Difficulty.HARD: Difficulty.MEDIUM,
    Difficulty.MEDIUM: Difficulty.EASY,
    Difficulty.EASY: None,
}


# --- FINDERS ---
MoveFinder = Callable[[Board, int, Owner, random.Random], Optional[Move]]


def _scan(grid_size: int) -> list[Move]:
    return [Move(row, col) for row in range(grid_size) for col in range(grid_size)]


def _adjacent_cells(board: Board, grid_size: int, position: Move) -> list[Cell]:
    """In-bounds orthogonal neighbors (walls included, they never match an owner anyway)"""
    cells: list[Cell] = []
    for vector in DIRECTIONS:
        target = position.offset(vector)
        if target.is_within_bounds(grid_size):
            cells.append(board.cell(target.row, target.col))
    return cells


def _own_full_cells(board: Board, grid_size: int, color: Owner) -> list[Move]:
    """Own cells sitting exactly at capacity: one more dot and they go off"""
    return [
        position
        for position in _scan(grid_size)
        if board.cell(position.row, position.col).owner == color
        and board.cell(position.row, position.col).is_full
    ]


def find_fully_loaded_cell(
    board: Board, grid_size: int, color: Owner, rng: random.Random
) -> Optional[Move]:
    full_cells = _own_full_cells(board, grid_size, color)
    return full_cells[0] if full_cells else None


def find_low_capacity_cell(
    board: Board, grid_size: int, color: Owner, rng: random.Random
) -> Optional[Move]:
    """
    Empty legal cell with the lowest capacity: corners (2) before edges (3) before the interior (4).
    Ties between equally low cells are broken at random.
    """
    empty_cells = [
        position
        for position in _scan(grid_size)
        if board.cell(position.row, position.col).is_empty
        and is_valid_move(position.row, position.col, color, board)
    ]
    if not empty_cells:
        return None

    lowest = min(board.cell(p.row, p.col).capacity for p in empty_cells)
    candidates = [p for p in empty_cells if board.cell(p.row, p.col).capacity == lowest]
    return rng.choice(candidates)


def find_full_cell_next_to_opponent_full(
    board: Board, grid_size: int, color: Owner, rng: random.Random
) -> Optional[Move]:
    """Own full cell touching an opponent's full cell: explode first and take it over"""
    opponent = color.opponent
    for position in _own_full_cells(board, grid_size, color):
        for neighbor in _adjacent_cells(board, grid_size, position):
            if neighbor.owner == opponent and neighbor.is_full:
                return position
    return None


def find_full_cell_next_to_opponent(
    board: Board, grid_size: int, color: Owner, rng: random.Random
) -> Optional[Move]:
    """Own full cell touching any opponent cell"""
    opponent = color.opponent
    for position in _own_full_cells(board, grid_size, color):
        if any(
            neighbor.owner == opponent
            for neighbor in _adjacent_cells(board, grid_size, position)
        ):
            return position
    return None


def find_advantage_cell(
    board: Board, grid_size: int, color: Owner, rng: random.Random
) -> Optional[Move]:
    """
    Own cell that is at least as close to exploding as each opponent cell next to it.

    (headroom = capacity - dot_count. Our headroom must be <= the headroom of every adjacent opponent cell,
    and there must be at least one adjacent opponent cell.)
    """
    opponent = color.opponent
    for position in _scan(grid_size):
        cell = board.cell(position.row, position.col)
        if cell.owner != color:
            continue

        opponents = [
            neighbor
            for neighbor in _adjacent_cells(board, grid_size, position)
            if neighbor.owner == opponent
        ]
        if opponents and all(cell.headroom <= other.headroom for other in opponents):
            return position
    return None


# Each tier lists only what it tries before handing over to its fallback tier.
# NOTE expert re-checks the full cells before looking for advantage cells: a loaded cell always beats an advantage cell.
TIER_FINDERS: dict[Difficulty, tuple[MoveFinder, ...]] = {
    Difficulty.EASY: (),
    Difficulty.MEDIUM: (find_fully_loaded_cell, find_low_capacity_cell),
    Difficulty.HARD: (
        find_full_cell_next_to_opponent_full,
        find_full_cell_next_to_opponent,
    ),
    Difficulty.EXPERT: (
        find_full_cell_next_to_opponent_full,
        find_full_cell_next_to_opponent,
        find_fully_loaded_cell,
        find_advantage_cell,
    ),
}


class ComputerPlayer:
    """Picks moves for one color at a given difficulty."""

    def __init__(
        self,
        difficulty: Difficulty | str,
        color: Owner,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = (
            difficulty
            if isinstance(difficulty, Difficulty)
            else Difficulty.parse(difficulty)
        )
        self.color = color
        self.rng = rng or random.Random()

    def find_move(self, board: Board, grid_size: int) -> Move:
        """
        Walk down the tiers (starting at our own difficulty) and take the first cell a finder returns.
        No finder hit? --> random legal cell.

        Raises NoValidMovesError when every cell is blocked or owned by the opponent,
        InvalidBoardError when grid_size does not match the board.
        """
        if grid_size != board.grid_size:
            raise InvalidBoardError(
                f"Grid size {grid_size} does not match the {board.grid_size}x{board.grid_size} board"
            )

        legal_moves = valid_moves(self.color, board)
        if not legal_moves:
            raise NoValidMovesError(
                f"No valid moves available for {self.color.value} on a {grid_size}x{grid_size} board"
            )

        tier: Optional[Difficulty] = self.difficulty
        while tier is not None:
            for finder in TIER_FINDERS[tier]:
                move = finder(board, grid_size, self.color, self.rng)
                if move is not None:
                    logger.debug(
                        "%s (%s) picked %s via %s",
                        self.color.value,
                        self.difficulty.label,
                        move,
                        finder.__name__,
                    )
                    return move
            tier = tier.fallback

        return self.rng.choice(legal_moves)
