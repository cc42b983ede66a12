"""The Game board owns the grid of cells and the low-level mutations on it.

No rules live here: legality is checked by src/dots/rules.py, cascades are handled by src/dots/explosion.py
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Self

from src.core.exceptions import InvalidBoardError
from src.dots.cell import DIRECTIONS, Cell, Move, Owner

BoardState = list[list[dict]]


@dataclass
class Board:
    cells: list[list[Cell]]

    @classmethod
    def create(cls, grid_size: int, blocked_cells: Iterable[Move] = ()) -> Self:
        """Construct an empty grid_size x grid_size board.

        * Blocked coordinates become walls (owner BLOCKED, capacity 0). Coordinates outside the grid are ignored.
        * Every other cell starts empty (owner DEFAULT).
        * Capacities are all 0 here, src/dots/capacity.py fills them in once the walls are known.

        A grid size of 0 is allowed and gives a board without rows.
        """
        if grid_size < 0:
            raise InvalidBoardError(f"Grid size cannot be negative, got {grid_size}")

        blocked = {Move(cell.row, cell.col) for cell in blocked_cells}
        cells = [
            [
                Cell.blocked() if Move(row, col) in blocked else Cell()
                for col in range(grid_size)
            ]
            for row in range(grid_size)
        ]
        return cls(cells)

    @classmethod
    def from_state(cls, state: BoardState) -> Self:
        """Rebuild a board from its persisted form (list of rows of plain dicts)"""
        return cls([[Cell.from_dict(data) for data in row] for row in state])

    def to_state(self) -> BoardState:
        return [[cell.to_dict() for cell in row] for row in self.cells]

    @property
    def grid_size(self) -> int:
        return len(self.cells)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def in_bounds(self, row: int, col: int) -> bool:
        return Move(row, col).is_within_bounds(self.grid_size)

    def coordinates(self) -> Iterator[Move]:
        """All coordinates in row-major order"""
        for row in range(self.grid_size):
            for col in range(self.grid_size):
                yield Move(row, col)

    def neighbors(self, row: int, col: int) -> list[Move]:
        """Orthogonal neighbors that can receive dots: inside the grid and not a wall."""
        origin = Move(row, col)
        targets: list[Move] = []
        for vector in DIRECTIONS:
            target = origin.offset(vector)
            if not target.is_within_bounds(self.grid_size):
                continue
            if self.cell(target.row, target.col).is_blocked:
                continue
            targets.append(target)
        return targets

    def set_capacity(self, row: int, col: int, value: int) -> None:
        self.cells[row][col].capacity = value

    def place_dot(self, row: int, col: int, owner: Owner) -> None:
        """Add one dot and claim the cell. Trusted primitive: callers validate first."""
        cell = self.cells[row][col]
        cell.dot_count += 1
        cell.owner = owner

    def copy(self) -> Self:
        """Fully independent copy, cell by cell"""
        return type(self)([[cell.copy() for cell in row] for row in self.cells])

    def count_cells_by_owner(self) -> dict[str, int]:
        """Tally the non-blocked cells: red, blue, and anything else counts as empty"""
        counts = {"red": 0, "blue": 0, "empty": 0}
        for row in self.cells:
            for cell in row:
                if cell.is_blocked:
                    continue
                if cell.owner == Owner.RED:
                    counts["red"] += 1
                elif cell.owner == Owner.BLUE:
                    counts["blue"] += 1
                else:
                    counts["empty"] += 1
        return counts
