"""
A cell on the board, and the coordinates used to address it

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Self

from src.core.shared_types import PlayerColor

Vector = tuple[int, int]

# Only orthogonal neighbors ever interact. Order matters for the affected-cells list: up, down, left, right
DIRECTIONS: tuple[Vector, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Owner(Enum):
    RED = "red"
    BLUE = "blue"
    DEFAULT = "default"
    BLOCKED = "blocked"

    @classmethod
    def from_color(cls, color: PlayerColor | str) -> Owner:
        return cls(PlayerColor(color).value)

    @property
    def color(self) -> PlayerColor | None:
        """Player color for RED/BLUE, None for empty and blocked cells"""
        if self in (Owner.RED, Owner.BLUE):
            return PlayerColor(self.value)
        return None

    @property
    def opponent(self) -> Owner:
        if self == Owner.RED:
            return Owner.BLUE
        if self == Owner.BLUE:
            return Owner.RED
        raise ValueError(f"{self} is not a player")


@dataclass(frozen=True)
class Move:
    """A (row, col) coordinate. Also used to report affected / blocked cells."""

    row: int
    col: int

    def offset(self, vector: Vector) -> Move:
        return Move(self.row + vector[0], self.col + vector[1])

    def is_within_bounds(self, grid_size: int) -> bool:
        return 0 <= self.row < grid_size and 0 <= self.col < grid_size


@dataclass
class Cell:
    owner: Owner = Owner.DEFAULT
    dot_count: int = 0
    capacity: int = 0
    is_blocked: bool = False

    @classmethod
    def blocked(cls) -> Self:
        return cls(owner=Owner.BLOCKED, is_blocked=True)

    @property
    def is_empty(self) -> bool:
        return not self.is_blocked and self.dot_count == 0

    @property
    def headroom(self) -> int:
        """Dots the cell can still take before it explodes on the next one"""
        return self.capacity - self.dot_count

    @property
    def is_full(self) -> bool:
        """One more dot and it explodes"""
        return self.dot_count == self.capacity

    def copy(self) -> Self:
        return type(self)(self.owner, self.dot_count, self.capacity, self.is_blocked)

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner.value,
            "dot_count": self.dot_count,
            "capacity": self.capacity,
            "is_blocked": self.is_blocked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            owner=Owner(data["owner"]),
            dot_count=int(data["dot_count"]),
            capacity=int(data["capacity"]),
            is_blocked=bool(data["is_blocked"]),
        )
