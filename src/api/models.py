"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PlayerColor

OwnerName = str
Coordinate = tuple[int, int]


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_color: PlayerColor = PlayerColor.RED
    level_set_id: Optional[str] = None

    @field_validator("level_set_id")
    @classmethod
    def validate_level_set_id(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        if not value:
            raise InvalidRequestError("Level set id cannot be blank.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class ValidMovesRequest(BaseModel):
    game_id: UUID
    player_color: PlayerColor


class MoveRequest(BaseModel):
    game_id: UUID
    player_color: PlayerColor
    row: int
    col: int

    @field_validator(*["row", "col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        # Upper bound depends on the level being played, the domain layer rejects those moves.
        if value < 0:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a cell coordinate (must be >= 0)."
            )
        return value


class ComputerMoveRequest(BaseModel):
    game_id: UUID


class UndoRequest(BaseModel):
    game_id: UUID


class NextLevelRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class CellResponse(BaseModel):
    owner: OwnerName
    dot_count: int
    capacity: int
    is_blocked: bool


class GameResponse(BaseModel):
    game_id: UUID
    board: list[list[CellResponse]]
    grid_size: int
    current_player: PlayerColor
    is_computer_turn: bool
    human_player: PlayerColor
    computer_player: PlayerColor
    current_level: str
    level_name: str
    level_description: str
    level_difficulty: int
    level_set: str
    ai_difficulty: str
    cell_counts: dict[str, int]
    can_undo: bool
    level_over: bool
    game_over: bool
    level_winners: list[PlayerColor]
    winner: Optional[str]


class ValidMovesResponse(BaseModel):
    game_id: UUID
    player_color: PlayerColor
    valid_moves: list[Coordinate]


class MoveResponse(BaseModel):
    accepted: bool
    player: PlayerColor
    row: int
    col: int
    waves: int = 0
    exploded: list[Coordinate] = []
    level_winner: Optional[PlayerColor] = None
    game: GameResponse
