"""Unit tests for src/api/models.py"""

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.api.models import CreateGameRequest, MoveRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PlayerColor


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_create_game_defaults() -> None:
    """Human plays red on the default level set unless asked otherwise."""
    request = CreateGameRequest()
    assert request.player_color == PlayerColor.RED
    assert request.level_set_id is None


def test_level_set_id_is_stripped() -> None:
    request = CreateGameRequest(player_color="blue", level_set_id="  advanced ")
    assert request.player_color == PlayerColor.BLUE
    assert request.level_set_id == "advanced"


def test_blank_level_set_id() -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(level_set_id="   ")


def test_unknown_player_color() -> None:
    with pytest.raises(ValidationError):
        _ = CreateGameRequest(player_color="green")


# -- Validation - MoveRequest --
def test_valid_coordinates(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, player_color="red", row=0, col=4)
    assert request.row == 0
    assert request.col == 4


@pytest.mark.parametrize(
    "row, col",
    [
        (-1, 0),  # row above the board
        (0, -3),  # column left of the board
    ],
)
def test_negative_coordinates(mock_id: UUID, row: int, col: int) -> None:
    """Test that an exception is raised for coordinates that can never be on a board."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_color="red", row=row, col=col)
