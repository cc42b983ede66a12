"""Unit tests for src/dots/game.py"""

import random
from typing import Callable

import pytest

from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.shared_types import PlayerColor
from src.dots.board import Board
from src.dots.cell import Move, Owner
from src.dots.game import Game
from src.dots.opponent import Difficulty
from src.dots.rules import is_valid_move


@pytest.fixture
def game() -> Game:
    return Game.new_game(PlayerColor.RED, "default", rng=random.Random(3))


@pytest.fixture
def about_to_win(make_board: Callable[..., Board]) -> Board:
    """Red placing at (0, 0) sets off a chain reaction that takes the whole 2x2 board"""
    return make_board(
        2,
        cells={
            (0, 0): (Owner.RED, 2),
            (0, 1): (Owner.RED, 2),
            (1, 0): (Owner.RED, 1),
            (1, 1): (Owner.BLUE, 1),
        },
    )


# -- New game --
def test_new_game(game: Game) -> None:
    assert game.human_player == Owner.RED
    assert game.computer_player == Owner.BLUE
    assert game.current_player == Owner.RED
    assert game.current_level.id == "level-1"
    assert game.ai_difficulty == Difficulty.EASY
    assert game.board.grid_size == 5
    assert game.board.cell(0, 0).capacity == 2
    assert game.board.cell(2, 2).capacity == 4
    assert len(game.history) == 0
    assert not game.level_over
    assert not game.game_over


def test_human_always_moves_first() -> None:
    game = Game.new_game("blue", "default")
    assert game.human_player == Owner.BLUE
    assert game.computer_player == Owner.RED
    assert game.current_player == Owner.BLUE


def test_new_game_on_cross_level() -> None:
    game = Game.new_game(PlayerColor.RED, "advanced")
    assert game.current_level.id == "advanced-1"
    assert game.board.cell(2, 2).is_blocked
    assert game.ai_difficulty == Difficulty.EXPERT


def test_new_game_with_invalid_color() -> None:
    with pytest.raises(GameStateError):
        Game.new_game("green", "default")


# -- Playing moves --
def test_play_move(game: Game) -> None:
    result = game.play_move(2, 2, PlayerColor.RED)

    assert result.accepted
    assert result.move == Move(2, 2)
    assert result.winner is None
    assert game.board.cell(2, 2).dot_count == 1
    assert game.board.cell(2, 2).owner == Owner.RED
    assert game.current_player == Owner.BLUE
    assert len(game.history) == 1


@pytest.mark.parametrize("row, col", [(5, 0), (0, 7), (-1, 2)])
def test_out_of_bounds_move_is_rejected(game: Game, row: int, col: int) -> None:
    before = game.to_model()
    result = game.play_move(row, col, Owner.RED)
    assert not result.accepted
    assert game.to_model() == before


def test_opponent_cell_is_rejected(game: Game) -> None:
    game.board.place_dot(1, 1, Owner.BLUE)
    before = game.to_model()

    result = game.play_move(1, 1, Owner.RED)

    assert not result.accepted
    assert result.settle is None
    assert game.to_model() == before


def test_not_your_turn(game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game.play_move(0, 0, Owner.BLUE)


def test_play_computer_move(game: Game) -> None:
    game.play_move(0, 0, Owner.RED)
    board_before = game.board.copy()

    result = game.play_computer_move()

    assert result.accepted
    assert result.player == Owner.BLUE
    assert is_valid_move(result.move.row, result.move.col, Owner.BLUE, board_before)
    assert game.current_player == Owner.RED
    assert len(game.history) == 2


def test_computer_waits_for_its_turn(game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game.play_computer_move()


def test_chain_reaction_during_play(game: Game) -> None:
    # red fills the corner, blue plays elsewhere in between
    game.play_move(0, 0, Owner.RED)
    game.play_move(4, 4, Owner.BLUE)
    game.play_move(0, 0, Owner.RED)
    game.play_move(4, 3, Owner.BLUE)

    result = game.play_move(0, 0, Owner.RED)

    assert result.settle is not None
    assert result.settle.exploded == [Move(0, 0)]
    assert game.board.cell(0, 1).owner == Owner.RED
    assert game.board.cell(1, 0).owner == Owner.RED


def test_placing_on_zero_capacity_cell_switches_turn(
    game: Game, make_board: Callable[..., Board]
) -> None:
    game.board = make_board(3, blocked=[(0, 1), (1, 0)])

    result = game.play_move(0, 0, Owner.RED)

    assert result.accepted
    assert result.settle is not None
    assert result.settle.stable
    assert result.winner is None
    assert game.board.cell(0, 0).dot_count == 0
    assert game.board.cell(0, 0).owner == Owner.DEFAULT
    assert game.current_player == Owner.BLUE


# -- Undo --
def test_undo_restores_board_and_player(game: Game) -> None:
    initial_board = game.board.copy()
    game.play_move(3, 3, Owner.RED)

    assert game.undo()
    assert game.board == initial_board
    assert game.current_player == Owner.RED
    assert len(game.history) == 0


def test_undo_one_move_at_a_time(game: Game) -> None:
    game.play_move(3, 3, Owner.RED)
    after_red = game.board.copy()
    game.play_move(1, 1, Owner.BLUE)

    assert game.undo()
    assert game.board == after_red
    assert game.current_player == Owner.BLUE


def test_undo_with_empty_history(game: Game) -> None:
    assert not game.undo()


def test_history_limit_is_applied() -> None:
    game = Game.new_game(PlayerColor.RED, "default", history_limit=2)
    game.play_move(0, 0, Owner.RED)
    game.play_move(4, 4, Owner.BLUE)
    game.play_move(0, 4, Owner.RED)
    assert len(game.history) == 2


# -- Levels --
def test_winning_a_level(game: Game, about_to_win: Board) -> None:
    game.board = about_to_win

    result = game.play_move(0, 0, Owner.RED)

    assert result.winner == Owner.RED
    assert game.level_over
    assert game.level_winners == [Owner.RED]
    assert not game.game_over
    # turn does not switch after a win
    assert game.current_player == Owner.RED


def test_no_moves_after_level_is_won(game: Game, about_to_win: Board) -> None:
    game.board = about_to_win
    game.play_move(0, 0, Owner.RED)

    with pytest.raises(GameStateError):
        game.play_move(0, 0, Owner.RED)
    with pytest.raises(GameStateError):
        game.play_computer_move()
    with pytest.raises(GameStateError):
        game.undo()


def test_advance_level(game: Game, about_to_win: Board) -> None:
    game.board = about_to_win
    game.play_move(0, 0, Owner.RED)

    next_level = game.advance_level()

    assert next_level.id == "level-2"
    assert game.current_level.id == "level-2"
    assert game.ai_difficulty == Difficulty.MEDIUM
    assert game.board.grid_size == 5
    assert game.board.count_cells_by_owner()["empty"] == 25
    assert not game.level_over
    assert len(game.history) == 0
    assert game.current_player == Owner.RED


def test_advance_level_while_playing(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.advance_level()


def test_winning_the_last_level_ends_the_game(about_to_win: Board) -> None:
    game = Game.new_game(PlayerColor.RED, "advanced")
    game.board = about_to_win

    game.play_move(0, 0, Owner.RED)

    assert game.level_over
    assert game.game_over
    assert game.winner == "Red Player Wins!"
    with pytest.raises(GameStateError):
        game.advance_level()


def test_computer_can_win_the_game(make_board: Callable[..., Board]) -> None:
    game = Game.new_game(PlayerColor.BLUE, "advanced")
    # red's full cell next to blue sets off the reaction
    game.board = make_board(
        2,
        cells={
            (0, 0): (Owner.RED, 2),
            (0, 1): (Owner.RED, 2),
            (1, 0): (Owner.RED, 1),
            (1, 1): (Owner.BLUE, 1),
        },
    )
    game.current_player = Owner.RED

    result = game.play_computer_move()

    assert result.winner == Owner.RED
    assert game.game_over
    assert game.winner == "Red Player Wins!"


# -- Model conversion --
def test_model_round_trip(game: Game) -> None:
    game.play_move(0, 0, Owner.RED)
    game.play_computer_move()

    model = game.to_model()
    restored = Game.from_model(model)

    assert restored.to_model() == model
    assert restored.board == game.board
    assert len(restored.history) == 2


def test_model_is_transport_safe(game: Game) -> None:
    model = game.to_model()
    assert model.current_player == "red"
    assert model.computer_player_color == "blue"
    assert model.current_level == "level-1"
    assert model.level_set == "default"
    assert model.board_state[0][0] == {
        "owner": "default",
        "dot_count": 0,
        "capacity": 2,
        "is_blocked": False,
    }
