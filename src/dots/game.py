"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn -->
placement, chain reaction, win check, turn switch, and keeping the undo history and level progress up to date.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError, NotYourTurnError
from src.core.models import SessionModel
from src.core.shared_types import PlayerColor
from src.dots.board import Board
from src.dots.capacity import assign_capacities
from src.dots.cell import Move, Owner
from src.dots.explosion import DEFAULT_MAX_WAVES, SettleResult, settle_board
from src.dots.history import MAX_MOVE_HISTORY, MoveHistory
from src.dots.levels import LevelDefinition, LevelSet, get_level_by_id, get_level_set
from src.dots.opponent import ComputerPlayer, Difficulty
from src.dots.rules import is_valid_move, valid_moves
from src.dots.win import check_win_condition

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Outcome of a placement attempt. A rejected placement leaves the session untouched."""

    accepted: bool
    move: Move
    player: Owner
    settle: Optional[SettleResult] = None
    winner: Optional[Owner] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    history: MoveHistory
    current_player: Owner
    human_player: Owner
    computer_player: Owner
    level_set: LevelSet
    current_level: LevelDefinition
    game_over: bool = False
    level_over: bool = False
    level_winners: list[Owner] = field(default_factory=list)
    winner: Optional[str] = None
    max_explosion_waves: int = DEFAULT_MAX_WAVES
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)

    @classmethod
    def new_game(
        cls,
        human_player: PlayerColor | str,
        level_set_id: str,
        history_limit: int = MAX_MOVE_HISTORY,
        max_explosion_waves: int = DEFAULT_MAX_WAVES,
        rng: Optional[random.Random] = None,
    ) -> Self:
        """Start on the first level of the set. The computer takes the other color and the human moves first."""
        human = cls._parse_color(human_player)
        level_set = get_level_set(level_set_id)
        first_level = level_set.first()
        game = cls(
            board=cls._build_level_board(first_level),
            history=MoveHistory(history_limit),
            current_player=human,
            human_player=human,
            computer_player=human.opponent,
            level_set=level_set,
            current_level=first_level,
            max_explosion_waves=max_explosion_waves,
            rng=rng,
        )
        game._announce_level()
        return game

    @classmethod
    def from_model(
        cls,
        model: SessionModel,
        history_limit: int = MAX_MOVE_HISTORY,
        max_explosion_waves: int = DEFAULT_MAX_WAVES,
        rng: Optional[random.Random] = None,
    ) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        level_set = get_level_set(model.level_set)
        return cls(
            board=Board.from_state(model.board_state),
            history=MoveHistory.from_models(model.move_history, history_limit),
            current_player=cls._parse_color(model.current_player),
            human_player=cls._parse_color(model.human_player),
            computer_player=cls._parse_color(model.computer_player_color),
            level_set=level_set,
            current_level=get_level_by_id(model.current_level),
            game_over=model.game_over,
            level_over=model.level_over,
            level_winners=[cls._parse_color(color) for color in model.level_winners],
            winner=model.winner,
            max_explosion_waves=max_explosion_waves,
            rng=rng,
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            board_state=self.board.to_state(),
            current_player=self.current_player.value,
            human_player=self.human_player.value,
            computer_player_color=self.computer_player.value,
            current_level=self.current_level.id,
            level_set=self.level_set.id,
            move_history=self.history.to_models(),
            game_over=self.game_over,
            level_over=self.level_over,
            level_winners=[color.value for color in self.level_winners],
            winner=self.winner,
        )

    @property
    def ai_difficulty(self) -> Difficulty:
        return self.level_set.ai_difficulty(self.current_level.id)

    @property
    def is_computer_turn(self) -> bool:
        return self.current_player == self.computer_player

    def start_level(self, level_id: str) -> None:
        """
        Fresh board for the level: walls placed, capacities computed (once, never again for this level),
        history cleared, human to move.
        """
        level = get_level_by_id(level_id)
        if not self.level_set.has_level(level.id):
            raise GameStateError(
                f"Level {level.id!r} is not part of level set {self.level_set.id!r}"
            )

        self.board = self._build_level_board(level)
        self.current_level = level
        self.history.clear()
        self.level_over = False
        self.current_player = self.human_player
        self._announce_level()

    def legal_moves(self, player: Owner) -> list[Move]:
        return valid_moves(player, self.board)

    def play_move(self, row: int, col: int, player: Owner | PlayerColor | str) -> TurnResult:
        """
        Attempt to place a dot
        -----

        1. the level must still be running
        2. it must be your turn (NotYourTurnError otherwise)
        3. illegal placement? --> rejected result, nothing changes
        4. snapshot for undo, place the dot, settle the chain reaction
        5. winner? --> close the level. Otherwise the other player is to move.
        """
        self._assert_in_progress()
        owner = player if isinstance(player, Owner) else self._parse_color(player)
        self._assert_your_turn(owner)

        move = Move(row, col)
        if not is_valid_move(row, col, owner, self.board):
            logger.debug("Rejected %s placement at %s", owner.value, move)
            return TurnResult(accepted=False, move=move, player=owner)

        return self._commit_move(move, owner)

    def play_computer_move(self) -> TurnResult:
        """Let the computer pick and play. NoValidMovesError is passed on to the caller."""
        self._assert_in_progress()
        self._assert_your_turn(self.computer_player)

        computer = ComputerPlayer(self.ai_difficulty, self.computer_player, self.rng)
        move = computer.find_move(self.board, self.board.grid_size)
        return self._commit_move(move, self.computer_player)

    def undo(self) -> bool:
        """Restore the board and player from before the last placement. False if there is nothing to undo."""
        if self.level_over or self.game_over:
            raise GameStateError("Cannot undo, the level is already decided.")

        entry = self.history.undo_last_move()
        if entry is None:
            return False

        self.board = entry.board
        self.current_player = entry.current_player
        logger.debug("Undid move, back to %s's turn", self.current_player.value)
        return True

    def advance_level(self) -> LevelDefinition:
        """After a level was won: move on to the next level of the set"""
        if self.game_over:
            raise GameStateError("Game is over. There is no next level.")
        if not self.level_over:
            raise GameStateError(
                f"Level {self.current_level.id!r} is still in progress."
            )

        next_level = self.level_set.next_after(self.current_level.id)
        if next_level is None:
            raise GameStateError(f"Level {self.current_level.id!r} is the last level.")
        self.start_level(next_level.id)
        return next_level

    def mark_game_complete(self, winner: Owner) -> None:
        self.game_over = True
        self.winner = f"{winner.value.capitalize()} Player Wins!"
        logger.info("Game complete: %s", self.winner)

    # -- PRIVATE HELPERS ---
    @staticmethod
    def _build_level_board(level: LevelDefinition) -> Board:
        """Walls placed, capacities computed (once, never again for this level)"""
        board = Board.create(level.grid_size, level.blocked_cells)
        assign_capacities(board)
        return board

    def _announce_level(self) -> None:
        logger.info(
            "Level %s started (%dx%d, computer: %s)",
            self.current_level.id,
            self.current_level.grid_size,
            self.current_level.grid_size,
            self.ai_difficulty.label,
        )

    @staticmethod
    def _parse_color(color: PlayerColor | str) -> Owner:
        try:
            return Owner.from_color(color)
        except ValueError as error:
            raise GameStateError(
                f"Invalid player color: {color!r}. Pick one from {', '.join(PlayerColor)}"
            ) from error

    def _assert_in_progress(self) -> None:
        if self.game_over:
            raise GameStateError(f"Game is over. {self.winner}")
        if self.level_over:
            raise GameStateError(
                f"Level {self.current_level.id!r} is over. Advance to the next level first."
            )

    def _assert_your_turn(self, player: Owner) -> None:
        if player != self.current_player:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.current_player.value} to make a move first."
            )

    def _commit_move(self, move: Move, player: Owner) -> TurnResult:
        # snapshot BEFORE the board changes, with the player that is about to move
        self.history.save_move(self.board, player)
        self.board.place_dot(move.row, move.col, player)

        cell = self.board.cell(move.row, move.col)
        logger.debug(
            "%s placed dot at row %d, col %d (%d/%d)",
            player.value,
            move.row,
            move.col,
            cell.dot_count,
            cell.capacity,
        )

        settle = settle_board(self.board, self.max_explosion_waves)
        winner = settle.winner or check_win_condition(self.board)
        if winner is not None:
            self._complete_level(winner)
        else:
            self._switch_turn()

        return TurnResult(
            accepted=True, move=move, player=player, settle=settle, winner=winner
        )

    def _switch_turn(self) -> None:
        self.current_player = self.current_player.opponent

    def _complete_level(self, winner: Owner) -> None:
        self.level_over = True
        self.level_winners.append(winner)
        logger.info("Level %s won by %s", self.current_level.id, winner.value)

        if self.level_set.is_last(self.current_level.id):
            self.mark_game_complete(winner)
