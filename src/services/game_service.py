"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.api.models import (
    CellResponse,
    ComputerMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    MoveResponse,
    NextLevelRequest,
    UndoRequest,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.core.exceptions import RepositoryError
from src.core.models import SessionModel
from src.db.repository import GameRepository
from src.dots.cell import Owner
from src.dots.explosion import DEFAULT_MAX_WAVES
from src.dots.game import Game, TurnResult
from src.dots.history import MAX_MOVE_HISTORY
from src.dots.levels import DEFAULT_LEVEL_SET_ID

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for the dots game."""

    def __init__(
        self,
        repository: GameRepository,
        history_limit: int = MAX_MOVE_HISTORY,
        max_explosion_waves: int = DEFAULT_MAX_WAVES,
        default_level_set: str = DEFAULT_LEVEL_SET_ID,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.history_limit = history_limit
        self.max_explosion_waves = max_explosion_waves
        self.default_level_set = default_level_set
        self.rng = rng

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Player requested a new game: first level of the chosen set, human to move."""

        new_game = Game.new_game(
            human_player=request.player_color,
            level_set_id=request.level_set_id or self.default_level_set,
            history_limit=self.history_limit,
            max_explosion_waves=self.max_explosion_waves,
            rng=self.rng,
        )

        # Store the SessionModel in the repository
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info(
            "Created game %s (%s vs computer, level set %s)",
            game_id,
            new_game.human_player.value,
            new_game.level_set.id,
        )
        return self._create_game_response(game_id, new_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to redraw the board for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """Cells the given color may place a dot on right now."""
        game = self._load_game(request.game_id)
        moves = game.legal_moves(Owner.from_color(request.player_color))
        return ValidMovesResponse(
            game_id=request.game_id,
            player_color=request.player_color,
            valid_moves=[(move.row, move.col) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Human placement attempt. Rejected placements are reported back, but not stored."""

        game = self._load_game(request.game_id)
        result = game.play_move(request.row, request.col, request.player_color)

        if not result.accepted:
            logger.info(
                "Game %s: rejected %s placement at (%d, %d)",
                request.game_id,
                request.player_color,
                request.row,
                request.col,
            )
        else:
            self.repo.update_game(request.game_id, game.to_model())

        return self._create_move_response(request.game_id, game, result)

    def computer_move(self, request: ComputerMoveRequest) -> MoveResponse:
        """Let the computer play its turn."""

        game = self._load_game(request.game_id)
        result = game.play_computer_move()
        self.repo.update_game(request.game_id, game.to_model())
        return self._create_move_response(request.game_id, game, result)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last placement (if there is one)."""

        game = self._load_game(request.game_id)
        if game.undo():
            self.repo.update_game(request.game_id, game.to_model())
        else:
            logger.info("Game %s: nothing to undo", request.game_id)
        return self._create_game_response(request.game_id, game)

    def next_level(self, request: NextLevelRequest) -> GameResponse:
        """Continue with the next level after the current one was won."""

        game = self._load_game(request.game_id)
        game.advance_level()
        self.repo.update_game(request.game_id, game.to_model())
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the state of a Game into a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            board=[
                [CellResponse(**cell.to_dict()) for cell in row]
                for row in game.board.cells
            ],
            grid_size=game.board.grid_size,
            current_player=game.current_player.value,
            is_computer_turn=game.is_computer_turn,
            human_player=game.human_player.value,
            computer_player=game.computer_player.value,
            current_level=game.current_level.id,
            level_name=game.current_level.name,
            level_description=game.current_level.description,
            level_difficulty=game.current_level.difficulty,
            level_set=game.level_set.id,
            ai_difficulty=game.ai_difficulty.label,
            cell_counts=game.board.count_cells_by_owner(),
            can_undo=game.history.can_undo(),
            level_over=game.level_over,
            game_over=game.game_over,
            level_winners=[winner.value for winner in game.level_winners],
            winner=game.winner,
        )

    def _create_move_response(
        self, game_id: UUID, game: Game, result: TurnResult
    ) -> MoveResponse:
        settle = result.settle
        return MoveResponse(
            accepted=result.accepted,
            player=result.player.value,
            row=result.move.row,
            col=result.move.col,
            waves=settle.waves if settle else 0,
            exploded=[(move.row, move.col) for move in settle.exploded] if settle else [],
            level_winner=result.winner.value if result.winner else None,
            game=self._create_game_response(game_id, game),
        )

    def _fetch_game(self, game_id: UUID) -> SessionModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(
            self._fetch_game(game_id),
            history_limit=self.history_limit,
            max_explosion_waves=self.max_explosion_waves,
            rng=self.rng,
        )
