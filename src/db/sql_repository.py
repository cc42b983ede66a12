"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from dataclasses import asdict
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import HistoryEntryModel, SessionModel
from src.db.schema import DBGameSession

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> SessionModel | None:
        """Get game session by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new game session and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGameSession(id=new_id)
        self._apply(game_db, game)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.debug("Stored new game session %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: SessionModel) -> SessionModel | None:
        """Overwrite an existing record with the new session state."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._apply(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> SessionModel | None:
        """Remove a game session's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGameSession | None:
        query = select(DBGameSession).where(DBGameSession.id == game_id)
        return self.db.scalar(query)

    def _apply(self, game_db: DBGameSession, game: SessionModel) -> None:
        """Copy every field of the data transfer model onto the SQLAlchemy model."""
        # JSON columns are only flagged dirty on re-assignment, so always assign fresh lists
        game_db.board_state = [list(row) for row in game.board_state]
        game_db.move_history = [asdict(entry) for entry in game.move_history]
        game_db.current_player = game.current_player
        game_db.human_player = game.human_player
        game_db.computer_player_color = game.computer_player_color
        game_db.current_level = game.current_level
        game_db.level_set = game.level_set
        game_db.game_over = game.game_over
        game_db.level_over = game.level_over
        game_db.level_winners = list(game.level_winners)
        game_db.winner = game.winner

    def _to_model(self, game_db: DBGameSession) -> SessionModel:
        """Convert SQLAlchemy model to data transfer model."""
        return SessionModel(
            board_state=game_db.board_state,
            current_player=game_db.current_player,
            human_player=game_db.human_player,
            computer_player_color=game_db.computer_player_color,
            current_level=game_db.current_level,
            level_set=game_db.level_set,
            move_history=[
                HistoryEntryModel(
                    board_state=entry["board_state"],
                    current_player=entry["current_player"],
                )
                for entry in game_db.move_history
            ],
            game_over=game_db.game_over,
            level_over=game_db.level_over,
            level_winners=game_db.level_winners,
            winner=game_db.winner,
        )
