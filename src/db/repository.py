"""Protocol repository (SQLAlchemy implementation in sql_repository.py, in-memory one in the service tests)"""

from typing import Protocol
from uuid import UUID

from src.core.models import SessionModel


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> SessionModel | None:
        """Get game session by ID, if record exists."""
        ...

    def create_game(self, game: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new game session and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: SessionModel) -> SessionModel | None:
        """Overwrite an existing record with the new session state."""
        ...

    def delete_game(self, game_id: UUID) -> SessionModel | None:
        """Remove a game session's record."""
        ...
