"""Wire up the application: settings --> logging --> database --> repository --> service"""

from sqlalchemy.orm import Session

from src.config.logging_setup import setup_logging
from src.config.settings import Settings, get_settings
from src.db.repository import GameRepository
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import GameService


def build_service(db_session: Session, settings: Settings | None = None) -> GameService:
    """GameService backed by SQL persistence, configured from settings."""
    settings = settings or get_settings()
    repository: GameRepository = SQLGameRepository(db_session)
    return GameService(
        repository,
        history_limit=settings.move_history_limit,
        max_explosion_waves=settings.max_explosion_waves,
        default_level_set=settings.default_level_set,
    )


def create_service() -> GameService:
    """Application startup: configure logging, create the tables, and open a session on the configured database."""
    settings = get_settings()
    setup_logging(settings.log_level)

    # database engine is built from the (cached) settings on import
    from src.db.database import SessionLocal, init_db

    init_db()
    return build_service(SessionLocal(), settings)
