"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameSession(Base):
    __tablename__ = "game_sessions"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board_state: Mapped[list[list[dict[str, Any]]]] = mapped_column(JSON)
    # list of {"board_state": ..., "current_player": ...}, oldest first
    move_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    current_player: Mapped[str]
    human_player: Mapped[str]
    computer_player_color: Mapped[str]
    current_level: Mapped[str]
    level_set: Mapped[str]
    game_over: Mapped[bool] = mapped_column(default=False)
    level_over: Mapped[bool] = mapped_column(default=False)
    level_winners: Mapped[list[str]] = mapped_column(JSON, default=list)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
