"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type aliases to make SessionModel easier to read
PlayerColorName = str
CellData = dict[str, Any]
BoardData = list[list[CellData]]


@dataclass
class HistoryEntryModel:
    """One undo step: the board before a move + whose turn it was."""

    board_state: BoardData
    current_player: PlayerColorName


@dataclass
class SessionModel:
    """Transport-safe representation of a game session used between API, Service, DB, and Game layers."""

    board_state: BoardData
    current_player: PlayerColorName
    human_player: PlayerColorName
    computer_player_color: PlayerColorName
    current_level: str
    level_set: str
    move_history: list[HistoryEntryModel] = field(default_factory=list)
    game_over: bool = False
    level_over: bool = False
    level_winners: list[PlayerColorName] = field(default_factory=list)
    winner: Optional[str] = None
