"""
Undo history.

Before every committed placement the board (and the player about to move) is stored.
Undo pops the most recent snapshot. The history is bounded: the oldest snapshots fall off first.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Self

from src.core.models import HistoryEntryModel
from src.dots.board import Board
from src.dots.cell import Owner

logger = logging.getLogger(__name__)

MAX_MOVE_HISTORY = 50


@dataclass
class MoveHistoryEntry:
    board: Board
    current_player: Owner

    def copy(self) -> Self:
        return type(self)(self.board.copy(), self.current_player)


class MoveHistory:
    """
    Ring buffer of board snapshots
    ----

    NOTE every snapshot is copied on the way in AND on the way out:
    * mutating the live board after save_move() must not change the stored snapshot
    * mutating a snapshot returned by undo_last_move() must not change anything still stored
    """

    def __init__(self, limit: int = MAX_MOVE_HISTORY) -> None:
        self.limit = limit
        self._entries: deque[MoveHistoryEntry] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._entries)

    def save_move(self, board: Board, current_player: Owner) -> None:
        # deque with maxlen drops the oldest entry when full
        self._entries.append(MoveHistoryEntry(board.copy(), current_player))

    def undo_last_move(self) -> Optional[MoveHistoryEntry]:
        """Most recent snapshot, or None when there is nothing to undo (not an error)"""
        if not self._entries:
            logger.debug("No moves to undo")
            return None
        return self._entries.pop().copy()

    def can_undo(self) -> bool:
        return len(self._entries) > 0

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[MoveHistoryEntry]:
        """Copies of the stored snapshots, oldest first"""
        return [entry.copy() for entry in self._entries]

    # -- persistence helpers ---
    def to_models(self) -> list[HistoryEntryModel]:
        return [
            HistoryEntryModel(
                board_state=entry.board.to_state(),
                current_player=entry.current_player.value,
            )
            for entry in self._entries
        ]

    @classmethod
    def from_models(
        cls, models: list[HistoryEntryModel], limit: int = MAX_MOVE_HISTORY
    ) -> Self:
        history = cls(limit)
        for model in models:
            history._entries.append(
                MoveHistoryEntry(
                    Board.from_state(model.board_state), Owner(model.current_player)
                )
            )
        return history
