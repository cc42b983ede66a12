"""
Level catalog: board layouts, and the ordered sets of levels a session plays through.

A level only defines geometry (grid size + walls). The level set decides which computer difficulty plays on it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidLevelError
from src.dots.cell import Move
from src.dots.opponent import Difficulty

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_SET_ID = "default"


@dataclass(frozen=True)
class LevelDefinition:
    id: str
    name: str
    description: str
    grid_size: int
    blocked_cells: tuple[Move, ...] = ()
    difficulty: int = 1


@dataclass(frozen=True)
class LevelEntry:
    level_id: str
    ai_difficulty: Difficulty = Difficulty.EASY


@dataclass(frozen=True)
class LevelSetDefinition:
    id: str
    name: str
    description: str
    entries: tuple[LevelEntry, ...]


def _cross(center: int) -> tuple[Move, ...]:
    """Plus-shaped wall around the center cell (center included)"""
    return (
        Move(center, center - 1),
        Move(center, center),
        Move(center, center + 1),
        Move(center - 1, center),
        Move(center + 1, center),
    )


LEVELS: dict[str, LevelDefinition] = {
    level.id: level
    for level in (
        LevelDefinition(
            id="level-1",
            name="Beginner's Grid",
            description="A simple 5x5 grid to get started",
            grid_size=5,
            difficulty=1,
        ),
        LevelDefinition(
            id="level-2",
            name="Edge Challenge",
            description="Focus on edge strategies",
            grid_size=5,
            difficulty=2,
        ),
        LevelDefinition(
            id="level-3",
            name="Corner Tactics",
            description="Master corner control",
            grid_size=5,
            difficulty=3,
        ),
        LevelDefinition(
            id="advanced-1",
            name="The Cross",
            description="A grid with a central blocked cross",
            grid_size=5,
            blocked_cells=_cross(2),
            difficulty=4,
        ),
    )
}

LEVEL_SETS: dict[str, LevelSetDefinition] = {
    level_set.id: level_set
    for level_set in (
        LevelSetDefinition(
            id=DEFAULT_LEVEL_SET_ID,
            name="Default Levels",
            description="The standard set of levels to learn and master the game",
            entries=(
                LevelEntry("level-1", Difficulty.EASY),
                LevelEntry("level-2", Difficulty.MEDIUM),
                LevelEntry("level-3", Difficulty.HARD),
            ),
        ),
        LevelSetDefinition(
            id="advanced",
            name="Advanced Levels",
            description="Challenging levels for experienced players",
            entries=(LevelEntry("advanced-1", Difficulty.EXPERT),),
        ),
    )
}


def get_level_by_id(level_id: str) -> LevelDefinition:
    if level_id not in LEVELS:
        raise InvalidLevelError(
            f"Unknown level {level_id!r}. Pick one from {', '.join(LEVELS)}"
        )
    return LEVELS[level_id]


class LevelSet:
    """The levels of one set, in play order. Entries pointing to unknown levels are skipped."""

    def __init__(self, definition: LevelSetDefinition) -> None:
        self.definition = definition
        self._entries: list[LevelEntry] = []
        for entry in definition.entries:
            if entry.level_id not in LEVELS:
                logger.warning(
                    "Level definition not found for ID: %s (set %s)",
                    entry.level_id,
                    definition.id,
                )
                continue
            self._entries.append(entry)

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def level_ids(self) -> list[str]:
        return [entry.level_id for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def has_level(self, level_id: str) -> bool:
        return level_id in self.level_ids

    def first(self) -> LevelDefinition:
        if not self._entries:
            raise InvalidLevelError(f"Level set {self.id!r} has no playable levels")
        return LEVELS[self._entries[0].level_id]

    def last(self) -> LevelDefinition:
        if not self._entries:
            raise InvalidLevelError(f"Level set {self.id!r} has no playable levels")
        return LEVELS[self._entries[-1].level_id]

    def is_last(self, level_id: str) -> bool:
        return self._index(level_id) == len(self._entries) - 1

    def next_after(self, level_id: str) -> Optional[LevelDefinition]:
        """The level following level_id, or None when level_id is the last one"""
        index = self._index(level_id)
        if index + 1 >= len(self._entries):
            return None
        return LEVELS[self._entries[index + 1].level_id]

    def ai_difficulty(self, level_id: str) -> Difficulty:
        return self._entries[self._index(level_id)].ai_difficulty

    def _index(self, level_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.level_id == level_id:
                return index
        raise InvalidLevelError(f"Level {level_id!r} is not part of level set {self.id!r}")


def get_level_set(level_set_id: str) -> LevelSet:
    """Unknown ids fall back to the default set"""
    definition = LEVEL_SETS.get(level_set_id)
    if definition is None:
        logger.info("Unknown level set %r, using %r", level_set_id, DEFAULT_LEVEL_SET_ID)
        definition = LEVEL_SETS[DEFAULT_LEVEL_SET_ID]
    return LevelSet(definition)
