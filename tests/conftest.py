"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator, Iterable

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.dots.board import Board
from src.dots.capacity import assign_capacities
from src.dots.cell import Move, Owner

# (row, col) --> (owner, dot_count)
CellSetup = dict[tuple[int, int], tuple[Owner, int]]
BoardFactory = Callable[..., Board]

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def db_session_shared() -> Generator[Session, None, None]:
    """Connection to a test database. Mock real setup with multiple sessions connecting to the same engine / database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_board() -> BoardFactory:
    """
    Call the inner function with a grid size, walls, and the cells that already hold dots.
    Capacities are assigned the same way a level does it.
    """

    def _create_board(
        grid_size: int = 3,
        blocked: Iterable[tuple[int, int]] = (),
        cells: CellSetup | None = None,
    ) -> Board:
        board = Board.create(grid_size, [Move(row, col) for row, col in blocked])
        assign_capacities(board)
        for (row, col), (owner, dot_count) in (cells or {}).items():
            cell = board.cell(row, col)
            cell.owner = owner
            cell.dot_count = dot_count
        return board

    return _create_board
