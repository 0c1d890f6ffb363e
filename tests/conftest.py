"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from engine import Board, BoardConfig, Cell, Session


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_session(
    width: int,
    height: int,
    mines: Iterable[Tuple[int, int]],
    clock: FakeClock = None,
) -> Session:
    """Session whose current board holds mines exactly at ``mines``."""
    mines = list(mines)
    session = Session.new(
        width, height, len(mines),
        rng=random.Random(0), clock=clock or FakeClock(),
    )
    session.board.place_mines(mines)
    return session


def win_round(session: Session) -> None:
    """Reveal every safe cell through the primary input."""
    mines = set(session.board.mine_positions())
    for y in range(session.height):
        for x in range(session.width):
            if (x, y) not in mines:
                session.handle_primary_input(x, y)


def lose_round(session: Session) -> None:
    """Reveal the first mine through the primary input."""
    x, y = session.board.mine_positions()[0]
    session.handle_primary_input(x, y)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 16x16 board with 40 mines."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def wall_board() -> Board:
    """
    8x5 board with a wall of mines in column 5.

    Columns 0-3 form a 20-cell zero region, column 4 is its numbered
    border, columns 6-7 sit behind the wall.
    """
    board = Board(BoardConfig(8, 5, 5))
    board.place_mines([(5, y) for y in range(5)])
    return board


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_session(clock: FakeClock) -> Session:
    """Session on the standard 16x16 board with 40 mines."""
    return Session.new(16, 16, 40, rng=random.Random(99), clock=clock)


@pytest.fixture
def wall_session(clock: FakeClock) -> Session:
    """Session on the wall layout (see wall_board)."""
    return make_session(8, 5, [(5, y) for y in range(5)], clock)


@pytest.fixture
def corner_session(clock: FakeClock) -> Session:
    """5x5 session with a single mine in the far corner."""
    return make_session(5, 5, [(4, 4)], clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)
