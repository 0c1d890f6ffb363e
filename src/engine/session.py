"""
Session module for the Minesweeper engine.

A session owns one board and everything that spans it: the game
outcome, the mine counter shown to the player, the round timer and
the level progression across successive rounds.
"""
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Union

from .board import Board, BoardConfig
from .cell import Cell

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Cells kept mine-free by the safety cap
SAFE_AREA = 9


class GameState(Enum):
    """Possible states of a round."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class TimerUnset:
    """No input yet this round."""


@dataclass(frozen=True)
class TimerRunning:
    """Round clock started at ``started_at`` (seconds, session clock)."""

    started_at: float


TimerState = Union[TimerUnset, TimerRunning]


def cap_mines(mines: int, width: int, height: int) -> int:
    """Limit a mine count so that at least SAFE_AREA cells stay mine-free."""
    return max(0, min(mines, width * height - SAFE_AREA))


# ============================================================================
# Session Class
# ============================================================================

class Session:
    """
    Minesweeper game session.

    Drives rounds on a single board: reveal and flag inputs, win/loss
    detection, the mines-left counter and the timer. Calling
    ``new_game`` starts the next round, with difficulty depending on
    how the previous one ended:

        - won: level goes up by one and the mine count doubles
        - lost: level and mine count return to their starting values
        - still playing: same level, same mine count

    Inputs received while a round is over are ignored until
    ``new_game`` is called.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the session and generate the first board.

        Args:
            config: Board dimensions and starting mine count
                (default: 16x16 with 40 mines).
            rng: Random generator for mine layouts (default: unseeded).
            clock: Monotonic seconds source for the timer.
        """
        self.config = config or BoardConfig()
        self.rng = rng or random.Random()
        self._clock = clock

        self.base_mines = self.config.num_mines
        self.mines = self.config.num_mines
        self.level = 1

        self.board = Board(self.config, rng=self.rng)
        self.game_state = GameState.PLAYING
        self.mines_left = self.mines
        self.elapsed_time = 0.0
        self._timer: TimerState = TimerUnset()

    @classmethod
    def new(cls, width: int, height: int, mine_count: int, **kwargs) -> "Session":
        """Build a session from bare dimensions and mine count."""
        return cls(BoardConfig(width, height, mine_count), **kwargs)

    # ========================================================================
    # Round Lifecycle
    # ========================================================================

    def new_game(self) -> None:
        """
        Start the next round.

        Applies level progression according to the state being left,
        caps the mine count, then lays out a fresh board and resets the
        timer and mines-left counter.
        """
        if self.game_state == GameState.WON:
            self.level += 1
            self.mines *= 2
            logger.info("Level up to %d with %d mines", self.level, self.mines)
        elif self.game_state == GameState.LOST:
            if self.level != 1:
                logger.info("Back to level 1 with %d mines", self.base_mines)
            self.level = 1
            self.mines = self.base_mines

        capped = cap_mines(self.mines, self.width, self.height)
        if capped != self.mines:
            logger.info(
                "Capping mines at %d (requested %d) on %dx%d board",
                capped, self.mines, self.width, self.height,
            )
            self.mines = capped

        self.board.generate(self.mines)
        self.game_state = GameState.PLAYING
        self._timer = TimerUnset()
        self.elapsed_time = 0.0
        self.mines_left = self.mines
        logger.debug("New round: level %d, %d mines", self.level, self.mines)

    # ========================================================================
    # Input Handling
    # ========================================================================

    def handle_primary_input(self, x: int, y: int) -> None:
        """
        Reveal the cell at (x, y), starting the timer on first input.

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        if not self.is_playing:
            return
        cell = self.board.get_cell(x, y)
        self._start_timer()
        self._reveal(x, y, cell)

    def handle_secondary_input(self, x: int, y: int) -> None:
        """
        Toggle the flag at (x, y), starting the timer on first input.

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        if not self.is_playing:
            return
        cell = self.board.get_cell(x, y)
        self._start_timer()
        if not self.board.toggle_flag(x, y):
            return
        self.mines_left += -1 if cell.is_flagged else 1

    def _reveal(self, x: int, y: int, cell: Cell) -> None:
        """Reveal through the board and settle the round outcome."""
        revealed = self.board.reveal(x, y)
        if not revealed:
            return

        if cell.has_mine:
            self._finish(GameState.LOST)
            return

        logger.debug("Revealed %d cells from (%d, %d)", len(revealed), x, y)
        self._check_win_condition()

    def _check_win_condition(self) -> None:
        """Win once only the mines remain unrevealed."""
        if self.board.count_concealed() == self.mines:
            self._finish(GameState.WON)

    def _finish(self, outcome: GameState) -> None:
        self.update_timer()
        self.game_state = outcome
        logger.info(
            "Round %s at level %d after %.1fs",
            outcome.name.lower(), self.level, self.elapsed_time,
        )

    # ========================================================================
    # Timer
    # ========================================================================

    def _start_timer(self) -> None:
        if isinstance(self._timer, TimerUnset):
            self._timer = TimerRunning(self._clock())

    def update_timer(self) -> None:
        """
        Refresh ``elapsed_time`` while the round is being played.

        Does nothing before the first input or after the round has
        ended, which freezes the last computed value.
        """
        if isinstance(self._timer, TimerRunning) and self.is_playing:
            self.elapsed_time = self._clock() - self._timer.started_at

    @property
    def timer(self) -> TimerState:
        """Current timer state."""
        return self._timer

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def is_playing(self) -> bool:
        """Check if the round is still in progress."""
        return self.game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if the round was won."""
        return self.game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if the round was lost."""
        return self.game_state == GameState.LOST

    def get_cell(self, x: int, y: int) -> Cell:
        """Get cell at (x, y) for display. Raises OutOfBoundsError."""
        return self.board.get_cell(x, y)
