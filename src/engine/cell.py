"""
Cell module for the Minesweeper engine.

A cell is one grid position: whether it hides a mine, how many of its
neighbours do, and what the player currently sees (covered, revealed
or flagged).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visible states of a cell."""

    COVERED = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared with the board and the environment
OBS_COVERED = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell contains a mine. Fixed once the
            board is generated.
        adjacent_mines: Count of mines among the 8 neighbours (0-8).
            Only meaningful when the cell has no mine.
        state: Current visible state.
    """

    has_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.COVERED

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell went from covered to revealed, False if it
            was already revealed or is flagged.
        """
        if self.state != CellState.COVERED:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was placed or removed, False if the cell is
            revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.COVERED:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.COVERED
        return True

    @property
    def is_covered(self) -> bool:
        """Check if cell is covered."""
        return self.state == CellState.COVERED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self, show_mine: bool = False) -> int:
        """
        Convert cell to its observation code.

        Args:
            show_mine: Report a mine as 9 even while it is still covered
                or flagged (used once a round is over).

        Returns:
            -1: Covered cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Mine (revealed, or shown)
        """
        if self.has_mine and (show_mine or self.is_revealed):
            return OBS_MINE
        if self.state == CellState.COVERED:
            return OBS_COVERED
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        return self.adjacent_mines
