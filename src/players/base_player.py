"""
Base player interface for automated Minesweeper play.

Defines the abstract interface that all players must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Player Interface
# ============================================================================

class BasePlayer(ABC):
    """
    Abstract base class for Minesweeper players.

    Players see only the observation array, never the board itself, and
    answer with a flat action index (y * width + x) naming the cell to
    reveal.
    """

    def __init__(self, board_width: int, board_height: int) -> None:
        """
        Initialize the player.

        Args:
            board_width: Number of columns in the board.
            board_height: Number of rows in the board.
        """
        self.board_width = board_width
        self.board_height = board_height
        self.total_cells = board_width * board_height

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell codes indexed [y, x].
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (y * width + x).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return int(action) % self.board_width, int(action) // self.board_width

    def position_to_action(self, x: int, y: int) -> int:
        """Convert (x, y) position to flat action index."""
        return y * self.board_width + x

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Args:
            observation: 2D array of cell codes.

        Returns:
            Boolean mask where True = covered cell.
        """
        return observation.flatten() == -1

    def reset(self) -> None:
        """Reset player state for a new round."""
