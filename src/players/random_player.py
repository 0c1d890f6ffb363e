"""
Random player for Minesweeper.

Serves as a baseline by revealing random covered cells.
"""
from typing import Optional

import numpy as np

from .base_player import BasePlayer


class RandomPlayer(BasePlayer):
    """
    Player that selects covered cells uniformly at random.

    Provides a baseline for the logic player. It rarely survives a
    round past the opening on standard densities.
    """

    def __init__(
        self,
        board_width: int = 16,
        board_height: int = 16,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(board_width, board_height)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """Select a random valid action, or 0 when none is left."""
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            return 0

        return int(self.rng.choice(valid_indices))
