"""
Gymnasium environment wrapper for the Minesweeper engine.

Lets automated players drive a session through the standard RL
interface. Episodes are rounds: resetting starts the session's next
round, so level progression carries from one episode to the next.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import OBS_COVERED, OBS_FLAGGED, OBS_MINE
from .session import Session


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [y, x] where:
        - -1 = covered cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (x, y) = (i % width, i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the round
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed or flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        session: Optional[Session] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 16x16 with 40 mines).
                Ignored when ``session`` is given.
            render_mode: How to render the environment.
            session: Existing session to drive.
        """
        super().__init__()

        self.session = session or Session(config)
        self.config = self.session.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_MINE,
            shape=(self.session.height, self.session.width),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(
            self.session.height * self.session.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start the session's next round.

        Args:
            seed: Reseeds the mine layout generator when given.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self.session.new_game()
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one cell.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.session.board.get_observation()
        terminated = not self.session.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return int(action) % self.session.width, int(action) // self.session.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """
        Reveal a cell and score the result.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Reward value.
        """
        if not self.session.get_cell(x, y).is_covered:
            return -0.1

        self.session.handle_primary_input(x, y)

        if self.session.is_won:
            return 10.0
        if self.session.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        return {
            "steps": self._steps,
            "revealed": board.width * board.height - board.count_concealed(),
            "total_safe": board.width * board.height - board.num_mines,
            "game_state": self.session.game_state.name,
            "level": self.session.level,
            "mines": self.session.mines,
            "mines_left": self.session.mines_left,
            "valid_actions": len(board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.session)
        if self.render_mode == "human":
            print(render_board(self.session))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = covered cell.
        """
        return (self.session.board.get_observation() == OBS_COVERED).flatten()


# ============================================================================
# Text Rendering
# ============================================================================

def render_board(session: Session) -> str:
    """
    Render a session as text, one line per row with column headers.

    Mines are shown once the round is over.
    """
    obs = session.board.get_observation(show_mines=not session.is_playing)
    symbols = {OBS_COVERED: ".", OBS_FLAGGED: "F", OBS_MINE: "*", 0: " "}

    header = "    " + " ".join(f"{x % 10}" for x in range(session.width))
    lines = [header]
    for y in range(session.height):
        row = " ".join(symbols.get(int(v), str(v)) for v in obs[y])
        lines.append(f"{y:>3} {row}")
    return "\n".join(lines)


def status_line(session: Session) -> str:
    """Summarize counters and outcome the way the game header shows them."""
    faces = {"PLAYING": ":)", "WON": "B)", "LOST": "X("}
    return (
        f"Mines {session.mines_left:03d}  {faces[session.game_state.name]}  "
        f"Level {session.level}  Time {int(session.elapsed_time):03d}"
    )

