"""
Evaluation module for automated Minesweeper players.

Plays successive rounds through the Gymnasium environment so that
level progression applies exactly as it does for a human: a win
doubles the mines for the next round, a loss resets them.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from engine.board import BoardConfig
from engine.environment import MinesweeperEnv
from players.base_player import BasePlayer

logger = logging.getLogger(__name__)


# ============================================================================
# Round Statistics
# ============================================================================

@dataclass
class RoundStats:
    """Statistics for a single round."""

    total_reward: float = 0.0
    steps: int = 0
    won: bool = False
    revealed_cells: int = 0
    level: int = 1


# ============================================================================
# Player Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare players over a run of successive rounds.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_rounds: int = 100,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_rounds: Number of rounds to play.
            max_steps: Step limit per round (default: one per cell).
        """
        self.board_config = board_config or BoardConfig()
        self.num_rounds = num_rounds
        self.max_steps = max_steps or self.board_config.area

    def play_round(self, env: MinesweeperEnv, player: BasePlayer) -> RoundStats:
        """Play one round to completion or until the step limit."""
        stats = RoundStats()
        observation, info = env.reset()
        stats.level = info["level"]
        player.reset()

        for _ in range(self.max_steps):
            action = player.select_action(observation, env.get_action_mask())
            observation, reward, terminated, truncated, info = env.step(action)
            stats.total_reward += float(reward)
            stats.steps += 1
            if terminated or truncated:
                break

        stats.won = info["game_state"] == "WON"
        stats.revealed_cells = info["revealed"]
        return stats

    def evaluate(self, player: BasePlayer) -> Dict[str, Any]:
        """
        Evaluate a single player.

        Args:
            player: Player to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0
        max_level = 1

        for round_number in range(self.num_rounds):
            stats = self.play_round(env, player)
            wins += stats.won
            total_reward += stats.total_reward
            total_steps += stats.steps
            total_revealed += stats.revealed_cells
            max_level = max(max_level, stats.level)
            logger.debug(
                "Round %d: %s at level %d in %d steps",
                round_number + 1, "won" if stats.won else "lost",
                stats.level, stats.steps,
            )

        return {
            "win_rate": wins / self.num_rounds,
            "avg_reward": total_reward / self.num_rounds,
            "avg_steps": total_steps / self.num_rounds,
            "avg_revealed": total_revealed / self.num_rounds,
            "max_level": max_level,
        }

    def compare(
        self, players: Dict[str, BasePlayer]
    ) -> Dict[str, Dict[str, Any]]:
        """
        Compare multiple players.

        Args:
            players: Dictionary of player_name -> player.

        Returns:
            Dictionary of player_name -> evaluation metrics.
        """
        results = {}
        for name, player in players.items():
            logger.info("Evaluating %s over %d rounds", name, self.num_rounds)
            results[name] = self.evaluate(player)
        return results
