"""
Logic-based player for Minesweeper.

Deduces safe cells from the revealed numbers and only guesses when no
deduction is available.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .base_player import BasePlayer

Position = Tuple[int, int]


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    Exactly ``mine_count`` of ``cells`` hold a mine.

    A revealed "2" with three covered neighbours and no flags gives
    cells={A, B, C}, mine_count=2.
    """

    cells: FrozenSet[Position]
    mine_count: int


# ============================================================================
# Logic Player
# ============================================================================

class LogicPlayer(BasePlayer):
    """
    Player that propagates constraints from revealed numbers.

    Strategy:
        1. On an untouched board, open a corner.
        2. Build one constraint per revealed number with covered
           neighbours, then resolve trivially full or empty constraints
           until nothing changes, including pairwise subset reduction.
        3. Reveal any cell proven safe.
        4. Otherwise reveal the covered cell with the lowest estimated
           mine probability.
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
        """
        Select the safest action available.

        Args:
            observation: 2D array of cell codes indexed [y, x].
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (y * width + x).
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            return 0

        if len(valid_indices) == self.total_cells:
            return self._select_corner(valid_indices)

        safe_cells, mine_cells = self.solve(observation)
        valid = set(int(i) for i in valid_indices)
        for x, y in sorted(safe_cells):
            action = self.position_to_action(x, y)
            if action in valid:
                return action

        return self._select_by_probability(observation, valid_indices, mine_cells)

    def _select_corner(self, valid_indices: np.ndarray) -> int:
        """Open a random corner on an untouched board."""
        last_x, last_y = self.board_width - 1, self.board_height - 1
        corners = [
            self.position_to_action(0, 0),
            self.position_to_action(last_x, 0),
            self.position_to_action(0, last_y),
            self.position_to_action(last_x, last_y),
        ]
        self.rng.shuffle(corners)
        for corner in corners:
            if corner in valid_indices:
                return int(corner)
        return int(self.rng.choice(valid_indices))

    # ========================================================================
    # Constraint Solving
    # ========================================================================

    def build_constraints(self, observation: np.ndarray) -> List[Constraint]:
        """Build one constraint per revealed number with covered neighbours."""
        constraints = []
        for y in range(self.board_height):
            for x in range(self.board_width):
                value = int(observation[y, x])
                if value < 1 or value > 8:
                    continue

                covered, flagged = self._split_neighbors(observation, x, y)
                remaining = value - len(flagged)
                if not covered or remaining < 0 or remaining > len(covered):
                    continue
                constraints.append(Constraint(frozenset(covered), remaining))
        return constraints

    def solve(
        self, observation: np.ndarray
    ) -> Tuple[Set[Position], Set[Position]]:
        """
        Propagate constraints to a fixed point.

        Returns:
            Tuple of (safe_cells, mine_cells) proven by the numbers.
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        constraints = self.build_constraints(observation)

        changed = True
        while changed:
            changed = False
            reduced = []
            for constraint in constraints:
                cells = constraint.cells - safe_cells - mine_cells
                mines = constraint.mine_count - len(constraint.cells & mine_cells)
                if not cells:
                    continue
                if mines == 0:
                    safe_cells.update(cells)
                    changed = True
                elif mines == len(cells):
                    mine_cells.update(cells)
                    changed = True
                else:
                    reduced.append(Constraint(frozenset(cells), mines))

            subset_safe, subset_mines, constraints = self._subset_reduction(reduced)
            new_safe = subset_safe - safe_cells
            new_mines = subset_mines - mine_cells
            if new_safe or new_mines:
                safe_cells.update(new_safe)
                mine_cells.update(new_mines)
                changed = True

        return safe_cells, mine_cells

    def _subset_reduction(
        self, constraints: List[Constraint]
    ) -> Tuple[Set[Position], Set[Position], List[Constraint]]:
        """
        Derive facts from constraints whose cells contain another's.

        If A's cells are a strict subset of B's, then B - A holds
        B.mine_count - A.mine_count mines.
        """
        safe_cells: Set[Position] = set()
        mine_cells: Set[Position] = set()
        derived: List[Constraint] = []

        for i, small in enumerate(constraints):
            for j, large in enumerate(constraints):
                if i == j or not small.cells < large.cells:
                    continue
                diff_cells = large.cells - small.cells
                diff_mines = large.mine_count - small.mine_count
                if diff_mines == 0:
                    safe_cells.update(diff_cells)
                elif diff_mines == len(diff_cells):
                    mine_cells.update(diff_cells)
                elif 0 < diff_mines < len(diff_cells):
                    derived.append(Constraint(diff_cells, diff_mines))

        unique = list(dict.fromkeys(constraints + derived))
        return safe_cells, mine_cells, unique

    def _split_neighbors(
        self, observation: np.ndarray, x: int, y: int
    ) -> Tuple[Set[Position], Set[Position]]:
        """Split neighbours of (x, y) into covered and flagged sets."""
        covered: Set[Position] = set()
        flagged: Set[Position] = set()
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.board_width and 0 <= ny < self.board_height:
                    value = observation[ny, nx]
                    if value == -1:
                        covered.add((nx, ny))
                    elif value == -2:
                        flagged.add((nx, ny))
        return covered, flagged

    # ========================================================================
    # Guessing
    # ========================================================================

    def _select_by_probability(
        self,
        observation: np.ndarray,
        valid_indices: np.ndarray,
        known_mines: Set[Position],
    ) -> int:
        """Select the covered cell with the lowest estimated mine probability."""
        probabilities = self._estimate_mine_probabilities(observation, known_mines)

        best_action = int(valid_indices[0])
        best_prob = 1.0
        for action in valid_indices:
            position = self.action_to_position(action)
            if position in known_mines:
                continue
            prob = probabilities.get(position, 0.5)
            if prob < best_prob:
                best_prob = prob
                best_action = int(action)
        return best_action

    def _estimate_mine_probabilities(
        self,
        observation: np.ndarray,
        known_mines: Set[Position],
    ) -> Dict[Position, float]:
        """
        Estimate mine probability for each covered cell next to a number.

        Each number spreads its remaining mines evenly over its unknown
        neighbours; a cell keeps the highest estimate it receives.
        """
        estimates: Dict[Position, List[float]] = defaultdict(list)
        for constraint in self.build_constraints(observation):
            unknown = constraint.cells - known_mines
            remaining = constraint.mine_count - len(constraint.cells & known_mines)
            if not unknown or remaining < 0:
                continue
            for cell in unknown:
                estimates[cell].append(remaining / len(unknown))

        return {cell: max(probs) for cell, probs in estimates.items()}
