"""
Board module for the Minesweeper engine.

Implements the grid with mine placement, adjacency counts, flood-fill
revealing and flag toggling. Game outcome, level progression and the
timer live one layer up, in the session.
"""
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Set, Tuple

import numpy as np

from .cell import Cell, CellState


# ============================================================================
# Constants
# ============================================================================

Position = Tuple[int, int]


class OutOfBoundsError(IndexError):
    """Raised when a caller addresses a cell outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Cell ({x}, {y}) is outside a {width}x{height} board"
        )
        self.x = x
        self.y = y


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Mines to place at the start of play.
    """

    width: int = 16
    height: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def area(self) -> int:
        """Total number of cells."""
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper grid addressed by (x, y), 0 <= x < width, 0 <= y < height.

    The board is generated on construction with ``config.num_mines``
    mines. ``generate`` lays out a fresh random board with any mine
    count; ``place_mines`` lays out a fixed one.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _num_mines: int = 0

    def __post_init__(self) -> None:
        """Generate the first layout after dataclass creation."""
        self.generate(self.config.num_mines)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of covered, mine-free cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]
        self._num_mines = 0

    def generate(self, mine_count: int) -> None:
        """
        Replace the board with a fresh random layout.

        Positions are drawn uniformly at random, discarding duplicates,
        until ``mine_count`` distinct cells hold a mine. Prior reveals
        and flags are discarded.

        Args:
            mine_count: Number of mines to place.

        Raises:
            ValueError: If the count is negative or exceeds the board area.
        """
        if mine_count < 0 or mine_count > self.config.area:
            raise ValueError(
                f"Cannot place {mine_count} mines on {self.config.area} cells"
            )
        self.place_mines(self._draw_mine_positions(mine_count))

    def _draw_mine_positions(self, mine_count: int) -> Set[Position]:
        """Draw distinct random positions by rejection of duplicates."""
        positions: Set[Position] = set()
        while len(positions) < mine_count:
            x = self.rng.randrange(self.config.width)
            y = self.rng.randrange(self.config.height)
            positions.add((x, y))
        return positions

    def place_mines(self, positions: Iterable[Position]) -> None:
        """
        Replace the board with a layout holding mines at ``positions``.

        Args:
            positions: (x, y) mine positions. Duplicates count once.

        Raises:
            OutOfBoundsError: If a position lies outside the grid.
        """
        self._init_grid()
        for x, y in set(positions):
            self._check_bounds(x, y)
            self._grid[y][x].has_mine = True
            self._num_mines += 1
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                if not self._grid[y][x].has_mine:
                    self._grid[y][x].adjacent_mines = (
                        self._count_adjacent_mines(x, y)
                    )

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for nx, ny in self.get_neighbors(x, y):
            if self._grid[ny][nx].has_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def get_neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get in-bounds neighbouring positions.

        Args:
            x: Column of the center cell.
            y: Row of the center cell.

        Returns:
            List of (x, y) tuples, at most 8.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.is_valid_position(x, y):
            raise OutOfBoundsError(x, y, self.config.width, self.config.height)

    # ========================================================================
    # Board Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> List[Position]:
        """
        Reveal a cell, cascading through zero-count regions.

        A covered cell becomes revealed. If it holds a mine nothing else
        is touched. If none of its neighbours hold a mine, every covered
        neighbour is revealed too, and the cascade continues from each
        revealed zero cell. Flagged cells are never revealed.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            Positions revealed by this call, target first. Empty when the
            target was not covered.

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        cell = self.get_cell(x, y)
        if not cell.reveal():
            return []

        revealed = [(x, y)]
        if cell.has_mine or cell.adjacent_mines != 0:
            return revealed

        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            for nx, ny in self.get_neighbors(cx, cy):
                neighbor = self._grid[ny][nx]
                if not neighbor.reveal():
                    continue
                revealed.append((nx, ny))
                if neighbor.adjacent_mines == 0:
                    stack.append((nx, ny))
        return revealed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if the flag was placed or removed, False for a revealed
            cell.

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        return self.get_cell(x, y).toggle_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def num_mines(self) -> int:
        """Mines on the current layout."""
        return self._num_mines

    def get_cell(self, x: int, y: int) -> Cell:
        """
        Get cell at position.

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        self._check_bounds(x, y)
        return self._grid[y][x]

    def cells(self) -> Iterable[Tuple[Position, Cell]]:
        """Iterate over ((x, y), cell) in row-major order."""
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                yield (x, y), cell

    def count_state(self, *states: CellState) -> int:
        """Count cells whose state is any of ``states``."""
        return sum(1 for _, cell in self.cells() if cell.state in states)

    def count_concealed(self) -> int:
        """Count cells that are not revealed (covered or flagged)."""
        return self.count_state(CellState.COVERED, CellState.FLAGGED)

    def mine_positions(self) -> List[Position]:
        """List (x, y) of every mine."""
        return [pos for pos, cell in self.cells() if cell.has_mine]

    def get_observation(self, show_mines: bool = False) -> np.ndarray:
        """
        Get board state as a numpy array indexed [y, x].

        Args:
            show_mines: Report every mine as 9, covered or not.

        Returns:
            2D int8 array where:
                -1 = covered
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for (x, y), cell in self.cells():
            obs[y, x] = cell.to_observation(show_mines)
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of covered (x, y) positions.
        """
        return [pos for pos, cell in self.cells() if cell.is_covered]
