"""
Unit tests for Board class.

Tests configuration, generation, flood-fill reveal, flagging, bounds
checking and observation export.
"""
import random

import numpy as np
import pytest
from engine import Board, BoardConfig, CellState, OutOfBoundsError


def brute_force_count(board: Board, x: int, y: int) -> int:
    """Count mines around (x, y) without using the board's helpers."""
    count = 0
    for ny in range(y - 1, y + 2):
        for nx in range(x - 1, x + 2):
            if (nx, ny) == (x, y):
                continue
            if 0 <= nx < board.width and 0 <= ny < board.height:
                count += board.get_cell(nx, ny).has_mine
    return count


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_default_config_is_intermediate(self) -> None:
        """Default configuration is 16x16 with 40 mines."""
        config = BoardConfig()
        assert (config.width, config.height, config.num_mines) == (16, 16, 40)

    def test_zero_width_raises_error(self) -> None:
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_zero_height_raises_error(self) -> None:
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_too_many_mines_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Too many mines"):
            BoardConfig(3, 3, 9)

    def test_max_mines_is_valid(self) -> None:
        assert BoardConfig(3, 3, 8).num_mines == 8


# ============================================================================
# Generation Tests
# ============================================================================

class TestGeneration:
    """Test random mine layout and adjacency counts."""

    @pytest.mark.parametrize("seed", range(20))
    def test_exact_mine_count(self, seed: int) -> None:
        """Generated board holds exactly the requested mines."""
        board = Board(BoardConfig(9, 9, 10), rng=random.Random(seed))
        assert len(board.mine_positions()) == 10
        assert board.num_mines == 10

    @pytest.mark.parametrize("seed", range(20))
    def test_adjacency_counts_are_exact(self, seed: int) -> None:
        """Every safe cell counts its in-bounds mine neighbours."""
        board = Board(BoardConfig(9, 7, 15), rng=random.Random(seed))
        for (x, y), cell in board.cells():
            if not cell.has_mine:
                assert cell.adjacent_mines == brute_force_count(board, x, y)

    def test_new_board_all_cells_covered(self, default_board: Board) -> None:
        for _, cell in default_board.cells():
            assert cell.is_covered is True

    def test_generate_discards_flags_and_reveals(self) -> None:
        """Regenerating overwrites prior player marks."""
        board = Board(BoardConfig(5, 5, 0))
        board.toggle_flag(0, 0)
        board.reveal(4, 4)
        board.generate(3)
        assert board.count_state(CellState.COVERED) == 25
        assert board.num_mines == 3

    def test_generate_fills_entire_board(self) -> None:
        board = Board(BoardConfig(3, 3, 0))
        board.generate(9)
        assert len(board.mine_positions()) == 9

    def test_generate_rejects_more_mines_than_cells(self) -> None:
        board = Board(BoardConfig(3, 3, 0))
        with pytest.raises(ValueError):
            board.generate(10)

    def test_layouts_differ_between_calls(self) -> None:
        """No fixed seed: successive layouts are independent."""
        board = Board(BoardConfig(16, 16, 40))
        layouts = set()
        for _ in range(5):
            board.generate(40)
            layouts.add(frozenset(board.mine_positions()))
        assert len(layouts) > 1

    def test_place_mines_sets_counts(self, wall_board: Board) -> None:
        """Column 4 borders the wall, columns 0-3 are clear."""
        assert [wall_board.get_cell(4, y).adjacent_mines for y in range(5)] == [
            2, 3, 3, 3, 2,
        ]
        for y in range(5):
            for x in range(4):
                assert wall_board.get_cell(x, y).adjacent_mines == 0

    def test_place_mines_out_of_bounds(self) -> None:
        board = Board(BoardConfig(3, 3, 0))
        with pytest.raises(OutOfBoundsError):
            board.place_mines([(3, 0)])


# ============================================================================
# Reveal Tests
# ============================================================================

class TestReveal:
    """Test single and cascading reveals."""

    def test_zero_region_cascades_to_border(self, wall_board: Board) -> None:
        """20-cell zero region plus its 5-cell border open in one call."""
        revealed = wall_board.reveal(0, 0)

        expected = {(x, y) for x in range(5) for y in range(5)}
        assert set(revealed) == expected
        assert len(revealed) == 25
        assert revealed[0] == (0, 0)

    def test_cascade_never_reveals_mines(self, wall_board: Board) -> None:
        wall_board.reveal(2, 2)
        for x, y in wall_board.mine_positions():
            assert wall_board.get_cell(x, y).is_covered is True

    def test_cascade_stops_at_wall(self, wall_board: Board) -> None:
        """Cells behind the mine wall stay covered."""
        wall_board.reveal(0, 4)
        for y in range(5):
            for x in (6, 7):
                assert wall_board.get_cell(x, y).is_covered is True

    def test_numbered_cell_reveals_only_itself(self, wall_board: Board) -> None:
        assert wall_board.reveal(4, 2) == [(4, 2)]
        assert wall_board.count_state(CellState.REVEALED) == 1

    def test_mine_reveals_only_itself(self, wall_board: Board) -> None:
        assert wall_board.reveal(5, 0) == [(5, 0)]
        assert wall_board.count_state(CellState.REVEALED) == 1

    def test_empty_board_reveals_everything(self, empty_board: Board) -> None:
        empty_board.reveal(2, 2)
        assert empty_board.count_concealed() == 0

    def test_reveal_twice_is_noop(self, wall_board: Board) -> None:
        wall_board.reveal(4, 0)
        assert wall_board.reveal(4, 0) == []

    def test_flagged_cell_is_not_revealed(self, wall_board: Board) -> None:
        """A flag protects the cell; it must be removed first."""
        wall_board.toggle_flag(0, 0)
        assert wall_board.reveal(0, 0) == []
        assert wall_board.get_cell(0, 0).is_flagged is True

    def test_cascade_skips_flagged_cells(self, wall_board: Board) -> None:
        """A flag inside a zero region is left in place by the cascade."""
        wall_board.toggle_flag(3, 3)
        revealed = wall_board.reveal(0, 0)
        assert (3, 3) not in revealed
        assert wall_board.get_cell(3, 3).is_flagged is True

    def test_large_sparse_board_cascade(self) -> None:
        """Cascade over a big empty board does not exhaust the stack."""
        board = Board(BoardConfig(200, 200, 0))
        revealed = board.reveal(0, 0)
        assert len(revealed) == 200 * 200


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flag toggling on the board."""

    def test_flag_and_unflag(self, default_board: Board) -> None:
        assert default_board.toggle_flag(0, 0) is True
        assert default_board.get_cell(0, 0).is_flagged is True
        assert default_board.toggle_flag(0, 0) is True
        assert default_board.get_cell(0, 0).is_covered is True

    def test_flag_revealed_cell_fails(self, wall_board: Board) -> None:
        wall_board.reveal(4, 0)
        assert wall_board.toggle_flag(4, 0) is False


# ============================================================================
# Bounds Tests
# ============================================================================

class TestBounds:
    """Out-of-grid coordinates fail fast."""

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (8, 0), (0, 5)])
    def test_get_cell_out_of_bounds(self, wall_board: Board, x: int, y: int) -> None:
        with pytest.raises(OutOfBoundsError):
            wall_board.get_cell(x, y)

    def test_reveal_out_of_bounds(self, wall_board: Board) -> None:
        with pytest.raises(OutOfBoundsError, match=r"\(-1, 2\)"):
            wall_board.reveal(-1, 2)

    def test_flag_out_of_bounds(self, wall_board: Board) -> None:
        with pytest.raises(IndexError):
            wall_board.toggle_flag(100, 0)

    def test_neighbors_clipped_at_corner(self, wall_board: Board) -> None:
        assert sorted(wall_board.get_neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]
        assert len(wall_board.get_neighbors(3, 2)) == 8


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array export."""

    def test_shape_is_height_by_width(self, wall_board: Board) -> None:
        obs = wall_board.get_observation()
        assert obs.shape == (5, 8)
        assert obs.dtype == np.int8

    def test_new_board_all_covered(self, default_board: Board) -> None:
        assert np.all(default_board.get_observation() == -1)

    def test_indexed_by_row_then_column(self, wall_board: Board) -> None:
        wall_board.reveal(4, 1)
        wall_board.toggle_flag(7, 3)
        obs = wall_board.get_observation()
        assert obs[1, 4] == 3
        assert obs[3, 7] == -2

    def test_show_mines(self, wall_board: Board) -> None:
        obs = wall_board.get_observation(show_mines=True)
        assert np.all(obs[:, 5] == 9)
        assert np.all(obs[:, :5] == -1)

    def test_valid_actions_are_covered_cells(self, wall_board: Board) -> None:
        assert len(wall_board.get_valid_actions()) == 40
        wall_board.reveal(0, 0)
        actions = wall_board.get_valid_actions()
        assert len(actions) == 15
        assert (0, 0) not in actions
