"""Unit tests for bitmask candidate computation."""

import pytest
from sudoku_stepper.core import EMPTY, FULL_MASK, PEERS, UNITS, Tile, TileGrid


def mask(*digits):
    return sum(1 << d for d in digits)


def grid_with(cells):
    """Build a grid from an index -> tile mapping, everything else empty."""
    tiles = [EMPTY] * 81
    for index, tile in cells.items():
        tiles[index] = tile
    return TileGrid(tiles)


# Cell 10 can only take 1: row 1 holds 3-9 and column 1 holds 2.
DEAD_PEER_CLUES = {9 + col: Tile.given(digit) for col, digit in zip(range(2, 9), range(3, 10))}
DEAD_PEER_CLUES[28] = Tile.given(2)


class TestTables:
    """Tests for the precomputed unit and peer tables."""

    def test_units_contain_cell(self):
        for index in range(81):
            for unit in UNITS[index]:
                assert index in unit
                assert len(unit) == 9

    def test_peer_count(self):
        # 20 peers plus the cell itself
        assert all(len(peers) == 21 for peers in PEERS)

    def test_box_unit(self):
        assert UNITS[40][2] == (30, 31, 32, 39, 40, 41, 48, 49, 50)


class TestCandidateIndex:
    """Tests for CandidateIndex queries."""

    def test_used_digits(self, classic_puzzle):
        grid = TileGrid.from_string(classic_puzzle)
        # row {5,3,7}, column {8}, box {5,3,6,9,8}
        assert grid.candidates.used_digits(2) == mask(3, 5, 6, 7, 8, 9)

    def test_bit_zero_unused(self, classic_puzzle):
        grid = TileGrid.from_string(classic_puzzle)
        for index in range(81):
            assert grid.candidates.used_digits(index) & 1 == 0

    def test_used_digits_ignore_self(self):
        grid = grid_with({0: Tile.user(4)})
        assert grid.candidates.used_digits(0) == mask(4)
        assert grid.candidates.used_digits(0, ignore_self=True) == 0

    def test_next_available_digit_ascending(self, classic_puzzle):
        index = TileGrid.from_string(classic_puzzle).candidates
        assert index.next_available_digit(2) == 1
        assert index.next_available_digit(2, 1) == 2
        assert index.next_available_digit(2, 2) == 4
        assert index.next_available_digit(2, 4) is None

    def test_is_available(self, classic_puzzle):
        index = TileGrid.from_string(classic_puzzle).candidates
        assert index.is_available(2, 4)
        assert not index.is_available(2, 5)

    def test_candidates_list(self, classic_puzzle):
        index = TileGrid.from_string(classic_puzzle).candidates
        assert index.candidates(2) == [1, 2, 4]

    def test_index_tracks_grid_edits(self):
        grid = TileGrid()
        assert grid.candidates.used_digits(80) == 0
        grid.try_insert(72, Tile.user(6))
        assert grid.candidates.used_digits(80) == mask(6)
        grid.try_insert(72, EMPTY)
        assert grid.candidates.used_digits(80) == 0

    def test_lookahead_ok_on_open_grid(self):
        grid = grid_with({0: Tile.solver(1)})
        assert grid.candidates.lookahead_ok(0)

    def test_lookahead_detects_dead_peer(self):
        grid = grid_with(DEAD_PEER_CLUES)
        assert grid.candidates.candidates(10) == [1]

        # Placing 1 at cell 0 (same box) leaves cell 10 nothing.
        grid = grid_with({**DEAD_PEER_CLUES, 0: Tile.solver(1)})
        assert grid.candidates.used_digits(10) == FULL_MASK
        assert not grid.candidates.lookahead_ok(0)

        grid = grid_with({**DEAD_PEER_CLUES, 0: Tile.solver(2)})
        assert grid.candidates.lookahead_ok(0)

    def test_lookahead_ignores_cells_outside_units(self):
        grid = grid_with({**DEAD_PEER_CLUES, 0: Tile.solver(1), 80: Tile.solver(1)})
        # Cell 10 is dead, but it shares no unit with cell 80.
        assert not grid.candidates.lookahead_ok(0)
        assert grid.candidates.lookahead_ok(80)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
