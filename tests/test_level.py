"""Tests for the tile grid."""

import pytest

from spike_platformer.config import LevelConfig
from spike_platformer.level import CellKind, LevelGrid, build_default_level


class TestLevelGrid:
    def test_from_rows(self):
        grid = LevelGrid.from_rows(["..^", "###"], tile_size=10)
        assert grid.rows == 2
        assert grid.cols == 3
        assert grid.cell_at(2, 0) == CellKind.SPIKE
        assert grid.cell_at(0, 1) == CellKind.FLOOR
        assert grid.cell_at(0, 0) == CellKind.EMPTY

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValueError, match="row 1"):
            LevelGrid.from_rows(["...", "##"])

    def test_unknown_character_rejected(self):
        with pytest.raises(ValueError, match="'x'"):
            LevelGrid.from_rows(["..x"])

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            LevelGrid.from_rows([])

    def test_outside_grid_is_empty(self):
        grid = LevelGrid.from_rows(["#"])
        assert grid.cell_at(-1, 0) == CellKind.EMPTY
        assert grid.cell_at(0, 5) == CellKind.EMPTY

    def test_cells_of_skips_empty(self):
        grid = LevelGrid.from_rows([".#", "^#"])
        assert list(grid.cells_of()) == [
            (1, 0, CellKind.FLOOR),
            (0, 1, CellKind.SPIKE),
            (1, 1, CellKind.FLOOR),
        ]
        assert list(grid.cells_of(CellKind.SPIKE)) == [(0, 1, CellKind.SPIKE)]

    def test_cell_rect(self):
        grid = LevelGrid.from_rows(["...", "..."], tile_size=40)
        assert grid.cell_rect(2, 1) == (80, 40, 40, 40)

    def test_immutable(self):
        grid = LevelGrid.from_rows(["#"])
        with pytest.raises(AttributeError):
            grid.tile_size = 10

    def test_to_rows(self):
        rows = ("..^.", "####")
        assert LevelGrid.from_rows(rows).to_rows() == rows


class TestDefaultLevel:
    def test_dimensions(self):
        grid = build_default_level()
        assert grid.cols == 20
        assert grid.rows == 15
        assert grid.pixel_size == (800, 600)

    def test_bottom_row_is_floor_with_two_spikes(self):
        grid = build_default_level()
        bottom = grid.rows - 1
        spikes = [col for col, row, _ in grid.cells_of(CellKind.SPIKE)]
        assert spikes == [7, 12]
        for col in range(grid.cols):
            expected = CellKind.SPIKE if col in (7, 12) else CellKind.FLOOR
            assert grid.cell_at(col, bottom) == expected

    def test_upper_rows_empty(self):
        grid = build_default_level()
        assert all(row == grid.rows - 1 for _, row, _ in grid.cells_of())

    def test_custom_config(self):
        grid = build_default_level(LevelConfig(cols=5, rows=3, tile_size=16, spike_columns=(0,)))
        assert grid.to_rows() == (".....", ".....", "^####")
        assert grid.tile_size == 16
