#!/usr/bin/env python3
"""Cost model, grid indexing and result records."""

import pytest

from tileroute.core.types import (
    Grid, GridFormatError, SearchResult, TerrainType, TileWorldError, INFINITY,
)


class TestTerrainType:
    def test_costs(self):
        assert (TerrainType.ROAD.cost, TerrainType.ROAD.diagonal_cost) == (10, 14)
        assert (TerrainType.SAND.cost, TerrainType.SAND.diagonal_cost) == (14, 20)
        assert (TerrainType.WATER.cost, TerrainType.WATER.diagonal_cost) == (20, 28)
        assert (TerrainType.MOUNTAIN.cost, TerrainType.MOUNTAIN.diagonal_cost) == (24, 34)

    @pytest.mark.parametrize("t", [TerrainType.START, TerrainType.END, TerrainType.PATH])
    def test_markers_cost_like_road(self, t):
        assert (t.cost, t.diagonal_cost) == (10, 14)
        assert t.walkable

    @pytest.mark.parametrize("t", [TerrainType.NON_WALKABLE, TerrainType.UNKNOWN])
    def test_blocked_terrain_is_infinite(self, t):
        assert t.cost == INFINITY
        assert t.diagonal_cost == INFINITY
        assert not t.walkable

    def test_from_rgb(self):
        assert TerrainType.from_rgb((255, 255, 0)) is TerrainType.SAND
        assert TerrainType.from_rgb((0, 0, 0)) is TerrainType.NON_WALKABLE
        assert TerrainType.from_rgb((255, 255, 255, 255)) is TerrainType.ROAD
        assert TerrainType.from_rgb((1, 2, 3)) is TerrainType.UNKNOWN

    def test_from_symbol(self):
        assert TerrainType.from_symbol("~") is TerrainType.WATER
        assert TerrainType.from_symbol("x") is TerrainType.UNKNOWN


class TestGrid:
    def test_from_rows(self):
        grid = Grid.from_rows(["S.", "#E"])
        assert (grid.width, grid.height) == (2, 2)
        assert grid.terrain_at((0, 1)) is TerrainType.NON_WALKABLE
        assert grid.terrain_at((1, 1)) is TerrainType.END
        assert grid.to_rows() == ["S.", "#E"]

    def test_ragged_rows_rejected(self):
        with pytest.raises(GridFormatError):
            Grid.from_rows(["S..", "E."])

    def test_empty_rows_rejected(self):
        with pytest.raises(GridFormatError):
            Grid.from_rows([])

    def test_format_error_is_a_value_error(self):
        assert issubclass(GridFormatError, ValueError)
        assert issubclass(GridFormatError, TileWorldError)

    def test_index_conversion_is_row_major(self):
        grid = Grid.from_rows(["." * 40] * 30)
        assert grid.size == 1200
        assert grid.index_of((0, 0)) == 0
        assert grid.index_of((1, 0)) == 1
        assert grid.index_of((0, 1)) == 40
        assert grid.cell_of(40) == (0, 1)
        assert grid.cell_of(41) == (1, 1)
        assert grid.cell_of(grid.index_of((17, 23))) == (17, 23)

    def test_first_endpoint_in_row_major_scan_wins(self):
        grid = Grid.from_rows(["..S", "S.E", "E.."])
        assert grid.find_start() == (2, 0)
        assert grid.find_end() == (2, 1)

    def test_missing_endpoint_is_none(self):
        grid = Grid.from_rows(["S.."])
        assert grid.find_end() is None

    def test_copy_is_independent(self):
        grid = Grid.from_rows(["S.E"])
        other = grid.copy()
        other.mark_path((1, 0))
        assert other.to_rows() == ["S*E"]
        assert grid.to_rows() == ["S.E"]

    def test_in_bounds(self):
        grid = Grid.from_rows(["...", "..."])
        assert grid.in_bounds((2, 1))
        assert not grid.in_bounds((3, 0))
        assert not grid.in_bounds((0, -1))


class TestSearchResult:
    def test_defaults_mean_no_path(self):
        r = SearchResult()
        assert r.best_path_cost == -1
        assert not r.found
        assert r.solution_path == []

    def test_path_start_to_end_reverses(self):
        r = SearchResult(20, 2, [(2, 0), (1, 0), (0, 0)])
        assert r.found
        assert r.path_start_to_end() == [(0, 0), (1, 0), (2, 0)]
        assert r.solution_path[0] == (2, 0)
