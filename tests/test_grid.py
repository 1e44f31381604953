"""Tests for the bounds-checked Grid."""

import numpy as np
import pytest

from cotigraphy.grid import Grid, GridData, grid_data_from_counts


def _make_grid(counts=None) -> Grid:
    if counts is None:
        counts = [[1, 2, 1], [0, 2, 1], [0, 0, 1]]
    return Grid(grid_data_from_counts(counts, default_color=(10, 20, 30)))


class TestDimensions:
    def test_dimensions_and_max(self) -> None:
        grid = _make_grid()
        assert grid.week_count == 3
        assert grid.day_count == 3
        assert grid.max_count == 2

    def test_max_count_fixed_after_mutation(self) -> None:
        grid = _make_grid()
        grid.set_count(0, 1, 0)
        grid.set_count(1, 1, 0)
        assert grid.max_count == 2


class TestBounds:
    """Every coordinate outside the matrix is rejected."""

    @pytest.mark.parametrize(
        "week,day", [(3, 0), (0, 3), (3, 3), (-1, 0), (0, -1), (100, 2)]
    )
    def test_outside_coordinates(self, week: int, day: int) -> None:
        grid = _make_grid()
        assert not grid.is_inside(week, day)
        with pytest.raises(IndexError):
            grid.get_count(week, day)
        with pytest.raises(IndexError):
            grid.get_color(week, day)
        with pytest.raises(IndexError):
            grid.set_count(week, day, 0)
        with pytest.raises(IndexError):
            grid.set_color(week, day, (0, 0, 0))

    def test_all_inside_coordinates(self) -> None:
        grid = _make_grid()
        for week in range(3):
            for day in range(3):
                assert grid.is_inside(week, day)

    def test_exhaustive_bounds_on_irregular_shape(self) -> None:
        grid = _make_grid(np.ones((5, 7), dtype=np.int64))
        for week in range(-2, 8):
            for day in range(-2, 10):
                inside = 0 <= week < 5 and 0 <= day < 7
                assert grid.is_inside(week, day) == inside


class TestAccessors:
    def test_get_count_is_week_major(self) -> None:
        grid = _make_grid()
        assert grid.get_count(0, 1) == 2
        assert grid.get_count(1, 0) == 0
        assert grid.get_count(2, 2) == 1

    def test_set_count_and_color(self) -> None:
        grid = _make_grid()
        grid.set_count(2, 2, 0)
        grid.set_color(2, 2, (255, 255, 255))
        assert grid.get_count(2, 2) == 0
        assert grid.get_color(2, 2) == (255, 255, 255)

    def test_negative_count_rejected(self) -> None:
        grid = _make_grid()
        with pytest.raises(ValueError):
            grid.set_count(0, 0, -1)

    def test_grid_does_not_mutate_grid_data(self) -> None:
        data = grid_data_from_counts([[3, 4]])
        grid = Grid(data)
        grid.set_count(0, 0, 0)
        assert data.counts[0, 0] == 3

    def test_remaining_count(self) -> None:
        grid = _make_grid()
        assert grid.remaining_count() == 6
        grid.set_count(0, 0, 0)
        assert grid.remaining_count() == 5

    def test_cells_iteration(self) -> None:
        grid = _make_grid()
        cells = list(grid.cells())
        assert len(cells) == 9
        assert (cells[1].week, cells[1].day, cells[1].count) == (0, 1, 2)
        assert cells[0].color == (10, 20, 30)

    def test_is_present(self) -> None:
        present = np.ones((2, 7), dtype=bool)
        present[1, 6] = False
        grid = Grid(grid_data_from_counts(np.zeros((2, 7), dtype=np.int64), present=present))
        assert grid.is_present(0, 6)
        assert not grid.is_present(1, 6)
        with pytest.raises(IndexError):
            grid.is_present(2, 0)


def _raw_grid_data(**overrides) -> GridData:
    counts = np.array([[1, 2, 1], [0, 2, 1]], dtype=np.int64)
    fields = dict(
        counts=counts,
        colors=np.zeros((2, 3, 3), dtype=np.uint8),
        present=np.ones((2, 3), dtype=bool),
        week_count=2,
        day_count=3,
        max_count=2,
    )
    fields.update(overrides)
    return GridData(**fields)


class TestGridDataValidation:
    """GridData rejects inconsistent fields even when built directly."""

    def test_valid_direct_construction(self) -> None:
        assert _raw_grid_data().max_count == 2

    def test_day_limit(self) -> None:
        with pytest.raises(ValueError, match="day_count"):
            _raw_grid_data(
                counts=np.ones((2, 8), dtype=np.int64),
                colors=np.zeros((2, 8, 3), dtype=np.uint8),
                present=np.ones((2, 8), dtype=bool),
                day_count=8,
                max_count=1,
            )

    def test_max_count_must_match(self) -> None:
        with pytest.raises(ValueError, match="max_count"):
            _raw_grid_data(max_count=5)

    def test_counts_shape_must_match(self) -> None:
        with pytest.raises(ValueError, match="counts shape"):
            _raw_grid_data(week_count=3)

    def test_colors_shape_must_match(self) -> None:
        with pytest.raises(ValueError, match="colors shape"):
            _raw_grid_data(colors=np.zeros((3, 2, 3), dtype=np.uint8))

    def test_present_shape_must_match(self) -> None:
        with pytest.raises(ValueError, match="present shape"):
            _raw_grid_data(present=np.ones((2, 2), dtype=bool))

    def test_negative_counts(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            _raw_grid_data(counts=np.array([[1, -2, 1], [0, 2, 1]], dtype=np.int64))

    def test_empty_grid(self) -> None:
        with pytest.raises(ValueError, match="non-empty"):
            _raw_grid_data(
                counts=np.zeros((0, 3), dtype=np.int64),
                colors=np.zeros((0, 3, 3), dtype=np.uint8),
                present=np.ones((0, 3), dtype=bool),
                week_count=0,
            )
