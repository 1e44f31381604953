"""Bounds-checked, mutable view over a GridData matrix."""

from collections.abc import Iterator

import numpy as np

from cotigraphy.config.colors import RGB
from cotigraphy.grid.types import Cell, GridData


class Grid:
    """Owns the cell matrix for one run.

    Dimensions and ``max_count`` are fixed at construction; only cell
    counts and colours change afterwards, and only through the setters.
    Every accessor raises IndexError for coordinates outside the grid.
    """

    def __init__(self, grid_data: GridData) -> None:
        self._data = grid_data
        self._counts = np.array(grid_data.counts, dtype=np.int64, copy=True)
        self._colors = np.array(grid_data.colors, dtype=np.uint8, copy=True)
        self._present = np.array(grid_data.present, dtype=bool, copy=True)

    @property
    def week_count(self) -> int:
        return self._data.week_count

    @property
    def day_count(self) -> int:
        return self._data.day_count

    @property
    def max_count(self) -> int:
        return self._data.max_count

    def is_inside(self, week: int, day: int) -> bool:
        return 0 <= week < self.week_count and 0 <= day < self.day_count

    def _check(self, week: int, day: int) -> None:
        if not self.is_inside(week, day):
            raise IndexError(
                f"cell ({week}, {day}) outside grid of "
                f"{self.week_count}x{self.day_count}"
            )

    def get_count(self, week: int, day: int) -> int:
        self._check(week, day)
        return int(self._counts[week, day])

    def get_color(self, week: int, day: int) -> RGB:
        self._check(week, day)
        r, g, b = self._colors[week, day]
        return (int(r), int(g), int(b))

    def is_present(self, week: int, day: int) -> bool:
        """False for padding slots of a short last week."""
        self._check(week, day)
        return bool(self._present[week, day])

    def set_count(self, week: int, day: int, value: int) -> None:
        self._check(week, day)
        if value < 0:
            raise ValueError(f"count must be >= 0, got {value}")
        self._counts[week, day] = value

    def set_color(self, week: int, day: int, color: RGB) -> None:
        self._check(week, day)
        self._colors[week, day] = color

    def remaining_count(self) -> int:
        """Number of cells whose count is still non-zero."""
        return int(np.count_nonzero(self._counts))

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in week-major order."""
        for week in range(self.week_count):
            for day in range(self.day_count):
                yield Cell(
                    week=week,
                    day=day,
                    count=int(self._counts[week, day]),
                    color=self.get_color(week, day),
                    present=bool(self._present[week, day]),
                )
