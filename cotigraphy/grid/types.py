"""Grid data structures for the activity calendar."""

from dataclasses import dataclass

import numpy as np

from cotigraphy.config.colors import RGB
from cotigraphy.config.settings import MAX_DAYS_PER_WEEK


@dataclass(frozen=True, slots=True)
class Cell:
    """Snapshot of a single grid cell.

    ``week`` is the column index and ``day`` the row index.
    """

    week: int
    day: int
    count: int
    color: RGB
    present: bool = True


@dataclass(frozen=True)
class GridData:
    """Immutable container for an activity matrix and its metadata.

    Arrays are indexed ``[week, day]``. Uses frozen=True but omits
    slots=True since numpy arrays don't interact well with __slots__.
    The Grid copies the arrays on construction, so mutating cells during a
    run never touches this object.
    """

    counts: np.ndarray  # int64 array of shape (week_count, day_count)
    colors: np.ndarray  # uint8 array of shape (week_count, day_count, 3)
    present: np.ndarray  # bool array of shape (week_count, day_count)
    week_count: int
    day_count: int  # <= 7
    max_count: int  # max over counts at construction time

    def __post_init__(self) -> None:
        """Shape and consistency validation."""
        if self.week_count < 1 or self.day_count < 1:
            raise ValueError(
                f"grid must be non-empty, got {self.week_count}x{self.day_count}"
            )
        if self.day_count > MAX_DAYS_PER_WEEK:
            raise ValueError(
                f"day_count ({self.day_count}) must be <= {MAX_DAYS_PER_WEEK}"
            )
        shape = (self.week_count, self.day_count)
        if self.counts.shape != shape:
            raise ValueError(
                f"counts shape {self.counts.shape} does not match {shape}"
            )
        if self.colors.shape != (*shape, 3):
            raise ValueError(
                f"colors shape {self.colors.shape} does not match {(*shape, 3)}"
            )
        if self.present.shape != shape:
            raise ValueError(
                f"present shape {self.present.shape} does not match {shape}"
            )
        if (self.counts < 0).any():
            raise ValueError("counts must be non-negative")
        actual_max = int(self.counts.max())
        if self.max_count != actual_max:
            raise ValueError(
                f"max_count ({self.max_count}) does not match counts "
                f"(max {actual_max})"
            )
