"""Construction of GridData from raw count matrices and contribution calendars."""

import logging
import math
from collections.abc import Sequence

import numpy as np

from cotigraphy.calendar.types import ContributionCalendar
from cotigraphy.config.colors import RGB, is_color, parse_color
from cotigraphy.config.settings import MAX_DAYS_PER_WEEK
from cotigraphy.grid.types import GridData

log = logging.getLogger(__name__)


def grid_data_from_counts(
    counts: np.ndarray | Sequence[Sequence[int]],
    colors: np.ndarray | None = None,
    present: np.ndarray | None = None,
    default_color: RGB = (0, 0, 0),
) -> GridData:
    """Build a GridData from a ``[week][day]`` count matrix.

    Args:
        counts: Non-negative integer matrix of shape (week_count, day_count).
        colors: Optional uint8 array of shape (week_count, day_count, 3).
            Defaults to ``default_color`` everywhere.
        present: Optional bool mask; False marks padding slots. Defaults to
            all True.
        default_color: Fill colour used when ``colors`` is None.

    Returns:
        GridData with ``max_count`` computed from ``counts``.

    Raises:
        ValueError: On a non-2-D matrix, an empty grid, more than 7 days per
            week, negative counts, or mismatched colour/mask shapes.
    """
    counts_arr = np.asarray(counts, dtype=np.int64)
    if counts_arr.ndim != 2:
        raise ValueError(
            f"counts must be 2-D [week][day], got shape {counts_arr.shape}"
        )
    week_count, day_count = counts_arr.shape
    if week_count == 0 or day_count == 0:
        raise ValueError(f"grid must be non-empty, got {week_count}x{day_count}")
    if day_count > MAX_DAYS_PER_WEEK:
        raise ValueError(
            f"day_count ({day_count}) must be <= {MAX_DAYS_PER_WEEK}"
        )
    if np.any(counts_arr < 0):
        raise ValueError("counts must be non-negative")

    if colors is None:
        colors_arr = np.empty((week_count, day_count, 3), dtype=np.uint8)
        colors_arr[:, :] = default_color
    else:
        colors_arr = np.asarray(colors, dtype=np.uint8)
        if colors_arr.shape != (week_count, day_count, 3):
            raise ValueError(
                f"colors shape {colors_arr.shape} does not match "
                f"({week_count}, {day_count}, 3)"
            )

    if present is None:
        present_arr = np.ones((week_count, day_count), dtype=bool)
    else:
        present_arr = np.asarray(present, dtype=bool)
        if present_arr.shape != (week_count, day_count):
            raise ValueError(
                f"present shape {present_arr.shape} does not match "
                f"({week_count}, {day_count})"
            )

    return GridData(
        counts=counts_arr,
        colors=colors_arr,
        present=present_arr,
        week_count=int(week_count),
        day_count=int(day_count),
        max_count=int(counts_arr.max()),
    )


def count_to_palette_index(count: int, max_count: int, n_colors: int) -> int:
    """Map a count to a palette slot, GitHub style.

    Slot 0 is reserved for zero activity. Non-zero counts are split into
    ``n_colors - 1`` equal-width bands of ``max_count`` (quartiles for the
    usual five-colour palette).
    """
    if count <= 0 or max_count <= 0:
        return 0
    bands = n_colors - 1
    index = math.ceil(count / max_count * bands)
    return min(max(index, 1), bands)


def grid_data_from_calendar(
    calendar: ContributionCalendar,
    palette: Sequence[str],
    use_source_colors: bool = False,
) -> GridData:
    """Lay a contribution calendar out as a grid.

    Each week becomes a column and each day lands on its weekday row
    (Sunday on top), so a calendar starting or ending mid-week produces
    absent slots rather than shifted days.

    Args:
        calendar: Calendar from the API, a cache, or a file.
        palette: Colour strings, empty-cell colour first.
        use_source_colors: Prefer the per-day colour the source supplied,
            falling back to the palette when a day has none.

    Returns:
        GridData ready for a Grid.
    """
    week_count = calendar.week_count
    if week_count == 0:
        raise ValueError(f"calendar for {calendar.login!r} has no weeks")

    day_count = 1 + max(
        (day.weekday_row for week in calendar.weeks for day in week),
        default=0,
    )
    counts = np.zeros((week_count, day_count), dtype=np.int64)
    present = np.zeros((week_count, day_count), dtype=bool)
    source_colors: dict[tuple[int, int], str] = {}

    for w, week in enumerate(calendar.weeks):
        for day in week:
            row = day.weekday_row
            if present[w, row]:
                log.warning(
                    "Week %d has two entries for row %d (%s); keeping the later",
                    w,
                    row,
                    day.date.isoformat(),
                )
            counts[w, row] = day.count
            present[w, row] = True
            if day.color is not None:
                source_colors[(w, row)] = day.color

    max_count = int(counts.max())
    palette_rgb = [parse_color(c) for c in palette]
    colors = np.empty((week_count, day_count, 3), dtype=np.uint8)
    for w in range(week_count):
        for d in range(day_count):
            source = source_colors.get((w, d))
            if use_source_colors and source is not None and is_color(source):
                colors[w, d] = parse_color(source)
            else:
                idx = count_to_palette_index(
                    int(counts[w, d]), max_count, len(palette_rgb)
                )
                colors[w, d] = palette_rgb[idx]

    log.info(
        "Grid built for %s: %d weeks x %d days, max_count=%d, %d active days",
        calendar.login or "<unnamed>",
        week_count,
        day_count,
        max_count,
        int(np.count_nonzero(counts)),
    )
    return grid_data_from_counts(counts, colors=colors, present=present)
