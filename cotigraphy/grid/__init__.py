"""Grid module: cell data model, bounds-checked grid, and builders."""

from cotigraphy.grid.build import (
    count_to_palette_index,
    grid_data_from_calendar,
    grid_data_from_counts,
)
from cotigraphy.grid.grid import Grid
from cotigraphy.grid.types import Cell, GridData

__all__ = [
    "Cell",
    "Grid",
    "GridData",
    "count_to_palette_index",
    "grid_data_from_calendar",
    "grid_data_from_counts",
]
