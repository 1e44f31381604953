"""Level-by-level simulation loop.

Raises the level from 1 to the grid's max_count. At each level the walker
keeps moving until it reports no reachable target; every successful move is
rendered and handed to the encoder as one frame.
"""

import logging
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from cotigraphy.canvas.canvas import Canvas
from cotigraphy.config.colors import RGB
from cotigraphy.grid.grid import Grid
from cotigraphy.walker.walker import Walker

log = logging.getLogger(__name__)


class FrameSink(Protocol):
    def add_frame(self, rgba: np.ndarray) -> int: ...


@dataclass
class SimulationResult:
    """Outcome of one run of the loop."""

    frames: int = 0
    final_level: int = 1
    moves_per_level: dict[int, int] = field(default_factory=dict)
    remaining_cells: int = 0  # non-zero cells the walker never reached


def render_frame(canvas: Canvas, grid: Grid, walker: Walker, background: RGB) -> np.ndarray:
    """Paint background, grid, then walker; return the live buffer."""
    canvas.clear(background)
    canvas.draw_grid(grid)
    canvas.draw_walker(walker)
    return canvas.buffer


def run_simulation(
    grid: Grid,
    walker: Walker,
    canvas: Canvas,
    encoder: FrameSink,
    background: RGB,
) -> SimulationResult:
    """Drive the walker over every level and feed one frame per move.

    Args:
        grid: Grid the walker consumes.
        walker: Walker bound to ``grid``.
        canvas: Canvas sized for ``grid``.
        encoder: Anything with ``add_frame(rgba)``.
        background: Colour behind the cells.

    Returns:
        SimulationResult with frame and per-level move counts. Saving the
        animation is left to the caller.
    """
    result = SimulationResult()
    current_level = 1
    max_count = grid.max_count

    while current_level <= max_count:
        if walker.move(current_level):
            encoder.add_frame(render_frame(canvas, grid, walker, background))
            result.frames += 1
            result.moves_per_level[current_level] = (
                result.moves_per_level.get(current_level, 0) + 1
            )
            continue

        log.debug(
            "Level %d exhausted after %d moves",
            current_level,
            result.moves_per_level.get(current_level, 0),
        )
        current_level += 1

    result.final_level = current_level
    result.remaining_cells = grid.remaining_count()
    log.info(
        "Simulation finished: %d frames over %d levels, %d cells unreached",
        result.frames,
        max_count,
        result.remaining_cells,
    )
    return result
