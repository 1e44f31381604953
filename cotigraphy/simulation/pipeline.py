"""End-to-end rendering: GridData + config in, animated WebP file out."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from cotigraphy.canvas.canvas import Canvas
from cotigraphy.canvas.types import CanvasContext
from cotigraphy.config.colors import parse_color
from cotigraphy.config.hashing import render_config_hash
from cotigraphy.config.settings import AnimationConfig
from cotigraphy.encoding.webp import WebPAnimationEncoder, validate_output_path
from cotigraphy.grid.grid import Grid
from cotigraphy.grid.types import GridData
from cotigraphy.simulation.driver import SimulationResult, run_simulation
from cotigraphy.walker.walker import Walker

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnimationResult:
    """Summary of a finished render."""

    output_path: Path
    width: int
    height: int
    frames: int
    bytes_written: int
    duration_ms: int  # playback length of one loop
    simulation: SimulationResult
    config_hash: str
    elapsed_s: float


def render_animation(
    grid_data: GridData,
    config: AnimationConfig,
    output_path: str | Path,
) -> AnimationResult:
    """Simulate the walker over ``grid_data`` and write the animation.

    The output path is validated before any simulation work, so a bad
    extension fails fast.

    Args:
        grid_data: Activity matrix to animate.
        config: Rendering, walker and encoder settings.
        output_path: Destination ``.webp`` file.

    Returns:
        AnimationResult describing what was written.

    Raises:
        OutputPathError: Bad output path.
        EmptyAnimationError: The walker never moved (no non-zero cell reachable).
        AnimationWriteError: The file could not be written.
    """
    output_path = validate_output_path(output_path)
    t0 = time.monotonic()

    grid = Grid(grid_data)
    walker = Walker.from_config(grid, config.walker)
    context = CanvasContext.for_grid(
        grid.week_count,
        grid.day_count,
        config.canvas.cell_size,
        config.canvas.cell_margin,
    )
    canvas = Canvas(context)
    log.info(
        "Rendering %dx%d grid (max_count=%d) onto %dx%d canvas",
        grid.week_count,
        grid.day_count,
        grid.max_count,
        context.width,
        context.height,
    )

    with WebPAnimationEncoder.from_config(
        context.width, context.height, config.encoder
    ) as encoder:
        simulation = run_simulation(
            grid,
            walker,
            canvas,
            encoder,
            background=parse_color(config.canvas.background),
        )
        bytes_written = encoder.save_to_file(output_path)

    elapsed = time.monotonic() - t0
    return AnimationResult(
        output_path=output_path,
        width=context.width,
        height=context.height,
        frames=simulation.frames,
        bytes_written=bytes_written,
        duration_ms=simulation.frames * config.encoder.frame_delay_ms,
        simulation=simulation,
        config_hash=render_config_hash(config),
        elapsed_s=elapsed,
    )
