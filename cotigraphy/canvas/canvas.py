"""RGBA rasterizer for grid cells and walker segments."""

import numpy as np

from cotigraphy.config.colors import RGB
from cotigraphy.canvas.types import CanvasContext, Rect
from cotigraphy.grid.grid import Grid
from cotigraphy.walker.walker import Walker

BYTES_PER_PIXEL = 4  # RGBA


class Canvas:
    """Owns one RGBA8 buffer of shape (height, width, 4).

    Every write is fully opaque and replaces whatever was there; later
    draws (the walker) cover earlier ones (the grid).
    """

    def __init__(self, context: CanvasContext) -> None:
        for name in ("width", "height", "cell_size", "cell_margin"):
            if getattr(context, name) <= 0:
                raise ValueError(
                    f"canvas {name} must be > 0, got {getattr(context, name)}"
                )
        self._context = context
        self._pixels = np.zeros(
            (context.height, context.width, BYTES_PER_PIXEL), dtype=np.uint8
        )

    @property
    def context(self) -> CanvasContext:
        return self._context

    @property
    def buffer(self) -> np.ndarray:
        """The live pixel array; copy it if it must outlive the next draw."""
        return self._pixels

    def to_bytes(self) -> bytes:
        return self._pixels.tobytes()

    def clear(self, color: RGB) -> None:
        self._pixels[:, :, :3] = color
        self._pixels[:, :, 3] = 255

    def draw_grid(self, grid: Grid) -> None:
        for cell in grid.cells():
            if cell.present:
                self.draw_cell(cell.week, cell.day, cell.color)

    def draw_walker(self, walker: Walker) -> None:
        # head last, on top
        for segment in reversed(walker.segments):
            self.draw_cell(
                segment.point.week,
                segment.point.day,
                segment.color,
                scale=segment.scale,
            )

    def draw_cell(self, week: int, day: int, color: RGB, scale: float = 1.0) -> None:
        rect = self.get_rect(week, day, scale)
        if rect.is_empty:
            return
        self._pixels[rect.top:rect.bottom, rect.left:rect.right, :3] = color
        self._pixels[rect.top:rect.bottom, rect.left:rect.right, 3] = 255

    def get_rect(self, week: int, day: int, scale: float = 1.0) -> Rect:
        """Rectangle of slot (week, day) shrunk about its centre by ``scale``.

        The result is clamped to the canvas, so slots partly or wholly off
        the canvas yield a truncated or empty rectangle.
        """
        if not 0.0 < scale <= 1.0:
            raise ValueError(f"scale must be in (0, 1], got {scale}")
        ctx = self._context
        left_base = week * ctx.cell_size + week * ctx.cell_margin
        top_base = day * ctx.cell_size + day * ctx.cell_margin
        center_x = left_base + ctx.cell_size * 0.5
        center_y = top_base + ctx.cell_size * 0.5
        half = ctx.cell_size * scale * 0.5

        return Rect(
            left=_clamp(int(center_x - half), ctx.width),
            top=_clamp(int(center_y - half), ctx.height),
            right=_clamp(int(center_x + half), ctx.width),
            bottom=_clamp(int(center_y + half), ctx.height),
        )


def _clamp(value: int, upper: int) -> int:
    return min(max(value, 0), upper)
