"""Canvas module: RGBA pixel buffer and cell geometry."""

from cotigraphy.canvas.canvas import BYTES_PER_PIXEL, Canvas
from cotigraphy.canvas.types import CanvasContext, Rect

__all__ = [
    "BYTES_PER_PIXEL",
    "Canvas",
    "CanvasContext",
    "Rect",
]
