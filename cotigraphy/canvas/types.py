"""Canvas geometry records."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CanvasContext:
    """Pixel dimensions of the image and the cell geometry inside it."""

    width: int
    height: int
    cell_size: int
    cell_margin: int

    @classmethod
    def for_grid(
        cls, week_count: int, day_count: int, cell_size: int, cell_margin: int
    ) -> "CanvasContext":
        """Size the canvas so the last column and row end flush with the edge."""
        return cls(
            width=week_count * cell_size + max(week_count - 1, 0) * cell_margin,
            height=day_count * cell_size + max(day_count - 1, 0) * cell_margin,
            cell_size=cell_size,
            cell_margin=cell_margin,
        )


@dataclass(frozen=True, slots=True)
class Rect:
    """Pixel rectangle with exclusive right and bottom edges."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return max(self.right - self.left, 0)

    @property
    def height(self) -> int:
        return max(self.bottom - self.top, 0)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0
