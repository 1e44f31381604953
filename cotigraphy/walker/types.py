"""Walker data structures."""

from dataclasses import dataclass

from cotigraphy.config.colors import RGB


@dataclass(frozen=True, slots=True)
class Point:
    """Grid coordinate; hashable so it can key BFS visited sets and parent maps."""

    week: int
    day: int


@dataclass(frozen=True, slots=True)
class WalkerSegment:
    """One body segment: where it is, how it is painted, and how big."""

    point: Point
    color: RGB
    scale: float = 1.0  # fraction of the cell size, in (0, 1]
