"""Walker module: segment types, BFS path planning, and movement."""

from cotigraphy.config.settings import WALKER_LENGTH
from cotigraphy.walker.types import Point, WalkerSegment
from cotigraphy.walker.walker import NEIGHBOR_OFFSETS, Walker, initial_segments

__all__ = [
    "NEIGHBOR_OFFSETS",
    "WALKER_LENGTH",
    "Point",
    "Walker",
    "WalkerSegment",
    "initial_segments",
]
