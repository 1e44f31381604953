"""Walker path planning and movement over the activity grid.

The walker alternates between two states:
1. Planning: no path queued; a breadth-first search from the head finds the
   nearest cell whose count is non-zero and at most the current level.
2. Advancing: a path is queued; each move consumes one point of it.

Every cell the head lands on is consumed: its count drops to 0 and it takes
the visited colour, which is what leaves the trail in the animation.
"""

import logging
from collections import deque
from collections.abc import Sequence

from cotigraphy.config.colors import RGB, parse_color
from cotigraphy.config.settings import WALKER_LENGTH, WalkerConfig
from cotigraphy.grid.grid import Grid
from cotigraphy.walker.types import Point, WalkerSegment

log = logging.getLogger(__name__)

# (d_week, d_day) in expansion order: left, right, up, down.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def initial_segments(
    color: RGB,
    scales: Sequence[float] | None = None,
) -> list[WalkerSegment]:
    """Lay the body out along the top row, head at (0, 0), tail to the right."""
    if scales is None:
        scales = [1.0] * WALKER_LENGTH
    if len(scales) != WALKER_LENGTH:
        raise ValueError(f"expected {WALKER_LENGTH} scales, got {len(scales)}")
    return [
        WalkerSegment(point=Point(i, 0), color=color, scale=float(scales[i]))
        for i in range(WALKER_LENGTH)
    ]


class Walker:
    """Four-segment walker bound to a Grid it does not own.

    The segment list never changes length; only the points move. The
    planned path is empty exactly when the next move has to search.
    """

    def __init__(
        self,
        grid: Grid,
        segments: Sequence[WalkerSegment],
        visited_color: RGB = (255, 255, 255),
    ) -> None:
        if len(segments) != WALKER_LENGTH:
            raise ValueError(
                f"walker needs exactly {WALKER_LENGTH} segments, got {len(segments)}"
            )
        for segment in segments:
            if not 0.0 < segment.scale <= 1.0:
                raise ValueError(
                    f"segment scale must be in (0, 1], got {segment.scale}"
                )
        self._grid = grid
        self._segments = list(segments)
        self._visited_color = visited_color
        self._planned_path: deque[Point] = deque()

    @classmethod
    def from_config(cls, grid: Grid, config: WalkerConfig) -> "Walker":
        segments = initial_segments(
            parse_color(config.color),
            config.segment_scales,
        )
        return cls(grid, segments, visited_color=parse_color(config.visited_color))

    @property
    def segments(self) -> tuple[WalkerSegment, ...]:
        return tuple(self._segments)

    @property
    def head(self) -> Point:
        return self._segments[0].point

    @property
    def planned_path(self) -> tuple[Point, ...]:
        return tuple(self._planned_path)

    def body_points(self) -> set[Point]:
        """Points covered by every segment except the head."""
        return {segment.point for segment in self._segments[1:]}

    def move(self, current_level: int) -> bool:
        """Advance the head one cell toward the nearest target.

        Args:
            current_level: Highest count the walker may target right now.

        Returns:
            True if the walker moved; False if no target is reachable at
            this level, which tells the caller to raise the level.
        """
        if not self._planned_path:
            path = self.find_path_to_closest_target(current_level)
            if path is None:
                return False
            self._planned_path.extend(path)

        nxt = self._planned_path.popleft()

        for i in range(len(self._segments) - 1, 0, -1):
            self._segments[i] = self._with_point(
                self._segments[i], self._segments[i - 1].point
            )
        self._segments[0] = self._with_point(self._segments[0], nxt)

        self._grid.set_count(nxt.week, nxt.day, 0)
        self._grid.set_color(nxt.week, nxt.day, self._visited_color)
        return True

    def find_path_to_closest_target(self, current_level: int) -> list[Point] | None:
        """Breadth-first search from the head for the nearest target cell.

        Only cells inside the grid and not covered by the body are
        expanded. Among equally short paths the one found first wins; that
        order follows NEIGHBOR_OFFSETS and is not part of the contract.

        Args:
            current_level: Highest count a target may have.

        Returns:
            Points from the first step up to and including the target, or
            None when no target is reachable.
        """
        start = self.head
        blocked = self.body_points()
        queue: deque[Point] = deque([start])
        visited: set[Point] = {start}
        parents: dict[Point, Point] = {}

        while queue:
            current = queue.popleft()
            if self.is_target(current, current_level, start):
                path = self._build_path(current, parents)
                log.debug(
                    "Level %d: target (%d, %d) at distance %d from (%d, %d)",
                    current_level,
                    current.week,
                    current.day,
                    len(path),
                    start.week,
                    start.day,
                )
                return path

            for d_week, d_day in NEIGHBOR_OFFSETS:
                nxt = Point(current.week + d_week, current.day + d_day)
                if not self._grid.is_inside(nxt.week, nxt.day):
                    continue
                if nxt in visited or nxt in blocked:
                    continue
                visited.add(nxt)
                parents[nxt] = current
                queue.append(nxt)

        return None

    def is_target(self, point: Point, current_level: int, start: Point) -> bool:
        """True for an in-grid cell with 0 < count <= level that is not the start."""
        if point == start:
            return False
        if not self._grid.is_inside(point.week, point.day):
            return False
        count = self._grid.get_count(point.week, point.day)
        return count != 0 and count <= current_level

    @staticmethod
    def _build_path(goal: Point, parents: dict[Point, Point]) -> list[Point]:
        """Walk the parent map back from ``goal``; the start has no parent."""
        path = [goal]
        current = goal
        while current in parents:
            current = parents[current]
            path.append(current)
        path.pop()  # drop the start
        path.reverse()
        return path

    @staticmethod
    def _with_point(segment: WalkerSegment, point: Point) -> WalkerSegment:
        return WalkerSegment(point=point, color=segment.color, scale=segment.scale)
