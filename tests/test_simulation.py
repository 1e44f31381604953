"""Tests for the level loop and the end-to-end render."""

import numpy as np
import pytest
from PIL import Image

from cotigraphy.canvas import Canvas, CanvasContext
from cotigraphy.config import DEFAULT_CONFIG, parse_color
from cotigraphy.encoding import EmptyAnimationError, OutputPathError
from cotigraphy.grid import Grid, grid_data_from_counts
from cotigraphy.simulation import render_animation, run_simulation
from cotigraphy.walker import Point, Walker, initial_segments

BG = (13, 17, 23)
ORANGE = (255, 165, 0)
WHITE = (255, 255, 255)

# week-major: column 0 is [1, 2, 1]
SCENARIO = [[1, 2, 1], [0, 2, 1], [0, 0, 1]]


class RecordingSink:
    """Collects frames the way the encoder would, copying each one."""

    def __init__(self) -> None:
        self.frames: list[np.ndarray] = []

    def add_frame(self, rgba: np.ndarray) -> int:
        self.frames.append(rgba.copy())
        return (len(self.frames) - 1) * 80


def _setup(counts):
    grid = Grid(grid_data_from_counts(counts, default_color=(10, 20, 30)))
    walker = Walker(grid, initial_segments(ORANGE), visited_color=WHITE)
    ctx = CanvasContext.for_grid(grid.week_count, grid.day_count, 10, 3)
    return grid, walker, Canvas(ctx)


class TestRunSimulation:
    def test_scenario_consumes_everything(self) -> None:
        grid, walker, canvas = _setup(SCENARIO)
        sink = RecordingSink()
        result = run_simulation(grid, walker, canvas, sink, BG)

        assert result.frames == len(sink.frames)
        assert result.frames == sum(result.moves_per_level.values())
        assert result.final_level == 3
        assert result.remaining_cells == 0
        assert grid.remaining_count() == 0
        # five non-start active cells must each be landed on at least once
        assert result.frames >= 5

    def test_scenario_trace(self) -> None:
        """With the current expansion order every cell falls at level 1."""
        grid, walker, canvas = _setup(SCENARIO)
        heads: list[Point] = []

        class HeadSink(RecordingSink):
            def add_frame(self, rgba):
                heads.append(walker.head)
                return super().add_frame(rgba)

        result = run_simulation(grid, walker, canvas, HeadSink(), BG)
        assert heads == [
            Point(0, 1), Point(0, 2), Point(1, 2), Point(2, 2),
            Point(2, 1), Point(1, 1), Point(1, 0), Point(0, 0),
        ]
        assert result.moves_per_level == {1: 8}
        assert [s.point for s in walker.segments] == [
            Point(0, 0), Point(1, 0), Point(1, 1), Point(2, 1)
        ]

    def test_level_one_never_targets_higher_counts(self) -> None:
        grid, walker, _ = _setup(SCENARIO)
        while True:
            if not walker.planned_path:
                path = walker.find_path_to_closest_target(1)
                if path is None:
                    break
                target = path[-1]
                assert grid.get_count(target.week, target.day) == 1
            walker.move(1)

    def test_zero_max_count_renders_nothing(self) -> None:
        grid, walker, canvas = _setup(np.zeros((3, 3), dtype=np.int64))
        sink = RecordingSink()
        result = run_simulation(grid, walker, canvas, sink, BG)
        assert result.frames == 0
        assert sink.frames == []
        assert result.final_level == 1

    def test_frames_show_walker_over_trail(self) -> None:
        grid, walker, canvas = _setup([[0, 1]])
        sink = RecordingSink()
        run_simulation(grid, walker, canvas, sink, BG)
        assert len(sink.frames) == 1
        frame = sink.frames[0]
        # head moved to (0, 1); tail segment now sits on (0, 0)
        assert tuple(frame[18, 5, :3]) == ORANGE
        assert tuple(frame[5, 5, :3]) == ORANGE
        assert frame.shape == (23, 10, 4)

    def test_unreachable_cells_reported(self) -> None:
        # 1x1 grid: the only active cell is the start, which is never a target
        grid, walker, canvas = _setup([[3]])
        result = run_simulation(grid, walker, canvas, RecordingSink(), BG)
        assert result.frames == 0
        assert result.remaining_cells == 1
        assert result.final_level == 4


class TestRenderAnimation:
    def test_writes_animation(self, tmp_path) -> None:
        path = tmp_path / "scenario.webp"
        result = render_animation(grid_data_from_counts(SCENARIO), DEFAULT_CONFIG, path)

        assert result.output_path == path
        assert path.exists()
        assert result.bytes_written == path.stat().st_size
        assert (result.width, result.height) == (36, 36)
        assert result.frames == result.simulation.frames
        assert result.duration_ms == result.frames * 80
        with Image.open(path) as img:
            assert img.format == "WEBP"
            assert img.size == (36, 36)

    def test_source_grid_untouched(self, tmp_path) -> None:
        data = grid_data_from_counts(SCENARIO)
        render_animation(data, DEFAULT_CONFIG, tmp_path / "a.webp")
        assert data.counts.tolist() == SCENARIO

    def test_all_zero_grid_refused(self, tmp_path) -> None:
        path = tmp_path / "empty.webp"
        with pytest.raises(EmptyAnimationError):
            render_animation(
                grid_data_from_counts(np.zeros((4, 7), dtype=np.int64)),
                DEFAULT_CONFIG,
                path,
            )
        assert not path.exists()

    def test_bad_extension_fails_before_simulation(self, tmp_path) -> None:
        with pytest.raises(OutputPathError):
            render_animation(grid_data_from_counts(SCENARIO), DEFAULT_CONFIG,
                             tmp_path / "scenario.gif")
        assert list(tmp_path.iterdir()) == []

    def test_background_from_config(self) -> None:
        assert parse_color(DEFAULT_CONFIG.canvas.background) == BG
