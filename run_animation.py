#!/usr/bin/env python3
"""Entry point for rendering a contribution-calendar walker animation.

Chains all stages into a single command:
calendar fetch (or cache / file) -> grid build -> simulation -> WebP write.

Usage:
    python run_animation.py --login octocat
    python run_animation.py --input calendar.json --output walker.webp
    python run_animation.py --config config.json --login octocat --dry-run
    python run_animation.py --login octocat --verbose
"""

import argparse
import logging
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from cotigraphy.config import (
    DEFAULT_CONFIG,
    AnimationConfig,
    full_config_hash,
    load_config,
    render_config_hash,
)
from cotigraphy.simulation.pipeline import AnimationResult

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def default_output_path(config: AnimationConfig, input_path: Path | None) -> Path:
    """``<login>-walker.webp``, or ``<input stem>-walker.webp`` for file input."""
    if config.source.login:
        stem = config.source.login
    elif input_path is not None:
        stem = input_path.stem
    else:
        stem = "contributions"
    return Path(f"{stem}-walker.webp")


def run_pipeline(
    config: AnimationConfig,
    output_path: Path,
    input_path: Path | None = None,
    token: str = "",
    use_cache: bool = True,
) -> AnimationResult:
    """Execute the full pipeline.

    Args:
        config: Animation configuration.
        output_path: Destination .webp file.
        input_path: Saved GraphQL response to use instead of the API.
        token: GitHub access token (ignored with input_path).
        use_cache: Read and write the on-disk calendar cache.

    Returns:
        AnimationResult for the written file.
    """
    # Lazy imports to keep --dry-run fast
    from cotigraphy.calendar import fetch_or_load_calendar, load_calendar_file
    from cotigraphy.encoding import validate_output_path
    from cotigraphy.grid import grid_data_from_calendar
    from cotigraphy.simulation import render_animation

    validate_output_path(output_path)

    # ── Stage 1: Calendar ──────────────────────────────────────────
    with stage_timer("Calendar"):
        if input_path is not None:
            calendar = load_calendar_file(input_path, config.source.login)
        else:
            calendar = fetch_or_load_calendar(
                config.source, token, use_cache=use_cache
            )
        log.info(
            "Calendar: %d weeks, %d contributions",
            calendar.week_count,
            calendar.total_contributions,
        )

    # ── Stage 2: Grid ──────────────────────────────────────────────
    with stage_timer("Grid"):
        grid_data = grid_data_from_calendar(
            calendar,
            config.source.palette,
            use_source_colors=config.source.use_source_colors,
        )

    # ── Stage 3: Simulation + Encoding ─────────────────────────────
    with stage_timer("Simulation + Encoding"):
        result = render_animation(grid_data, config, output_path)

    print(f"\n{'=' * 60}")
    print(f"Animation complete in {result.elapsed_s:.1f}s")
    print(f"  Output:     {result.output_path}")
    print(f"  Size:       {result.width}x{result.height} px, {result.bytes_written} bytes")
    print(f"  Frames:     {result.frames} ({result.duration_ms / 1000:.1f}s per loop)")
    print(f"  Levels:     1..{grid_data.max_count}")
    print(f"  Unreached:  {result.simulation.remaining_cells} cells")
    print(f"{'=' * 60}")

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a contribution-calendar walker animation (animated WebP)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to animation config JSON file (defaults built in)",
    )
    parser.add_argument(
        "--login",
        type=str,
        default=None,
        help="GitHub login whose calendar to animate (overrides config)",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="GitHub personal access token (default: env var named in config)",
    )
    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Saved GraphQL calendar response to use instead of the API",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output .webp path (default: <login>-walker.webp)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always fetch from the API and do not write the calendar cache",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the plan without fetching or rendering",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load config
    config = DEFAULT_CONFIG
    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = load_config(config_path)
    if args.login:
        config = replace(config, source=replace(config.source, login=args.login))

    input_path = Path(args.input) if args.input else None
    if input_path is None and not config.source.login:
        print("Error: pass --login (or set source.login) or --input", file=sys.stderr)
        sys.exit(1)
    if input_path is not None and not input_path.exists():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    token = args.token or os.environ.get(config.source.token_env, "")
    if input_path is None and not token:
        print(
            f"Error: no token; pass --token or set {config.source.token_env}",
            file=sys.stderr,
        )
        sys.exit(1)

    output_path = (
        Path(args.output) if args.output else default_output_path(config, input_path)
    )

    # Print config summary
    print(f"Config hash:  {full_config_hash(config)}")
    print(f"Render hash:  {render_config_hash(config)}")
    print()
    print(f"Source:   {input_path or config.source.login}")
    print(f"Canvas:   cell_size={config.canvas.cell_size}, "
          f"cell_margin={config.canvas.cell_margin}, "
          f"background={config.canvas.background}")
    print(f"Walker:   scales={config.walker.segment_scales}, color={config.walker.color}, "
          f"visited={config.walker.visited_color}")
    print(f"Encoder:  delay={config.encoder.frame_delay_ms}ms, "
          f"quality={config.encoder.quality}, lossless={config.encoder.lossless}")
    print(f"Output:   {output_path}")

    if args.dry_run:
        print("\nPipeline plan:")
        if input_path is not None:
            print(f"  1. Load calendar from {input_path}")
        else:
            cache_note = "no cache" if args.no_cache else "cached daily"
            print(f"  1. Fetch calendar for {config.source.login} ({cache_note})")
        print("  2. Build grid (weeks x weekdays)")
        print("  3. Walk levels 1..max_count, one frame per move")
        print(f"  4. Write animated WebP to {output_path}")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(
            config,
            output_path,
            input_path=input_path,
            token=token,
            use_cache=not args.no_cache,
        )
    except Exception:
        log.exception("Animation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
