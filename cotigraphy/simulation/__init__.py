"""Simulation module: the level loop and the end-to-end rendering pipeline."""

from cotigraphy.simulation.driver import SimulationResult, render_frame, run_simulation
from cotigraphy.simulation.pipeline import AnimationResult, render_animation

__all__ = [
    "AnimationResult",
    "SimulationResult",
    "render_animation",
    "render_frame",
    "run_simulation",
]
