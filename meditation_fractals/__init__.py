"""
Fractal Meditation Visualizer Package

A continuously animated Mandelbrot / Julia set visualizer using Pygame
for display and sound and Numba for JIT-compiled computation.

Quick Start:
    from meditation_fractals import run
    run()

Or from command line:
    python -m meditation_fractals

Package Structure:
    - compute.py: JIT-compiled escape-time evaluator
    - colormaps.py: Periodic sine palettes (psychedelic, aurora, ember)
    - renderer.py: Per-pixel frame renderer into an RGBA buffer
    - scheduler.py: Display-synchronized frame scheduling
    - animation.py: Zoom, drift, Julia orbit and color-cycle animation
    - audio.py: Ambient drone played alongside the animation
    - session.py: Session object owning all components
    - config.py: settings.json loading and validation
    - app.py: Pygame window and event loop

Controls:
    - SPACE: Start / stop the animation and sound
    - TAB: Switch between the Mandelbrot and Julia sets
    - ESC: Quit
"""

from .animation import AnimationDriver
from .app import run, FractalApp
from .colormaps import PALETTES, map_color, list_palette_names
from .compute import EvaluationResult, evaluate
from .config import ConfigurationError, Settings, load_settings
from .renderer import FrameRenderer
from .scheduler import FrameScheduler
from .session import MeditationSession
from .state import AnimationState, Julia, Mandelbrot, Viewport

__version__ = "1.0.0"
__all__ = [
    "run",
    "FractalApp",
    "AnimationDriver",
    "AnimationState",
    "ConfigurationError",
    "EvaluationResult",
    "FrameRenderer",
    "FrameScheduler",
    "Julia",
    "Mandelbrot",
    "MeditationSession",
    "PALETTES",
    "Settings",
    "Viewport",
    "evaluate",
    "list_palette_names",
    "load_settings",
    "map_color",
]
