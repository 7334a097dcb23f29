"""
Settings for the fractal meditation visualizer.

All tuning constants live in settings.json next to this module. The
file is grouped into three sections:
- window: display size and refresh rate of the host window
- render: iteration ceilings per fractal variant and the palette name
- animation: per-tick constants for the zoom, drift, Julia orbit and
  color cycling

Missing keys fall back to the defaults below, so a settings file only
needs to list what it changes.
"""

import json
import logging
import os
from dataclasses import dataclass, field

from .colormaps import list_palette_names

logger = logging.getLogger(__name__)

SETTINGS_PATH = os.path.join(os.path.dirname(__file__), 'settings.json')


class ConfigurationError(ValueError):
    """Raised when the visualizer is constructed with invalid settings."""


@dataclass(frozen=True)
class WindowSettings:
    width: int = 640
    height: int = 640
    fps: int = 60

    def __post_init__(self):
        validate_dimensions(self.width, self.height)
        if self.fps <= 0:
            raise ConfigurationError(f"fps must be positive, got {self.fps}")


@dataclass(frozen=True)
class RenderSettings:
    mandelbrot_max_iterations: int = 150
    julia_max_iterations: int = 150
    palette: str = 'Psychedelic'

    def __post_init__(self):
        for name in ('mandelbrot_max_iterations', 'julia_max_iterations'):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.palette not in list_palette_names():
            raise ConfigurationError(
                f"unknown palette {self.palette!r}, expected one of {list_palette_names()}"
            )


@dataclass(frozen=True)
class AnimationSettings:
    """
    Per-tick animation constants.

    The Mandelbrot zoom grows by `zoom_growth` every tick while the
    offset drifts toward the current target at `drift_rate`. Once the
    zoom passes `zoom_ceiling` the view snaps back and the next target
    in `zoom_targets` is used, which keeps the zoom inside the range
    double precision can resolve.
    """

    tick_seconds: float = 0.016
    zoom_growth: float = 1.008
    drift_rate: float = 0.003
    zoom_ceiling: float = 500.0
    zoom_targets: tuple = (
        (-0.7435669, 0.1314023),
        (-0.16, 1.0405),
        (-1.25066, 0.02012),
    )
    julia_orbit_step: float = 0.008
    julia_orbit_radius: float = 0.7885
    julia_initial_c: complex = complex(-0.7, 0.27015)
    color_shift_step: float = 0.15

    def __post_init__(self):
        if self.zoom_growth <= 1.0:
            raise ConfigurationError(f"zoom_growth must be > 1, got {self.zoom_growth}")
        if self.zoom_ceiling <= 1.0:
            raise ConfigurationError(f"zoom_ceiling must be > 1, got {self.zoom_ceiling}")
        if not 0.0 <= self.drift_rate <= 1.0:
            raise ConfigurationError(f"drift_rate must be within [0, 1], got {self.drift_rate}")
        if not self.zoom_targets:
            raise ConfigurationError("zoom_targets must contain at least one point")
        if self.tick_seconds <= 0:
            raise ConfigurationError(f"tick_seconds must be positive, got {self.tick_seconds}")


@dataclass(frozen=True)
class Settings:
    window: WindowSettings = field(default_factory=WindowSettings)
    render: RenderSettings = field(default_factory=RenderSettings)
    animation: AnimationSettings = field(default_factory=AnimationSettings)


def validate_dimensions(width, height):
    """Fail fast on a viewport that cannot hold a single pixel."""
    for name, value in (('width', width), ('height', height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"viewport {name} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigurationError(f"viewport {name} must be positive, got {value}")


def _read_json(path):
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return None


def _section(data, name):
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"settings section {name!r} must be an object, got {section!r}")
    return section


def settings_from_dict(data):
    """
    Build a Settings object from the parsed settings.json structure.

    Args:
        data: Dictionary with optional 'window', 'render' and 'animation'
            sections. Unknown keys are ignored.

    Returns:
        Settings instance

    Raises:
        ConfigurationError if a section has the wrong shape or any value
        is out of range
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"settings must be an object, got {data!r}")
    window = _section(data, 'window')
    render = _section(data, 'render')
    animation = _section(data, 'animation')
    max_iterations = _section(render, 'max_iterations')

    defaults = AnimationSettings()
    targets = animation.get('zoom_targets')
    initial_c = animation.get('julia_initial_c')

    try:
        return Settings(
            window=WindowSettings(
                width=window.get('width', WindowSettings.width),
                height=window.get('height', WindowSettings.height),
                fps=window.get('fps', WindowSettings.fps),
            ),
            render=RenderSettings(
                mandelbrot_max_iterations=max_iterations.get(
                    'mandelbrot', RenderSettings.mandelbrot_max_iterations),
                julia_max_iterations=max_iterations.get(
                    'julia', RenderSettings.julia_max_iterations),
                palette=render.get('palette', RenderSettings.palette),
            ),
            animation=AnimationSettings(
                tick_seconds=animation.get('tick_seconds', defaults.tick_seconds),
                zoom_growth=animation.get('zoom_growth', defaults.zoom_growth),
                drift_rate=animation.get('drift_rate', defaults.drift_rate),
                zoom_ceiling=animation.get('zoom_ceiling', defaults.zoom_ceiling),
                zoom_targets=(tuple((float(x), float(y)) for x, y in targets)
                              if targets is not None else defaults.zoom_targets),
                julia_orbit_step=animation.get('julia_orbit_step', defaults.julia_orbit_step),
                julia_orbit_radius=animation.get('julia_orbit_radius', defaults.julia_orbit_radius),
                julia_initial_c=(complex(*initial_c)
                                 if initial_c is not None else defaults.julia_initial_c),
                color_shift_step=animation.get('color_shift_step', defaults.color_shift_step),
            ),
        )
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"invalid settings value: {e}") from e


def load_settings(path=None):
    """
    Load settings from a JSON file.

    Args:
        path: Settings file to read (default: the packaged settings.json)

    Returns:
        Settings instance. Falls back to the built-in defaults when the
        file is missing, is not valid JSON, or is not a JSON object.

    Raises:
        ConfigurationError if a section has the wrong shape or a value is
        out of range
    """
    path = path or SETTINGS_PATH
    data = _read_json(path)
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings in %s: expected a JSON object", path)
        return Settings()
    return settings_from_dict(data)
