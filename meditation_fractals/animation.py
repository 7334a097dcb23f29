"""
Animation driver for the fractal visualizer.

The AnimationDriver owns the mutable view state (viewport, animation
counters, active variant) and advances it once per scheduled frame:
- Mandelbrot: zoom grows geometrically while the view drifts toward a
  preselected target; past the zoom ceiling the view snaps back and the
  next target is used
- Julia: the parameter c travels a fixed-radius circle, morphing the set
- Both: the palette phase advances every tick

Ticks come from a FrameScheduler. start() queues the first tick and
every tick queues the next one until stop() or switch_variant()
cancels the pending callback.
"""

import logging
import math
import threading

from .config import AnimationSettings
from .scheduler import FrameScheduler
from .state import AnimationState, Julia, Mandelbrot, Viewport

logger = logging.getLogger(__name__)


class AnimationDriver:
    """
    Drives the per-frame animation and triggers the renderer.

    Usage:
        driver = AnimationDriver(renderer, scheduler, on_frame=blit)
        driver.start()
        # in the host loop, once per display refresh:
        scheduler.run_frame()

    Attributes:
        renderer: FrameRenderer that receives every frame
        scheduler: FrameScheduler supplying the ticks
        settings: AnimationSettings with the per-tick constants
        variant: Active Mandelbrot or Julia instance
        viewport: Viewport mutated by the animation
        state: AnimationState counters
    """

    def __init__(self, renderer, scheduler=None, settings=None, variant='mandelbrot',
                 on_frame=None):
        """
        Initialize the driver in the idle state.

        Args:
            renderer: FrameRenderer to draw with
            scheduler: FrameScheduler (default: a new private scheduler)
            settings: AnimationSettings (default constants if None)
            variant: 'mandelbrot' or 'julia'
            on_frame: Optional callable receiving the pixel buffer after
                every render
        """
        self.renderer = renderer
        self.scheduler = scheduler or FrameScheduler()
        self.settings = settings or AnimationSettings()
        self.on_frame = on_frame

        self._pinned_c = None
        self.state = AnimationState()
        self.variant = self._default_variant(variant)
        self.viewport = Viewport(renderer.width, renderer.height)
        self.viewport.reset(self.variant)

        self._running = False
        self._handle = None
        self._lock = threading.RLock()

    def _default_variant(self, name):
        if name == 'mandelbrot':
            return Mandelbrot()
        if name == 'julia':
            if self._pinned_c is not None:
                return Julia(self._pinned_c)
            return Julia(self.settings.julia_initial_c)
        raise ValueError(f"unknown fractal variant {name!r}")

    @property
    def running(self):
        return self._running

    @property
    def julia_pinned(self):
        return self._pinned_c is not None

    def start(self):
        """
        Start the animation.

        Returns:
            True if the driver was idle and is now running, False if it
            was already running
        """
        with self._lock:
            if self._running:
                return False
            self._running = True
            self._handle = self.scheduler.request_frame(self._on_frame)
        logger.info("Animation started (%s)", self.variant.name)
        return True

    def stop(self):
        """
        Stop the animation and cancel the pending tick.

        The last rendered frame stays in the pixel buffer.

        Returns:
            True if the driver was running, False otherwise
        """
        with self._lock:
            if not self._running:
                return False
            self._cancel_pending()
            self._running = False
        logger.info("Animation stopped after %d frames", self.renderer.frames_rendered)
        return True

    def _cancel_pending(self):
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None

    def _on_frame(self):
        with self._lock:
            self._handle = None
            if not self._running:
                return
            self.step()
            # The frame listener may have stopped or switched the driver
            if self._running and self._handle is None:
                self._handle = self.scheduler.request_frame(self._on_frame)

    def step(self):
        """Advance the animation by one tick and render the result."""
        with self._lock:
            self.advance()
            return self.render()

    def advance(self):
        """Apply one tick of the active variant's animation policy."""
        with self._lock:
            self.state.elapsed += self.settings.tick_seconds
            if self.variant.name == 'mandelbrot':
                self._advance_zoom()
            else:
                self._advance_orbit()
            self.state.color_shift += self.settings.color_shift_step

    def _advance_zoom(self):
        settings = self.settings
        viewport = self.viewport
        target_x, target_y = settings.zoom_targets[self.state.target_index]

        viewport.zoom *= settings.zoom_growth
        viewport.offset_x += (target_x - viewport.offset_x) * settings.drift_rate
        viewport.offset_y += (target_y - viewport.offset_y) * settings.drift_rate

        if viewport.zoom > settings.zoom_ceiling:
            viewport.reset(self.variant)
            self.state.target_index = (self.state.target_index + 1) % len(settings.zoom_targets)
            logger.debug("Zoom ceiling reached, moving to target %d", self.state.target_index)

    def _advance_orbit(self):
        self.state.julia_angle += self.settings.julia_orbit_step
        if self._pinned_c is not None:
            return
        radius = self.settings.julia_orbit_radius
        self.variant = Julia(complex(radius * math.cos(self.state.julia_angle),
                                     radius * math.sin(self.state.julia_angle)))

    def render(self):
        """Render the current state and notify the frame listener."""
        with self._lock:
            pixels = self.renderer.render(self.viewport, self.variant, self.state.color_shift)
            if self.on_frame is not None:
                self.on_frame(pixels)
            return pixels

    def switch_variant(self):
        """
        Toggle between the Mandelbrot and Julia sets.

        Cancels any pending tick, resets the viewport and the
        variant-specific animation state, then either resumes the
        animation or renders one static frame when idle.

        Returns:
            Display name of the new variant
        """
        with self._lock:
            was_running = self._running
            self._cancel_pending()
            self._running = False

            new_name = 'julia' if self.variant.name == 'mandelbrot' else 'mandelbrot'
            self.variant = self._default_variant(new_name)
            self.viewport.reset(self.variant)
            self.state.target_index = 0
            self.state.julia_angle = 0.0

            if was_running:
                self._running = True
                self._handle = self.scheduler.request_frame(self._on_frame)
            else:
                self.render()

        logger.info("Switched to %s", self.variant.display_name)
        return self.variant.display_name

    def select_variant(self, name):
        """Switch to the named variant if it is not already active."""
        if name not in ('mandelbrot', 'julia'):
            raise ValueError(f"unknown fractal variant {name!r}")
        if name != self.variant.name:
            return self.switch_variant()
        return self.variant.display_name

    def set_julia_parameter(self, c):
        """
        Pin the Julia parameter, or release it back to the orbit.

        Args:
            c: Complex parameter to hold fixed, or None to resume the
                circular orbit on the next tick
        """
        with self._lock:
            self._pinned_c = None if c is None else complex(c)
            if self._pinned_c is not None and self.variant.name == 'julia':
                self.variant = Julia(self._pinned_c)
                if not self._running:
                    self.render()
