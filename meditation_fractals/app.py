"""
Main application module for the fractal meditation visualizer.

Contains the FractalApp class which handles:
- Window setup and the display-synchronized main loop
- Keyboard input (start/stop, switch fractal, quit)
- Blitting the session's pixel buffer to the screen
"""

import logging

import pygame

from .config import load_settings
from .renderer import warmup_jit
from .session import MeditationSession

logger = logging.getLogger(__name__)


class FractalApp:
    """
    Main application class for the fractal visualizer.

    Handles the pygame window and event loop, and ticks the session's
    frame scheduler once per display refresh.
    """

    TITLE = "Fractal Meditation"
    HINT = "SPACE start/stop, TAB switch, C pin Julia c, ESC quit"

    def __init__(self, settings=None, width=None, height=None, variant='mandelbrot',
                 enable_audio=True, autostart=True, julia_c=None):
        """
        Initialize the application.

        Args:
            settings: Settings (loaded from settings.json if None)
            width, height: Window size overriding the settings
            variant: Starting fractal, 'mandelbrot' or 'julia'
            enable_audio: Play the ambient drone while animating
            autostart: Start animating as soon as the window opens
            julia_c: Complex Julia parameter to hold fixed instead of orbiting
        """
        self.settings = settings or load_settings()
        self.session = MeditationSession(
            self.settings, width, height, variant=variant,
            enable_audio=enable_audio, on_frame=self._on_frame
        )
        self.width = self.session.width
        self.height = self.session.height
        self.autostart = autostart
        if julia_c is not None:
            self.session.set_julia_parameter(julia_c)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None
        self.frame_dirty = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        warmup_jit(self.settings.render)
        self.session.prepare_audio()
        self.session.render()
        if self.autostart:
            self.session.start()
        self._update_caption()

        self.running = True
        while self.running:
            self._handle_events()
            self.session.tick()
            self._draw()
            self.clock.tick(self.settings.window.fps)

        self.session.stop()
        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.DOUBLEBUF
        )
        self.clock = pygame.time.Clock()

    def _on_frame(self, pixels):
        self.frame_dirty = True

    def _update_caption(self):
        state = "" if self.session.running else " (paused)"
        pygame.display.set_caption(
            f"{self.TITLE} - {self.session.display_name}{state} - {self.HINT}"
        )

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_SPACE:
            self.session.toggle()
            self._update_caption()
        elif event.key == pygame.K_TAB:
            name = self.session.switch_variant()
            logger.info("Now showing: %s", name)
            self._update_caption()
        elif event.key == pygame.K_c:
            self._toggle_julia_pin()
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _toggle_julia_pin(self):
        """Freeze the Julia parameter where it is, or release it to the orbit."""
        driver = self.session.driver
        if driver.julia_pinned:
            self.session.set_julia_parameter(None)
            logger.info("Julia parameter orbiting")
        elif driver.variant.name == 'julia':
            self.session.set_julia_parameter(driver.variant.c)
            logger.info("Julia parameter pinned at %s", driver.variant.c)

    def _draw(self):
        """Blit the latest frame if the buffer changed."""
        if self.frame_dirty or self.current_surface is None:
            self.current_surface = pygame.surfarray.make_surface(
                self.session.renderer.rgb().swapaxes(0, 1)
            )
            self.frame_dirty = False
        self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()


def run(settings=None, width=None, height=None, variant='mandelbrot',
        enable_audio=True, autostart=True, julia_c=None):
    """
    Run the fractal visualizer.

    Args:
        settings: Settings (loaded from settings.json if None)
        width: Window width (default from settings)
        height: Window height (default from settings)
        variant: Starting fractal, 'mandelbrot' or 'julia'
        enable_audio: Play the ambient drone
        autostart: Start animating immediately
        julia_c: Complex Julia parameter to hold fixed (None to orbit)
    """
    app = FractalApp(settings, width, height, variant, enable_audio, autostart, julia_c)
    try:
        app.run()
    except KeyboardInterrupt:
        app.session.stop()
        pygame.quit()
