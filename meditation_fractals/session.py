"""
Session object tying the renderer, the animation and the ambient audio
together.

The host constructs one MeditationSession and forwards user commands to
it. The session owns every component; the animation driver owns the
view state.
"""

import logging

from .animation import AnimationDriver
from .audio import AmbientDrone
from .config import Settings
from .renderer import FrameRenderer
from .scheduler import FrameScheduler

logger = logging.getLogger(__name__)


class MeditationSession:
    """
    One visualizer session.

    Attributes:
        settings: Settings used to build the components
        scheduler: FrameScheduler ticked by the host once per refresh
        renderer: FrameRenderer owning the pixel buffer
        driver: AnimationDriver owning viewport and animation state
        audio: Ambient sound sibling (None when disabled)
    """

    def __init__(self, settings=None, width=None, height=None, variant='mandelbrot',
                 audio=None, enable_audio=True, on_frame=None):
        """
        Build all session components.

        Args:
            settings: Settings (defaults if None)
            width, height: Pixel size, overriding settings.window
            variant: Starting fractal variant, 'mandelbrot' or 'julia'
            audio: Object with start()/stop() (default: AmbientDrone)
            enable_audio: Set False to run silently
            on_frame: Called with the pixel buffer after every render

        Raises:
            ConfigurationError if the pixel size is not positive
        """
        self.settings = settings or Settings()
        self.width = width if width is not None else self.settings.window.width
        self.height = height if height is not None else self.settings.window.height

        self.scheduler = FrameScheduler()
        self.renderer = FrameRenderer(self.width, self.height, self.settings.render)
        self.driver = AnimationDriver(
            self.renderer, self.scheduler, self.settings.animation,
            variant=variant, on_frame=on_frame
        )
        if audio is None and enable_audio:
            audio = AmbientDrone()
        self.audio = audio

    @property
    def running(self):
        return self.driver.running

    @property
    def pixels(self):
        return self.renderer.pixels

    @property
    def display_name(self):
        return self.driver.variant.display_name

    def render(self):
        """Render a static frame of the current state."""
        return self.driver.render()

    def start(self):
        """Start the animation and the ambient sound together."""
        started = self.driver.start()
        if self.audio is not None:
            self.audio.start()
        return started

    def stop(self):
        """Stop the animation and fade out the ambient sound."""
        stopped = self.driver.stop()
        if self.audio is not None:
            self.audio.stop()
        return stopped

    def toggle(self):
        if self.running:
            self.stop()
        else:
            self.start()
        return self.running

    def switch_variant(self):
        """
        Toggle the fractal variant.

        Returns:
            Display name of the new variant
        """
        return self.driver.switch_variant()

    def select_variant(self, name):
        """Show the named variant ('mandelbrot' or 'julia')."""
        return self.driver.select_variant(name)

    def set_julia_parameter(self, c):
        """Pin the Julia parameter c, or pass None to let it orbit again."""
        self.driver.set_julia_parameter(c)

    def prepare_audio(self):
        """Build the ambient loop up front so the first start does not stall."""
        prepare = getattr(self.audio, 'prepare', None)
        if prepare is None:
            return False
        return prepare()

    def tick(self):
        """Run one display refresh worth of scheduled work."""
        return self.scheduler.run_frame()
