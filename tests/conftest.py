import pytest

from meditation_fractals.animation import AnimationDriver
from meditation_fractals.config import AnimationSettings, RenderSettings
from meditation_fractals.renderer import FrameRenderer
from meditation_fractals.scheduler import FrameScheduler


class FakeAudio:
    """Records start/stop calls in place of the ambient drone."""

    def __init__(self):
        self.calls = []

    def start(self):
        self.calls.append('start')

    def stop(self):
        self.calls.append('stop')


@pytest.fixture
def render_settings():
    return RenderSettings(mandelbrot_max_iterations=50, julia_max_iterations=50)


@pytest.fixture
def renderer(render_settings):
    return FrameRenderer(4, 4, render_settings)


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def make_driver(renderer, scheduler):
    def factory(variant='mandelbrot', settings=None, on_frame=None):
        return AnimationDriver(renderer, scheduler, settings or AnimationSettings(),
                               variant=variant, on_frame=on_frame)
    return factory


@pytest.fixture
def fake_audio():
    return FakeAudio()
