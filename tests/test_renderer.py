import numpy as np
import pytest

from meditation_fractals.colormaps import map_color
from meditation_fractals.compute import evaluate
from meditation_fractals.config import ConfigurationError, RenderSettings
from meditation_fractals.renderer import FrameRenderer
from meditation_fractals.state import Julia, Mandelbrot, Viewport


@pytest.mark.parametrize("width, height, zoom, offset", [
    (4, 4, 1.0, (-0.5, 0.0)),
    (640, 480, 37.5, (-0.7435669, 0.1314023)),
    (101, 57, 0.25, (1e-3, -2.0)),
])
def test_center_pixel_maps_to_offset(width, height, zoom, offset):
    viewport = Viewport(width, height, zoom, *offset)
    assert viewport.pixel_to_plane(width / 2, height / 2) == offset


def test_default_span_is_four_units_wide():
    viewport = Viewport(400, 400)
    assert viewport.pixel_to_plane(0, 200) == (-2.0, 0.0)
    assert viewport.pixel_to_plane(400, 200) == (2.0, 0.0)


def test_four_by_four_mandelbrot_scenario(renderer):
    viewport = Viewport(4, 4, 1.0, -0.5, 0.0)
    iterations, smoothing = renderer.escape_grid(viewport, Mandelbrot())

    assert viewport.pixel_to_plane(0, 0) == (-2.5, -2.0)
    assert iterations[0, 0] <= 2

    assert viewport.pixel_to_plane(2, 2) == (-0.5, 0.0)
    assert iterations[2, 2] == 50
    assert smoothing[2, 2] == 0.0


def test_render_fills_opaque_rgba_buffer(renderer):
    viewport = Viewport(4, 4, 1.0, -0.5, 0.0)
    pixels = renderer.render(viewport, Mandelbrot(), color_shift=1.35)

    assert pixels.shape == (4, 4, 4)
    assert pixels.dtype == np.uint8
    assert np.all(pixels[:, :, 3] == 255)
    assert tuple(pixels[2, 2, :3]) == (0, 0, 0)

    result = evaluate(-2.5, -2.0, Mandelbrot(), 50)
    assert tuple(pixels[0, 0, :3]) == map_color(result.iterations, 50, result.smoothing, 1.35)


def test_buffer_is_overwritten_in_place(renderer):
    viewport = Viewport(4, 4)
    first = renderer.render(viewport, Mandelbrot())
    second = renderer.render(viewport, Julia(0.3 + 0.5j), color_shift=2.0)
    assert first is second is renderer.pixels
    assert renderer.frames_rendered == 2


def test_flat_bytes_are_row_major(renderer):
    renderer.render(Viewport(4, 4, 1.0, -0.5, 0.0), Mandelbrot(), 0.6)
    data = renderer.pixels.tobytes()
    assert len(data) == 4 * 4 * 4
    for py in range(4):
        for px in range(4):
            offset = (py * 4 + px) * 4
            assert tuple(data[offset:offset + 4]) == tuple(renderer.pixels[py, px])


@pytest.mark.parametrize("variant", [Mandelbrot(), Julia(complex(-0.8, 0.156))])
def test_grid_matches_pointwise_evaluation(variant):
    renderer = FrameRenderer(8, 6, RenderSettings(40, 40))
    viewport = Viewport(8, 6, 1.7, -0.3, 0.2)
    iterations, smoothing = renderer.escape_grid(viewport, variant)
    for py in range(6):
        for px in range(8):
            x, y = viewport.pixel_to_plane(px, py)
            expected = evaluate(x, y, variant, 40)
            assert iterations[py, px] == expected.iterations
            assert smoothing[py, px] == pytest.approx(expected.smoothing)


def test_julia_uses_its_own_iteration_ceiling():
    renderer = FrameRenderer(4, 4, RenderSettings(mandelbrot_max_iterations=30, julia_max_iterations=70))
    assert renderer.max_iterations_for(Mandelbrot()) == 30
    assert renderer.max_iterations_for(Julia(0j)) == 70
    iterations, _ = renderer.escape_grid(Viewport(4, 4), Julia(0j))
    assert iterations[2, 2] == 70


def test_viewport_size_must_match_buffer(renderer):
    with pytest.raises(ValueError):
        renderer.render(Viewport(8, 4), Mandelbrot())


@pytest.mark.parametrize("width, height", [(0, 4), (4, -1), (0, 0)])
def test_bad_dimensions_fail_fast(width, height):
    with pytest.raises(ConfigurationError):
        FrameRenderer(width, height)
    with pytest.raises(ConfigurationError):
        Viewport(width, height)
