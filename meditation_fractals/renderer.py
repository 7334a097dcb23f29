"""
Frame renderer for the fractal visualizer.

The FrameRenderer class handles:
- Owning the RGBA pixel buffer (overwritten in place every frame)
- Mapping pixels to complex-plane coordinates for the current viewport
- Running the escape-time evaluator and the palette for every pixel,
  parallelized across rows with Numba's prange
"""

import logging

import numpy as np
from numba import jit, prange

from .colormaps import get_palette_id, palette_rgb
from .compute import escape_time
from .config import RenderSettings, validate_dimensions

logger = logging.getLogger(__name__)


@jit(nopython=True, parallel=True, cache=True)
def render_rgba(pixels, zoom, offset_x, offset_y, variant_id, cr, ci,
                max_iter, color_shift, palette_id):
    """
    Render one frame into an existing RGBA buffer.

    Args:
        pixels: (height, width, 4) uint8 array, modified in place
        zoom: Zoom factor (> 0)
        offset_x, offset_y: Plane point anchored at the canvas center
        variant_id: VARIANT_MANDELBROT or VARIANT_JULIA
        cr, ci: Julia parameter (ignored for the Mandelbrot set)
        max_iter: Iteration ceiling for this pass
        color_shift: Palette phase offset
        palette_id: Palette to color with
    """
    height, width = pixels.shape[0], pixels.shape[1]
    half_w = width / 2
    half_h = height / 2
    quarter_w = width / 4
    quarter_h = height / 4

    for py in prange(height):
        y0 = (py - half_h) / quarter_h / zoom + offset_y
        for px in range(width):
            x0 = (px - half_w) / quarter_w / zoom + offset_x
            iterations, smoothing = escape_time(x0, y0, variant_id, cr, ci, max_iter)
            r, g, b = palette_rgb(iterations, max_iter, smoothing, color_shift, palette_id)
            pixels[py, px, 0] = r
            pixels[py, px, 1] = g
            pixels[py, px, 2] = b
            pixels[py, px, 3] = 255


@jit(nopython=True, parallel=True, cache=True)
def compute_escape_grid(width, height, zoom, offset_x, offset_y, variant_id, cr, ci, max_iter):
    """
    Compute raw escape data for every pixel of a viewport.

    Returns:
        (iterations, smoothing) arrays of shape (height, width)
    """
    iterations = np.zeros((height, width), dtype=np.int64)
    smoothing = np.zeros((height, width), dtype=np.float64)
    half_w = width / 2
    half_h = height / 2
    quarter_w = width / 4
    quarter_h = height / 4

    for py in prange(height):
        y0 = (py - half_h) / quarter_h / zoom + offset_y
        for px in range(width):
            x0 = (px - half_w) / quarter_w / zoom + offset_x
            n, s = escape_time(x0, y0, variant_id, cr, ci, max_iter)
            iterations[py, px] = n
            smoothing[py, px] = s
    return iterations, smoothing


class FrameRenderer:
    """
    Renders the active fractal variant into a reusable pixel buffer.

    Usage:
        renderer = FrameRenderer(640, 640)
        pixels = renderer.render(viewport, Mandelbrot(), color_shift=0.0)
        # pixels is a (height, width, 4) uint8 array ready to blit

    Attributes:
        width, height: Buffer dimensions (fixed for the session)
        settings: RenderSettings with iteration ceilings and palette
        pixels: The RGBA buffer, row-major, alpha always 255
    """

    def __init__(self, width, height, settings=None):
        validate_dimensions(width, height)
        self.width = width
        self.height = height
        self.settings = settings or RenderSettings()
        self.palette_id = get_palette_id(self.settings.palette)

        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels[:, :, 3] = 255
        self.frames_rendered = 0

    def max_iterations_for(self, variant):
        if variant.name == 'julia':
            return self.settings.julia_max_iterations
        return self.settings.mandelbrot_max_iterations

    def _check_viewport(self, viewport):
        if (viewport.width, viewport.height) != (self.width, self.height):
            raise ValueError(
                f"viewport is {viewport.width}x{viewport.height} but the pixel buffer "
                f"is {self.width}x{self.height}"
            )

    def render(self, viewport, variant, color_shift=0.0):
        """
        Regenerate the pixel buffer for a viewport.

        Args:
            viewport: Viewport with the same pixel size as this renderer
            variant: Mandelbrot or Julia instance
            color_shift: Palette phase offset for this frame

        Returns:
            The pixel buffer (same array object every call)
        """
        self._check_viewport(viewport)
        variant_id, cr, ci = variant.kernel_args()
        render_rgba(
            self.pixels, float(viewport.zoom), float(viewport.offset_x), float(viewport.offset_y),
            variant_id, cr, ci, self.max_iterations_for(variant),
            float(color_shift), self.palette_id
        )
        self.frames_rendered += 1
        return self.pixels

    def escape_grid(self, viewport, variant):
        """
        Compute per-pixel escape data without coloring.

        Returns:
            (iterations, smoothing) arrays of shape (height, width)
        """
        self._check_viewport(viewport)
        variant_id, cr, ci = variant.kernel_args()
        return compute_escape_grid(
            self.width, self.height, float(viewport.zoom),
            float(viewport.offset_x), float(viewport.offset_y),
            variant_id, cr, ci, self.max_iterations_for(variant)
        )

    def rgb(self):
        """Return an (height, width, 3) view of the buffer without alpha."""
        return self.pixels[:, :, :3]


def warmup_jit(settings=None):
    """
    Warm up JIT compilation with a tiny viewport.

    Call this once at startup to pre-compile the Numba kernels,
    avoiding a delay on the first animated frame.
    """
    from .state import Julia, Mandelbrot, Viewport

    logger.info("Compiling fractal kernels (first run only)...")
    renderer = FrameRenderer(4, 4, settings)
    viewport = Viewport(4, 4)
    for variant in (Mandelbrot(), Julia(complex(-0.7, 0.27015))):
        renderer.render(viewport, variant)
        renderer.escape_grid(viewport, variant)
