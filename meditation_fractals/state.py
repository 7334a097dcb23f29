"""
View and animation state for the fractal visualizer.

The AnimationDriver is the only writer of these objects; the renderer
reads them once per frame.
"""

from dataclasses import dataclass

from .compute import VARIANT_JULIA, VARIANT_MANDELBROT
from .config import validate_dimensions


@dataclass(frozen=True)
class Mandelbrot:
    name = 'mandelbrot'
    display_name = 'Mandelbrot Set - Infinite Zoom'
    default_offset = (-0.5, 0.0)

    def kernel_args(self):
        """Return (variant_id, cr, ci) for the JIT kernels."""
        return VARIANT_MANDELBROT, 0.0, 0.0


@dataclass(frozen=True)
class Julia:
    c: complex

    name = 'julia'
    display_name = 'Julia Set - Morphing Patterns'
    default_offset = (0.0, 0.0)

    def kernel_args(self):
        return VARIANT_JULIA, float(self.c.real), float(self.c.imag)


@dataclass
class Viewport:
    """
    Pixel region and its anchoring in the complex plane.

    Plane coordinates of pixel (px, py) are

        x = (px - W/2) / (W/4) / zoom + offset_x
        y = (py - H/2) / (H/4) / zoom + offset_y

    so the plane origin sits at the canvas center and the visible real
    axis spans roughly [-2, 2] at zoom 1.
    """

    width: int
    height: int
    zoom: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def __post_init__(self):
        validate_dimensions(self.width, self.height)

    def pixel_to_plane(self, px, py):
        x = (px - self.width / 2) / (self.width / 4) / self.zoom + self.offset_x
        y = (py - self.height / 2) / (self.height / 4) / self.zoom + self.offset_y
        return x, y

    def reset(self, variant):
        """Return to the variant's canonical view: zoom 1 at its default offset."""
        self.zoom = 1.0
        self.offset_x, self.offset_y = variant.default_offset


@dataclass
class AnimationState:
    elapsed: float = 0.0
    color_shift: float = 0.0
    target_index: int = 0
    julia_angle: float = 0.0
