"""
Escape-time fractal computation using Numba JIT compilation.

This module holds the performance-critical per-point kernels:
- Escape-time iteration for the Mandelbrot set and the Julia family
- The continuous smoothing fraction that removes banding between
  discrete iteration counts
- A thin Python-level wrapper returning a plain value type

Supported variants:
- 0: Mandelbrot, z starts at 0 and c is the plane point
- 1: Julia, z starts at the plane point and c is a fixed parameter
"""

import math
from typing import NamedTuple

from numba import jit


# Variant IDs
VARIANT_MANDELBROT = 0
VARIANT_JULIA = 1

# Squared bailout radius (escape radius 2)
BAILOUT_SQUARED = 4.0

LOG2 = math.log(2.0)


class EvaluationResult(NamedTuple):
    """Iteration count and smoothing fraction for a single plane point."""

    iterations: int
    smoothing: float

    def escaped(self, max_iter):
        return self.iterations < max_iter


@jit(nopython=True, cache=True)
def smoothing_fraction(zn2):
    """
    Continuous escape correction from the squared modulus of the escaping z.

    Only meaningful for zn2 > 4 (the value right after bailout), where the
    result is finite and stays within roughly [-1, 1].
    """
    log_zn = math.log(zn2) / 2.0
    nu = math.log(log_zn / LOG2) / LOG2
    return 1.0 - nu


@jit(nopython=True, cache=True)
def escape_time(x0, y0, variant_id, cr, ci, max_iter):
    """
    Run the escape-time iteration z <- z² + c for one plane point.

    Args:
        x0, y0: Real and imaginary parts of the plane point
        variant_id: VARIANT_MANDELBROT or VARIANT_JULIA
        cr, ci: Julia parameter (ignored for the Mandelbrot set)
        max_iter: Iteration ceiling

    Returns:
        (iterations, smoothing). Points that never escape return
        (max_iter, 0.0).
    """
    if variant_id == VARIANT_JULIA:
        x, y = x0, y0
    else:
        x, y = 0.0, 0.0
        cr, ci = x0, y0

    iteration = 0
    while x * x + y * y <= BAILOUT_SQUARED and iteration < max_iter:
        xtemp = x * x - y * y + cr
        y = 2.0 * x * y + ci
        x = xtemp
        iteration += 1

    if iteration == max_iter:
        return iteration, 0.0

    return iteration, smoothing_fraction(x * x + y * y)


def evaluate(x0, y0, variant, max_iter):
    """
    Evaluate a single plane point for the given fractal variant.

    Args:
        x0, y0: Plane coordinates
        variant: Mandelbrot or Julia instance (see state.py)
        max_iter: Positive iteration ceiling

    Returns:
        EvaluationResult
    """
    variant_id, cr, ci = variant.kernel_args()
    iterations, smoothing = escape_time(float(x0), float(y0), variant_id, cr, ci, int(max_iter))
    return EvaluationResult(int(iterations), float(smoothing))
