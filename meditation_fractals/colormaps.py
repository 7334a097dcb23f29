"""
Palette definitions for the fractal visualizer.

Every palette maps (iterations, max_iter, smoothing, color_shift) to an
RGB triple through phase-shifted sine waves of a continuous phase

    t = (iterations + smoothing) / PHASE_SCALE + color_shift

so colors never band at integer iteration boundaries and cycle as the
color shift grows. Points inside the set are always black.

To add a new palette:
1. Add a PALETTE_XXX id and a branch in palette_rgb()
2. Add it to the PALETTES dictionary at the bottom of this file
"""

import math

from numba import jit


PALETTE_PSYCHEDELIC = 0
PALETTE_AURORA = 1
PALETTE_EMBER = 2

PHASE_SCALE = 25.0  # Iterations per radian of phase


@jit(nopython=True, cache=True)
def _channel(value):
    """Floor and clamp a channel value to [0, 255]."""
    v = math.floor(value)
    if v < 0:
        return 0
    if v > 255:
        return 255
    return int(v)


@jit(nopython=True, cache=True)
def _psychedelic(t):
    # Three channels drifting out of phase
    r = math.floor(128.0 + 127.0 * math.sin(t * 0.7))
    g = math.floor(128.0 + 127.0 * math.sin(t * 0.5 + 2.094))
    b = math.floor(128.0 + 127.0 * math.sin(t * 0.9 + 4.188))

    # Slow intensity bursts plus a faster shimmer
    burst = math.sin(t * 0.2) * 0.3 + 0.7
    return (_channel(r * burst + 40.0 * math.sin(t * 1.3)),
            _channel(g * burst + 40.0 * math.sin(t * 1.7 + 1.0)),
            _channel(b * burst + 40.0 * math.sin(t * 2.1 + 2.0)))


@jit(nopython=True, cache=True)
def _aurora(t):
    # Greens and blues with a faint violet undertone
    r = 60.0 + 60.0 * math.sin(t * 0.3 + 4.0)
    g = 140.0 + 115.0 * math.sin(t * 0.6)
    b = 150.0 + 105.0 * math.sin(t * 0.45 + 1.5)
    return _channel(r), _channel(g), _channel(b)


@jit(nopython=True, cache=True)
def _ember(t):
    r = 200.0 + 55.0 * math.sin(t * 0.5)
    g = 110.0 + 100.0 * math.sin(t * 0.5 - 0.9)
    b = 40.0 + 40.0 * math.sin(t * 1.1 + 2.0)
    return _channel(r), _channel(g), _channel(b)


@jit(nopython=True, cache=True)
def palette_rgb(iterations, max_iter, smoothing, color_shift, palette_id):
    """
    Map escape data to an RGB triple.

    Args:
        iterations: Escape iteration count
        max_iter: Iteration ceiling (points at the ceiling are black)
        smoothing: Smoothing fraction from the evaluator
        color_shift: Time-varying phase offset
        palette_id: One of the PALETTE_* ids

    Returns:
        (r, g, b) integers in [0, 255]
    """
    if iterations == max_iter:
        return 0, 0, 0

    t = (iterations + smoothing) / PHASE_SCALE + color_shift

    if palette_id == PALETTE_AURORA:
        return _aurora(t)
    elif palette_id == PALETTE_EMBER:
        return _ember(t)
    return _psychedelic(t)


# Registry of all available palettes.
# Keys are display names, values are kernel palette ids.
PALETTES = {
    'Psychedelic': PALETTE_PSYCHEDELIC,
    'Aurora': PALETTE_AURORA,
    'Ember': PALETTE_EMBER,
}


def get_palette_id(name):
    """
    Get a palette id by name.

    Raises:
        KeyError if name not found
    """
    return PALETTES[name]


def list_palette_names():
    """Get list of available palette names."""
    return list(PALETTES.keys())


def map_color(iterations, max_iter, smoothing, color_shift, palette='Psychedelic'):
    """Python-level wrapper around palette_rgb returning a plain tuple."""
    r, g, b = palette_rgb(int(iterations), int(max_iter), float(smoothing),
                          float(color_shift), get_palette_id(palette))
    return int(r), int(g), int(b)
