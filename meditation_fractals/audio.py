"""
Ambient drone that plays alongside the fractal animation.

The drone is synthesized once into a seamless loop with numpy and
played through pygame.mixer:
- Three low pads (C2, E2, G2), each with harmonics 1, 2, 3 and 5 whose
  amplitudes fall off as 1/h² and breathe with a slow tremolo
- A quiet C5/E5/G5 shimmer on top
- Fade in over 3 seconds on start, fade out over 2 seconds on stop

It shares no data with the renderer; the session starts and stops both
on the same user actions.
"""

import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)

PAD_FREQUENCIES = (65.41, 82.41, 98.00)  # C2, E2, G2
PAD_HARMONICS = (1, 2, 3, 5)
SHIMMER_FREQUENCIES = (523.25, 659.25, 783.99)  # C5, E5, G5

MASTER_GAIN = 0.3
FADE_IN_MS = 3000
FADE_OUT_MS = 2000


def _loop_frequency(freq, seconds):
    """Round freq so it completes a whole number of cycles per loop."""
    return max(1, round(freq * seconds)) / seconds


def synthesize_drone(sample_rate=44100, seconds=20.0):
    """
    Synthesize one loop of the ambient drone.

    Every oscillator and tremolo is snapped to a whole number of cycles
    per loop, so the buffer repeats without a click.

    Args:
        sample_rate: Samples per second
        seconds: Loop length

    Returns:
        1D float32 array of mono samples in [-1, 1]
    """
    n = int(sample_rate * seconds)
    t = np.arange(n, dtype=np.float64) / sample_rate
    out = np.zeros(n, dtype=np.float64)

    for base in PAD_FREQUENCIES:
        for index, harmonic in enumerate(PAD_HARMONICS):
            amplitude = 0.1 / (harmonic * harmonic)
            lfo = _loop_frequency(0.1 + index * 0.05, seconds)
            gain = amplitude + amplitude * 0.3 * np.sin(2 * np.pi * lfo * t)
            freq = _loop_frequency(base * harmonic, seconds)
            out += gain * np.sin(2 * np.pi * freq * t)

    for index, base in enumerate(SHIMMER_FREQUENCIES):
        lfo = _loop_frequency(0.2 + index * 0.1, seconds)
        gain = 0.02 + 0.015 * np.sin(2 * np.pi * lfo * t)
        out += gain * np.sin(2 * np.pi * _loop_frequency(base, seconds) * t)

    out *= MASTER_GAIN
    return np.clip(out, -1.0, 1.0).astype(np.float32)


def to_pcm16(samples, channels=2):
    """Convert mono float samples to an int16 array shaped for pygame.sndarray."""
    pcm = (samples * 32767).astype(np.int16)
    if channels == 1:
        return pcm
    return np.ascontiguousarray(np.repeat(pcm[:, None], channels, axis=1))


class AmbientDrone:
    """
    Looping ambient drone backed by pygame.mixer.

    If no audio device is available the drone logs a warning and stays
    silent; it never raises into the caller.

    Attributes:
        playing: Whether the drone is currently sounding
        available: False once the mixer failed to initialize
    """

    def __init__(self, sample_rate=44100, loop_seconds=20.0, mixer=None, make_sound=None):
        self.sample_rate = sample_rate
        self.loop_seconds = loop_seconds
        self.mixer = mixer or pygame.mixer
        self.make_sound = make_sound or pygame.sndarray.make_sound
        self.sound = None
        self.playing = False
        self.available = True

    def prepare(self):
        """
        Initialize the mixer and synthesize the loop ahead of the first start.

        Returns:
            True if the drone is ready to play
        """
        if self.sound is None and self.available:
            self._init_sound()
        return self.sound is not None

    def _init_sound(self):
        try:
            if not self.mixer.get_init():
                self.mixer.init(frequency=self.sample_rate, size=-16, channels=2)
            _, _, channels = self.mixer.get_init()
            samples = synthesize_drone(self.sample_rate, self.loop_seconds)
            self.sound = self.make_sound(to_pcm16(samples, channels))
        except pygame.error as e:
            logger.warning("Audio unavailable, continuing without sound: %s", e)
            self.available = False

    def start(self):
        if self.playing or not self.available:
            return False
        if not self.prepare():
            return False
        self.sound.play(loops=-1, fade_ms=FADE_IN_MS)
        self.playing = True
        logger.debug("Ambient drone started")
        return True

    def stop(self):
        if not self.playing:
            return False
        self.sound.fadeout(FADE_OUT_MS)
        self.playing = False
        logger.debug("Ambient drone fading out")
        return True
