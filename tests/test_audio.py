import numpy as np
import pygame
import pytest

from meditation_fractals.audio import FADE_IN_MS, FADE_OUT_MS, AmbientDrone, synthesize_drone, to_pcm16


class FakeSound:
    def __init__(self, array):
        self.array = array
        self.played = []
        self.faded = []

    def play(self, loops=0, fade_ms=0):
        self.played.append((loops, fade_ms))

    def fadeout(self, ms):
        self.faded.append(ms)


class FakeMixer:
    def __init__(self, fail=False):
        self.fail = fail
        self.initialized = None

    def get_init(self):
        return self.initialized

    def init(self, frequency, size, channels):
        if self.fail:
            raise pygame.error("no audio device")
        self.initialized = (frequency, size, channels)


@pytest.fixture
def sounds():
    return []


@pytest.fixture
def make_sound(sounds):
    def factory(array):
        sound = FakeSound(array)
        sounds.append(sound)
        return sound
    return factory


def test_synthesized_loop_shape_and_range():
    samples = synthesize_drone(sample_rate=8000, seconds=2.0)
    assert samples.shape == (16000,)
    assert samples.dtype == np.float32
    assert np.all(np.abs(samples) <= 1.0)
    assert np.abs(samples).max() > 0.01


def test_loop_is_seamless():
    samples = synthesize_drone(sample_rate=8000, seconds=2.0)
    # Every oscillator completes whole cycles, so the loop restarts near zero
    assert samples[0] == 0.0
    assert abs(samples[-1]) < 0.05


def test_pcm_conversion():
    samples = np.array([0.0, 0.5, -1.0], dtype=np.float32)
    stereo = to_pcm16(samples, 2)
    assert stereo.shape == (3, 2)
    assert stereo.dtype == np.int16
    assert list(stereo[:, 0]) == list(stereo[:, 1]) == [0, 16383, -32767]
    assert to_pcm16(samples, 1).shape == (3,)


def test_start_and_stop_fade(make_sound, sounds):
    drone = AmbientDrone(sample_rate=8000, loop_seconds=1.0, mixer=FakeMixer(), make_sound=make_sound)
    assert drone.start()
    assert not drone.start()
    assert drone.playing
    assert sounds[0].played == [(-1, FADE_IN_MS)]
    assert sounds[0].array.shape == (8000, 2)

    assert drone.stop()
    assert not drone.stop()
    assert sounds[0].faded == [FADE_OUT_MS]

    # The loop is synthesized once and reused
    drone.start()
    assert len(sounds) == 1


def test_missing_audio_device_is_not_fatal(make_sound, sounds, caplog):
    drone = AmbientDrone(sample_rate=8000, loop_seconds=1.0, mixer=FakeMixer(fail=True), make_sound=make_sound)
    assert not drone.start()
    assert not drone.available
    assert not drone.playing
    assert not drone.stop()
    assert sounds == []
    assert 'Audio unavailable' in caplog.text


def test_prepare_builds_the_loop_once(make_sound, sounds):
    drone = AmbientDrone(sample_rate=8000, loop_seconds=1.0, mixer=FakeMixer(), make_sound=make_sound)
    assert drone.prepare()
    assert drone.prepare()
    assert len(sounds) == 1
    assert sounds[0].played == []
    assert not drone.playing

    assert drone.start()
    assert len(sounds) == 1
    assert sounds[0].played == [(-1, FADE_IN_MS)]


def test_prepare_without_audio_device(make_sound, sounds):
    drone = AmbientDrone(sample_rate=8000, loop_seconds=1.0, mixer=FakeMixer(fail=True), make_sound=make_sound)
    assert not drone.prepare()
    assert not drone.start()
    assert sounds == []
