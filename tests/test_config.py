import json
import logging

import pytest

from meditation_fractals.config import (
    AnimationSettings,
    ConfigurationError,
    RenderSettings,
    Settings,
    WindowSettings,
    load_settings,
    settings_from_dict,
)


def test_packaged_settings_match_defaults():
    assert load_settings() == Settings()


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger='meditation_fractals.config'):
        settings = load_settings(str(tmp_path / 'nope.json'))
    assert settings == Settings()
    assert 'Could not load settings' in caplog.text


def test_malformed_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text('{"window": ')
    assert load_settings(str(path)) == Settings()


def test_partial_override(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({
        'window': {'width': 320},
        'render': {'max_iterations': {'julia': 90}, 'palette': 'Aurora'},
        'animation': {'zoom_ceiling': 250, 'zoom_targets': [[0.25, 0.0]], 'julia_initial_c': [0.1, -0.2]},
    }))
    settings = load_settings(str(path))
    assert settings.window == WindowSettings(width=320)
    assert settings.render.julia_max_iterations == 90
    assert settings.render.mandelbrot_max_iterations == 150
    assert settings.render.palette == 'Aurora'
    assert settings.animation.zoom_ceiling == 250
    assert settings.animation.zoom_targets == ((0.25, 0.0),)
    assert settings.animation.julia_initial_c == complex(0.1, -0.2)
    assert settings.animation.zoom_growth == 1.008


@pytest.mark.parametrize("section, values", [
    ('window', {'width': 0}),
    ('window', {'height': -5}),
    ('window', {'fps': 0}),
    ('render', {'max_iterations': {'mandelbrot': 0}}),
    ('render', {'palette': 'Plaid'}),
    ('animation', {'zoom_growth': 1.0}),
    ('animation', {'zoom_ceiling': 0.5}),
    ('animation', {'zoom_targets': []}),
    ('animation', {'drift_rate': 1.5}),
    ('animation', {'tick_seconds': 0}),
])
def test_invalid_values_fail_fast(section, values):
    with pytest.raises(ConfigurationError):
        settings_from_dict({section: values})


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        RenderSettings(julia_max_iterations=-1)


def test_dimensions_must_be_integers():
    with pytest.raises(ConfigurationError):
        WindowSettings(width=640.0)
    with pytest.raises(ConfigurationError):
        WindowSettings(height=True)


def test_default_animation_constants():
    settings = AnimationSettings()
    assert settings.zoom_growth > 1.0
    assert len(settings.zoom_targets) == 3
    assert settings.julia_orbit_radius == 0.7885


@pytest.mark.parametrize("data", [
    [1, 2],
    {'window': [640, 480]},
    {'render': {'max_iterations': 150}},
    {'animation': {'zoom_targets': [[1.0]]}},
    {'animation': {'zoom_targets': [['a', 0.0]]}},
    {'animation': {'julia_initial_c': [1, 2, 3]}},
    {'animation': {'julia_initial_c': 0.5}},
    {'window': {'fps': 'fast'}},
])
def test_wrong_shape_raises_configuration_error(data):
    with pytest.raises(ConfigurationError):
        settings_from_dict(data)


def test_non_object_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / 'settings.json'
    path.write_text('[1, 2]')
    with caplog.at_level(logging.WARNING, logger='meditation_fractals.config'):
        assert load_settings(str(path)) == Settings()
    assert 'expected a JSON object' in caplog.text


def test_wrong_shape_section_in_file_raises_configuration_error(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'animation': {'zoom_targets': [[1.0]]}}))
    with pytest.raises(ConfigurationError):
        load_settings(str(path))
