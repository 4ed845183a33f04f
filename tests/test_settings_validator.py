import math

import pytest

from fractals.base import RenderSettings, Viewport
from fractals.settings_validator import SettingsError, validate_render_request, validate_settings
from utils.enums import Algorithm, ColorScheme


def test_defaults_are_valid():
    validate_settings(RenderSettings())
    validate_render_request(RenderSettings(), Viewport(), 64, 48)


@pytest.mark.parametrize("changes, message", [
    ({"max_steps": 0}, "max_steps"),
    ({"max_steps": 2.5}, "max_steps"),
    ({"samples": 0}, "samples"),
    ({"algorithm": Algorithm.MANDELBROT, "color_scheme": ColorScheme.HSV1, "escape_radius": 0.0}, "escape_radius"),
    ({"newton_radius": math.nan}, "newton_radius"),
    ({"update_interval_ms": -1}, "update_interval_ms"),
    ({"color_scheme": ColorScheme.HSV2}, "cannot color NEWTON"),
    ({"color_scheme": "HSV2"}, "color_scheme must be a ColorScheme"),
])
def test_invalid_settings(changes, message):
    settings = RenderSettings(**changes)
    with pytest.raises(SettingsError, match=message):
        validate_settings(settings)


def test_newton_ignores_mandelbrot_radius():
    validate_settings(RenderSettings(escape_radius=-3.0))


def test_render_request_collects_all_problems():
    with pytest.raises(SettingsError) as exc:
        validate_render_request(RenderSettings(max_steps=0),
                                Viewport(zoom=(0.0, 1.0)), 0, 10)
    text = str(exc.value)
    assert "buffer width" in text
    assert "zoom span" in text
    assert "max_steps" in text
    assert "buffer height" not in text
