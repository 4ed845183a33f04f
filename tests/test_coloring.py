import math

import numpy as np
import pytest

from coloring.base import COLOR_GENERATORS, color_of, colorize, parse_color_scheme
from coloring.hsv import hsv_to_rgb
from coloring.newton import COLORFUL_FACTOR
from coloring.smooth_escape import INTERIOR_COLOR, LOG_BASE, LOG_HALF_BASE, smooth_color
from fractals.base import IterationRecord
from fractals.mandelbrot import MandelbrotFractal
from fractals.newton import NewtonFractal
from utils.enums import ColorScheme

MANDELBROT_SCHEMES = [ColorScheme.HSV1, ColorScheme.HSV2, ColorScheme.HSV3,
                      ColorScheme.GRAYSCALE, ColorScheme.GRAYSCALE2]
NEWTON_SCHEMES = [ColorScheme.NEWTON_GRAYSCALE, ColorScheme.NEWTON_COLORFUL]


@pytest.mark.parametrize("h, expected", [
    (0, (255, 0, 0)),
    (120, (0, 255, 0)),
    (240, (0, 0, 255)),
])
def test_hsv_primaries(h, expected):
    np.testing.assert_allclose(hsv_to_rgb(h, 1.0, 1.0), expected)


def test_hsv_clamps_value_and_keeps_floats():
    np.testing.assert_allclose(hsv_to_rgb(60, 1.0, 5.0), (255, 255, 0))
    rgb = hsv_to_rgb(30, 1.0, 1.0)
    assert rgb[1] == pytest.approx(127.5)


def test_hsv_out_of_range_hue_is_grey_offset_only():
    np.testing.assert_allclose(hsv_to_rgb(400, 1.0, 1.0), (0, 0, 0))
    np.testing.assert_allclose(hsv_to_rgb(400, 0.5, 1.0), (127.5, 127.5, 127.5))


def test_every_scheme_has_a_generator():
    assert set(COLOR_GENERATORS) == set(ColorScheme)


def test_smooth_color_closed_form():
    n, tr, ti = 7, 30.0, 20.0
    expected = 5 + n - LOG_HALF_BASE - math.log(math.log(tr + ti)) * LOG_BASE
    assert float(smooth_color(n, tr, ti)) == pytest.approx(expected, rel=1e-15)


@pytest.mark.parametrize("scheme", MANDELBROT_SCHEMES[:4])
def test_mandelbrot_interior_is_black(scheme):
    rec = IterationRecord(50, 0.1, 0.2)
    assert color_of(scheme, rec, 50) == INTERIOR_COLOR


@pytest.mark.parametrize("scheme", NEWTON_SCHEMES)
def test_newton_interior_is_black(scheme):
    assert color_of(scheme, IterationRecord(50, 1.0, 3.0), 50) == INTERIOR_COLOR


def test_grayscale2_shades_interior_by_magnitude():
    # sqrt(0.25) = 0.5 -> floor(127.5) = 127 -> 255 - 127
    assert color_of(ColorScheme.GRAYSCALE2, IterationRecord(50, 0.125, 0.125), 50) == (128, 128, 128, 255)
    a = color_of(ColorScheme.GRAYSCALE2, IterationRecord(50, 0.01, 0.0), 50)
    b = color_of(ColorScheme.GRAYSCALE2, IterationRecord(50, 0.01, 0.0), 50)
    c = color_of(ColorScheme.GRAYSCALE2, IterationRecord(50, 0.5, 0.5), 50)
    assert a == b
    assert a != c


def test_grayscale2_matches_grayscale_outside():
    rec = IterationRecord(9, 40.0, 10.0)
    assert color_of(ColorScheme.GRAYSCALE2, rec, 50) == color_of(ColorScheme.GRAYSCALE, rec, 50)


def test_grayscale_value():
    rec = IterationRecord(9, 40.0, 10.0)
    v = 5 + 9 - LOG_HALF_BASE - math.log(math.log(50.0)) * LOG_BASE
    g = min(max(math.floor(512.0 * v / 50), 0), 255)
    assert color_of(ColorScheme.GRAYSCALE, rec, 50) == (g, g, g, 255)


def test_hsv3_swaps_red_and_blue_of_hsv2():
    rec = IterationRecord(12, 30.0, 5.0)
    r, g, b, a = color_of(ColorScheme.HSV2, rec, 100)
    assert color_of(ColorScheme.HSV3, rec, 100) == (b, g, r, a)


def test_hsv1_hue_follows_smooth_value():
    rec = IterationRecord(12, 30.0, 5.0)
    v = float(smooth_color(12, 30.0, 5.0))
    expected = hsv_to_rgb(360.0 * v / 100, 1.0, 1.0)
    np.testing.assert_allclose(color_of(ColorScheme.HSV1, rec, 100)[:3], expected)


def test_newton_grayscale_scales_with_remaining_steps():
    assert color_of(ColorScheme.NEWTON_GRAYSCALE, IterationRecord(25, 0.0, 0.0), 50) == (127.5, 127.5, 127.5, 255)
    assert color_of(ColorScheme.NEWTON_GRAYSCALE, IterationRecord(0, 0.0, 0.0), 50) == (255, 255, 255, 255)


def test_newton_colorful_root_index_zero_is_black():
    assert color_of(ColorScheme.NEWTON_COLORFUL, IterationRecord(3, 0.0, 0.1), 50) == (0, 0, 0, 255)


def test_newton_colorful_negative_branch_wraps_channels():
    r, g, b, a = color_of(ColorScheme.NEWTON_COLORFUL, IterationRecord(0, 0.0, -2 * math.pi), 50)
    assert r == pytest.approx(255 - math.fmod(COLORFUL_FACTOR, 255))
    assert g == pytest.approx(255 - math.fmod(COLORFUL_FACTOR / 255, 255))
    assert b == pytest.approx(255 - math.fmod(COLORFUL_FACTOR / 255 / 255, 255))
    assert a == 255


def test_newton_colorful_scaled_by_remaining_steps():
    full = color_of(ColorScheme.NEWTON_COLORFUL, IterationRecord(0, 0.0, 2 * math.pi), 40)
    half = color_of(ColorScheme.NEWTON_COLORFUL, IterationRecord(20, 0.0, 2 * math.pi), 40)
    np.testing.assert_allclose(half[:3], np.array(full[:3]) / 2)


def _assert_channels_in_range(colors):
    assert np.all(colors >= 0)
    assert np.all(colors <= 255)
    assert np.all(colors[:, 3] == 255)


@pytest.mark.parametrize("scheme", MANDELBROT_SCHEMES)
@pytest.mark.parametrize("escape_radius", [4.0, 1e3])
def test_mandelbrot_schemes_stay_in_range(scheme, escape_radius):
    fractal = MandelbrotFractal(max_steps=60, escape_radius=escape_radius)
    xs, ys = np.meshgrid(np.linspace(-2.5, 1.5, 60), np.linspace(-2.0, 2.0, 40))
    n, tr, ti = fractal.iterate_points(xs.ravel(), ys.ravel())
    _assert_channels_in_range(colorize(scheme, n, tr, ti, 60))


@pytest.mark.parametrize("scheme", NEWTON_SCHEMES)
def test_newton_schemes_stay_in_range(scheme):
    fractal = NewtonFractal(max_steps=60, radius=8)
    xs, ys = np.meshgrid(np.linspace(-6, 6, 50), np.linspace(-20, 20, 50))
    n, zr, zi = fractal.iterate_points(xs.ravel(), ys.ravel())
    _assert_channels_in_range(colorize(scheme, n, zr, zi, 60))


def test_parse_color_scheme():
    assert parse_color_scheme("hsv2") is ColorScheme.HSV2
    assert parse_color_scheme(" Newton_Colorful ") is ColorScheme.NEWTON_COLORFUL
    with pytest.raises(ValueError, match="Unknown color scheme"):
        parse_color_scheme("rainbow")
