from __future__ import annotations
import math
from typing import List

from fractals.base import RenderSettings, Viewport
from utils.enums import Algorithm, ColorScheme


class SettingsError(Exception):
    """Aggregated render precondition error(s)."""


# Which iteration family each color scheme knows how to read.
SCHEME_ALGORITHMS = {
    ColorScheme.HSV1: Algorithm.MANDELBROT,
    ColorScheme.HSV2: Algorithm.MANDELBROT,
    ColorScheme.HSV3: Algorithm.MANDELBROT,
    ColorScheme.GRAYSCALE: Algorithm.MANDELBROT,
    ColorScheme.GRAYSCALE2: Algorithm.MANDELBROT,
    ColorScheme.NEWTON_GRAYSCALE: Algorithm.NEWTON,
    ColorScheme.NEWTON_COLORFUL: Algorithm.NEWTON,
}


def _is_positive(value) -> bool:
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def _is_finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def _is_non_negative(value) -> bool:
    try:
        return math.isfinite(value) and value >= 0
    except TypeError:
        return False


def validate_settings(st: RenderSettings) -> None:
    """
    Validates a RenderSettings record. Raises SettingsError on failure.
    """
    errors: List[str] = []

    if not isinstance(st.max_steps, int) or isinstance(st.max_steps, bool) or st.max_steps < 1:
        errors.append(f"max_steps must be an integer >= 1, got {st.max_steps!r}.")
    if not isinstance(st.samples, int) or isinstance(st.samples, bool) or st.samples < 1:
        errors.append(f"samples must be an integer >= 1, got {st.samples!r}.")
    if not isinstance(st.algorithm, Algorithm):
        errors.append(f"algorithm must be an Algorithm, got {st.algorithm!r}.")
    if not isinstance(st.color_scheme, ColorScheme):
        errors.append(f"color_scheme must be a ColorScheme, got {st.color_scheme!r}.")
    elif isinstance(st.algorithm, Algorithm) and SCHEME_ALGORITHMS[st.color_scheme] != st.algorithm:
        errors.append(f"color_scheme {st.color_scheme.name} cannot color "
                      f"{st.algorithm.name} iterations.")
    if st.algorithm == Algorithm.MANDELBROT and not _is_positive(st.escape_radius):
        errors.append(f"escape_radius must be > 0, got {st.escape_radius!r}.")
    if st.algorithm == Algorithm.NEWTON and not _is_finite(st.newton_radius):
        errors.append(f"newton_radius must be a finite number, got {st.newton_radius!r}.")
    if not _is_non_negative(st.update_interval_ms):
        errors.append(f"update_interval_ms must be >= 0, got {st.update_interval_ms!r}.")

    if errors:
        raise SettingsError("RenderSettings validation failed:\n- " + "\n- ".join(errors))


def validate_render_request(st: RenderSettings, vp: Viewport, width: int, height: int) -> None:
    """
    Validates everything a render session depends on before it starts.
    Raises SettingsError listing every problem found.
    """
    errors: List[str] = []

    for label, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            errors.append(f"buffer {label} must be an integer >= 1, got {value!r}.")

    zw, zh = vp.zoom
    if not _is_positive(zw) or not _is_positive(zh):
        errors.append(f"zoom span must be positive on both axes, got {vp.zoom!r}.")
    if not all(_is_finite(c) for c in vp.look_at):
        errors.append(f"look_at must be finite, got {vp.look_at!r}.")

    try:
        validate_settings(st)
    except SettingsError as e:
        errors.extend(line[2:] for line in str(e).splitlines()[1:])

    if errors:
        raise SettingsError("Render request validation failed:\n- " + "\n- ".join(errors))
