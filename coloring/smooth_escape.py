import math

import numpy as np

from coloring.hsv import hsv_to_rgb

INTERIOR_COLOR = (0, 0, 0, 255)

# log2 scale factors for the smooth iteration count.
LOG_BASE = 1.0 / math.log(2.0)
LOG_HALF_BASE = math.log(0.5) * 1.0 / math.log(2.0)


def smooth_color(n, tr, ti) -> np.ndarray:
    """
    Continuous iteration count from the escape count and the squared
    components of Z: 5 + n - log2(1/2) - log2(log(tr + ti)).
    """
    n = np.asarray(n, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        return 5 + n - LOG_HALF_BASE - np.log(np.log(np.asarray(tr) + np.asarray(ti))) * LOG_BASE


def _rgba(rgb: np.ndarray) -> np.ndarray:
    out = np.empty(rgb.shape[:-1] + (4,), dtype=np.float64)
    out[..., :3] = rgb
    out[..., 3] = 255.0
    return out


def _gray(values: np.ndarray) -> np.ndarray:
    return _rgba(np.repeat(values[..., None], 3, axis=-1))


def _with_interior(colors: np.ndarray, n: np.ndarray, steps: int) -> np.ndarray:
    colors[n == steps] = INTERIOR_COLOR
    return colors


def hsv1(n, tr, ti, steps):
    v = smooth_color(n, tr, ti)
    with np.errstate(invalid="ignore"):
        colors = _rgba(hsv_to_rgb(360.0 * v / steps, 1.0, 1.0))
    return _with_interior(colors, n, steps)


def hsv2(n, tr, ti, steps):
    v = smooth_color(n, tr, ti)
    with np.errstate(invalid="ignore"):
        colors = _rgba(hsv_to_rgb(360.0 * v / steps, 1.0, 10.0 * v / steps))
    return _with_interior(colors, n, steps)


def hsv3(n, tr, ti, steps):
    colors = hsv2(n, tr, ti, steps)
    colors[..., [0, 2]] = colors[..., [2, 0]]
    return colors


def grayscale(n, tr, ti, steps):
    v = smooth_color(n, tr, ti)
    with np.errstate(invalid="ignore"):
        g = np.clip(np.floor(512.0 * v / steps), 0, 255)
    return _with_interior(_gray(g), n, steps)


def grayscale2(n, tr, ti, steps):
    """
    Grayscale, but interior points are shaded by their final magnitude
    instead of being flattened to the interior color.
    """
    colors = grayscale(n, tr, ti, steps)
    interior = n == steps
    if np.any(interior):
        mag = np.sqrt(np.asarray(tr)[interior] + np.asarray(ti)[interior])
        with np.errstate(invalid="ignore"):
            c = np.clip(255 - np.fmod(np.floor(255.0 * mag), 255), 0, 255)
        colors[interior] = _gray(c)
    return colors
