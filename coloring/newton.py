import math

import numpy as np

from coloring.smooth_escape import INTERIOR_COLOR

# Multiplier spreading neighbouring root indices across the RGB cube.
COLORFUL_FACTOR = 6408327


def newton_grayscale(n, zr, zi, steps):
    gray = 255.0 * ((steps - np.asarray(n, dtype=np.float64)) / (steps * 1.0))
    colors = np.empty(gray.shape + (4,), dtype=np.float64)
    colors[..., :3] = gray[..., None]
    colors[..., 3] = 255.0
    colors[n == steps] = INTERIOR_COLOR
    return colors


def newton_colorful(n, zr, zi, steps, factor: int = COLORFUL_FACTOR):
    """
    Colors each point by the root it converged to. The root index is
    round(Im(Z) / 2pi), used as-is without folding it into a canonical
    range, then spread over three channels base 255.
    """
    # Half-up rounding, not numpy's half-to-even.
    rounded = np.floor(np.asarray(zi, dtype=np.float64) / (2 * math.pi) + 0.5)
    product = rounded * factor

    channels = []
    for _ in range(3):
        channels.append(np.fmod(product, 255))
        product = product / 255
    rgb = np.stack(channels, axis=-1)
    rgb = np.where(rgb < 0, rgb + 255, rgb)

    scale = (steps - np.asarray(n, dtype=np.float64)) / (steps * 1.0)
    colors = np.empty(rgb.shape[:-1] + (4,), dtype=np.float64)
    colors[..., :3] = rgb * scale[..., None]
    colors[..., 3] = 255.0
    colors[n == steps] = INTERIOR_COLOR
    return colors
