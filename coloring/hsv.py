import numpy as np


def hsv_to_rgb(h, s, v) -> np.ndarray:
    """
    Converts hue-saturation-value to RGB.

    Parameters:
        h: Hue in degrees, [0, 360). Scalars or arrays.
        s: Saturation, [0.0, 1.0].
        v: Value, [0.0, 1.0]. Anything above 1.0 is treated as 1.0.

    Returns:
        np.ndarray: Array of shape (..., 3) holding unrounded RGB floats in
        [0, 255]. Hues outside [0, 360) keep only the grey offset.
    """
    h, s, v = np.broadcast_arrays(np.asarray(h, dtype=np.float64),
                                  np.asarray(s, dtype=np.float64),
                                  np.asarray(v, dtype=np.float64))
    v = np.minimum(v, 1.0)
    hp = h / 60.0
    c = v * s
    x = c * (1 - np.abs(np.fmod(hp, 2) - 1))
    zero = np.zeros_like(c)

    sectors = [(0 <= hp) & (hp < 1), (1 <= hp) & (hp < 2), (2 <= hp) & (hp < 3),
               (3 <= hp) & (hp < 4), (4 <= hp) & (hp < 5), (5 <= hp) & (hp < 6)]
    r = np.select(sectors, [c, x, zero, zero, x, c], default=0.0)
    g = np.select(sectors, [x, c, c, x, zero, zero], default=0.0)
    b = np.select(sectors, [zero, zero, x, c, c, x], default=0.0)

    m = v - c
    return np.stack([r + m, g + m, b + m], axis=-1) * 255
