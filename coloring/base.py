from typing import Callable, Dict, Tuple

import numpy as np

from coloring.newton import newton_colorful, newton_grayscale
from coloring.smooth_escape import grayscale, grayscale2, hsv1, hsv2, hsv3
from fractals.base import IterationRecord
from utils.enums import ColorScheme

ColorGenerator = Callable[[np.ndarray, np.ndarray, np.ndarray, int], np.ndarray]

COLOR_GENERATORS: Dict[ColorScheme, ColorGenerator] = {
    ColorScheme.HSV1: hsv1,
    ColorScheme.HSV2: hsv2,
    ColorScheme.HSV3: hsv3,
    ColorScheme.GRAYSCALE: grayscale,
    ColorScheme.GRAYSCALE2: grayscale2,
    ColorScheme.NEWTON_GRAYSCALE: newton_grayscale,
    ColorScheme.NEWTON_COLORFUL: newton_colorful,
}


def parse_color_scheme(name: str) -> ColorScheme:
    """Look a scheme up by its enum name, case-insensitively."""
    try:
        return ColorScheme[name.strip().upper()]
    except KeyError as e:
        choices = ", ".join(s.name for s in ColorScheme)
        raise ValueError(f"Unknown color scheme '{name}' (expected one of {choices})") from e


def colorize(scheme: ColorScheme, n: np.ndarray, aux1: np.ndarray,
             aux2: np.ndarray, max_steps: int) -> np.ndarray:
    """
    Colors a batch of iteration records. Returns an (N, 4) float array with
    channels clipped to [0, 255] (NaN becomes 0) but not rounded.
    """
    n = np.asarray(n)
    colors = COLOR_GENERATORS[scheme](n, np.asarray(aux1, dtype=np.float64),
                                      np.asarray(aux2, dtype=np.float64), max_steps)
    colors = np.nan_to_num(colors, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(colors, 0.0, 255.0)


def color_of(scheme: ColorScheme, record: IterationRecord,
             max_steps: int) -> Tuple[float, float, float, float]:
    rgba = colorize(scheme, np.array([record.n]), np.array([record.aux1]),
                    np.array([record.aux2]), max_steps)[0]
    return tuple(float(c) for c in rgba)
