from __future__ import annotations

import numpy as np

from coloring.base import colorize
from fractals.base import Fractal, RenderSettings, ViewportRanges
from kernel_sources.registry import load_kernel
import kernel_sources.cpu.common.scanline  # noqa: F401  (registers kernels)


class BaseRenderEngine:
    """
    Base class for scanline engines.

    Responsibilities:
      - Turn one row of the viewport into plane coordinates,
      - Ask the fractal for iteration records,
      - Color them with the configured scheme.

    Engines never touch the pixel buffer; ProgressiveRender commits rows.
    """

    def __init__(self, fractal: Fractal, settings: RenderSettings,
                 ranges: ViewportRanges, width: int) -> None:
        self.fractal = fractal
        self.settings = settings
        self.ranges = ranges
        self.width = int(width)
        self._coords = load_kernel("CPU", "common", "scanline")["func"]

    def row_coords(self) -> np.ndarray:
        """Real-axis value of every pixel column, stepping dx from x_min."""
        cr = np.empty(self.width, dtype=np.float64)
        self._coords(float(self.ranges.x_range[0]), float(self.ranges.dx), cr)
        return cr

    def colorize(self, n: np.ndarray, aux1: np.ndarray, aux2: np.ndarray) -> np.ndarray:
        return colorize(self.settings.color_scheme, n, aux1, aux2,
                        self.settings.max_steps)

    def render_line(self, ci: float) -> np.ndarray:
        """
        Compute one scanline at imaginary value ci.
        Must return a (width, 4) float RGBA array.
        """
        raise NotImplementedError("BaseRenderEngine.render_line() must be implemented by subclasses.")
