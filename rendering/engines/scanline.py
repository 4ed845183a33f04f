from __future__ import annotations

from typing import Optional

import numpy as np

from fractals.base import Fractal, RenderSettings, ViewportRanges
from rendering.engines.base import BaseRenderEngine


class ScanlineEngine(BaseRenderEngine):
    """
    One sample per pixel, taken at the pixel's grid coordinate.
    """

    def render_line(self, ci: float) -> np.ndarray:
        cr = self.row_coords()
        n, aux1, aux2 = self.fractal.iterate_points(cr, np.full(self.width, ci))
        return self.colorize(n, aux1, aux2)


class SupersampledEngine(BaseRenderEngine):
    """
    Several randomly jittered samples per pixel, averaged per channel.
    Each sample moves back by half of a uniform offset in [0, dx) x [0, dy).
    """

    def __init__(self, fractal: Fractal, settings: RenderSettings,
                 ranges: ViewportRanges, width: int,
                 rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(fractal, settings, ranges, width)
        self.rng = rng if rng is not None else np.random.default_rng()

    def render_line(self, ci: float) -> np.ndarray:
        cr = self.row_coords()
        samples = self.settings.samples
        acc = np.zeros((self.width, 4), dtype=np.float64)

        for _ in range(samples):
            rx = self.rng.random(self.width) * self.ranges.dx
            ry = self.rng.random(self.width) * self.ranges.dy
            n, aux1, aux2 = self.fractal.iterate_points(cr - rx / 2, ci - ry / 2)
            acc += self.colorize(n, aux1, aux2)

        acc /= samples
        acc[:, 3] = 255.0
        return acc


def create_engine(fractal: Fractal, settings: RenderSettings,
                  ranges: ViewportRanges, width: int,
                  rng: Optional[np.random.Generator] = None) -> BaseRenderEngine:
    if settings.samples > 1:
        return SupersampledEngine(fractal, settings, ranges, width, rng=rng)
    return ScanlineEngine(fractal, settings, ranges, width)
