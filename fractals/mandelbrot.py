from dataclasses import dataclass
from typing import Tuple

import numpy as np

import kernel_sources.cpu.mandelbrot  # noqa: F401  (registers kernels)
from fractals.base import Fractal, IterationRecord
from kernel_sources.registry import load_kernel
from utils.enums import Algorithm


@dataclass
class MandelbrotFractal(Fractal):
    """
    Escape-time iteration Z <- Z^2 + c starting from Z = 0.
    escape_radius is compared directly against |Z|^2.
    """
    max_steps: int
    escape_radius: float
    name: str = "mandelbrot"
    algorithm: Algorithm = Algorithm.MANDELBROT

    def __post_init__(self):
        self.max_steps = int(self.max_steps)
        self.escape_radius = float(self.escape_radius)
        self._point = load_kernel("CPU", self.name, "point")["func"]
        self._points = load_kernel("CPU", self.name, "points")["func"]

    def iterate(self, cr: float, ci: float) -> IterationRecord:
        n, tr, ti = self._point(float(cr), float(ci),
                                self.max_steps, self.escape_radius)
        return IterationRecord(int(n), float(tr), float(ti))

    def iterate_points(self, cr: np.ndarray, ci: np.ndarray
                       ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        cr = np.ascontiguousarray(cr, dtype=np.float64)
        ci = np.ascontiguousarray(ci, dtype=np.float64)
        n = np.empty(cr.shape[0], dtype=np.int64)
        tr = np.empty(cr.shape[0], dtype=np.float64)
        ti = np.empty(cr.shape[0], dtype=np.float64)
        self._points(cr, ci, self.max_steps, self.escape_radius, n, tr, ti)
        return n, tr, ti
