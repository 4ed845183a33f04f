from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

import kernel_sources.cpu.newton  # noqa: F401  (registers kernels)
from fractals.base import Fractal, IterationRecord
from kernel_sources.registry import load_kernel
from utils.enums import Algorithm


@dataclass
class NewtonFractal(Fractal):
    """
    Newton iteration for e^z - 1 starting from Z = c.
    radius is turned into the convergence tolerance 10 ** -radius, so
    larger values demand tighter convergence.
    """
    max_steps: int
    radius: float
    name: str = "newton"
    algorithm: Algorithm = Algorithm.NEWTON
    tolerance: float = field(init=False)

    def __post_init__(self):
        self.max_steps = int(self.max_steps)
        self.tolerance = 10.0 ** (-float(self.radius))
        self._point = load_kernel("CPU", self.name, "point")["func"]
        self._points = load_kernel("CPU", self.name, "points")["func"]

    def iterate(self, cr: float, ci: float) -> IterationRecord:
        n, zr, zi = self._point(float(cr), float(ci),
                                self.max_steps, self.tolerance)
        return IterationRecord(int(n), float(zr), float(zi))

    def iterate_points(self, cr: np.ndarray, ci: np.ndarray
                       ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        cr = np.ascontiguousarray(cr, dtype=np.float64)
        ci = np.ascontiguousarray(ci, dtype=np.float64)
        n = np.empty(cr.shape[0], dtype=np.int64)
        zr = np.empty(cr.shape[0], dtype=np.float64)
        zi = np.empty(cr.shape[0], dtype=np.float64)
        self._points(cr, ci, self.max_steps, self.tolerance, n, zr, zi)
        return n, zr, zi
