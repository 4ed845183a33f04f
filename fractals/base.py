import math
from dataclasses import dataclass
from typing import Tuple, NamedTuple
from abc import ABC, abstractmethod

import numpy as np

from utils.enums import Algorithm, ColorScheme


class IterationRecord(NamedTuple):
    """
    Result of iterating a single point.
    For escape-time fractals aux1/aux2 hold the squared real/imaginary parts
    of Z at termination; for root-convergence fractals they hold Z itself.
    n == max_steps marks an interior (non escaped / non converged) point.
    """
    n: int
    aux1: float
    aux2: float


@dataclass(frozen=True)
class Viewport:
    """
    Logical view on the complex plane: the point we look at and the
    width/height of the plane region shown.
    """
    look_at: Tuple[float, float] = (0.0, 0.0)
    zoom: Tuple[float, float] = (4 * math.pi, 3 * math.pi)


@dataclass(frozen=True)
class ViewportRanges:
    """
    Derived sampling grid for one buffer size. Zoom is the aspect
    corrected span that produced the ranges.
    """
    x_range: Tuple[float, float]
    y_range: Tuple[float, float]
    dx: float
    dy: float
    zoom: Tuple[float, float]


@dataclass(frozen=True)
class RenderSettings:
    """
    Holds the rendering settings for one render session.
    Max_steps is the iteration budget per point.
    Escape_radius is the Mandelbrot squared-magnitude bailout.
    Newton_radius is the exponent of the Newton convergence tolerance,
    10 ** -newton_radius.
    Samples controls the number of jittered samples per pixel.
    Update_interval_ms is how long the renderer may work before yielding.
    """
    max_steps: int = 100
    escape_radius: float = 10.0
    newton_radius: float = 10.0
    color_scheme: ColorScheme = ColorScheme.NEWTON_COLORFUL
    samples: int = 1
    algorithm: Algorithm = Algorithm.NEWTON
    update_interval_ms: float = 100.0

    def radius_for_algorithm(self) -> float:
        if self.algorithm == Algorithm.NEWTON:
            return self.newton_radius
        return self.escape_radius


class Fractal(ABC):
    """
    An abstract base class for fractal iteration algorithms.
    """
    name: str
    algorithm: Algorithm

    @abstractmethod
    def iterate(self, cr: float, ci: float) -> IterationRecord:
        ...

    @abstractmethod
    def iterate_points(self, cr: np.ndarray, ci: np.ndarray
                       ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Iterate every (cr[i], ci[i]) pair and return the n, aux1 and aux2
        arrays.
        """
        ...
