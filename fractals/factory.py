from fractals.base import Fractal, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from fractals.newton import NewtonFractal
from utils.enums import Algorithm


def create_fractal(settings: RenderSettings) -> Fractal:
    """
    Build the iteration algorithm selected by the settings, reading the
    radius field that belongs to it.
    """
    if settings.algorithm == Algorithm.MANDELBROT:
        return MandelbrotFractal(max_steps=settings.max_steps,
                                 escape_radius=settings.escape_radius)
    if settings.algorithm == Algorithm.NEWTON:
        return NewtonFractal(max_steps=settings.max_steps,
                             radius=settings.newton_radius)
    raise ValueError(f"Unknown algorithm: {settings.algorithm!r}")
