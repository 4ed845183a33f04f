import math

import numpy as np
import pytest

from fractals.base import RenderSettings
from fractals.factory import create_fractal
from fractals.mandelbrot import MandelbrotFractal
from fractals.newton import NewtonFractal
from kernel_sources.registry import list_kernels, load_kernel
from utils.enums import Algorithm, ColorScheme


@pytest.mark.parametrize("escape_radius", [4.0, 10.0, 100.0])
def test_origin_is_interior(escape_radius):
    fractal = MandelbrotFractal(max_steps=64, escape_radius=escape_radius)
    assert fractal.iterate(0.0, 0.0).n == 64


def test_period_two_point_is_interior():
    fractal = MandelbrotFractal(max_steps=50, escape_radius=4.0)
    rec = fractal.iterate(-1.0, 0.0)
    assert rec.n == 50


def test_point_outside_escapes_quickly():
    fractal = MandelbrotFractal(max_steps=50, escape_radius=4.0)
    rec = fractal.iterate(1.0, 1.0)
    # z1 = 1+i (|z|^2 = 2), z2 = 1+3i (|z|^2 = 10)
    assert rec.n == 2
    assert rec.n <= 5


def test_mandelbrot_returns_squared_terms_after_correction_steps():
    fractal = MandelbrotFractal(max_steps=50, escape_radius=4.0)
    rec = fractal.iterate(1.0, 1.0)

    zr, zi = 1.0, 3.0
    for _ in range(4):
        zr, zi = zr * zr - zi * zi + 1.0, 2 * zr * zi + 1.0
    assert rec.aux1 == pytest.approx(zr * zr)
    assert rec.aux2 == pytest.approx(zi * zi)


def test_iteration_count_bounds_on_grid():
    fractal = MandelbrotFractal(max_steps=30, escape_radius=4.0)
    xs, ys = np.meshgrid(np.linspace(-2.5, 1.5, 41), np.linspace(-1.5, 1.5, 31))
    n, tr, ti = fractal.iterate_points(xs.ravel(), ys.ravel())
    assert n.min() >= 0
    assert n.max() <= 30
    assert np.any(n == 30)
    assert np.any(n < 30)


def test_batch_matches_single_point():
    fractal = MandelbrotFractal(max_steps=80, escape_radius=10.0)
    cr = np.array([-0.75, 0.3, -1.9, 0.26])
    ci = np.array([0.1, 0.5, 0.0, 0.0])
    n, tr, ti = fractal.iterate_points(cr, ci)
    for i in range(len(cr)):
        rec = fractal.iterate(cr[i], ci[i])
        assert (n[i], tr[i], ti[i]) == (rec.n, rec.aux1, rec.aux2)


def test_newton_tolerance_from_radius():
    assert NewtonFractal(max_steps=10, radius=10).tolerance == pytest.approx(1e-10)
    assert NewtonFractal(max_steps=10, radius=2).tolerance == pytest.approx(1e-2)


def test_newton_converges_at_root():
    rec = NewtonFractal(max_steps=20, radius=10).iterate(0.0, 0.0)
    assert rec.n == 1
    assert (rec.aux1, rec.aux2) == (0.0, 0.0)


def test_newton_returns_raw_z_near_branch():
    rec = NewtonFractal(max_steps=100, radius=10).iterate(0.3, 2 * math.pi + 0.2)
    assert rec.n < 100
    assert rec.aux1 == pytest.approx(0.0, abs=1e-4)
    assert rec.aux2 == pytest.approx(2 * math.pi, abs=1e-4)


def test_newton_step_limit_marks_non_convergence():
    rec = NewtonFractal(max_steps=5, radius=10).iterate(30.0, 0.0)
    assert rec.n == 5
    assert NewtonFractal(max_steps=200, radius=10).iterate(30.0, 0.0).n < 200


def test_factory_reads_algorithm_specific_radius():
    st = RenderSettings(max_steps=12, escape_radius=7.0, newton_radius=3.0,
                        algorithm=Algorithm.MANDELBROT, color_scheme=ColorScheme.HSV1)
    mandel = create_fractal(st)
    assert isinstance(mandel, MandelbrotFractal)
    assert mandel.escape_radius == 7.0

    newton = create_fractal(RenderSettings(max_steps=12, escape_radius=7.0, newton_radius=3.0))
    assert isinstance(newton, NewtonFractal)
    assert newton.tolerance == pytest.approx(1e-3)


def test_kernels_are_registered():
    assert list_kernels("mandelbrot", "cpu") == ["point", "points"]
    assert list_kernels("newton", "CPU") == ["point", "points"]
    with pytest.raises(KeyError):
        load_kernel("CUDA", "mandelbrot", "points")


def test_kernel_package_exports():
    import kernel_sources
    import kernel_sources.cpu.common.scanline  # noqa: F401
    assert sorted(kernel_sources.__all__) == ["list_kernels", "load_kernel", "register_kernel"]
    assert kernel_sources.load_kernel("CPU", "common", "scanline")["func"] is not None
