from numba import njit

from kernel_sources.registry import register_kernel


ARG_SCALARS = ["max_steps", "escape_radius"]
ARG_BUFFERS_IN = ["cr", "ci"]
ARG_BUFFERS_OUT = ["n_out", "tr_out", "ti_out"]

ARG_ORDER = ARG_BUFFERS_IN + ARG_SCALARS + ARG_BUFFERS_OUT

# Extra iterations after escape to shrink the error of the smoothing term,
# see http://linas.org/art-gallery/escape/escape.html
CORRECTION_STEPS = 4


@njit(cache=True)
def _mandelbrot_point(cr, ci, max_steps, escape_radius):
    zr = 0.0
    zi = 0.0
    tr = 0.0
    ti = 0.0
    n = 0

    while n < max_steps and tr + ti <= escape_radius:
        zi = 2.0 * zr * zi + ci
        zr = tr - ti + cr
        tr = zr * zr
        ti = zi * zi
        n += 1

    for _ in range(CORRECTION_STEPS):
        zi = 2.0 * zr * zi + ci
        zr = tr - ti + cr
        tr = zr * zr
        ti = zi * zi

    return n, tr, ti


@njit(cache=True)
def _mandelbrot_points(cr, ci, max_steps, escape_radius,
                       n_out, tr_out, ti_out):
    for i in range(cr.shape[0]):
        n, tr, ti = _mandelbrot_point(cr[i], ci[i], max_steps, escape_radius)
        n_out[i] = n
        tr_out[i] = tr
        ti_out[i] = ti


register_kernel(
    fractal="mandelbrot",
    op_name="point",
    backend="CPU",
    func=_mandelbrot_point,
    arg_order=["cr", "ci"] + ARG_SCALARS,
    scalars=ARG_SCALARS,
    produces=[],
)

register_kernel(
    fractal="mandelbrot",
    op_name="points",
    backend="CPU",
    func=_mandelbrot_points,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
)
