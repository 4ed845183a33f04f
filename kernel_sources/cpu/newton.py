import math

from numba import njit

from kernel_sources.registry import register_kernel


ARG_SCALARS = ["max_steps", "tolerance"]
ARG_BUFFERS_IN = ["cr", "ci"]
ARG_BUFFERS_OUT = ["n_out", "zr_out", "zi_out"]

ARG_ORDER = ARG_BUFFERS_IN + ARG_SCALARS + ARG_BUFFERS_OUT


@njit(cache=True)
def _newton_point(cr, ci, max_steps, tolerance):
    # Root finding for f(z) = e^z - 1; roots sit at 2*pi*k*i.
    zr = cr
    zi = ci
    fr2 = 0.0
    fi2 = 0.0
    n = 0

    while True:
        modulus = math.exp(zr)
        cosine = math.cos(zi)
        sine = math.sin(zi)

        real_f = -1.0 + modulus * cosine
        imag_f = modulus * sine

        modulus_inv = math.exp(-zr)
        zr = zr - 1.0 + modulus_inv * cosine
        zi = zi - modulus_inv * sine

        fr2 = real_f * real_f
        fi2 = imag_f * imag_f
        n += 1

        if not (n < max_steps and fr2 + fi2 >= tolerance):
            break

    if not (fr2 + fi2 < tolerance):
        n = max_steps

    return n, zr, zi


@njit(cache=True)
def _newton_points(cr, ci, max_steps, tolerance, n_out, zr_out, zi_out):
    for i in range(cr.shape[0]):
        n, zr, zi = _newton_point(cr[i], ci[i], max_steps, tolerance)
        n_out[i] = n
        zr_out[i] = zr
        zi_out[i] = zi


register_kernel(
    fractal="newton",
    op_name="point",
    backend="CPU",
    func=_newton_point,
    arg_order=["cr", "ci"] + ARG_SCALARS,
    scalars=ARG_SCALARS,
    produces=[],
)

register_kernel(
    fractal="newton",
    op_name="points",
    backend="CPU",
    func=_newton_points,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
)
