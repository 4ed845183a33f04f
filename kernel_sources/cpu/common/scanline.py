from numba import njit

from kernel_sources.registry import register_kernel


ARG_SCALARS = ["start", "step"]
ARG_BUFFERS_OUT = ["coords"]

ARG_ORDER = ARG_SCALARS + ARG_BUFFERS_OUT


@njit(cache=True)
def _scanline_coords(start, step, coords):
    # Sequential accumulation, one step per pixel column.
    c = start
    for x in range(coords.shape[0]):
        coords[x] = c
        c += step


register_kernel(
    fractal="common",
    op_name="scanline",
    backend="CPU",
    func=_scanline_coords,
    arg_order=ARG_ORDER,
    scalars=ARG_SCALARS,
    produces=ARG_BUFFERS_OUT,
)
