import math
from typing import Tuple

from fractals.base import Viewport, ViewportRanges

# Relative tolerance under which plane and screen ratios count as equal.
ASPECT_RTOL = 1e-12


def compute_ranges(look_at: Tuple[float, float], zoom: Tuple[float, float],
                   width: int, height: int) -> ViewportRanges:
    """
    Map a look-at point and zoom span onto a width x height pixel grid.
    The span is widened on one axis so that one pixel covers the same plane
    distance horizontally and vertically. Steps keep a half pixel offset so
    samples sit inside their cells.
    """
    zoom_w, zoom_h = float(zoom[0]), float(zoom[1])

    ratio = abs(zoom_w) / abs(zoom_h)
    sratio = width / height
    if not math.isclose(sratio, ratio, rel_tol=ASPECT_RTOL):
        if sratio > ratio:
            zoom_w *= sratio / ratio
        else:
            zoom_h *= ratio / sratio

    cx, cy = float(look_at[0]), float(look_at[1])
    x_range = (cx - zoom_w / 2, cx + zoom_w / 2)
    y_range = (cy - zoom_h / 2, cy + zoom_h / 2)

    dx = (x_range[1] - x_range[0]) / (0.5 + (width - 1))
    dy = (y_range[1] - y_range[0]) / (0.5 + (height - 1))

    return ViewportRanges(x_range=x_range, y_range=y_range,
                          dx=dx, dy=dy, zoom=(zoom_w, zoom_h))


def pixel_to_plane(px: float, py: float, ranges: ViewportRanges) -> Tuple[float, float]:
    return ranges.x_range[0] + px * ranges.dx, ranges.y_range[0] + py * ranges.dy


def zoom_at(px: float, py: float, ranges: ViewportRanges,
            factor: float = 0.5) -> Viewport:
    """
    Click zoom: look at the clicked pixel and scale the span by factor
    (0.5 zooms in, 2.0 zooms out).
    """
    look_at = pixel_to_plane(px, py, ranges)
    zoom = (ranges.zoom[0] * factor, ranges.zoom[1] * factor)
    return Viewport(look_at=look_at, zoom=zoom)


def zoom_to_box(box: Tuple[float, float, float, float], ranges: ViewportRanges,
                width: int, height: int) -> Viewport:
    """
    Box zoom: look at the center of the (x0, y0, x1, y1) pixel box and shrink
    the span by the larger of its width/height fractions so the whole box
    stays visible at the current aspect ratio.
    """
    x0, y0, x1, y1 = box
    cx = min(x0, x1) + abs(x0 - x1) / 2.0
    cy = min(y0, y1) + abs(y0 - y1) / 2.0
    look_at = pixel_to_plane(cx, cy, ranges)

    xf = abs(x0 - x1) / width
    yf = abs(y0 - y1) / height
    f = max(xf, yf)
    return Viewport(look_at=look_at,
                    zoom=(ranges.zoom[0] * f, ranges.zoom[1] * f))
