import pytest

from fractals.base import RenderSettings, Viewport
from rendering.buffer import PixelBuffer
from rendering.progressive import ProgressiveRender
from rendering.session import RenderSession, SessionCounter
from utils.coords import compute_ranges
from utils.enums import Algorithm, ColorScheme


class FakeClock:
    """Advances by a fixed step every time it is read."""

    def __init__(self, step: float):
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def mandelbrot_settings():
    return RenderSettings(max_steps=40, escape_radius=4.0,
                          color_scheme=ColorScheme.HSV1,
                          algorithm=Algorithm.MANDELBROT,
                          update_interval_ms=0)


@pytest.fixture
def newton_settings():
    return RenderSettings(max_steps=40, newton_radius=6.0,
                          color_scheme=ColorScheme.NEWTON_COLORFUL,
                          algorithm=Algorithm.NEWTON,
                          update_interval_ms=0)


def open_session(counter: SessionCounter, settings: RenderSettings,
                 width: int, height: int, viewport: Viewport = None) -> RenderSession:
    viewport = viewport or Viewport(look_at=(-0.5, 0.0), zoom=(3.0, 3.0))
    ranges = compute_ranges(viewport.look_at, viewport.zoom, width, height)
    return RenderSession(id=counter.advance(), viewport=viewport, ranges=ranges,
                         settings=settings, width=width, height=height)


def render_alone(settings: RenderSettings, width: int, height: int,
                 viewport: Viewport = None) -> PixelBuffer:
    counter = SessionCounter()
    buf = PixelBuffer(width, height)
    render = ProgressiveRender(open_session(counter, settings, width, height, viewport),
                               buf, counter)
    for _ in render.run():
        pass
    return buf
