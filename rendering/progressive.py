from __future__ import annotations

import logging
import time
from typing import Callable, Generator, Optional

from fractals.base import Fractal
from fractals.factory import create_fractal
from rendering.buffer import HIGHLIGHT_COLOR, PixelBuffer
from rendering.engines.base import BaseRenderEngine
from rendering.engines.scanline import create_engine
from rendering.events import ProgressEvent, ScanlineEvent
from rendering.progress import format_elapsed, measure_throughput
from rendering.session import RenderSession, SessionCounter
from utils.enums import SessionState

logger = logging.getLogger(__name__)


class ProgressiveRender:
    """
    Renders one session top to bottom, a scanline at a time.

    run() is a generator: it suspends only between scanlines, whenever more
    than update_interval_ms passed since the last suspension. Before every
    scanline it checks that its session id is still the live one and that
    the buffer still has the session's dimensions; otherwise it stops
    without touching the buffer again.
    """

    def __init__(
        self,
        session: RenderSession,
        buffer: PixelBuffer,
        counter: SessionCounter,
        *,
        fractal: Optional[Fractal] = None,
        engine: Optional[BaseRenderEngine] = None,
        rng=None,
        on_scanline: Optional[Callable[[ScanlineEvent], None]] = None,
        on_progress: Optional[Callable[[ProgressEvent], None]] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.session = session
        self.buffer = buffer
        self.counter = counter
        self.fractal = fractal or create_fractal(session.settings)
        self.engine = engine or create_engine(self.fractal, session.settings,
                                              session.ranges, session.width, rng=rng)
        self.on_scanline = on_scanline
        self.on_progress = on_progress
        self.clock = clock

        self.state = SessionState.IDLE
        self.rows_committed = 0
        self.pixels = 0
        self.elapsed = 0.0

    def is_current(self) -> bool:
        return (self.counter.is_current(self.session.id) and
                self.buffer.size == (self.session.width, self.session.height))

    def _progress(self, elapsed: float) -> ProgressEvent:
        speed, unit = measure_throughput(self.pixels, elapsed)
        return ProgressEvent(seq=self.session.id, rows=self.rows_committed,
                             pixels=self.pixels, elapsed=format_elapsed(elapsed),
                             speed=speed, unit=unit)

    def _emit_row(self, y: int, row, highlight: bool = False) -> None:
        if self.on_scanline:
            self.on_scanline(ScanlineEvent(y, row, self.session.id,
                                           self.session.width, self.session.height,
                                           highlight=highlight))

    def run(self) -> Generator[ProgressEvent, None, SessionState]:
        sess = self.session
        interval = sess.settings.update_interval_ms / 1000.0
        ci = sess.ranges.y_range[0]
        start = self.clock()
        last_update = start
        self.state = SessionState.RENDERING

        for y in range(sess.height):
            if not self.is_current():
                self.state = SessionState.SUPERSEDED
                logger.debug("Render session %d superseded after %d rows",
                             sess.id, self.rows_committed)
                return self.state

            row = self.engine.render_line(ci)
            ci += sess.ranges.dy
            committed = self.buffer.commit_row(y, row)
            self.rows_committed += 1
            self.pixels += sess.width
            self._emit_row(y, committed)

            now = self.clock()
            self.elapsed = now - start
            if y + 1 < sess.height and (now - last_update) >= interval:
                # Show where rendering continues.
                self._emit_row(y + 1, self.buffer.fill_row(y + 1, HIGHLIGHT_COLOR),
                               highlight=True)
                progress = self._progress(self.elapsed)
                if self.on_progress:
                    self.on_progress(progress)
                last_update = now
                yield progress

        self.state = SessionState.COMPLETED
        if self.on_progress:
            self.on_progress(self._progress(self.elapsed))
        logger.debug("Render session %d completed in %.3fs", sess.id, self.elapsed)
        return self.state
