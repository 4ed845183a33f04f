from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from fractals.base import RenderSettings, Viewport, ViewportRanges
from fractals.settings_validator import (
    SCHEME_ALGORITHMS, SettingsError, validate_render_request, validate_settings,
)
from rendering.buffer import PixelBuffer
from rendering.events import FrameEvent, LogEvent, ProgressEvent, ScanlineEvent
from rendering.progressive import ProgressiveRender
from rendering.scheduler import CooperativeScheduler, drive
from rendering.session import RenderSession, SessionCounter
from rendering.state import ShareableState
from utils.coords import compute_ranges, zoom_at, zoom_to_box
from utils.enums import Algorithm, SessionState

logger = logging.getLogger(__name__)


class RenderService:
    """
    UI-facing controller that owns:
      - the current viewport and render settings,
      - the pixel buffer,
      - the session counter used to supersede in-flight renders,
      - event dispatch (scanline/progress/frame/log).

    Renders run cooperatively on the given scheduler (anything with a
    call_soon(callback) method). Every start_render() opens a new session;
    older sessions notice on their next resumption and stop.
    """

    def __init__(
        self,
        width: int,
        height: int,
        settings: Optional[RenderSettings] = None,
        viewport: Optional[Viewport] = None,
        *,
        scheduler=None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        # ----- Image & compute config -----
        self.buffer = PixelBuffer(width, height)
        self.settings = settings or RenderSettings()
        self.viewport = viewport or Viewport()
        self.ranges: Optional[ViewportRanges] = None
        self.rng = rng

        # ----- Sessions -----
        self.scheduler = scheduler or CooperativeScheduler()
        self.counter = SessionCounter()
        self.active: Optional[ProgressiveRender] = None

        # Callbacks
        self.on_scanline: Optional[Callable[[ScanlineEvent], None]] = None
        self.on_progress: Optional[Callable[[ProgressEvent], None]] = None
        self.on_frame: Optional[Callable[[FrameEvent], None]] = None
        self.on_log: Optional[Callable[[LogEvent], None]] = None

    # ---------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    def set_settings(self, settings: RenderSettings) -> None:
        validate_settings(settings)
        self.settings = settings

    def update_settings(self, **changes: Any) -> None:
        self.set_settings(replace(self.settings, **changes))

    def set_image_size(self, width: int, height: int) -> None:
        # A different size supersedes whatever is rendering into the buffer.
        if (int(width), int(height)) != self.buffer.size:
            self.ranges = None
        self.buffer.resize(width, height)

    def set_view(self, look_at: Tuple[float, float], zoom: Tuple[float, float]) -> None:
        self.viewport = Viewport(look_at=(float(look_at[0]), float(look_at[1])),
                                 zoom=(float(zoom[0]), float(zoom[1])))

    def reset_view(self) -> None:
        self.viewport = Viewport()

    # ---------------------------------------------------------------------
    # Viewport change requests
    # ---------------------------------------------------------------------

    def request_view(self, viewport: Viewport) -> RenderSession:
        self.viewport = viewport
        return self.start_render()

    def click_zoom(self, px: float, py: float, zoom_out: bool = False) -> RenderSession:
        ranges = self.ranges or self._ranges()
        return self.request_view(zoom_at(px, py, ranges, 2.0 if zoom_out else 0.5))

    def box_zoom(self, box: Tuple[float, float, float, float]) -> RenderSession:
        ranges = self.ranges or self._ranges()
        return self.request_view(zoom_to_box(box, ranges, self.width, self.height))

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------

    def _ranges(self) -> ViewportRanges:
        return compute_ranges(self.viewport.look_at, self.viewport.zoom,
                              self.width, self.height)

    def start_render(self) -> RenderSession:
        try:
            validate_render_request(self.settings, self.viewport, self.width, self.height)
        except SettingsError as e:
            self._log(str(e), "error")
            raise

        self.ranges = self._ranges()
        # Keep the aspect corrected span so the next render starts from it.
        self.viewport = replace(self.viewport, zoom=self.ranges.zoom)

        session = RenderSession(id=self.counter.advance(), viewport=self.viewport,
                                ranges=self.ranges, settings=self.settings,
                                width=self.width, height=self.height)
        render = ProgressiveRender(session, self.buffer, self.counter,
                                   rng=self.rng,
                                   on_scanline=self._dispatch_scanline,
                                   on_progress=self._dispatch_progress)
        self.active = render
        logger.debug("Starting render session %d (%dx%d, %s, %s)", session.id,
                     session.width, session.height, self.settings.algorithm.name,
                     self.settings.color_scheme.name)
        drive(render, self.scheduler, on_done=self._on_done)
        return session

    def stop(self) -> None:
        """Supersede the running render without starting a new one."""
        self.counter.advance()

    def is_rendering(self) -> bool:
        return (self.active is not None and
                self.active.state in (SessionState.IDLE, SessionState.RENDERING) and
                self.active.is_current())

    # ---------------------------------------------------------------------
    # Shareable state & info
    # ---------------------------------------------------------------------

    def shareable_state(self) -> ShareableState:
        return ShareableState(zoom=self.viewport.zoom,
                              look_at=self.viewport.look_at,
                              iterations=self.settings.max_steps,
                              escape_radius=self.settings.radius_for_algorithm(),
                              color_scheme=self.settings.color_scheme)

    def apply_state(self, state: ShareableState) -> None:
        # The color scheme implies the algorithm it colors.
        algorithm = SCHEME_ALGORITHMS[state.color_scheme]
        radius_field = "newton_radius" if algorithm == Algorithm.NEWTON else "escape_radius"
        self.update_settings(max_steps=state.iterations,
                             algorithm=algorithm,
                             color_scheme=state.color_scheme,
                             **{radius_field: state.escape_radius})
        self.set_view(state.look_at, state.zoom)

    def info(self) -> Dict[str, Any]:
        ranges = self.ranges or self._ranges()
        return {
            "x_range": ranges.x_range,
            "y_range": ranges.y_range,
            "width": self.width,
            "height": self.height,
            "megapixels": f"{self.width * self.height / 1000000.0:.1f}",
        }

    # ---------------------------------------------------------------------
    # Event dispatch
    # ---------------------------------------------------------------------

    def _log(self, message: str, level: Optional[str] = None) -> None:
        if level == "error":
            logger.error(message)
        else:
            logger.info(message)
        if self.on_log:
            self.on_log(LogEvent(message, level=level))

    def _dispatch_scanline(self, evt: ScanlineEvent) -> None:
        if self.on_scanline:
            self.on_scanline(evt)

    def _dispatch_progress(self, evt: ProgressEvent) -> None:
        if self.on_progress:
            self.on_progress(evt)

    def _on_done(self, render: ProgressiveRender) -> None:
        if render.state != SessionState.COMPLETED:
            return
        sess = render.session
        if self.on_frame:
            self.on_frame(FrameEvent(self.buffer.snapshot(), sess.width, sess.height, sess.id))
        self._log(f"Render time: {round(render.elapsed, 3)}s")
