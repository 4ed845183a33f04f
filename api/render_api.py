from typing import Any, Dict, Optional, Tuple

from coloring.base import parse_color_scheme
from fractals.base import Viewport
from rendering.service import RenderService
from rendering.session import RenderSession
from rendering.state import ShareableState
from utils.enums import Algorithm, ColorScheme

# Height preset -> width, all 16:9.
RESOLUTION_PRESETS: Dict[str, int] = {
    "360p": 640,
    "480p": 854,
    "720p": 1280,
    "1080p": 1920,
    "1440p": 2560,
    "2160p": 3840,
}


def preset_size(preset: str) -> Tuple[int, int]:
    """Width and height for a preset such as "720p"."""
    key = preset.strip().lower()
    if key not in RESOLUTION_PRESETS:
        raise ValueError(f"Unknown resolution preset '{preset}' "
                         f"(expected one of {', '.join(RESOLUTION_PRESETS)})")
    return RESOLUTION_PRESETS[key], int(key[:-1])


class RenderConfigBuilder:
    """
    Collects setting changes and hands them to the service in one
    validated update.
    """
    def __init__(self, service: RenderService):
        self._service = service
        self._size: Optional[Tuple[int, int]] = None
        self._changes: Dict[str, Any] = {}

    def resolution(self, preset: str) -> 'RenderConfigBuilder':
        self._size = preset_size(preset)
        return self

    def size(self, width: int, height: int) -> 'RenderConfigBuilder':
        self._size = (width, height)
        return self

    def max_steps(self, steps: int) -> 'RenderConfigBuilder':
        self._changes["max_steps"] = steps
        return self

    def samples(self, count: int) -> 'RenderConfigBuilder':
        self._changes["samples"] = count
        return self

    def escape_radius(self, radius: float) -> 'RenderConfigBuilder':
        self._changes["escape_radius"] = radius
        return self

    def newton_radius(self, radius: float) -> 'RenderConfigBuilder':
        self._changes["newton_radius"] = radius
        return self

    def algorithm(self, algorithm: Algorithm) -> 'RenderConfigBuilder':
        self._changes["algorithm"] = algorithm
        return self

    def color_scheme(self, scheme) -> 'RenderConfigBuilder':
        if not isinstance(scheme, ColorScheme):
            scheme = parse_color_scheme(scheme)
        self._changes["color_scheme"] = scheme
        return self

    def update_interval(self, ms: float) -> 'RenderConfigBuilder':
        self._changes["update_interval_ms"] = ms
        return self

    def apply(self) -> None:
        # Settings first: a rejected change must leave the buffer untouched.
        if self._changes:
            self._service.update_settings(**self._changes)
        if self._size is not None:
            self._service.set_image_size(*self._size)


class RenderAPI:
    """
    Entry point for front ends: view requests, configuration, shareable
    state and event subscription, all delegated to a RenderService.
    """
    def __init__(self, service: RenderService):
        self.service: RenderService = service

    # ---------- Subscriptions ----------------------------
    def on_frame(self, cb): self.service.on_frame = cb
    def on_scanline(self, cb): self.service.on_scanline = cb
    def on_progress(self, cb): self.service.on_progress = cb
    def on_log(self, cb): self.service.on_log = cb

    # ---------- View -------------------------------------
    def set_view(self, look_at: Tuple[float, float], zoom: Tuple[float, float]) -> None:
        """Change the view without rendering it."""
        self.service.set_view(look_at, zoom)

    def request_view(self, look_at: Tuple[float, float], zoom: Tuple[float, float]) -> RenderSession:
        """
        Moves the view and starts a new render, superseding any render in
        flight.
        """
        return self.service.request_view(Viewport(look_at=look_at, zoom=zoom))

    def set_image_size(self, width: int, height: int) -> None:
        """
        Resizes the pixel buffer. A render still writing into the old
        buffer stops at its next scanline.
        """
        self.service.set_image_size(width, height)

    def configure(self) -> RenderConfigBuilder:
        return RenderConfigBuilder(self.service)

    # ---------- Shareable state --------------------------
    def state(self) -> ShareableState:
        return self.service.shareable_state()

    def restore(self, state: ShareableState) -> RenderSession:
        """
        Applies a previously shared state and renders it.
        """
        self.service.apply_state(state)
        return self.service.start_render()

    def reset(self) -> RenderSession:
        self.service.reset_view()
        return self.service.start_render()

    # ---------- Lifecycle --------------------------------
    def start_render(self) -> RenderSession:
        return self.service.start_render()

    def stop_render(self) -> None:
        """Supersede the running render; the buffer keeps what it has."""
        self.service.stop()
