import threading
from dataclasses import dataclass

from fractals.base import RenderSettings, Viewport, ViewportRanges


@dataclass(frozen=True)
class RenderSession:
    """
    Everything one render pass depends on, captured when it starts.
    A newer session supersedes it; it is never modified.
    """
    id: int
    viewport: Viewport
    ranges: ViewportRanges
    settings: RenderSettings
    width: int
    height: int


class SessionCounter:
    """
    Monotonically increasing render session id, one per RenderService. Opening a new
    session is the only way older sessions get cancelled: they compare their
    id with the live value when they resume.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    @property
    def current(self) -> int:
        with self._lock:
            return self._value

    def advance(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def is_current(self, session_id: int) -> bool:
        return self.current == session_id
