from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Optional

from rendering.progressive import ProgressiveRender
from utils.enums import SessionState

logger = logging.getLogger(__name__)


class CooperativeScheduler:
    """
    Minimal host event loop: a FIFO of callbacks run one at a time.
    Anything queued with call_soon (new viewport requests, resizes) gets
    its turn between two resumptions of a render.
    """

    def __init__(self) -> None:
        self._ready: Deque[Callable[[], None]] = deque()

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._ready.append(callback)

    @property
    def pending(self) -> int:
        return len(self._ready)

    def run_once(self) -> bool:
        if not self._ready:
            return False
        self._ready.popleft()()
        return True

    def run_until_idle(self, max_callbacks: Optional[int] = None) -> int:
        ran = 0
        while self._ready and (max_callbacks is None or ran < max_callbacks):
            self.run_once()
            ran += 1
        return ran


def drive(render: ProgressiveRender, scheduler,
          on_done: Optional[Callable[[ProgressiveRender], None]] = None) -> None:
    """
    Run a render on a scheduler: work until the render suspends, then queue
    the continuation behind whatever else the host has pending.
    The scheduler only needs a call_soon(callback) method.
    """
    steps = render.run()

    def resume() -> None:
        try:
            next(steps)
        except StopIteration:
            if on_done is not None:
                on_done(render)
            return
        scheduler.call_soon(resume)

    scheduler.call_soon(resume)


def run_to_completion(render: ProgressiveRender) -> SessionState:
    """Render synchronously, ignoring suspension points."""
    for _ in render.run():
        pass
    return render.state
