from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtGui import QImage

from api.render_api import RenderAPI
from utils.image_helpers import ndarray_to_qimage
from rendering.events import FrameEvent, LogEvent, ProgressEvent, ScanlineEvent


class QtScheduler:
    """
    Hands render continuations back to the Qt event loop, so input and
    resize events are processed between scanline batches.
    """

    def call_soon(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(0, callback)


class QtRenderBridge(QObject):
    """
    Thin adapter that converts service events to Qt signals for the UI.
    """
    image_updated = Signal(QImage, int, int)
    scanline_ready = Signal(int, int)
    progress_text = Signal(str, str, str)
    log_text = Signal(str)

    def __init__(self, api: RenderAPI, parent=None):
        super().__init__(parent)
        self.api = api

        # Subscribe to API events with conversions
        self.api.on_frame(self._on_frame)
        self.api.on_scanline(self._on_scanline)
        self.api.on_progress(self._on_progress)
        self.api.on_log(self._on_log)

    def current_image(self) -> QImage:
        return ndarray_to_qimage(self.api.service.buffer.snapshot())

    # --------- Conversions ---------------------
    def _on_frame(self, evt: FrameEvent) -> None:
        qimg = ndarray_to_qimage(evt.data)
        self.image_updated.emit(qimg, evt.width, evt.height)

    def _on_scanline(self, evt: ScanlineEvent) -> None:
        self.scanline_ready.emit(int(evt.seq), int(evt.y))

    def _on_progress(self, evt: ProgressEvent) -> None:
        self.progress_text.emit(evt.elapsed, evt.speed, evt.unit.value)
        service = self.api.service
        self.image_updated.emit(self.current_image(), service.width, service.height)

    def _on_log(self, evt: LogEvent) -> None:
        self.log_text.emit(evt.message)
