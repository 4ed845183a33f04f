import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import QLabel, QMainWindow, QSizePolicy

from adapters.qt_render_bridge import QtRenderBridge, QtScheduler
from api.render_api import RenderAPI
from fractals.base import RenderSettings
from rendering.service import RenderService

logger = logging.getLogger(__name__)


# =============================================================================
# Main Window
# =============================================================================
class FractalViewer(QMainWindow):
    """
    Shows the pixel buffer while it fills in and restarts the render
    whenever the window is resized.
    """

    def __init__(self, settings: RenderSettings = None, width: int = 960, height: int = 720):
        super().__init__()
        self.setWindowTitle("Fractal Viewer")
        self.resize(width, height)

        service = RenderService(width, height, settings, scheduler=QtScheduler())
        self.api = RenderAPI(service)
        self.bridge = QtRenderBridge(self.api, parent=self)
        self.bridge.image_updated.connect(self._show_image)
        self.bridge.progress_text.connect(self._show_progress)
        self.bridge.log_text.connect(self.statusBar().showMessage)

        self.display = QLabel(self)
        self.display.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.display.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setCentralWidget(self.display)

    def render_fractal(self):
        self.api.start_render()

    # ---------- Slots ----------
    def _show_image(self, image: QImage, w: int, h: int):
        self.display.setPixmap(QPixmap.fromImage(image))

    def _show_progress(self, elapsed: str, speed: str, unit: str):
        self.statusBar().showMessage(f"{elapsed}s, {speed} pixels/{unit}")

    def resizeEvent(self, event):
        super().resizeEvent(event)
        size = self.display.size()
        if size.width() < 1 or size.height() < 1:
            return
        if (size.width(), size.height()) != (self.api.service.width, self.api.service.height):
            logger.debug("Display resized to %dx%d", size.width(), size.height())
            self.api.set_image_size(size.width(), size.height())
            self.render_fractal()

    def mousePressEvent(self, event):
        # Left click zooms in on the clicked point, right click zooms out.
        pos = self.display.mapFrom(self, event.position().toPoint())
        if not self.display.rect().contains(pos):
            return super().mousePressEvent(event)
        zoom_out = event.button() == Qt.MouseButton.RightButton
        self.api.service.click_zoom(pos.x(), pos.y(), zoom_out=zoom_out)
