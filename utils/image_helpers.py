import numpy as np
from PySide6.QtGui import QImage


def ndarray_to_qimage(rgba: np.ndarray) -> QImage:
    """
    Wrap an (H, W, 4) uint8 RGBA array as a QImage. The returned image owns
    a copy of the pixels.
    """
    rgba = np.ascontiguousarray(rgba, dtype=np.uint8)
    h, w = rgba.shape[:2]
    img = QImage(rgba.data, w, h, 4 * w, QImage.Format.Format_RGBA8888)
    return img.copy()
