import threading
from typing import Sequence

import numpy as np

# Row painted just below the last committed scanline while rendering.
HIGHLIGHT_COLOR = (255, 59, 3, 255)


def to_pixels(rgba: np.ndarray) -> np.ndarray:
    """Round float RGBA to bytes, clamping to [0, 255] and mapping NaN to 0."""
    rgba = np.nan_to_num(np.asarray(rgba, dtype=np.float64), nan=0.0)
    return np.clip(np.rint(rgba), 0, 255).astype(np.uint8)


class PixelBuffer:
    """
    Row-major RGBA8 image the renderer writes committed scanlines into.
    Resizing replaces the backing array; in-flight sessions notice the new
    dimensions and stop.
    """

    def __init__(self, width: int, height: int):
        self._lock = threading.Lock()
        self.data = np.zeros((int(height), int(width), 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def size(self):
        return self.width, self.height

    def resize(self, width: int, height: int) -> None:
        with self._lock:
            if (int(width), int(height)) != self.size:
                self.data = np.zeros((int(height), int(width), 4), dtype=np.uint8)

    def commit_row(self, y: int, rgba: np.ndarray) -> np.ndarray:
        row = to_pixels(rgba)
        row[:, 3] = 255
        with self._lock:
            self.data[y] = row
        return row

    def fill_row(self, y: int, color: Sequence[int]) -> np.ndarray:
        with self._lock:
            self.data[y] = np.asarray(color, dtype=np.uint8)
            return self.data[y].copy()

    def snapshot(self) -> np.ndarray:
        with self._lock:
            return self.data.copy()
