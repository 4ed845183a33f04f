from dataclasses import dataclass
import numpy as np
from typing import Optional

from utils.enums import SpeedUnit

@dataclass(frozen=True)
class ScanlineEvent:
    y: int
    data: np.ndarray    # (W, 4) uint8 row as committed to the buffer
    seq: int            # render session id
    frame_w: int
    frame_h: int
    highlight: bool = False

@dataclass(frozen=True)
class ProgressEvent:
    seq: int
    rows: int
    pixels: int
    elapsed: str        # seconds, one decimal
    speed: str          # metric units, e.g. "1.50k"
    unit: SpeedUnit

@dataclass(frozen=True)
class FrameEvent:
    data: np.ndarray
    width: int
    height: int
    seq: int

@dataclass(frozen=True)
class LogEvent:
    message: str
    level: Optional[str]
