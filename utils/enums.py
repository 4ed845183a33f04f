from enum import Enum, auto

class Algorithm(Enum):
    MANDELBROT = auto()
    NEWTON = auto()

class ColorScheme(Enum):
    HSV1 = auto()
    HSV2 = auto()
    HSV3 = auto()
    GRAYSCALE = auto()
    GRAYSCALE2 = auto()
    NEWTON_GRAYSCALE = auto()
    NEWTON_COLORFUL = auto()

class SessionState(Enum):
    IDLE = auto()
    RENDERING = auto()
    COMPLETED = auto()
    SUPERSEDED = auto()

class SpeedUnit(Enum):
    SECOND = "second"
    MINUTE = "minute"
