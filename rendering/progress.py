import math
from typing import Tuple

from utils.enums import SpeedUnit

METRIC_PREFIXES = ["", "k", "M", "G", "T", "P", "E"]


def metric_units(number: float) -> str:
    """
    Format a positive number with two decimals and a metric prefix,
    e.g. 1500 -> "1.50k". Degenerate input (zero, negative, NaN, inf)
    gives "NaN".
    """
    if not math.isfinite(number) or number <= 0:
        return "NaN"
    mag = math.ceil((1 + math.log10(number)) / 3)
    mag = min(max(mag, 1), len(METRIC_PREFIXES))
    return f"{number / 10 ** (3 * (mag - 1)):.2f}{METRIC_PREFIXES[mag - 1]}"


def format_elapsed(seconds: float) -> str:
    return f"{seconds:.1f}"


def _floor_rate(pixels: int, seconds: float, scale: float) -> float:
    if seconds <= 0:
        return math.inf
    rate = scale * pixels / seconds
    return float(math.floor(rate)) if math.isfinite(rate) else rate


def measure_throughput(pixels: int, elapsed_s: float) -> Tuple[str, SpeedUnit]:
    """
    Pixels per second, or pixels per minute when the per-second figure is
    degenerate (under one pixel per second, or no measurable time yet).
    """
    per_second = metric_units(_floor_rate(pixels, elapsed_s, 1.0))
    if per_second != "NaN":
        return per_second, SpeedUnit.SECOND
    return metric_units(_floor_rate(pixels, elapsed_s, 60.0)), SpeedUnit.MINUTE
