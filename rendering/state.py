from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from coloring.base import parse_color_scheme
from utils.enums import ColorScheme


def _pair(value) -> Tuple[float, float]:
    if isinstance(value, str):
        value = value.split(",")
    a, b = value
    return float(a), float(b)


@dataclass(frozen=True)
class ShareableState:
    """
    The five values that fully define a render and survive a round trip
    through to_dict / from_dict. escape_radius is whichever radius the
    active algorithm reads.
    """
    zoom: Tuple[float, float]
    look_at: Tuple[float, float]
    iterations: int
    escape_radius: float
    color_scheme: ColorScheme

    def to_dict(self) -> Dict[str, Any]:
        return {
            "zoom": list(self.zoom),
            "lookAt": list(self.look_at),
            "iterations": self.iterations,
            "escapeRadius": self.escape_radius,
            "colorScheme": self.color_scheme.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShareableState":
        try:
            scheme = data["colorScheme"]
            if not isinstance(scheme, ColorScheme):
                scheme = parse_color_scheme(str(scheme))
            return cls(
                zoom=_pair(data["zoom"]),
                look_at=_pair(data["lookAt"]),
                iterations=int(data["iterations"]),
                escape_radius=float(data["escapeRadius"]),
                color_scheme=scheme,
            )
        except KeyError as e:
            raise ValueError(f"Shareable state is missing '{e.args[0]}'") from e
