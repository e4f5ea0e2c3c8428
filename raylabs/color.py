"""RGB colour with float components."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB colour. Only ``+`` saturates; ``+=`` and scaling do not."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            _clamp01(self.r + other.r),
            _clamp01(self.g + other.g),
            _clamp01(self.b + other.b),
        )

    def __iadd__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, s: float) -> Color:
        if not isinstance(s, Real):
            return NotImplemented
        return Color(self.r * s, self.g * s, self.b * s)

    __rmul__ = __mul__

    def clamp01(self) -> Color:
        """Return a copy with every component clamped to [0, 1]."""
        return Color(_clamp01(self.r), _clamp01(self.g), _clamp01(self.b))

    def __str__(self) -> str:
        return f"({self.r:g},{self.g:g},{self.b:g})"