"""Background colour for rays that hit nothing."""

from __future__ import annotations

from raylabs.color import Color
from raylabs.vec3 import Vec3, normalize

_SKY_TOP = Color(0.5, 0.7, 1.0)
_SKY_BOTTOM = Color(1.0, 1.0, 1.0)


def sky_color(direction: Vec3) -> Color:
    """Vertical gradient from white below to light blue above."""
    t = 0.5 * (normalize(direction).y + 1.0)
    return Color(
        (1.0 - t) * _SKY_BOTTOM.r + t * _SKY_TOP.r,
        (1.0 - t) * _SKY_BOTTOM.g + t * _SKY_TOP.g,
        (1.0 - t) * _SKY_BOTTOM.b + t * _SKY_TOP.b,
    )