"""Light transport integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from raylabs.color import Color
from raylabs.environment import sky_color
from raylabs.ray import Ray
from raylabs.scene import Scene

_T_MIN = 0.001
_T_MAX = 1e9
_BLACK = Color(0.0, 0.0, 0.0)
_UNSHADED = Color(0.5, 0.5, 0.5)


def _modulate(a: Color, b: Color) -> Color:
    return Color(a.r * b.r, a.g * b.g, a.b * b.b)


class Integrator(ABC):
    """Computes the colour seen along a ray."""

    @abstractmethod
    def trace(self, ray: Ray, scene: Scene, max_depth: int) -> Color:
        """Return the colour carried back along ``ray``."""


class PathTracer(Integrator):
    """Follows scattered rays until they escape, are absorbed or run out of depth."""

    def trace(self, ray: Ray, scene: Scene, max_depth: int) -> Color:
        throughput = Color(1.0, 1.0, 1.0)
        for _ in range(max_depth):
            rec = scene.hit(ray, _T_MIN, _T_MAX)
            if rec is None:
                return _modulate(throughput, sky_color(ray.direction))
            if rec.material is None:
                return _modulate(throughput, _UNSHADED)
            result = rec.material.scatter(ray, rec)
            if result is None:
                return _BLACK
            throughput = _modulate(throughput, result.attenuation)
            ray = result.scattered
        return _BLACK