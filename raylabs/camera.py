"""Pinhole camera producing primary rays."""

from __future__ import annotations

from raylabs import mathutils
from raylabs.ray import Ray
from raylabs.vec3 import Point3, Vec3, cross, normalize

_PI = 3.14159265359


class Camera:
    """Camera looking from ``position`` toward ``look_at``.

    After changing any public field, call :meth:`initialize` to rebuild the
    viewport.
    """

    def __init__(
        self,
        position: Point3 | None = None,
        look_at: Point3 | None = None,
        up: Vec3 | None = None,
        fov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
    ) -> None:
        self.position = position if position is not None else Vec3(0, 0, 0)
        self.look_at = look_at if look_at is not None else Vec3(0, 0, -1)
        self.up = up if up is not None else Vec3(0, 1, 0)
        self.fov = fov
        self.aspect_ratio = aspect_ratio
        self.initialize()

    def initialize(self) -> None:
        """Compute the viewport basis from the current parameters."""
        theta = self.fov * _PI / 180.0
        h = mathutils.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        w = normalize(self.position - self.look_at)
        u = normalize(cross(self.up, w))
        v = cross(w, u)

        self._horizontal = viewport_width * u
        self._vertical = viewport_height * v
        self._lower_left_corner = (
            self.position - self._horizontal / 2.0 - self._vertical / 2.0 - w
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Ray through viewport coordinates (s, t), each in [0, 1]."""
        return Ray(
            self.position,
            self._lower_left_corner
            + s * self._horizontal
            + t * self._vertical
            - self.position,
        )