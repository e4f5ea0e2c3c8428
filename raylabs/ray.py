"""Rays and intersection records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from raylabs.vec3 import Point3, Vec3, dot


@dataclass(slots=True)
class Ray:
    """A half-line from ``origin`` along ``direction``."""

    origin: Point3 = field(default_factory=Vec3)
    direction: Vec3 = field(default_factory=Vec3)

    def at(self, t: float) -> Point3:
        return self.origin + t * self.direction


@dataclass(slots=True)
class HitRecord:
    """Where a ray met a surface, with the normal facing against the ray."""

    point: Point3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    t: float = 0.0
    front_face: bool = False
    material: Any = None

    def set_face_normal(self, ray: Ray, outward_normal: Vec3) -> None:
        self.front_face = dot(ray.direction, outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal