"""Geometric primitives that rays can intersect."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from raylabs import mathutils
from raylabs.ray import HitRecord, Ray
from raylabs.vec3 import Point3, Vec3, cross, dot, normalize

_EPS = 1e-6


class Shape(ABC):
    """A surface that can report the nearest ray hit within [t_min, t_max]."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the hit record, or None if the ray misses."""


def _record(ray: Ray, t: float, outward_normal: Vec3) -> HitRecord:
    rec = HitRecord(point=ray.at(t), t=t)
    rec.set_face_normal(ray, outward_normal)
    return rec


@dataclass
class Plane(Shape):
    """Infinite plane through ``point``; ``normal`` is stored normalised."""

    point: Point3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))

    def __post_init__(self) -> None:
        self.normal = normalize(self.normal)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        denom = dot(self.normal, ray.direction)
        if abs(denom) < _EPS:
            return None
        t = dot(self.point - ray.origin, self.normal) / denom
        if t < t_min or t > t_max:
            return None
        return _record(ray, t, self.normal)


@dataclass
class Sphere(Shape):
    center: Point3 = field(default_factory=Vec3)
    radius: float = 1.0

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        half_b = dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None
        sqrtd = mathutils.sqrt(discriminant)

        root = (-half_b - sqrtd) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrtd) / a
            if root < t_min or root > t_max:
                return None

        point = ray.at(root)
        return _record(ray, root, (point - self.center) / self.radius)


@dataclass
class Triangle(Shape):
    a: Point3 = field(default_factory=Vec3)
    b: Point3 = field(default_factory=lambda: Vec3(1, 0, 0))
    c: Point3 = field(default_factory=lambda: Vec3(0, 1, 0))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        edge1 = self.b - self.a
        edge2 = self.c - self.a
        pvec = cross(ray.direction, edge2)
        det = dot(edge1, pvec)
        if abs(det) < _EPS:
            return None
        inv_det = 1.0 / det

        tvec = ray.origin - self.a
        u = dot(tvec, pvec) * inv_det
        if u < 0.0 or u > 1.0:
            return None

        qvec = cross(tvec, edge1)
        v = dot(ray.direction, qvec) * inv_det
        if v < 0.0 or u + v > 1.0:
            return None

        t = dot(edge2, qvec) * inv_det
        if t < t_min or t > t_max:
            return None
        return _record(ray, t, normalize(cross(edge1, edge2)))