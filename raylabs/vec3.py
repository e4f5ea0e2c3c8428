"""Three-component vector and the usual vector operations."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Iterator

from raylabs import mathutils


@dataclass(slots=True)
class Vec3:
    """A mutable 3D vector; also used for points."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, t: float) -> Vec3:
        if not isinstance(t, Real):
            return NotImplemented
        return Vec3(self.x * t, self.y * t, self.z * t)

    __rmul__ = __mul__

    def __truediv__(self, t: float) -> Vec3:
        if not isinstance(t, Real):
            return NotImplemented
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        return self.z

    def __setitem__(self, index: int, value: float) -> None:
        if index == 0:
            self.x = value
        elif index == 1:
            self.y = value
        else:
            self.z = value

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"{self.x:g} {self.y:g} {self.z:g}"

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return mathutils.sqrt(self.length_squared())


Point3 = Vec3


def dot(u: Vec3, v: Vec3) -> float:
    return u.x * v.x + u.y * v.y + u.z * v.z


def cross(u: Vec3, v: Vec3) -> Vec3:
    return Vec3(
        u.y * v.z - u.z * v.y,
        u.z * v.x - u.x * v.z,
        u.x * v.y - u.y * v.x,
    )


def normalize(v: Vec3) -> Vec3:
    """Unit vector in the direction of ``v``; the zero vector stays zero."""
    length = v.length()
    if length > 0.0:
        return v / length
    return Vec3()