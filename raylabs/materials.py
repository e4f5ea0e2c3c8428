"""Surface materials that decide how rays scatter."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from raylabs.color import Color
from raylabs.ray import HitRecord, Ray
from raylabs.sampler import HashRandom
from raylabs.vec3 import Vec3, dot, normalize

_SURFACE_OFFSET = 0.001
_DEGENERATE_LENGTH_SQ = 1e-8


@dataclass(frozen=True, slots=True)
class Scatter:
    """Result of a scattering event: colour filter and outgoing ray."""

    attenuation: Color
    scattered: Ray


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the surface with normal ``n``."""
    return v - 2.0 * dot(v, n) * n


def refract(uv: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """Refract unit vector ``uv`` through a surface with normal ``n``."""
    cos_theta = min(dot(-uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * n
    return r_out_perp + r_out_parallel


def reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of the reflection coefficient."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def _offset_origin(rec: HitRecord) -> Vec3:
    return rec.point + _SURFACE_OFFSET * rec.normal


class Material(ABC):
    """Decides whether and how an incoming ray leaves a surface."""

    @abstractmethod
    def scatter(self, ray_in: Ray, rec: HitRecord) -> Scatter | None:
        """Return the scattering result, or None if the ray is absorbed."""


@dataclass
class Lambertian(Material):
    """Ideal diffuse surface."""

    albedo: Color
    rng: HashRandom = field(
        default_factory=lambda: HashRandom(12345), repr=False, compare=False
    )

    def _random_unit_vector(self) -> Vec3:
        while True:
            p = Vec3(
                self.rng.random_float(-1, 1),
                self.rng.random_float(-1, 1),
                self.rng.random_float(-1, 1),
            )
            if p.length_squared() < 1.0:
                return normalize(p)

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Scatter | None:
        direction = rec.normal + self._random_unit_vector()
        if direction.length_squared() < _DEGENERATE_LENGTH_SQ:
            direction = rec.normal
        return Scatter(self.albedo, Ray(_offset_origin(rec), normalize(direction)))


@dataclass
class Metal(Material):
    """Reflective surface; ``fuzz`` above 1 is capped at 1."""

    albedo: Color
    fuzz: float = 0.0
    rng: HashRandom = field(
        default_factory=lambda: HashRandom(54321), repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.fuzz = self.fuzz if self.fuzz < 1.0 else 1.0

    def _random_in_unit_sphere(self) -> Vec3:
        while True:
            p = Vec3(
                self.rng.random_float(-1, 1),
                self.rng.random_float(-1, 1),
                self.rng.random_float(-1, 1),
            )
            if p.length_squared() < 1.0:
                return p

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Scatter | None:
        reflected = reflect(normalize(ray_in.direction), rec.normal)
        direction = reflected + self.fuzz * self._random_in_unit_sphere()
        if direction.length_squared() < _DEGENERATE_LENGTH_SQ:
            direction = reflected
        direction = normalize(direction)
        if dot(direction, rec.normal) <= 0.0:
            return None
        return Scatter(self.albedo, Ray(_offset_origin(rec), direction))


@dataclass
class Dielectric(Material):
    """Clear refracting material such as glass."""

    ior: float
    rng: HashRandom = field(
        default_factory=lambda: HashRandom(11111), repr=False, compare=False
    )

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Scatter | None:
        ratio = 1.0 / self.ior if rec.front_face else self.ior
        unit_direction = normalize(ray_in.direction)
        cos_theta = min(dot(-unit_direction, rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ratio) > self.rng.random_float():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return Scatter(
            Color(1.0, 1.0, 1.0), Ray(_offset_origin(rec), normalize(direction))
        )


@dataclass
class Checker(Material):
    """Mirror-like surface tinted by a checkerboard in the x-z plane."""

    color1: Color
    color2: Color
    scale: float = 1.0

    def scatter(self, ray_in: Ray, rec: HitRecord) -> Scatter | None:
        xi = math.floor(rec.point.x * self.scale)
        zi = math.floor(rec.point.z * self.scale)
        albedo = self.color1 if (xi + zi) & 1 == 0 else self.color2

        reflected = reflect(normalize(ray_in.direction), rec.normal)
        return Scatter(albedo, Ray(_offset_origin(rec), normalize(reflected)))