"""A flat list of shapes with optional materials."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from raylabs.ray import HitRecord, Ray
from raylabs.shapes import Shape


@dataclass
class Entity:
    shape: Shape
    material: Any = None


@dataclass
class Scene:
    entities: list[Entity] = field(default_factory=list)

    def add(self, shape: Shape, material: Any = None) -> None:
        self.entities.append(Entity(shape, material))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the closest hit over all entities, tagged with its material."""
        closest = t_max
        best: HitRecord | None = None
        for entity in self.entities:
            rec = entity.shape.hit(ray, t_min, closest)
            if rec is not None:
                rec.material = entity.material
                closest = rec.t
                best = rec
        return best