"""Turn scene specifications and legacy JSON documents into renderable scenes."""

from __future__ import annotations

import json
from typing import Any

from raylabs.camera import Camera
from raylabs.color import Color
from raylabs.materials import Checker, Dielectric, Lambertian, Material, Metal
from raylabs.scene import Scene
from raylabs.scene_loader import MaterialKind, ObjectKind, SceneFormatError, SceneSpec
from raylabs.shapes import Plane, Sphere, Triangle
from raylabs.vec3 import Vec3

_DEFAULT_ALBEDO = Color(0.8, 0.8, 0.8)
_DEFAULT_CHECKER_SECOND = Color(0.2, 0.2, 0.2)


def _number(value: Any, ctx: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"Expected a number at {ctx}")
    return float(value)


def _string(value: Any, ctx: str) -> str:
    if not isinstance(value, str):
        raise SceneFormatError(f"Expected a string at {ctx}")
    return value


def _vec3(value: Any, ctx: str) -> Vec3:
    if not isinstance(value, list) or len(value) != 3:
        raise SceneFormatError(f"Expected 3-length array for Vec3 at {ctx}")
    x, y, z = (_number(v, ctx) for v in value)
    return Vec3(x, y, z)


def _color(value: Any, ctx: str) -> Color:
    v = _vec3(value, ctx)
    return Color(v.x, v.y, v.z)


def material_from_inline(data: Any) -> Material | None:
    """Build a material from an inline JSON object.

    Returns None when there is no ``type`` field or the type is not recognised.
    Type names are matched exactly (lower case).
    """
    if not isinstance(data, dict) or "type" not in data:
        return None
    kind = _string(data["type"], "material.type")

    if kind == "lambertian":
        albedo = _color(data["albedo"], "albedo") if "albedo" in data else _DEFAULT_ALBEDO
        return Lambertian(albedo)
    if kind == "metal":
        albedo = _color(data["albedo"], "albedo") if "albedo" in data else _DEFAULT_ALBEDO
        fuzz = _number(data["fuzz"], "fuzz") if "fuzz" in data else 0.0
        return Metal(albedo, fuzz)
    if kind == "checker":
        first = _color(data["color1"], "color1") if "color1" in data else _DEFAULT_ALBEDO
        second = (
            _color(data["color2"], "color2") if "color2" in data else _DEFAULT_CHECKER_SECOND
        )
        scale = _number(data["scale"], "scale") if "scale" in data else 1.0
        return Checker(first, second, scale)
    if kind in ("dielectric", "glass"):
        ior = _number(data["ior"], "ior") if "ior" in data else 1.5
        return Dielectric(ior)
    return None


def _material_from_spec(kind: MaterialKind, albedo: Color, roughness: float, ior: float) -> Material:
    if kind is MaterialKind.LAMBERTIAN:
        return Lambertian(albedo)
    if kind is MaterialKind.METAL:
        return Metal(albedo, roughness)
    if kind is MaterialKind.DIELECTRIC:
        return Dielectric(ior)
    # The spec carries only one colour; the second checker colour is fixed.
    return Checker(albedo, _DEFAULT_CHECKER_SECOND, 1.0)


def build_scene(spec: SceneSpec, scene: Scene, camera: Camera) -> None:
    """Fill ``scene`` and set up ``camera`` from a parsed scene specification."""
    cam = spec.camera
    camera.position = Vec3(*cam.look_from)
    camera.look_at = Vec3(*cam.look_at)
    camera.up = Vec3(*cam.up)
    camera.fov = cam.vfov_deg
    camera.aspect_ratio = spec.image.width / spec.image.height
    camera.initialize()

    materials = {
        material_id: _material_from_spec(m.kind, m.albedo, m.roughness, m.ior)
        for material_id, m in spec.materials.items()
    }

    for obj in spec.objects:
        material = materials.get(obj.material_id) if obj.material_id else None
        if obj.kind is ObjectKind.SPHERE:
            shape = Sphere(Vec3(*obj.sphere.center), obj.sphere.radius)
        else:
            shape = Plane(Vec3(*obj.plane.point), Vec3(*obj.plane.normal))
        scene.add(shape, material)


def _apply_camera(data: Any, camera: Camera) -> None:
    if not isinstance(data, dict):
        return
    if "position" in data:
        camera.position = _vec3(data["position"], "camera.position")
    if "look_at" in data:
        camera.look_at = _vec3(data["look_at"], "camera.look_at")
    if "up" in data:
        camera.up = _vec3(data["up"], "camera.up")
    if "fov" in data:
        camera.fov = _number(data["fov"], "camera.fov")
    if "aspect_ratio" in data:
        camera.aspect_ratio = _number(data["aspect_ratio"], "camera.aspect_ratio")
    camera.initialize()


def _add_object(data: Any, scene: Scene) -> None:
    if not isinstance(data, dict) or "type" not in data:
        return
    kind = _string(data["type"], "type")
    material = material_from_inline(data["material"]) if "material" in data else None

    shape = None
    if kind == "plane":
        if "point" in data and "normal" in data:
            shape = Plane(_vec3(data["point"], "point"), _vec3(data["normal"], "normal"))
    elif kind == "sphere":
        if "center" in data and "radius" in data:
            shape = Sphere(_vec3(data["center"], "center"), _number(data["radius"], "radius"))
    elif kind == "triangle":
        if all(key in data for key in ("a", "b", "c")):
            shape = Triangle(
                _vec3(data["a"], "a"), _vec3(data["b"], "b"), _vec3(data["c"], "c")
            )
    if shape is not None:
        scene.add(shape, material)


def load_scene_string(text: str, scene: Scene, camera: Camera | None = None) -> None:
    """Add the objects of a loosely structured JSON document to ``scene``.

    Objects of unknown type or with missing fields are skipped. When ``camera``
    is given, its settings are taken from the ``camera`` block first.
    Raises :class:`SceneFormatError` on malformed JSON or values.
    """
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SceneFormatError(str(exc)) from exc

    if not isinstance(root, dict):
        return
    if camera is not None and "camera" in root:
        _apply_camera(root["camera"], camera)

    objects = root.get("objects")
    if isinstance(objects, list):
        for data in objects:
            _add_object(data, scene)