"""Parse JSON scene descriptions into typed scene specifications."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from raylabs import logger
from raylabs.color import Color
from raylabs.vec3 import Vec3


class SceneFormatError(ValueError):
    """Raised when a scene document is malformed or inconsistent."""


class MaterialKind(Enum):
    LAMBERTIAN = "lambertian"
    METAL = "metal"
    DIELECTRIC = "dielectric"
    CHECKER = "checker"


class ObjectKind(Enum):
    SPHERE = "sphere"
    PLANE = "plane"


class LightKind(Enum):
    POINT = "point"


@dataclass
class CameraSpec:
    look_from: Vec3 = field(default_factory=lambda: Vec3(0, 0, 0))
    look_at: Vec3 = field(default_factory=lambda: Vec3(0, 0, -1))
    up: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    vfov_deg: float = 45.0
    aperture: float = 0.0
    focus_dist: float = 1.0


@dataclass
class ImageSpec:
    width: int = 800
    height: int = 450
    samples: int = 1
    max_depth: int = 4
    output_path: str = "output/render.png"


@dataclass
class MaterialSpec:
    id: str = ""
    kind: MaterialKind = MaterialKind.LAMBERTIAN
    albedo: Color = field(default_factory=lambda: Color(0.8, 0.8, 0.8))
    roughness: float = 0.0
    ior: float = 1.5


@dataclass
class SphereSpec:
    center: Vec3 = field(default_factory=lambda: Vec3(0, 0, 0))
    radius: float = 1.0
    material_id: str = ""


@dataclass
class PlaneSpec:
    point: Vec3 = field(default_factory=lambda: Vec3(0, 0, 0))
    normal: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    material_id: str = ""


@dataclass
class ObjectSpec:
    """One scene object; only the part matching ``kind`` is meaningful."""

    kind: ObjectKind = ObjectKind.SPHERE
    sphere: SphereSpec = field(default_factory=SphereSpec)
    plane: PlaneSpec = field(default_factory=PlaneSpec)

    @property
    def material_id(self) -> str:
        return self.sphere.material_id or self.plane.material_id


@dataclass
class PointLightSpec:
    position: Vec3 = field(default_factory=lambda: Vec3(0, 0, 0))
    intensity: Color = field(default_factory=lambda: Color(1, 1, 1))


@dataclass
class LightSpec:
    kind: LightKind = LightKind.POINT
    point: PointLightSpec = field(default_factory=PointLightSpec)


@dataclass
class SceneSpec:
    camera: CameraSpec = field(default_factory=CameraSpec)
    image: ImageSpec = field(default_factory=ImageSpec)
    materials: dict[str, MaterialSpec] = field(default_factory=dict)
    objects: list[ObjectSpec] = field(default_factory=list)
    lights: list[LightSpec] = field(default_factory=list)


# --- value helpers -----------------------------------------------------------


def _has(obj: Any, key: str) -> bool:
    return isinstance(obj, dict) and key in obj


def _number(value: Any, ctx: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"Expected a number at {ctx}")
    return float(value)


def _integer(value: Any, ctx: str) -> int:
    return int(_number(value, ctx))


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


# --- kind parsing ------------------------------------------------------------

_MATERIAL_NAMES = {
    "lambertian": MaterialKind.LAMBERTIAN,
    "diffuse": MaterialKind.LAMBERTIAN,
    "metal": MaterialKind.METAL,
    "dielectric": MaterialKind.DIELECTRIC,
    "glass": MaterialKind.DIELECTRIC,
    "checker": MaterialKind.CHECKER,
}

_OBJECT_NAMES = {
    "sphere": ObjectKind.SPHERE,
    "plane": ObjectKind.PLANE,
}

_LIGHT_NAMES = {
    "point": LightKind.POINT,
    "pointlight": LightKind.POINT,
}


def parse_material_kind(name: str) -> MaterialKind:
    """Material kind from its case-insensitive name or alias."""
    try:
        return _MATERIAL_NAMES[name.lower()]
    except KeyError:
        raise SceneFormatError(f"Unknown material type: {name}") from None


def parse_object_kind(name: str) -> ObjectKind:
    """Object kind from its case-insensitive name."""
    try:
        return _OBJECT_NAMES[name.lower()]
    except KeyError:
        raise SceneFormatError(f"Unknown object type: {name}") from None


def parse_light_kind(name: str) -> LightKind:
    """Light kind from its case-insensitive name or alias."""
    try:
        return _LIGHT_NAMES[name.lower()]
    except KeyError:
        raise SceneFormatError(f"Unknown light type: {name}") from None


# --- section parsers ---------------------------------------------------------


def _parse_image(data: Any) -> ImageSpec:
    image = ImageSpec(
        width=_integer(data["width"], "image.width") if _has(data, "width") else 800,
        height=_integer(data["height"], "image.height") if _has(data, "height") else 450,
        samples=_integer(data["samples"], "image.samples") if _has(data, "samples") else 1,
        max_depth=(
            _integer(data["max_depth"], "image.max_depth") if _has(data, "max_depth") else 4
        ),
        output_path=(
            _string(data["output"], "image.output")
            if _has(data, "output")
            else "output/render.png"
        ),
    )
    if image.width <= 0 or image.height <= 0:
        raise SceneFormatError("Image width/height must be > 0")
    if image.samples <= 0:
        logger.warn("Image.samples <= 0; clamping to 1")
        image.samples = 1
    if image.max_depth < 0:
        logger.warn("Image.max_depth < 0; clamping to 0")
        image.max_depth = 0
    return image


def _parse_camera(data: Any) -> CameraSpec:
    camera = CameraSpec()
    if _has(data, "look_from"):
        camera.look_from = _vec3(data["look_from"], "camera.look_from")
    elif _has(data, "position"):
        camera.look_from = _vec3(data["position"], "camera.position")
    if _has(data, "look_at"):
        camera.look_at = _vec3(data["look_at"], "camera.look_at")
    if _has(data, "up"):
        camera.up = _vec3(data["up"], "camera.up")
    if _has(data, "vfov"):
        camera.vfov_deg = _number(data["vfov"], "camera.vfov")
    elif _has(data, "fov"):
        camera.vfov_deg = _number(data["fov"], "camera.fov")
    if _has(data, "aperture"):
        camera.aperture = _number(data["aperture"], "camera.aperture")
    if _has(data, "focus_dist"):
        camera.focus_dist = _number(data["focus_dist"], "camera.focus_dist")
    if camera.vfov_deg <= 1.0 or camera.vfov_deg >= 179.0:
        logger.warn("Camera.vfov out of typical range; check degrees value.")
    return camera


def _parse_named_material(material_id: str, data: Any) -> MaterialSpec:
    if not _has(data, "type"):
        raise SceneFormatError(f"Material '{material_id}' is missing field 'type'")
    spec = MaterialSpec(id=material_id)
    spec.kind = parse_material_kind(_string(data["type"], f"materials.{material_id}.type"))
    if spec.kind in (MaterialKind.LAMBERTIAN, MaterialKind.METAL) and _has(data, "albedo"):
        spec.albedo = _color(data["albedo"], f"materials.{material_id}.albedo")
    if spec.kind is MaterialKind.METAL:
        if _has(data, "roughness"):
            spec.roughness = _number(data["roughness"], f"materials.{material_id}.roughness")
        spec.roughness = min(max(spec.roughness, 0.0), 1.0)
    if spec.kind is MaterialKind.DIELECTRIC:
        if _has(data, "ior"):
            spec.ior = _number(data["ior"], f"materials.{material_id}.ior")
        if spec.ior < 1.0:
            logger.warn(
                f"Dielectric ior < 1.0; clamping to 1.0 for material '{material_id}'"
            )
            spec.ior = 1.0
    return spec


def _parse_inline_material(material_id: str, data: dict[str, Any]) -> MaterialSpec:
    if "type" not in data:
        raise SceneFormatError("Inline material is missing field 'type'")
    spec = MaterialSpec(id=material_id)
    spec.kind = parse_material_kind(_string(data["type"], "material.type"))
    if "albedo" in data:
        spec.albedo = _color(data["albedo"], "albedo")
    if spec.kind is MaterialKind.METAL:
        if "fuzz" in data:
            spec.roughness = _number(data["fuzz"], "fuzz")
        elif "roughness" in data:
            spec.roughness = _number(data["roughness"], "roughness")
    if spec.kind is MaterialKind.DIELECTRIC and "ior" in data:
        spec.ior = _number(data["ior"], "ior")
    if spec.kind is MaterialKind.CHECKER and "color1" in data and "color2" in data:
        spec.albedo = _color(data["color1"], "color1")
    return spec


def _resolve_material(scene: SceneSpec, value: Any, owner: str) -> str:
    """Material id for an object's ``material`` field, registering inline ones."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        inline_id = f"__inline_{len(scene.objects)}"
        scene.materials.setdefault(inline_id, _parse_inline_material(inline_id, value))
        return inline_id
    raise SceneFormatError(f"{owner}.material must be a string (id) or object (inline)")


def _parse_object(scene: SceneSpec, data: Any) -> ObjectSpec:
    if not _has(data, "type"):
        raise SceneFormatError("Object missing 'type' field")
    kind = parse_object_kind(_string(data["type"], "objects[*].type"))
    obj = ObjectSpec(kind=kind)

    if kind is ObjectKind.SPHERE:
        if not all(key in data for key in ("center", "radius", "material")):
            raise SceneFormatError("Sphere requires 'center', 'radius', 'material'")
        obj.sphere.center = _vec3(data["center"], "objects[*].center")
        obj.sphere.radius = _number(data["radius"], "objects[*].radius")
        obj.sphere.material_id = _resolve_material(scene, data["material"], "Sphere")
        if obj.sphere.radius <= 0.0:
            raise SceneFormatError("Sphere.radius must be > 0")
    else:
        if not all(key in data for key in ("point", "normal", "material")):
            raise SceneFormatError("Plane requires 'point', 'normal', 'material'")
        obj.plane.point = _vec3(data["point"], "objects[*].point")
        obj.plane.normal = _vec3(data["normal"], "objects[*].normal")
        obj.plane.material_id = _resolve_material(scene, data["material"], "Plane")

    for material_id in (obj.sphere.material_id, obj.plane.material_id):
        if material_id and material_id not in scene.materials:
            logger.warn(f"Object references unknown material id: {material_id}")
    return obj


def _parse_light(data: Any) -> LightSpec:
    if not _has(data, "type"):
        raise SceneFormatError("Light missing 'type' field")
    light = LightSpec(kind=parse_light_kind(_string(data["type"], "lights[*].type")))
    if "position" not in data:
        raise SceneFormatError("PointLight requires 'position'")
    light.point.position = _vec3(data["position"], "lights[*].position")
    if "intensity" in data:
        light.point.intensity = _color(data["intensity"], "lights[*].intensity")
    return light


# --- entry points ------------------------------------------------------------


def load_scene_file(path: str | os.PathLike[str]) -> SceneSpec:
    """Read and parse the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8") as fh:
            text = fh.read()
    except OSError:
        logger.error(f"Failed to open scene file: {os.fspath(path)}")
        raise
    return parse_scene(text, os.fspath(path))


def parse_scene(text: str, origin: str = "string") -> SceneSpec:
    """Parse a JSON scene document; ``origin`` names it in log messages."""
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error(f"JSON parse error ({origin}): {exc}")
        raise SceneFormatError(f"JSON parse error ({origin}): {exc}") from exc

    scene = SceneSpec()

    if _has(root, "image"):
        scene.image = _parse_image(root["image"])
    else:
        logger.warn("Missing 'image' block; using defaults.")

    if _has(root, "camera"):
        scene.camera = _parse_camera(root["camera"])
    else:
        logger.warn("Missing 'camera' block; using defaults.")

    if _has(root, "materials"):
        materials = root["materials"]
        if not isinstance(materials, dict):
            raise SceneFormatError("'materials' must be an object (id -> material)")
        for material_id, data in materials.items():
            scene.materials.setdefault(material_id, _parse_named_material(material_id, data))
    else:
        logger.warn(
            "No 'materials' block; objects must reference built-ins or will fail later."
        )

    if _has(root, "objects"):
        objects = root["objects"]
        if not isinstance(objects, list):
            raise SceneFormatError("'objects' must be an array")
        for data in objects:
            scene.objects.append(_parse_object(scene, data))
    else:
        logger.warn("No 'objects' block; scene will be empty.")

    if _has(root, "lights"):
        lights = root["lights"]
        if not isinstance(lights, list):
            raise SceneFormatError("'lights' must be an array")
        scene.lights.extend(_parse_light(data) for data in lights)
    else:
        logger.warn(
            "No 'lights' block; only ambient/emit materials may contribute if supported."
        )

    logger.info(f"Loaded scene from: {origin}")
    return scene