import json

import pytest

from raylabs.color import Color
from raylabs.logger import Logger, LoggerConfig, LogLevel, Sink
from raylabs.scene_loader import (
    LightKind,
    MaterialKind,
    ObjectKind,
    SceneFormatError,
    load_scene_file,
    parse_light_kind,
    parse_material_kind,
    parse_object_kind,
    parse_scene,
)
from raylabs.vec3 import Vec3


@pytest.fixture
def log_lines():
    lines = []

    class _Capture(Sink):
        def log(self, line, level, colorize):
            lines.append(line)

    capture = Logger(
        LoggerConfig(name="test", level=LogLevel.TRACE, pattern="%l %v", use_color=False)
    )
    capture.add_sink(_Capture())
    previous = Logger.instance()
    Logger.set_instance(capture)
    yield lines
    Logger.set_instance(previous)


def _scene(**blocks):
    return json.dumps(blocks)


def test_empty_document_uses_defaults(log_lines):
    scene = parse_scene("{}")
    assert scene.image.width == 800
    assert scene.image.height == 450
    assert scene.image.samples == 1
    assert scene.image.max_depth == 4
    assert scene.image.output_path == "output/render.png"
    assert scene.camera.vfov_deg == 45.0
    assert scene.camera.look_at == Vec3(0, 0, -1)
    assert scene.objects == [] and scene.lights == [] and scene.materials == {}
    assert "WARN Missing 'image' block; using defaults." in log_lines
    assert "WARN Missing 'camera' block; using defaults." in log_lines
    assert "WARN No 'objects' block; scene will be empty." in log_lines
    assert log_lines[-1] == "INFO Loaded scene from: string"


def test_image_block_values_and_clamping(log_lines):
    text = _scene(image={"width": 320, "height": 240, "samples": 0, "max_depth": -3,
                         "output": "out.png"})
    image = parse_scene(text).image
    assert (image.width, image.height) == (320, 240)
    assert image.samples == 1
    assert image.max_depth == 0
    assert image.output_path == "out.png"
    assert "WARN Image.samples <= 0; clamping to 1" in log_lines
    assert "WARN Image.max_depth < 0; clamping to 0" in log_lines


@pytest.mark.parametrize("image", [{"width": 0}, {"height": -5}])
def test_non_positive_image_size_raises(log_lines, image):
    with pytest.raises(SceneFormatError, match="Image width/height must be > 0"):
        parse_scene(_scene(image=image))


def test_camera_aliases(log_lines):
    text = _scene(camera={"position": [0, 1, 3], "look_at": [0, 0, 0],
                          "up": [0, 1, 0], "fov": 60.0, "aperture": 0.5})
    camera = parse_scene(text).camera
    assert camera.look_from == Vec3(0, 1, 3)
    assert camera.look_at == Vec3(0, 0, 0)
    assert camera.vfov_deg == 60.0
    assert camera.aperture == 0.5
    assert camera.focus_dist == 1.0


def test_look_from_takes_precedence(log_lines):
    text = _scene(camera={"look_from": [1, 2, 3], "position": [9, 9, 9],
                          "vfov": 30, "fov": 70})
    camera = parse_scene(text).camera
    assert camera.look_from == Vec3(1, 2, 3)
    assert camera.vfov_deg == 30.0


def test_camera_fov_out_of_range_warns(log_lines):
    camera = parse_scene(_scene(camera={"fov": 180})).camera
    assert camera.vfov_deg == 180.0
    assert "WARN Camera.vfov out of typical range; check degrees value." in log_lines


def test_camera_fov_in_range_does_not_warn(log_lines):
    camera = parse_scene(_scene(camera={"fov": 90})).camera
    assert camera.vfov_deg == 90.0
    assert "WARN Camera.vfov out of typical range; check degrees value." not in log_lines


def test_bad_vec3_raises(log_lines):
    with pytest.raises(SceneFormatError, match="Expected 3-length array for Vec3 at camera.look_at"):
        parse_scene(_scene(camera={"look_at": [0, 0]}))


def test_named_materials_clamped(log_lines):
    text = _scene(materials={
        "shiny": {"type": "metal", "albedo": [0.9, 0.1, 0.2], "roughness": 2.0},
        "smooth": {"type": "Metal", "roughness": -1.0},
        "glass": {"type": "glass", "ior": 0.5},
        "matte": {"type": "diffuse"},
    })
    materials = parse_scene(text).materials
    assert materials["shiny"].kind is MaterialKind.METAL
    assert materials["shiny"].albedo == Color(0.9, 0.1, 0.2)
    assert materials["shiny"].roughness == 1.0
    assert materials["smooth"].roughness == 0.0
    assert materials["glass"].kind is MaterialKind.DIELECTRIC
    assert materials["glass"].ior == 1.0
    assert materials["matte"].kind is MaterialKind.LAMBERTIAN
    assert materials["matte"].albedo == Color(0.8, 0.8, 0.8)
    assert materials["matte"].id == "matte"
    assert "WARN Dielectric ior < 1.0; clamping to 1.0 for material 'glass'" in log_lines


def test_materials_must_be_object(log_lines):
    with pytest.raises(SceneFormatError, match="'materials' must be an object"):
        parse_scene(_scene(materials=[]))


def test_material_missing_type(log_lines):
    with pytest.raises(SceneFormatError, match="Material 'm' is missing field 'type'"):
        parse_scene(_scene(materials={"m": {"albedo": [1, 1, 1]}}))


@pytest.mark.parametrize(
    "name, kind",
    [
        ("lambertian", MaterialKind.LAMBERTIAN),
        ("Diffuse", MaterialKind.LAMBERTIAN),
        ("METAL", MaterialKind.METAL),
        ("dielectric", MaterialKind.DIELECTRIC),
        ("glass", MaterialKind.DIELECTRIC),
        ("checker", MaterialKind.CHECKER),
    ],
)
def test_parse_material_kind(name, kind):
    assert parse_material_kind(name) is kind


def test_unknown_kinds_raise():
    with pytest.raises(SceneFormatError, match="Unknown material type: Wood"):
        parse_material_kind("Wood")
    with pytest.raises(SceneFormatError, match="Unknown object type: cube"):
        parse_object_kind("cube")
    with pytest.raises(SceneFormatError, match="Unknown light type: spot"):
        parse_light_kind("spot")


def test_object_and_light_kinds():
    assert parse_object_kind("Sphere") is ObjectKind.SPHERE
    assert parse_object_kind("plane") is ObjectKind.PLANE
    assert parse_light_kind("PointLight") is LightKind.POINT
    assert parse_light_kind("point") is LightKind.POINT


def test_objects_with_named_and_inline_materials(log_lines):
    text = _scene(
        materials={"red": {"type": "lambertian", "albedo": [1, 0, 0]}},
        objects=[
            {"type": "sphere", "center": [0, 0, -1], "radius": 0.5, "material": "red"},
            {"type": "plane", "point": [0, -1, 0], "normal": [0, 1, 0],
             "material": {"type": "metal", "fuzz": 0.3, "albedo": [0.5, 0.5, 0.5]}},
            {"type": "sphere", "center": [1, 0, -1], "radius": 0.5,
             "material": {"type": "checker", "color1": [1, 1, 1], "color2": [0, 0, 0]}},
        ],
    )
    scene = parse_scene(text)
    sphere, plane, checker = scene.objects
    assert sphere.kind is ObjectKind.SPHERE
    assert sphere.sphere.center == Vec3(0, 0, -1)
    assert sphere.sphere.radius == 0.5
    assert sphere.material_id == "red"
    assert plane.kind is ObjectKind.PLANE
    assert plane.plane.normal == Vec3(0, 1, 0)
    assert plane.material_id == "__inline_1"
    assert scene.materials["__inline_1"].kind is MaterialKind.METAL
    assert scene.materials["__inline_1"].roughness == 0.3
    assert checker.material_id == "__inline_2"
    assert scene.materials["__inline_2"].albedo == Color(1, 1, 1)
    assert not any("unknown material" in line for line in log_lines)


def test_unknown_material_reference_warns(log_lines):
    text = _scene(objects=[{"type": "sphere", "center": [0, 0, 0], "radius": 1,
                            "material": "missing"}])
    scene = parse_scene(text)
    assert scene.objects[0].material_id == "missing"
    assert "WARN Object references unknown material id: missing" in log_lines


@pytest.mark.parametrize(
    "obj, message",
    [
        ({"center": [0, 0, 0]}, "Object missing 'type' field"),
        ({"type": "sphere", "center": [0, 0, 0], "material": "m"},
         "Sphere requires 'center', 'radius', 'material'"),
        ({"type": "sphere", "center": [0, 0, 0], "radius": 0, "material": "m"},
         "Sphere.radius must be > 0"),
        ({"type": "sphere", "center": [0, 0, 0], "radius": 1, "material": 3},
         "Sphere.material must be a string"),
        ({"type": "plane", "point": [0, 0, 0], "material": "m"},
         "Plane requires 'point', 'normal', 'material'"),
        ({"type": "plane", "point": [0, 0, 0], "normal": [0, 1, 0], "material": [1]},
         "Plane.material must be a string"),
    ],
)
def test_invalid_objects_raise(log_lines, obj, message):
    with pytest.raises(SceneFormatError, match=message):
        parse_scene(_scene(objects=[obj]))


def test_objects_must_be_array(log_lines):
    with pytest.raises(SceneFormatError, match="'objects' must be an array"):
        parse_scene(_scene(objects={}))


def test_lights(log_lines):
    text = _scene(lights=[
        {"type": "PointLight", "position": [1, 2, 3], "intensity": [4, 5, 6]},
        {"type": "point", "position": [0, 0, 0]},
    ])
    first, second = parse_scene(text).lights
    assert first.kind is LightKind.POINT
    assert first.point.position == Vec3(1, 2, 3)
    assert first.point.intensity == Color(4, 5, 6)
    assert second.point.intensity == Color(1, 1, 1)


def test_light_errors(log_lines):
    with pytest.raises(SceneFormatError, match="PointLight requires 'position'"):
        parse_scene(_scene(lights=[{"type": "point"}]))
    with pytest.raises(SceneFormatError, match="'lights' must be an array"):
        parse_scene(_scene(lights={"type": "point"}))


def test_invalid_json_raises_and_logs(log_lines):
    with pytest.raises(SceneFormatError, match="JSON parse error"):
        parse_scene("{not json", "broken.json")
    assert any(line.startswith("ERROR JSON parse error (broken.json)") for line in log_lines)


def test_load_scene_file_round_trip(tmp_path, log_lines):
    path = tmp_path / "scene.json"
    path.write_text(_scene(image={"width": 64, "height": 32},
                           objects=[{"type": "sphere", "center": [0, 0, -2],
                                     "radius": 1, "material": {"type": "glass", "ior": 1.3}}]))
    scene = load_scene_file(path)
    assert (scene.image.width, scene.image.height) == (64, 32)
    assert scene.materials["__inline_0"].ior == 1.3
    assert log_lines[-1] == f"INFO Loaded scene from: {path}"


def test_load_missing_file_raises(tmp_path, log_lines):
    path = tmp_path / "absent.json"
    with pytest.raises(OSError):
        load_scene_file(path)
    assert f"ERROR Failed to open scene file: {path}" in log_lines