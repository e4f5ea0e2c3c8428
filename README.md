# raylabs

A compact path tracer in pure Python with no third-party dependencies. It
intersects rays with spheres, planes and triangles, shades them with
diffuse, metal, glass and checkerboard materials under a gradient sky, and
writes images as 8-bit RGBA PNG files.

## Installation

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Modules

- `raylabs.mathutils`: `sqrt` (ten Newton steps, 0 for non-positive input) and
  the series-based `tan` used for the camera's field of view.
- `raylabs.vec3`: `Vec3` (alias `Point3`) with arithmetic, indexing,
  iteration, `length()` and `length_squared()`, plus `dot`, `cross` and
  `normalize` (the zero vector stays zero).
- `raylabs.color`: immutable `Color(r, g, b)`. `+` saturates to [0, 1];
  `+=` and scaling by a number do not. `clamp01()` clamps every component.
- `raylabs.ray`: `Ray` with `at(t)`, and `HitRecord` with
  `set_face_normal(ray, outward_normal)`.
- `raylabs.sampler`: seeded generators `Sampler` and `HashRandom`, each with
  `random_float(low=0.0, high=1.0)`.
- `raylabs.environment`: `sky_color(direction)`, a white-to-light-blue
  vertical gradient.
- `raylabs.shapes`: `Plane`, `Sphere` and `Triangle`. Each `hit(ray, t_min, t_max)`
  returns a `HitRecord` or `None`.
- `raylabs.scene`: `Scene` holding `Entity(shape, material)` items;
  `add(shape, material=None)` and `hit(ray, t_min, t_max)`, which returns the
  closest hit tagged with its material.
- `raylabs.camera`: `Camera(position, look_at, up, fov, aspect_ratio)` with
  `get_ray(s, t)`. Call `initialize()` after changing any field.
- `raylabs.materials`: `Lambertian`, `Metal`, `Dielectric` and `Checker`.
  `scatter(ray_in, rec)` returns a `Scatter(attenuation, scattered)` or
  `None` when the ray is absorbed. Also `reflect`, `refract` and
  `reflectance` (Schlick).
- `raylabs.integrator`: `PathTracer().trace(ray, scene, max_depth)`. Rays
  that hit nothing take the sky colour; surfaces without a material are
  shaded flat grey.
- `raylabs.image`: `Image(width, height, fill=None)` with `set_pixel`,
  `get_pixel` (out-of-range indices raise `ValueError`), `to_rgba()` and
  `write_file(path)`.
- `raylabs.logger`: `Logger` with pattern formatting (`%Y %m %d %H %M %S`,
  `%l` level, `%n` name, `%t` thread, `%g` file, `%#` line, `%f` function,
  `%v` message), `ConsoleSink`, size-rotating `FileSink`, child loggers via
  `create_child(name_suffix, ChildOptions(...))`, and the module-level
  `trace`, `debug`, `info`, `warn`, `error` and `critical` helpers that log
  through the global `Logger.instance()`.
- `raylabs.scene_loader`: `parse_scene(text, origin)` and
  `load_scene_file(path)` turn a JSON document into a `SceneSpec`.
- `raylabs.scene_builder`: `build_scene(spec, scene, camera)` fills a
  `Scene` and sets up a `Camera`; `load_scene_string(text, scene, camera=None)`
  reads a looser document format that also accepts triangles.

## Scene files

A scene is a JSON document with `image`, `camera`, `materials`, `objects`
and `lights` blocks:

```json
{
  "image": { "width": 320, "height": 180, "samples": 4, "max_depth": 4,
             "output": "output/render.png" },
  "camera": { "look_from": [0, 1, 3], "look_at": [0, 0, -1],
              "up": [0, 1, 0], "vfov": 60 },
  "materials": {
    "ground": { "type": "lambertian", "albedo": [0.5, 0.5, 0.5] },
    "mirror": { "type": "metal", "albedo": [0.9, 0.9, 0.9], "roughness": 0.05 }
  },
  "objects": [
    { "type": "plane", "point": [0, -0.5, 0], "normal": [0, 1, 0], "material": "ground" },
    { "type": "sphere", "center": [0, 0, -1], "radius": 0.5, "material": "mirror" },
    { "type": "sphere", "center": [1, 0, -1], "radius": 0.5,
      "material": { "type": "glass", "ior": 1.5 } }
  ],
  "lights": [
    { "type": "point", "position": [0, 5, 0], "intensity": [1, 1, 1] }
  ]
}
```

Material types are `lambertian` (or `diffuse`), `metal`, `dielectric`
(or `glass`) and `checker`; object types are `sphere` and `plane`. The
camera also accepts `position` for `look_from` and `fov` for `vfov`. A
material may be given by id or inline. Malformed JSON and invalid values
raise `raylabs.scene_loader.SceneFormatError`; an unreadable file raises
the usual `OSError`. Missing blocks and out-of-range values are reported
as warnings through `raylabs.logger`.

## Rendering from Python

```python
from raylabs.camera import Camera
from raylabs.image import Image
from raylabs.integrator import PathTracer
from raylabs.scene import Scene
from raylabs.scene_builder import build_scene
from raylabs.scene_loader import load_scene_file

spec = load_scene_file("scene.json")
scene = Scene()
camera = Camera()
build_scene(spec, scene, camera)

width, height, max_depth = 160, 90, 4
tracer = PathTracer()
image = Image(width, height)
for y in range(height):
    for x in range(width):
        ray = camera.get_ray(x / (width - 1), 1 - y / (height - 1))
        image.set_pixel(x, y, tracer.trace(ray, scene, max_depth))
image.write_file("render.png")
```

Every random source is a seeded generator, so the same scene renders the
same image each time.

## What it does not do

- There is no command-line program and no built-in render loop: the loop
  over pixels is yours to write, as above. The `samples`, `max_depth` and
  `output` values of the `image` block are parsed into `ImageSpec` but
  nothing acts on them by itself.
- Lights are parsed into `LightSpec` entries, but `PathTracer` does not use
  them; the only illumination is the sky gradient.
- The camera's `aperture` and `focus_dist` are parsed but the camera is a
  pinhole camera without depth of field.
- A `checker` material built through `build_scene` keeps only its first
  colour; the second is always `(0.2, 0.2, 0.2)` with scale 1.