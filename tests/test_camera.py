import pytest

from raylabs.camera import Camera
from raylabs.vec3 import Point3, Vec3, normalize


def test_default_constructor():
    cam = Camera()
    assert (cam.position.x, cam.position.y, cam.position.z) == (0.0, 0.0, 0.0)
    assert cam.fov == 90.0
    assert cam.aspect_ratio == pytest.approx(16.0 / 9.0)


def test_with_parameters():
    cam = Camera(Point3(1, 2, 3), Point3(0, 0, 0), Vec3(0, 1, 0), 45.0, 1.5)
    assert (cam.position.x, cam.position.y, cam.position.z) == (1.0, 2.0, 3.0)
    assert cam.look_at.x == 0.0
    assert cam.fov == 45.0
    assert cam.aspect_ratio == 1.5


def test_get_ray_origin():
    cam = Camera(Point3(0, 0, 0), Point3(0, 0, -1), Vec3(0, 1, 0), 90.0, 16.0 / 9.0)
    ray = cam.get_ray(0.5, 0.5)
    assert (ray.origin.x, ray.origin.y, ray.origin.z) == (0.0, 0.0, 0.0)


def test_get_ray_corners():
    cam = Camera(Point3(0, 0, 0), Point3(0, 0, -1), Vec3(0, 1, 0), 90.0, 1.0)
    bottom_left = cam.get_ray(0.0, 0.0)
    top_right = cam.get_ray(1.0, 1.0)
    assert bottom_left.origin.x == 0.0
    assert top_right.origin.x == 0.0
    assert bottom_left.direction.x == pytest.approx(-top_right.direction.x)
    assert bottom_left.direction.y == pytest.approx(-top_right.direction.y)


def test_center_ray_points_at_target():
    cam = Camera(Point3(0, 0, 0), Point3(0, 0, -1), Vec3(0, 1, 0), 60.0, 2.0)
    d = normalize(cam.get_ray(0.5, 0.5).direction)
    assert (d.x, d.y, d.z) == pytest.approx((0.0, 0.0, -1.0), abs=1e-9)


def test_reinitialize_after_change():
    cam = Camera()
    narrow_before = cam.get_ray(1.0, 0.5).direction.x
    cam.fov = 30.0
    cam.initialize()
    assert cam.get_ray(1.0, 0.5).direction.x < narrow_before