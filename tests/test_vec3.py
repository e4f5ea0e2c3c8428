import pytest

from raylabs.vec3 import Point3, Vec3, cross, dot, normalize


def test_construction():
    v = Vec3()
    assert (v.x, v.y, v.z) == (0.0, 0.0, 0.0)
    v2 = Vec3(1, 2, 3)
    assert (v2.x, v2.y, v2.z) == (1.0, 2.0, 3.0)


def test_addition():
    c = Vec3(1, 2, 3) + Vec3(4, 5, 6)
    assert c == Vec3(5, 7, 9)


def test_subtraction():
    c = Vec3(4, 5, 6) - Vec3(1, 2, 3)
    assert c == Vec3(3, 3, 3)


def test_scalar_multiplication():
    v = Vec3(1, 2, 3)
    assert v * 2.0 == Vec3(2, 4, 6)
    assert 3.0 * v == Vec3(3, 6, 9)


def test_scalar_division():
    assert Vec3(2, 4, 6) / 2.0 == Vec3(1, 2, 3)


def test_negation():
    assert -Vec3(1, -2, 3) == Vec3(-1, 2, -3)


def test_dot_product():
    assert dot(Vec3(1, 0, 0), Vec3(0, 1, 0)) == 0.0
    assert dot(Vec3(1, 2, 3), Vec3(4, 5, 6)) == 32.0


def test_cross_product():
    assert cross(Vec3(1, 0, 0), Vec3(0, 1, 0)) == Vec3(0, 0, 1)


def test_length():
    assert Vec3(3, 4, 0).length() == pytest.approx(5.0, rel=1e-3)
    assert Vec3(1, 1, 1).length() == pytest.approx(1.732, rel=1e-3)


def test_normalize():
    n = normalize(Vec3(3, 4, 0))
    assert n.length() == pytest.approx(1.0, rel=1e-3)
    assert n.x == pytest.approx(0.6, rel=1e-3)
    assert n.y == pytest.approx(0.8, rel=1e-3)


def test_normalize_zero_stays_zero():
    assert normalize(Vec3()) == Vec3(0, 0, 0)


def test_indexing_and_assignment():
    v = Vec3(1, 2, 3)
    assert [v[0], v[1], v[2]] == [1, 2, 3]
    v[1] = 7
    assert v.y == 7


def test_unpacking():
    x, y, z = Vec3(4, 5, 6)
    assert (x, y, z) == (4, 5, 6)


def test_str_format():
    assert str(Vec3(1, 2, 3)) == "1 2 3"


def test_point_alias():
    assert Point3(1, 2, 3) == Vec3(1, 2, 3)