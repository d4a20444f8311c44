# tests/test_vector.py
import pytest

from csgtracer.core.color import BLACK, WHITE, Color
from csgtracer.core.uv import UV
from csgtracer.core.vector import ORIGIN, VEC_X, VEC_Y, VEC_Z, Normal, Point, Vec
from csgtracer.exceptions import GeometryError


class TestVec:
    """Arithmetic on free vectors."""

    def test_operations(self):
        a = Vec(1.0, 2.0, 3.0)
        b = Vec(4.0, 6.0, 8.0)
        assert (a + b).is_close(Vec(5.0, 8.0, 11.0))
        assert (b - a).is_close(Vec(3.0, 4.0, 5.0))
        assert (a * 2).is_close(Vec(2.0, 4.0, 6.0))
        assert (2 * a).is_close(Vec(2.0, 4.0, 6.0))
        assert (-a).is_close(Vec(-1.0, -2.0, -3.0))
        assert a.dot(b) == pytest.approx(40.0)
        assert a.cross(b).is_close(Vec(-2.0, 4.0, -2.0))
        assert b.cross(a).is_close(Vec(2.0, -4.0, 2.0))

    def test_norm_and_normalize(self):
        v = Vec(3.0, 0.0, 4.0)
        assert v.squared_norm() == pytest.approx(25.0)
        assert v.norm() == pytest.approx(5.0)
        assert v.normalize().is_close(Vec(0.6, 0.0, 0.8))

    def test_zero_vector_cannot_be_normalized(self):
        with pytest.raises(GeometryError):
            Vec().normalize()

    def test_axes_are_right_handed(self):
        assert VEC_X.cross(VEC_Y).is_close(VEC_Z)

    def test_is_close_rejects_mixed_types(self):
        with pytest.raises(GeometryError):
            Vec(1.0, 2.0, 3.0).is_close(Point(1.0, 2.0, 3.0))

    def test_conversions(self):
        assert Vec(1.0, 2.0, 3.0).to_normal().is_close(Normal(1.0, 2.0, 3.0))
        assert Normal(1.0, 2.0, 3.0).to_vec().is_close(Vec(1.0, 2.0, 3.0))


class TestPoint:
    """Points combine with vectors but not with each other."""

    def test_operations(self):
        p1 = Point(1.0, 2.0, 3.0)
        p2 = Point(4.0, 6.0, 8.0)
        v = Vec(4.0, 6.0, 8.0)
        assert (p1 + v).is_close(Point(5.0, 8.0, 11.0))
        assert (p2 - p1).is_close(Vec(3.0, 4.0, 5.0))
        assert (p1 - v).is_close(Point(-3.0, -4.0, -5.0))
        assert (p1 - ORIGIN).is_close(p1.to_vec())


class TestColor:
    """Colors are plain RGB triples with scalar and channel-wise products."""

    def test_operations(self):
        c1 = Color(1.0, 2.0, 3.0)
        c2 = Color(5.0, 7.0, 9.0)
        assert (c1 + c2).is_close(Color(6.0, 9.0, 12.0))
        assert (c2 - c1).is_close(Color(4.0, 5.0, 6.0))
        assert (c1 * c2).is_close(Color(5.0, 14.0, 27.0))
        assert (c1 * 2.0).is_close(Color(2.0, 4.0, 6.0))
        assert (2.0 * c1).is_close(Color(2.0, 4.0, 6.0))
        assert (c2 / 2.0).is_close(Color(2.5, 3.5, 4.5))
        assert not c1.is_close(c2)

    def test_luminosity(self):
        assert Color(1.0, 2.0, 3.0).luminosity() == pytest.approx(2.0)
        assert Color(9.0, 5.0, 7.0).luminosity() == pytest.approx(7.0)
        assert Color(9.0, 5.0, 7.0).max_channel() == pytest.approx(9.0)

    def test_constants(self):
        assert BLACK.is_close(Color())
        assert WHITE.is_close(Color(1.0, 1.0, 1.0))


class TestUV:
    def test_is_close(self):
        a = UV(0.25, 0.5)
        assert a.is_close(UV(0.25, 0.5 + 1e-6))
        assert not a.is_close(UV(0.5, 0.25))
        assert not a.is_close(UV(0.25, 0.51))
