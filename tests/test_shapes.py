# tests/test_shapes.py
import pytest

from csgtracer.core.ray import Ray
from csgtracer.core.transform import scaling, translation
from csgtracer.core.uv import UV
from csgtracer.core.vector import VEC_X, Normal, Point, Vec
from csgtracer.geometry import Cube, HitRecord, Plane, Sphere, World
from csgtracer.geometry.cube import cube_uv


class TestSphere:
    """Unit sphere centred on the origin of object space."""

    def test_hit_from_outside(self, unit_sphere):
        ray = Ray(Point(0.0, 0.0, 2.0), Vec(0.0, 0.0, -1.0))
        hit = unit_sphere.hit(ray)
        expected = HitRecord(
            world_point=Point(0.0, 0.0, 1.0),
            normal=Normal(0.0, 0.0, 1.0),
            surface_point=UV(0.0, 0.0),
            t=1.0,
            ray=ray,
            shape=unit_sphere,
        )
        assert expected.is_close(hit)
        assert hit.shape is unit_sphere

        ray = Ray(Point(3.0, 0.0, 0.0), -VEC_X)
        hit = unit_sphere.hit(ray)
        assert hit.world_point.is_close(Point(1.0, 0.0, 0.0))
        assert hit.normal.is_close(Normal(1.0, 0.0, 0.0))
        assert hit.surface_point.is_close(UV(0.0, 0.5))
        assert hit.t == pytest.approx(2.0)

    def test_hit_from_inside_flips_normal(self, unit_sphere):
        hits = unit_sphere.hit_all(Ray(Point(0.0, 0.0, 0.0), VEC_X))
        assert len(hits) == 1
        assert hits[0].t == pytest.approx(1.0)
        assert hits[0].world_point.is_close(Point(1.0, 0.0, 0.0))
        assert hits[0].normal.is_close(Normal(-1.0, 0.0, 0.0))

    def test_hit_all_is_sorted(self, unit_sphere):
        hits = unit_sphere.hit_all(Ray(Point(0.0, 0.0, 3.0), Vec(0.0, 0.0, -1.0)))
        assert [h.t for h in hits] == pytest.approx([2.0, 4.0])

    def test_miss(self, unit_sphere):
        assert unit_sphere.hit(Ray(Point(0.0, 0.0, 2.0), VEC_X)) is None
        assert unit_sphere.hit_all(Ray(Point(0.0, 0.0, 2.0), VEC_X)) == []

    def test_tangent_ray_misses(self, unit_sphere):
        assert unit_sphere.hit_all(Ray(Point(-2.0, 0.0, 1.0), VEC_X)) == []

    def test_transformed(self):
        sphere = Sphere(translation(Vec(10.0, 0.0, 0.0)))
        hit = sphere.hit(Ray(Point(10.0, 0.0, 2.0), Vec(0.0, 0.0, -1.0)))
        assert hit.world_point.is_close(Point(10.0, 0.0, 1.0))
        assert hit.normal.is_close(Normal(0.0, 0.0, 1.0))
        assert hit.t == pytest.approx(1.0)
        # The untransformed position is empty now
        assert sphere.hit(Ray(Point(0.0, 0.0, 2.0), Vec(0.0, 0.0, -1.0))) is None

    def test_scaled_normal_is_unit_length(self):
        sphere = Sphere(scaling(1.0, 1.0, 2.0))
        hit = sphere.hit(Ray(Point(0.0, 0.0, 3.0), Vec(0.0, 0.0, -1.0)))
        assert hit.t == pytest.approx(1.0)
        assert hit.normal.is_close(Normal(0.0, 0.0, 1.0))

    def test_ray_limits(self, unit_sphere):
        ray = Ray(Point(0.0, 0.0, 3.0), Vec(0.0, 0.0, -1.0), tmax=3.0)
        assert [h.t for h in unit_sphere.hit_all(ray)] == pytest.approx([2.0])

    def test_is_inside(self):
        sphere = Sphere(translation(Vec(0.0, 0.0, 1.0)) * scaling(0.5, 0.5, 0.5))
        assert sphere.is_inside(Point(0.0, 0.0, 1.2))
        assert not sphere.is_inside(Point(0.0, 0.0, 0.2))
        assert not sphere.is_inside(Point(0.0, 0.0, 1.5))


class TestPlane:
    """The z = 0 plane; the half-space below it is the inside."""

    def test_hit(self, xy_plane):
        ray = Ray(Point(0.0, 0.0, 1.0), Vec(0.0, 0.0, -1.0))
        hit = xy_plane.hit(ray)
        assert hit.t == pytest.approx(1.0)
        assert hit.world_point.is_close(Point(0.0, 0.0, 0.0))
        assert hit.normal.is_close(Normal(0.0, 0.0, 1.0))
        assert hit.surface_point.is_close(UV(0.0, 0.0))

    def test_hit_from_below(self, xy_plane):
        hit = xy_plane.hit(Ray(Point(0.0, 0.0, -1.0), Vec(0.0, 0.0, 1.0)))
        assert hit.normal.is_close(Normal(0.0, 0.0, -1.0))

    def test_parallel_and_receding_rays_miss(self, xy_plane):
        assert xy_plane.hit(Ray(Point(0.0, 0.0, 1.0), VEC_X)) is None
        assert xy_plane.hit(Ray(Point(0.0, 0.0, 1.0), Vec(0.0, 0.0, 1.0))) is None

    def test_uv_tiles(self, xy_plane):
        down = Vec(0.0, 0.0, -1.0)
        assert xy_plane.hit(Ray(Point(0.25, 0.75, 1.0), down)).surface_point.is_close(UV(0.25, 0.75))
        assert xy_plane.hit(Ray(Point(4.25, 7.5, 1.0), down)).surface_point.is_close(UV(0.25, 0.5))
        assert xy_plane.hit(Ray(Point(-0.25, -0.75, 1.0), down)).surface_point.is_close(UV(0.75, 0.25))

    def test_transformed(self):
        plane = Plane(translation(Vec(0.0, 0.0, 1.0)))
        hit = plane.hit(Ray(Point(0.0, 0.0, 3.0), Vec(0.0, 0.0, -1.0)))
        assert hit.t == pytest.approx(2.0)
        assert hit.world_point.is_close(Point(0.0, 0.0, 1.0))

    def test_is_inside(self, xy_plane):
        assert xy_plane.is_inside(Point(3.0, -2.0, -1.0))
        assert not xy_plane.is_inside(Point(0.0, 0.0, 1.0))
        assert not xy_plane.is_inside(Point(0.0, 0.0, 0.0))


class TestCube:
    """Axis-aligned unit cube [0, 1]^3."""

    def test_hit_through(self):
        cube = Cube()
        hits = cube.hit_all(Ray(Point(0.5, 0.5, 2.0), Vec(0.0, 0.0, -1.0)))
        assert [h.t for h in hits] == pytest.approx([1.0, 2.0])
        top, bottom = hits
        assert top.world_point.is_close(Point(0.5, 0.5, 1.0))
        assert top.normal.is_close(Normal(0.0, 0.0, 1.0))
        assert top.surface_point.is_close(UV(0.375, 2.5 / 3.0))
        assert bottom.world_point.is_close(Point(0.5, 0.5, 0.0))
        # Exit normals face the incoming ray too
        assert bottom.normal.is_close(Normal(0.0, 0.0, 1.0))
        assert bottom.surface_point.is_close(UV(0.375, 0.5 / 3.0))

    def test_miss(self):
        cube = Cube()
        assert cube.hit_all(Ray(Point(2.0, 2.0, 2.0), Vec(0.0, 0.0, -1.0))) == []
        assert cube.hit_all(Ray(Point(2.0, 0.5, 2.0), Vec(0.0, 0.0, 1.0))) == []
        assert cube.hit(Ray(Point(-1.0, 3.0, 0.5), Vec(1.0, 1.0, 0.0))) is None

    def test_ray_stopping_inside(self):
        cube = Cube()
        ray = Ray(Point(0.5, 0.5, 2.0), Vec(0.0, 0.0, -1.0), tmax=1.5)
        assert [h.t for h in cube.hit_all(ray)] == pytest.approx([1.0])

    def test_origin_inside(self):
        cube = Cube()
        hits = cube.hit_all(Ray(Point(0.5, 0.5, 0.5), VEC_X))
        assert [h.t for h in hits] == pytest.approx([0.5])
        assert hits[0].world_point.is_close(Point(1.0, 0.5, 0.5))
        assert hits[0].normal.is_close(Normal(-1.0, 0.0, 0.0))

    def test_transformed(self):
        cube = Cube(scaling(2.0, 2.0, 2.0))
        hit = cube.hit(Ray(Point(1.0, 1.0, 5.0), Vec(0.0, 0.0, -1.0)))
        assert hit.t == pytest.approx(3.0)
        assert hit.world_point.is_close(Point(1.0, 1.0, 2.0))
        assert hit.normal.is_close(Normal(0.0, 0.0, 1.0))

    def test_is_inside(self):
        cube = Cube()
        assert cube.is_inside(Point(0.5, 0.5, 0.5))
        assert not cube.is_inside(Point(1.5, 0.5, 0.5))
        assert not cube.is_inside(Point(1.0, 0.5, 0.5))

    def test_uv_atlas(self):
        assert cube_uv(Point(0.0, 0.25, 0.75), "x", 0).is_close(UV(0.0625, 1.75 / 3.0))
        assert cube_uv(Point(1.0, 0.0, 0.0), "x", 1).is_close(UV(0.5, 1.0 / 3.0))
        # Coordinates on the far edge stay inside the face cell
        uv = cube_uv(Point(1.0, 1.0, 1.0), "z", 1)
        assert 1 <= uv.u * 4.0 < 2
        assert 2 <= uv.v * 3.0 < 3


class TestWorld:
    def test_closest_hit(self):
        world = World([Sphere(translation(Vec(2.0, 0.0, 0.0))),
                       Sphere(translation(Vec(8.0, 0.0, 0.0)))])
        hit = world.hit(Ray(Point(0.0, 0.0, 0.0), VEC_X))
        assert hit.world_point.is_close(Point(1.0, 0.0, 0.0))
        hit = world.hit(Ray(Point(10.0, 0.0, 0.0), -VEC_X))
        assert hit.world_point.is_close(Point(9.0, 0.0, 0.0))

    def test_empty_world(self):
        world = World()
        assert len(world) == 0
        assert world.hit(Ray(Point(0.0, 0.0, 0.0), VEC_X)) is None

    def test_add_and_iterate(self, unit_sphere, xy_plane):
        world = World()
        world.add(unit_sphere)
        world.add(xy_plane)
        assert len(world) == 2
        assert list(world) == [unit_sphere, xy_plane]
