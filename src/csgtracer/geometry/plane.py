# geometry/plane.py
import math
from typing import List

from csgtracer.core.ray import Ray
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point
from csgtracer.geometry.hittable import HitRecord, Shape

# Directions with a smaller z component are treated as parallel to the plane
PARALLEL_EPSILON = 1e-9


class Plane(Shape):
    """
    The xy plane (z = 0) of object space; everything below it counts as inside.

    Surface coordinates tile the plane with period 1 along x and y.
    """

    def hit_all(self, ray: Ray) -> List[HitRecord]:
        local_ray = self.inverse_transformation * ray
        dz = local_ray.dir.z
        if abs(dz) < PARALLEL_EPSILON:
            return []

        t = -local_ray.origin.z / dz
        if not local_ray.tmin < t < local_ray.tmax:
            return []

        p = local_ray.at(t)
        uv = UV(p.x - math.floor(p.x), p.y - math.floor(p.y))
        return [self._record(ray, local_ray, t, Normal(0.0, 0.0, 1.0), uv)]

    def is_inside(self, point: Point) -> bool:
        return self._to_local(point).z < 0.0
