# geometry/sphere.py
import math
from typing import List

from csgtracer.core.ray import Ray
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point
from csgtracer.geometry.hittable import HitRecord, Shape


class Sphere(Shape):
    """
    Unit sphere centred on the origin of its object space.

    Position and radius come from the transformation, e.g.
    ``translation(c) * scaling(r, r, r)``.
    """

    def hit_all(self, ray: Ray) -> List[HitRecord]:
        local_ray = self.inverse_transformation * ray
        origin = local_ray.origin.to_vec()
        direction = local_ray.dir

        # a t^2 + 2 b t + c = 0, with the reduced discriminant b^2 - a c
        a = direction.squared_norm()
        b = origin.dot(direction)
        c = origin.squared_norm() - 1.0
        delta = b * b - a * c
        if delta <= 0.0:
            return []

        sqrt_delta = math.sqrt(delta)
        roots = ((-b - sqrt_delta) / a, (-b + sqrt_delta) / a)
        return [self._sphere_record(ray, local_ray, t)
                for t in roots if local_ray.tmin < t < local_ray.tmax]

    def is_inside(self, point: Point) -> bool:
        return self._to_local(point).to_vec().squared_norm() < 1.0

    def _sphere_record(self, ray: Ray, local_ray: Ray, t: float) -> HitRecord:
        p = local_ray.at(t)
        return self._record(ray, local_ray, t, Normal(p.x, p.y, p.z), sphere_uv(p))


def sphere_uv(p: Point) -> UV:
    """
    Longitude/colatitude parametrisation of a point on the unit sphere.
    """
    u = math.atan2(p.y, p.x) / (2.0 * math.pi)
    if u < 0.0:
        u += 1.0
    v = math.acos(max(-1.0, min(1.0, p.z))) / math.pi
    return UV(u, v)
