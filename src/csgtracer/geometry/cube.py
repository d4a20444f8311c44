# geometry/cube.py
import math
from typing import List

from csgtracer.core.ray import Ray
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point
from csgtracer.geometry.hittable import HitRecord, Shape

AXES = ("x", "y", "z")

# Tolerance used to decide on which face (0 or 1) a hit point lies
FACE_EPSILON = 1e-6

# (column, row) of each face in the 4x3 cross-shaped uv atlas, keyed by
# (axis, side). Rows grow with v, so row 2 is the top of the texture.
ATLAS = {
    ("x", 0): (0, 1),
    ("y", 0): (1, 1),
    ("x", 1): (2, 1),
    ("y", 1): (3, 1),
    ("z", 1): (1, 2),
    ("z", 0): (1, 0),
}

# In-face coordinates for the faces orthogonal to each axis
FACE_COORDINATES = {
    "x": ("y", "z"),
    "y": ("x", "z"),
    "z": ("x", "y"),
}


# Largest float below 1, keeps atlas coordinates inside their own cell
_BELOW_ONE = math.nextafter(1.0, 0.0)


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), _BELOW_ONE)


class Cube(Shape):
    """
    Axis-aligned unit cube [0, 1]^3 of object space, intersected with the
    slab method. Each face maps to its own cell of a cross-shaped uv atlas.
    """

    def hit_all(self, ray: Ray) -> List[HitRecord]:
        local_ray = self.inverse_transformation * ray
        origin, direction = local_ray.origin, local_ray.dir

        t_near, t_far = -math.inf, math.inf
        axis_near = axis_far = None
        for a in AXES:
            o = getattr(origin, a)
            d = getattr(direction, a)
            if d == 0.0:
                # Parallel to this slab: the origin must already lie inside it
                if o < 0.0 or o > 1.0:
                    return []
                continue
            inv_d = 1.0 / d
            t0 = -o * inv_d
            t1 = (1.0 - o) * inv_d
            if inv_d < 0:
                t0, t1 = t1, t0
            if t0 > t_near:
                t_near, axis_near = t0, a
            if t1 < t_far:
                t_far, axis_far = t1, a
            if t_far <= t_near:
                return []

        hits = []
        for t, axis in ((t_near, axis_near), (t_far, axis_far)):
            if local_ray.tmin < t < local_ray.tmax:
                hits.append(self._cube_record(ray, local_ray, t, axis))
        return hits

    def is_inside(self, point: Point) -> bool:
        p = self._to_local(point)
        return 0.0 < p.x < 1.0 and 0.0 < p.y < 1.0 and 0.0 < p.z < 1.0

    def _cube_record(self, ray: Ray, local_ray: Ray, t: float, axis: str) -> HitRecord:
        p = local_ray.at(t)
        side = 1 if abs(getattr(p, axis) - 1.0) < FACE_EPSILON else 0
        sign = 1.0 if side == 1 else -1.0
        normal = Normal(*(sign if a == axis else 0.0 for a in AXES))
        return self._record(ray, local_ray, t, normal, cube_uv(p, axis, side))


def cube_uv(p: Point, axis: str, side: int) -> UV:
    """
    Position of ``p`` (lying on face ``axis`` = ``side``) in the uv atlas.
    """
    col, row = ATLAS[(axis, side)]
    first, second = FACE_COORDINATES[axis]
    a = _clamp_unit(getattr(p, first))
    b = _clamp_unit(getattr(p, second))
    return UV((col + a) / 4.0, (row + b) / 3.0)
