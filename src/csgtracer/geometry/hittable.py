# geometry/hittable.py
from typing import List, Optional

from csgtracer.core.ray import Ray
from csgtracer.core.transform import Transformation
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point


class HitRecord:
    """
    Records details of a ray-object intersection.

    ``world_point`` and ``normal`` are expressed in the frame of ``ray``; the
    normal is unit length and points against the incoming ray. ``shape`` is
    always the primitive that was hit, even when the hit went through a CSG.
    """
    __slots__ = ("world_point", "normal", "surface_point", "t", "ray", "shape")

    def __init__(self, world_point: Point, normal: Normal, surface_point: UV,
                 t: float, ray: Ray, shape: "Shape"):
        self.world_point = world_point
        self.normal = normal
        self.surface_point = surface_point
        self.t = t
        self.ray = ray
        self.shape = shape

    @property
    def material(self):
        return self.shape.material

    def is_close(self, other: Optional["HitRecord"], epsilon: float = 1e-5) -> bool:
        if other is None:
            return False
        return (self.world_point.is_close(other.world_point, epsilon) and
                self.normal.is_close(other.normal, epsilon) and
                self.surface_point.is_close(other.surface_point, epsilon) and
                abs(self.t - other.t) <= epsilon)

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, world_point={self.world_point!r}, "
                f"normal={self.normal!r}, surface_point={self.surface_point!r})")


class Shape:
    """
    Abstract base class for everything a ray can hit.

    Concrete shapes are defined in their own object space; ``transformation``
    maps that space into the parent frame (the world, or the enclosing CSG).
    Subclasses implement ``hit_all`` and ``is_inside``; ``hit`` falls back to
    the first element of ``hit_all``.
    """
    def __init__(self, transformation: Optional[Transformation] = None, material=None):
        if transformation is None:
            transformation = Transformation()
        if material is None:
            # Imported here so that geometry can be loaded without materials
            from csgtracer.materials.material import Material
            material = Material()
        self.transformation = transformation
        self.inverse_transformation = transformation.inverse()
        self.material = material

    def hit(self, ray: Ray) -> Optional[HitRecord]:
        """
        Returns the closest intersection with ``ray``, or None.
        """
        hits = self.hit_all(ray)
        return hits[0] if hits else None

    def hit_all(self, ray: Ray) -> List[HitRecord]:
        """
        Returns every intersection with ``ray`` sorted by increasing t.
        An empty list means the ray misses the shape.
        """
        raise NotImplementedError("hit_all() must be implemented by subclasses.")

    def is_inside(self, point: Point) -> bool:
        """
        Tells whether ``point`` (given in the parent frame) lies strictly
        inside the shape.
        """
        raise NotImplementedError("is_inside() must be implemented by subclasses.")

    def contains(self, shape: "Shape") -> bool:
        """Whether ``shape`` is this shape or one of its descendants."""
        return shape is self

    def is_close(self, other: "Shape", epsilon: float = 1e-5) -> bool:
        return (type(self) is type(other) and
                self.transformation.is_close(other.transformation, epsilon))

    def _to_local(self, point: Point) -> Point:
        return self.inverse_transformation * point

    def _record(self, ray: Ray, local_ray: Ray, t: float, local_normal: Normal,
                uv: UV) -> HitRecord:
        # Flip the normal against the incoming ray, then go back to the parent frame
        if local_normal.dot(local_ray.dir) > 0:
            local_normal = -local_normal
        return HitRecord(
            world_point=self.transformation * local_ray.at(t),
            normal=(self.transformation * local_normal).normalize(),
            surface_point=uv,
            t=t,
            ray=ray,
            shape=self,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(transformation={self.transformation!r})"
