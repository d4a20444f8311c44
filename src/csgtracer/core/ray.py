# core/ray.py
import math

from csgtracer.core.vector import Point, Vec


class Ray:
    """
    Represents a ray in 3D space with an origin and direction.

    Only intersections with ``tmin < t < tmax`` count. ``depth`` is the number
    of bounces the ray is away from the camera.
    """
    __slots__ = ("origin", "dir", "tmin", "tmax", "depth")

    def __init__(self, origin: Point, dir: Vec, tmin: float = 1e-5,
                 tmax: float = math.inf, depth: int = 0):
        self.origin = origin
        self.dir = dir
        self.tmin = tmin
        self.tmax = tmax
        self.depth = depth

    def __getstate__(self):
        return (self.origin, self.dir, self.tmin, self.tmax, self.depth)

    def __setstate__(self, state):
        self.origin, self.dir, self.tmin, self.tmax, self.depth = state

    def at(self, t: float) -> Point:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.dir * t

    def transform(self, transformation) -> "Ray":
        return Ray(
            origin=transformation * self.origin,
            dir=transformation * self.dir,
            tmin=self.tmin,
            tmax=self.tmax,
            depth=self.depth,
        )

    def is_close(self, other: "Ray", epsilon: float = 1e-5) -> bool:
        return (self.origin.is_close(other.origin, epsilon) and
                self.dir.is_close(other.dir, epsilon))

    def __repr__(self) -> str:
        return (f"Ray(origin={self.origin!r}, dir={self.dir!r}, "
                f"tmin={self.tmin}, tmax={self.tmax}, depth={self.depth})")
