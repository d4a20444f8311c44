# camera/camera.py
import math
from typing import Optional

from csgtracer.core.ray import Ray
from csgtracer.core.transform import Transformation
from csgtracer.core.vector import Point, Vec, VEC_X


class Camera:
    """
    Abstract camera. ``fire_ray(u, v)`` maps a point of the screen, with
    (0, 0) at the bottom-left corner and (1, 1) at the top-right one, to a
    ray in world space.

    In its own frame the camera looks along +x, with +z pointing up and the
    screen spanning y in [-aspect_ratio, aspect_ratio] and z in [-1, 1].
    ``transformation`` places that frame in the world.
    """
    def __init__(self, aspect_ratio: float = 1.0,
                 transformation: Optional[Transformation] = None):
        self.aspect_ratio = aspect_ratio
        self.transformation = transformation if transformation is not None else Transformation()

    def fire_ray(self, u: float, v: float) -> Ray:
        raise NotImplementedError("fire_ray() must be implemented by subclasses.")


class OrthogonalCamera(Camera):
    """
    Parallel projection: every ray travels along +x, starting from the
    screen placed at x = -1.
    """
    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-1.0, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return self.transformation * Ray(origin, VEC_X)

    def __repr__(self) -> str:
        return f"OrthogonalCamera(aspect_ratio={self.aspect_ratio})"


class PerspectiveCamera(Camera):
    """
    Pinhole projection. Rays leave the observer at (-distance, 0, 0) and
    pass through the screen at x = 0; a larger distance narrows the field
    of view.
    """
    def __init__(self, distance: float = 1.0, aspect_ratio: float = 1.0,
                 transformation: Optional[Transformation] = None):
        super().__init__(aspect_ratio, transformation)
        self.distance = distance

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-self.distance, 0.0, 0.0)
        direction = Vec(self.distance, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return self.transformation * Ray(origin, direction)

    def aperture_deg(self) -> float:
        """Vertical field of view, in degrees."""
        return 2.0 * math.degrees(math.atan(1.0 / self.distance))

    def __repr__(self) -> str:
        return f"PerspectiveCamera(distance={self.distance}, aspect_ratio={self.aspect_ratio})"
