# geometry/__init__.py
from csgtracer.geometry.hittable import HitRecord, Shape
from csgtracer.geometry.plane import Plane
from csgtracer.geometry.sphere import Sphere
from csgtracer.geometry.cube import Cube
from csgtracer.geometry.csg import CSG, Operation
from csgtracer.geometry.world import World

__all__ = ["HitRecord", "Shape", "Plane", "Sphere", "Cube", "CSG", "Operation", "World"]
