# geometry/world.py
from typing import Iterator, List, Optional

from csgtracer.core.ray import Ray
from csgtracer.geometry.hittable import HitRecord, Shape


class World:
    """
    Insertion-ordered list of the top-level shapes of a scene.

    The closest hit is found by a linear scan; on equal t the shape added
    first wins.
    """
    def __init__(self, shapes: Optional[List[Shape]] = None):
        self.shapes: List[Shape] = list(shapes) if shapes else []

    def add(self, shape: Shape) -> None:
        self.shapes.append(shape)

    def hit(self, ray: Ray) -> Optional[HitRecord]:
        closest = None
        for shape in self.shapes:
            rec = shape.hit(ray)
            if rec is not None and (closest is None or rec.t < closest.t):
                closest = rec
        return closest

    def __len__(self) -> int:
        return len(self.shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)
