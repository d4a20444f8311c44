# geometry/csg.py
import logging
from enum import Enum
from typing import List, Optional

from csgtracer.core.ray import Ray
from csgtracer.core.transform import Transformation
from csgtracer.core.vector import Point
from csgtracer.exceptions import CsgError
from csgtracer.geometry.hittable import HitRecord, Shape

logger = logging.getLogger(__name__)


class Operation(Enum):
    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"
    FUSION = "fusion"


# Operations whose result does not depend on the order of the two children
SYMMETRIC_OPERATIONS = (Operation.UNION, Operation.INTERSECTION, Operation.FUSION)


class CSG(Shape):
    """
    Boolean combination of two shapes, which can themselves be CSGs.

    The children live in the local frame of the CSG: a ray is mapped into it
    with the inverse transformation, both children are intersected, and the
    merged list is filtered according to ``operation``:

    - union keeps every hit;
    - intersection keeps the hits that lie inside the other child;
    - fusion keeps the hits that lie outside the other child, so that only
      the outer shell of the union survives;
    - difference (obj1 - obj2) keeps the hits of obj1 outside obj2 and the
      hits of obj2 inside obj1.

    Containment is tested with strict inequalities and no tolerance, so hits
    exactly on a coincident or tangent surface of the other child are counted
    as outside. Round-off can move such hits either way.
    """

    def __init__(self, obj1: Shape, obj2: Shape, operation: Operation,
                 transformation: Optional[Transformation] = None):
        if transformation is None:
            transformation = Transformation()
        if obj1.is_close(obj2):
            raise CsgError(
                f"cannot build a {operation.value} of two identical shapes "
                f"({type(obj1).__name__}): the result has a zero-thickness boundary"
            )
        self.obj1 = obj1
        self.obj2 = obj2
        self.operation = operation
        self.transformation = transformation
        self.inverse_transformation = transformation.inverse()
        self.material = None
        logger.debug("built %s of %s and %s", operation.value,
                     type(obj1).__name__, type(obj2).__name__)

    def hit_all(self, ray: Ray) -> List[HitRecord]:
        local_ray = self.inverse_transformation * ray
        hits1 = self.obj1.hit_all(local_ray)
        hits2 = self.obj2.hit_all(local_ray)

        result = []
        i = j = 0
        while i < len(hits1) or j < len(hits2):
            # Ties go to obj1
            from_first = j >= len(hits2) or (i < len(hits1) and hits1[i].t <= hits2[j].t)
            if from_first:
                hit = hits1[i]
                i += 1
            else:
                hit = hits2[j]
                j += 1
            if self.valid_hit(hit, from_first):
                result.append(self._to_parent(hit, ray))
        return result

    def valid_hit(self, hit: HitRecord, from_first: bool) -> bool:
        """
        Decides whether a child hit (expressed in the local frame) belongs to
        the surface of the combined shape. ``from_first`` tells which child
        produced it; the same primitive may appear in both subtrees, so this
        cannot be recovered from ``hit.shape``.
        """
        op = self.operation
        if op is Operation.UNION:
            return True

        other = self.obj2 if from_first else self.obj1
        inside_other = other.is_inside(hit.world_point)

        if op is Operation.INTERSECTION:
            return inside_other
        if op is Operation.FUSION:
            return not inside_other
        if op is Operation.DIFFERENCE:
            return not inside_other if from_first else inside_other
        raise AssertionError(f"unknown CSG operation {op!r}")

    def is_inside(self, point: Point) -> bool:
        local = self._to_local(point)
        op = self.operation
        if op is Operation.UNION or op is Operation.FUSION:
            return self.obj1.is_inside(local) or self.obj2.is_inside(local)
        if op is Operation.INTERSECTION:
            return self.obj1.is_inside(local) and self.obj2.is_inside(local)
        if op is Operation.DIFFERENCE:
            return self.obj1.is_inside(local) and not self.obj2.is_inside(local)
        raise AssertionError(f"unknown CSG operation {op!r}")

    def contains(self, shape: Shape) -> bool:
        return shape is self or self.obj1.contains(shape) or self.obj2.contains(shape)

    def is_close(self, other: Shape, epsilon: float = 1e-5) -> bool:
        if not isinstance(other, CSG) or self.operation is not other.operation:
            return False
        if not self.transformation.is_close(other.transformation, epsilon):
            return False
        if self.obj1.is_close(other.obj1, epsilon) and self.obj2.is_close(other.obj2, epsilon):
            return True
        return (self.operation in SYMMETRIC_OPERATIONS and
                self.obj1.is_close(other.obj2, epsilon) and
                self.obj2.is_close(other.obj1, epsilon))

    def _to_parent(self, hit: HitRecord, ray: Ray) -> HitRecord:
        return HitRecord(
            world_point=self.transformation * hit.world_point,
            normal=(self.transformation * hit.normal).normalize(),
            surface_point=hit.surface_point,
            t=hit.t,
            ray=ray,
            shape=hit.shape,
        )

    def __repr__(self) -> str:
        return (f"CSG({self.operation.value}, {self.obj1!r}, {self.obj2!r}, "
                f"transformation={self.transformation!r})")
