# core/utils.py
import math
from typing import Tuple

from csgtracer.core.vector import Vec


def create_onb_from_z(normal) -> Tuple[Vec, Vec, Vec]:
    """
    Returns an orthonormal basis (e1, e2, e3) with e3 along ``normal``.

    Uses the branchless construction of Duff et al. (2017); ``normal`` must
    already be normalized.
    """
    sign = math.copysign(1.0, normal.z)
    a = -1.0 / (sign + normal.z)
    b = normal.x * normal.y * a

    e1 = Vec(1.0 + sign * normal.x * normal.x * a, sign * b, -sign * normal.x)
    e2 = Vec(b, sign + normal.y * normal.y * a, -normal.y)
    e3 = Vec(normal.x, normal.y, normal.z)
    return e1, e2, e3


def reflect(v: Vec, n) -> Vec:
    """
    Reflects vector v about the normal n.
    """
    n = n.to_vec() if hasattr(n, "to_vec") else n
    return v - n * (2 * v.dot(n))
