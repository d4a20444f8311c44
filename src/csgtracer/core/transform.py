# core/transform.py
import math

import numpy as np

from csgtracer.core.vector import Normal, Point, Vec
from csgtracer.exceptions import GeometryError

IDENTITY_MATR4x4 = np.identity(4, dtype=np.float64)


class Transformation:
    """
    An affine transformation stored together with its inverse.

    Both matrices are 4x4 homogeneous numpy arrays. They are only ever built
    in pairs by the factory functions below (or by composing existing pairs),
    so ``m @ invm`` stays the identity without any runtime matrix inversion.
    """
    __slots__ = ("m", "invm", "_rows", "_inv_rows")

    def __init__(self, m: np.ndarray = IDENTITY_MATR4x4, invm: np.ndarray = IDENTITY_MATR4x4):
        self.m = np.array(m, dtype=np.float64)
        self.invm = np.array(invm, dtype=np.float64)
        # Plain nested lists: element access on them is much cheaper than on
        # numpy arrays, and every ray query goes through here
        self._rows = self.m.tolist()
        self._inv_rows = self.invm.tolist()

    def __getstate__(self):
        return (self.m, self.invm)

    def __setstate__(self, state):
        self.__init__(*state)

    def __mul__(self, other):
        if isinstance(other, Transformation):
            # (A B)^-1 = B^-1 A^-1
            return Transformation(self.m @ other.m, other.invm @ self.invm)
        if isinstance(other, Point):
            (r0, r1, r2, r3) = self._rows
            x, y, z = other.x, other.y, other.z
            p = Point(
                r0[0] * x + r0[1] * y + r0[2] * z + r0[3],
                r1[0] * x + r1[1] * y + r1[2] * z + r1[3],
                r2[0] * x + r2[1] * y + r2[2] * z + r2[3],
            )
            w = r3[0] * x + r3[1] * y + r3[2] * z + r3[3]
            if w == 1.0:
                return p
            return Point(p.x / w, p.y / w, p.z / w)
        if isinstance(other, Vec):
            r0, r1, r2, _ = self._rows
            x, y, z = other.x, other.y, other.z
            return Vec(
                r0[0] * x + r0[1] * y + r0[2] * z,
                r1[0] * x + r1[1] * y + r1[2] * z,
                r2[0] * x + r2[1] * y + r2[2] * z,
            )
        if isinstance(other, Normal):
            # Normals go through the transpose of the inverse matrix
            q0, q1, q2, _ = self._inv_rows
            x, y, z = other.x, other.y, other.z
            return Normal(
                q0[0] * x + q1[0] * y + q2[0] * z,
                q0[1] * x + q1[1] * y + q2[1] * z,
                q0[2] * x + q1[2] * y + q2[2] * z,
            )
        # Let Ray (and anything else that knows how) handle itself
        transform = getattr(other, "transform", None)
        if transform is not None:
            return transform(self)
        return NotImplemented

    def inverse(self) -> "Transformation":
        return Transformation(self.invm, self.m)

    def is_consistent(self, epsilon: float = 1e-4) -> bool:
        return np.allclose(self.m @ self.invm, IDENTITY_MATR4x4, atol=epsilon, rtol=0.0)

    def is_close(self, other: "Transformation", epsilon: float = 1e-5) -> bool:
        return (np.allclose(self.m, other.m, atol=epsilon, rtol=epsilon) and
                np.allclose(self.invm, other.invm, atol=epsilon, rtol=epsilon))

    def __repr__(self) -> str:
        return f"Transformation(m={self.m.tolist()})"


def identity() -> Transformation:
    return Transformation(IDENTITY_MATR4x4.copy(), IDENTITY_MATR4x4.copy())


def translation(vec: Vec) -> Transformation:
    """
    Translate points by ``vec``; the inverse moves them back.
    """
    m = np.array([
        [1.0, 0.0, 0.0, vec.x],
        [0.0, 1.0, 0.0, vec.y],
        [0.0, 0.0, 1.0, vec.z],
        [0.0, 0.0, 0.0, 1.0],
    ])
    invm = np.array([
        [1.0, 0.0, 0.0, -vec.x],
        [0.0, 1.0, 0.0, -vec.y],
        [0.0, 0.0, 1.0, -vec.z],
        [0.0, 0.0, 0.0, 1.0],
    ])
    return Transformation(m, invm)


def _rotation(angle_deg: float, i: int, j: int) -> Transformation:
    # Counterclockwise rotation in the (i, j) coordinate plane; the inverse of
    # a rotation matrix is its transpose.
    angle = math.radians(angle_deg)
    cosang, sinang = math.cos(angle), math.sin(angle)
    m = np.identity(4)
    m[i, i] = cosang
    m[i, j] = -sinang
    m[j, i] = sinang
    m[j, j] = cosang
    return Transformation(m, m.T.copy())


def rotation_x(angle_deg: float) -> Transformation:
    return _rotation(angle_deg, 1, 2)


def rotation_y(angle_deg: float) -> Transformation:
    return _rotation(angle_deg, 2, 0)


def rotation_z(angle_deg: float) -> Transformation:
    return _rotation(angle_deg, 0, 1)


def scaling(sx: float, sy: float, sz: float) -> Transformation:
    """
    Scale along the three axes. A zero factor has no inverse and is rejected.
    """
    if sx == 0 or sy == 0 or sz == 0:
        raise GeometryError(f"cannot scale with a zero factor ({sx}, {sy}, {sz})")
    m = np.diag([float(sx), float(sy), float(sz), 1.0])
    invm = np.diag([1.0 / sx, 1.0 / sy, 1.0 / sz, 1.0])
    return Transformation(m, invm)
