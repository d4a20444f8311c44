# core/vector.py
import math

from csgtracer.exceptions import GeometryError


def _are_close(a: float, b: float, epsilon: float) -> bool:
    return abs(a - b) <= epsilon


class _Triple:
    """
    Shared storage and helpers for the three geometric triples.

    Points, vectors and normals share the same layout but transform
    differently, so they are kept as distinct types.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getstate__(self):
        return (self.x, self.y, self.z)

    def __setstate__(self, state):
        self.x, self.y, self.z = state

    def is_close(self, other, epsilon: float = 1e-5) -> bool:
        if type(self) is not type(other):
            raise GeometryError(
                f"cannot compare {type(self).__name__} with {type(other).__name__}"
            )
        return (_are_close(self.x, other.x, epsilon) and
                _are_close(self.y, other.y, epsilon) and
                _are_close(self.z, other.z, epsilon))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.x}, {self.y}, {self.z})"


class _Direction(_Triple):
    """Common algebra of Vec and Normal (everything but the transform law)."""
    __slots__ = ()

    def __mul__(self, scalar: float):
        return type(self)(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float):
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float):
        return type(self)(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self):
        return type(self)(-self.x, -self.y, -self.z)

    def dot(self, other: "_Direction") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "_Direction") -> "Vec":
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self):
        l = self.norm()
        if l == 0:
            raise GeometryError(f"cannot normalize the null {type(self).__name__}")
        return self / l


class Vec(_Direction):
    """
    A 3D direction or displacement. Transforms linearly (no translation).
    """
    __slots__ = ()

    def __add__(self, other: "Vec") -> "Vec":
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec") -> "Vec":
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def to_normal(self) -> "Normal":
        return Normal(self.x, self.y, self.z)


class Normal(_Direction):
    """
    A surface normal. Transforms with the inverse transpose of the matrix.
    """
    __slots__ = ()

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)


class Point(_Triple):
    """
    A position in 3D space. Transforms affinely.
    """
    __slots__ = ()

    def __add__(self, other: Vec) -> "Point":
        if not isinstance(other, Vec):
            raise GeometryError(f"cannot add {type(other).__name__} to a Point")
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        # Point - Point is a displacement, Point - Vec is another point
        if isinstance(other, Point):
            return Vec(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vec):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise GeometryError(f"cannot subtract {type(other).__name__} from a Point")

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)


VEC_X = Vec(1.0, 0.0, 0.0)
VEC_Y = Vec(0.0, 1.0, 0.0)
VEC_Z = Vec(0.0, 0.0, 1.0)
ORIGIN = Point(0.0, 0.0, 0.0)
