# core/uv.py
class UV:
    """
    Represents a 2D surface coordinate, usually in [0, 1) x [0, 1).
    """
    __slots__ = ("u", "v")

    def __init__(self, u: float, v: float):
        self.u = u
        self.v = v

    def __getstate__(self):
        return (self.u, self.v)

    def __setstate__(self, state):
        self.u, self.v = state

    def is_close(self, other: "UV", epsilon: float = 1e-5) -> bool:
        return abs(self.u - other.u) <= epsilon and abs(self.v - other.v) <= epsilon

    def __repr__(self) -> str:
        return f"UV({self.u}, {self.v})"
