# core/color.py
class Color:
    """
    Linear RGB radiance triple. Channels are unbounded floats.
    """
    __slots__ = ("r", "g", "b")

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self.r = float(r)
        self.g = float(g)
        self.b = float(b)

    def __getstate__(self):
        return (self.r, self.g, self.b)

    def __setstate__(self, state):
        self.r, self.g, self.b = state

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __add__(self, other: "Color") -> "Color":
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: "Color") -> "Color":
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, other):
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        return Color(self.r * other, self.g * other, self.b * other)

    def __rmul__(self, other: float) -> "Color":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Color":
        return Color(self.r / t, self.g / t, self.b / t)

    def max_channel(self) -> float:
        return max(self.r, self.g, self.b)

    def luminosity(self) -> float:
        # Shirley & Morley's estimate
        return (max(self.r, self.g, self.b) + min(self.r, self.g, self.b)) / 2

    def is_close(self, other: "Color", epsilon: float = 1e-3) -> bool:
        return (abs(self.r - other.r) <= epsilon and
                abs(self.g - other.g) <= epsilon and
                abs(self.b - other.b) <= epsilon)

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
