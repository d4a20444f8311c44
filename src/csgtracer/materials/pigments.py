# materials/pigments.py
import math

from csgtracer.core.color import Color
from csgtracer.core.uv import UV


class Pigment:
    """Base class for all pigments: a map from surface coordinates to colors."""
    def get_color(self, uv: UV) -> Color:
        """Sample the pigment at given UV coordinates."""
        raise NotImplementedError("get_color() must be implemented by pigment subclasses.")


class UniformPigment(Pigment):
    """A solid color pigment."""
    def __init__(self, color: Color = Color()):
        self.color = color

    def get_color(self, uv: UV) -> Color:
        return self.color

    def __repr__(self) -> str:
        return f"UniformPigment({self.color!r})"


class CheckeredPigment(Pigment):
    """
    A checkerboard with ``num_of_steps`` squares along u and along v.
    """
    def __init__(self, color1: Color, color2: Color, num_of_steps: int = 10):
        self.color1 = color1
        self.color2 = color2
        self.num_of_steps = num_of_steps

    def get_color(self, uv: UV) -> Color:
        int_u = math.floor(uv.u * self.num_of_steps)
        int_v = math.floor(uv.v * self.num_of_steps)
        return self.color1 if (int_u % 2) == (int_v % 2) else self.color2

    def __repr__(self) -> str:
        return (f"CheckeredPigment({self.color1!r}, {self.color2!r}, "
                f"num_of_steps={self.num_of_steps})")


class ImagePigment(Pigment):
    """
    Wraps an HDR image around the surface; u runs along columns and v along
    rows, starting from the top-left pixel. Lookups use the nearest pixel.
    """
    def __init__(self, image):
        self.image = image

    def get_color(self, uv: UV) -> Color:
        width, height = self.image.width, self.image.height
        col = min(max(math.floor(uv.u * width), 0), width - 1)
        row = min(max(math.floor(uv.v * height), 0), height - 1)
        r, g, b = self.image.pixels[row, col]
        return Color(r, g, b)

    def __repr__(self) -> str:
        return f"ImagePigment({self.image.width}x{self.image.height})"
