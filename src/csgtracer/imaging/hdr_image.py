# imaging/hdr_image.py
import numpy as np

from csgtracer.core.color import Color


class HdrImage:
    """
    A width x height grid of linear RGB radiance values.

    ``pixels`` is a float32 array of shape (height, width, 3), row 0 being the
    top of the image. The ``get_pixel``/``set_pixel`` accessors use 1-based
    (column, row) coordinates, like the image tracer.
    """
    def __init__(self, width: int, height: int, pixels: np.ndarray = None):
        self.width = int(width)
        self.height = int(height)
        if pixels is None:
            pixels = np.zeros((self.height, self.width, 3), dtype=np.float32)
        else:
            pixels = np.asarray(pixels, dtype=np.float32)
            if pixels.shape != (self.height, self.width, 3):
                raise ValueError(
                    f"pixel array has shape {pixels.shape}, "
                    f"expected {(self.height, self.width, 3)}"
                )
        self.pixels = pixels

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "HdrImage":
        height, width = pixels.shape[:2]
        return cls(width, height, pixels)

    def valid_coordinates(self, col: int, row: int) -> bool:
        return 1 <= col <= self.width and 1 <= row <= self.height

    def _check_coordinates(self, col: int, row: int) -> None:
        if not self.valid_coordinates(col, row):
            raise IndexError(
                f"pixel ({col}, {row}) out of range for a {self.width}x{self.height} image"
            )

    def get_pixel(self, col: int, row: int) -> Color:
        self._check_coordinates(col, row)
        r, g, b = self.pixels[row - 1, col - 1]
        return Color(r, g, b)

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        self._check_coordinates(col, row)
        self.pixels[row - 1, col - 1] = (color.r, color.g, color.b)

    def copy(self) -> "HdrImage":
        return HdrImage(self.width, self.height, self.pixels.copy())

    def __repr__(self) -> str:
        return f"HdrImage({self.width}x{self.height})"
