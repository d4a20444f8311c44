# renderer/image_tracer.py
import math
from typing import Callable, Optional

from csgtracer.camera.camera import Camera
from csgtracer.core.color import Color
from csgtracer.core.pcg import PCG
from csgtracer.core.ray import Ray
from csgtracer.exceptions import ConfigurationError
from csgtracer.imaging.hdr_image import HdrImage


def samples_per_side(samples_per_pixel: int) -> int:
    """
    Side of the stratification grid for ``samples_per_pixel`` samples.
    Raises ConfigurationError unless the count is a positive perfect square.
    """
    if not isinstance(samples_per_pixel, int) or samples_per_pixel <= 0:
        raise ConfigurationError(
            f"samples per pixel must be a positive integer, got {samples_per_pixel!r}"
        )
    side = math.isqrt(samples_per_pixel)
    if side * side != samples_per_pixel:
        raise ConfigurationError(
            f"samples per pixel must be a perfect square, got {samples_per_pixel}"
        )
    return side


class ImageTracer:
    """
    Fires rays through the pixels of ``image`` and stores the color that
    ``func(ray)`` returns for each of them.

    Pixels are addressed as 1-based (column, row), row 1 being the top of
    the image. With more than one sample per pixel, the pixel is split into
    a square grid and one jittered ray (drawn from ``pcg``) is fired through
    each cell; the pixel gets the mean color.
    """
    def __init__(self, image: HdrImage, camera: Camera, samples_per_pixel: int = 1,
                 pcg: Optional[PCG] = None):
        self.image = image
        self.camera = camera
        self.samples_per_side = samples_per_side(samples_per_pixel)
        self.pcg = pcg if pcg is not None else PCG()

    @property
    def samples_per_pixel(self) -> int:
        return self.samples_per_side * self.samples_per_side

    def fire_ray(self, col: int, row: int, u_pixel: float = 0.5, v_pixel: float = 0.5) -> Ray:
        u = (col - 1 + u_pixel) / self.image.width
        v = 1.0 - (row - 1 + v_pixel) / self.image.height
        return self.camera.fire_ray(u, v)

    def pixel_color(self, func: Callable[[Ray], Color], col: int, row: int) -> Color:
        side = self.samples_per_side
        if side == 1:
            return func(self.fire_ray(col, row))

        total = Color()
        for i in range(side):
            for j in range(side):
                u_pixel = (j + self.pcg.random_float()) / side
                v_pixel = (i + self.pcg.random_float()) / side
                total = total + func(self.fire_ray(col, row, u_pixel, v_pixel))
        return total / (side * side)

    def fire_rows(self, func: Callable[[Ray], Color], first_row: int, last_row: int,
                  callback: Optional[Callable[[int], None]] = None) -> None:
        """
        Render rows ``first_row`` to ``last_row`` (inclusive). ``callback`` is
        called with the row number after each row.
        """
        for row in range(first_row, last_row + 1):
            for col in range(1, self.image.width + 1):
                self.image.set_pixel(col, row, self.pixel_color(func, col, row))
            if callback is not None:
                callback(row)

    def fire_all_rays(self, func: Callable[[Ray], Color],
                      callback: Optional[Callable[[int], None]] = None) -> None:
        self.fire_rows(func, 1, self.image.height, callback)
