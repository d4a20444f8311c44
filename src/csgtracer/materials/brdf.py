# materials/brdf.py
from csgtracer.core.color import Color, WHITE
from csgtracer.core.ray import Ray
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point, Vec
from csgtracer.materials.pigments import Pigment, UniformPigment

# Secondary rays start slightly off the surface to avoid self-intersection
SCATTER_TMIN = 1e-3


class BRDF:
    """
    Abstract BRDF. Subclasses implement ``eval`` and ``scatter_ray``.

    ``scatter_ray`` draws directions from a distribution proportional to
    BRDF times cosine, so the path tracer only has to multiply by the
    pigment color.
    """
    def __init__(self, pigment: Pigment = None):
        self.pigment = pigment if pigment is not None else UniformPigment(WHITE)

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: UV) -> Color:
        raise NotImplementedError("eval() must be implemented by subclasses.")

    def scatter_ray(self, pcg, incoming_dir: Vec, interaction_point: Point,
                    normal: Normal, depth: int) -> Ray:
        raise NotImplementedError("scatter_ray() must be implemented by subclasses.")
