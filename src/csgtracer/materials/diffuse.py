# materials/diffuse.py
import math

from csgtracer.core.color import Color
from csgtracer.core.ray import Ray
from csgtracer.core.utils import create_onb_from_z
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point, Vec
from csgtracer.materials.brdf import BRDF, SCATTER_TMIN
from csgtracer.materials.pigments import Pigment


class DiffuseBRDF(BRDF):
    """
    Ideal Lambertian reflector.
    """
    def __init__(self, pigment: Pigment = None, reflectance: float = 1.0):
        super().__init__(pigment)
        self.reflectance = reflectance

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: UV) -> Color:
        # Multiply by 1/pi to properly normalize the Lambertian BRDF.
        return self.pigment.get_color(uv) * (self.reflectance / math.pi)

    def scatter_ray(self, pcg, incoming_dir: Vec, interaction_point: Point,
                    normal: Normal, depth: int) -> Ray:
        """
        Cosine-weighted sample of the hemisphere around ``normal``.
        """
        e1, e2, e3 = create_onb_from_z(normal.normalize())
        cos_theta_sq = pcg.random_float()
        cos_theta = math.sqrt(cos_theta_sq)
        sin_theta = math.sqrt(1.0 - cos_theta_sq)
        phi = 2.0 * math.pi * pcg.random_float()

        direction = (e1 * (math.cos(phi) * sin_theta) +
                     e2 * (math.sin(phi) * sin_theta) +
                     e3 * cos_theta)
        return Ray(interaction_point, direction, tmin=SCATTER_TMIN, depth=depth)

    def __repr__(self) -> str:
        return f"DiffuseBRDF({self.pigment!r}, reflectance={self.reflectance})"
