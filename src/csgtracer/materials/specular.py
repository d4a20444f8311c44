# materials/specular.py
import math

from csgtracer.core.color import BLACK, Color
from csgtracer.core.ray import Ray
from csgtracer.core.utils import reflect
from csgtracer.core.uv import UV
from csgtracer.core.vector import Normal, Point, Vec
from csgtracer.materials.brdf import BRDF, SCATTER_TMIN
from csgtracer.materials.pigments import Pigment


class SpecularBRDF(BRDF):
    """
    Perfect mirror. ``eval`` only returns the pigment color when the two
    directions make the same angle with the normal, within
    ``angle_tolerance`` radians.
    """
    def __init__(self, pigment: Pigment = None, angle_tolerance: float = math.pi / 1800.0):
        super().__init__(pigment)
        self.angle_tolerance = angle_tolerance

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: UV) -> Color:
        n = normal.normalize()
        theta_in = math.acos(max(-1.0, min(1.0, n.dot(in_dir.normalize()))))
        theta_out = math.acos(max(-1.0, min(1.0, n.dot(out_dir.normalize()))))
        if abs(theta_in - theta_out) < self.angle_tolerance:
            return self.pigment.get_color(uv)
        return BLACK

    def scatter_ray(self, pcg, incoming_dir: Vec, interaction_point: Point,
                    normal: Normal, depth: int) -> Ray:
        direction = reflect(incoming_dir.normalize(), normal.normalize())
        return Ray(interaction_point, direction, tmin=SCATTER_TMIN, depth=depth)

    def __repr__(self) -> str:
        return f"SpecularBRDF({self.pigment!r})"
