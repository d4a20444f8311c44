# materials/material.py
from csgtracer.core.color import BLACK
from csgtracer.materials.brdf import BRDF
from csgtracer.materials.diffuse import DiffuseBRDF
from csgtracer.materials.pigments import Pigment, UniformPigment


class Material:
    """
    Surface properties of a shape: how it scatters light (``brdf``) and how
    much light it emits by itself (``emitted_radiance``).
    """
    def __init__(self, brdf: BRDF = None, emitted_radiance: Pigment = None):
        self.brdf = brdf if brdf is not None else DiffuseBRDF()
        self.emitted_radiance = (emitted_radiance if emitted_radiance is not None
                                 else UniformPigment(BLACK))

    def __repr__(self) -> str:
        return f"Material(brdf={self.brdf!r}, emitted_radiance={self.emitted_radiance!r})"
