# demo.py
"""
Built-in scene used by ``csgtracer demo``: a checkered floor under a sky
dome, with a few CSG solids in the middle.
"""
from csgtracer.camera.camera import Camera, OrthogonalCamera, PerspectiveCamera
from csgtracer.core.color import BLACK, Color
from csgtracer.core.transform import rotation_z, scaling, translation
from csgtracer.core.vector import Vec
from csgtracer.exceptions import ConfigurationError
from csgtracer.geometry.csg import CSG, Operation
from csgtracer.geometry.cube import Cube
from csgtracer.geometry.plane import Plane
from csgtracer.geometry.sphere import Sphere
from csgtracer.geometry.world import World
from csgtracer.materials.diffuse import DiffuseBRDF
from csgtracer.materials.material import Material
from csgtracer.materials.pigments import CheckeredPigment, UniformPigment
from csgtracer.materials.specular import SpecularBRDF

CAMERAS = ("perspective", "orthogonal")


def demo_materials():
    return {
        "sky": Material(
            brdf=DiffuseBRDF(UniformPigment(BLACK)),
            emitted_radiance=UniformPigment(Color(1.0, 0.9, 0.5)),
        ),
        "ground": Material(
            brdf=DiffuseBRDF(CheckeredPigment(Color(0.3, 0.5, 0.1), Color(0.1, 0.2, 0.5),
                                              num_of_steps=4)),
        ),
        "clay": Material(brdf=DiffuseBRDF(UniformPigment(Color(0.7, 0.3, 0.2)))),
        "mirror": Material(brdf=SpecularBRDF(UniformPigment(Color(0.6, 0.6, 0.7)))),
    }


def demo_world() -> World:
    """
    Floor at z = -1, a rounded die (cube intersected with a sphere, with
    a spherical dent carved on top) and a mirror capsule made of two fused
    spheres.
    """
    materials = demo_materials()
    world = World()

    world.add(Sphere(scaling(200.0, 200.0, 200.0), materials["sky"]))
    world.add(Plane(translation(Vec(0.0, 0.0, -1.0)), materials["ground"]))

    # Unit cube centred on the origin, trimmed by a slightly larger sphere
    cube = Cube(translation(Vec(-0.5, -0.5, -0.5)), materials["clay"])
    ball = Sphere(scaling(0.68, 0.68, 0.68), materials["clay"])
    die = CSG(cube, ball, Operation.INTERSECTION)
    dent = Sphere(translation(Vec(0.0, 0.0, 0.55)) * scaling(0.25, 0.25, 0.25), materials["clay"])
    world.add(CSG(die, dent, Operation.DIFFERENCE,
                  translation(Vec(0.0, -0.6, -0.45)) * rotation_z(30.0)))

    left = Sphere(translation(Vec(0.0, 0.0, -0.2)) * scaling(0.35, 0.35, 0.35), materials["mirror"])
    right = Sphere(translation(Vec(0.0, 0.0, 0.2)) * scaling(0.35, 0.35, 0.35), materials["mirror"])
    world.add(CSG(left, right, Operation.FUSION, translation(Vec(0.3, 0.8, -0.55))))
    return world


def demo_camera(kind: str = "perspective", aspect_ratio: float = 1.0,
                angle_deg: float = 0.0, distance: float = 1.0) -> Camera:
    """
    Camera 3 units away from the scene centre, turned by ``angle_deg``
    around the vertical axis.
    """
    transformation = rotation_z(angle_deg) * translation(Vec(-3.0, 0.0, 0.0))
    kind = kind.lower()
    if kind == "perspective":
        return PerspectiveCamera(distance=distance, aspect_ratio=aspect_ratio,
                                 transformation=transformation)
    if kind == "orthogonal":
        # The orthogonal screen is 2 units tall; widen it to frame the scene
        framing = scaling(1.5, 1.5, 1.5)
        return OrthogonalCamera(aspect_ratio=aspect_ratio, transformation=transformation * framing)
    raise ConfigurationError(f"unknown camera '{kind}', expected one of {', '.join(CAMERAS)}")

