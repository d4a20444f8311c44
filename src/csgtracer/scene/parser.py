# scene/parser.py
"""
Recursive-descent parser turning a scene description into a World, a
camera and a set of named materials.

Example::

    float angle(30)
    material ground(diffuse(checkered(<0.3, 0.5, 0.1>, <0.1, 0.2, 0.5>, 4)),
                    uniform(<0, 0, 0>))
    material glass(specular(uniform(<0.9, 0.9, 0.9>)), uniform(<0, 0, 0>))

    plane(ground, identity)
    difference(
        sphere(glass, identity),
        cube(glass, translation([-0.5, -0.5, -0.5]) * scaling(0.8, 0.8, 0.8)),
        translation([0, 0, 1]) * rotation_z(angle)
    )
    camera(perspective, translation([-3, 0, 1]), 1.0)
"""
import logging
from typing import Dict, Iterable, Optional, TextIO, Union

from csgtracer.camera.camera import Camera, OrthogonalCamera, PerspectiveCamera
from csgtracer.core.color import Color
from csgtracer.core.transform import (Transformation, rotation_x, rotation_y, rotation_z,
                                      scaling, translation)
from csgtracer.core.vector import Vec
from csgtracer.exceptions import (CsgError, ExtensionError, GeometryError, GrammarError,
                                  PfmError)
from csgtracer.geometry.csg import CSG, Operation
from csgtracer.geometry.cube import Cube
from csgtracer.geometry.hittable import Shape
from csgtracer.geometry.plane import Plane
from csgtracer.geometry.sphere import Sphere
from csgtracer.geometry.world import World
from csgtracer.materials.brdf import BRDF
from csgtracer.materials.diffuse import DiffuseBRDF
from csgtracer.materials.material import Material
from csgtracer.materials.pigments import (CheckeredPigment, ImagePigment, Pigment,
                                          UniformPigment)
from csgtracer.materials.specular import SpecularBRDF
from csgtracer.materials.texture_loader import read_image
from csgtracer.scene.lexer import (IdentifierToken, InputStream, KeywordEnum, KeywordToken,
                                   LiteralNumberToken, StopToken, StringToken, SymbolToken)

logger = logging.getLogger(__name__)

PRIMITIVES = {
    KeywordEnum.SPHERE: Sphere,
    KeywordEnum.PLANE: Plane,
    KeywordEnum.CUBE: Cube,
}

OPERATIONS = {
    KeywordEnum.UNION: Operation.UNION,
    KeywordEnum.DIFFERENCE: Operation.DIFFERENCE,
    KeywordEnum.INTERSECTION: Operation.INTERSECTION,
    KeywordEnum.FUSION: Operation.FUSION,
}

TRANSFORMATIONS = [
    KeywordEnum.IDENTITY,
    KeywordEnum.TRANSLATION,
    KeywordEnum.ROTATION_X,
    KeywordEnum.ROTATION_Y,
    KeywordEnum.ROTATION_Z,
    KeywordEnum.SCALING,
]

ASPECT_RATIO_VARIABLE = "aspect_ratio"


class Scene:
    """A scene read from a scene file."""
    def __init__(self, materials: Optional[Dict[str, Material]] = None,
                 world: Optional[World] = None, camera: Optional[Camera] = None,
                 float_variables: Optional[Dict[str, float]] = None,
                 overridden_variables: Iterable[str] = ()):
        self.materials = materials if materials is not None else {}
        self.world = world if world is not None else World()
        self.camera = camera
        self.float_variables = float_variables if float_variables is not None else {}
        self.overridden_variables = set(overridden_variables)


def _next_location(input_file: InputStream):
    """Location of the next token, which is left in the stream."""
    token = input_file.read_token()
    input_file.unread_token(token)
    return token.location


def expect_symbol(input_file: InputStream, symbol: str) -> None:
    """Read a token from `input_file` and check that it matches `symbol`."""
    token = input_file.read_token()
    if not isinstance(token, SymbolToken) or token.symbol != symbol:
        raise GrammarError(token.location, f"got '{token}' instead of '{symbol}'")


def expect_keywords(input_file: InputStream, keywords) -> KeywordEnum:
    """Read a token and check that it is one of the given keywords."""
    token = input_file.read_token()
    if not isinstance(token, KeywordToken):
        raise GrammarError(token.location, f"expected a keyword instead of '{token}'")
    if token.keyword not in keywords:
        expected = ", ".join(k.value for k in keywords)
        raise GrammarError(token.location,
                           f"expected one of the keywords {expected} instead of '{token}'")
    return token.keyword


def expect_number(input_file: InputStream, scene: Scene) -> float:
    """A literal number or the name of a float variable."""
    token = input_file.read_token()
    if isinstance(token, LiteralNumberToken):
        return token.value
    if isinstance(token, IdentifierToken):
        name = token.identifier
        if name not in scene.float_variables:
            raise GrammarError(token.location, f"unknown variable '{name}'")
        return scene.float_variables[name]
    raise GrammarError(token.location, f"got '{token}' instead of a number")


def expect_string(input_file: InputStream) -> str:
    token = input_file.read_token()
    if not isinstance(token, StringToken):
        raise GrammarError(token.location, f"got '{token}' instead of a string")
    return token.string


def expect_identifier(input_file: InputStream) -> str:
    token = input_file.read_token()
    if not isinstance(token, IdentifierToken):
        raise GrammarError(token.location, f"got '{token}' instead of an identifier")
    return token.identifier


def parse_vector(input_file: InputStream, scene: Scene) -> Vec:
    expect_symbol(input_file, "[")
    x = expect_number(input_file, scene)
    expect_symbol(input_file, ",")
    y = expect_number(input_file, scene)
    expect_symbol(input_file, ",")
    z = expect_number(input_file, scene)
    expect_symbol(input_file, "]")
    return Vec(x, y, z)


def parse_color(input_file: InputStream, scene: Scene) -> Color:
    expect_symbol(input_file, "<")
    red = expect_number(input_file, scene)
    expect_symbol(input_file, ",")
    green = expect_number(input_file, scene)
    expect_symbol(input_file, ",")
    blue = expect_number(input_file, scene)
    expect_symbol(input_file, ">")
    return Color(red, green, blue)


def parse_pigment(input_file: InputStream, scene: Scene) -> Pigment:
    keyword = expect_keywords(input_file, [KeywordEnum.UNIFORM, KeywordEnum.CHECKERED,
                                           KeywordEnum.IMAGE])
    expect_symbol(input_file, "(")
    if keyword == KeywordEnum.UNIFORM:
        result = UniformPigment(parse_color(input_file, scene))
    elif keyword == KeywordEnum.CHECKERED:
        color1 = parse_color(input_file, scene)
        expect_symbol(input_file, ",")
        color2 = parse_color(input_file, scene)
        expect_symbol(input_file, ",")
        num_of_steps = int(expect_number(input_file, scene))
        result = CheckeredPigment(color1, color2, num_of_steps)
    else:
        location = _next_location(input_file)
        file_name = expect_string(input_file)
        try:
            image = read_image(file_name)
        except (ExtensionError, PfmError, OSError) as e:
            raise GrammarError(location, f"cannot load image '{file_name}': {e}") from e
        result = ImagePigment(image)
    expect_symbol(input_file, ")")
    return result


def parse_brdf(input_file: InputStream, scene: Scene) -> BRDF:
    keyword = expect_keywords(input_file, [KeywordEnum.DIFFUSE, KeywordEnum.SPECULAR])
    expect_symbol(input_file, "(")
    pigment = parse_pigment(input_file, scene)
    expect_symbol(input_file, ")")
    if keyword == KeywordEnum.DIFFUSE:
        return DiffuseBRDF(pigment=pigment)
    return SpecularBRDF(pigment=pigment)


def parse_material(input_file: InputStream, scene: Scene):
    name = expect_identifier(input_file)
    expect_symbol(input_file, "(")
    brdf = parse_brdf(input_file, scene)
    expect_symbol(input_file, ",")
    emitted_radiance = parse_pigment(input_file, scene)
    expect_symbol(input_file, ")")
    return name, Material(brdf=brdf, emitted_radiance=emitted_radiance)


def parse_transformation(input_file: InputStream, scene: Scene) -> Transformation:
    """
    One or more elementary transformations joined by '*', composed from
    left to right.
    """
    result = Transformation()
    while True:
        location = _next_location(input_file)
        keyword = expect_keywords(input_file, TRANSFORMATIONS)
        try:
            if keyword == KeywordEnum.IDENTITY:
                pass
            elif keyword == KeywordEnum.TRANSLATION:
                expect_symbol(input_file, "(")
                result = result * translation(parse_vector(input_file, scene))
                expect_symbol(input_file, ")")
            elif keyword in (KeywordEnum.ROTATION_X, KeywordEnum.ROTATION_Y,
                             KeywordEnum.ROTATION_Z):
                rotation = {KeywordEnum.ROTATION_X: rotation_x,
                            KeywordEnum.ROTATION_Y: rotation_y,
                            KeywordEnum.ROTATION_Z: rotation_z}[keyword]
                expect_symbol(input_file, "(")
                result = result * rotation(expect_number(input_file, scene))
                expect_symbol(input_file, ")")
            elif keyword == KeywordEnum.SCALING:
                expect_symbol(input_file, "(")
                x = expect_number(input_file, scene)
                expect_symbol(input_file, ",")
                y = expect_number(input_file, scene)
                expect_symbol(input_file, ",")
                z = expect_number(input_file, scene)
                expect_symbol(input_file, ")")
                result = result * scaling(x, y, z)
        except GeometryError as e:
            raise GrammarError(location, str(e)) from e

        # A '*' means another transformation follows
        next_token = input_file.read_token()
        if not isinstance(next_token, SymbolToken) or next_token.symbol != "*":
            input_file.unread_token(next_token)
            break
    return result


def parse_shape(input_file: InputStream, scene: Scene) -> Shape:
    """
    A primitive (``sphere(MATERIAL, TRANSFORMATION)`` and the like) or a
    CSG (``union(SHAPE, SHAPE, TRANSFORMATION)`` and the like).
    """
    location = _next_location(input_file)
    keyword = expect_keywords(input_file, list(PRIMITIVES) + list(OPERATIONS))
    expect_symbol(input_file, "(")

    if keyword in PRIMITIVES:
        token = input_file.read_token()
        if not isinstance(token, IdentifierToken):
            raise GrammarError(token.location, f"got '{token}' instead of a material name")
        if token.identifier not in scene.materials:
            raise GrammarError(token.location, f"unknown material '{token.identifier}'")
        expect_symbol(input_file, ",")
        transformation = parse_transformation(input_file, scene)
        expect_symbol(input_file, ")")
        return PRIMITIVES[keyword](transformation=transformation,
                                   material=scene.materials[token.identifier])

    obj1 = parse_shape(input_file, scene)
    expect_symbol(input_file, ",")
    obj2 = parse_shape(input_file, scene)
    expect_symbol(input_file, ",")
    transformation = parse_transformation(input_file, scene)
    expect_symbol(input_file, ")")
    try:
        return CSG(obj1, obj2, OPERATIONS[keyword], transformation)
    except CsgError as e:
        raise GrammarError(location, str(e)) from e


def parse_camera(input_file: InputStream, scene: Scene) -> Camera:
    expect_symbol(input_file, "(")
    type_kw = expect_keywords(input_file, [KeywordEnum.PERSPECTIVE, KeywordEnum.ORTHOGONAL])
    expect_symbol(input_file, ",")
    transformation = parse_transformation(input_file, scene)
    expect_symbol(input_file, ",")
    distance = expect_number(input_file, scene)
    expect_symbol(input_file, ")")

    aspect_ratio = scene.float_variables.get(ASPECT_RATIO_VARIABLE, 1.0)
    if type_kw == KeywordEnum.PERSPECTIVE:
        return PerspectiveCamera(distance=distance, aspect_ratio=aspect_ratio,
                                 transformation=transformation)
    return OrthogonalCamera(aspect_ratio=aspect_ratio, transformation=transformation)


def parse_scene(input_file: Union[InputStream, TextIO],
                variables: Optional[Dict[str, float]] = None) -> Scene:
    """
    Read a whole scene. ``variables`` take precedence over the float
    variables defined in the file with the same name.
    """
    if not isinstance(input_file, InputStream):
        input_file = InputStream(input_file, file_name=getattr(input_file, "name", ""))
    variables = dict(variables) if variables else {}
    scene = Scene(float_variables=dict(variables), overridden_variables=variables.keys())

    while True:
        what = input_file.read_token()
        if isinstance(what, StopToken):
            break
        if not isinstance(what, KeywordToken):
            raise GrammarError(what.location, f"expected a keyword instead of '{what}'")

        if what.keyword == KeywordEnum.FLOAT:
            location = _next_location(input_file)
            name = expect_identifier(input_file)
            expect_symbol(input_file, "(")
            value = expect_number(input_file, scene)
            expect_symbol(input_file, ")")
            if name in scene.overridden_variables:
                logger.debug("variable '%s' overridden with %g", name, scene.float_variables[name])
                continue
            if name in scene.float_variables:
                raise GrammarError(location, f"variable '{name}' cannot be redefined")
            scene.float_variables[name] = value
        elif what.keyword in PRIMITIVES or what.keyword in OPERATIONS:
            input_file.unread_token(what)
            scene.world.add(parse_shape(input_file, scene))
        elif what.keyword == KeywordEnum.CAMERA:
            if scene.camera is not None:
                raise GrammarError(what.location, "you cannot define more than one camera")
            scene.camera = parse_camera(input_file, scene)
        elif what.keyword == KeywordEnum.MATERIAL:
            location = _next_location(input_file)
            name, material = parse_material(input_file, scene)
            if name in scene.materials:
                raise GrammarError(location, f"material '{name}' cannot be redefined")
            scene.materials[name] = material
        else:
            raise GrammarError(what.location, f"unexpected keyword '{what}'")

    logger.info("parsed scene: %d shape(s), %d material(s), camera: %s",
                len(scene.world), len(scene.materials), scene.camera)
    return scene


def parse_scene_file(path, variables: Optional[Dict[str, float]] = None) -> Scene:
    with open(path, "r") as f:
        return parse_scene(InputStream(f, file_name=str(path)), variables)
