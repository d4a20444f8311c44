# main.py
"""
Command line driver.

    csgtracer render scene.txt --width 640 --height 480 --preset balanced
    csgtracer demo --camera orthogonal --renderer onoff
    csgtracer tonemap render/image.pfm render/image.png --factor 0.3 --gamma 2.2
"""
import argparse
import logging
import os
import sys
import time
from datetime import datetime
from typing import Dict, List, Optional

from csgtracer import __version__
from csgtracer.camera.camera import PerspectiveCamera
from csgtracer.config import QUALITY_PRESETS, RENDERERS, RenderSettings, ToneMapSettings
from csgtracer.core.transform import rotation_z, translation
from csgtracer.core.vector import Vec
from csgtracer.demo import CAMERAS, demo_camera, demo_world
from csgtracer.exceptions import RayTracerError
from csgtracer.imaging.hdr_image import HdrImage
from csgtracer.imaging.pfm import read_pfm_file, write_pfm_file
from csgtracer.imaging.tone_mapping import LDR_EXTENSIONS, MeanType, tone_map, write_ldr_image
from csgtracer.renderer.parallel import render
from csgtracer.scene.parser import parse_scene_file

logger = logging.getLogger("csgtracer")


def _variable(text: str):
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None


def _extension(text: str) -> str:
    ext = text if text.startswith(".") else "." + text
    if ext.lower() not in LDR_EXTENSIONS:
        raise argparse.ArgumentTypeError(
            f"unsupported extension '{text}', expected one of {', '.join(LDR_EXTENSIONS)}"
        )
    return ext


def _add_render_options(parser: argparse.ArgumentParser, default_renderer: str) -> None:
    group = parser.add_argument_group("rendering")
    group.add_argument("--width", type=int, default=640, help="image width in pixels")
    group.add_argument("--height", type=int, default=480, help="image height in pixels")
    group.add_argument("--renderer", choices=RENDERERS, default=default_renderer)
    group.add_argument("--preset", choices=sorted(QUALITY_PRESETS),
                       help="quality preset; explicit options below override it")
    group.add_argument("--samples", type=int, dest="samples_per_pixel",
                       help="antialiasing samples per pixel (a perfect square)")
    group.add_argument("--n-rays", type=int, help="secondary rays per hit")
    group.add_argument("--max-depth", type=int, help="maximum number of bounces")
    group.add_argument("--russian-roulette-limit", type=int,
                       help="depth from which Russian roulette kicks in")
    group.add_argument("--seed", type=int, help="seed of the random generators")
    group.add_argument("--workers", type=int, default=1, help="worker processes")
    group.add_argument("--angle", type=float,
                       help="camera rotation around the z axis, in degrees")

    output = parser.add_argument_group("output")
    output.add_argument("--output-dir", default="render")
    output.add_argument("--output-name", help="base name of the output files "
                                              "(default: a timestamp)")
    output.add_argument("--extension", type=_extension, default=".png",
                        help="format of the tone-mapped image")
    output.add_argument("--factor", type=float, default=1.0, help="normalization factor")
    output.add_argument("--gamma", type=float, default=1.0, help="gamma of the LDR image")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csgtracer",
        description="Path tracer for scenes built with constructive solid geometry.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="log errors only")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="render a scene file")
    render_parser.add_argument("scene_file")
    render_parser.add_argument("--var", type=_variable, action="append", default=[],
                               metavar="NAME=VALUE",
                               help="override a float variable of the scene (repeatable)")
    _add_render_options(render_parser, default_renderer="pathtracing")
    render_parser.set_defaults(func=cmd_render)

    demo_parser = subparsers.add_parser("demo", help="render the built-in CSG scene")
    demo_parser.add_argument("--camera", choices=CAMERAS, default="perspective")
    _add_render_options(demo_parser, default_renderer="onoff")
    demo_parser.set_defaults(func=cmd_demo)

    tonemap_parser = subparsers.add_parser("tonemap", help="convert a PFM file to an LDR image")
    tonemap_parser.add_argument("input_pfm")
    tonemap_parser.add_argument("output")
    tonemap_parser.add_argument("--factor", type=float, default=1.0)
    tonemap_parser.add_argument("--gamma", type=float, default=1.0)
    tonemap_parser.add_argument("--mean-type", choices=[m.name.lower() for m in MeanType],
                                default="max_min")
    tonemap_parser.add_argument("--weights", type=float, nargs=3, default=[1.0, 1.0, 1.0],
                                metavar=("WR", "WG", "WB"))
    tonemap_parser.add_argument("--delta", type=float, default=1e-10)
    tonemap_parser.set_defaults(func=cmd_tonemap)

    return parser


def settings_from_args(args: argparse.Namespace) -> RenderSettings:
    values = {"width": args.width, "height": args.height, "renderer": args.renderer,
              "workers": args.workers}
    for name in ("samples_per_pixel", "n_rays", "max_depth", "russian_roulette_limit", "seed"):
        value = getattr(args, name)
        if value is not None:
            values[name] = value
    if args.preset:
        return RenderSettings.from_preset(args.preset, **values)
    return RenderSettings(**values)


def _progress(rows_done: int, total_rows: int) -> None:
    logger.info("%3d%% (%d/%d rows)", 100 * rows_done // total_rows, rows_done, total_rows)


def _save_outputs(image: HdrImage, args: argparse.Namespace, default_name: str) -> None:
    name = args.output_name or default_name
    os.makedirs(args.output_dir, exist_ok=True)
    pfm_path = os.path.join(args.output_dir, name + ".pfm")
    ldr_path = os.path.join(args.output_dir, name + args.extension)

    write_pfm_file(pfm_path, image)
    tone = ToneMapSettings(factor=args.factor, gamma=args.gamma)
    ldr = tone_map(image, factor=tone.factor, delta=tone.delta,
                   mean_type=tone.mean_type, weights=tone.weights)
    write_ldr_image(ldr, ldr_path, gamma=tone.gamma)
    logger.info("saved %s and %s", pfm_path, ldr_path)


def cmd_render(args: argparse.Namespace) -> None:
    settings = settings_from_args(args)
    variables: Dict[str, float] = {"aspect_ratio": settings.aspect_ratio}
    if args.angle is not None:
        variables["angle"] = args.angle
    variables.update(dict(args.var))

    logger.info("parsing %s", args.scene_file)
    scene = parse_scene_file(args.scene_file, variables)
    camera = scene.camera
    if camera is None:
        logger.warning("the scene defines no camera, using a default perspective camera")
        camera = PerspectiveCamera(aspect_ratio=settings.aspect_ratio,
                                   transformation=rotation_z(args.angle or 0.0) *
                                   translation(Vec(-1.0, 0.0, 0.0)))

    image = render(scene.world, camera, settings, callback=_progress)
    default_name = "render_" + datetime.now().strftime("%Y-%m-%d_%H%M%S")
    _save_outputs(image, args, default_name)


def cmd_demo(args: argparse.Namespace) -> None:
    settings = settings_from_args(args)
    camera = demo_camera(args.camera, aspect_ratio=settings.aspect_ratio, angle_deg=args.angle or 0.0)
    image = render(demo_world(), camera, settings, callback=_progress)
    _save_outputs(image, args, f"demo_{args.camera}")


def cmd_tonemap(args: argparse.Namespace) -> None:
    tone = ToneMapSettings(factor=args.factor, gamma=args.gamma, mean_type=args.mean_type,
                           weights=tuple(args.weights), delta=args.delta)
    image = read_pfm_file(args.input_pfm)
    ldr = tone_map(image, factor=tone.factor, delta=tone.delta,
                   mean_type=tone.mean_type, weights=tone.weights)
    write_ldr_image(ldr, args.output, gamma=tone.gamma)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    start = time.perf_counter()
    try:
        args.func(args)
    except (RayTracerError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1
    logger.info("done in %.2fs", time.perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
