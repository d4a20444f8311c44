# renderer/parallel.py
"""
Render driver. The image is cut into fixed bands of rows; each band owns
its own random generator (seeded with the band index) and its own
integrator, so the result does not depend on how many processes render it.
"""
import logging
import time
from concurrent import futures
from typing import Callable, List, Optional, Tuple

import numpy as np

from csgtracer.camera.camera import Camera
from csgtracer.config import RenderSettings
from csgtracer.core.pcg import PCG
from csgtracer.geometry.world import World
from csgtracer.imaging.hdr_image import HdrImage
from csgtracer.renderer.image_tracer import ImageTracer
from csgtracer.renderer.integrators import FlatRenderer, OnOffRenderer, PathTracer, Renderer

logger = logging.getLogger(__name__)

# (band index, first row, last row), rows 1-based and inclusive
Band = Tuple[int, int, int]

# Scene shared with the worker processes, set once by _init_worker
_worker_scene = None


def make_renderer(world: World, settings: RenderSettings, pcg: PCG) -> Renderer:
    background = settings.background_color
    if settings.renderer == "onoff":
        return OnOffRenderer(world, background_color=background)
    if settings.renderer == "flat":
        return FlatRenderer(world, background_color=background)
    if settings.renderer == "pathtracing":
        return PathTracer(
            world,
            pcg=pcg,
            n_rays=settings.n_rays,
            max_depth=settings.max_depth,
            russian_roulette_limit=settings.russian_roulette_limit,
            background_color=background,
        )
    raise AssertionError(f"unknown renderer {settings.renderer!r}")


def split_bands(height: int, rows_per_band: int) -> List[Band]:
    return [
        (index, first, min(first + rows_per_band - 1, height))
        for index, first in enumerate(range(1, height + 1, rows_per_band))
    ]


def render_band(world: World, camera: Camera, settings: RenderSettings, band: Band) -> np.ndarray:
    """
    Render one band and return its rows of pixels, shape
    (rows, width, 3).
    """
    index, first_row, last_row = band
    pcg = PCG(init_state=settings.seed, init_seq=index)
    image = HdrImage(settings.width, settings.height)
    tracer = ImageTracer(image, camera, samples_per_pixel=settings.samples_per_pixel, pcg=pcg)
    tracer.fire_rows(make_renderer(world, settings, pcg), first_row, last_row)
    return image.pixels[first_row - 1:last_row].copy()


def _init_worker(world: World, camera: Camera, settings: RenderSettings) -> None:
    global _worker_scene
    _worker_scene = (world, camera, settings)


def _render_band_in_worker(band: Band) -> np.ndarray:
    world, camera, settings = _worker_scene
    return render_band(world, camera, settings, band)


def render(world: World, camera: Camera, settings: RenderSettings,
           callback: Optional[Callable[[int, int], None]] = None) -> HdrImage:
    """
    Render ``world`` as seen by ``camera``.

    ``callback(rows_done, total_rows)`` is invoked each time a band is
    stored. With ``settings.workers > 1`` the bands are rendered by a pool
    of processes, otherwise in the calling one.
    """
    image = HdrImage(settings.width, settings.height)
    bands = split_bands(settings.height, settings.rows_per_band)
    logger.info("rendering %dx%d with %s renderer, %d sample(s) per pixel, %d band(s), %d worker(s)",
                settings.width, settings.height, settings.renderer,
                settings.samples_per_pixel, len(bands), settings.workers)
    start = time.perf_counter()
    rows_done = 0

    def store(band: Band, pixels: np.ndarray) -> None:
        nonlocal rows_done
        _, first_row, last_row = band
        image.pixels[first_row - 1:last_row] = pixels
        rows_done += last_row - first_row + 1
        logger.debug("band %d done (rows %d-%d)", band[0], first_row, last_row)
        if callback is not None:
            callback(rows_done, settings.height)

    if settings.workers > 1 and len(bands) > 1:
        with futures.ProcessPoolExecutor(max_workers=settings.workers,
                                         initializer=_init_worker,
                                         initargs=(world, camera, settings)) as executor:
            for band, pixels in zip(bands, executor.map(_render_band_in_worker, bands)):
                store(band, pixels)
    else:
        for band in bands:
            store(band, render_band(world, camera, settings, band))

    logger.info("render finished in %.2fs", time.perf_counter() - start)
    return image
