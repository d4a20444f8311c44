# imaging/tone_mapping.py
"""
HDR to LDR conversion: luminosity estimation, normalisation, soft clamping
and gamma encoding. The per-pixel loops are numba kernels working directly
on ``HdrImage.pixels``.
"""
import logging
from enum import IntEnum
from typing import Optional, Sequence

import numpy as np
from numba import njit
from PIL import Image

from csgtracer.core.color import Color
from csgtracer.exceptions import ToneMappingError, expected_extension
from csgtracer.imaging.hdr_image import HdrImage

logger = logging.getLogger(__name__)

LDR_EXTENSIONS = [".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp"]

DEFAULT_WEIGHTS = (1.0, 1.0, 1.0)


class MeanType(IntEnum):
    """How the three channels of a pixel are averaged into a luminosity."""
    MAX_MIN = 0
    ARITHMETIC = 1
    WEIGHTED = 2
    DISTANCE = 3


@njit(cache=True)
def _luminosity_kernel(pixels, mean_code, weights):
    height, width = pixels.shape[0], pixels.shape[1]
    out = np.empty((height, width), dtype=np.float64)
    wsum = weights[0] + weights[1] + weights[2]
    for i in range(height):
        for j in range(width):
            r = pixels[i, j, 0]
            g = pixels[i, j, 1]
            b = pixels[i, j, 2]
            if mean_code == 0:
                out[i, j] = (max(r, g, b) + min(r, g, b)) / 2.0
            elif mean_code == 1:
                out[i, j] = (r + g + b) / 3.0
            elif mean_code == 2:
                out[i, j] = (r * weights[0] + g * weights[1] + b * weights[2]) / wsum
            elif mean_code == 3:
                out[i, j] = np.sqrt(r * r + g * g + b * b)
            else:
                raise AssertionError("unknown luminosity mean type")
    return out


@njit(cache=True)
def _clamp_kernel(pixels):
    height, width = pixels.shape[0], pixels.shape[1]
    for i in range(height):
        for j in range(width):
            for c in range(3):
                x = pixels[i, j, c]
                pixels[i, j, c] = x / (1.0 + x)


@njit(cache=True)
def _gamma_encode_kernel(pixels, gamma):
    height, width = pixels.shape[0], pixels.shape[1]
    out = np.empty((height, width, 3), dtype=np.uint8)
    inv_gamma = 1.0 / gamma
    for i in range(height):
        for j in range(width):
            for c in range(3):
                x = pixels[i, j, c]
                v = 255.0 * x ** inv_gamma if x > 0.0 else 0.0
                out[i, j, c] = min(255, max(0, int(v)))
    return out


def _mean_code(mean_type) -> int:
    if isinstance(mean_type, str):
        try:
            mean_type = MeanType[mean_type.upper()]
        except KeyError as e:
            raise ToneMappingError(f"unknown mean type '{mean_type}'") from e
    return int(mean_type)


def _weights_array(mean_type, weights: Optional[Sequence[float]]) -> np.ndarray:
    if weights is None:
        weights = DEFAULT_WEIGHTS
    weights = np.asarray(weights, dtype=np.float64).ravel()
    if _mean_code(mean_type) == MeanType.WEIGHTED:
        if weights.shape != (3,):
            raise ToneMappingError(
                f"weighted mean needs exactly three weights, got {weights.tolist()}"
            )
        if weights.sum() == 0:
            raise ToneMappingError("the sum of the weights must not be zero")
    elif weights.shape != (3,):
        weights = np.asarray(DEFAULT_WEIGHTS)
    return weights


def luminosity(color: Color, mean_type=MeanType.MAX_MIN,
               weights: Optional[Sequence[float]] = None) -> float:
    """
    Luminosity of a single color, using the same kernel as whole images.
    """
    pixels = np.array([[[color.r, color.g, color.b]]], dtype=np.float64)
    w = _weights_array(mean_type, weights)
    return float(_luminosity_kernel(pixels, _mean_code(mean_type), w)[0, 0])


def log_average(image: HdrImage, delta: float = 1e-10, mean_type=MeanType.MAX_MIN,
                weights: Optional[Sequence[float]] = None) -> float:
    """
    Logarithmic (base 10) average of the pixel luminosities. ``delta`` keeps
    black pixels from sending the logarithm to minus infinity.
    """
    w = _weights_array(mean_type, weights)
    lum = _luminosity_kernel(image.pixels, _mean_code(mean_type), w)
    return float(10.0 ** np.mean(np.log10(lum + delta)))


def normalize_image(image: HdrImage, factor: float = 1.0, luminosity: Optional[float] = None,
                    delta: float = 1e-10, mean_type=MeanType.MAX_MIN,
                    weights: Optional[Sequence[float]] = None) -> HdrImage:
    """
    Scale every pixel in place by ``factor / luminosity``; the luminosity
    defaults to the logarithmic average of the image.
    """
    if luminosity is None:
        luminosity = log_average(image, delta=delta, mean_type=mean_type, weights=weights)
    logger.debug("normalizing with factor %g and average luminosity %g", factor, luminosity)
    image.pixels *= np.float32(factor / luminosity)
    return image


def clamp_image(image: HdrImage) -> HdrImage:
    """Map every channel x to x / (1 + x), in place."""
    _clamp_kernel(image.pixels)
    return image


def tone_map(image: HdrImage, factor: float = 1.0, luminosity: Optional[float] = None,
             delta: float = 1e-10, mean_type=MeanType.MAX_MIN,
             weights: Optional[Sequence[float]] = None) -> HdrImage:
    """
    Normalised and clamped copy of ``image``, ready for ``write_ldr_image``.
    """
    result = image.copy()
    normalize_image(result, factor=factor, luminosity=luminosity, delta=delta,
                    mean_type=mean_type, weights=weights)
    return clamp_image(result)


def write_ldr_image(image: HdrImage, path, gamma: float = 1.0) -> None:
    """
    Gamma-encode a tone-mapped image to 8 bits and save it with Pillow; the
    format follows the file extension.
    """
    expected_extension(path, LDR_EXTENSIONS)
    if gamma <= 0:
        raise ToneMappingError(f"gamma must be positive, got {gamma}")
    data = _gamma_encode_kernel(image.pixels, float(gamma))
    Image.fromarray(data, "RGB").save(path)
    logger.info("wrote %dx%d LDR image to %s", image.width, image.height, path)


def read_ldr_image(path, gamma: float = 1.0) -> HdrImage:
    """
    Load an 8-bit image and undo its gamma encoding, giving linear RGB.
    """
    expected_extension(path, LDR_EXTENSIONS)
    with Image.open(path) as img:
        if img.mode != "RGB":
            img = img.convert("RGB")
        data = np.asarray(img, dtype=np.float32) / 255.0
    pixels = np.power(data, np.float32(gamma)).astype(np.float32)
    logger.info("read %dx%d LDR image from %s", pixels.shape[1], pixels.shape[0], path)
    return HdrImage.from_array(pixels)
