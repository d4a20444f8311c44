# materials/texture_loader.py
import logging
import os

from csgtracer.exceptions import expected_extension
from csgtracer.imaging.hdr_image import HdrImage
from csgtracer.imaging.pfm import read_pfm_file
from csgtracer.imaging.tone_mapping import LDR_EXTENSIONS, read_ldr_image
from csgtracer.materials.pigments import ImagePigment

logger = logging.getLogger(__name__)


def read_image(image_path, gamma: float = 1.0) -> HdrImage:
    """
    Load an image file as linear float RGB.

    PFM files are read as they are; 8-bit formats go through Pillow and have
    their gamma encoding removed.

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ExtensionError: If the image format is unsupported
    """
    expected_extension(image_path, [".pfm"] + LDR_EXTENSIONS)
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    if str(image_path).lower().endswith(".pfm"):
        return read_pfm_file(image_path)
    return read_ldr_image(image_path, gamma=gamma)


def load_image_pigment(image_path, gamma: float = 1.0) -> ImagePigment:
    """
    Create an image pigment from a file.
    """
    image = read_image(image_path, gamma=gamma)
    logger.debug("loaded texture %s (%dx%d)", image_path, image.width, image.height)
    return ImagePigment(image)
