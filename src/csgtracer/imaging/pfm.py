# imaging/pfm.py
"""
Portable Float Map codec.

A PFM file is a three-line ASCII header::

    PF
    <width> <height>
    <endianness>

followed by ``width * height`` RGB triples of 32-bit floats, scanned left to
right and from the bottom row up. A positive endianness value means big
endian, a negative one little endian.
"""
import logging
import sys
from typing import BinaryIO

import numpy as np

from csgtracer.exceptions import PfmError, expected_extension
from csgtracer.imaging.hdr_image import HdrImage

logger = logging.getLogger(__name__)

HOST_ENDIANNESS = -1.0 if sys.byteorder == "little" else 1.0


def _dtype(endianness: float) -> str:
    return ">f4" if endianness > 0 else "<f4"


def write_pfm(stream: BinaryIO, image: HdrImage, endianness: float = HOST_ENDIANNESS) -> None:
    if endianness == 0:
        raise PfmError("endianness must be a non-zero number")
    endianness = 1.0 if endianness > 0 else -1.0
    header = f"PF\n{image.width} {image.height}\n{endianness}\n"
    stream.write(header.encode("ascii"))
    # Bottom row first
    data = np.ascontiguousarray(image.pixels[::-1], dtype=_dtype(endianness))
    stream.write(data.tobytes())


def _read_line(stream: BinaryIO) -> str:
    line = stream.readline()
    try:
        return line.decode("ascii").rstrip("\r\n")
    except UnicodeDecodeError as e:
        raise PfmError(f"invalid characters in PFM header: {line!r}") from e


def _parse_img_size(line: str):
    parts = line.split()
    if len(parts) != 2:
        raise PfmError(f"expected two integers for image size, got '{line}'")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise PfmError(f"invalid image size specification '{line}'") from e
    if width <= 0 or height <= 0:
        raise PfmError(f"image dimensions must be positive, got {width}x{height}")
    return width, height


def _parse_endianness(line: str) -> float:
    try:
        value = float(line)
    except ValueError as e:
        raise PfmError(f"missing or invalid endianness specification '{line}'") from e
    if value == 0:
        raise PfmError("endianness must be a non-zero number")
    return 1.0 if value > 0 else -1.0


def read_pfm(stream: BinaryIO) -> HdrImage:
    magic = _read_line(stream)
    if magic != "PF":
        raise PfmError(f"invalid magic '{magic}' in PFM file, expected 'PF'")

    width, height = _parse_img_size(_read_line(stream))
    endianness = _parse_endianness(_read_line(stream))

    expected = width * height * 3 * 4
    data = stream.read(expected)
    if len(data) < expected:
        raise PfmError(
            f"PFM file is truncated: expected {expected} bytes of pixel data, got {len(data)}"
        )
    pixels = np.frombuffer(data, dtype=_dtype(endianness)).reshape(height, width, 3)
    return HdrImage(width, height, pixels[::-1].astype(np.float32))


def write_pfm_file(path, image: HdrImage, endianness: float = HOST_ENDIANNESS) -> None:
    expected_extension(path, [".pfm"])
    with open(path, "wb") as f:
        write_pfm(f, image, endianness)
    logger.info("wrote %dx%d PFM image to %s", image.width, image.height, path)


def read_pfm_file(path) -> HdrImage:
    expected_extension(path, [".pfm"])
    with open(path, "rb") as f:
        image = read_pfm(f)
    logger.info("read %dx%d PFM image from %s", image.width, image.height, path)
    return image
