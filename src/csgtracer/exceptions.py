# exceptions.py
from typing import Optional


class RayTracerError(Exception):
    """
    Base class of every error raised on purpose by csgtracer.

    These are user-facing failures (bad input, bad scene, bad files). Logic
    errors that valid input can never trigger are plain AssertionErrors.
    """


class GeometryError(RayTracerError):
    """Invalid geometric construction, e.g. a zero scaling factor."""


class CsgError(RayTracerError):
    """Invalid CSG construction, e.g. two overlapping identical children."""


class PfmError(RayTracerError):
    """Malformed PFM stream."""


class ExtensionError(RayTracerError):
    """A file name carries an extension that cannot be handled."""


class ToneMappingError(RayTracerError):
    """Invalid tone mapping parameters."""


class ConfigurationError(RayTracerError, ValueError):
    """Render parameters rejected before rendering starts."""


class GrammarError(RayTracerError):
    """
    Syntax or semantic error found while reading a scene description.

    The location (file, line, column) of the offending token is kept so that
    the driver can point the user at it.
    """
    def __init__(self, location, message: str):
        super().__init__(message)
        self.location = location
        self.message = message

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.location}: {self.message}"


def expected_extension(filename: str, extensions, error: Optional[type] = None) -> None:
    """
    Raise (by default) an ExtensionError unless ``filename`` ends with one of
    ``extensions`` (case-insensitive).
    """
    lowered = str(filename).lower()
    if not any(lowered.endswith(ext.lower()) for ext in extensions):
        error = error or ExtensionError
        raise error(
            f"expected extension to be one of {{{', '.join(extensions)}}}, "
            f"got '{filename}'"
        )
