# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Allow running the tests from a source checkout without installing
SRC_ROOT = Path(__file__).parent.parent / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from csgtracer.core.pcg import PCG  # noqa: E402
from csgtracer.core.transform import translation  # noqa: E402
from csgtracer.core.vector import Vec  # noqa: E402
from csgtracer.geometry.plane import Plane  # noqa: E402
from csgtracer.geometry.sphere import Sphere  # noqa: E402


@pytest.fixture
def pcg():
    """Random generator with the default seed."""
    return PCG()


@pytest.fixture
def unit_sphere():
    return Sphere()


@pytest.fixture
def raised_sphere():
    """Unit sphere moved up by one, overlapping ``unit_sphere``."""
    return Sphere(translation(Vec(0.0, 0.0, 1.0)))


@pytest.fixture
def xy_plane():
    return Plane()
