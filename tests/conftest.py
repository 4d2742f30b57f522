"""Shared test configuration and fixtures for ImageBinder test suite."""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def make_image_bytes(
    width: int, height: int, fmt: str = "PNG", color=(200, 60, 40), exif_orientation: int | None = None
) -> bytes:
    """Encode a solid-colour image of the given size, optionally tagged with an EXIF orientation."""
    buf = io.BytesIO()
    params = {}
    if exif_orientation is not None:
        exif = Image.Exif()
        exif[0x0112] = exif_orientation
        params["exif"] = exif.tobytes()
    Image.new("RGB", (width, height), color).save(buf, format=fmt, **params)
    return buf.getvalue()


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture
def png_bytes():
    return make_image_bytes(300, 200)


@pytest.fixture
def tall_jpeg_bytes():
    return make_image_bytes(120, 400, fmt="JPEG")


@pytest.fixture
def image_factory():
    return make_image_bytes
