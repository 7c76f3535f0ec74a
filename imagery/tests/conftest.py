"""Shared pytest fixtures for derivative engine tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from imagery.derivatives.backends import PillowBackend


def write_image(
    directory: Path,
    name: str,
    size: tuple[int, int],
    mode: str = "RGB",
    color: object = (200, 100, 50),
    format: str | None = None,
) -> Path:
    """Write a solid test image and return its path."""
    path = directory / name
    Image.new(mode, size, color).save(path, format=format)
    return path


@pytest.fixture
def make_image():
    """Return the helper writing solid test images."""
    return write_image


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Create an empty cache directory."""
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create a directory for source images."""
    path = tmp_path / "sources"
    path.mkdir()
    return path


@pytest.fixture
def landscape_jpeg(source_dir: Path) -> Path:
    """A 4000x3000 photo-sized JPEG."""
    return write_image(source_dir, "landscape.jpg", (4000, 3000))


@pytest.fixture
def portrait_png(source_dir: Path) -> Path:
    """An 800x2000 portrait PNG."""
    return write_image(source_dir, "portrait.png", (800, 2000))


@pytest.fixture
def small_png(source_dir: Path) -> Path:
    """A 100x100 PNG smaller than every ladder step."""
    return write_image(source_dir, "small.png", (100, 100))


@pytest.fixture
def rgba_png(source_dir: Path) -> Path:
    """A 300x200 half-transparent RGBA PNG."""
    return write_image(source_dir, "alpha.png", (300, 200), mode="RGBA", color=(10, 20, 30, 128))


@pytest.fixture
def broken_file(source_dir: Path) -> Path:
    """A file with an image extension but no image data."""
    path = source_dir / "broken.jpg"
    path.write_bytes(b"definitely not a jpeg")
    return path


@pytest.fixture
def pillow_backend(cache_dir: Path) -> PillowBackend:
    return PillowBackend(cache_dir)
