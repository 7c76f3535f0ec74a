"""Backend factory for the derivative engine."""

from __future__ import annotations

from pathlib import Path

from ..config import Config
from ..constants import PILLOW_BACKEND_NAMES, VIPS_BACKEND_NAMES
from ..exceptions import ConfigurationError
from .base_backend import ImageBackend, ImageHandle
from .pillow_backend import PillowBackend
from .vips_backend import VipsBackend, VipsEngine


def get_backend(
    cache_dir: str | Path,
    name: str = Config.DEFAULT_BACKEND,
    engine: VipsEngine | None = None,
) -> ImageBackend:
    """Create the backend selected by name.

    Args:
        cache_dir: Existing directory derivatives are written to.
        name: Backend name ("pillow" or "vips", aliases accepted).
        engine: Shared libvips engine; created when omitted for "vips".

    Returns:
        A backend instance.

    Raises:
        ConfigurationError: If the name is unknown or the engine cannot start.
    """
    key = name.lower()
    if key in PILLOW_BACKEND_NAMES:
        return PillowBackend(cache_dir)
    if key in VIPS_BACKEND_NAMES:
        return VipsBackend(cache_dir, engine or VipsEngine())
    raise ConfigurationError(
        f"No backend named '{name}'. Supported: pillow, vips"
    )


__all__ = [
    "get_backend",
    "ImageBackend",
    "ImageHandle",
    "PillowBackend",
    "VipsBackend",
    "VipsEngine",
]
