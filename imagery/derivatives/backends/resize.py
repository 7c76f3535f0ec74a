"""High-quality in-process resize and alpha handling."""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image

from ..config import Config

logger = logging.getLogger("derivatives.backends.resize")


def high_quality_resize(
    image: Image.Image, target_size: tuple[int, int]
) -> Image.Image:
    """Resize an opaque (RGB) image with a Lanczos filter.

    Args:
        image: Source PIL image, as produced by ``drop_alpha``.
        target_size: Target (width, height), at least one pixel on each axis.

    Returns:
        Resized image.
    """
    return image.resize(tuple(target_size), Config.RESIZE_QUALITY)


def translucent_fraction(image: Image.Image) -> float:
    """Return the fraction of pixels with alpha below 255.

    Images without an alpha channel return 0.0.
    """
    if "A" not in image.getbands() and "transparency" not in image.info:
        return 0.0

    alpha = np.asarray(image.convert("RGBA").getchannel("A"))
    if alpha.size == 0:
        return 0.0
    return float(np.count_nonzero(alpha < 255)) / alpha.size


def drop_alpha(image: Image.Image, source_path: str = "") -> Image.Image:
    """Discard any alpha channel, returning an RGB image.

    Transparent pixels keep their stored colour; nothing is composited.
    """
    fraction = translucent_fraction(image)
    if fraction > Config.ALPHA_WARNING_THRESHOLD:
        logger.warning(
            "Discarding alpha channel of %s (%.0f%% translucent pixels)",
            source_path or "image", fraction * 100,
        )

    if image.mode == "RGB":
        return image
    return image.convert("RGB")
