"""Global configuration for the derivative engine."""

from __future__ import annotations

from PIL import Image


class Config:
    """Global configuration."""

    # Backend selection
    DEFAULT_BACKEND = "pillow"

    # Encoding (shared by both backends)
    DERIVATIVE_EXTENSION = ".jpg"
    JPEG_QUALITY = 80
    JPEG_PROGRESSIVE = True  # interlaced output
    JPEG_OPTIMIZE = True  # optimized Huffman tables

    # Quality
    RESIZE_QUALITY = Image.Resampling.LANCZOS
    VIPS_KERNEL = "lanczos3"

    # Decoding
    APPLY_EXIF_ORIENTATION = True
    ALPHA_WARNING_THRESHOLD = 0.05  # Warn when >5% of pixels are translucent

    # Native engine
    VIPS_CONCURRENCY = 2
    VIPS_INTERESTING = "attention"  # none, centre, entropy, attention, low, high

    # Asset ladders
    MIN_OVERSHOOT = 1.2
