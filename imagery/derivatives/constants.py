"""Shared constants for the derivative engine."""

from __future__ import annotations

# Square cover edge sizes; the first is always computed
COVER_EDGE_SIZES = (160, 320, 480, 800, 1280)

# Artist image ladders as (min_aspect, max_aspect, widths).
# Fixed: 100vw/40vw below 30rem and 27rem/12rem above 60rem, i.e. ~2.25-2.5
# Fluid: 100vw/12rem between 30rem and 60rem, i.e. 2.5-5
ARTIST_FIXED = (2.25, 2.5, (320, 480, 640))
ARTIST_FLUID = (2.5, 5.0, (640, 960, 1280))

BACKGROUND_MAX_EDGE_SIZE = 1280
FEED_MAX_EDGE_SIZE = 920

# Backend names accepted by the factory
PILLOW_BACKEND_NAMES = frozenset({"pillow", "image", "in-process"})
VIPS_BACKEND_NAMES = frozenset({"vips", "libvips", "native"})
