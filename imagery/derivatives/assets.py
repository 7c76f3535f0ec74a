"""Responsive asset ladders built from a single source image."""

from __future__ import annotations

import logging
from pathlib import Path

from .backends import ImageBackend, ImageHandle
from .config import Config
from .constants import (
    ARTIST_FIXED,
    ARTIST_FLUID,
    BACKGROUND_MAX_EDGE_SIZE,
    COVER_EDGE_SIZES,
    FEED_MAX_EDGE_SIZE,
)
from .geometry import resolve_plan
from .models import ArtistAsset, ArtistAssets, CoverAsset, CoverAssets, ImageAsset
from .modes import ContainInSquare, CoverRectangle, CoverSquare, ResizeMode

logger = logging.getLogger("derivatives.assets")


def ladder_steps(available: int, steps: tuple[int, ...]) -> list[int]:
    """Select the ladder steps worth computing for a source.

    The first step is always included. Each further step is only included
    if ``available`` exceeds the previous step by ``MIN_OVERSHOOT``, e.g. a
    460px source is resized to 320 and towards 480, while a 321px source is
    only resized to 320.
    """
    selected = [steps[0]]
    for previous, step in zip(steps, steps[1:]):
        if available > previous * Config.MIN_OVERSHOOT:
            selected.append(step)
        else:
            break
    return selected


class AssetBuilder:
    """Compute the derivative sets a site needs for cover, artist, background
    and feed images.

    Each set opens its source once and reuses the handle for every step.
    ``DecodeError`` propagates so the caller can fall back to a procedural
    image. Nothing is cached between calls.
    """

    def __init__(self, backend: ImageBackend) -> None:
        self.backend = backend

    def cover_assets(self, source_path: str | Path) -> CoverAssets:
        logger.info("Resizing %s for usage as a cover image", source_path)
        handle = self.backend.open_opaque(source_path)

        # The square crop leaves the shorter edge
        available = min(handle.size)
        sizes = [
            self._asset(handle, CoverSquare(edge_size), CoverAsset)
            for edge_size in ladder_steps(available, COVER_EDGE_SIZES)
        ]
        return CoverAssets(sizes=sizes)

    def artist_assets(self, source_path: str | Path) -> ArtistAssets:
        logger.info("Resizing %s for usage as an artist image", source_path)
        handle = self.backend.open_opaque(source_path)

        return ArtistAssets(
            fixed=self._artist_ladder(handle, "fixed", *ARTIST_FIXED),
            fluid=self._artist_ladder(handle, "fluid", *ARTIST_FLUID),
        )

    def background_asset(self, source_path: str | Path) -> ImageAsset:
        logger.info("Resizing %s for usage as a background image", source_path)
        handle = self.backend.open_opaque(source_path)
        return self._asset(handle, ContainInSquare(BACKGROUND_MAX_EDGE_SIZE), ImageAsset)

    def feed_asset(self, source_path: str | Path) -> ImageAsset:
        logger.info("Resizing %s for usage as a feed image", source_path)
        handle = self.backend.open_opaque(source_path)
        return self._asset(handle, ContainInSquare(FEED_MAX_EDGE_SIZE), ImageAsset)

    def _artist_ladder(
        self,
        handle: ImageHandle,
        variant: str,
        min_aspect: float,
        max_aspect: float,
        widths: tuple[int, ...],
    ) -> list[ArtistAsset]:
        # Width left after cropping into the aspect band
        band = CoverRectangle(min_aspect, max_aspect, widths[0])
        available = resolve_plan(handle.width, handle.height, band).cropped_size[0]

        assets = []
        for width in ladder_steps(available, widths):
            mode = CoverRectangle(min_aspect, max_aspect, width)
            asset = self._asset(handle, mode, ArtistAsset)
            asset.variant = variant
            assets.append(asset)
        return assets

    def _asset(self, handle: ImageHandle, mode: ResizeMode, asset_type: type) -> ImageAsset:
        derivative = self.backend.resize_opaque(handle, mode)
        filesize = derivative.path(self.backend.cache_dir).stat().st_size
        return asset_type(
            filename=derivative.filename,
            width=derivative.width,
            height=derivative.height,
            filesize_bytes=filesize,
        )
