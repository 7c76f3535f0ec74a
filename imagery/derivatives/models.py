"""Data structures for the derivative engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple


@dataclass(frozen=True)
class CropBox:
    """Crop rectangle in source pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def to_tuple(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x2, self.y2)


@dataclass(frozen=True)
class ResizePlan:
    """Crop and scale steps resolved for one source and resize mode.

    ``target_size`` is None when no scaling is needed.
    """
    source_size: tuple[int, int]
    crop: CropBox | None = None
    target_size: tuple[int, int] | None = None

    @property
    def cropped_size(self) -> tuple[int, int]:
        return self.crop.size if self.crop else self.source_size

    @property
    def output_size(self) -> tuple[int, int]:
        return self.target_size or self.cropped_size

    @property
    def scale_factor(self) -> float:
        if self.target_size is None:
            return 1.0
        return self.target_size[0] / self.cropped_size[0]

    @property
    def is_identity(self) -> bool:
        return self.crop is None and self.target_size is None


class Derivative(NamedTuple):
    """Result of one resize call: cache filename and final dimensions."""
    filename: str
    dimensions: tuple[int, int]

    @property
    def width(self) -> int:
        return self.dimensions[0]

    @property
    def height(self) -> int:
        return self.dimensions[1]

    def path(self, cache_dir: str | Path) -> Path:
        return Path(cache_dir) / self.filename


@dataclass
class ImageAsset:
    """A single derivative recorded against a logical asset."""
    filename: str
    width: int
    height: int
    filesize_bytes: int


@dataclass
class CoverAsset(ImageAsset):
    """A square cover derivative."""

    @property
    def edge_size(self) -> int:
        return self.width

    def target_filename(self) -> str:
        """Name used in the publish tree, e.g. ``cover_480.jpg``."""
        return f"cover_{self.edge_size}.jpg"


@dataclass
class ArtistAsset(ImageAsset):
    """An aspect-banded artist image derivative."""
    variant: str = "fixed"

    def target_filename(self) -> str:
        """Name used in the publish tree, e.g. ``image_fixed_480x200.jpg``."""
        return f"image_{self.variant}_{self.width}x{self.height}.jpg"


@dataclass
class CoverAssets:
    """Differently sized square versions of one cover image.

    ``sizes`` is ordered by ascending edge size and always holds the smallest
    step; larger steps exist only for sufficiently large sources.
    """
    sizes: list[CoverAsset] = field(default_factory=list)

    def all(self) -> list[CoverAsset]:
        return list(self.sizes)

    def by_edge_size(self, edge_size: int) -> CoverAsset | None:
        for asset in self.sizes:
            if asset.edge_size == edge_size:
                return asset
        return None

    def largest(self) -> CoverAsset:
        return self.sizes[-1]

    def smallest(self) -> CoverAsset:
        return self.sizes[0]

    def up_to(self, edge_size: int) -> list[CoverAsset]:
        """Assets whose requested step does not exceed ``edge_size``."""
        return [a for a in self.sizes if a.edge_size <= edge_size] or [self.sizes[0]]

    def opengraph_asset(self) -> CoverAsset:
        """Best suited asset for link previews: at most 800px."""
        return self.up_to(800)[-1]

    def playlist_asset(self) -> CoverAsset:
        return self.up_to(480)[-1]


@dataclass
class ArtistAssets:
    """Fixed and fluid ladders of one artist image, by ascending width."""
    fixed: list[ArtistAsset] = field(default_factory=list)
    fluid: list[ArtistAsset] = field(default_factory=list)

    def all(self) -> list[ArtistAsset]:
        return self.fixed + self.fluid

    def opengraph_asset(self) -> ArtistAsset:
        return self.fixed[-1]
