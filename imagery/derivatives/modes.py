"""Resize modes: declarative geometry policies for derivatives.

Modes are immutable and validated on construction, so an invalid policy is
rejected before any image is opened.
"""

from __future__ import annotations

from dataclasses import dataclass

from .validators import validate_aspect_range, validate_edge_size


@dataclass(frozen=True)
class ContainInSquare:
    """Downscale so the longer edge does not exceed ``max_edge_size``. No crop."""
    max_edge_size: int

    def __post_init__(self) -> None:
        validate_edge_size("max_edge_size", self.max_edge_size)

    def describe(self) -> str:
        return f"contain-in-square({self.max_edge_size})"


@dataclass(frozen=True)
class CoverSquare:
    """Crop to 1:1, then downscale to at most ``edge_size``."""
    edge_size: int

    def __post_init__(self) -> None:
        validate_edge_size("edge_size", self.edge_size)

    def describe(self) -> str:
        return f"cover-square({self.edge_size})"


@dataclass(frozen=True)
class CoverRectangle:
    """Crop into the aspect band, then downscale to at most ``max_width``.

    Aspect ratio is width / height, e.g. 16/9 = 1.777.
    """
    min_aspect: float
    max_aspect: float
    max_width: int

    def __post_init__(self) -> None:
        validate_aspect_range(self.min_aspect, self.max_aspect)
        validate_edge_size("max_width", self.max_width)

    def describe(self) -> str:
        return (
            f"cover-rectangle({self.min_aspect:g}-{self.max_aspect:g}, "
            f"max width {self.max_width})"
        )


ResizeMode = ContainInSquare | CoverSquare | CoverRectangle
