"""Abstract backend contract for opening and resizing images."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..models import Derivative
from ..modes import ResizeMode
from ..writer import DerivativeWriter


class ImageHandle(ABC):
    """Opaque, backend-owned decoded image.

    A handle belongs to the call that opened it and is never shared between
    concurrent operations.
    """

    source_path: str

    @property
    @abstractmethod
    def size(self) -> tuple[int, int]:
        """Return (width, height) of the decoded image."""
        ...

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]


class ImageBackend(ABC):
    """Abstract base class for image processing backends.

    Implementations must agree on output dimensions for the same source and
    mode; pixel content may differ.
    """

    name: str = "abstract"

    def __init__(self, cache_dir: str | Path) -> None:
        self.writer = DerivativeWriter(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self.writer.cache_dir

    @abstractmethod
    def open_opaque(self, path: str | Path) -> ImageHandle:
        """Decode a source image for opaque (alpha-free) output.

        Args:
            path: Path to the source raster image.

        Returns:
            A handle to the decoded image.

        Raises:
            DecodeError: If the file is unreadable or not a supported image.
        """
        ...

    @abstractmethod
    def resize_opaque(self, handle: ImageHandle, mode: ResizeMode) -> Derivative:
        """Crop, scale and encode a derivative.

        Args:
            handle: Handle returned by this backend's ``open_opaque``.
            mode: Resize mode to apply.

        Returns:
            Derivative filename (relative to the cache directory) and final
            (width, height).

        Raises:
            EncodeError: If the derivative cannot be encoded or written.
        """
        ...

    def _check_handle(self, handle: ImageHandle, handle_type: type) -> None:
        if not isinstance(handle, handle_type):
            raise TypeError(
                f"{self.name} backend cannot resize a {type(handle).__name__}"
            )
