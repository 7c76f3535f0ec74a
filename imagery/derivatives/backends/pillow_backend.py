"""In-process backend built on Pillow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageOps

from ..config import Config
from ..exceptions import DecodeError
from ..geometry import resolve_plan
from ..models import Derivative
from ..modes import ResizeMode
from .base_backend import ImageBackend, ImageHandle
from .resize import drop_alpha, high_quality_resize

logger = logging.getLogger("derivatives.backends.pillow")


@dataclass
class PillowHandle(ImageHandle):
    """Fully decoded RGB image held in memory."""
    image: Image.Image
    source_path: str

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


class PillowBackend(ImageBackend):
    """Decode, crop, scale and encode entirely within the calling process.

    Crops are always geometrically centred. There is no internal concurrency
    limit; each open handle holds a full decoded raster in memory.
    """

    name = "pillow"

    def open_opaque(self, path: str | Path) -> PillowHandle:
        """Open an image and drop the alpha channel right away.

        Raises:
            DecodeError: If the image cannot be opened or decoded.
        """
        source_path = str(path)
        try:
            with Image.open(source_path) as img:
                img.load()
                if Config.APPLY_EXIF_ORIENTATION:
                    img = ImageOps.exif_transpose(img)
                image = drop_alpha(img, source_path)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(
                f"Failed to open image '{source_path}': {e}", source_path=source_path
            ) from e

        logger.info("Opened %s: %dx%d", Path(source_path).name, *image.size)
        return PillowHandle(image=image, source_path=source_path)

    def resize_opaque(self, handle: ImageHandle, mode: ResizeMode) -> Derivative:
        self._check_handle(handle, PillowHandle)

        plan = resolve_plan(handle.width, handle.height, mode)

        image = handle.image
        if plan.crop is not None:
            image = image.crop(plan.crop.to_tuple())
        if plan.target_size is not None:
            image = high_quality_resize(image, plan.target_size)

        def encode(output_path: Path) -> tuple[int, int]:
            image.save(
                output_path,
                format="JPEG",
                quality=Config.JPEG_QUALITY,
                optimize=Config.JPEG_OPTIMIZE,
                progressive=Config.JPEG_PROGRESSIVE,
            )
            return image.size

        return self.writer.write(encode, handle.source_path, mode)
