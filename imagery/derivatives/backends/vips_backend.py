"""Native-engine backend built on libvips (via pyvips)."""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..config import Config
from ..exceptions import ConfigurationError, DecodeError, EncodeError
from ..geometry import resolve_plan
from ..models import Derivative
from ..modes import ResizeMode
from .base_backend import ImageBackend, ImageHandle

if TYPE_CHECKING:
    import pyvips

logger = logging.getLogger("derivatives.backends.vips")

INTERESTING_OPTIONS = frozenset({"none", "centre", "entropy", "attention", "low", "high", "all"})


class VipsEngine:
    """The long-lived libvips instance shared by all native backend calls.

    Create one per process and pass it to every ``VipsBackend``. At most
    ``concurrency`` operations run at once; further callers block until a
    slot frees up.
    """

    def __init__(self, concurrency: int = Config.VIPS_CONCURRENCY) -> None:
        if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
            raise ConfigurationError(f"concurrency must be a positive integer, got {concurrency!r}")

        try:
            import pyvips
        except (ImportError, OSError) as e:
            raise ConfigurationError(f"Cannot initialize libvips: {e}") from e

        pyvips.concurrency_set(concurrency)

        self.pyvips = pyvips
        self.concurrency = concurrency
        self._slots = threading.BoundedSemaphore(concurrency)

        logger.info(
            "Initialized libvips %s with concurrency %d", self.version, concurrency
        )

    @property
    def version(self) -> str:
        return ".".join(str(self.pyvips.version(i)) for i in range(3))

    @contextlib.contextmanager
    def slot(self) -> Iterator[None]:
        """Hold one of the engine's operation slots for the duration."""
        with self._slots:
            yield


class VipsHandle(ImageHandle):
    """Decoded image held in libvips memory."""

    def __init__(self, image: pyvips.Image, source_path: str) -> None:
        self.image = image
        self.source_path = source_path

    @property
    def size(self) -> tuple[int, int]:
        return (self.image.width, self.image.height)


class VipsBackend(ImageBackend):
    """Delegate decode, crop, scale and encode to libvips.

    Crops are placed by ``smartcrop`` using the configured ``interesting``
    strategy ("attention" by default, "centre" for geometric centring).
    """

    name = "vips"

    def __init__(
        self,
        cache_dir: str | Path,
        engine: VipsEngine,
        interesting: str = Config.VIPS_INTERESTING,
    ) -> None:
        if interesting not in INTERESTING_OPTIONS:
            raise ConfigurationError(
                f"Unknown smartcrop strategy '{interesting}'. "
                f"Allowed: {', '.join(sorted(INTERESTING_OPTIONS))}"
            )
        super().__init__(cache_dir)
        self.engine = engine
        self.interesting = interesting

    def open_opaque(self, path: str | Path) -> VipsHandle:
        """Load and fully decode a source image.

        Raises:
            DecodeError: If libvips cannot load the file.
        """
        source_path = str(path)
        pyvips = self.engine.pyvips

        with self.engine.slot():
            try:
                image = pyvips.Image.new_from_file(source_path)
                if Config.APPLY_EXIF_ORIENTATION:
                    image = image.autorot()
                # Decode now so broken pixel data fails here, not at save time
                image = image.copy_memory()
            except pyvips.Error as e:
                raise DecodeError(
                    f"Failed to open image '{source_path}': {e.message}",
                    source_path=source_path,
                ) from e

        logger.info("Opened %s: %dx%d", Path(source_path).name, image.width, image.height)
        return VipsHandle(image, source_path)

    def resize_opaque(self, handle: ImageHandle, mode: ResizeMode) -> Derivative:
        self._check_handle(handle, VipsHandle)

        plan = resolve_plan(handle.width, handle.height, mode)
        pyvips = self.engine.pyvips

        def encode(output_path: Path) -> tuple[int, int]:
            with self.engine.slot():
                try:
                    image = handle.image
                    if plan.crop is not None:
                        crop_w, crop_h = plan.crop.size
                        image = image.smartcrop(crop_w, crop_h, interesting=self.interesting)
                    if plan.target_size is not None:
                        image = self._resize_exact(image, plan.target_size)
                    image = self._strip_alpha(image)
                    image.jpegsave(
                        str(output_path),
                        Q=Config.JPEG_QUALITY,
                        interlace=Config.JPEG_PROGRESSIVE,
                        optimize_coding=Config.JPEG_OPTIMIZE,
                        strip=True,
                    )
                except pyvips.Error as e:
                    raise EncodeError(
                        f"libvips failed on '{handle.source_path}' "
                        f"({mode.describe()}): {e.message} {e.detail}".rstrip(),
                        source_path=handle.source_path,
                        mode=mode,
                    ) from e
            return (image.width, image.height)

        return self.writer.write(encode, handle.source_path, mode)

    @staticmethod
    def _resize_exact(image: Any, target_size: tuple[int, int]) -> Any:
        """Resize to exactly ``target_size``.

        libvips rounds the scaled size, so per-axis scales are derived from the
        planned size rather than passing one uniform factor.
        """
        target_w, target_h = target_size
        hscale = target_w / image.width
        vscale = target_h / image.height
        resized = image.resize(hscale, vscale=vscale, kernel=Config.VIPS_KERNEL)

        if resized.width > target_w or resized.height > target_h:
            resized = resized.crop(
                0, 0, min(resized.width, target_w), min(resized.height, target_h)
            )
        return resized

    @staticmethod
    def _strip_alpha(image: Any) -> Any:
        if image.hasalpha():
            return image.extract_band(0, n=image.bands - 1)
        return image
