"""Derivative writer: naming and persisting encoded derivatives."""

from __future__ import annotations

import contextlib
import logging
import uuid
from collections.abc import Callable
from pathlib import Path

from .config import Config
from .exceptions import ConfigurationError, EncodeError
from .models import Derivative
from .modes import ResizeMode

logger = logging.getLogger("derivatives.writer")

# Receives the output path, writes the file and returns its (width, height)
Encoder = Callable[[Path], tuple[int, int]]


def new_filename() -> str:
    """Return a process-unique derivative filename.

    Names come from a 128-bit random identifier rather than the content, so
    concurrent writers never collide and no locking is needed.
    """
    return f"{uuid.uuid4().hex}{Config.DERIVATIVE_EXTENSION}"


class DerivativeWriter:
    """Write encoded derivatives into a shared cache directory.

    The cache directory is owned by the caller and must exist before the
    writer is created.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self.cache_dir = Path(cache_dir)
        if not self.cache_dir.is_dir():
            raise ConfigurationError(f"Cache directory not found: {self.cache_dir}")

    def write(
        self,
        encode: Encoder,
        source_path: str | None = None,
        mode: ResizeMode | None = None,
    ) -> Derivative:
        """Encode one derivative under a fresh filename.

        Args:
            encode: Backend encoder writing to the given path.
            source_path: Source image, for error context.
            mode: Resize mode, for error context.

        Returns:
            The written derivative.

        Raises:
            EncodeError: If encoding fails or produces an empty file. No
                partial file is left behind.
        """
        filename = new_filename()
        output_path = self.cache_dir / filename

        try:
            dimensions = encode(output_path)
        except EncodeError:
            self._discard(output_path)
            raise
        except Exception as e:
            self._discard(output_path)
            raise EncodeError(
                f"Failed to encode derivative of '{source_path}' "
                f"({_describe(mode)}): {e}",
                source_path=source_path,
                mode=mode,
            ) from e

        try:
            filesize = output_path.stat().st_size
        except OSError as e:
            raise EncodeError(
                f"Derivative of '{source_path}' ({_describe(mode)}) was not written: {e}",
                source_path=source_path,
                mode=mode,
            ) from e

        if filesize == 0:
            self._discard(output_path)
            raise EncodeError(
                f"Derivative of '{source_path}' ({_describe(mode)}) is empty",
                source_path=source_path,
                mode=mode,
            )

        logger.debug(
            "Wrote %s (%dx%d, %d bytes)", filename, dimensions[0], dimensions[1], filesize
        )
        return Derivative(filename, (dimensions[0], dimensions[1]))

    @staticmethod
    def _discard(path: Path) -> None:
        with contextlib.suppress(FileNotFoundError):
            path.unlink()


def _describe(mode: ResizeMode | None) -> str:
    return mode.describe() if mode is not None else "unknown mode"
