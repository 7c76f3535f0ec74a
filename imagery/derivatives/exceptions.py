"""Custom exception hierarchy for the derivative engine."""

from __future__ import annotations


class DerivativeError(Exception):
    """Base exception for all derivative engine errors."""


class ConfigurationError(DerivativeError):
    """Raised when a resize mode or engine setting is invalid."""


class DecodeError(DerivativeError):
    """Raised when a source image cannot be read or decoded.

    Recoverable per asset: callers may fall back to a procedural image.
    """

    def __init__(self, message: str, source_path: str | None = None) -> None:
        super().__init__(message)
        self.source_path = source_path


class EncodeError(DerivativeError):
    """Raised when a derivative cannot be produced or written."""

    def __init__(
        self,
        message: str,
        source_path: str | None = None,
        mode: object | None = None,
    ) -> None:
        super().__init__(message)
        self.source_path = source_path
        self.mode = mode
