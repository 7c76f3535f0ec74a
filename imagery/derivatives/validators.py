"""Input validation for resize modes and source geometry."""

from __future__ import annotations

import math

from .exceptions import ConfigurationError


def validate_edge_size(name: str, value: int) -> None:
    """Validate a pixel edge size or width limit.

    Args:
        name: Field name, used in the error message.
        value: Value to check.

    Raises:
        ConfigurationError: If the value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")


def validate_aspect_range(min_aspect: float, max_aspect: float) -> None:
    """Validate an aspect band (width / height).

    Args:
        min_aspect: Lower bound of the band.
        max_aspect: Upper bound of the band.

    Raises:
        ConfigurationError: If either bound is not a positive finite number
            or the bounds are inverted.
    """
    for name, value in (("min_aspect", min_aspect), ("max_aspect", max_aspect)):
        if isinstance(value, bool) or not isinstance(value, int | float):
            raise ConfigurationError(
                f"{name} must be a number, got {type(value).__name__}"
            )
        if not math.isfinite(value) or value <= 0:
            raise ConfigurationError(f"{name} must be positive and finite, got {value}")

    if min_aspect > max_aspect:
        raise ConfigurationError(
            f"min_aspect {min_aspect} exceeds max_aspect {max_aspect}"
        )


def validate_dimensions(width: int, height: int) -> None:
    """Validate source dimensions.

    Raises:
        ConfigurationError: If either dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Dimensions must be positive, got {width}x{height}")
