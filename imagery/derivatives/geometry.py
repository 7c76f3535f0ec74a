"""Crop and scale planning for resize modes.

Pure logic, no image I/O. Both backends execute the plans produced here, which
is what keeps their output dimensions identical.

Rounding: every derived pixel count is the floor of its exact value, clamped
to at least one pixel. Scaled dimensions use integer arithmetic, so the edge a
scale factor is derived from lands exactly on its target.
"""

from __future__ import annotations

import logging
import math

from .exceptions import ConfigurationError
from .models import CropBox, ResizePlan
from .modes import ContainInSquare, CoverRectangle, CoverSquare, ResizeMode
from .validators import validate_dimensions

logger = logging.getLogger("derivatives.geometry")


def resolve_plan(width: int, height: int, mode: ResizeMode) -> ResizePlan:
    """Resolve the crop rectangle and target size for a source.

    Args:
        width: Source width in pixels.
        height: Source height in pixels.
        mode: Resize mode to apply.

    Returns:
        The resolved plan. Output never exceeds the source on either axis.

    Raises:
        ConfigurationError: If the dimensions are invalid or the mode is unknown.
    """
    validate_dimensions(width, height)

    if isinstance(mode, ContainInSquare):
        plan = _plan_contain_in_square(width, height, mode)
    elif isinstance(mode, CoverSquare):
        plan = _plan_cover_square(width, height, mode)
    elif isinstance(mode, CoverRectangle):
        plan = _plan_cover_rectangle(width, height, mode)
    else:
        raise ConfigurationError(f"Unknown resize mode: {mode!r}")

    logger.debug(
        "Plan for %dx%d with %s: crop=%s target=%s",
        width, height, mode.describe(),
        plan.crop.to_tuple() if plan.crop else None,
        plan.target_size,
    )
    return plan


def scale_to(size: tuple[int, int], reference: int, target: int) -> tuple[int, int]:
    """Scale ``size`` uniformly by ``target / reference``, flooring both axes."""
    w, h = size
    return (max(1, w * target // reference), max(1, h * target // reference))


def _plan_contain_in_square(width: int, height: int, mode: ContainInSquare) -> ResizePlan:
    longer_edge = max(width, height)
    if longer_edge <= mode.max_edge_size:
        return ResizePlan(source_size=(width, height))

    target = scale_to((width, height), longer_edge, mode.max_edge_size)
    return ResizePlan(source_size=(width, height), target_size=target)


def _plan_cover_square(width: int, height: int, mode: CoverSquare) -> ResizePlan:
    edge = min(width, height)

    crop = None
    if height > width:
        crop = CropBox(x=0, y=(height - width) // 2, width=width, height=width)
    elif width > height:
        crop = CropBox(x=(width - height) // 2, y=0, width=height, height=height)

    target = None
    if edge > mode.edge_size:
        target = (mode.edge_size, mode.edge_size)

    return ResizePlan(source_size=(width, height), crop=crop, target_size=target)


def _plan_cover_rectangle(width: int, height: int, mode: CoverRectangle) -> ResizePlan:
    found_aspect = width / height

    crop = None
    if found_aspect < mode.min_aspect:
        # Too tall, reduce height
        new_height = max(1, math.floor(width / mode.min_aspect))
        if new_height < height:
            crop = CropBox(
                x=0, y=(height - new_height) // 2, width=width, height=new_height
            )
    elif found_aspect > mode.max_aspect:
        # Too wide, reduce width
        new_width = max(1, math.floor(mode.max_aspect * height))
        if new_width < width:
            crop = CropBox(
                x=(width - new_width) // 2, y=0, width=new_width, height=height
            )

    cropped = crop.size if crop else (width, height)

    target = None
    if cropped[0] > mode.max_width:
        target = scale_to(cropped, cropped[0], mode.max_width)

    return ResizePlan(source_size=(width, height), crop=crop, target_size=target)
