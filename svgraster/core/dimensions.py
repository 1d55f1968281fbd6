"""Target size computation for a single vector image.

Resolution works on the root element's declared ``width``/``height``
attributes plus the intrinsic box taken from its ``viewBox``. Percentages
cannot be resolved without a parent, so they count as absent.
"""

import math
import re
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DeclaredLength = Union[float, str, None]

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PERCENTAGE = re.compile(r"%\s*$")


class Dimensions(BaseModel):
    """Width/height in px; an unset side means natural size."""

    model_config = ConfigDict(frozen=True)

    width: Optional[float] = Field(None, description="Width in px")
    height: Optional[float] = Field(None, description="Height in px")

    @property
    def is_empty(self) -> bool:
        return not self.width and not self.height


class DeclaredSize(BaseModel):
    """Sizing attributes as written on the root element."""

    model_config = ConfigDict(frozen=True)

    width: DeclaredLength = None
    height: DeclaredLength = None


class IntrinsicBox(BaseModel):
    """Native geometry of the content (its viewBox)."""

    model_config = ConfigDict(frozen=True)

    width: Optional[float] = None
    height: Optional[float] = None


def parse_length(value: DeclaredLength) -> Optional[float]:
    """Return a usable px length or None.

    Numbers are taken as-is, strings are read up to the first non-numeric
    character (``"12.5px"`` gives 12.5). Percentages, unparsable text, zero,
    negative and non-finite values are unusable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        if _PERCENTAGE.search(value):
            return None
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        number = float(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _usable_side(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def resolve_dimensions(
    declared: DeclaredSize, intrinsic: Optional[IntrinsicBox] = None
) -> Optional[Dimensions]:
    """Compute the final size of an image, preserving its intrinsic ratio.

    Args:
        declared: Width/height attributes of the root element
        intrinsic: Native bounding box, if the content has one

    Returns:
        Dimensions to apply, or None to apply no explicit sizing
    """
    width = parse_length(declared.width)
    height = parse_length(declared.height)

    if width and height:
        return Dimensions(width=width, height=height)

    box_width = _usable_side(intrinsic.width) if intrinsic else None
    box_height = _usable_side(intrinsic.height) if intrinsic else None

    # A zero or missing side of the box would make the ratio undefined
    if not box_width or not box_height:
        return None

    if width:
        return Dimensions(width=width, height=width * box_height / box_width)

    if height:
        return Dimensions(width=height * box_width / box_height, height=height)

    return None


def format_px(value: float) -> str:
    """Format a length the way it is written into the sizing attribute."""
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{float(value)!r}px"


def normalize_dimensions(
    dimensions: Optional[Dimensions],
) -> Optional[Dict[str, Optional[str]]]:
    """Map dimensions onto root element attributes.

    Each side maps to ``"<n>px"`` when set and to None (attribute removed,
    natural size used) when unset. Returns None when neither side is set,
    meaning the surface is left untouched.
    """
    if dimensions is None or dimensions.is_empty:
        return None
    return {
        "width": format_px(dimensions.width) if dimensions.width else None,
        "height": format_px(dimensions.height) if dimensions.height else None,
    }


def viewport_size(dimensions: Optional[Dimensions]) -> Optional[Dict[str, int]]:
    """Whole-pixel viewport that fully contains the image, or None."""
    if dimensions is None or not dimensions.width or not dimensions.height:
        return None
    return {
        "width": max(1, math.ceil(dimensions.width)),
        "height": max(1, math.ceil(dimensions.height)),
    }


def dimensions_from_geometry(
    geometry: Optional[Mapping[str, Any]],
) -> Optional[Dimensions]:
    """Resolve dimensions from the raw values reported by the page.

    ``geometry`` carries ``width``/``height`` (attribute text or None) and
    ``viewBoxWidth``/``viewBoxHeight`` (numbers or None).
    """
    if not geometry:
        return None
    declared = DeclaredSize(
        width=geometry.get("width"), height=geometry.get("height")
    )
    intrinsic = IntrinsicBox(
        width=geometry.get("viewBoxWidth"), height=geometry.get("viewBoxHeight")
    )
    return resolve_dimensions(declared, intrinsic)
