"""
ImageBinder — Layout data contracts.

The engine consumes ImageDescriptor + LayoutConfig and produces PagePlacement.
All three are immutable once built. Lengths are in millimetres, origin at
the top-left corner of the page.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from imagebinder.layout.presets import Alignment, MarginMode, Orientation, PageSize

Rotation = Literal[0, 90, 180, 270]


class ImageDescriptor(BaseModel):
    """
    One decoded image. Dimensions are validated by the engine, not here.

    Width and height are as displayed: for EXIF-rotated photos they are
    already swapped, and ``rotation`` holds the anticlockwise turn the
    writer applies to the stored pixels.
    """

    model_config = ConfigDict(frozen=True)

    pixel_width: int
    pixel_height: int
    rotation: Rotation = Field(default=0, description="Anticlockwise quarter turns, in degrees")
    media_type: str = Field(default="png", max_length=20)
    source_ref: str = Field(min_length=1, max_length=200)
    display_name: str = ""


class LayoutConfig(BaseModel):
    """
    Page and placement options for one document.

    Keys are kept as plain strings so that unknown alignment values
    degrade to top-left instead of failing request parsing.
    """

    model_config = ConfigDict(frozen=True)

    page_size: str = PageSize.A4.value
    orientation: str = Orientation.PORTRAIT.value
    margin: str = MarginMode.DEFAULT.value
    fit_to_page: bool = True
    alignment: str = Alignment.TOP_LEFT.value


# Float tolerance for edge comparisons, in millimetres.
EDGE_TOLERANCE_MM = 1e-6


class PagePlacement(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_width: float
    page_height: float
    draw_x: float
    draw_y: float
    draw_width: float
    draw_height: float
    scale: float = 1.0
    rotation: Rotation = 0
    source_ref: str

    @property
    def overflows(self) -> bool:
        """True when the draw rectangle extends past any page edge."""
        return (
            self.draw_x < -EDGE_TOLERANCE_MM
            or self.draw_y < -EDGE_TOLERANCE_MM
            or self.draw_x + self.draw_width > self.page_width + EDGE_TOLERANCE_MM
            or self.draw_y + self.draw_height > self.page_height + EDGE_TOLERANCE_MM
        )
