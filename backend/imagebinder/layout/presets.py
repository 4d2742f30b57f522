"""
ImageBinder — Page size, margin, and alignment registry.

The option keys ("A4", "Mid-Middle", "Minimum", ...) are the wire vocabulary
shared with existing clients and must not be renamed.
Page sizes are stored in portrait orientation, in millimetres.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel


class PageSize(str, enum.Enum):
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    LEGAL = "Legal"
    LETTER = "Letter"
    TABLOID = "Tabloid"
    AUTO = "Auto"


class Orientation(str, enum.Enum):
    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"
    AUTO = "Auto"


class MarginMode(str, enum.Enum):
    DEFAULT = "Default"
    MINIMUM = "Minimum"
    NONE = "None"


class Alignment(str, enum.Enum):
    TOP_LEFT = "Top-Left"
    TOP_MIDDLE = "Top-Middle"
    TOP_RIGHT = "Top-Right"
    MID_LEFT = "Mid-Left"
    MID_MIDDLE = "Mid-Middle"
    MID_RIGHT = "Mid-Right"
    BOTTOM_LEFT = "Bottom-Left"
    BOTTOM_MIDDLE = "Bottom-Middle"
    BOTTOM_RIGHT = "Bottom-Right"


class Horizontal(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Vertical(str, enum.Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class PageSizeEntry(BaseModel):
    key: str
    width_mm: float
    height_mm: float


class AlignmentEntry(BaseModel):
    key: str
    horizontal: Horizontal
    vertical: Vertical


class MarginEntry(BaseModel):
    key: str
    width_mm: float


def _size(size: PageSize, width: float, height: float) -> PageSizeEntry:
    return PageSizeEntry(key=size.value, width_mm=width, height_mm=height)


def _anchor(alignment: Alignment, horizontal: Horizontal, vertical: Vertical) -> AlignmentEntry:
    return AlignmentEntry(key=alignment.value, horizontal=horizontal, vertical=vertical)


PAGE_SIZES: dict[PageSize, PageSizeEntry] = {
    PageSize.A0: _size(PageSize.A0, 841, 1189),
    PageSize.A1: _size(PageSize.A1, 594, 841),
    PageSize.A2: _size(PageSize.A2, 420, 594),
    PageSize.A3: _size(PageSize.A3, 297, 420),
    PageSize.A4: _size(PageSize.A4, 210, 297),
    PageSize.A5: _size(PageSize.A5, 148, 210),
    PageSize.LEGAL: _size(PageSize.LEGAL, 216, 356),
    PageSize.LETTER: _size(PageSize.LETTER, 216, 279),
    PageSize.TABLOID: _size(PageSize.TABLOID, 279, 432),
}

ALIGNMENTS: dict[Alignment, AlignmentEntry] = {
    Alignment.TOP_LEFT: _anchor(Alignment.TOP_LEFT, Horizontal.LEFT, Vertical.TOP),
    Alignment.TOP_MIDDLE: _anchor(Alignment.TOP_MIDDLE, Horizontal.CENTER, Vertical.TOP),
    Alignment.TOP_RIGHT: _anchor(Alignment.TOP_RIGHT, Horizontal.RIGHT, Vertical.TOP),
    Alignment.MID_LEFT: _anchor(Alignment.MID_LEFT, Horizontal.LEFT, Vertical.MIDDLE),
    Alignment.MID_MIDDLE: _anchor(Alignment.MID_MIDDLE, Horizontal.CENTER, Vertical.MIDDLE),
    Alignment.MID_RIGHT: _anchor(Alignment.MID_RIGHT, Horizontal.RIGHT, Vertical.MIDDLE),
    Alignment.BOTTOM_LEFT: _anchor(Alignment.BOTTOM_LEFT, Horizontal.LEFT, Vertical.BOTTOM),
    Alignment.BOTTOM_MIDDLE: _anchor(Alignment.BOTTOM_MIDDLE, Horizontal.CENTER, Vertical.BOTTOM),
    Alignment.BOTTOM_RIGHT: _anchor(Alignment.BOTTOM_RIGHT, Horizontal.RIGHT, Vertical.BOTTOM),
}

MARGINS: dict[MarginMode, MarginEntry] = {
    MarginMode.DEFAULT: MarginEntry(key=MarginMode.DEFAULT.value, width_mm=20),
    MarginMode.MINIMUM: MarginEntry(key=MarginMode.MINIMUM.value, width_mm=10),
    MarginMode.NONE: MarginEntry(key=MarginMode.NONE.value, width_mm=0),
}


def get_page_size(key: str) -> PageSizeEntry | None:
    """Named page size, or None for unknown keys and for the Auto sentinel."""
    try:
        return PAGE_SIZES.get(PageSize(key))
    except ValueError:
        return None


def get_alignment(key: str) -> AlignmentEntry | None:
    try:
        return ALIGNMENTS.get(Alignment(key))
    except ValueError:
        return None


def get_margin(key: str) -> MarginEntry | None:
    try:
        return MARGINS.get(MarginMode(key))
    except ValueError:
        return None


def parse_orientation(key: str) -> Orientation | None:
    try:
        return Orientation(key)
    except ValueError:
        return None


def is_auto_page_size(key: str) -> bool:
    return key == PageSize.AUTO.value


def page_size_keys() -> list[str]:
    return [s.value for s in PageSize]


def orientation_keys() -> list[str]:
    return [o.value for o in Orientation]


def margin_keys() -> list[str]:
    return [m.value for m in MarginMode]


def alignment_keys() -> list[str]:
    return [a.value for a in Alignment]


def list_page_sizes() -> list[PageSizeEntry]:
    return list(PAGE_SIZES.values())


def list_alignments() -> list[AlignmentEntry]:
    return list(ALIGNMENTS.values())


def list_margins() -> list[MarginEntry]:
    return list(MARGINS.values())
