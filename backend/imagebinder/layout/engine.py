"""
ImageBinder — Layout engine.

Pure, synchronous placement arithmetic. For each image it resolves the page
size, the scale factor, and the draw rectangle on that page. It never decodes
images and never touches the output document.

Steps per image:
  1. Page size: named table entry (oriented), or the image's own pixel size
     for "Auto" (pixels are taken as millimetres).
  2. Scale: min(page_w / img_w, page_h / img_h) when fit-to-page, else 1.
  3. Draw size: image size times scale.
  4. Position: residual space distributed per alignment, always using the
     post-scale draw size. Unknown alignment keys anchor top-left.
"""

from __future__ import annotations

from typing import Iterable

from imagebinder.errors import ConfigurationError, InvalidImageError
from imagebinder.layout.presets import (
    Horizontal,
    Orientation,
    Vertical,
    get_alignment,
    get_margin,
    get_page_size,
    is_auto_page_size,
    margin_keys,
    orientation_keys,
    page_size_keys,
    parse_orientation,
)
from imagebinder.models.layout import ImageDescriptor, LayoutConfig, PagePlacement
from imagebinder.utils.logging import logger


def _check_dimensions(image: ImageDescriptor) -> None:
    if image.pixel_width <= 0 or image.pixel_height <= 0:
        raise InvalidImageError(image.source_ref, image.pixel_width, image.pixel_height)


def _check_margin(config: LayoutConfig) -> None:
    # Margins never move the image, but an unknown mode is still a bad request.
    if get_margin(config.margin) is None:
        raise ConfigurationError("margin", config.margin, margin_keys())


def resolve_page_dimensions(image: ImageDescriptor, config: LayoutConfig) -> tuple[float, float]:
    """Page (width, height) in millimetres for this image."""
    if is_auto_page_size(config.page_size):
        return float(image.pixel_width), float(image.pixel_height)

    entry = get_page_size(config.page_size)
    if entry is None:
        raise ConfigurationError("page size", config.page_size, page_size_keys())

    orientation = parse_orientation(config.orientation)
    if orientation is None:
        raise ConfigurationError("orientation", config.orientation, orientation_keys())

    short_side = min(entry.width_mm, entry.height_mm)
    long_side = max(entry.width_mm, entry.height_mm)

    if orientation == Orientation.AUTO:
        landscape = image.pixel_width > image.pixel_height
    else:
        landscape = orientation == Orientation.LANDSCAPE

    if landscape:
        return long_side, short_side
    return short_side, long_side


def _offset(residual: float, anchor: str, start: str, center: str) -> float:
    if anchor == start:
        return 0.0
    if anchor == center:
        return residual / 2
    return residual


def compute_placement(image: ImageDescriptor, config: LayoutConfig) -> PagePlacement:
    """Compute page size and draw rectangle for a single image."""
    _check_dimensions(image)
    _check_margin(config)
    page_w, page_h = resolve_page_dimensions(image, config)

    if is_auto_page_size(config.page_size):
        return PagePlacement(
            page_width=page_w,
            page_height=page_h,
            draw_x=0.0,
            draw_y=0.0,
            draw_width=page_w,
            draw_height=page_h,
            scale=1.0,
            rotation=image.rotation,
            source_ref=image.source_ref,
        )

    scale = 1.0
    if config.fit_to_page:
        scale = min(page_w / image.pixel_width, page_h / image.pixel_height)

    draw_w = image.pixel_width * scale
    draw_h = image.pixel_height * scale

    x = y = 0.0
    anchor = get_alignment(config.alignment)
    if anchor is not None:
        x = _offset(page_w - draw_w, anchor.horizontal, Horizontal.LEFT, Horizontal.CENTER)
        y = _offset(page_h - draw_h, anchor.vertical, Vertical.TOP, Vertical.MIDDLE)

    return PagePlacement(
        page_width=page_w,
        page_height=page_h,
        draw_x=x,
        draw_y=y,
        draw_width=draw_w,
        draw_height=draw_h,
        scale=scale,
        rotation=image.rotation,
        source_ref=image.source_ref,
    )


def compute_placements(
    images: Iterable[ImageDescriptor], config: LayoutConfig
) -> list[PagePlacement]:
    """One placement per image, in input order."""
    placements = []
    for image in images:
        p = compute_placement(image, config)
        logger.debug(
            "  %s: page %gx%g mm, draw %.2fx%.2f at (%.2f, %.2f), scale %.4f, rotate %d",
            p.source_ref, p.page_width, p.page_height, p.draw_width, p.draw_height,
            p.draw_x, p.draw_y, p.scale, p.rotation,
        )
        placements.append(p)
    return placements
