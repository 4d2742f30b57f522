"""
ImageBinder — Request validation for layout options.

Collects every problem in one pass so the caller sees all of them at once.
Alignment is deliberately not checked: unknown keys anchor top-left.
"""

from imagebinder.errors import ValidationError
from imagebinder.layout.presets import (
    get_margin,
    get_page_size,
    is_auto_page_size,
    margin_keys,
    orientation_keys,
    page_size_keys,
    parse_orientation,
)
from imagebinder.models.layout import LayoutConfig


def validate_layout_request(config: LayoutConfig, image_count: int) -> LayoutConfig:
    """
    Validate layout options before the engine runs.
    Returns the config unchanged. Raises ValidationError on failure.
    """
    errors: list[str] = []

    if image_count <= 0:
        errors.append("At least one image is required")

    if get_page_size(config.page_size) is None and not is_auto_page_size(config.page_size):
        errors.append(
            f"Unknown page_size '{config.page_size}' (expected one of {', '.join(page_size_keys())})"
        )

    if parse_orientation(config.orientation) is None:
        errors.append(
            f"Unknown orientation '{config.orientation}' (expected one of {', '.join(orientation_keys())})"
        )

    if get_margin(config.margin) is None:
        errors.append(
            f"Unknown margin '{config.margin}' (expected one of {', '.join(margin_keys())})"
        )

    if errors:
        raise ValidationError(errors)

    return config
