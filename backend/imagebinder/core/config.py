"""
ImageBinder — Backend Configuration
Loads .env automatically, then reads all settings from environment variables.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from imagebinder.layout.presets import (
    get_alignment,
    get_margin,
    get_page_size,
    is_auto_page_size,
    parse_orientation,
)
from imagebinder.pipeline.filename import DEFAULT_FILENAME

_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)


@dataclass(frozen=True)
class LayoutDefaults:
    """Layout options applied when a request leaves them out."""
    page_size: str
    orientation: str
    margin: str
    alignment: str
    fit_to_page: bool
    append_datetime: bool


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""
    host: str
    port: int
    debug: bool
    log_level: str
    default_filename: str
    max_image_mb: float
    image_count_warning: int
    layout: LayoutDefaults


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _load_config() -> AppConfig:
    debug = _env_bool("APP_DEBUG", "false")
    return AppConfig(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("APP_PORT", "8000")),
        debug=debug,
        log_level=os.getenv("APP_LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),
        default_filename=os.getenv("IMAGEBINDER_DEFAULT_FILENAME", DEFAULT_FILENAME),
        max_image_mb=float(os.getenv("IMAGEBINDER_MAX_IMAGE_MB", "10")),
        image_count_warning=int(os.getenv("IMAGEBINDER_IMAGE_COUNT_WARNING", "25")),
        layout=LayoutDefaults(
            page_size=os.getenv("IMAGEBINDER_DEFAULT_PAGE_SIZE", "A4"),
            orientation=os.getenv("IMAGEBINDER_DEFAULT_ORIENTATION", "Portrait"),
            margin=os.getenv("IMAGEBINDER_DEFAULT_MARGIN", "Default"),
            alignment=os.getenv("IMAGEBINDER_DEFAULT_ALIGNMENT", "Top-Left"),
            fit_to_page=_env_bool("IMAGEBINDER_FIT_TO_PAGE", "true"),
            append_datetime=_env_bool("IMAGEBINDER_APPEND_DATETIME", "true"),
        ),
    )


def _validate_config(cfg: AppConfig) -> None:
    """Fail fast if a default option is outside the known vocabulary."""
    problems: list[str] = []
    layout = cfg.layout
    if get_page_size(layout.page_size) is None and not is_auto_page_size(layout.page_size):
        problems.append(f"IMAGEBINDER_DEFAULT_PAGE_SIZE={layout.page_size!r}")
    if parse_orientation(layout.orientation) is None:
        problems.append(f"IMAGEBINDER_DEFAULT_ORIENTATION={layout.orientation!r}")
    if get_margin(layout.margin) is None:
        problems.append(f"IMAGEBINDER_DEFAULT_MARGIN={layout.margin!r}")
    if get_alignment(layout.alignment) is None:
        problems.append(f"IMAGEBINDER_DEFAULT_ALIGNMENT={layout.alignment!r}")
    if not isinstance(logging.getLevelName(cfg.log_level), int):
        problems.append(f"APP_LOG_LEVEL={cfg.log_level!r}")
    if cfg.max_image_mb <= 0:
        problems.append(f"IMAGEBINDER_MAX_IMAGE_MB={cfg.max_image_mb}")
    if problems:
        print(
            f"\n  ERROR: Invalid configuration: {', '.join(problems)}\n"
            f"  Copy backend/.env.example → backend/.env and fix the values.\n"
            f"  See GET /v1/options for the accepted keys.\n",
            file=sys.stderr,
        )
        sys.exit(1)


settings = _load_config()
_validate_config(settings)
