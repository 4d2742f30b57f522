"""
ImageBinder — Output filename resolution.
"""

from __future__ import annotations

import re
from datetime import datetime

DEFAULT_FILENAME = "CalcForEverything_ImagesToPdf"
PDF_EXTENSION = ".pdf"
TIMESTAMP_FORMAT = "%d%m%Y_%H%M%S"  # ddMMyyyy_HHmmss

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def resolve_filename(
    requested: str | None,
    append_datetime: bool,
    now: datetime | None = None,
    default: str = DEFAULT_FILENAME,
) -> str:
    """
    Build the download filename for a generated PDF.

    Empty names fall back to ``default``. With ``append_datetime`` the
    timestamp goes between the name and the extension:
    ``CalcForEverything_ImagesToPdf_05032024_143000.pdf``.
    """
    name = _UNSAFE_CHARS.sub("_", (requested or "").strip())

    if name.lower().endswith(PDF_EXTENSION):
        name = name[: -len(PDF_EXTENSION)]

    if not name.strip(" ._"):
        name = default

    if append_datetime:
        stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        return f"{name}_{stamp}{PDF_EXTENSION}"

    return f"{name}{PDF_EXTENSION}"
