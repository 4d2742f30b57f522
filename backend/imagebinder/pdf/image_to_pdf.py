"""
ImageBinder — Image to PDF writer.

Appends one page per PagePlacement, in order, and draws the image into the
placement's rectangle. Placements are in millimetres; PyMuPDF works in
points (72 per inch). Rectangles that overflow the page are drawn as-is.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import fitz

from imagebinder.errors import ConfigurationError, DocumentWriteError
from imagebinder.layout.presets import MarginMode, get_margin, margin_keys
from imagebinder.models.layout import PagePlacement
from imagebinder.utils.logging import logger, step_timer

MM_TO_PT = 72 / 25.4
PRODUCER = "ImageBinder"


def mm_to_pt(value: float) -> float:
    return value * MM_TO_PT


def placement_rect(placement: PagePlacement) -> fitz.Rect:
    """Draw rectangle in points, top-left origin."""
    x0 = mm_to_pt(placement.draw_x)
    y0 = mm_to_pt(placement.draw_y)
    return fitz.Rect(
        x0,
        y0,
        x0 + mm_to_pt(placement.draw_width),
        y0 + mm_to_pt(placement.draw_height),
    )


def _apply_margin_frame(page: fitz.Page, margin_pt: float) -> None:
    """Mark the content frame (ArtBox) inset by the margin width."""
    if margin_pt <= 0:
        return
    w, h = page.rect.width, page.rect.height
    if 2 * margin_pt >= min(w, h):
        return
    page.set_artbox(fitz.Rect(margin_pt, margin_pt, w - margin_pt, h - margin_pt))


def write_document(
    placements: Sequence[PagePlacement],
    sources: Mapping[str, bytes],
    margin: str = MarginMode.DEFAULT.value,
    title: str = "",
) -> bytes:
    """
    Render placements into a single PDF and return its bytes.

    Any failure aborts the whole document with DocumentWriteError;
    no partial PDF is ever returned.
    """
    margin_entry = get_margin(margin)
    if margin_entry is None:
        raise ConfigurationError("margin", margin, margin_keys())

    if not placements:
        raise DocumentWriteError("no pages to write")

    missing = [p.source_ref for p in placements if p.source_ref not in sources]
    if missing:
        raise DocumentWriteError(f"missing image data for {', '.join(missing)}")

    margin_pt = mm_to_pt(margin_entry.width_mm)

    with step_timer("Write PDF"):
        doc = fitz.open()
        try:
            for i, placement in enumerate(placements):
                page = doc.new_page(
                    width=mm_to_pt(placement.page_width),
                    height=mm_to_pt(placement.page_height),
                )
                data = sources[placement.source_ref]
                page.insert_image(
                    placement_rect(placement),
                    stream=data,
                    keep_proportion=False,
                    rotate=placement.rotation,
                )
                _apply_margin_frame(page, margin_pt)
                logger.info(
                    "  Page %d: %.0fx%.0f mm, image at (%.1f, %.1f) %.1fx%.1f mm (%d bytes)",
                    i + 1, placement.page_width, placement.page_height,
                    placement.draw_x, placement.draw_y,
                    placement.draw_width, placement.draw_height, len(data),
                )

            doc.set_metadata({
                "title": title,
                "creator": PRODUCER,
                "producer": f"{PRODUCER} (PyMuPDF {fitz.VersionBind})",
            })
            pdf_bytes = doc.tobytes(garbage=3, deflate=True)
        except Exception as exc:
            logger.exception("  PDF generation failed")
            raise DocumentWriteError(str(exc)) from exc
        finally:
            doc.close()

        logger.info("  Created %d-page PDF (%d bytes)", len(placements), len(pdf_bytes))
        return pdf_bytes
