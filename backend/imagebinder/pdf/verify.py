"""
ImageBinder — PDF verification module.

Re-opens a generated PDF and checks it against the placements it was
built from. Uses pymupdf (fitz) for parsing.

Checks:
  1. PDF opens and parses
  2. Page count equals placement count
  3. Every page size matches its placement
  4. Every page carries an image
  5. Document is not encrypted
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any

import fitz

from imagebinder.models.job import VerificationResult
from imagebinder.models.layout import PagePlacement
from imagebinder.pdf.image_to_pdf import mm_to_pt
from imagebinder.utils.logging import logger, step_timer

PAGE_SIZE_TOLERANCE_PT = 0.5


@dataclass
class VerifyExpectations:
    placements: list[PagePlacement] = field(default_factory=list)


class PDFVerifier:
    """Local PDF inspection using pymupdf."""

    def verify(self, pdf_bytes: bytes, expectations: VerifyExpectations) -> VerificationResult:
        with step_timer("Verify PDF"):
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
            try:
                return self._inspect(doc, pdf_bytes, expectations)
            finally:
                doc.close()

    def _inspect(
        self, doc: fitz.Document, pdf_bytes: bytes, expectations: VerifyExpectations
    ) -> VerificationResult:
        checks: dict[str, bool] = {}
        failures: list[str] = []
        expected = expectations.placements

        checks["opens_and_parses"] = len(doc) > 0

        checks["page_count_matches"] = len(doc) == len(expected)
        if not checks["page_count_matches"]:
            failures.append(f"expected {len(expected)} pages, found {len(doc)}")

        sizes_match = True
        for i, (page, placement) in enumerate(zip(doc, expected)):
            dw = abs(page.rect.width - mm_to_pt(placement.page_width))
            dh = abs(page.rect.height - mm_to_pt(placement.page_height))
            if dw > PAGE_SIZE_TOLERANCE_PT or dh > PAGE_SIZE_TOLERANCE_PT:
                sizes_match = False
                failures.append(f"page {i + 1} size differs from its placement")
        checks["page_sizes_match"] = sizes_match

        images_everywhere = True
        for i, page in enumerate(doc):
            if not page.get_images():
                images_everywhere = False
                failures.append(f"page {i + 1} has no image")
        checks["images_on_all_pages"] = images_everywhere

        checks["not_encrypted"] = not doc.is_encrypted

        passed_count = sum(checks.values())
        total_count = len(checks)

        metadata_raw = doc.metadata or {}
        metadata: dict[str, Any] = {k: v for k, v in metadata_raw.items() if v}

        result = VerificationResult(
            page_count=len(doc),
            expected_pages=len(expected),
            page_sizes_match=sizes_match,
            images_on_all_pages=images_everywhere,
            is_encrypted=doc.is_encrypted,
            file_size=len(pdf_bytes),
            content_hash=hashlib.sha256(pdf_bytes).hexdigest(),
            metadata=metadata,
            failures=failures,
            checks_passed=passed_count,
            checks_total=total_count,
            passed=passed_count == total_count,
        )

        logger.info(
            "  Verification: %d/%d checks passed %s",
            passed_count, total_count,
            "✓" if result.passed else "✗",
        )
        return result
