"""Unit tests for PDF verification module."""

import fitz
import pytest

from imagebinder.layout.engine import compute_placements
from imagebinder.models.layout import ImageDescriptor, LayoutConfig
from imagebinder.pdf.image_to_pdf import write_document
from imagebinder.pdf.verify import PDFVerifier, VerifyExpectations


@pytest.fixture
def verifier():
    return PDFVerifier()


@pytest.fixture
def built(image_factory):
    data = {"000-a": image_factory(64, 48), "001-b": image_factory(48, 64)}
    descriptors = [
        ImageDescriptor(pixel_width=64, pixel_height=48, source_ref="000-a"),
        ImageDescriptor(pixel_width=48, pixel_height=64, source_ref="001-b"),
    ]
    placements = compute_placements(descriptors, LayoutConfig(page_size="A5", orientation="Auto"))
    return write_document(placements, data, title="t"), placements


@pytest.fixture
def text_only_pdf():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Hello World", fontsize=12)
    pdf_bytes = doc.tobytes()
    doc.close()
    return pdf_bytes


class TestPDFVerifier:
    def test_generated_pdf_passes(self, verifier, built):
        pdf_bytes, placements = built
        result = verifier.verify(pdf_bytes, VerifyExpectations(placements=placements))
        assert result.passed is True
        assert result.page_count == 2
        assert result.expected_pages == 2
        assert result.checks_passed == result.checks_total == 5
        assert result.failures == []

    def test_has_content_hash(self, verifier, built):
        pdf_bytes, placements = built
        result = verifier.verify(pdf_bytes, VerifyExpectations(placements=placements))
        assert len(result.content_hash) == 64
        assert result.file_size == len(pdf_bytes)
        assert result.metadata.get("title") == "t"

    def test_page_count_mismatch(self, verifier, built):
        pdf_bytes, placements = built
        result = verifier.verify(pdf_bytes, VerifyExpectations(placements=placements[:1]))
        assert result.passed is False
        assert any("expected 1 pages" in f for f in result.failures)

    def test_page_size_mismatch(self, verifier, built):
        pdf_bytes, placements = built
        swapped = [placements[1], placements[0]]
        result = verifier.verify(pdf_bytes, VerifyExpectations(placements=swapped))
        assert result.page_sizes_match is False

    def test_missing_image_detected(self, verifier, text_only_pdf):
        result = verifier.verify(text_only_pdf, VerifyExpectations())
        assert result.images_on_all_pages is False
        assert result.passed is False

    def test_not_encrypted(self, verifier, built):
        pdf_bytes, placements = built
        result = verifier.verify(pdf_bytes, VerifyExpectations(placements=placements))
        assert result.is_encrypted is False
