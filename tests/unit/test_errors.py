"""Unit tests for the structured error catalog."""

import pytest
from imagebinder.errors import (
    ImageBinderError, ValidationError, ConfigurationError, InvalidImageError,
    ImageDecodeError, UnsupportedMediaTypeError, ImageTooLargeError,
    NoImagesError, DocumentWriteError, VerificationFailedError,
)

ERROR_CLASSES = [
    ValidationError, ConfigurationError, InvalidImageError, ImageDecodeError,
    UnsupportedMediaTypeError, ImageTooLargeError, NoImagesError,
    DocumentWriteError, VerificationFailedError,
]


class TestErrorCatalog:
    """Verify all error types have correct codes and serialization."""

    def test_base_error(self):
        e = ImageBinderError(code="TEST", message="test msg", suggestion="try this")
        d = e.to_dict()
        assert d["error_code"] == "TEST"
        assert d["message"] == "test msg"
        assert d["suggestion"] == "try this"
        assert "detail" not in d

    def test_validation_error(self):
        e = ValidationError(errors=["Unknown page_size 'B5'"])
        assert e.code == "VALIDATION_FAILED"
        assert "B5" in e.message
        assert e.to_dict()["detail"] == ["Unknown page_size 'B5'"]

    def test_configuration_error(self):
        e = ConfigurationError("page size", "B5", ["A4", "Letter"])
        assert e.code == "CONFIGURATION_INVALID"
        assert "'B5'" in e.message
        assert "A4, Letter" in e.suggestion
        assert e.field == "page size"

    def test_invalid_image(self):
        e = InvalidImageError("000-abc", 0, 10)
        assert e.code == "IMAGE_DIMENSIONS_INVALID"
        assert "0x10" in e.message

    def test_decode_error(self):
        e = ImageDecodeError("broken.png", "cannot identify image file")
        assert e.code == "IMAGE_DECODE_FAILED"
        assert e.to_dict()["detail"] == "cannot identify image file"

    def test_decode_error_without_reason(self):
        assert "detail" not in ImageDecodeError("broken.png").to_dict()

    def test_unsupported_type(self):
        e = UnsupportedMediaTypeError("pic.ppm", "ppm")
        assert e.code == "IMAGE_TYPE_UNSUPPORTED"
        assert "ppm" in e.message

    def test_too_large(self):
        e = ImageTooLargeError("big.png", 15.0, 10.0)
        assert e.code == "IMAGE_TOO_LARGE"
        assert "10MB" in e.message

    def test_no_images(self):
        assert NoImagesError().code == "NO_IMAGES"
        assert "3" in NoImagesError(failed=3).message

    def test_document_write(self):
        e = DocumentWriteError("disk full")
        assert e.code == "DOCUMENT_WRITE_FAILED"
        assert "disk full" in e.message

    def test_verification_failed(self):
        e = VerificationFailedError(3, 5, ["page 1 has no image"])
        assert e.code == "VERIFICATION_FAILED"
        assert "3/5" in e.message

    @pytest.mark.parametrize("cls", ERROR_CLASSES)
    def test_all_errors_are_exceptions(self, cls):
        assert issubclass(cls, ImageBinderError)
        assert issubclass(cls, Exception)
