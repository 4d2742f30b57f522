"""
ImageBinder — Structured error catalog.

Every error has a code, human message, and suggested fix.
No raw exceptions leak to the API client.
"""

from __future__ import annotations

from typing import Any


class ImageBinderError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class ValidationError(ImageBinderError):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            code="VALIDATION_FAILED",
            message=f"Input validation failed: {'; '.join(errors)}",
            suggestion="See GET /v1/options for the accepted page sizes, orientations and margins.",
            detail=errors,
        )


class ConfigurationError(ImageBinderError):
    def __init__(self, field: str, value: str, allowed: list[str]):
        self.field = field
        self.value = value
        super().__init__(
            code="CONFIGURATION_INVALID",
            message=f"Unknown {field}: {value!r}",
            suggestion=f"Use one of: {', '.join(allowed)}.",
            detail=allowed,
        )


class InvalidImageError(ImageBinderError):
    def __init__(self, ref: str, width: int, height: int):
        super().__init__(
            code="IMAGE_DIMENSIONS_INVALID",
            message=f"Image {ref} has invalid dimensions {width}x{height}",
            suggestion="Image width and height must both be positive.",
        )


class ImageDecodeError(ImageBinderError):
    def __init__(self, name: str, reason: str = ""):
        super().__init__(
            code="IMAGE_DECODE_FAILED",
            message=f"Could not read image: {name}",
            suggestion="Check that the file is a valid, non-truncated image.",
            detail=reason or None,
        )


class UnsupportedMediaTypeError(ImageBinderError):
    def __init__(self, name: str, media_type: str):
        super().__init__(
            code="IMAGE_TYPE_UNSUPPORTED",
            message=f"Image type not supported: {media_type} ({name})",
            suggestion="Supported types: jpeg, png, gif, bmp, tiff.",
        )


class ImageTooLargeError(ImageBinderError):
    def __init__(self, name: str, size_mb: float, limit_mb: float):
        super().__init__(
            code="IMAGE_TOO_LARGE",
            message=f"Image exceeds {limit_mb:g}MB limit: {name} ({size_mb:.1f}MB)",
            suggestion="Compress or resize the image before uploading.",
        )


class NoImagesError(ImageBinderError):
    def __init__(self, failed: int = 0):
        super().__init__(
            code="NO_IMAGES",
            message=(
                f"None of the {failed} uploaded images could be used"
                if failed else "No images were supplied"
            ),
            suggestion="Upload at least one readable jpeg or png image.",
        )


class DocumentWriteError(ImageBinderError):
    def __init__(self, message: str):
        super().__init__(
            code="DOCUMENT_WRITE_FAILED",
            message=f"PDF generation failed: {message}",
            suggestion="Retry the export. No partial document was produced.",
        )


class VerificationFailedError(ImageBinderError):
    def __init__(self, checks_passed: int, checks_total: int, failures: list[str]):
        super().__init__(
            code="VERIFICATION_FAILED",
            message=f"PDF verification: {checks_passed}/{checks_total} checks passed",
            suggestion="Retry generation or check the layout configuration.",
            detail=failures,
        )
