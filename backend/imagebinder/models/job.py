"""
ImageBinder — Job result and pipeline output contracts.

Every conversion returns a JobResult with full traceability:
timings, placements, per-image failures, hashes, and verification results.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from imagebinder.models.layout import LayoutConfig, PagePlacement


class JobState(str, enum.Enum):
    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    IMAGES_ACQUIRED = "IMAGES_ACQUIRED"
    LAID_OUT = "LAID_OUT"
    DOCUMENT_WRITTEN = "DOCUMENT_WRITTEN"
    VERIFIED = "VERIFIED"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


class StepTiming(BaseModel):
    step: str
    duration_ms: int
    status: str = "ok"  # ok | skipped | failed
    detail: str = ""


class ImageFailure(BaseModel):
    """One upload that could not be turned into a page."""

    position: int
    name: str
    error_code: str
    message: str


class ArtifactMetadata(BaseModel):
    filename: str
    size_bytes: int
    pages: int = 0
    content_hash: str = ""  # SHA-256 of final PDF


class VerificationResult(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "page_count": 3,
                "expected_pages": 3,
                "page_sizes_match": True,
                "images_on_all_pages": True,
                "is_encrypted": False,
                "checks_passed": 5,
                "checks_total": 5,
                "passed": True,
            }
        }
    )

    page_count: int = 0
    expected_pages: int = 0
    page_sizes_match: bool = False
    images_on_all_pages: bool = False
    is_encrypted: bool = False
    file_size: int = 0
    content_hash: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    failures: list[str] = Field(default_factory=list)
    checks_passed: int = 0
    checks_total: int = 0
    passed: bool = False


class JobResult(BaseModel):
    """Complete output contract for every images → PDF job."""

    job_id: str
    layout: LayoutConfig
    artifact: ArtifactMetadata
    placements: list[PagePlacement] = Field(default_factory=list)
    failures: list[ImageFailure] = Field(default_factory=list)
    timings: list[StepTiming] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    verification: VerificationResult | None = None
