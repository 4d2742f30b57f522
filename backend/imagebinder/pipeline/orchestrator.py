"""
ImageBinder — Conversion job orchestrator.

Runs the images → PDF pipeline as a state machine:

  RECEIVED → VALIDATED → IMAGES_ACQUIRED → LAID_OUT
  → DOCUMENT_WRITTEN → VERIFIED → DELIVERED

Each step is timed, logged, and recorded in the JobResult. Unreadable
images are skipped with a warning; any writer or verification failure
fails the whole job.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from datetime import datetime

from imagebinder.core.config import settings
from imagebinder.errors import NoImagesError, VerificationFailedError
from imagebinder.layout.engine import compute_placements
from imagebinder.models.job import (
    ArtifactMetadata,
    JobResult,
    JobState,
    StepTiming,
    VerificationResult,
)
from imagebinder.models.layout import LayoutConfig, PagePlacement
from imagebinder.pdf.image_to_pdf import write_document
from imagebinder.pdf.verify import PDFVerifier, VerifyExpectations
from imagebinder.pipeline.acquire import AcquisitionResult, UploadedImage, acquire_images
from imagebinder.pipeline.filename import resolve_filename
from imagebinder.utils.logging import logger
from imagebinder.utils.validate import validate_layout_request


class JobContext:
    """Mutable context passed through pipeline steps."""

    def __init__(self):
        self.acquired: AcquisitionResult | None = None
        self.placements: list[PagePlacement] = []
        self.pdf: bytes = b""
        self.filename: str = ""
        self.warnings: list[str] = []


class ConversionJob:
    """
    State-machine orchestrator for one images → PDF conversion.

    Tracks every step's timing and status. Produces a JobResult with
    placements, per-image failures, and verification data.
    """

    def __init__(
        self,
        uploads: list[UploadedImage],
        layout: LayoutConfig | None = None,
        filename: str = "",
        append_datetime: bool = True,
        verify: bool = True,
        now: datetime | None = None,
    ):
        self.job_id = uuid.uuid4().hex[:12]
        self.uploads = uploads
        self.layout = layout or LayoutConfig()
        self.requested_filename = filename
        self.append_datetime = append_datetime
        self.verify = verify
        self.now = now
        self.state = JobState.RECEIVED
        self.ctx = JobContext()
        self.timings: list[StepTiming] = []

    def _record_step(self, name: str, start: float, status: str = "ok", detail: str = ""):
        ms = int((time.perf_counter() - start) * 1000)
        self.timings.append(StepTiming(step=name, duration_ms=ms, status=status, detail=detail))
        symbol = "✓" if status == "ok" else ("⊘" if status == "skipped" else "✗")
        logger.info("  %s %s — %dms %s", symbol, name, ms, detail)

    async def run(self) -> JobResult:
        """Execute the full pipeline. Returns a complete JobResult."""
        logger.info("=" * 60)
        logger.info(
            "[%s] Conversion starting (%d uploads, page=%s, fit=%s, align=%s)",
            self.job_id, len(self.uploads), self.layout.page_size,
            self.layout.fit_to_page, self.layout.alignment,
        )
        logger.info("=" * 60)

        try:
            await self._step_validate()
            await self._step_acquire()
            await self._step_layout()
            await self._step_write()

            verification = None
            if self.verify:
                verification = await self._step_verify()

            self.state = JobState.DELIVERED
        except Exception:
            self.state = JobState.FAILED
            raise

        acquired = self.ctx.acquired
        return JobResult(
            job_id=self.job_id,
            layout=self.layout,
            artifact=ArtifactMetadata(
                filename=self.ctx.filename,
                size_bytes=len(self.ctx.pdf),
                pages=len(self.ctx.placements),
                content_hash=hashlib.sha256(self.ctx.pdf).hexdigest(),
            ),
            placements=self.ctx.placements,
            failures=acquired.failures if acquired else [],
            timings=self.timings,
            warnings=self.ctx.warnings,
            verification=verification,
        )

    async def _step_validate(self):
        t = time.perf_counter()
        try:
            validate_layout_request(self.layout, len(self.uploads))
        except Exception as exc:
            self._record_step("validate", t, "failed", str(exc))
            raise
        self.ctx.filename = resolve_filename(
            self.requested_filename,
            self.append_datetime,
            now=self.now,
            default=settings.default_filename,
        )
        self.state = JobState.VALIDATED
        self._record_step("validate", t, detail=self.ctx.filename)

    async def _step_acquire(self):
        t = time.perf_counter()
        acquired = acquire_images(
            self.uploads,
            max_size=int(settings.max_image_mb * 1024 * 1024),
            count_warning=settings.image_count_warning,
        )
        self.ctx.acquired = acquired
        self.ctx.warnings.extend(acquired.warnings)

        if not acquired.images:
            self._record_step("acquire", t, "failed", "no readable images")
            raise NoImagesError(failed=len(acquired.failures))

        self.state = JobState.IMAGES_ACQUIRED
        self._record_step(
            "acquire", t,
            detail=f"{len(acquired.images)} ok, {len(acquired.failures)} skipped",
        )

    async def _step_layout(self):
        t = time.perf_counter()
        self.ctx.placements = compute_placements(self.ctx.acquired.descriptors, self.layout)

        overflowing = [i + 1 for i, p in enumerate(self.ctx.placements) if p.overflows]
        if overflowing:
            self.ctx.warnings.append(
                f"Image(s) on page(s) {', '.join(map(str, overflowing))} extend past the page edge."
            )

        self.state = JobState.LAID_OUT
        self._record_step("layout", t, detail=f"{len(self.ctx.placements)} pages")

    async def _step_write(self):
        t = time.perf_counter()
        title = self.ctx.filename.rsplit(".", 1)[0]
        try:
            self.ctx.pdf = write_document(
                self.ctx.placements,
                self.ctx.acquired.sources,
                margin=self.layout.margin,
                title=title,
            )
        except Exception as exc:
            self._record_step("write", t, "failed", str(exc))
            raise
        self.state = JobState.DOCUMENT_WRITTEN
        self._record_step("write", t, detail=f"{len(self.ctx.pdf)} bytes")

    async def _step_verify(self) -> VerificationResult:
        t = time.perf_counter()
        verifier = PDFVerifier()
        verification = verifier.verify(
            self.ctx.pdf, VerifyExpectations(placements=self.ctx.placements)
        )

        if not verification.passed:
            self._record_step("verify", t, "failed", "; ".join(verification.failures))
            raise VerificationFailedError(
                verification.checks_passed, verification.checks_total, verification.failures
            )

        self.state = JobState.VERIFIED
        self._record_step(
            "verify", t,
            detail=f"{verification.checks_passed}/{verification.checks_total} checks",
        )
        return verification
