"""
ImageBinder — FastAPI Backend

Endpoints:
  POST /v1/images-to-pdf  — Image(s) → one PDF, one image per page
  POST /v1/layout         — Image sizes + options → page placements (no PDF)
  GET  /v1/options        — Page sizes, orientations, margins, alignments
  GET  /health            — Health check
"""

import base64
import time
import uuid
from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from imagebinder.errors import ImageBinderError
from imagebinder.layout.engine import compute_placements
from imagebinder.layout.presets import (
    list_alignments,
    list_margins,
    list_page_sizes,
    orientation_keys,
)
from imagebinder.models.layout import ImageDescriptor, LayoutConfig, PagePlacement
from imagebinder.utils.logging import logger

VERSION = "1.0.0"

app = FastAPI(
    title="ImageBinder API",
    description=(
        "Combine an ordered set of images into a single PDF, one image per page, "
        "with configurable page size, orientation, scaling, and alignment."
    ),
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-ImageBinder-Job", "X-Pipeline-Duration-Ms", "X-Request-Id"],
)


@app.on_event("startup")
async def _startup_banner():
    from imagebinder.core.config import settings
    layout = settings.layout
    logger.info("")
    logger.info("╔══════════════════════════════════════════════════╗")
    logger.info("║            ImageBinder  ·  API Server v1         ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  POST /v1/images-to-pdf → Images → PDF           ║")
    logger.info("║  POST /v1/layout        → Page placements        ║")
    logger.info("║  GET  /v1/options       → Layout vocabulary      ║")
    logger.info("║  GET  /health           → Health check           ║")
    logger.info("╠══════════════════════════════════════════════════╣")
    logger.info("║  Page default : %-33s║", f"{layout.page_size} {layout.orientation}")
    logger.info("║  Alignment    : %-33s║", layout.alignment)
    logger.info("║  Max image    : %-33s║", f"{settings.max_image_mb:g} MB")
    logger.info("╚══════════════════════════════════════════════════╝")
    logger.info("")


# ──────────────────────────────────────────────────────────
# Request/Response models
# ──────────────────────────────────────────────────────────

class LayoutRequest(BaseModel):
    images: list[ImageDescriptor] = Field(
        ..., description="Images in page order (pixel sizes and references)"
    )
    config: LayoutConfig = Field(
        default_factory=LayoutConfig,
        description="Page size, orientation, margin, fit-to-page, and alignment",
    )


class LayoutResponse(BaseModel):
    placements: list[PagePlacement]


def _content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name (RFC 5987)."""
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


# ──────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────

@app.get("/health")
async def health():
    return {"status": "ok", "service": "imagebinder-api", "version": VERSION}


@app.get("/v1/options")
async def get_options():
    """List the accepted option keys and the configured defaults."""
    from imagebinder.core.config import settings
    layout = settings.layout
    return {
        "page_sizes": [s.model_dump() for s in list_page_sizes()] + [
            {"key": "Auto", "width_mm": None, "height_mm": None}
        ],
        "orientations": orientation_keys(),
        "margins": [m.model_dump() for m in list_margins()],
        "alignments": [a.model_dump(mode="json") for a in list_alignments()],
        "defaults": {
            "page_size": layout.page_size,
            "orientation": layout.orientation,
            "margin": layout.margin,
            "alignment": layout.alignment,
            "fit_to_page": layout.fit_to_page,
            "append_datetime": layout.append_datetime,
            "filename": settings.default_filename,
        },
    }


@app.post("/v1/layout", response_model=LayoutResponse)
async def layout_images(req: LayoutRequest):
    """
    Compute page placements without building a PDF.

    Placements are returned in the same order as the images.
    """
    request_id = uuid.uuid4().hex[:12]
    logger.info(
        "[%s] POST /v1/layout — %d images | page=%s orientation=%s fit=%s align=%s",
        request_id, len(req.images), req.config.page_size, req.config.orientation,
        req.config.fit_to_page, req.config.alignment,
    )

    try:
        placements = compute_placements(req.images, req.config)
    except ImageBinderError as exc:
        logger.warning("[%s] Layout error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())

    return LayoutResponse(placements=placements)


@app.post(
    "/v1/images-to-pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Generated PDF"},
        422: {"description": "Validation or layout error"},
        500: {"description": "Pipeline error"},
    },
)
async def images_to_pdf(
    files: list[UploadFile] = File(..., description="One or more images, in page order"),
    filename: str = "",
    page_size: str | None = None,
    orientation: str | None = None,
    margin: str | None = None,
    fit_to_page: bool | None = None,
    alignment: str | None = None,
    append_datetime: bool | None = None,
    verify: bool = True,
):
    """
    Convert uploaded images into a single PDF, one image per page.

    Unreadable images are skipped and listed in the job header; the
    response includes an X-ImageBinder-Job header with the full JobResult
    (placements, timings, warnings) as base64 JSON.
    """
    from imagebinder.core.config import settings
    from imagebinder.pipeline.acquire import UploadedImage
    from imagebinder.pipeline.orchestrator import ConversionJob

    request_id = uuid.uuid4().hex[:12]
    start = time.perf_counter()
    defaults = settings.layout

    layout = LayoutConfig(
        page_size=page_size or defaults.page_size,
        orientation=orientation or defaults.orientation,
        margin=margin or defaults.margin,
        fit_to_page=defaults.fit_to_page if fit_to_page is None else fit_to_page,
        alignment=alignment or defaults.alignment,
    )
    stamp = defaults.append_datetime if append_datetime is None else append_datetime

    logger.info(
        "[%s] POST /v1/images-to-pdf — %d files | page=%s orientation=%s margin=%s fit=%s align=%s",
        request_id, len(files), layout.page_size, layout.orientation, layout.margin,
        layout.fit_to_page, layout.alignment,
    )

    uploads: list[UploadedImage] = []
    for f in files:
        content = await f.read()
        uploads.append(
            UploadedImage(
                name=f.filename or f"image-{len(uploads) + 1}",
                data=content,
                content_type=f.content_type or "",
            )
        )

    try:
        job = ConversionJob(
            uploads=uploads,
            layout=layout,
            filename=filename,
            append_datetime=stamp,
            verify=verify,
        )
        job_result = await job.run()
        pdf_bytes = job.ctx.pdf

    except ImageBinderError as exc:
        logger.warning("[%s] ImageBinder error: %s", request_id, exc.code)
        raise HTTPException(status_code=422, detail=exc.to_dict())
    except Exception as exc:
        logger.exception("[%s] Pipeline failed", request_id)
        raise HTTPException(status_code=500, detail=str(exc))

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[%s] Complete — %d pages, %d bytes in %.0f ms",
        request_id, job_result.artifact.pages, len(pdf_bytes), elapsed_ms,
    )

    job_json = job_result.model_dump_json()
    job_b64 = base64.b64encode(job_json.encode()).decode("ascii")

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(job_result.artifact.filename),
            "X-Pipeline-Duration-Ms": f"{elapsed_ms:.0f}",
            "X-Request-Id": request_id,
            "X-ImageBinder-Job": job_b64,
        },
    )
