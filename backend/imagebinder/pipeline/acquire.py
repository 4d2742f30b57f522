"""
ImageBinder — Image acquisition step.

Turns raw uploads into ImageDescriptors by reading the image header with
Pillow. Each upload succeeds or fails on its own: one unreadable file is
recorded as a failure and never blocks the others.

Per-image controls:
  - Empty files: rejected
  - Max single file: 10 MB (configurable)
  - Type allowlist: jpeg, png, gif, bmp, tiff (formats the PDF writer embeds)
"""

from __future__ import annotations

import hashlib
import io
from dataclasses import dataclass, field

from PIL import Image

from imagebinder.errors import (
    ImageBinderError,
    ImageDecodeError,
    ImageTooLargeError,
    UnsupportedMediaTypeError,
)
from imagebinder.models.job import ImageFailure
from imagebinder.models.layout import ImageDescriptor
from imagebinder.utils.logging import logger, step_timer

# Pillow format name → media type accepted by the writer
SUPPORTED_FORMATS = {
    "JPEG": "jpeg",
    "MPO": "jpeg",
    "PNG": "png",
    "GIF": "gif",
    "BMP": "bmp",
    "TIFF": "tiff",
}
MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB
IMAGE_COUNT_WARNING = 25
TOO_MANY_IMAGES_WARNING = "Uploading too many images may result in a large PDF file."

EXIF_ORIENTATION_TAG = 0x0112
# EXIF orientation → anticlockwise turn for the writer. Mirrored variants
# (2, 4, 5, 7) keep their flip; only the quarter turn is undone.
EXIF_ROTATION = {3: 180, 5: 90, 6: 270, 7: 270, 8: 90}


@dataclass(frozen=True)
class UploadedImage:
    name: str
    data: bytes
    content_type: str = ""


@dataclass(frozen=True)
class AcquiredImage:
    descriptor: ImageDescriptor
    data: bytes
    sha256: str


@dataclass
class AcquisitionResult:
    images: list[AcquiredImage] = field(default_factory=list)
    failures: list[ImageFailure] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def descriptors(self) -> list[ImageDescriptor]:
        return [img.descriptor for img in self.images]

    @property
    def sources(self) -> dict[str, bytes]:
        return {img.descriptor.source_ref: img.data for img in self.images}


def read_image(upload: UploadedImage, position: int, max_size: int = MAX_IMAGE_SIZE) -> AcquiredImage:
    """
    Decode one upload's header into an AcquiredImage.
    Raises an ImageBinderError subclass when the upload cannot be used.
    """
    if not upload.data:
        raise ImageDecodeError(upload.name, "empty file")

    if len(upload.data) > max_size:
        raise ImageTooLargeError(
            upload.name, len(upload.data) / (1024 * 1024), max_size / (1024 * 1024)
        )

    try:
        with Image.open(io.BytesIO(upload.data)) as img:
            width, height = img.size
            fmt = img.format or ""
            orientation = img.getexif().get(EXIF_ORIENTATION_TAG, 1)
            img.verify()
    except Exception as exc:
        raise ImageDecodeError(upload.name, str(exc)) from exc

    media_type = SUPPORTED_FORMATS.get(fmt.upper())
    if media_type is None:
        raise UnsupportedMediaTypeError(upload.name, fmt.lower() or upload.content_type or "unknown")

    rotation = EXIF_ROTATION.get(orientation, 0)
    if rotation in (90, 270):
        width, height = height, width

    digest = hashlib.sha256(upload.data).hexdigest()
    descriptor = ImageDescriptor(
        pixel_width=width,
        pixel_height=height,
        rotation=rotation,
        media_type=media_type,
        source_ref=f"{position:03d}-{digest[:12]}",
        display_name=upload.name,
    )
    return AcquiredImage(descriptor=descriptor, data=upload.data, sha256=digest)


def acquire_images(
    uploads: list[UploadedImage],
    max_size: int = MAX_IMAGE_SIZE,
    count_warning: int = IMAGE_COUNT_WARNING,
) -> AcquisitionResult:
    """
    Decode every upload, preserving input order among the successes.

    Failures are collected per image; the caller decides whether an empty
    result is fatal.
    """
    result = AcquisitionResult()

    with step_timer("Acquire images"):
        if len(uploads) > count_warning:
            result.warnings.append(TOO_MANY_IMAGES_WARNING)

        for position, upload in enumerate(uploads):
            try:
                acquired = read_image(upload, position, max_size)
            except ImageBinderError as exc:
                logger.warning("  Skipped image %d (%s): %s", position + 1, upload.name, exc.code)
                result.failures.append(
                    ImageFailure(
                        position=position,
                        name=upload.name,
                        error_code=exc.code,
                        message=exc.message,
                    )
                )
                continue

            result.images.append(acquired)
            d = acquired.descriptor
            logger.info(
                "  Image %d: %s %dx%d %s (%d bytes, %s)",
                position + 1, upload.name, d.pixel_width, d.pixel_height,
                d.media_type, len(upload.data), acquired.sha256[:12],
            )

        if result.failures:
            result.warnings.append(
                f"{len(result.failures)} of {len(uploads)} images could not be read and were skipped."
            )

        logger.info("  Acquired %d/%d images", len(result.images), len(uploads))
        return result
