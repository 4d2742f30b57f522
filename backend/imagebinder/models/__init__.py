"""ImageBinder data models — typed contracts for the entire pipeline."""

from imagebinder.models.layout import (
    ImageDescriptor,
    LayoutConfig,
    PagePlacement,
)
from imagebinder.models.job import (
    JobState,
    StepTiming,
    ImageFailure,
    ArtifactMetadata,
    VerificationResult,
    JobResult,
)

__all__ = [
    "ImageDescriptor",
    "LayoutConfig",
    "PagePlacement",
    "JobState",
    "StepTiming",
    "ImageFailure",
    "ArtifactMetadata",
    "VerificationResult",
    "JobResult",
]
