"""Unit tests for Pydantic data models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from imagebinder.models import (
    ArtifactMetadata, ImageDescriptor, ImageFailure, JobResult, JobState,
    LayoutConfig, PagePlacement, StepTiming, VerificationResult,
)


class TestLayoutModels:
    def test_layout_defaults(self):
        c = LayoutConfig()
        assert c.page_size == "A4"
        assert c.orientation == "Portrait"
        assert c.margin == "Default"
        assert c.fit_to_page is True
        assert c.alignment == "Top-Left"

    def test_layout_is_frozen(self):
        c = LayoutConfig()
        with pytest.raises(PydanticValidationError):
            c.page_size = "A3"

    def test_unknown_alignment_accepted(self):
        assert LayoutConfig(alignment="Somewhere").alignment == "Somewhere"

    def test_descriptor_requires_ref(self):
        with pytest.raises(PydanticValidationError):
            ImageDescriptor(pixel_width=10, pixel_height=10, source_ref="")

    def test_descriptor_defaults(self):
        d = ImageDescriptor(pixel_width=10, pixel_height=20, source_ref="r")
        assert d.media_type == "png"
        assert d.display_name == ""
        assert d.rotation == 0

    @pytest.mark.parametrize("rotation", [45, -90, 360])
    def test_descriptor_rotation_is_quarter_turn(self, rotation):
        with pytest.raises(PydanticValidationError):
            ImageDescriptor(pixel_width=10, pixel_height=20, rotation=rotation, source_ref="r")

    def test_placement_overflow(self):
        inside = PagePlacement(
            page_width=210, page_height=297, draw_x=0, draw_y=78.5,
            draw_width=210.00000000000003, draw_height=140, scale=0.07, source_ref="r",
        )
        assert not inside.overflows
        outside = inside.model_copy(update={"draw_x": -1})
        assert outside.overflows


class TestJobResult:
    def test_minimal_job_result(self):
        jr = JobResult(
            job_id="abc123",
            layout=LayoutConfig(),
            artifact=ArtifactMetadata(filename="test.pdf", size_bytes=1000),
        )
        assert jr.job_id == "abc123"
        assert jr.timings == []
        assert jr.placements == []
        assert jr.verification is None

    def test_full_job_result(self):
        jr = JobResult(
            job_id="xyz789",
            layout=LayoutConfig(page_size="Letter"),
            artifact=ArtifactMetadata(filename="out.pdf", size_bytes=5000, pages=1, content_hash="h"),
            placements=[
                PagePlacement(
                    page_width=216, page_height=279, draw_x=0, draw_y=0,
                    draw_width=100, draw_height=100, source_ref="000-abc",
                )
            ],
            failures=[ImageFailure(position=1, name="bad.png", error_code="IMAGE_DECODE_FAILED", message="x")],
            timings=[StepTiming(step="layout", duration_ms=1)],
            verification=VerificationResult(checks_passed=5, checks_total=5, passed=True),
        )
        assert jr.verification.passed is True
        assert jr.placements[0].scale == 1.0
        restored = JobResult.model_validate_json(jr.model_dump_json())
        assert restored == jr

    def test_job_states(self):
        assert JobState.RECEIVED == "RECEIVED"
        assert JobState.LAID_OUT == "LAID_OUT"
        assert JobState.FAILED == "FAILED"

    def test_verification_schema_example(self):
        schema = VerificationResult.model_json_schema()
        example = schema["example"]
        assert example["passed"] is True
        assert example["checks_passed"] == example["checks_total"] == 5
        assert VerificationResult.model_validate(example).passed is True

    def test_step_timing_defaults(self):
        st = StepTiming(step="test", duration_ms=10)
        assert st.status == "ok"
        assert st.detail == ""
