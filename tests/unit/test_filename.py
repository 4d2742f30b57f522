"""Unit tests for output filename resolution."""

from datetime import datetime

from imagebinder.pipeline.filename import DEFAULT_FILENAME, resolve_filename

FIXED = datetime(2024, 3, 5, 14, 30, 0)


class TestResolveFilename:
    def test_empty_with_timestamp(self):
        assert (
            resolve_filename("", True, now=FIXED)
            == "CalcForEverything_ImagesToPdf_05032024_143000.pdf"
        )

    def test_empty_without_timestamp(self):
        assert resolve_filename("", False) == f"{DEFAULT_FILENAME}.pdf"

    def test_none_uses_default(self):
        assert resolve_filename(None, False) == f"{DEFAULT_FILENAME}.pdf"

    def test_custom_name_with_timestamp(self):
        assert resolve_filename("holiday", True, now=FIXED) == "holiday_05032024_143000.pdf"

    def test_whitespace_trimmed(self):
        assert resolve_filename("  scans  ", False) == "scans.pdf"

    def test_existing_extension_not_doubled(self):
        assert resolve_filename("report.pdf", False) == "report.pdf"
        assert resolve_filename("report.PDF", True, now=FIXED) == "report_05032024_143000.pdf"

    def test_path_separators_replaced(self):
        assert resolve_filename("../etc/passwd", False) == ".._etc_passwd.pdf"

    def test_custom_default(self):
        assert resolve_filename("   ", False, default="Album") == "Album.pdf"

    def test_timestamp_zero_padded(self):
        now = datetime(2025, 1, 9, 7, 4, 3)
        assert resolve_filename("x", True, now=now) == "x_09012025_070403.pdf"

    def test_uses_current_time(self):
        name = resolve_filename("x", True)
        stamp = name[len("x_"):-len(".pdf")]
        assert len(stamp) == len("ddMMyyyy_HHmmss")
        assert stamp[8] == "_"
