"""Tests for data models."""

from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from dirshift.models.entries import DirectoryEntry
from dirshift.models.rename import MatchSpan, RenameOutcome, RenamePreview
from dirshift.settings import Settings
from dirshift.sizes import DirectoryStats, format_bytes


def _preview(**kwargs) -> RenamePreview:
    defaults = dict(
        original_name="IMG_001",
        new_name="001",
        original_path=Path("/p/IMG_001"),
        new_path=Path("/p/001"),
    )
    defaults.update(kwargs)
    return RenamePreview(**defaults)


class TestMatchSpan:
    """Tests for MatchSpan model."""

    def test_end(self):
        """Test the exclusive end offset."""
        assert MatchSpan(start=3, length=4).end == 7

    def test_negative_start_rejected(self):
        """Test that offsets cannot be negative."""
        with pytest.raises(ValidationError):
            MatchSpan(start=-1, length=1)


class TestRenamePreview:
    """Tests for RenamePreview model."""

    def test_will_change(self):
        """Test a preview that changes the name."""
        preview = _preview()

        assert preview.will_change
        assert preview.will_rename

    def test_unchanged(self):
        """Test a preview that keeps the name."""
        preview = _preview(new_name="IMG_001", new_path=Path("/p/IMG_001"))

        assert not preview.will_change
        assert not preview.will_rename

    def test_conflict_blocks_rename(self):
        """Test that a conflicting preview still changes but will not be renamed."""
        preview = _preview(has_conflict=True)

        assert preview.will_change
        assert not preview.will_rename

    def test_empty_result_blocks_rename(self):
        """Test that an empty-result preview is never renamed."""
        preview = _preview(new_name="IMG_001", new_path=Path("/p/IMG_001"), is_empty_result=True)

        assert not preview.will_rename

    def test_frozen(self):
        """Test that previews are immutable."""
        preview = _preview()

        with pytest.raises(ValidationError):
            preview.new_name = "other"

    def test_str(self):
        """Test string representation."""
        assert str(_preview()) == "RenamePreview('IMG_001' -> '001', conflict=False)"


class TestRenameOutcome:
    """Tests for RenameOutcome model."""

    def test_defaults(self):
        """Test an empty outcome."""
        outcome = RenameOutcome()

        assert outcome.total == 0
        assert not outcome.has_errors
        assert outcome.errors == []

    def test_record(self):
        """Test counting successes, skips and failures."""
        outcome = RenameOutcome()
        outcome.record_success()
        outcome.record_success()
        outcome.record_skip()
        outcome.record_failure("Conflict: a -> b (target already exists)")

        assert (outcome.successful, outcome.skipped, outcome.failed) == (2, 1, 1)
        assert outcome.total == 4
        assert outcome.has_errors
        assert outcome.errors == ["Conflict: a -> b (target already exists)"]

    def test_summary(self):
        """Test the human-readable summary."""
        outcome = RenameOutcome(successful=2, skipped=1)

        summary = outcome.summary()

        assert "Renamed: 2" in summary
        assert "Skipped: 1" in summary
        assert "Failed: 0" in summary


class TestDirectoryEntry:
    """Tests for DirectoryEntry model."""

    def test_file_size(self):
        """Test formatted size of a file."""
        entry = DirectoryEntry(
            full_path=Path("/p/a.txt"),
            name="a.txt",
            size_bytes=2048,
            last_modified=datetime(2024, 1, 1),
        )

        assert entry.formatted_size == "2 KB"
        assert str(entry) == "DirectoryEntry(file 'a.txt')"

    def test_directory_size(self):
        """Test that directories show a marker instead of a size."""
        entry = DirectoryEntry(
            full_path=Path("/p/d"),
            name="d",
            is_directory=True,
            last_modified=datetime(2024, 1, 1),
        )

        assert entry.formatted_size == "<DIR>"


class TestFormatBytes:
    """Tests for format_bytes and DirectoryStats."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (1024**2 * 3, "3 MB"),
            (int(1024**3 * 1.25), "1.25 GB"),
            (1024**5, "1024 TB"),
        ],
    )
    def test_format_bytes(self, size, expected):
        """Test human-readable byte counts."""
        assert format_bytes(size) == expected

    def test_stats_summary(self):
        """Test that adding files updates totals."""
        stats = DirectoryStats(folder_count=1200)
        stats.add_file(1024)
        stats.add_file(512)

        assert stats.file_count == 2
        assert stats.formatted_size == "1.5 KB"
        assert "Folders: 1,200" in stats.summary()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Test default tunables."""
        settings = Settings()

        assert settings.debounce_seconds == pytest.approx(0.1)
        assert settings.browser_page_size == 15

    def test_preview_page_size(self):
        """Test that the preview page never drops below its minimum."""
        settings = Settings()

        assert settings.preview_page_size(50) == 24
        assert settings.preview_page_size(20) == 10

    def test_rejects_invalid_page_size(self):
        """Test validation of bounds."""
        with pytest.raises(ValidationError):
            Settings(browser_page_size=0)
