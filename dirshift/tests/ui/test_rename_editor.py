"""Tests for the interactive rename editor."""

from pathlib import Path

import pytest

from dirshift.processors.rename_processor import RenameProcessor
from dirshift.settings import Settings
from dirshift.tests.helpers import ScriptedTerminal, make_entry, make_folders, typed
from dirshift.ui.keyboard import Key, KeyEvent
from dirshift.ui.rename_editor import PreviewDebouncer, RenameEditor


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def photos(tmp_path: Path) -> Path:
    return make_folders(tmp_path / "Photos", "IMG_001", "IMG_002", "Vacation")


def _editor(terminal: ScriptedTerminal, live: bool = True) -> RenameEditor:
    """Build an editor; `live` regenerates the preview on every frame."""
    settings = Settings(debounce_ms=0) if live else Settings()
    return RenameEditor(RenameProcessor(), terminal, settings=settings, clock=FakeClock())


class TestPreviewDebouncer:
    """Tests for PreviewDebouncer."""

    def test_first_run_is_due(self):
        """Test that the first preview is generated immediately."""
        assert PreviewDebouncer(0.1, FakeClock()).is_due()

    def test_waits_for_interval(self):
        """Test that regeneration waits until the interval has elapsed."""
        clock = FakeClock()
        debouncer = PreviewDebouncer(0.1, clock)
        debouncer.mark_run()

        clock.advance(0.05)
        assert not debouncer.is_due()

        clock.advance(0.05)
        assert debouncer.is_due()

    def test_force(self):
        """Test that a forced regeneration is due at once."""
        debouncer = PreviewDebouncer(10, FakeClock())
        debouncer.mark_run()

        debouncer.force()

        assert debouncer.is_due()


class TestRenameEditor:
    """Tests for RenameEditor.run."""

    def test_apply(self, photos):
        """Test typing a pattern and applying it."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ENTER, "x"], confirms=[True])

        outcome = _editor(terminal).run(make_entry(photos))

        assert (outcome.successful, outcome.skipped, outcome.failed) == (2, 1, 0)
        assert terminal.questions == ["Proceed with renaming 2 folder(s)?"]
        assert terminal.status_messages == ["Renaming folders..."]
        assert sorted(p.name for p in photos.iterdir()) == ["001", "002", "Vacation"]
        assert "Successfully renamed 2 folder(s)." in terminal.all_text()

    def test_apply_uses_latest_text(self, photos):
        """Test that applying regenerates a preview the debounce has not caught up with."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ENTER, "x"], confirms=[True])

        outcome = _editor(terminal, live=False).run(make_entry(photos))

        assert outcome.successful == 2

    def test_live_preview(self, photos):
        """Test that the preview shows the pending renames."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ESCAPE], confirms=[True])

        _editor(terminal).run(make_entry(photos))

        text = terminal.text()
        assert "2 will be renamed" in text
        assert "IMG_001" in text
        assert "001" in text

    def test_preview_waits_for_debounce(self, photos):
        """Test that typing faster than the debounce interval does not regenerate."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ESCAPE])

        outcome = _editor(terminal, live=False).run(make_entry(photos))

        assert outcome is None
        # Still the preview of the empty pattern, so nothing is pending
        assert terminal.questions == []
        assert "No changes" in terminal.text()

    def test_decline_confirmation(self, photos):
        """Test that declining the confirmation keeps the editor open and the disk untouched."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ENTER, Key.ESCAPE], confirms=[False, True])

        outcome = _editor(terminal).run(make_entry(photos))

        assert outcome is None
        assert terminal.questions == ["Proceed with renaming 2 folder(s)?", "Discard 2 pending rename(s)?"]
        assert (photos / "IMG_001").is_dir()

    def test_cancel_without_changes(self, photos):
        """Test that Escape leaves at once when nothing is pending."""
        terminal = ScriptedTerminal(keys=[Key.ESCAPE])

        assert _editor(terminal).run(make_entry(photos)) is None
        assert terminal.questions == []

    def test_keep_editing_after_discard_prompt(self, photos):
        """Test that refusing to discard returns to the editor."""
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ESCAPE, Key.ESCAPE], confirms=[False, True])

        assert _editor(terminal).run(make_entry(photos)) is None
        assert len(terminal.questions) == 2

    def test_nothing_to_apply(self, photos):
        """Test that applying a pattern with no matches only informs."""
        terminal = ScriptedTerminal(keys=[*typed("zzz"), Key.ENTER, "x", Key.ESCAPE])

        assert _editor(terminal).run(make_entry(photos)) is None
        assert "Nothing to rename with the current pattern." in terminal.all_text()
        assert terminal.questions == []

    def test_toggle_literal_mode(self, tmp_path):
        """Test that F2 switches to literal matching."""
        parent = make_folders(tmp_path / "p", "a.b", "cd")
        terminal = ScriptedTerminal(
            keys=[".", KeyEvent(Key.TOGGLE_MODE), Key.ENTER, "x"],
            confirms=[True],
        )

        outcome = _editor(terminal).run(make_entry(parent))

        assert outcome.successful == 1
        assert (parent / "ab").is_dir()
        assert (parent / "cd").is_dir()
        assert "Literal" in terminal.all_text()

    def test_replacement_field(self, photos):
        """Test typing into the replacement field after moving down."""
        keys = [*typed("IMG_"), Key.DOWN, *typed("P"), Key.ENTER, "x"]
        terminal = ScriptedTerminal(keys=keys, confirms=[True])

        outcome = _editor(terminal).run(make_entry(photos))

        assert outcome.successful == 2
        assert (photos / "P001").is_dir()

    def test_typing_in_preview_list_is_ignored(self, photos):
        """Test that characters typed with the list focused do not edit a field."""
        keys = [Key.TAB, Key.TAB, *typed("IMG_"), Key.ESCAPE]
        terminal = ScriptedTerminal(keys=keys)

        assert _editor(terminal).run(make_entry(photos)) is None
        assert terminal.questions == []

    def test_help_screen(self, photos):
        """Test that F1 shows help until a key is pressed."""
        terminal = ScriptedTerminal(keys=[KeyEvent(Key.HELP), "x", Key.ESCAPE])

        _editor(terminal).run(make_entry(photos))

        assert "How to Use" in terminal.all_text()

    def test_scroll_preview(self, tmp_path):
        """Test scrolling a long preview list."""
        parent = make_folders(tmp_path / "many", *(f"folder{ix:02d}" for ix in range(30)))
        keys = [Key.TAB, Key.TAB, Key.DOWN, Key.DOWN, Key.DOWN, Key.ESCAPE]
        terminal = ScriptedTerminal(keys=keys, height=40)

        _editor(terminal).run(make_entry(parent))

        # 40 rows leave room for 14 preview rows
        assert "Showing 4-17 of 30" in terminal.text()

    def test_empty_folder(self, tmp_path):
        """Test editing in a folder without child folders."""
        terminal = ScriptedTerminal(keys=[*typed("x"), Key.ESCAPE])

        assert _editor(terminal).run(make_entry(tmp_path)) is None
        assert "No folders found in this directory." in terminal.text()

    @pytest.mark.parametrize("pattern", ["(IMG", "a{4294967296}"])
    def test_invalid_pattern_reported(self, photos, pattern):
        """Test that a broken regex is shown in the stats line and nothing is pending."""
        terminal = ScriptedTerminal(keys=[*typed(pattern), Key.ESCAPE])

        assert _editor(terminal).run(make_entry(photos)) is None
        assert "Invalid regex:" in terminal.text()
        assert terminal.questions == []

    def test_literal_mode_has_no_regex_errors(self, photos):
        """Test that regex syntax errors are not reported in literal mode."""
        terminal = ScriptedTerminal(keys=["(", KeyEvent(Key.TOGGLE_MODE), Key.ESCAPE])

        _editor(terminal).run(make_entry(photos))

        assert "Invalid regex:" in terminal.text(1)
        assert "Invalid regex:" not in terminal.text()

    def test_confirmation_counts_conflicts_as_failures(self, photos):
        """Test that the confirmation says conflicting renames will fail."""
        (photos / "001").mkdir()
        terminal = ScriptedTerminal(keys=[*typed("IMG_"), Key.ENTER, Key.ESCAPE], confirms=[False, True])

        _editor(terminal).run(make_entry(photos))

        assert "1 items will fail (target already exists)" in terminal.all_text()
        assert terminal.questions[0] == "Proceed with renaming 1 folder(s)?"
