"""Folder rename processor using pattern matching."""

import logging
import os
import re
from pathlib import Path

from dirshift.models.rename import MatchSpan, RenameOutcome, RenamePreview
from dirshift.processors.filesystem import (
    DirectoryLister,
    FileSystem,
    LocalDirectoryLister,
    LocalFileSystem,
)


logger = logging.getLogger(__name__)

# Characters that can never appear in a single path component
if os.name == "nt":
    INVALID_NAME_CHARS = frozenset('<>:"/\\|?*' + "".join(chr(c) for c in range(32)))
else:
    INVALID_NAME_CHARS = frozenset("/\0")

REPLACEMENT_CHAR = "_"

# What compiling or applying a user pattern can raise; huge repeat counts overflow
# and deeply nested groups exhaust the parser's recursion
PATTERN_ERRORS = (re.error, OverflowError, RecursionError)


def sanitize_name(name: str) -> str:
    """Collapse whitespace runs, trim, and replace characters illegal in a file name."""
    collapsed = " ".join(name.split())
    return "".join(REPLACEMENT_CHAR if ch in INVALID_NAME_CHARS else ch for ch in collapsed)


def find_literal_spans(text: str, needle: str) -> list[MatchSpan]:
    """Find all non-overlapping, case-sensitive occurrences of `needle` in `text`."""
    spans: list[MatchSpan] = []
    index = text.find(needle)
    while index != -1:
        spans.append(MatchSpan(start=index, length=len(needle)))
        index = text.find(needle, index + len(needle))
    return spans


def validate_pattern(pattern: str) -> tuple[bool, str]:
    """Validate a regular expression.

    Returns:
        Tuple of (is_valid, error_message); the message is empty when valid.
    """
    if not pattern or not pattern.strip():
        return False, "Pattern cannot be empty"

    try:
        re.compile(pattern)
    except PATTERN_ERRORS as e:
        return False, f"Invalid regex: {e}"
    return True, ""


def has_empty_results(previews: list[RenamePreview]) -> bool:
    """Whether any preview would produce an empty name."""
    return any(preview.is_empty_result for preview in previews)


class RenameProcessor:
    """Processor that previews and applies pattern-based folder renames."""

    def __init__(
        self,
        lister: DirectoryLister | None = None,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize the rename processor.

        Args:
            lister: Source of the folders to rename. Defaults to the local disk.
            filesystem: Existence checks and moves. Defaults to the local disk.
        """
        self.lister = lister or LocalDirectoryLister()
        self.filesystem = filesystem or LocalFileSystem()

    def generate_preview(
        self,
        parent_path: Path,
        pattern: str,
        replacement: str = "",
        use_regex: bool = True,
    ) -> list[RenamePreview]:
        """Preview renaming every immediate child folder of `parent_path`.

        Args:
            parent_path: Folder whose child folders are renamed.
            pattern: Regular expression (or literal text) to search for in each name.
            replacement: Replacement text; in regex mode it may reference groups (`\\1`, `\\g<name>`).
            use_regex: If False, `pattern` is matched as literal text.

        Returns:
            One preview per child folder, in listing order. An invalid pattern
            yields unchanged previews instead of raising.
        """
        replacement = replacement or ""
        directories = self.lister.list_child_directories(Path(parent_path))

        previews = [
            self._preview_entry(entry.full_path, entry.name, pattern, replacement, use_regex)
            for entry in directories
        ]

        logger.debug(
            "Generated %d preview(s) for %s (pattern=%r, regex=%s)",
            len(previews),
            parent_path,
            pattern,
            use_regex,
        )
        return previews

    def _preview_entry(
        self,
        original_path: Path,
        original_name: str,
        pattern: str,
        replacement: str,
        use_regex: bool,
    ) -> RenamePreview:
        new_name = original_name
        spans: list[MatchSpan] = []
        is_empty_result = False

        if pattern and pattern.strip():
            try:
                if use_regex:
                    new_name, spans = self._regex_replace(original_name, pattern, replacement)
                else:
                    spans = find_literal_spans(original_name, pattern)
                    new_name = original_name.replace(pattern, replacement)
            except PATTERN_ERRORS:
                new_name = original_name
                spans = []
            else:
                new_name = sanitize_name(new_name)
                if not new_name.strip():
                    # Keep something selectable on screen; the flag still skips it at apply time
                    is_empty_result = True
                    new_name = original_name

        new_path = original_path.parent / new_name
        has_conflict = new_name != original_name and self.filesystem.exists(new_path)

        return RenamePreview(
            original_name=original_name,
            new_name=new_name,
            original_path=original_path,
            new_path=new_path,
            has_conflict=has_conflict,
            match_spans=tuple(spans),
            is_empty_result=is_empty_result,
        )

    def _regex_replace(self, name: str, pattern: str, replacement: str) -> tuple[str, list[MatchSpan]]:
        """Apply a regex substitution and record where it matched.

        Raises:
            re.error: If the pattern or the replacement template is invalid.
            OverflowError: If a repeat count is too large.
        """
        regex = re.compile(pattern)
        spans = [MatchSpan(start=m.start(), length=m.end() - m.start()) for m in regex.finditer(name)]
        return regex.sub(replacement, name), spans

    def apply_renames(self, previews: list[RenamePreview]) -> RenameOutcome:
        """Apply rename previews to the disk, one folder at a time.

        Unchanged previews are skipped, conflicts are never attempted, and a
        failing move does not stop or roll back the rest of the batch.

        Args:
            previews: Previews produced by `generate_preview`.

        Returns:
            Counts of renamed, skipped and failed folders with error messages.
        """
        outcome = RenameOutcome()

        for preview in previews:
            if not preview.will_change or preview.is_empty_result:
                outcome.record_skip()
                continue

            if preview.has_conflict:
                outcome.record_failure(
                    f"Conflict: {preview.original_name} -> {preview.new_name} (target already exists)"
                )
                continue

            try:
                self.filesystem.move(preview.original_path, preview.new_path)
            except OSError as e:
                reason = e.strerror or str(e)
                logger.warning("Failed to rename %s: %s", preview.original_path, reason)
                outcome.record_failure(f"Failed to rename {preview.original_name}: {reason}")
                continue

            logger.debug("Renamed %s -> %s", preview.original_path, preview.new_path)
            outcome.record_success()

        return outcome
