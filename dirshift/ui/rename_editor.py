"""Dual-field pattern/replacement editor with a live rename preview."""

import logging
import time
from collections.abc import Callable

from dirshift.models.entries import DirectoryEntry
from dirshift.models.rename import RenameOutcome, RenamePreview
from dirshift.processors.rename_processor import RenameProcessor, validate_pattern
from dirshift.settings import Settings
from dirshift.ui.keyboard import EditorAction, FocusState, max_scroll_offset, resolve_key
from dirshift.ui.terminal import Terminal
from dirshift.ui.text_input import EditorBuffer
from dirshift.ui.theme import Theme


logger = logging.getLogger(__name__)


class PreviewDebouncer:
    """Time gate for preview regeneration.

    A regeneration is due when `interval` seconds have passed since the last
    one, or when one was forced. Nothing is scheduled: the editor asks before
    drawing each frame.
    """

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.interval = interval
        self.clock = clock
        self._last_run: float | None = None

    def is_due(self) -> bool:
        if self._last_run is None:
            return True
        return self.clock() - self._last_run >= self.interval

    def mark_run(self) -> None:
        self._last_run = self.clock()

    def force(self) -> None:
        self._last_run = None


class RenameEditor:
    """Interactive screen for renaming the child folders of one folder."""

    def __init__(
        self,
        processor: RenameProcessor,
        terminal: Terminal,
        settings: Settings | None = None,
        theme: Theme | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.processor = processor
        self.terminal = terminal
        self.settings = settings or Settings()
        self.theme = theme or Theme()
        self.clock = clock

    def run(self, folder: DirectoryEntry) -> RenameOutcome | None:
        """Edit a pattern for `folder`'s children until applied or cancelled.

        Returns:
            The outcome of the applied batch, or None if nothing was applied.
        """
        state = _EditorState(folder, self.settings.max_input_length)
        debouncer = PreviewDebouncer(self.settings.debounce_seconds, self.clock)

        while True:
            page_size = self.settings.preview_page_size(self.terminal.height)

            if debouncer.is_due():
                self._refresh_previews(state)
                debouncer.mark_run()
                # The list may have shrunk since the last frame
                state.scroll_offset = min(state.scroll_offset, max_scroll_offset(len(state.previews), page_size))

            self.terminal.render(*self._frame(state, page_size))

            event = self.terminal.read_key()
            action, focus, scroll_delta = resolve_key(
                event,
                state.focus,
                len(state.previews),
                page_size,
                state.scroll_offset,
            )
            state.focus = focus
            state.scroll_offset = min(
                max(0, state.scroll_offset + scroll_delta),
                max_scroll_offset(len(state.previews), page_size),
            )

            if action == EditorAction.APPLY:
                # Never apply what an out-of-date preview shows
                self._refresh_previews(state)
                debouncer.mark_run()
                outcome = self._confirm_and_apply(state)
                if outcome is not None:
                    return outcome
            elif action == EditorAction.CANCEL:
                if self._confirm_discard(state):
                    return None
            elif action == EditorAction.SHOW_HELP:
                self.terminal.render(self.theme.help_panel())
                self.terminal.wait_for_key()
            elif action == EditorAction.TOGGLE_MODE:
                state.use_regex = not state.use_regex
                debouncer.force()
            elif action == EditorAction.HANDLE_IN_INPUT:
                buffer = state.focused_buffer
                if buffer is not None and buffer.handle_key(event):
                    logger.debug("%s field now %r", state.focus.value, buffer.text)

    def _refresh_previews(self, state: "_EditorState") -> None:
        state.previews = self.processor.generate_preview(
            state.folder.full_path,
            state.pattern.text,
            state.replacement.text,
            use_regex=state.use_regex,
        )
        state.pattern_error = ""
        if state.use_regex and state.pattern.text.strip():
            state.pattern_error = validate_pattern(state.pattern.text)[1]

    def _frame(self, state: "_EditorState", page_size: int) -> list:
        theme = self.theme
        pattern_focused = state.focus == FocusState.PATTERN_FIELD
        replacement_focused = state.focus == FocusState.REPLACEMENT_FIELD
        pattern_title = "Search Pattern (regex)" if state.use_regex else "Search Text (literal)"

        return [
            theme.editor_header(state.folder, state.use_regex),
            theme.input_panel(
                pattern_title,
                state.pattern.display_text(pattern_focused),
                "(type to begin...)",
                pattern_focused,
            ),
            theme.input_panel(
                "Replace With (supports \\1, \\2 group references)",
                state.replacement.display_text(replacement_focused),
                "(empty = remove)",
                replacement_focused,
            ),
            theme.preview_panel(
                state.previews,
                state.scroll_offset,
                page_size,
                state.focus == FocusState.PREVIEW_LIST,
            ),
            theme.stats_line(state.previews, state.pattern_error),
            theme.hotkeys(),
        ]

    def _confirm_and_apply(self, state: "_EditorState") -> RenameOutcome | None:
        previews = state.previews
        if not any(p.will_change for p in previews):
            self.terminal.write(self.theme.info_message("Nothing to rename with the current pattern."))
            self.terminal.wait_for_key()
            return None

        will_rename = sum(1 for p in previews if p.will_rename)
        self.terminal.render(self.theme.confirmation_summary(previews))
        if not self.terminal.confirm(f"Proceed with renaming {will_rename} folder(s)?", default=False):
            return None

        outcome = self.terminal.offload("Renaming folders...", self.processor.apply_renames, previews)
        logger.debug("Rename batch in %s: %s", state.folder.full_path, outcome.summary())

        self.terminal.write(self.theme.outcome_report(outcome))
        self.terminal.wait_for_key()
        return outcome

    def _confirm_discard(self, state: "_EditorState") -> bool:
        pending = sum(1 for p in state.previews if p.will_change)
        if not pending:
            return True
        return self.terminal.confirm(f"Discard {pending} pending rename(s)?", default=True)


class _EditorState:
    """Mutable state of one editor session."""

    def __init__(self, folder: DirectoryEntry, max_input_length: int) -> None:
        self.folder = folder
        self.pattern = EditorBuffer(max_length=max_input_length)
        self.replacement = EditorBuffer(max_length=max_input_length)
        self.focus = FocusState.PATTERN_FIELD
        self.scroll_offset = 0
        self.use_regex = True
        self.previews: list[RenamePreview] = []
        self.pattern_error = ""

    @property
    def focused_buffer(self) -> EditorBuffer | None:
        if self.focus == FocusState.PATTERN_FIELD:
            return self.pattern
        if self.focus == FocusState.REPLACEMENT_FIELD:
            return self.replacement
        return None
