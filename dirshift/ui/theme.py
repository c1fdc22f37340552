"""Rich renderables for the interactive screens.

The theme holds no session state: every method builds a renderable from the
values it is given, so controllers can be driven with any Theme instance.
"""

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from dirshift.models.entries import DirectoryEntry
from dirshift.models.rename import MatchSpan, RenameOutcome, RenamePreview
from dirshift.sizes import DirectoryStats
from dirshift.ui.navigator import ItemType, SelectionNavigator


# Rows of the change list shown in the apply confirmation
CONFIRMATION_ROWS = 15

# Error messages listed after a batch before summarising the rest
MAX_REPORTED_ERRORS = 5


class Theme:
    """Colours, icons and renderable factories."""

    primary = "dodger_blue1"
    success = "green"
    error = "red"
    warning = "orange1"
    muted = "grey50"
    match_highlight = "bold black on yellow"
    result_highlight = "black on green"
    empty_result = "grey50 on grey23"

    folder_icon = "📁"
    file_icon = "📄"
    conflict_icon = "⚠"
    change_icon = "✓"
    unchanged_icon = "−"

    def title_rule(self, title: str) -> Rule:
        return Rule(Text(title, style=f"bold {self.primary}"), style=self.primary)

    def success_message(self, text: str) -> Text:
        return Text(f"✓ {text}", style=f"bold {self.success}")

    def error_message(self, text: str) -> Text:
        return Text(f"✗ {text}", style=f"bold {self.error}")

    def warning_message(self, text: str) -> Text:
        return Text(f"⚠ {text}", style=self.warning)

    def info_message(self, text: str) -> Text:
        return Text(f"ℹ {text}", style=self.primary)

    def muted_message(self, text: str) -> Text:
        return Text(text, style=self.muted)

    # File browser

    def entry_label(self, entry: DirectoryEntry) -> str:
        icon = self.folder_icon if entry.is_directory else self.file_icon
        return f"{icon} {entry.name}"

    def browser_header(self, current_path: str, is_empty: bool) -> Group:
        lines: list[RenderableType] = [
            self.title_rule("File Browser"),
            Text.assemble(
                ("Navigate: ", self.primary),
                "↑↓ to move, ← to go back, → to enter folder, Enter for actions, Esc to exit.",
            ),
            Text.assemble(("Current path: ", self.muted), (current_path, "bold")),
        ]
        if is_empty:
            lines.append(self.warning_message("This directory is empty or inaccessible."))
        return Group(*lines)

    def selection_list(self, navigator: SelectionNavigator) -> Group:
        rows: list[RenderableType] = []
        if navigator.has_more_above:
            rows.append(Text("  ▲ More above...", style=self.muted))

        for index, item in navigator.visible_items:
            if index == navigator.selected_index:
                rows.append(Text(f"→ {item.label}", style=f"bold {self.primary}"))
            elif item.item_type in (ItemType.PARENT, ItemType.EXIT):
                rows.append(Text(f"  {item.label}", style=self.muted))
            else:
                rows.append(Text(f"  {item.label}"))

        if navigator.has_more_below:
            rows.append(Text("  ▼ More below...", style=self.muted))
        return Group(*rows)

    def properties_table(self, entry: DirectoryEntry, stats: DirectoryStats) -> Panel:
        table = Table(box=box.ROUNDED, border_style=self.primary)
        table.add_column("Property", justify="center")
        table.add_column("Value", justify="center")

        table.add_row("Name", Text(entry.name, style="bold"))
        table.add_row("Full Path", str(entry.full_path))
        table.add_row("Type", "Directory" if entry.is_directory else "File")
        table.add_row("Size", stats.formatted_size)
        table.add_row("Files", f"{stats.file_count:,}")
        table.add_row("Folders", f"{stats.folder_count:,}")
        table.add_row("Last Modified", entry.last_modified.strftime("%Y-%m-%d %H:%M:%S"))

        return Panel(table, title="Folder Properties", box=box.DOUBLE, border_style=self.primary, padding=(1, 2))

    # Rename editor

    def editor_header(self, folder: DirectoryEntry, use_regex: bool) -> Group:
        mode = "Regex" if use_regex else "Literal"
        return Group(
            self.title_rule("Regex Replace - Live Preview"),
            Text.assemble(("Parent folder: ", self.muted), (folder.name, "bold")),
            Text.assemble(("Path: ", self.muted), str(folder.full_path)),
            Text.assemble(("Mode: ", self.muted), (mode, "cyan"), (" (F2 to toggle)", self.muted)),
        )

    def input_panel(self, title: str, display_text: str, placeholder: str, focused: bool) -> Panel:
        if display_text.strip():
            content = Text(display_text)
        else:
            content = Text(placeholder, style=self.muted)
        border = self.primary if focused else self.muted
        heading = Text(f"► {title}" if focused else title, style=f"bold {self.primary}" if focused else "")
        return Panel(content, title=heading, title_align="left", box=box.ROUNDED, border_style=border)

    def highlight_matches(self, name: str, spans: tuple[MatchSpan, ...] | list[MatchSpan]) -> Text:
        text = Text(name)
        for span in spans:
            if span.length:
                text.stylize(self.match_highlight, span.start, span.end)
        return text

    def status_icon(self, preview: RenamePreview) -> str:
        if preview.has_conflict:
            return self.conflict_icon
        return self.change_icon if preview.will_change else self.unchanged_icon

    def after_text(self, preview: RenamePreview) -> Text:
        if preview.has_conflict:
            return Text(f"{preview.new_name} (conflict!)", style=self.warning)
        if preview.is_empty_result:
            return Text("□ (empty - will skip)", style=self.empty_result)
        if preview.will_change:
            return Text(preview.new_name, style=self.result_highlight)
        return Text(preview.new_name, style=self.muted)

    def _preview_table(self, focused: bool) -> Table:
        table = Table(box=box.ROUNDED, border_style=self.primary if focused else self.muted, expand=True)
        table.add_column("", width=2)
        table.add_column("Before", justify="left")
        table.add_column("→", width=3, justify="center")
        table.add_column("After", justify="left")
        return table

    def preview_panel(self, previews: list[RenamePreview], scroll_offset: int, page_size: int, focused: bool) -> Panel:
        title = Text("► Preview (scrollable)", style=f"bold {self.primary}") if focused else Text("Preview")
        border = self.primary if focused else self.muted

        if not previews:
            body: RenderableType = Text("No folders found in this directory.", style=self.muted)
            return Panel(body, title=title, title_align="left", box=box.ROUNDED, border_style=border, padding=(0, 1))

        table = self._preview_table(focused)
        for preview in previews[scroll_offset : scroll_offset + page_size]:
            table.add_row(
                self.status_icon(preview),
                self.highlight_matches(preview.original_name, preview.match_spans),
                "→",
                self.after_text(preview),
            )

        if len(previews) > page_size:
            last = min(scroll_offset + page_size, len(previews))
            table.add_row("", Text(f"Showing {scroll_offset + 1}-{last} of {len(previews)}", style=self.muted), "", "")

        return Panel(table, title=title, title_align="left", box=box.ROUNDED, border_style=border, padding=(0, 0))

    def stats_line(self, previews: list[RenamePreview], pattern_error: str = "") -> Text:
        if pattern_error:
            return self.error_message(pattern_error)
        if not previews:
            return Text("")

        will_rename = sum(1 for p in previews if p.will_rename)
        conflicts = sum(1 for p in previews if p.has_conflict)
        empty = sum(1 for p in previews if p.is_empty_result)

        line = Text()
        if will_rename:
            line.append(f"✓ {will_rename} will be renamed  ", style=self.success)
        else:
            line.append("No changes  ", style=self.muted)
        if conflicts:
            line.append(f"⚠ {conflicts} conflicts  ", style=self.warning)
        if empty:
            line.append(f"{empty} empty results (will skip)", style=self.muted)
        return line

    def hotkeys(self) -> Panel:
        bar = Text()
        for key, label in (
            ("↑↓", "Switch Fields/Scroll"),
            ("←→", "Move Cursor"),
            ("Tab", "Next Field"),
            ("Enter", "Apply"),
            ("F2", "Toggle Mode"),
            ("F1", "Help"),
            ("Esc", "Cancel"),
        ):
            bar.append(f"{key}: ", style=f"bold {self.primary}")
            bar.append(f"{label}  ")
        return Panel(bar, box=box.SQUARE, border_style=self.muted)

    def help_panel(self) -> Panel:
        p = self.primary
        help_text = Text.assemble(
            ("How to Use:\n\n", "bold underline"),
            "1. Type your pattern in the ", ("Search", p), " field\n",
            "2. Press ", ("↓", p), " to move to the ", ("Replace", p), " field\n",
            "3. Enter your replacement (supports \\1, \\2 and \\g<name> group references)\n",
            "4. Watch the live preview update as you type\n",
            "5. Press ", ("Enter", p), " to apply when ready\n\n",
            ("Keyboard Shortcuts:\n\n", "bold underline"),
            "  ", ("↑↓", p), "       Switch between fields or scroll preview\n",
            "  ", ("←→", p), "       Move cursor within input field\n",
            "  ", ("Home/End", p), " Jump to start or end of the field\n",
            "  ", ("Tab", p), "      Cycle through all fields\n",
            "  ", ("Enter", p), "    Apply changes (shows confirmation)\n",
            "  ", ("F2", p), "       Toggle between Regex and Literal mode\n",
            "  ", ("Esc", p), "      Cancel and return\n\n",
            ("Preview Colors:\n\n", "bold underline"),
            "  ", ("Yellow", self.match_highlight), "    Matched text in original names\n",
            "  ", ("Green", self.result_highlight), "     Result after replacement\n",
            "  ", ("Gray box", self.empty_result), "  Empty result (will be skipped)\n",
            "  ", ("⚠ Orange", self.warning), "  Conflict with existing folder\n\n",
            ("Examples:\n\n", "bold underline"),
            "  ", ("IMG_", "yellow"), "           Remove 'IMG_' prefix\n",
            "  ", ("^\\d{4}_", "yellow"), "        Remove date prefix like '2024_'\n",
            "  ", ("(\\d{4}).*", "yellow"), "      Keep only year: ", ("\\1", "green"), "\n",
            "  ", ("\\s+", "yellow"), "            Replace whitespace runs with one space\n\n",
            ("Press any key to return...", self.muted),
        )
        return Panel(help_text, title="Regex Replace - Help", box=box.ROUNDED, border_style=p, padding=(1, 2))

    def confirmation_summary(self, previews: list[RenamePreview]) -> Group:
        table = self._preview_table(focused=True)
        for preview in [p for p in previews if p.will_change][:CONFIRMATION_ROWS]:
            table.add_row(self.status_icon(preview), Text(preview.original_name), "→", self.after_text(preview))

        will_rename = sum(1 for p in previews if p.will_rename)
        conflicts = sum(1 for p in previews if p.has_conflict)
        empty = sum(1 for p in previews if p.is_empty_result)

        body = Text()
        body.append(f"Ready to rename {will_rename} folder(s)\n\n", style="bold")
        if conflicts:
            body.append(f"⚠ {conflicts} items will fail (target already exists)\n", style=self.warning)
        if empty:
            body.append(f"{empty} items will be skipped (empty results)\n", style=self.muted)
        body.append("\nThis operation will rename folders on disk.\n", style=self.muted)
        body.append("Make sure you have backups if needed.", style=self.muted)

        panel = Panel(body, title="Confirm Rename Operation", box=box.DOUBLE, border_style=self.warning, padding=(1, 2))
        return Group(table, panel)

    def outcome_report(self, outcome: RenameOutcome) -> Group:
        lines: list[RenderableType] = []
        if outcome.successful:
            lines.append(self.success_message(f"Successfully renamed {outcome.successful} folder(s)."))
        if outcome.skipped:
            lines.append(Text(f"Skipped {outcome.skipped} folder(s).", style=self.warning))
        if outcome.has_errors:
            lines.append(self.error_message(f"Failed to rename {outcome.failed} folder(s)."))
            for error in outcome.errors[:MAX_REPORTED_ERRORS]:
                lines.append(Text(f"  • {error}", style=self.muted))
            if len(outcome.errors) > MAX_REPORTED_ERRORS:
                remaining = len(outcome.errors) - MAX_REPORTED_ERRORS
                lines.append(Text(f"  ... and {remaining} more errors", style=self.muted))
        return Group(*lines)
