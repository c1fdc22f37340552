"""Runtime settings for the interactive browser."""

from pydantic import BaseModel, Field


# Minimum time between two preview regenerations while typing
DEFAULT_DEBOUNCE_MS = 100

# Longest pattern or replacement the editor accepts
DEFAULT_MAX_INPUT_LENGTH = 200

# Rows shown by the file browser list before it scrolls
DEFAULT_BROWSER_PAGE_SIZE = 15

# Rows of the rename screen taken by everything except the preview table:
# title(2) + folder info(4) + input fields(6) + stats(4) + hotkeys(4) + margins(6)
DEFAULT_PREVIEW_RESERVED_ROWS = 26

DEFAULT_MIN_PREVIEW_ROWS = 10


class Settings(BaseModel):
    """Tunables shared by the browser, the rename editor and the launchers."""

    debounce_ms: int = Field(default=DEFAULT_DEBOUNCE_MS, ge=0, description="Preview regeneration debounce")
    max_input_length: int = Field(default=DEFAULT_MAX_INPUT_LENGTH, ge=1, description="Maximum editor text length")
    browser_page_size: int = Field(default=DEFAULT_BROWSER_PAGE_SIZE, ge=1, description="File browser rows per page")
    preview_reserved_rows: int = Field(default=DEFAULT_PREVIEW_RESERVED_ROWS, ge=0)
    min_preview_rows: int = Field(default=DEFAULT_MIN_PREVIEW_ROWS, ge=1)
    terminal_command: str = Field(default="x-terminal-emulator", description="Terminal emulator to launch")
    editor_command: str = Field(default="code", description="Editor to open folders with")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    def preview_page_size(self, terminal_height: int) -> int:
        """Number of preview rows that fit in a terminal of the given height."""
        return max(self.min_preview_rows, terminal_height - self.preview_reserved_rows)
