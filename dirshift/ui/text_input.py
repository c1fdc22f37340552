"""Single-line text input model with a cursor."""

from dirshift.settings import DEFAULT_MAX_INPUT_LENGTH
from dirshift.ui.keyboard import Key, KeyEvent


CURSOR_GLYPH = "█"


class EditorBuffer:
    """Text plus cursor position, edited one key at a time.

    Every edit method returns True only when the text changed; cursor moves
    always return False.
    """

    def __init__(self, text: str = "", max_length: int = DEFAULT_MAX_INPUT_LENGTH) -> None:
        self.max_length = max_length
        self.text = text or ""
        self.cursor_position = len(self.text)

    def insert(self, char: str) -> bool:
        if len(char) != 1 or not char.isprintable():
            return False
        if len(self.text) >= self.max_length:
            return False
        position = self.cursor_position
        self.text = self.text[:position] + char + self.text[position:]
        self.cursor_position += 1
        return True

    def delete_before_cursor(self) -> bool:
        if self.cursor_position == 0:
            return False
        position = self.cursor_position
        self.text = self.text[: position - 1] + self.text[position:]
        self.cursor_position -= 1
        return True

    def delete_at_cursor(self) -> bool:
        if self.cursor_position >= len(self.text):
            return False
        position = self.cursor_position
        self.text = self.text[:position] + self.text[position + 1 :]
        return True

    def move_left(self) -> bool:
        self.cursor_position = max(0, self.cursor_position - 1)
        return False

    def move_right(self) -> bool:
        self.cursor_position = min(len(self.text), self.cursor_position + 1)
        return False

    def move_home(self) -> bool:
        self.cursor_position = 0
        return False

    def move_end(self) -> bool:
        self.cursor_position = len(self.text)
        return False

    def set_text(self, text: str) -> bool:
        """Replace the text and move the cursor to its end."""
        previous = self.text
        self.text = (text or "")[: self.max_length]
        self.cursor_position = len(self.text)
        return self.text != previous

    def clear(self) -> bool:
        previous = self.text
        self.text = ""
        self.cursor_position = 0
        return previous != ""

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply a key press to the buffer. Returns True if the text changed."""
        handlers = {
            Key.LEFT: self.move_left,
            Key.RIGHT: self.move_right,
            Key.HOME: self.move_home,
            Key.END: self.move_end,
            Key.BACKSPACE: self.delete_before_cursor,
            Key.DELETE: self.delete_at_cursor,
        }
        if event.key in handlers:
            return handlers[event.key]()
        if event.key == Key.CHARACTER:
            return self.insert(event.char)
        return False

    def display_text(self, focused: bool) -> str:
        return render_with_cursor(self.text, self.cursor_position, focused)


def render_with_cursor(text: str, cursor_position: int, focused: bool) -> str:
    """Project text and cursor into a display string.

    When focused, the character under the cursor is drawn as a block (or the
    block is appended at the end of the text). An empty unfocused field
    renders as a single space so panels keep their height.
    """
    if not focused:
        return text or " "
    if cursor_position >= len(text):
        return text + CURSOR_GLYPH
    return text[:cursor_position] + CURSOR_GLYPH + text[cursor_position + 1 :]
