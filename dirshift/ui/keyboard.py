"""Key decoding and the focus state machine of the rename editor."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Key(Enum):
    """Keys the interactive screens react to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    TAB = "tab"
    ENTER = "enter"
    ESCAPE = "escape"
    BACKSPACE = "backspace"
    DELETE = "delete"
    HELP = "help"
    TOGGLE_MODE = "toggle_mode"
    CHARACTER = "character"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press. `char` is only set for printable characters."""

    key: Key
    char: str = ""

    @classmethod
    def character(cls, char: str) -> "KeyEvent":
        return cls(Key.CHARACTER, char)


# Escape sequences sent by VT100/xterm compatible terminals, and the two-character
# scan codes `click.getchar` returns on Windows.
ESCAPE_SEQUENCES: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOA": Key.UP,
    "\x1bOB": Key.DOWN,
    "\x1bOC": Key.RIGHT,
    "\x1bOD": Key.LEFT,
    "\x1b[H": Key.HOME,
    "\x1b[F": Key.END,
    "\x1bOH": Key.HOME,
    "\x1bOF": Key.END,
    "\x1b[1~": Key.HOME,
    "\x1b[4~": Key.END,
    "\x1b[7~": Key.HOME,
    "\x1b[8~": Key.END,
    "\x1b[3~": Key.DELETE,
    "\x1bOP": Key.HELP,
    "\x1bOQ": Key.TOGGLE_MODE,
    "\x1b[11~": Key.HELP,
    "\x1b[12~": Key.TOGGLE_MODE,
    "\x1b[[A": Key.HELP,
    "\x1b[[B": Key.TOGGLE_MODE,
    "\xe0H": Key.UP,
    "\xe0P": Key.DOWN,
    "\xe0K": Key.LEFT,
    "\xe0M": Key.RIGHT,
    "\xe0G": Key.HOME,
    "\xe0O": Key.END,
    "\xe0S": Key.DELETE,
    "\x00H": Key.UP,
    "\x00P": Key.DOWN,
    "\x00K": Key.LEFT,
    "\x00M": Key.RIGHT,
    "\x00G": Key.HOME,
    "\x00O": Key.END,
    "\x00S": Key.DELETE,
    "\x00;": Key.HELP,
    "\x00<": Key.TOGGLE_MODE,
}

SINGLE_KEYS: dict[str, Key] = {
    "\x1b": Key.ESCAPE,
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def decode_key(raw: str) -> KeyEvent:
    """Translate the raw string read from the terminal into a KeyEvent.

    Ctrl+C raises KeyboardInterrupt, since raw mode swallows the signal.
    """
    if raw == "\x03":
        raise KeyboardInterrupt()
    if raw in ESCAPE_SEQUENCES:
        return KeyEvent(ESCAPE_SEQUENCES[raw])
    if raw in SINGLE_KEYS:
        return KeyEvent(SINGLE_KEYS[raw])
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent.character(raw)
    return KeyEvent(Key.UNKNOWN)


class FocusState(Enum):
    """Which part of the rename editor receives keyboard input."""

    PATTERN_FIELD = "pattern"
    REPLACEMENT_FIELD = "replacement"
    PREVIEW_LIST = "preview"


class EditorAction(Enum):
    NONE = "none"
    SWITCH_TO_PATTERN = "switch_to_pattern"
    SWITCH_TO_REPLACEMENT = "switch_to_replacement"
    SWITCH_TO_PREVIEW = "switch_to_preview"
    SCROLL_PREVIEW_UP = "scroll_preview_up"
    SCROLL_PREVIEW_DOWN = "scroll_preview_down"
    APPLY = "apply"
    CANCEL = "cancel"
    SHOW_HELP = "show_help"
    TOGGLE_MODE = "toggle_mode"
    HANDLE_IN_INPUT = "handle_in_input"


class KeyResolution(NamedTuple):
    """What a key press means: the action, the focus afterwards, and the scroll change."""

    action: EditorAction
    focus: FocusState
    scroll_delta: int = 0


TAB_ORDER = {
    FocusState.PATTERN_FIELD: (EditorAction.SWITCH_TO_REPLACEMENT, FocusState.REPLACEMENT_FIELD),
    FocusState.REPLACEMENT_FIELD: (EditorAction.SWITCH_TO_PREVIEW, FocusState.PREVIEW_LIST),
    FocusState.PREVIEW_LIST: (EditorAction.SWITCH_TO_PATTERN, FocusState.PATTERN_FIELD),
}


def max_scroll_offset(preview_count: int, page_size: int) -> int:
    """Largest scroll offset that still shows a full last page."""
    return max(0, preview_count - page_size)


def resolve_key(
    event: KeyEvent,
    focus: FocusState,
    preview_count: int,
    page_size: int,
    scroll_offset: int = 0,
) -> KeyResolution:
    """Map a key press in the given focus state to an action.

    `scroll_delta` is relative to `scroll_offset`: adding it to the current
    offset gives the offset to show next.
    """
    key = event.key

    if key == Key.UP:
        if focus == FocusState.PATTERN_FIELD:
            # Wrap around to the bottom of the preview list
            bottom = max_scroll_offset(preview_count, page_size)
            return KeyResolution(EditorAction.SWITCH_TO_PREVIEW, FocusState.PREVIEW_LIST, bottom - scroll_offset)
        if focus == FocusState.REPLACEMENT_FIELD:
            return KeyResolution(EditorAction.SWITCH_TO_PATTERN, FocusState.PATTERN_FIELD)
        if scroll_offset <= 0:
            return KeyResolution(EditorAction.SWITCH_TO_REPLACEMENT, FocusState.REPLACEMENT_FIELD)
        return KeyResolution(EditorAction.SCROLL_PREVIEW_UP, FocusState.PREVIEW_LIST, -1)

    if key == Key.DOWN:
        if focus == FocusState.PATTERN_FIELD:
            return KeyResolution(EditorAction.SWITCH_TO_REPLACEMENT, FocusState.REPLACEMENT_FIELD)
        if focus == FocusState.REPLACEMENT_FIELD:
            return KeyResolution(EditorAction.SWITCH_TO_PREVIEW, FocusState.PREVIEW_LIST, -scroll_offset)
        delta = 1 if scroll_offset < max_scroll_offset(preview_count, page_size) else 0
        return KeyResolution(EditorAction.SCROLL_PREVIEW_DOWN, FocusState.PREVIEW_LIST, delta)

    if key == Key.TAB:
        action, new_focus = TAB_ORDER[focus]
        return KeyResolution(action, new_focus)

    if key == Key.ENTER:
        return KeyResolution(EditorAction.APPLY, focus)
    if key == Key.ESCAPE:
        return KeyResolution(EditorAction.CANCEL, focus)
    if key == Key.HELP:
        return KeyResolution(EditorAction.SHOW_HELP, focus)
    if key == Key.TOGGLE_MODE:
        return KeyResolution(EditorAction.TOGGLE_MODE, focus)

    if focus in (FocusState.PATTERN_FIELD, FocusState.REPLACEMENT_FIELD):
        return KeyResolution(EditorAction.HANDLE_IN_INPUT, focus)
    return KeyResolution(EditorAction.NONE, focus)
