"""Shared test doubles for the interactive screens."""

import io
from contextlib import AbstractContextManager, nullcontext
from datetime import datetime
from pathlib import Path

from rich.console import Console, RenderableType

from dirshift.models.entries import DirectoryEntry
from dirshift.ui.keyboard import Key, KeyEvent
from dirshift.ui.terminal import Terminal


class OutOfKeys(Exception):
    """Raised when a scripted session asks for more keys than it was given."""


class ScriptedTerminal(Terminal):
    """Terminal that replays keys and confirmation answers and records output."""

    def __init__(
        self,
        keys: list[KeyEvent | Key | str] | None = None,
        confirms: list[bool] | None = None,
        height: int = 40,
        width: int = 120,
    ) -> None:
        self.keys = [keys_to_event(k) for k in (keys or [])]
        self.confirms = list(confirms or [])
        self._height = height
        self._width = width
        self.frames: list[list[RenderableType]] = []
        self.questions: list[str] = []
        self.status_messages: list[str] = []

    def read_key(self) -> KeyEvent:
        if not self.keys:
            raise OutOfKeys()
        return self.keys.pop(0)

    def clear(self) -> None:
        self.frames.append([])

    def write(self, *renderables: RenderableType) -> None:
        if not self.frames:
            self.frames.append([])
        self.frames[-1].extend(renderables)

    @property
    def height(self) -> int:
        return self._height

    @property
    def width(self) -> int:
        return self._width

    def confirm(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        return self.confirms.pop(0) if self.confirms else default

    def status(self, message: str) -> AbstractContextManager:
        self.status_messages.append(message)
        return nullcontext()

    def text(self, frame_index: int = -1) -> str:
        """Plain text of a recorded frame."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=self._width, color_system=None, legacy_windows=False)
        for renderable in self.frames[frame_index]:
            console.print(renderable)
        return buffer.getvalue()

    def all_text(self) -> str:
        return "\n".join(self.text(ix) for ix in range(len(self.frames)))


def keys_to_event(key: KeyEvent | Key | str) -> KeyEvent:
    """Accept Key members, KeyEvents, or plain strings (typed one char at a time elsewhere)."""
    if isinstance(key, KeyEvent):
        return key
    if isinstance(key, Key):
        return KeyEvent(key)
    return KeyEvent.character(key)


def typed(text: str) -> list[KeyEvent]:
    return [KeyEvent.character(ch) for ch in text]


def make_entry(path: Path, is_directory: bool = True, size_bytes: int = 0) -> DirectoryEntry:
    return DirectoryEntry(
        full_path=path,
        name=path.name,
        is_directory=is_directory,
        size_bytes=size_bytes,
        last_modified=datetime(2024, 1, 1, 12, 0, 0),
    )


def make_folders(parent: Path, *names: str) -> Path:
    parent.mkdir(parents=True, exist_ok=True)
    for name in names:
        (parent / name).mkdir()
    return parent
