"""Terminal abstraction used by the interactive screens."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager
from typing import TypeVar

import click
from rich.console import Console, RenderableType

from dirshift.ui.keyboard import KeyEvent, decode_key


T = TypeVar("T")


class Terminal(ABC):
    """Key source, output surface and confirmation prompt of an interactive session.

    `read_key` is the only call that blocks waiting for the user.
    """

    @abstractmethod
    def read_key(self) -> KeyEvent:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def write(self, *renderables: RenderableType) -> None:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @abstractmethod
    def confirm(self, question: str, default: bool = False) -> bool:
        pass

    @abstractmethod
    def status(self, message: str) -> AbstractContextManager:
        """Context manager showing a progress indicator while a slow operation runs."""
        pass

    def render(self, *renderables: RenderableType) -> None:
        """Clear the screen and draw a full frame."""
        self.clear()
        self.write(*renderables)

    def wait_for_key(self) -> None:
        self.read_key()

    def offload(self, message: str, func: Callable[..., T], *args, **kwargs) -> T:
        """Run a slow operation on a worker thread behind a progress indicator.

        No keys are read until it finishes; its exceptions propagate to the caller.
        """
        with self.status(message), ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(func, *args, **kwargs).result()


class RichTerminal(Terminal):
    """Terminal backed by a rich Console, reading raw keys with click."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def read_key(self) -> KeyEvent:
        return decode_key(click.getchar())

    def clear(self) -> None:
        self.console.clear()

    def write(self, *renderables: RenderableType) -> None:
        for renderable in renderables:
            self.console.print(renderable)

    @property
    def height(self) -> int:
        return self.console.size.height

    @property
    def width(self) -> int:
        return self.console.size.width

    def confirm(self, question: str, default: bool = False) -> bool:
        return click.confirm(question, default=default)

    def status(self, message: str) -> AbstractContextManager:
        return self.console.status(message, spinner="dots")
