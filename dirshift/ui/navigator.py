"""Keyboard-driven scrollable list picker."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from dirshift.models.entries import DirectoryEntry
from dirshift.ui.keyboard import Key, KeyEvent


class ItemType(Enum):
    PARENT = "parent"
    ENTRY = "entry"
    EXIT = "exit"
    CHOICE = "choice"


class NavigationAction(Enum):
    SELECT = "select"
    ENTER_FOLDER = "enter_folder"
    GO_BACK = "go_back"
    EXIT = "exit"


@dataclass(frozen=True)
class SelectableItem:
    """One row of a selection list.

    File browser rows carry an `entry`; other lists (menus) carry a `value`.
    """

    item_type: ItemType
    label: str
    entry: DirectoryEntry | None = None
    value: Any = None

    @property
    def is_traversable(self) -> bool:
        return self.item_type == ItemType.ENTRY and self.entry is not None and self.entry.is_directory


class SelectionNavigator:
    """Selection state over a fixed list of items.

    Keeps `top_index <= selected_index < top_index + page_size` after every move.
    """

    def __init__(self, items: list[SelectableItem], page_size: int = 15, start_index: int = 0) -> None:
        if not items:
            raise ValueError("SelectionNavigator needs at least one item.")
        if page_size < 1:
            raise ValueError("page_size must be at least 1.")

        self.items = list(items)
        self.page_size = page_size
        self.selected_index = min(max(0, start_index), len(self.items) - 1)
        # Open with the preselected row near the middle of the page
        self.top_index = max(0, self.selected_index - page_size // 2)
        self._keep_selection_visible()

    @property
    def selected_item(self) -> SelectableItem:
        return self.items[self.selected_index]

    @property
    def visible_items(self) -> list[tuple[int, SelectableItem]]:
        """(index, item) pairs for the rows on screen."""
        end = min(len(self.items), self.top_index + self.page_size)
        return [(ix, self.items[ix]) for ix in range(self.top_index, end)]

    @property
    def has_more_above(self) -> bool:
        return self.top_index > 0

    @property
    def has_more_below(self) -> bool:
        return self.top_index + self.page_size < len(self.items)

    def move_to(self, index: int) -> None:
        self.selected_index = min(max(0, index), len(self.items) - 1)
        self._keep_selection_visible()

    def _keep_selection_visible(self) -> None:
        if self.selected_index < self.top_index:
            self.top_index = self.selected_index
        elif self.selected_index >= self.top_index + self.page_size:
            self.top_index = self.selected_index - self.page_size + 1

    def handle_key(self, event: KeyEvent) -> tuple[SelectableItem, NavigationAction] | None:
        """Apply a key press.

        Returns:
            The chosen item and the signalled action, or None if the key only
            moved the selection (or was ignored).
        """
        key = event.key

        if key == Key.UP:
            self.move_to(self.selected_index - 1)
        elif key == Key.DOWN:
            self.move_to(self.selected_index + 1)
        elif key == Key.HOME:
            self.move_to(0)
        elif key == Key.END:
            self.move_to(len(self.items) - 1)
        elif key == Key.LEFT:
            return self.selected_item, NavigationAction.GO_BACK
        elif key == Key.RIGHT:
            if self.selected_item.is_traversable:
                return self.selected_item, NavigationAction.ENTER_FOLDER
        elif key == Key.ENTER:
            return self.selected_item, NavigationAction.SELECT
        elif key == Key.ESCAPE:
            exit_item = next((item for item in self.items if item.item_type == ItemType.EXIT), None)
            return exit_item or self.selected_item, NavigationAction.EXIT

        return None
