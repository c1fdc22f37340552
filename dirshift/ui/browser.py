"""Interactive file browser bounded by a root folder."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dirshift.models.entries import DirectoryEntry
from dirshift.models.rename import RenameOutcome
from dirshift.processors import launcher
from dirshift.processors.filesystem import DirectoryLister, calculate_directory_stats, parent_within_root
from dirshift.settings import Settings
from dirshift.ui.navigator import ItemType, NavigationAction, SelectableItem, SelectionNavigator
from dirshift.ui.rename_editor import RenameEditor
from dirshift.ui.terminal import Terminal
from dirshift.ui.theme import Theme


logger = logging.getLogger(__name__)

PARENT_LABEL = ".."
EXIT_LABEL = "← Exit Browser"


class MenuAction(Enum):
    """Actions offered for a selected folder."""

    NAVIGATE_IN = "Navigate into folder"
    RENAME_CHILDREN = "Regex Replace Folder Names"
    PROPERTIES = "View Properties"
    OPEN_IN_TERMINAL = "Open in Terminal"
    OPEN_IN_EDITOR = "Open in Editor"
    GO_BACK = "← Go Back"


class NavigationHistory:
    """Stack of folder names entered, used to re-highlight a folder after going back up."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def push(self, name: str) -> None:
        if name:
            self._names.append(name)

    def pop(self) -> str | None:
        return self._names.pop() if self._names else None

    def __len__(self) -> int:
        return len(self._names)


@dataclass
class BrowsingSession:
    """Everything one browsing session owns.

    `current_path` never leaves `root_path`.
    """

    root_path: Path
    current_path: Path
    history: NavigationHistory = field(default_factory=NavigationHistory)
    preselect: str | None = None
    outcomes: list[RenameOutcome] = field(default_factory=list)
    running: bool = True

    @classmethod
    def start(cls, root_path: Path) -> "BrowsingSession":
        root = Path(root_path).resolve()
        return cls(root_path=root, current_path=root)

    @property
    def at_root(self) -> bool:
        return self.current_path == self.root_path

    @property
    def renamed_count(self) -> int:
        return sum(outcome.successful for outcome in self.outcomes)


class FileBrowserController:
    """Drives the browse / act / refresh loop for one session."""

    def __init__(
        self,
        lister: DirectoryLister,
        rename_editor: RenameEditor,
        terminal: Terminal,
        settings: Settings | None = None,
        theme: Theme | None = None,
    ) -> None:
        self.lister = lister
        self.rename_editor = rename_editor
        self.terminal = terminal
        self.settings = settings or Settings()
        self.theme = theme or Theme()

    def run(self, root_path: Path) -> BrowsingSession:
        """Browse from `root_path` until the user exits.

        Returns:
            The finished session, including every rename batch applied.
        """
        session = BrowsingSession.start(root_path)
        while session.running:
            self.visit(session)
        return session

    def visit(self, session: BrowsingSession) -> None:
        """Show the current folder once and act on the user's choice."""
        entries = self.lister.list_children(session.current_path)
        items = self.build_items(session, entries)
        navigator = SelectionNavigator(
            items,
            page_size=self.settings.browser_page_size,
            start_index=self._preselected_index(items, session.preselect),
        )
        session.preselect = None

        header = self.theme.browser_header(str(session.current_path), is_empty=not entries)
        selected, action = self._choose(navigator, header)
        self.handle_selection(session, selected, action)

    def build_items(self, session: BrowsingSession, entries: list[DirectoryEntry]) -> list[SelectableItem]:
        items: list[SelectableItem] = []
        if not session.at_root:
            items.append(SelectableItem(ItemType.PARENT, PARENT_LABEL))
        for entry in entries:
            items.append(SelectableItem(ItemType.ENTRY, self.theme.entry_label(entry), entry=entry))
        items.append(SelectableItem(ItemType.EXIT, EXIT_LABEL))
        return items

    def _preselected_index(self, items: list[SelectableItem], name: str | None) -> int:
        if not name:
            return 0
        for ix, item in enumerate(items):
            if item.entry is not None and item.entry.name == name:
                return ix
        return 0

    def _choose(self, navigator: SelectionNavigator, header) -> tuple[SelectableItem, NavigationAction]:
        while True:
            self.terminal.render(header, self.theme.selection_list(navigator))
            event = self.terminal.read_key()
            result = navigator.handle_key(event)
            if result is not None:
                return result

    def handle_selection(self, session: BrowsingSession, selected: SelectableItem, action: NavigationAction) -> None:
        if action == NavigationAction.GO_BACK or selected.item_type == ItemType.PARENT:
            self.ascend(session)
        elif action == NavigationAction.EXIT or selected.item_type == ItemType.EXIT:
            session.running = False
        elif selected.entry is not None:
            if not selected.entry.is_directory:
                self.terminal.write(self.theme.info_message(f"Selected file: {selected.entry.name}"))
                self.terminal.wait_for_key()
            elif action == NavigationAction.ENTER_FOLDER:
                self.descend(session, selected.entry)
            else:
                self.dispatch(session, selected.entry, self.choose_menu_action(selected.entry))

    def ascend(self, session: BrowsingSession) -> None:
        """Go up one folder, unless already at the session root."""
        parent = parent_within_root(session.current_path, session.root_path)
        if parent is None:
            logger.debug("Already at root %s, staying", session.root_path)
            return
        session.preselect = session.history.pop()
        session.current_path = parent
        logger.debug("Ascended to %s", parent)

    def descend(self, session: BrowsingSession, entry: DirectoryEntry) -> None:
        session.history.push(entry.name)
        session.current_path = session.current_path / entry.name
        logger.debug("Descended into %s", session.current_path)

    def choose_menu_action(self, entry: DirectoryEntry) -> MenuAction:
        items = [SelectableItem(ItemType.CHOICE, action.value, value=action) for action in MenuAction]
        items[-1] = SelectableItem(ItemType.EXIT, MenuAction.GO_BACK.value, value=MenuAction.GO_BACK)

        header = self.theme.title_rule(f"Actions: {entry.name}")
        selected, action = self._choose(SelectionNavigator(items, page_size=len(items)), header)
        if action in (NavigationAction.GO_BACK, NavigationAction.EXIT):
            return MenuAction.GO_BACK
        return selected.value

    def dispatch(self, session: BrowsingSession, entry: DirectoryEntry, action: MenuAction) -> None:
        """Carry out a folder menu action."""
        if action == MenuAction.NAVIGATE_IN:
            self.descend(session, entry)
        elif action == MenuAction.RENAME_CHILDREN:
            outcome = self.rename_editor.run(entry)
            if outcome is not None:
                session.outcomes.append(outcome)
            # Listing is re-read on the next visit
            session.preselect = entry.name
        elif action == MenuAction.PROPERTIES:
            self.show_properties(entry)
            session.preselect = entry.name
        elif action == MenuAction.OPEN_IN_TERMINAL:
            if launcher.open_in_terminal(entry.full_path, self.settings.terminal_command):
                self.terminal.write(self.theme.success_message("Opened in terminal."))
            else:
                self.terminal.write(self.theme.warning_message(f"Could not open terminal. Path: {entry.full_path}"))
            self.terminal.wait_for_key()
            session.preselect = entry.name
        elif action == MenuAction.OPEN_IN_EDITOR:
            if launcher.open_in_editor(entry.full_path, self.settings.editor_command):
                self.terminal.write(self.theme.success_message("Opened in editor."))
            else:
                self.terminal.write(
                    self.theme.warning_message(f"Could not run '{self.settings.editor_command}'. Is it installed?")
                )
            self.terminal.wait_for_key()
            session.preselect = entry.name
        elif action == MenuAction.GO_BACK:
            session.preselect = entry.name

    def show_properties(self, entry: DirectoryEntry) -> None:
        self.terminal.render(self.theme.title_rule(f"Properties: {entry.name}"))
        stats = self.terminal.offload("Calculating folder statistics...", calculate_directory_stats, entry.full_path)
        self.terminal.write(self.theme.properties_table(entry, stats), self.theme.muted_message("Press any key..."))
        self.terminal.wait_for_key()
