"""File system collaborators: directory listing, existence checks and moves."""

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from dirshift.models.entries import DirectoryEntry
from dirshift.sizes import DirectoryStats


logger = logging.getLogger(__name__)


class DirectoryLister(ABC):
    """Base class for directory listing sources."""

    @abstractmethod
    def list_children(self, path: Path, include_files: bool = True) -> list[DirectoryEntry]:
        """List the immediate children of a directory.

        Args:
            path: Directory to list.
            include_files: If False, only directories are returned.

        Returns:
            Directories first, then files, each group sorted case-insensitively by name.
            An inaccessible or missing directory yields an empty list, never an error.
        """
        pass

    def list_child_directories(self, path: Path) -> list[DirectoryEntry]:
        """List only the immediate child directories of a directory."""
        return self.list_children(path, include_files=False)


class FileSystem(ABC):
    """Base class for the operations a rename batch needs from the disk."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    def move(self, source: Path, target: Path) -> None:
        """Move a file or folder.

        Raises:
            OSError: If the move failed; the message describes why.
        """
        pass


class LocalDirectoryLister(DirectoryLister):
    """Lists directories of the local file system with `os.scandir`."""

    def list_children(self, path: Path, include_files: bool = True) -> list[DirectoryEntry]:
        entries: list[DirectoryEntry] = []

        try:
            with os.scandir(path) as it:
                for dir_entry in it:
                    entry = self._to_entry(dir_entry)
                    if entry is None:
                        continue
                    if entry.is_directory or include_files:
                        entries.append(entry)
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []

        # Directories before files, then alphabetically ignoring case
        entries.sort(key=lambda e: (not e.is_directory, e.name.casefold()))
        return entries

    def _to_entry(self, dir_entry: os.DirEntry) -> DirectoryEntry | None:
        """Convert a scandir entry, skipping entries that cannot be inspected."""
        try:
            is_directory = dir_entry.is_dir()
            stat = dir_entry.stat()
        except OSError as e:
            logger.debug("Skipping %s: %s", dir_entry.path, e)
            return None

        return DirectoryEntry(
            full_path=Path(dir_entry.path),
            name=dir_entry.name,
            is_directory=is_directory,
            size_bytes=0 if is_directory else stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )


class LocalFileSystem(FileSystem):
    """Existence checks and moves on the local file system."""

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def move(self, source: Path, target: Path) -> None:
        # os.rename silently replaces an empty directory on POSIX
        if os.path.lexists(target):
            raise FileExistsError(f"Target already exists: {target}")
        os.rename(source, target)


def calculate_directory_stats(path: Path) -> DirectoryStats:
    """Walk a directory tree and total its size, files and folders.

    Unreadable entries are skipped so one locked folder does not hide the rest.
    """
    stats = DirectoryStats()

    for root, dirnames, filenames in os.walk(path, onerror=lambda e: logger.debug("Skipping: %s", e)):
        stats.folder_count += len(dirnames)
        for filename in filenames:
            try:
                size = os.lstat(os.path.join(root, filename)).st_size
            except OSError:
                continue
            stats.add_file(size)

    return stats


def parent_within_root(path: Path, root: Path) -> Path | None:
    """Return the parent of `path`, or None when that would leave `root`."""
    path = Path(path)
    root = Path(root)
    if path == root or path.parent == path:
        return None
    parent = path.parent
    if parent != root and root not in parent.parents:
        return None
    return parent
