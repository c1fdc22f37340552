"""Directory size statistics and byte formatting utilities."""

from dataclasses import dataclass


SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

# Binary multiples, as shown by most file managers
BYTES_PER_UNIT = 1024


@dataclass
class DirectoryStats:
    """Aggregated contents of a directory tree."""

    size_bytes: int = 0
    file_count: int = 0
    folder_count: int = 0

    def add_file(self, size_bytes: int) -> None:
        """Record one file found during a scan."""
        self.size_bytes += size_bytes
        self.file_count += 1

    @property
    def formatted_size(self) -> str:
        return format_bytes(self.size_bytes)

    def summary(self) -> str:
        """Return a human-readable summary of the directory contents."""
        lines = [
            f"Size: {self.formatted_size}",
            f"Files: {self.file_count:,}",
            f"Folders: {self.folder_count:,}",
        ]
        return "\n".join(lines)


def format_bytes(size_bytes: int) -> str:
    """Format a byte count as a human-readable string (B, KB, MB, GB, TB).

    Up to two decimals are shown, trailing zeros dropped: 1536 -> "1.5 KB".
    """
    value = float(size_bytes)
    order = 0
    while value >= BYTES_PER_UNIT and order < len(SIZE_UNITS) - 1:
        order += 1
        value /= BYTES_PER_UNIT

    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[order]}"
