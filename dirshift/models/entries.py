"""Directory listing data model."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dirshift.sizes import format_bytes


class DirectoryEntry(BaseModel):
    """One child of a listed directory."""

    model_config = ConfigDict(frozen=True)

    full_path: Path = Field(description="Full path to the file or folder")
    name: str = Field(description="Name of the file or folder (without path)")
    is_directory: bool = Field(description="Whether this entry is a directory", default=False)
    size_bytes: int = Field(description="Size in bytes (0 for directories)", default=0, ge=0)
    last_modified: datetime = Field(description="Last modification time")

    @property
    def formatted_size(self) -> str:
        return "<DIR>" if self.is_directory else format_bytes(self.size_bytes)

    def __str__(self) -> str:
        kind = "dir" if self.is_directory else "file"
        return f"DirectoryEntry({kind} '{self.name}')"
