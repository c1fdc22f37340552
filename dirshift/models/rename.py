"""Rename preview and outcome data models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class MatchSpan(BaseModel):
    """A matched region inside an original name, used for highlighting."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(description="Offset of the first matched character", ge=0)
    length: int = Field(description="Number of matched characters", ge=0)

    @property
    def end(self) -> int:
        return self.start + self.length


class RenamePreview(BaseModel):
    """A single proposed folder rename."""

    model_config = ConfigDict(frozen=True)

    original_name: str = Field(description="Folder name before the rename")
    new_name: str = Field(description="Folder name after the rename (falls back to the original when empty)")
    original_path: Path = Field(description="Full path of the folder today")
    new_path: Path = Field(description="Full path the folder would be moved to")
    has_conflict: bool = Field(description="Whether something already exists at the new path", default=False)
    match_spans: tuple[MatchSpan, ...] = Field(
        description="Pattern matches in the original name, ordered by position",
        default=(),
    )
    is_empty_result: bool = Field(
        description="Whether the computed name was blank before falling back to the original",
        default=False,
    )

    @property
    def will_change(self) -> bool:
        """Whether the name would actually change."""
        return self.original_name != self.new_name

    @property
    def will_rename(self) -> bool:
        """Whether applying this preview would touch the disk."""
        return self.will_change and not self.has_conflict and not self.is_empty_result

    def __str__(self) -> str:
        return f"RenamePreview('{self.original_name}' -> '{self.new_name}', conflict={self.has_conflict})"


class RenameOutcome(BaseModel):
    """Result of applying a batch of rename previews."""

    successful: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    def record_success(self) -> None:
        self.successful += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    @property
    def total(self) -> int:
        """Number of previews processed."""
        return self.successful + self.failed + self.skipped

    @property
    def has_errors(self) -> bool:
        return self.failed > 0

    def summary(self) -> str:
        """Return a human-readable summary of the batch."""
        lines = [
            "Rename Summary:",
            f"  Renamed: {self.successful}",
            f"  Skipped: {self.skipped}",
            f"  Failed: {self.failed}",
        ]
        return "\n".join(lines)
