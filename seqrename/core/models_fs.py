"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileRef: Reference to an existing file
- SortStrategy: File ordering before numbering
- RenameConfig: Rename pattern configuration
- GeneratedName: Candidate name for one file
- PreviewItem / PreviewSummary: Preview of a batch
- RenameStatus / RenameProgress / RenameResult: Execution feedback
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional
from enum import Enum
import mimetypes
import platform

from .name_check import find_illegal_char


class SortStrategy(Enum):
    """Sort strategy enumeration"""
    NATURAL = "natural"                # file1, file2, file10
    DATE_MODIFIED = "date_modified"    # Newest first
    SIZE = "size"                      # Largest first
    ORIGINAL_ORDER = "original_order"  # Keep input order

    @property
    def display_name(self) -> str:
        return {
            SortStrategy.NATURAL: "Natural (IMG_1, IMG_2, IMG_10)",
            SortStrategy.DATE_MODIFIED: "Date Modified",
            SortStrategy.SIZE: "File Size",
            SortStrategy.ORIGINAL_ORDER: "Original Order",
        }[self]

    @property
    def description(self) -> str:
        return {
            SortStrategy.NATURAL: "Smart number sorting",
            SortStrategy.DATE_MODIFIED: "Newest to oldest",
            SortStrategy.SIZE: "Largest to smallest",
            SortStrategy.ORIGINAL_ORDER: "Keep the order files were listed in",
        }[self]

    @property
    def example(self) -> str:
        return {
            SortStrategy.NATURAL: "file1, file2, file10 (not file1, file10, file2)",
            SortStrategy.DATE_MODIFIED: "Most recent files first",
            SortStrategy.SIZE: "Biggest files first",
            SortStrategy.ORIGINAL_ORDER: "Same order as listed",
        }[self]


@dataclass(frozen=True)
class FileRef:
    """Read-only reference to an existing file"""
    id: str                             # Stable identifier (full path for local files)
    name: str                           # Filename (with extension)
    location: Any = None                # Containing location (directory Path for local files)
    size: int = 0                       # File size (bytes)
    mime_type: str = ""                 # MIME type, e.g. image/jpeg
    date_modified: float = 0.0          # Modification time (timestamp)
    thumbnail: Optional[str] = None     # Thumbnail reference, if any

    @classmethod
    def from_path(cls, p: Path) -> "FileRef":
        """Create FileRef from a local file path"""
        p = Path(p)
        stat = p.stat()
        mime_type, _ = mimetypes.guess_type(p.name)
        return cls(
            id=str(p),
            name=p.name,
            location=p.parent,
            size=stat.st_size,
            mime_type=mime_type or "",
            date_modified=stat.st_mtime,
        )

    @property
    def extension(self) -> str:
        """Text after the last dot, without the dot ("" if none)"""
        head, sep, tail = self.name.rpartition(".")
        return tail if sep else ""

    @property
    def stem(self) -> str:
        head, sep, tail = self.name.rpartition(".")
        return head if sep else self.name

    @property
    def is_image(self) -> bool:
        return self.mime_type.lower().startswith("image/")

    @property
    def is_video(self) -> bool:
        return self.mime_type.lower().startswith("video/")

    @property
    def is_audio(self) -> bool:
        return self.mime_type.lower().startswith("audio/")

    @property
    def formatted_size(self) -> str:
        if self.size < 1024:
            return f"{self.size} B"
        if self.size < 1024 ** 2:
            return f"{self.size // 1024} KB"
        if self.size < 1024 ** 3:
            return f"{self.size // 1024 ** 2} MB"
        return f"{self.size // 1024 ** 3} GB"


@dataclass(frozen=True)
class RenameConfig:
    """Rename pattern: prefix + zero-padded sequence number + optional extension"""
    prefix: str
    start_number: int = 1
    digit_count: int = 3
    preserve_extension: bool = True
    sort_strategy: SortStrategy = SortStrategy.NATURAL

    MIN_DIGIT_COUNT = 1
    MAX_DIGIT_COUNT = 10

    def validation_error(self) -> Optional[str]:
        """Return the first configuration problem, or None if valid"""
        if not self.prefix or not self.prefix.strip():
            return "Prefix cannot be empty"
        if find_illegal_char(self.prefix) is not None:
            return "Prefix contains illegal characters (< > : \" / \\ | ? * or control characters)"
        if self.start_number < 0:
            return "Start number must be non-negative"
        if not self.MIN_DIGIT_COUNT <= self.digit_count <= self.MAX_DIGIT_COUNT:
            return f"Digit count must be between {self.MIN_DIGIT_COUNT} and {self.MAX_DIGIT_COUNT}"
        return None

    def is_valid(self) -> bool:
        return self.validation_error() is None


@dataclass(frozen=True)
class GeneratedName:
    """Candidate filename for one file of a batch"""
    name: str
    index: int
    source: FileRef


@dataclass(frozen=True)
class PreviewItem:
    """How one file would be renamed"""
    original: FileRef
    preview_name: str
    has_conflict: bool = False
    conflict_reason: Optional[str] = None

    def __post_init__(self):
        if self.has_conflict and not self.conflict_reason:
            raise ValueError("A conflicting preview item needs a conflict reason")

    @classmethod
    def with_conflict(cls, original: FileRef, preview_name: str, reason: str) -> "PreviewItem":
        return cls(original, preview_name, True, reason)

    @classmethod
    def success(cls, original: FileRef, preview_name: str) -> "PreviewItem":
        return cls(original, preview_name, False, None)

    @property
    def is_changed(self) -> bool:
        return self.original.name != self.preview_name

    @property
    def can_rename(self) -> bool:
        return not self.has_conflict and self.is_changed

    @property
    def description(self) -> str:
        if self.has_conflict:
            return f"Cannot rename: {self.conflict_reason}"
        if not self.is_changed:
            return "No change needed"
        return f"{self.original.name} -> {self.preview_name}"


@dataclass(frozen=True)
class PreviewSummary:
    """Aggregate counts of a preview"""
    total_files: int
    valid_renames: int
    conflicts: int
    unchanged: int

    @classmethod
    def from_items(cls, items: List[PreviewItem]) -> "PreviewSummary":
        return cls(
            total_files=len(items),
            valid_renames=sum(1 for item in items if item.can_rename),
            conflicts=sum(1 for item in items if item.has_conflict),
            unchanged=sum(1 for item in items if not item.is_changed and not item.has_conflict),
        )

    @property
    def can_proceed(self) -> bool:
        return self.conflicts == 0 and self.valid_renames > 0

    @property
    def message(self) -> str:
        if self.conflicts > 0:
            return f"{self.conflicts} file(s) have conflicts"
        if self.valid_renames == 0:
            return "No files will be renamed"
        return f"{self.valid_renames} file(s) ready to rename"


class RenameStatus(Enum):
    """Per-file execution status"""
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class RenameProgress:
    """Progress event emitted by the executor"""
    current_index: int                  # 0-based index in the sorted batch
    total: int
    current_file: FileRef
    status: RenameStatus
    new_name: Optional[str] = None      # Candidate name, once generated
    message: Optional[str] = None       # Skip/failure reason

    @property
    def progress_percentage(self) -> int:
        if self.total <= 0:
            return 0
        return ((self.current_index + 1) * 100) // self.total

    @property
    def progress_string(self) -> str:
        return f"{self.current_index + 1}/{self.total}"

    @property
    def is_last_file(self) -> bool:
        return self.current_index == self.total - 1

    @property
    def is_terminal(self) -> bool:
        return self.status is not RenameStatus.PROCESSING


@dataclass(frozen=True)
class RenameResult:
    """Terminal outcome for one file"""
    original: FileRef
    new_name: str
    success: bool
    error: Optional[str] = None
    status: RenameStatus = RenameStatus.SUCCESS

    @classmethod
    def from_progress(cls, progress: RenameProgress) -> "RenameResult":
        if not progress.is_terminal:
            raise ValueError("Only terminal progress events map to a result")
        return cls(
            original=progress.current_file,
            new_name=progress.new_name or progress.current_file.name,
            success=progress.status is RenameStatus.SUCCESS,
            error=progress.message,
            status=progress.status,
        )

    @property
    def is_failed(self) -> bool:
        return not self.success

    @property
    def status_message(self) -> str:
        if self.success:
            return "Renamed successfully"
        if self.status is RenameStatus.SKIPPED:
            return f"Skipped: {self.error or 'no reason given'}"
        return f"Failed: {self.error or 'Unknown error'}"


def is_case_insensitive_fs() -> bool:
    """Detect if current filesystem is case-insensitive"""
    return platform.system() in ("Windows", "Darwin")


def normalize_for_comparison(name: str, case_insensitive: bool = True) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
