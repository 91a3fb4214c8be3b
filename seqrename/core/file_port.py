"""
file_port.py - File Mutation Port

The only place where the engine touches real storage:
- FileMutationPort: interface injected into RenameExecutor
- LocalFilePort: implementation for files in local directories
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional
import os
import uuid

from .errors import Err, MutationError, Ok, Result
from .models_fs import FileRef, is_case_insensitive_fs, normalize_for_comparison
from ..logger_helper import get_logger

logger = get_logger(__name__)

TEMP_PREFIX = ".__tmp_rename__"


class FileMutationPort(ABC):
    """Rename capability consumed by the executor"""

    @abstractmethod
    def rename_file(self, file: FileRef, new_name: str) -> Result[FileRef, MutationError]:
        """
        Rename a file within its containing location

        Args:
            file: File to rename
            new_name: New filename (no directory part)

        Returns:
            Ok(updated FileRef) or Err(MutationError)
        """

    @abstractmethod
    def name_exists(self, location: Any, candidate_name: str) -> bool:
        """Whether candidate_name is already taken in location"""


def _generate_temp_name(original: Path) -> Path:
    """Generate temporary filename"""
    unique_id = uuid.uuid4().hex[:8]
    return original.parent / f"{TEMP_PREFIX}{unique_id}__{original.name}"


def is_temp_name(name: str) -> bool:
    """Check if it's a temporary filename"""
    return name.startswith(TEMP_PREFIX)


class LocalFilePort(FileMutationPort):
    """File port backed by os.rename on local directories"""

    def __init__(self, case_insensitive: Optional[bool] = None):
        """
        Args:
            case_insensitive: Whether names differing only in case collide
                (None detects it from the platform)
        """
        if case_insensitive is None:
            case_insensitive = is_case_insensitive_fs()
        self.case_insensitive = case_insensitive

    def _source_path(self, file: FileRef) -> Path:
        if file.location is not None:
            return Path(file.location) / file.name
        return Path(file.id)

    def name_exists(self, location: Any, candidate_name: str) -> bool:
        directory = Path(location)
        if not self.case_insensitive:
            return os.path.lexists(directory / candidate_name)

        wanted = normalize_for_comparison(candidate_name)
        try:
            return any(normalize_for_comparison(entry) == wanted for entry in os.listdir(directory))
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            return False

    def rename_file(self, file: FileRef, new_name: str) -> Result[FileRef, MutationError]:
        src = self._source_path(file)
        dst = src.parent / new_name

        if not src.exists():
            return Err(MutationError.not_found(f"Source file does not exist: {src}"))

        case_only = src.name != new_name and src.name.casefold() == new_name.casefold()
        # On case-insensitive filesystems dst may resolve to src itself
        if os.path.lexists(dst) and not (case_only and os.path.samefile(src, dst)):
            return Err(MutationError.other(f"Target already exists: {dst}"))

        try:
            if case_only:
                # Two-phase so case-insensitive filesystems apply the new case
                temp_path = _generate_temp_name(src)
                os.rename(src, temp_path)
                try:
                    os.rename(temp_path, dst)
                except OSError:
                    os.rename(temp_path, src)
                    raise
            else:
                os.rename(src, dst)
        except OSError as e:
            logger.debug("Rename %s -> %s failed: %s", src, dst, e)
            return Err(MutationError.from_os_error(e))

        return Ok(replace(file, id=str(dst), name=new_name, location=dst.parent))
