"""
scan_files.py - File Scanning Module

Lists the files of a directory as FileRef batches
"""

from pathlib import Path
from typing import Callable, List, Optional

from .file_port import is_temp_name
from .models_fs import FileRef
from ..logger_helper import get_logger

logger = get_logger(__name__)


def _normalize_suffix(suffix: str) -> str:
    suffix = suffix.strip().lower()
    if suffix and not suffix.startswith("."):
        suffix = f".{suffix}"
    return suffix


def scan_directory(
    directory: Path,
    suffix_filter: Optional[str] = None,
    include_hidden: bool = False,
    file_filter: Optional[Callable[[Path], bool]] = None
) -> List[FileRef]:
    """
    Scan single directory (non-recursive)

    Args:
        directory: Target directory
        suffix_filter: Suffix filter (e.g., ".jpg" or "jpg", case-insensitive)
        include_hidden: Whether to include hidden files
        file_filter: Additional file filter function

    Returns:
        File list, ordered by path
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        raise ValueError(f"Directory does not exist: {directory}")

    wanted_suffix = _normalize_suffix(suffix_filter) if suffix_filter else ""
    results: List[FileRef] = []

    for item in sorted(directory.iterdir(), key=lambda p: str(p)):
        # Only process files, not directories
        if not item.is_file():
            continue

        # Leftovers of an interrupted case-only rename
        if is_temp_name(item.name):
            continue

        # Skip hidden files
        if not include_hidden and item.name.startswith('.'):
            continue

        if wanted_suffix and item.suffix.lower() != wanted_suffix:
            continue

        # Additional filter
        if file_filter and not file_filter(item):
            continue

        try:
            results.append(FileRef.from_path(item))
        except OSError as e:
            logger.warning("Cannot access %s: %s", item, e)

    logger.debug("Scanned %d files in %s", len(results), directory)
    return results


def list_suffixes(directory: Path, include_hidden: bool = False) -> List[str]:
    """
    List all file suffixes in the directory

    Args:
        directory: Target directory
        include_hidden: Whether to include hidden files

    Returns:
        Suffix list (deduplicated, sorted)
    """
    try:
        files = scan_directory(directory, include_hidden=include_hidden)
    except ValueError:
        return []
    return sorted({_normalize_suffix(f.extension) for f in files if f.extension})
