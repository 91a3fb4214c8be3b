"""
sort_rules.py - Sorting Rules Module

Provides the file orderings applied before sequential numbering
"""

import re
from typing import Callable, List, Tuple

from .models_fs import FileRef, SortStrategy

_TOKEN_RE = re.compile(r"(\d+)")


def natural_key(name: str) -> Tuple[tuple, ...]:
    """
    Build a natural-order sort key for a filename

    The name is split into alternating digit and non-digit runs:
    - digit runs compare by integer value, then longer run first
      ("007" < "07" < "7"), then by code points
    - other runs compare case-insensitively
    - a digit run sorts before a non-digit run at the same position
    - a name that runs out of runs first sorts first

    Examples:
        "file1" < "file2" < "file10" < "file100"
        "photo_10" < "photo_20" < "photo_100"
    """
    key = []
    for token in _TOKEN_RE.split(name):
        if not token:
            continue
        if token[0].isdecimal():
            key.append((0, int(token), -len(token), token))
        else:
            key.append((1, token.casefold()))
    return tuple(key)


def natural_compare(a: str, b: str) -> int:
    """Compare two filenames in natural order (-1, 0 or 1)"""
    key_a, key_b = natural_key(a), natural_key(b)
    return (key_a > key_b) - (key_a < key_b)


def get_sort_key(strategy: SortStrategy) -> Callable[[FileRef], object]:
    """
    Get sort key function

    Args:
        strategy: Sorting strategy (not ORIGINAL_ORDER)

    Returns:
        Sort key function
    """
    if strategy == SortStrategy.NATURAL:
        return lambda f: natural_key(f.name)
    elif strategy == SortStrategy.DATE_MODIFIED:
        return lambda f: f.date_modified
    elif strategy == SortStrategy.SIZE:
        return lambda f: f.size
    raise ValueError(f"No sort key for strategy: {strategy}")


def sort_files(files: List[FileRef], strategy: SortStrategy = SortStrategy.NATURAL) -> List[FileRef]:
    """
    Sort file list

    The sort is stable: files with equal keys keep their input order,
    including for the descending strategies.

    Args:
        files: File list (not modified)
        strategy: Sorting strategy

    Returns:
        Sorted file list (new list)
    """
    if strategy == SortStrategy.ORIGINAL_ORDER:
        return list(files)

    descending = strategy in (SortStrategy.DATE_MODIFIED, SortStrategy.SIZE)
    return sorted(files, key=get_sort_key(strategy), reverse=descending)
