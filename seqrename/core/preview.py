"""
preview.py - Rename Preview Generation

Responsibilities:
- Generate and validate the target name of every file (no I/O)
- Detect case-insensitive duplicates across the whole batch
- Summarize the preview and format it for the CLI
"""

from collections import defaultdict
from typing import Dict, List

from .errors import ConflictError
from .models_fs import (
    FileRef, PreviewItem, PreviewSummary, RenameConfig,
    normalize_for_comparison
)
from .name_check import validate
from .name_gen import generate_all
from .sort_rules import sort_files
from ..logger_helper import get_logger

logger = get_logger(__name__)


def _duplicate(name: str, colliding_index: int) -> ConflictError:
    message = f"Duplicate filename '{name}' (collides with file #{colliding_index + 1})"
    return ConflictError(name, message, colliding_index)


def build_preview(files: List[FileRef], config: RenameConfig) -> List[PreviewItem]:
    """
    Build a conflict-annotated preview of a batch rename

    Files are sorted with the configured strategy and the returned items follow
    that order. An invalid config marks every file (in input order) as
    conflicting with the config error.

    Args:
        files: Files to rename
        config: Rename configuration

    Returns:
        One PreviewItem per file
    """
    error = config.validation_error()
    if error is not None:
        logger.debug("Preview blocked by invalid config: %s", error)
        return [PreviewItem.with_conflict(f, f.name, error) for f in files]

    ordered = sort_files(files, config.sort_strategy)
    generated = generate_all(ordered, config).unwrap()

    # Indices of every file that generated a given name (case-insensitive)
    seen: Dict[str, List[int]] = defaultdict(list)
    for candidate in generated:
        seen[normalize_for_comparison(candidate.name)].append(candidate.index)

    items = []
    for candidate in generated:
        validation = validate(candidate.name)
        if not validation.is_valid:
            items.append(PreviewItem.with_conflict(
                candidate.source, candidate.name, validation.error_message or "Invalid filename"
            ))
            continue

        indices = seen[normalize_for_comparison(candidate.name)]
        if len(indices) > 1:
            other = next(i for i in indices if i != candidate.index)
            items.append(PreviewItem.with_conflict(
                candidate.source, candidate.name, _duplicate(candidate.name, other).message
            ))
            continue

        items.append(PreviewItem.success(candidate.source, candidate.name))

    logger.debug("Preview built for %d files", len(items))
    return items


def summarize(items: List[PreviewItem]) -> PreviewSummary:
    """Aggregate counts of a preview"""
    return PreviewSummary.from_items(items)


def format_preview_table(items: List[PreviewItem], limit: int = 0) -> str:
    """
    Format preview items as a text table

    Args:
        items: Preview items
        limit: Maximum rows to show (0 means all)

    Returns:
        Multi-line table text
    """
    shown = items[:limit] if limit > 0 else items
    width = max([len(item.original.name) for item in shown] + [13])
    width = min(width, 50)

    lines = ["-" * 80]
    lines.append(f"  {'Original Name':<{width}}    New Name")
    lines.append("-" * 80)
    for item in shown:
        if item.has_conflict:
            status = f"  [CONFLICT: {item.conflict_reason}]"
        elif not item.is_changed:
            status = "  [no change]"
        else:
            status = ""
        lines.append(f"  {item.original.name:<{width}} -> {item.preview_name}{status}")
    if len(items) > len(shown):
        lines.append(f"  ... and {len(items) - len(shown)} more files")
    lines.append("-" * 80)
    return "\n".join(lines)
