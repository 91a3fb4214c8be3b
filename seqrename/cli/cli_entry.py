"""
cli_entry.py - CLI Entry Point

Subcommands:
- preview: Show how a directory would be renamed
- rename: Preview, confirm and execute
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..core import (
    FileRef, RenameConfig, RenameProgress, RenameStatus, SortStrategy,
    LocalFilePort, RenameExecutor, build_preview, collect_results,
    format_preview_table, save_result_log, scan_directory, summarize
)
from ..logger_helper import setup_logging

SORT_CHOICES = {
    "natural": SortStrategy.NATURAL,
    "date": SortStrategy.DATE_MODIFIED,
    "size": SortStrategy.SIZE,
    "original": SortStrategy.ORIGINAL_ORDER,
}

PREVIEW_LIMIT = 50


def _add_pattern_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", type=str, help="Target directory (non-recursive)")
    parser.add_argument("--prefix", "-p", type=str, required=True, help="Filename prefix (e.g., vac_)")
    parser.add_argument("--start", type=int, default=1, help="Starting number")
    parser.add_argument("--digits", type=int, default=3, help="Zero-padding digits (1-10)")
    parser.add_argument("--no-extension", action="store_true", help="Drop the original extension")
    parser.add_argument("--sort", type=str, default="natural", choices=list(SORT_CHOICES),
                        help="Sort method")
    parser.add_argument("--suffix", "-s", type=str, help="File suffix filter (e.g., .jpg)")
    parser.add_argument("--include-hidden", action="store_true", help="Include hidden files")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="seqrename",
        description="Sequential Batch Rename Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview only
  seqrename preview ./photos --prefix vac_ --digits 3

  # Rename, newest first, without confirmation
  seqrename rename ./photos --prefix vac_ --sort date --yes
"""
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    preview_parser = subparsers.add_parser("preview", help="Preview sequential renaming")
    _add_pattern_arguments(preview_parser)

    rename_parser = subparsers.add_parser("rename", help="Execute sequential renaming")
    _add_pattern_arguments(rename_parser)
    rename_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    rename_parser.add_argument("--log-dir", type=str, help="Directory for JSON execution logs")

    return parser


def config_from_args(args) -> RenameConfig:
    return RenameConfig(
        prefix=args.prefix,
        start_number=args.start,
        digit_count=args.digits,
        preserve_extension=not args.no_extension,
        sort_strategy=SORT_CHOICES[args.sort],
    )


def _load_files(args) -> Optional[List[FileRef]]:
    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        print(f"Error: Directory does not exist: {directory}")
        return None

    print(f"Scan directory: {directory}")
    files = scan_directory(directory, suffix_filter=args.suffix, include_hidden=args.include_hidden)
    print(f"Found {len(files)} files")
    return files


def _print_preview(files: List[FileRef], config: RenameConfig):
    items = build_preview(files, config)
    summary = summarize(items)

    print()
    print(format_preview_table(items, limit=PREVIEW_LIMIT))
    print(
        f"Total: {summary.total_files}  Will rename: {summary.valid_renames}  "
        f"Conflicts: {summary.conflicts}  Unchanged: {summary.unchanged}"
    )
    print(summary.message)
    return summary


def cmd_preview(args) -> int:
    """Handle preview command"""
    files = _load_files(args)
    if files is None:
        return 1
    if not files:
        print("No matching files found")
        return 0

    summary = _print_preview(files, config_from_args(args))
    return 0 if summary.conflicts == 0 else 1


def _print_progress(progress: RenameProgress) -> None:
    if progress.status is RenameStatus.PROCESSING:
        return
    line = f"  [{progress.progress_string}] {progress.status.value:<8} {progress.current_file.name}"
    if progress.new_name:
        line += f" -> {progress.new_name}"
    if progress.message:
        line += f" ({progress.message})"
    print(line)


def cmd_rename(args) -> int:
    """Handle rename command"""
    files = _load_files(args)
    if files is None:
        return 1
    if not files:
        print("No matching files found")
        return 0

    config = config_from_args(args)
    summary = _print_preview(files, config)

    if summary.conflicts > 0:
        print("\nResolve the conflicts above before renaming")
        return 1
    if not summary.can_proceed:
        return 0

    if not args.yes:
        confirm = input(f"\nRename {summary.valid_renames} files? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    print("\nExecuting...")
    executor = RenameExecutor(LocalFilePort())
    report = collect_results(executor.execute(files, config), on_progress=_print_progress)
    print(report.summary())

    if args.log_dir:
        log_file = save_result_log(report, Path(args.log_dir), config)
        print(f"Log saved: {log_file}")

    return 0 if report.failed_count == 0 else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "preview":
        return cmd_preview(args)
    elif args.command == "rename":
        return cmd_rename(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
