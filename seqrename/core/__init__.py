"""
core - Batch Rename Engine

Provides filename validation and generation, sorting, preview with conflict
detection, and sequential execution through an injected file port.
"""

from .models_fs import (
    FileRef,
    SortStrategy,
    RenameConfig,
    GeneratedName,
    PreviewItem,
    PreviewSummary,
    RenameStatus,
    RenameProgress,
    RenameResult,
)

from .errors import (
    Ok,
    Err,
    Result,
    ConfigurationError,
    NameValidationError,
    ConflictError,
    MutationError,
    MutationErrorKind,
)

from .name_check import (
    ValidationResult,
    validate,
    is_valid_filename,
    sanitize_filename,
)

from .name_gen import (
    generate,
    generate_all,
)

from .sort_rules import (
    sort_files,
    natural_key,
    natural_compare,
)

from .preview import (
    build_preview,
    summarize,
    format_preview_table,
)

from .file_port import (
    FileMutationPort,
    LocalFilePort,
)

from .exec_rename import (
    RenameExecutor,
    BatchReport,
    collect_results,
    save_result_log,
)

from .scan_files import (
    scan_directory,
    list_suffixes,
)

__all__ = [
    # Data models
    "FileRef",
    "SortStrategy",
    "RenameConfig",
    "GeneratedName",
    "PreviewItem",
    "PreviewSummary",
    "RenameStatus",
    "RenameProgress",
    "RenameResult",

    # Results and errors
    "Ok",
    "Err",
    "Result",
    "ConfigurationError",
    "NameValidationError",
    "ConflictError",
    "MutationError",
    "MutationErrorKind",

    # Validation
    "ValidationResult",
    "validate",
    "is_valid_filename",
    "sanitize_filename",

    # Generation
    "generate",
    "generate_all",

    # Sorting
    "sort_files",
    "natural_key",
    "natural_compare",

    # Preview
    "build_preview",
    "summarize",
    "format_preview_table",

    # Execution
    "FileMutationPort",
    "LocalFilePort",
    "RenameExecutor",
    "BatchReport",
    "collect_results",
    "save_result_log",

    # Scanning
    "scan_directory",
    "list_suffixes",
]
