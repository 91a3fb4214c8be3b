"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Sequential per-file renaming through an injected FileMutationPort
- Progress streaming (PROCESSING, then SUCCESS / FAILED / SKIPPED per file)
- Per-file error recovery, result collection and execution logs
"""

from concurrent.futures import Executor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import AsyncIterator, Callable, Iterable, Iterator, List, Optional, Union
import asyncio
import json

from .errors import ConflictError, Err, MutationError, NameValidationError, Result
from .file_port import FileMutationPort
from .models_fs import (
    FileRef, RenameConfig, RenameProgress, RenameResult, RenameStatus,
    normalize_for_comparison
)
from .name_check import validate
from .name_gen import generate
from .sort_rules import sort_files
from ..logger_helper import get_logger

logger = get_logger(__name__)


@dataclass
class BatchReport:
    """Aggregated outcome of a batch"""
    success: List[RenameResult] = field(default_factory=list)
    failed: List[RenameResult] = field(default_factory=list)
    skipped: List[RenameResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failed_count + self.skipped_count

    @property
    def results(self) -> List[RenameResult]:
        return self.success + self.failed + self.skipped

    def add(self, result: RenameResult) -> None:
        if result.status is RenameStatus.SUCCESS:
            self.success.append(result)
        elif result.status is RenameStatus.SKIPPED:
            self.skipped.append(result)
        else:
            self.failed.append(result)

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Execution Result:",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.failed_count}",
            f"  - Skipped: {self.skipped_count}",
        ]
        problems = self.failed + self.skipped
        if problems:
            lines.append("Details:")
            for result in problems[:10]:  # Show at most 10
                lines.append(f"  - {result.original.name} -> {result.new_name}: {result.status_message}")
            if len(problems) > 10:
                lines.append(f"  ... and {len(problems) - 10} more")
        return "\n".join(lines)


# A step either ends the file early (terminal progress) or yields the name to apply
_Step = Union[RenameProgress, str]


class RenameExecutor:
    """
    Sequential batch renamer

    execute() and execute_async() are cold: nothing is touched until the
    stream is consumed, and a consumer that stops pulling stops the batch
    before the next file starts. A rename already handed to the port is
    allowed to finish.
    """

    def __init__(self, port: FileMutationPort, io_executor: Optional[Executor] = None):
        """
        Args:
            port: File mutation capability
            io_executor: Where port calls run (None runs them on the consuming
                thread, or on the loop's default executor for execute_async)
        """
        self.port = port
        self.io_executor = io_executor

    def _config_failure(self, files: List[FileRef], config: RenameConfig) -> Optional[RenameProgress]:
        """Single FAILED event for a batch with an invalid config (None if empty)"""
        error = config.validation_error()
        logger.warning("Rename batch rejected: %s", error)
        if not files:
            return None
        return RenameProgress(0, len(files), files[0], RenameStatus.FAILED, message=error)

    def _prepare(self, index: int, total: int, file: FileRef, config: RenameConfig) -> _Step:
        """Generate and validate the name for one file"""
        generated = generate(file, config, index)
        if isinstance(generated, Err):
            return self._skip(index, total, file, None, str(generated.error))

        new_name = generated.value
        validation = validate(new_name)
        if not validation.is_valid:
            error = NameValidationError(new_name, validation.error_message or "Invalid filename")
            return self._skip(index, total, file, new_name, str(error))

        if new_name == file.name:
            return self._skip(index, total, file, new_name, "Name unchanged")

        return new_name

    def _skip(self, index: int, total: int, file: FileRef, new_name: Optional[str], reason: str) -> RenameProgress:
        logger.info("Skip %s: %s", file.name, reason)
        return RenameProgress(index, total, file, RenameStatus.SKIPPED, new_name=new_name, message=reason)

    def _check_exists(self, file: FileRef, new_name: str) -> bool:
        # A case-only rename would match the source itself; the port guards the real target
        if normalize_for_comparison(new_name) == normalize_for_comparison(file.name):
            return False
        return self.port.name_exists(file.location, new_name)

    def _rename(self, file: FileRef, new_name: str) -> Result[FileRef, MutationError]:
        try:
            return self.port.rename_file(file, new_name)
        except OSError as e:
            return Err(MutationError.from_os_error(e))

    def _finish(self, index: int, total: int, file: FileRef, new_name: str, exists: bool,
                outcome: Optional[Result[FileRef, MutationError]]) -> RenameProgress:
        if exists:
            conflict = ConflictError(new_name, f"A file named '{new_name}' already exists")
            return self._skip(index, total, file, new_name, str(conflict))
        if isinstance(outcome, Err):
            logger.warning("Rename %s -> %s failed: %s", file.name, new_name, outcome.error)
            return RenameProgress(index, total, file, RenameStatus.FAILED, new_name=new_name,
                                  message=str(outcome.error))
        logger.debug("Renamed %s -> %s", file.name, new_name)
        return RenameProgress(index, total, file, RenameStatus.SUCCESS, new_name=new_name)

    def _call(self, func: Callable, *args):
        if self.io_executor is None:
            return func(*args)
        return self.io_executor.submit(func, *args).result()

    def execute(self, files: List[FileRef], config: RenameConfig) -> Iterator[RenameProgress]:
        """
        Rename files one at a time, yielding progress events

        Args:
            files: Files to rename (sorted with config.sort_strategy)
            config: Rename configuration

        Yields:
            RenameProgress events
        """
        if not config.is_valid():
            failure = self._config_failure(files, config)
            if failure is not None:
                yield failure
            return

        ordered = sort_files(files, config.sort_strategy)
        total = len(ordered)
        logger.info("Renaming %d files", total)

        for index, file in enumerate(ordered):
            yield RenameProgress(index, total, file, RenameStatus.PROCESSING)

            step = self._prepare(index, total, file, config)
            if isinstance(step, RenameProgress):
                yield step
                continue

            exists = self._call(self._check_exists, file, step)
            outcome = None if exists else self._call(self._rename, file, step)
            yield self._finish(index, total, file, step, exists, outcome)

        logger.info("Rename batch finished")

    async def execute_async(self, files: List[FileRef], config: RenameConfig) -> AsyncIterator[RenameProgress]:
        """Async variant of execute(); port calls run in io_executor"""
        if not config.is_valid():
            failure = self._config_failure(files, config)
            if failure is not None:
                yield failure
            return

        loop = asyncio.get_running_loop()
        ordered = sort_files(files, config.sort_strategy)
        total = len(ordered)
        logger.info("Renaming %d files", total)

        for index, file in enumerate(ordered):
            yield RenameProgress(index, total, file, RenameStatus.PROCESSING)

            step = self._prepare(index, total, file, config)
            if isinstance(step, RenameProgress):
                yield step
                continue

            exists = await loop.run_in_executor(self.io_executor, self._check_exists, file, step)
            outcome = None
            if not exists:
                outcome = await loop.run_in_executor(self.io_executor, self._rename, file, step)
            yield self._finish(index, total, file, step, exists, outcome)

        logger.info("Rename batch finished")


def collect_results(
    stream: Iterable[RenameProgress],
    on_progress: Optional[Callable[[RenameProgress], None]] = None
) -> BatchReport:
    """
    Drain a progress stream into a BatchReport

    Args:
        stream: Progress events from RenameExecutor.execute()
        on_progress: Called with every event before it is recorded

    Returns:
        Report with one result per terminal event
    """
    report = BatchReport()
    for progress in stream:
        if on_progress:
            on_progress(progress)
        if progress.is_terminal:
            report.add(RenameResult.from_progress(progress))
    return report


def _result_entry(result: RenameResult) -> dict:
    return {
        "id": result.original.id,
        "src": result.original.name,
        "dst": result.new_name,
        "status": result.status.value,
        "error": result.error,
    }


def save_result_log(report: BatchReport, log_dir: Path, config: Optional[RenameConfig] = None) -> Path:
    """Save execution result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"rename_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "success_count": report.success_count,
        "failed_count": report.failed_count,
        "skipped_count": report.skipped_count,
        "success": [_result_entry(r) for r in report.success],
        "failed": [_result_entry(r) for r in report.failed],
        "skipped": [_result_entry(r) for r in report.skipped],
    }
    if config is not None:
        data["config"] = {
            "prefix": config.prefix,
            "start_number": config.start_number,
            "digit_count": config.digit_count,
            "preserve_extension": config.preserve_extension,
            "sort_strategy": config.sort_strategy.value,
        }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.debug("Result log written to %s", log_file)
    return log_file
