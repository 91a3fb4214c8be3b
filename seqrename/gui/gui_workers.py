"""
gui_workers.py - GUI Worker Threads

Runs scanning, preview and renaming off the UI thread
"""

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QThread, Signal, QObject

from ..core import (
    FileMutationPort, FileRef, LocalFilePort, RenameConfig, RenameExecutor,
    BatchReport, RenameResult, build_preview, scan_directory, summarize
)
from ..logger_helper import get_logger

logger = get_logger(__name__)


class ScanWorker(QThread):
    """File scanning worker thread"""

    # Signals
    completed = Signal(list)        # List[FileRef]
    error = Signal(str)             # Error message

    def __init__(
        self,
        directory: Path,
        suffix_filter: Optional[str] = None,
        include_hidden: bool = False,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.directory = directory
        self.suffix_filter = suffix_filter
        self.include_hidden = include_hidden

    def run(self):
        try:
            files = scan_directory(
                self.directory,
                suffix_filter=self.suffix_filter,
                include_hidden=self.include_hidden,
            )
            self.completed.emit(files)
        except (OSError, ValueError) as e:
            logger.warning("Scan of %s failed: %s", self.directory, e)
            self.error.emit(str(e))


class PreviewWorker(QThread):
    """Preview generation worker thread"""

    # Signals
    completed = Signal(list, object, object)    # List[PreviewItem], PreviewSummary, RenameConfig

    def __init__(self, files: List[FileRef], config: RenameConfig, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.files = files
        self.config = config

    def run(self):
        items = build_preview(self.files, self.config)
        self.completed.emit(items, summarize(items), self.config)


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(object)           # RenameProgress
    completed = Signal(object)          # BatchReport, also after an error
    error = Signal(str)                 # Unexpected failure that stopped the batch

    def __init__(
        self,
        files: List[FileRef],
        config: RenameConfig,
        port: Optional[FileMutationPort] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.files = files
        self.config = config
        self.port = port or LocalFilePort()
        self._cancelled = False

    def cancel(self):
        """Stop before the next file; a rename in progress completes"""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def run(self):
        report = BatchReport()
        stream = RenameExecutor(self.port).execute(self.files, self.config)
        try:
            for progress in stream:
                self.progress.emit(progress)
                if progress.is_terminal:
                    report.add(RenameResult.from_progress(progress))
                if self._cancelled:
                    logger.info("Rename cancelled after %s", progress.progress_string)
                    break
        except Exception as e:
            # The batch stops, but the files already renamed are still reported
            logger.exception("Rename batch aborted after %d files", report.total_count)
            self.error.emit(str(e))
        finally:
            stream.close()
            self.completed.emit(report)
