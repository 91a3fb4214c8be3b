"""
gui_mainwindow.py - GUI Main Window

Source folder, naming pattern, preview table and execution with progress
"""

from pathlib import Path
from typing import Dict, List, Optional

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox, QComboBox,
    QSpinBox, QTableWidget, QTableWidgetItem, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QColor

from ..core import (
    FileRef, PreviewItem, PreviewSummary, RenameConfig, RenameProgress,
    RenameStatus, SortStrategy, BatchReport, Err, generate, list_suffixes, sort_files
)
from ..logger_helper import get_logger
from .gui_workers import ScanWorker, PreviewWorker, RenameWorker

logger = get_logger(__name__)

ALL_SUFFIXES = "(All)"
COLUMNS = ["Original Name", "New Name", "Status"]

STATUS_COLORS = {
    RenameStatus.PROCESSING: QColor(0, 100, 200),
    RenameStatus.SUCCESS: QColor(0, 150, 0),
    RenameStatus.FAILED: QColor(200, 0, 0),
    RenameStatus.SKIPPED: QColor(200, 150, 0),
}
CONFLICT_BACKGROUND = QColor(255, 220, 220)
UNCHANGED_COLOR = QColor(150, 150, 150)

# Stand-in used for the live pattern example before anything is scanned
SAMPLE_FILE = FileRef(id="sample", name="IMG_0001.jpg")


def _cell(text: str, color: Optional[QColor] = None) -> QTableWidgetItem:
    item = QTableWidgetItem(text)
    if color is not None:
        item.setForeground(color)
    return item


class RenamePanel(QWidget):
    """Sequential naming panel: scan -> preview -> rename"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.files: List[FileRef] = []
        self.items: List[PreviewItem] = []
        self.preview_config: Optional[RenameConfig] = None   # pattern self.items was built with
        self.rows: Dict[str, int] = {}           # FileRef.id -> table row
        self.scan_worker: Optional[ScanWorker] = None
        self.preview_worker: Optional[PreviewWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        layout = QVBoxLayout(self)
        layout.addWidget(self._build_source_group())
        layout.addWidget(self._build_pattern_group())
        layout.addWidget(self._build_table(), 1)
        layout.addLayout(self._build_action_bar())
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        self._refresh_example()

    # --- layout ---

    def _build_source_group(self) -> QGroupBox:
        group = QGroupBox("Source Folder")
        form = QFormLayout(group)

        path_row = QHBoxLayout()
        self.folder_edit = QLineEdit()
        self.folder_edit.setPlaceholderText("Folder whose files will be numbered (non-recursive)")
        path_row.addWidget(self.folder_edit, 1)
        choose_btn = QPushButton("Choose...")
        choose_btn.clicked.connect(self._choose_folder)
        path_row.addWidget(choose_btn)
        form.addRow("Folder:", path_row)

        filter_row = QHBoxLayout()
        self.suffix_combo = QComboBox()
        self.suffix_combo.setEditable(True)
        self.suffix_combo.addItem(ALL_SUFFIXES)
        filter_row.addWidget(self.suffix_combo, 1)
        self.hidden_check = QCheckBox("Hidden files")
        filter_row.addWidget(self.hidden_check)
        self.load_btn = QPushButton("Load Files")
        self.load_btn.clicked.connect(self._load_files)
        filter_row.addWidget(self.load_btn)
        form.addRow("Type:", filter_row)

        return group

    def _build_pattern_group(self) -> QGroupBox:
        group = QGroupBox("Naming Pattern")
        form = QFormLayout(group)

        self.prefix_edit = QLineEdit()
        self.prefix_edit.setPlaceholderText("e.g., vac_")
        self.prefix_edit.textChanged.connect(self._refresh_example)
        form.addRow("Prefix:", self.prefix_edit)

        numbers_row = QHBoxLayout()
        self.start_spin = QSpinBox()
        self.start_spin.setRange(0, 999999)
        self.start_spin.setValue(1)
        self.start_spin.setPrefix("from ")
        self.start_spin.valueChanged.connect(self._refresh_example)
        numbers_row.addWidget(self.start_spin)
        self.digits_spin = QSpinBox()
        self.digits_spin.setRange(RenameConfig.MIN_DIGIT_COUNT, RenameConfig.MAX_DIGIT_COUNT)
        self.digits_spin.setValue(3)
        self.digits_spin.setSuffix(" digits")
        self.digits_spin.valueChanged.connect(self._refresh_example)
        numbers_row.addWidget(self.digits_spin)
        self.extension_check = QCheckBox("Keep extension")
        self.extension_check.setChecked(True)
        self.extension_check.toggled.connect(self._refresh_example)
        numbers_row.addWidget(self.extension_check)
        numbers_row.addStretch(1)
        form.addRow("Number:", numbers_row)

        self.sort_combo = QComboBox()
        for strategy in SortStrategy:
            self.sort_combo.addItem(strategy.display_name, strategy)
            self.sort_combo.setItemData(
                self.sort_combo.count() - 1, strategy.description, Qt.ItemDataRole.ToolTipRole
            )
        self.sort_combo.currentIndexChanged.connect(self._refresh_example)
        form.addRow("Order:", self.sort_combo)

        self.example_label = QLabel()
        form.addRow("Example:", self.example_label)

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.setEnabled(False)
        self.preview_btn.clicked.connect(self._start_preview)
        form.addRow(self.preview_btn)

        return group

    def _build_table(self) -> QTableWidget:
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        header = self.table.horizontalHeader()
        for column in range(len(COLUMNS)):
            header.setSectionResizeMode(column, QHeaderView.ResizeMode.Stretch)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        return self.table

    def _build_action_bar(self) -> QHBoxLayout:
        bar = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bar.addWidget(self.progress_bar, 1)

        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setVisible(False)
        self.cancel_btn.clicked.connect(self._cancel_rename)
        bar.addWidget(self.cancel_btn)

        self.rename_btn = QPushButton("Rename Files")
        self.rename_btn.setEnabled(False)
        self.rename_btn.setStyleSheet("QPushButton { font-weight: bold; padding: 8px 16px; }")
        self.rename_btn.clicked.connect(self._start_rename)
        bar.addWidget(self.rename_btn)

        return bar

    # --- pattern ---

    def current_config(self) -> RenameConfig:
        return RenameConfig(
            prefix=self.prefix_edit.text(),
            start_number=self.start_spin.value(),
            digit_count=self.digits_spin.value(),
            preserve_extension=self.extension_check.isChecked(),
            sort_strategy=self.sort_combo.currentData(),
        )

    def _refresh_example(self, *_):
        """Show the name the first file would get, or the pattern problem"""
        config = self.current_config()
        sample = sort_files(self.files, config.sort_strategy)[0] if self.files else SAMPLE_FILE
        result = generate(sample, config, 0)
        if isinstance(result, Err):
            self.example_label.setText(str(result.error))
            self.example_label.setStyleSheet("color: #c80000;")
        else:
            self.example_label.setText(f"{sample.name} -> {result.value}   ({config.sort_strategy.example})")
            self.example_label.setStyleSheet("")

        # Any pattern change invalidates the last preview
        if self.preview_config is not None and self.preview_config != config:
            self.items = []
            self.preview_config = None
            self.rename_btn.setEnabled(False)

    # --- scanning ---

    def _choose_folder(self):
        folder = QFileDialog.getExistingDirectory(self, "Choose Folder")
        if not folder:
            return
        self.folder_edit.setText(folder)
        self.suffix_combo.clear()
        self.suffix_combo.addItem(ALL_SUFFIXES)
        self.suffix_combo.addItems(list_suffixes(Path(folder), include_hidden=self.hidden_check.isChecked()))

    def _load_files(self):
        folder = self.folder_edit.text().strip()
        if not folder:
            QMessageBox.warning(self, "Warning", "Please choose a folder first")
            return

        suffix = self.suffix_combo.currentText().strip()
        self.load_btn.setEnabled(False)
        self.preview_btn.setEnabled(False)
        self.rename_btn.setEnabled(False)
        self.status_label.setText("Loading...")

        self.scan_worker = ScanWorker(
            Path(folder),
            suffix_filter=None if suffix in ("", ALL_SUFFIXES) else suffix,
            include_hidden=self.hidden_check.isChecked(),
        )
        self.scan_worker.completed.connect(self._on_files_loaded)
        self.scan_worker.error.connect(self._on_load_error)
        self.scan_worker.start()

    @Slot(list)
    def _on_files_loaded(self, files: List[FileRef]):
        self.files = files
        self.items = []
        self.preview_config = None
        self.rows = {}
        self.load_btn.setEnabled(True)

        self.table.setRowCount(len(files))
        for row, file in enumerate(files):
            self.table.setItem(row, 0, _cell(file.name))
            self.table.setItem(row, 1, _cell(""))
            self.table.setItem(row, 2, _cell(file.formatted_size, UNCHANGED_COLOR))

        self.preview_btn.setEnabled(bool(files))
        self.status_label.setText(f"{len(files)} files loaded" if files else "No matching files")
        self._refresh_example()

    @Slot(str)
    def _on_load_error(self, error: str):
        self.load_btn.setEnabled(True)
        self.status_label.setText("")
        QMessageBox.critical(self, "Error", f"Cannot load files: {error}")

    # --- preview ---

    def _start_preview(self):
        if not self.files:
            return
        self.preview_btn.setEnabled(False)
        self.rename_btn.setEnabled(False)

        self.preview_worker = PreviewWorker(self.files, self.current_config())
        self.preview_worker.completed.connect(self._on_preview_ready)
        self.preview_worker.start()

    @Slot(list, object, object)
    def _on_preview_ready(self, items: List[PreviewItem], summary: PreviewSummary, config: RenameConfig):
        self.preview_btn.setEnabled(True)
        if config != self.current_config():
            logger.debug("Discarding preview built for an older pattern")
            self.status_label.setText("Pattern changed, preview again")
            return

        self.items = items
        self.preview_config = config
        self.rows = {item.original.id: row for row, item in enumerate(items)}

        self.table.setRowCount(len(items))
        for row, item in enumerate(items):
            new_name = _cell(item.preview_name)
            if item.has_conflict:
                new_name.setBackground(CONFLICT_BACKGROUND)
                status = _cell(item.conflict_reason, STATUS_COLORS[RenameStatus.FAILED])
            elif not item.is_changed:
                status = _cell("No change", UNCHANGED_COLOR)
            else:
                status = _cell("Ready", STATUS_COLORS[RenameStatus.SUCCESS])
            self.table.setItem(row, 0, _cell(item.original.name))
            self.table.setItem(row, 1, new_name)
            self.table.setItem(row, 2, status)

        self.rename_btn.setEnabled(summary.can_proceed)
        self.status_label.setText(summary.message)

    # --- execution ---

    def _set_running(self, running: bool):
        self.load_btn.setEnabled(not running)
        self.preview_btn.setEnabled(False)
        self.rename_btn.setEnabled(False)
        self.progress_bar.setVisible(running)
        self.cancel_btn.setVisible(running)
        self.cancel_btn.setEnabled(running)

    def _start_rename(self):
        config = self.preview_config
        count = sum(1 for item in self.items if item.can_rename)
        if config is None or config != self.current_config() or not count:
            self.rename_btn.setEnabled(False)
            return
        reply = QMessageBox.question(
            self, "Confirm",
            f"Rename {count} files?\n\nThis cannot be undone.",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self._set_running(True)
        self.progress_bar.setRange(0, len(self.items))
        self.progress_bar.setValue(0)

        self.rename_worker = RenameWorker(self.files, config)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.completed.connect(self._on_rename_done)
        self.rename_worker.start()

    def _cancel_rename(self):
        if self.rename_worker:
            self.rename_worker.cancel()
            self.cancel_btn.setEnabled(False)
            self.status_label.setText("Stopping after the current file...")

    @Slot(object)
    def _on_rename_progress(self, progress: RenameProgress):
        row = self.rows.get(progress.current_file.id)
        if row is not None:
            text = progress.message or progress.status.value.capitalize()
            self.table.setItem(row, 2, _cell(text, STATUS_COLORS[progress.status]))

        if progress.is_terminal:
            self.progress_bar.setValue(progress.current_index + 1)
        self.status_label.setText(f"[{progress.progress_string}] {progress.current_file.name}")

    @Slot(str)
    def _on_rename_error(self, error: str):
        QMessageBox.critical(self, "Error", f"Rename stopped: {error}")

    @Slot(object)
    def _on_rename_done(self, report: BatchReport):
        self._set_running(False)
        logger.info("GUI batch done: %d ok, %d failed, %d skipped",
                    report.success_count, report.failed_count, report.skipped_count)

        lines = [
            f"Success: {report.success_count}",
            f"Failed: {report.failed_count}",
            f"Skipped: {report.skipped_count}",
        ]
        problems = report.failed + report.skipped
        if problems:
            lines.append("")
            lines.extend(f"{r.original.name}: {r.status_message}" for r in problems[:5])
            if len(problems) > 5:
                lines.append(f"... and {len(problems) - 5} more")
        QMessageBox.information(self, "Rename finished", "\n".join(lines))

        # Names on disk changed; the next batch needs a fresh load
        self.files = []
        self.items = []
        self.preview_config = None
        self.status_label.setText("Done, load the folder again to continue")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Sequential Batch Rename")
        self.setMinimumSize(800, 600)

        self.panel = RenamePanel()
        self.setCentralWidget(self.panel)
        self.statusBar().showMessage("Ready")
