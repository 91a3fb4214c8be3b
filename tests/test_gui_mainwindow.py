"""Tests for the rename panel's preview and execution state."""

from unittest.mock import Mock

import pytest

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtWidgets import QMessageBox

from seqrename.core import build_preview, summarize
from seqrename.gui import gui_mainwindow
from seqrename.gui.gui_mainwindow import RenamePanel


class RecordingWorker:
    """Stands in for RenameWorker and remembers what it was asked to run."""

    created = []

    def __init__(self, files, config):
        self.files = files
        self.config = config
        self.progress = Mock()
        self.error = Mock()
        self.completed = Mock()
        self.started = False
        RecordingWorker.created.append(self)

    def start(self):
        self.started = True


class AlwaysYes:
    StandardButton = QMessageBox.StandardButton

    @staticmethod
    def question(*args):
        return QMessageBox.StandardButton.Yes


@pytest.fixture
def panel(qt_app, five_files, monkeypatch):
    RecordingWorker.created = []
    monkeypatch.setattr(gui_mainwindow, "RenameWorker", RecordingWorker)
    monkeypatch.setattr(gui_mainwindow, "QMessageBox", AlwaysYes)
    widget = RenamePanel()
    widget.files = five_files
    widget.prefix_edit.setText("vac_")
    yield widget
    widget.deleteLater()


def deliver_preview(panel, config):
    items = build_preview(panel.files, config)
    panel._on_preview_ready(items, summarize(items), config)


class TestPreviewState:
    """Tests for keeping the preview in step with the pattern."""

    def test_fresh_preview_enables_rename(self, panel):
        config = panel.current_config()

        deliver_preview(panel, config)

        assert panel.rename_btn.isEnabled()
        assert panel.preview_config == config
        assert panel.table.item(0, 1).text() == "vac_001.jpg"

    def test_pattern_change_invalidates_preview(self, panel):
        deliver_preview(panel, panel.current_config())

        panel.prefix_edit.setText("trip_")

        assert not panel.rename_btn.isEnabled()
        assert panel.items == []
        assert panel.preview_config is None

    def test_preview_for_older_pattern_is_discarded(self, panel):
        """Test that a preview finishing after the pattern changed is not used."""
        old_config = panel.current_config()
        panel.prefix_edit.setText("trip_")

        deliver_preview(panel, old_config)

        assert not panel.rename_btn.isEnabled()
        assert panel.items == []
        assert panel.preview_config is None
        assert panel.preview_btn.isEnabled()

    def test_unrelated_refresh_keeps_preview(self, panel):
        config = panel.current_config()
        deliver_preview(panel, config)

        panel._refresh_example()

        assert panel.rename_btn.isEnabled()
        assert panel.preview_config == config


class TestStartRename:
    """Tests for launching a batch from the panel."""

    def test_runs_with_previewed_config(self, panel):
        config = panel.current_config()
        deliver_preview(panel, config)

        panel._start_rename()

        worker = RecordingWorker.created[0]
        assert worker.config == config
        assert worker.started
        assert worker.error.connect.called

    def test_refuses_without_matching_preview(self, panel):
        deliver_preview(panel, panel.current_config())
        stale = panel.preview_config
        panel.prefix_edit.setText("trip_")
        # Simulate a preview that was never invalidated
        panel.preview_config = stale
        panel.items = build_preview(panel.files, stale)

        panel._start_rename()

        assert RecordingWorker.created == []
        assert not panel.rename_btn.isEnabled()

    def test_nothing_previewed(self, panel):
        panel._start_rename()

        assert RecordingWorker.created == []
