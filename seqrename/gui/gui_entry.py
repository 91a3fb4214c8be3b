"""
gui_entry.py - GUI Entry

Launch PySide6 GUI application
"""

import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from .. import __version__
from ..logger_helper import setup_logging
from .gui_mainwindow import MainWindow


def main(argv: Optional[List[str]] = None) -> int:
    """GUI main entry"""
    setup_logging(logging.INFO)

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication([sys.argv[0]] + list(argv or []))
    app.setApplicationName("Sequential Batch Rename")
    app.setApplicationVersion(__version__)

    # Set style
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
