"""
gui - PySide6 front end for sequential batch renaming
"""

from .gui_entry import main

__all__ = ["main"]
