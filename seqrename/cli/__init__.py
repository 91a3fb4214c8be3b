"""
cli - Command Line Interface for Sequential Batch Renaming
"""

from .cli_entry import main

__all__ = ["main"]
