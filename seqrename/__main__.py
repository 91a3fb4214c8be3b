"""
Sequential Batch Rename Tool - Main Entry

Supports:
- GUI mode (default startup)
- CLI mode (--cli or -c parameter)

Usage:
    python -m seqrename                                  # GUI mode (default)
    python -m seqrename --cli preview ./dir --prefix a_  # CLI command mode
    python -m seqrename -c rename ./dir --prefix a_ -y   # CLI command mode
"""

import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = list(sys.argv[1:] if argv is None else argv)

    # Check if CLI should be started
    if "--cli" in args or "-c" in args:
        from .cli import main as cli_main
        return cli_main([arg for arg in args if arg not in ("--cli", "-c")])

    # Default to starting GUI
    try:
        from .gui import main as gui_main
    except ImportError as e:
        print(f"Error: Unable to start GUI, please ensure PySide6 is installed")
        print(f"Detailed error: {e}")
        print("\nInstall command: pip install PySide6")
        print("\nTo use CLI mode, run:")
        print("    python -m seqrename --cli")
        print("or  seqrename --help")
        return 1
    return gui_main(args)


if __name__ == "__main__":
    sys.exit(main())
