"""
name_check.py - Filename Validation

Checks candidate filenames against the rules shared by common filesystems
(Windows being the strictest) and provides a sanitizer for front ends
"""

from dataclasses import dataclass
from typing import Optional

# Characters rejected by Windows and unsafe elsewhere
ILLEGAL_CHARS = '<>:"/\\|?*'

RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

MIN_FILENAME_LENGTH = 1
MAX_FILENAME_LENGTH = 255


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a filename check"""
    is_valid: bool
    error_message: Optional[str] = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(True, None)

    @classmethod
    def invalid(cls, message: str) -> "ValidationResult":
        return cls(False, message)


def is_control_char(char: str) -> bool:
    return ord(char) < 32


def find_illegal_char(text: str) -> Optional[str]:
    """Return the first illegal or control character in text, if any"""
    for char in text:
        if char in ILLEGAL_CHARS or is_control_char(char):
            return char
    return None


def validate(name: str) -> ValidationResult:
    """
    Validate a candidate filename

    Rules are checked in a fixed order and the first violation is reported:
    blank, illegal/control characters, reserved device name, length,
    trailing space or period, dots only.

    Args:
        name: Filename (no directory part)

    Returns:
        ValidationResult
    """
    if not name or not name.strip():
        return ValidationResult.invalid("Filename cannot be empty")

    for char in name:
        if char in ILLEGAL_CHARS:
            return ValidationResult.invalid(f"Filename contains illegal character: '{char}'")
        if is_control_char(char):
            return ValidationResult.invalid("Filename contains control character")

    # Windows treats "CON.txt" and "CON.tar.gz" like "CON"
    base = name.split(".")[0].upper()
    if base in RESERVED_NAMES:
        return ValidationResult.invalid(f"'{base}' is a reserved filename")

    if not MIN_FILENAME_LENGTH <= len(name) <= MAX_FILENAME_LENGTH:
        return ValidationResult.invalid(f"Filename is too long (max {MAX_FILENAME_LENGTH} characters)")

    if name.endswith(" ") or name.endswith("."):
        return ValidationResult.invalid("Filename cannot end with space or period")

    if all(char == "." for char in name):
        return ValidationResult.invalid("Filename cannot consist only of dots")

    return ValidationResult.valid()


def is_valid_filename(name: str) -> bool:
    return validate(name).is_valid


def sanitize_filename(name: str, replacement: str = "_") -> str:
    """
    Clean invalid characters from filename

    Args:
        name: Original filename
        replacement: Replacement character

    Returns:
        Cleaned filename
    """
    name = "".join(
        replacement if (char in ILLEGAL_CHARS or is_control_char(char)) else char
        for char in name
    )

    if name.split(".")[0].upper() in RESERVED_NAMES:
        name = f"{replacement}{name}"

    # Remove trailing spaces and dots
    name = name[:MAX_FILENAME_LENGTH].rstrip(" .")

    return name or "unnamed"
