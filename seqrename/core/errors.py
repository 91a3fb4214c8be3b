"""
errors.py - Result Type and Error Values

Every fallible engine call returns Ok(value) or Err(error). Errors are plain
values, never raised:
- ConfigurationError: invalid RenameConfig, fatal for the whole batch
- NameValidationError: generated name rejected, file is skipped
- ConflictError: duplicate in batch or name already taken on disk
- MutationError: I/O failure reported by the file port
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class MutationErrorKind(Enum):
    """Kind of I/O failure reported by a file port"""
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    OTHER = "other"


@dataclass(frozen=True)
class ConfigurationError:
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NameValidationError:
    name: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ConflictError:
    name: str
    message: str
    colliding_index: Optional[int] = None   # Other batch index, None for on-disk conflicts

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MutationError:
    kind: MutationErrorKind
    message: str

    @classmethod
    def permission_denied(cls, message: str = "Permission denied") -> "MutationError":
        return cls(MutationErrorKind.PERMISSION_DENIED, message)

    @classmethod
    def not_found(cls, message: str = "File not found") -> "MutationError":
        return cls(MutationErrorKind.NOT_FOUND, message)

    @classmethod
    def other(cls, message: str) -> "MutationError":
        return cls(MutationErrorKind.OTHER, message)

    @classmethod
    def from_os_error(cls, exc: OSError) -> "MutationError":
        """Map an OSError onto a tagged mutation error"""
        detail = exc.strerror or str(exc)
        if isinstance(exc, PermissionError):
            return cls.permission_denied(f"Permission denied: {detail}")
        if isinstance(exc, FileNotFoundError):
            return cls.not_found(f"File not found: {detail}")
        return cls.other(detail)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful result"""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed result"""
    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Called unwrap() on an error result: {self.error}")


Result = Union[Ok[T], Err[E]]
