"""Shared fixtures for seqrename tests."""

import os
from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

import pytest

from seqrename.core import Err, FileMutationPort, FileRef, MutationError, Ok, RenameConfig


def make_file(name: str, size: int = 0, date_modified: float = 0.0, location: str = "/photos") -> FileRef:
    """Build a FileRef that does not exist on disk."""
    return FileRef(
        id=f"{location}/{name}",
        name=name,
        location=location,
        size=size,
        mime_type="image/jpeg",
        date_modified=date_modified,
    )


class FakePort(FileMutationPort):
    """In-memory file port that records every call."""

    def __init__(self, existing: Optional[Set[str]] = None, failures: Optional[Dict[str, MutationError]] = None):
        self.existing = {name.casefold() for name in (existing or set())}
        self.failures = failures or {}
        self.calls: List[Tuple[str, str, str]] = []

    def name_exists(self, location, candidate_name: str) -> bool:
        self.calls.append(("name_exists", str(location), candidate_name))
        return candidate_name.casefold() in self.existing

    def rename_file(self, file: FileRef, new_name: str):
        self.calls.append(("rename_file", file.name, new_name))
        if file.name in self.failures:
            return Err(self.failures[file.name])
        self.existing.discard(file.name.casefold())
        self.existing.add(new_name.casefold())
        return Ok(replace(file, name=new_name))

    @property
    def renamed(self) -> List[Tuple[str, str]]:
        return [(src, dst) for call, src, dst in self.calls if call == "rename_file"]


@pytest.fixture
def fake_port():
    return FakePort()


@pytest.fixture
def vac_config():
    return RenameConfig(prefix="vac_", start_number=1, digit_count=3, preserve_extension=True)


@pytest.fixture
def five_files():
    return [make_file(f"photo{i}.jpg", size=i * 10, date_modified=float(i)) for i in range(1, 6)]


@pytest.fixture(scope="session")
def qt_app():
    """One QApplication for every Qt test, rendered offscreen."""
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
