"""Tests for the local file port."""

import os

import pytest

from seqrename.core import FileRef, MutationErrorKind
from seqrename.core.file_port import LocalFilePort, TEMP_PREFIX, is_temp_name


@pytest.fixture
def case_sensitive_dir(tmp_path):
    """tmp_path, skipping the test on case-insensitive filesystems."""
    (tmp_path / "marker").write_text("x")
    sensitive = not (tmp_path / "MARKER").exists()
    (tmp_path / "marker").unlink()
    if not sensitive:
        pytest.skip("Filesystem is case-insensitive")
    return tmp_path


def touch(directory, name, content="data"):
    path = directory / name
    path.write_text(content)
    return FileRef.from_path(path)


class TestRenameFile:
    """Tests for LocalFilePort.rename_file()."""

    def test_renames_in_place(self, tmp_path):
        file = touch(tmp_path, "photo.jpg")

        result = LocalFilePort(case_insensitive=False).rename_file(file, "vac_001.jpg")

        assert result.is_ok
        renamed = result.value
        assert renamed.name == "vac_001.jpg"
        assert renamed.location == tmp_path
        assert renamed.id == str(tmp_path / "vac_001.jpg")
        assert (tmp_path / "vac_001.jpg").read_text() == "data"
        assert not (tmp_path / "photo.jpg").exists()

    def test_refuses_to_overwrite(self, tmp_path):
        file = touch(tmp_path, "a.jpg", "a")
        touch(tmp_path, "b.jpg", "b")

        result = LocalFilePort(case_insensitive=False).rename_file(file, "b.jpg")

        assert result.is_err
        assert result.error.kind is MutationErrorKind.OTHER
        assert result.error.message.startswith("Target already exists")
        assert (tmp_path / "a.jpg").read_text() == "a"
        assert (tmp_path / "b.jpg").read_text() == "b"

    def test_missing_source(self, tmp_path):
        file = touch(tmp_path, "gone.jpg")
        (tmp_path / "gone.jpg").unlink()

        result = LocalFilePort().rename_file(file, "new.jpg")

        assert result.is_err
        assert result.error.kind is MutationErrorKind.NOT_FOUND

    def test_case_only_rename(self, tmp_path):
        file = touch(tmp_path, "photo.jpg")

        result = LocalFilePort().rename_file(file, "PHOTO.jpg")

        assert result.is_ok
        assert os.listdir(tmp_path) == ["PHOTO.jpg"]

    def test_case_only_rename_does_not_clobber_other_file(self, case_sensitive_dir):
        file = touch(case_sensitive_dir, "photo.jpg", "lower")
        touch(case_sensitive_dir, "PHOTO.jpg", "upper")

        result = LocalFilePort(case_insensitive=False).rename_file(file, "PHOTO.jpg")

        assert result.is_err
        assert (case_sensitive_dir / "photo.jpg").read_text() == "lower"
        assert (case_sensitive_dir / "PHOTO.jpg").read_text() == "upper"

    def test_os_error_is_mapped(self, tmp_path, monkeypatch):
        file = touch(tmp_path, "a.jpg")

        def deny(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(os, "rename", deny)
        result = LocalFilePort().rename_file(file, "b.jpg")

        assert result.is_err
        assert result.error.kind is MutationErrorKind.PERMISSION_DENIED

    def test_failed_case_only_rename_restores_original(self, tmp_path, monkeypatch):
        """Test the temporary name is rolled back when the second step fails."""
        file = touch(tmp_path, "photo.jpg")
        real_rename = os.rename

        def fail_on_final_name(src, dst):
            if os.path.basename(str(dst)) == "PHOTO.jpg":
                raise PermissionError(13, "Permission denied")
            real_rename(src, dst)

        monkeypatch.setattr(os, "rename", fail_on_final_name)
        result = LocalFilePort().rename_file(file, "PHOTO.jpg")

        assert result.is_err
        assert os.listdir(tmp_path) == ["photo.jpg"]


class TestNameExists:
    """Tests for LocalFilePort.name_exists()."""

    def test_exact_match(self, tmp_path):
        touch(tmp_path, "vac_001.jpg")

        assert LocalFilePort(case_insensitive=False).name_exists(tmp_path, "vac_001.jpg")
        assert not LocalFilePort(case_insensitive=False).name_exists(tmp_path, "vac_002.jpg")

    def test_case_insensitive_match(self, tmp_path):
        touch(tmp_path, "VAC_001.JPG")

        assert LocalFilePort(case_insensitive=True).name_exists(tmp_path, "vac_001.jpg")

    def test_case_sensitive_match(self, case_sensitive_dir):
        touch(case_sensitive_dir, "VAC_001.JPG")

        assert not LocalFilePort(case_insensitive=False).name_exists(case_sensitive_dir, "vac_001.jpg")

    def test_missing_directory(self, tmp_path):
        assert not LocalFilePort(case_insensitive=True).name_exists(tmp_path / "missing", "a.jpg")
        assert not LocalFilePort(case_insensitive=False).name_exists(tmp_path / "missing", "a.jpg")


class TestTempNames:
    """Tests for temporary rename names."""

    def test_is_temp_name(self):
        assert is_temp_name(f"{TEMP_PREFIX}1a2b3c4d__photo.jpg")
        assert not is_temp_name("photo.jpg")
