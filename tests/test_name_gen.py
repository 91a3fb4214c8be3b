"""Tests for sequential filename generation."""

import pytest

from conftest import make_file
from seqrename.core import ConfigurationError, Err, Ok, RenameConfig
from seqrename.core.name_gen import format_number, generate, generate_all


class TestGenerate:
    """Tests for generate()."""

    def test_pads_number_and_keeps_extension_case(self, vac_config):
        """Test prefix + padded number + original extension."""
        assert generate(make_file("photo.JPG"), vac_config, 0) == Ok("vac_001.JPG")

    def test_number_overflows_padding(self, vac_config):
        """Test that wide numbers are not truncated."""
        assert generate(make_file("photo.JPG"), vac_config, 999) == Ok("vac_1000.JPG")

    def test_start_number_offsets_index(self):
        """Test start number is added to the index."""
        config = RenameConfig(prefix="img", start_number=41, digit_count=2)

        assert generate(make_file("a.png"), config, 1).value == "img42.png"

    def test_extension_dropped_when_not_preserved(self):
        """Test preserve_extension=False."""
        config = RenameConfig(prefix="doc_", preserve_extension=False)

        assert generate(make_file("report.pdf"), config, 0).value == "doc_001"

    def test_file_without_extension(self, vac_config):
        """Test a file with no dot keeps no extension."""
        assert generate(make_file("README"), vac_config, 2).value == "vac_003"

    def test_only_last_extension_is_kept(self, vac_config):
        """Test multi-dot names keep the text after the last dot."""
        assert generate(make_file("archive.tar.gz"), vac_config, 0).value == "vac_001.gz"

    def test_trailing_dot_has_no_extension(self, vac_config):
        """Test a name ending in a dot has an empty extension."""
        assert generate(make_file("odd."), vac_config, 0).value == "vac_001"

    def test_invalid_config_returns_error(self):
        """Test that an invalid config is reported, not raised."""
        config = RenameConfig(prefix="")

        result = generate(make_file("a.jpg"), config, 0)

        assert isinstance(result, Err)
        assert result.error == ConfigurationError("Prefix cannot be empty")

    def test_does_not_validate_generated_name(self):
        """Test generation is independent from name validation."""
        config = RenameConfig(prefix="x" * 300)

        result = generate(make_file("a.jpg"), config, 0)

        assert result.is_ok
        assert len(result.value) > 255

    def test_negative_index_raises(self, vac_config):
        """Test a negative index is a programming error."""
        with pytest.raises(ValueError):
            generate(make_file("a.jpg"), vac_config, -1)


class TestGenerateAll:
    """Tests for generate_all()."""

    def test_generates_in_order(self, vac_config):
        files = [make_file("b.jpg"), make_file("a.png")]

        names = generate_all(files, vac_config).unwrap()

        assert [n.name for n in names] == ["vac_001.jpg", "vac_002.png"]
        assert [n.index for n in names] == [0, 1]
        assert [n.source for n in names] == files

    def test_invalid_config(self):
        result = generate_all([make_file("a.jpg")], RenameConfig(prefix="x", digit_count=11))

        assert result.is_err
        assert "Digit count" in result.error.message


class TestFormatNumber:
    """Tests for format_number()."""

    @pytest.mark.parametrize(
        "number,digits,expected",
        [(1, 3, "001"), (0, 1, "0"), (12345, 3, "12345"), (7, 10, "0000000007")],
    )
    def test_format_number(self, number, digits, expected):
        assert format_number(number, digits) == expected
