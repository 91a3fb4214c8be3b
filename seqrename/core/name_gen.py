"""
name_gen.py - Sequential Filename Generation

prefix + zero-padded number + optional original extension
"""

from typing import List

from .errors import ConfigurationError, Err, Ok, Result
from .models_fs import FileRef, GeneratedName, RenameConfig


def format_number(number: int, digit_count: int) -> str:
    """Zero-pad number to digit_count; wider numbers are kept whole"""
    return str(number).zfill(digit_count)


def generate(file: FileRef, config: RenameConfig, index: int) -> Result[str, ConfigurationError]:
    """
    Generate the new filename for one file

    Args:
        file: Source file
        config: Rename configuration
        index: 0-based position of the file in the sorted batch

    Returns:
        Ok(filename) or Err(ConfigurationError) if config is invalid
    """
    if index < 0:
        raise ValueError(f"Index must be non-negative: {index}")

    error = config.validation_error()
    if error is not None:
        return Err(ConfigurationError(error))

    name = f"{config.prefix}{format_number(config.start_number + index, config.digit_count)}"

    extension = file.extension
    if config.preserve_extension and extension:
        name = f"{name}.{extension}"

    return Ok(name)


def generate_all(files: List[FileRef], config: RenameConfig) -> Result[List[GeneratedName], ConfigurationError]:
    """
    Generate names for an already sorted batch

    Args:
        files: Files in their final order
        config: Rename configuration

    Returns:
        Ok(list of GeneratedName) or Err(ConfigurationError)
    """
    error = config.validation_error()
    if error is not None:
        return Err(ConfigurationError(error))

    names = []
    for index, file in enumerate(files):
        names.append(GeneratedName(name=generate(file, config, index).unwrap(), index=index, source=file))
    return Ok(names)
