"""
Cache location helpers.

Fingerprints for images in `<parent>/<name>` live in the sibling directory
`<parent>/<name>_scaled`, one file per image named after the image's stem.
"""

from __future__ import annotations

from pathlib import Path

from ..config import SCALED_DIR_SUFFIX, FINGERPRINT_EXTENSION
from ..exceptions import InvalidPathError


def _suffixed_directory(directory: Path) -> Path:
    """Append the scaled suffix to the last segment of a directory path."""
    if not directory.name:
        raise InvalidPathError(directory, "Directory has no name to derive a cache directory from")
    return directory.with_name(directory.name + SCALED_DIR_SUFFIX)


def scaled_directory_for(directory: str | Path) -> Path:
    """
    Get the cache directory for a source directory.

    Args:
        directory: Existing source directory

    Returns:
        Absolute path of the sibling cache directory

    Raises:
        InvalidPathError: If the directory does not exist or is a filesystem root

    Examples:
        >>> scaled_directory_for('/photos/holiday')
        PosixPath('/photos/holiday_scaled')
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise InvalidPathError(directory)
    return _suffixed_directory(directory.absolute())


def fingerprint_path_for(filepath: str | Path) -> Path:
    """
    Get the cache file location for a source image.

    Args:
        filepath: Existing source image file

    Returns:
        Absolute path of the serialized fingerprint

    Raises:
        InvalidPathError: If the file does not exist or sits in a filesystem root

    Examples:
        >>> fingerprint_path_for('/photos/holiday/beach.jpg')
        PosixPath('/photos/holiday_scaled/beach.dat')
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise InvalidPathError(filepath)
    filepath = filepath.absolute()
    scaled_dir = _suffixed_directory(filepath.parent)
    return scaled_dir / (filepath.stem + FINGERPRINT_EXTENSION)


__all__ = ['scaled_directory_for', 'fingerprint_path_for']
