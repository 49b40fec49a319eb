"""
File discovery module for the scanner package.

Provides functionality to find and enumerate the image files of a single
directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import IMAGE_EXTENSIONS
from ..exceptions import InvalidPathError


def is_image_file(filename: str) -> bool:
    """Check a file name against the image extensions (case-sensitive)."""
    return filename.endswith(IMAGE_EXTENSIONS)


def find_image_files(directory: str | Path) -> list[str]:
    """
    Find all image files directly inside the given directory.

    Args:
        directory: Directory path to search for images

    Returns:
        Sorted list of file paths as strings

    Raises:
        InvalidPathError: If the directory does not exist

    Notes:
        - Subdirectories are not searched; each directory has its own
          fingerprint cache directory next to it
        - Extensions are matched case-sensitively, 'photo.PNG' is skipped
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise InvalidPathError(directory, "Invalid source directory path")

    images = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_file() and is_image_file(entry.name):
                images.append(str(directory / entry.name))

    images.sort()
    return images


__all__ = ['is_image_file', 'find_image_files']
