"""
Input validation for dupimg.

Provides validators for file accessibility and scan parameters.
"""

from __future__ import annotations

import os
from typing import Optional


def validate_file_accessible(filepath: str) -> tuple[bool, str]:
    """
    Validate that a file exists and is accessible before operations.

    Args:
        filepath: Path to validate

    Returns:
        Tuple of (is_valid, error_message)
        - (True, "") if file is accessible
        - (False, error_message) if file is not accessible

    Examples:
        >>> validate_file_accessible('/nonexistent/file.jpg')
        (False, 'File does not exist')
    """
    if not os.path.exists(filepath):
        return False, "File does not exist"

    if not os.path.isfile(filepath):
        return False, "Path is not a file"

    if not os.access(filepath, os.R_OK):
        return False, "File is not readable (permission denied)"

    try:
        with open(filepath, 'rb'):
            pass
    except PermissionError:
        return False, "File is locked by another process"
    except OSError as e:
        return False, f"Cannot access file: {e}"

    return True, ""


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is readable.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Invalid source directory path: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.isdir(directory):
        return False, f"Invalid source directory path: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_threshold(threshold: float) -> tuple[bool, str]:
    """
    Validate that a similarity threshold is within [0, 1].

    Examples:
        >>> validate_threshold(0.9)
        (True, '')
        >>> validate_threshold(90)
        (False, 'Threshold must be between 0.0 and 1.0')
    """
    try:
        threshold = float(threshold)
    except (ValueError, TypeError):
        return False, "Threshold must be a number"

    if not 0.0 <= threshold <= 1.0:
        return False, "Threshold must be between 0.0 and 1.0"
    return True, ""


def validate_scan_params(
    directory: str,
    single_image: Optional[str] = None,
    threshold: Optional[float] = None,
    workers: Optional[int] = None,
) -> tuple[bool, str]:
    """
    Validate all scan parameters.

    Args:
        directory: Directory to scan
        single_image: Optional image compared against the directory
        threshold: Similarity threshold (optional)
        workers: Number of worker threads (optional)

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_directory(directory)
    if not is_valid:
        return False, error

    if single_image and not os.path.isfile(single_image):
        return False, f"The specified single image file does not exist: {single_image}"

    if threshold is not None:
        is_valid, error = validate_threshold(threshold)
        if not is_valid:
            return False, error

    if workers is not None:
        try:
            workers = int(workers)
            if not 1 <= workers <= 64:
                return False, "Workers must be between 1 and 64"
        except (ValueError, TypeError):
            return False, "Workers must be an integer"

    return True, ""


__all__ = [
    'validate_file_accessible',
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
]
