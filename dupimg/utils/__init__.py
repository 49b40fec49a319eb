"""
Utilities package for dupimg.

Provides:
- formatters: Human-readable formatting for sizes and similarity
- validators: Input validation
- exporters: Export resolved duplicate pairs to files
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators
from . import exporters

# Export commonly used functions
from .formatters import (
    format_similarity,
    compare_marker,
    format_size,
)
from .validators import (
    validate_file_accessible,
    validate_directory,
    validate_threshold,
    validate_scan_params,
)
from .exporters import export_results

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'exporters',
    # Formatters
    'format_similarity',
    'compare_marker',
    'format_size',
    # Validators
    'validate_file_accessible',
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
    # Exporters
    'export_results',
]
