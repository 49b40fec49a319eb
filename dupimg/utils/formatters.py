"""
Formatting utilities for dupimg.

Provides human-readable formatting for file sizes, similarity percentages and
the comparison markers shown next to duplicate pairs.
"""

from __future__ import annotations

# Re-export format_size from models for convenience
from ..models import format_size


def format_similarity(percent: float) -> str:
    """
    Format a similarity percentage with at most two decimals.

    Examples:
        >>> format_similarity(98.766)
        '98.77%'
        >>> format_similarity(100.0)
        '100%'
    """
    text = f"{percent:.2f}".rstrip('0').rstrip('.')
    return f"{text}%"


def compare_marker(value: int, other: int) -> str:
    """
    Mark whether a value is higher, lower or equal to another.

    Used to highlight which side of a duplicate pair has the larger
    resolution or file size.
    """
    if value > other:
        return "(+)"
    if value < other:
        return "(-)"
    return "(=)"


__all__ = [
    'format_similarity',
    'compare_marker',
    'format_size',
]
