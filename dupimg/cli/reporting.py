"""
Report formatting and display for the CLI interface.

Provides functions to print duplicate pairs and scan summaries in a
human-readable format.
"""

from __future__ import annotations

from ..models import DuplicateScan, ResolvedPair, WalkStats
from ..utils.formatters import (
    compare_marker,
    format_similarity,
    format_size,
)


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def print_pair(pair: ResolvedPair) -> None:
    """
    Print information about a discovered duplicate pair.

    The (+)/(-)/(=) markers show which side has the higher resolution and
    the larger file.
    """
    original_pixels = pair.original_dimensions[0] * pair.original_dimensions[1]
    duplicate_pixels = pair.duplicate_dimensions[0] * pair.duplicate_dimensions[1]

    print("\nDuplicate image found!")
    print(f"Original:   {pair.original_path}")
    print(f"            {pair.original_resolution} "
          f"{compare_marker(original_pixels, duplicate_pixels)} | "
          f"{format_size(pair.original_file_size)} "
          f"{compare_marker(pair.original_file_size, pair.duplicate_file_size)}")
    print(f"Duplicate:  {pair.duplicate_path}")
    print(f"            {pair.duplicate_resolution} "
          f"{compare_marker(duplicate_pixels, original_pixels)} | "
          f"{format_size(pair.duplicate_file_size)} "
          f"{compare_marker(pair.duplicate_file_size, pair.original_file_size)}")
    print(f"Similarity: {format_similarity(pair.similarity_percent)}")


def print_scan_summary(scan: DuplicateScan) -> None:
    """Print the header of a duplicate report."""
    print("\n" + "=" * 70)
    print("DUPLICATE IMAGE REPORT")
    print("=" * 70)
    print(f"\nImages scanned: {len(scan.images):,}")
    print(f"Comparisons ({scan.mode}): {scan.comparisons:,}")
    print(f"Similar pairs found: {scan.match_count:,}")


def print_walk_summary(stats: WalkStats, dry_run: bool = False) -> None:
    """Print the outcome of the resolution walk."""
    _print_section_header("SUMMARY")
    print(f"Pairs presented: {stats.presented:,}")
    print(f"Kept both: {stats.kept:,}")
    print(f"Files {'that would be ' if dry_run else ''}deleted: {stats.deleted:,}")
    if stats.skipped:
        print(f"Skipped (file no longer exists): {stats.skipped:,}")
    if stats.errors:
        print(f"Errors: {stats.errors:,}")
    print(f"Space {'that would be ' if dry_run else ''}freed: {stats.space_freed_formatted}")
    if stats.aborted:
        print("Aborted before all pairs were presented.")


__all__ = [
    'print_pair',
    'print_scan_summary',
    'print_walk_summary',
]
