"""
Export functionality for dupimg.

Provides functions to export resolved duplicate pairs to TXT and CSV files.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from ..models import ResolvedPair
from .formatters import format_similarity, format_size


def _export_txt(pairs: list[ResolvedPair], file_handle: TextIO) -> None:
    """
    Export duplicate pairs to TXT format.

    Args:
        pairs: Resolved duplicate pairs
        file_handle: Open file handle to write to
    """
    file_handle.write("DUPLICATE IMAGE REPORT\n")
    file_handle.write("=" * 70 + "\n")

    for i, pair in enumerate(pairs, 1):
        file_handle.write(f"\nPair {i} (similarity {format_similarity(pair.similarity_percent)}):\n")
        file_handle.write(
            f"  [ORIGINAL]  {pair.original_path} "
            f"({pair.original_resolution}, {format_size(pair.original_file_size)})\n"
        )
        file_handle.write(
            f"  [DUPLICATE] {pair.duplicate_path} "
            f"({pair.duplicate_resolution}, {format_size(pair.duplicate_file_size)})\n"
        )


def _export_csv(pairs: list[ResolvedPair], file_handle: TextIO) -> None:
    """
    Export duplicate pairs to CSV format.

    Args:
        pairs: Resolved duplicate pairs
        file_handle: Open file handle to write to

    Notes:
        CSV includes: pair_id, similarity, original_path, original_resolution,
                     original_file_size, duplicate_path, duplicate_resolution,
                     duplicate_file_size
    """
    file_handle.write(
        "pair_id,similarity,original_path,original_resolution,original_file_size,"
        "duplicate_path,duplicate_resolution,duplicate_file_size\n"
    )

    for i, pair in enumerate(pairs, 1):
        row = pair.to_dict()
        file_handle.write(
            f'{i},{row["similarity"]:.4f},"{row["original_path"]}",{row["original_resolution"]},'
            f'{row["original_file_size"]},"{row["duplicate_path"]}",{row["duplicate_resolution"]},'
            f'{row["duplicate_file_size"]}\n'
        )


def export_results(
    pairs: list[ResolvedPair],
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export resolved duplicate pairs to a file.

    Args:
        pairs: Resolved duplicate pairs
        output_path: Path to output file
        export_format: Export format ('txt' or 'csv'). Default: 'txt'

    Raises:
        ValueError: If export_format is not 'txt' or 'csv'
        IOError: If file cannot be written

    Examples:
        >>> export_results(pairs, Path('results.csv'), 'csv')
    """
    if export_format not in ('txt', 'csv'):
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt' or 'csv'.")

    with open(output_path, 'w', encoding='utf-8') as f:
        if export_format == 'txt':
            _export_txt(pairs, f)
        elif export_format == 'csv':
            _export_csv(pairs, f)


__all__ = ['export_results']
