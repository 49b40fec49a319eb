"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
dupimg command-line interface. Defaults come from the user configuration.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ..user_config import get_user_config


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    config = get_user_config()

    parser = argparse.ArgumentParser(
        prog='dupimg',
        description='Find visually duplicate images and choose which copy to keep',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /path/to/photos
      Compare all images with each other and ask what to do with each pair

  %(prog)s /path/to/photos /path/to/new.jpg
      Find images in the directory that are similar to new.jpg

  %(prog)s /path/to/photos --action report --export pairs.csv --export-format csv
      Only list similar pairs and export them for review

  %(prog)s /path/to/photos --action delete --dry-run
      Show which duplicates would be deleted

Fingerprints are cached in a '<directory>_scaled' folder next to the
scanned directory.
        """
    )

    # Positional arguments
    parser.add_argument(
        'directory',
        type=Path,
        nargs='?',
        default=None,
        help='Directory to scan for duplicate images'
    )

    parser.add_argument(
        'single_image',
        type=Path,
        nargs='?',
        default=None,
        help='Optional image to compare against the images of the directory'
    )

    # Scanning options
    parser.add_argument(
        '-t', '--threshold',
        type=float,
        default=config.default_threshold,
        help=f'Lowest similarity (0.0-1.0) reported as a duplicate. Default: {config.default_threshold}'
    )

    parser.add_argument(
        '--no-cache',
        action='store_true',
        default=not config.use_cache,
        help='Do not read or write the fingerprint cache'
    )

    parser.add_argument(
        '--skip-errors',
        action='store_true',
        default=config.skip_decode_errors,
        help='Skip images that cannot be decoded instead of aborting'
    )

    # Action options
    parser.add_argument(
        '-a', '--action',
        choices=['prompt', 'report', 'delete'],
        default='prompt',
        help='prompt: ask for every pair; report: list pairs only; '
             'delete: delete every duplicate. Default: prompt'
    )

    parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Do not ask for confirmation before --action delete'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Log deletions instead of performing them'
    )

    # Performance options
    parser.add_argument(
        '-w', '--workers',
        type=int,
        default=config.default_workers,
        help=f'Number of parallel workers. Default: {config.default_workers}'
    )

    # Export options
    parser.add_argument(
        '-e', '--export',
        type=Path,
        help='Export similar pairs to file'
    )

    parser.add_argument(
        '--export-format',
        choices=['txt', 'csv'],
        default='txt',
        help='Export format. Default: txt'
    )

    # Output options
    parser.add_argument(
        '--progress-interval',
        type=int,
        default=config.progress_interval,
        help=f'Log comparison progress every N pairs. Default: {config.progress_interval}'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['/path/to/photos', '--threshold', '0.95'])
        >>> args.directory
        PosixPath('/path/to/photos')
        >>> args.threshold
        0.95
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
