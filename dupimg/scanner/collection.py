"""
Collection scanning for the scanner package.

Ties file discovery, parallel fingerprinting and the comparison sweeps
together into complete scans of a directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Callable

from ..cache import FingerprintCache
from ..config import DEFAULT_THRESHOLD, DEFAULT_WORKERS, PROGRESS_INTERVAL
from ..exceptions import InvalidPathError, InsufficientImagesError
from ..models import DuplicateScan, ScannedImage
from .comparison import compare_all_pairs, compare_one_to_many, count_combinations
from .file_discovery import find_image_files
from .parallel import load_fingerprints_parallel
from .scaling import scale_image

_logger = logging.getLogger(__name__)


def scan_directory(
    directory: str | Path,
    cache: Optional[FingerprintCache] = None,
    max_workers: int = DEFAULT_WORKERS,
    skip_errors: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
    exclude: Optional[set[str]] = None,
) -> tuple[ScannedImage, ...]:
    """
    Fingerprint every image in a directory.

    Args:
        directory: Directory containing the images
        cache: Fingerprint cache to read through (a fresh one if None)
        max_workers: Number of parallel workers
        skip_errors: Skip undecodable files instead of failing the scan
        progress_callback: Optional callback(current, total) for loading progress
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages
        exclude: Resolved paths of files to leave out

    Returns:
        Tuple of ScannedImage objects in sorted path order

    Raises:
        InvalidPathError: If the directory does not exist
        DecodeError: If an image cannot be decoded and skip_errors is False
    """
    logger = logger or _logger
    filepaths = find_image_files(directory)

    if exclude:
        filepaths = [p for p in filepaths if os.path.realpath(p) not in exclude]

    logger.info(f"Found {len(filepaths):,} image files in {directory}")
    if not filepaths:
        return ()

    logger.info("Loading and scaling images...")
    images = load_fingerprints_parallel(
        filepaths,
        cache=cache,
        max_workers=max_workers,
        skip_errors=skip_errors,
        progress_callback=progress_callback,
        show_progress=show_progress,
        logger=logger,
    )
    logger.info(f"Loaded {len(images):,} fingerprints")
    return images


def find_similar_images(
    directory: str | Path,
    single_image: Optional[str | Path] = None,
    threshold: float = DEFAULT_THRESHOLD,
    cache: Optional[FingerprintCache] = None,
    max_workers: int = DEFAULT_WORKERS,
    skip_errors: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    progress_interval: int = PROGRESS_INTERVAL,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> DuplicateScan:
    """
    Scan a directory and find similar image pairs.

    Without `single_image`, every pair of images in the directory is compared.
    With it, only the single image is compared against each directory image;
    its fingerprint is computed directly and never cached, and it is appended
    as the last entry of the returned images.

    Args:
        directory: Directory containing the images
        single_image: Optional image to compare against the directory
        threshold: Lowest similarity coefficient reported as a match
        cache: Fingerprint cache for directory images
        max_workers: Number of parallel workers
        skip_errors: Skip undecodable directory images instead of failing
        progress_callback: Optional callback(done, total) for comparison progress
        progress_interval: Number of comparisons between progress reports
        show_progress: Whether to show tqdm progress bars
        logger: Optional logger for status messages

    Returns:
        DuplicateScan with images, matches and the comparison count

    Raises:
        InvalidPathError: If the directory or the single image does not exist
        DecodeError: If an image cannot be decoded (see skip_errors)
        InsufficientImagesError: If there are not enough images to compare
    """
    logger = logger or _logger

    if single_image is None:
        images = scan_directory(
            directory,
            cache=cache,
            max_workers=max_workers,
            skip_errors=skip_errors,
            show_progress=show_progress,
            logger=logger,
        )
        if len(images) < 2:
            raise InsufficientImagesError(len(images), 2)

        logger.info(f"Comparing {count_combinations(len(images)):,} image pairs...")
        matches = compare_all_pairs(
            [img.fingerprint for img in images],
            threshold=threshold,
            progress_callback=progress_callback,
            progress_interval=progress_interval,
            show_progress=show_progress,
        )
        return DuplicateScan(
            images=images,
            matches=matches,
            comparisons=count_combinations(len(images)),
            mode="all-pairs",
        )

    single_image = str(single_image)
    if not os.path.isfile(single_image):
        raise InvalidPathError(single_image, "The specified single image file does not exist")

    images = scan_directory(
        directory,
        cache=cache,
        max_workers=max_workers,
        skip_errors=skip_errors,
        show_progress=show_progress,
        logger=logger,
        exclude={os.path.realpath(single_image)},
    )
    if len(images) < 1:
        raise InsufficientImagesError(len(images), 1)

    extra = ScannedImage(path=single_image, fingerprint=scale_image(single_image))

    logger.info(f"Comparing {extra.filename} against {len(images):,} images...")
    matches = compare_one_to_many(
        [img.fingerprint for img in images],
        extra.fingerprint,
        threshold=threshold,
        progress_callback=progress_callback,
        progress_interval=progress_interval,
        show_progress=show_progress,
    )
    return DuplicateScan(
        images=images + (extra,),
        matches=matches,
        comparisons=len(images),
        mode="one-vs-many",
    )


__all__ = ['scan_directory', 'find_similar_images']
