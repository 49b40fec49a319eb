"""
Parallel processing module for the scanner package.

Provides parallel fingerprint loading with caching, progress tracking, and
callback support.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Callable, Any

from ..cache import FingerprintCache
from ..config import DEFAULT_WORKERS
from ..exceptions import DecodeError
from ..models import Fingerprint, ScannedImage
from .dependencies import HAS_TQDM, _tqdm_class
from .scaling import scale_image


def load_fingerprints_parallel(
    filepaths: list[str],
    cache: Optional[FingerprintCache] = None,
    max_workers: int = DEFAULT_WORKERS,
    skip_errors: bool = False,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> tuple[ScannedImage, ...]:
    """
    Get fingerprints for multiple images in parallel.

    One task per file is submitted to a thread pool and the call blocks until
    every task has finished. Results come back in the order of `filepaths`.

    Args:
        filepaths: List of image paths
        cache: Fingerprint cache to read through (a fresh one if None)
        max_workers: Number of parallel workers
        skip_errors: If True, files that fail to decode are logged and left
            out; if False, the first failure is raised after all tasks finish
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages

    Returns:
        Tuple of ScannedImage objects in input order

    Raises:
        DecodeError: If a file cannot be decoded and skip_errors is False
    """
    if not filepaths:
        return ()

    if cache is None:
        cache = FingerprintCache(scale_image)

    fingerprints: list[Optional[Fingerprint]] = [None] * len(filepaths)
    errors: dict[int, DecodeError] = {}

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=len(filepaths),
            desc="Loading images",
            unit="img",
            ncols=80,
        )

    # Batch progress callbacks to reduce overhead (every 100 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 100
    callback_interval = 1.0  # seconds

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(cache.get, path): index
            for index, path in enumerate(filepaths)
        }

        for i, future in enumerate(as_completed(futures)):
            index = futures[future]
            try:
                fingerprints[index] = future.result()
            except DecodeError as e:
                errors[index] = e

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    (i + 1) % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    i == len(filepaths) - 1  # Always callback on last item
                )
                if should_callback:
                    progress_callback(i + 1, len(filepaths))
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    if errors:
        if not skip_errors:
            raise errors[min(errors)]
        for index in sorted(errors):
            if logger:
                logger.warning(f"Skipping {filepaths[index]}: {errors[index].reason}")

    if logger and cache.enabled and cache.stats.cache_hits > 0:
        logger.info(
            f"Cache: {cache.stats.cache_hits:,} hits, {cache.stats.cache_misses:,} misses "
            f"({cache.stats.hit_rate:.1f}% hit rate)"
        )

    return tuple(
        ScannedImage(path=path, fingerprint=fp)
        for path, fp in zip(filepaths, fingerprints)
        if fp is not None
    )


__all__ = ['load_fingerprints_parallel']
