"""
Comparison sweeps for the scanner package.

Provides the all-pairs sweep over a collection and the one-vs-many sweep of a
single extra image against a collection. Both are single-threaded and report
progress through an optional callback.
"""

from __future__ import annotations

import logging
from typing import Optional, Callable, Any, Sequence

from ..config import DEFAULT_THRESHOLD, PROGRESS_INTERVAL
from ..models import Fingerprint, Match
from .dependencies import HAS_TQDM, _tqdm_class
from .similarity import score

logger = logging.getLogger(__name__)

Scorer = Callable[[Fingerprint, Fingerprint], float]


def count_combinations(n: int) -> int:
    """
    Number of unordered pairs among n images.

    Examples:
        >>> count_combinations(5)
        10
    """
    if n < 2:
        return 0
    return n * (n - 1) // 2


class _ProgressReporter:
    """Forwards sweep progress to a callback and an optional tqdm bar."""

    def __init__(
        self,
        total: int,
        desc: str,
        progress_callback: Optional[Callable[[int, int], None]],
        progress_interval: int,
        show_progress: bool,
    ):
        self.total = total
        self.done = 0
        self.callback = progress_callback
        self.interval = max(1, progress_interval)
        self.pbar: Optional[Any] = None
        if HAS_TQDM and show_progress and total > 1000 and _tqdm_class is not None:
            self.pbar = _tqdm_class(total=total, desc=desc, unit="cmp", ncols=80)

    def step(self) -> None:
        self.done += 1
        is_last = self.done == self.total
        if self.pbar is not None and (self.done % 1000 == 0 or is_last):
            self.pbar.update(self.done - self.pbar.n)
        if self.callback and (self.done % self.interval == 0 or is_last):
            self.callback(self.done, self.total)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()


def compare_all_pairs(
    fingerprints: Sequence[Fingerprint],
    threshold: float = DEFAULT_THRESHOLD,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    progress_interval: int = PROGRESS_INTERVAL,
    show_progress: bool = True,
    scorer: Scorer = score,
) -> list[Match]:
    """
    Compare every unordered pair of fingerprints.

    Args:
        fingerprints: Fingerprints to compare, indexed by position
        threshold: Lowest coefficient reported as a match
        progress_callback: Optional callback(done, total), called every
            `progress_interval` comparisons and after the last one
        progress_interval: Number of comparisons between progress reports
        show_progress: Whether to show tqdm progress bar
        scorer: Similarity function

    Returns:
        Matches with index_a < index_b, in discovery order
    """
    n = len(fingerprints)
    total = count_combinations(n)
    progress = _ProgressReporter(
        total, "Comparing images", progress_callback, progress_interval, show_progress
    )

    matches = []
    try:
        for i in range(n - 1):
            for j in range(i + 1, n):
                coefficient = scorer(fingerprints[i], fingerprints[j])
                if coefficient >= threshold:
                    matches.append(Match(i, j, coefficient))
                progress.step()
    finally:
        progress.close()

    logger.debug(f"Compared {total:,} pairs, {len(matches):,} above {threshold:.2f}")
    return matches


def compare_one_to_many(
    fingerprints: Sequence[Fingerprint],
    extra: Fingerprint,
    threshold: float = DEFAULT_THRESHOLD,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    progress_interval: int = PROGRESS_INTERVAL,
    show_progress: bool = True,
    scorer: Scorer = score,
) -> list[Match]:
    """
    Compare one extra fingerprint against each fingerprint of a collection.

    The extra image is treated as if it were appended to the collection, so
    every match is Match(i, len(fingerprints), coefficient) and the extra
    image is always the second element of the pair.

    Args:
        fingerprints: Fingerprints of the collection
        extra: Fingerprint of the image that is not part of the collection
        threshold: Lowest coefficient reported as a match
        progress_callback: Optional callback(done, total)
        progress_interval: Number of comparisons between progress reports
        show_progress: Whether to show tqdm progress bar
        scorer: Similarity function

    Returns:
        Matches in collection order
    """
    n = len(fingerprints)
    progress = _ProgressReporter(
        n, "Comparing images", progress_callback, progress_interval, show_progress
    )

    matches = []
    try:
        for i in range(n):
            coefficient = scorer(extra, fingerprints[i])
            if coefficient >= threshold:
                matches.append(Match(i, n, coefficient))
            progress.step()
    finally:
        progress.close()

    logger.debug(f"Compared {n:,} images, {len(matches):,} above {threshold:.2f}")
    return matches


__all__ = [
    'count_combinations',
    'compare_all_pairs',
    'compare_one_to_many',
]
