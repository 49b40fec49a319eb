"""
Duplicate resolution for dupimg.

Decides which image of a similar pair is the original and which the
duplicate, and walks matches with a decision collaborator.

Ordering rules for a pair (a, b) of a Match:
1. The image with the strictly larger source resolution is the original
2. On equal resolution, the strictly larger file is the original
3. On a full tie, image a (the first index) is the original
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Iterator, Optional, Sequence

from .models import Decision, Match, ResolvedPair, ScannedImage, WalkStats
from .utils.validators import validate_file_accessible

_logger = logging.getLogger(__name__)

Decider = Callable[[ResolvedPair], Decision]


def resolve_match(match: Match, images: Sequence[ScannedImage]) -> Optional[ResolvedPair]:
    """
    Resolve a match into an original/duplicate pair.

    Args:
        match: Match to resolve
        images: Scanned images the match indexes into

    Returns:
        ResolvedPair, or None if either file no longer exists
    """
    first = images[match.index_a]
    second = images[match.index_b]

    try:
        size_first = os.path.getsize(first.path)
        size_second = os.path.getsize(second.path)
    except OSError:
        return None

    res_first = first.fingerprint.resolution
    res_second = second.fingerprint.resolution

    first_is_duplicate = (
        res_second > res_first or
        (res_second == res_first and size_second > size_first)
    )

    if first_is_duplicate:
        original, duplicate = second, first
        size_original, size_duplicate = size_second, size_first
    else:
        original, duplicate = first, second
        size_original, size_duplicate = size_first, size_second

    return ResolvedPair(
        original_path=original.path,
        duplicate_path=duplicate.path,
        original_file_size=size_original,
        duplicate_file_size=size_duplicate,
        original_dimensions=original.fingerprint.source_size,
        duplicate_dimensions=duplicate.fingerprint.source_size,
        coefficient=match.coefficient,
    )


def resolve_matches(
    matches: Iterable[Match],
    images: Sequence[ScannedImage],
) -> Iterator[ResolvedPair]:
    """
    Lazily resolve matches in order, skipping pairs with a missing file.

    File existence is checked when each match is reached, so deletions made
    while consuming earlier pairs are taken into account.
    """
    for match in matches:
        pair = resolve_match(match, images)
        if pair is not None:
            yield pair


def _delete_file(path: str, dry_run: bool, logger: logging.Logger) -> bool:
    """
    Delete a file chosen by the collaborator.

    Returns:
        True if the file was deleted (or would be in dry-run mode), False if
        it was already gone

    Raises:
        OSError: If the file exists but cannot be deleted
    """
    if not os.path.exists(path):
        # The collaborator removed it already
        return False

    if dry_run:
        logger.info(f"[DRY RUN] Would delete: {path}")
        return True

    is_valid, error_msg = validate_file_accessible(path)
    if not is_valid:
        raise PermissionError(f"Cannot delete {path}: {error_msg}")

    os.remove(path)
    logger.info(f"Deleted: {path}")
    return True


def walk_matches(
    matches: Iterable[Match],
    images: Sequence[ScannedImage],
    decide: Decider,
    dry_run: bool = False,
    logger: Optional[logging.Logger] = None,
) -> WalkStats:
    """
    Present each match to a collaborator and carry out its decision.

    Args:
        matches: Matches in discovery order
        images: Scanned images the matches index into
        decide: Collaborator returning a Decision for each presented pair
        dry_run: If True, log deletions instead of performing them
        logger: Optional logger instance

    Returns:
        WalkStats with the outcome of the walk

    Notes:
        - Pairs whose files vanished (e.g. deleted by an earlier decision)
          are skipped without being presented; in dry-run mode files marked
          for deletion count as vanished
        - ABORT_REMAINING stops the walk; no further pair is presented
        - A collaborator may delete the chosen file itself before returning
    """
    logger = logger or _logger
    stats = WalkStats()
    removed: set[str] = set()

    for match in matches:
        if images[match.index_a].path in removed or images[match.index_b].path in removed:
            stats.skipped += 1
            continue

        pair = resolve_match(match, images)
        if pair is None:
            stats.skipped += 1
            continue

        stats.presented += 1
        decision = Decision(decide(pair))

        if decision is Decision.ABORT_REMAINING:
            stats.aborted = True
            logger.info("Resolution aborted, remaining pairs were not presented")
            break

        if decision is Decision.KEEP_BOTH:
            stats.kept += 1
            continue

        if decision is Decision.DELETE_ORIGINAL:
            target, target_size = pair.original_path, pair.original_file_size
        else:
            target, target_size = pair.duplicate_path, pair.duplicate_file_size

        try:
            _delete_file(target, dry_run, logger)
            stats.deleted += 1
            stats.space_freed += target_size
            removed.add(target)
        except OSError as e:
            stats.errors += 1
            stats.error_details.append({'path': target, 'error': str(e)})
            logger.error(f"Error deleting {target}: {e}")

    return stats


__all__ = [
    'Decider',
    'resolve_match',
    'resolve_matches',
    'walk_matches',
]
