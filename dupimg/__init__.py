"""
dupimg
======
Finds visually duplicate images in a directory and lets you choose, pair by
pair, which copy to keep.

Features:
- Fixed-size RGB fingerprints (longest side 64 px) compared byte by byte
- All-pairs scan of a directory, or one image against a directory
- Parallel fingerprinting with an on-disk fingerprint cache
- Keeps the higher resolution (then larger) file as the original by default
- CLI with interactive, report-only and automatic modes
"""

__version__ = "1.0.0"

from .models import (
    Fingerprint,
    ScannedImage,
    Match,
    Decision,
    ResolvedPair,
    DuplicateScan,
    WalkStats,
)
from .exceptions import (
    DupImgError,
    InvalidPathError,
    DecodeError,
    CacheIOError,
    CacheFormatError,
    InsufficientImagesError,
)
from .config import IMAGE_EXTENSIONS, FINGERPRINT_SIZE, DEFAULT_THRESHOLD
from .scanner import (
    find_image_files,
    scale_image,
    score,
    count_combinations,
    compare_all_pairs,
    compare_one_to_many,
    scan_directory,
    find_similar_images,
)
from .cache import FingerprintCache, CacheStats
from .resolver import resolve_match, resolve_matches, walk_matches

__all__ = [
    "Fingerprint",
    "ScannedImage",
    "Match",
    "Decision",
    "ResolvedPair",
    "DuplicateScan",
    "WalkStats",
    "DupImgError",
    "InvalidPathError",
    "DecodeError",
    "CacheIOError",
    "CacheFormatError",
    "InsufficientImagesError",
    "IMAGE_EXTENSIONS",
    "FINGERPRINT_SIZE",
    "DEFAULT_THRESHOLD",
    "find_image_files",
    "scale_image",
    "score",
    "count_combinations",
    "compare_all_pairs",
    "compare_one_to_many",
    "scan_directory",
    "find_similar_images",
    "FingerprintCache",
    "CacheStats",
    "resolve_match",
    "resolve_matches",
    "walk_matches",
]
