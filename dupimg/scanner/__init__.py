"""
Scanner package for dupimg.

Provides the similarity engine: fingerprinting images, scoring fingerprint
pairs and sweeping whole directories for similar images.

Public API:
- find_image_files: Discover image files in a directory
- compute_scaled_size: Fingerprint dimensions for a source size
- scale_image: Build the fingerprint of an image
- score: Similarity coefficient of two fingerprints
- load_fingerprints_parallel: Fingerprint many images in parallel with caching
- count_combinations: Number of pairs compared by an all-pairs sweep
- compare_all_pairs: Compare every pair of fingerprints
- compare_one_to_many: Compare one fingerprint against many
- scan_directory: Fingerprint every image in a directory
- find_similar_images: Complete scan of a directory
"""

from __future__ import annotations

# Import public functions from submodules
from .file_discovery import find_image_files
from .scaling import compute_scaled_size, scale_image
from .similarity import score
from .parallel import load_fingerprints_parallel
from .comparison import count_combinations, compare_all_pairs, compare_one_to_many
from .collection import scan_directory, find_similar_images

# Import dependencies for has_tqdm function
from .dependencies import HAS_TQDM


def has_tqdm() -> bool:
    """Check if tqdm progress bars are available."""
    return HAS_TQDM


# Public API exports
__all__ = [
    # File discovery
    'find_image_files',
    # Fingerprints
    'compute_scaled_size',
    'scale_image',
    'score',
    'load_fingerprints_parallel',
    # Sweeps
    'count_combinations',
    'compare_all_pairs',
    'compare_one_to_many',
    'scan_directory',
    'find_similar_images',
    # Feature detection
    'has_tqdm',
]
