"""
Dependency initialization for the scanner package.

Handles PIL, numpy and tqdm imports with proper error handling and
configuration.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..config import MAX_IMAGE_PIXELS

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow numpy"
    )

# Increase PIL's decompression bomb limit for large images
# This handles legitimate large images like high-resolution scans and panoramas
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS

# Suppress specific PIL warnings that we handle gracefully
# - DecompressionBombWarning: We've increased the limit appropriately
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# Optional: tqdm for progress bars
# Store as Optional[Any] to satisfy type checkers when tqdm is not installed
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


__all__ = [
    'Image',
    'np',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
