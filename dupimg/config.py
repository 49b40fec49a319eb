"""
Configuration constants for dupimg.

This module contains all configurable settings including:
- Supported image extensions
- Fingerprint geometry (longest side, row alignment)
- Similarity threshold and sweep progress interval
- Fingerprint cache naming
"""

import os

# File extensions that are considered images.
# Matched case-sensitively against the end of the file name.
IMAGE_EXTENSIONS = ('.bmp', '.png', '.jpg', '.jpeg', '.gif', '.tiff')

# Length of the longer side of every fingerprint bitmap
FINGERPRINT_SIZE = 64

# Fingerprint rows are padded to a multiple of this many bytes
ROW_ALIGNMENT = 4

# Bytes per fingerprint pixel (R, G, B)
CHANNELS = 3

# Lowest similarity coefficient for two images to be reported as similar
# 0.0 = completely different, 1.0 = identical fingerprints
DEFAULT_THRESHOLD = 0.9

# Default number of parallel workers for fingerprinting
DEFAULT_WORKERS = 4

# Report comparison progress every N scored pairs
PROGRESS_INTERVAL = 20000

# Suffix appended to a source directory's name to get its cache directory
SCALED_DIR_SUFFIX = '_scaled'

# Extension of serialized fingerprint files
FINGERPRINT_EXTENSION = '.dat'

# Increase PIL's decompression bomb limit for large images
# Default is ~89MP, we allow 500MP for scans and panoramas
MAX_IMAGE_PIXELS = 500_000_000

# User configuration location
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.dupimg')
