"""
On-disk fingerprint cache for dupimg.

Stores the scaled fingerprint of every scanned image so repeated scans of the
same directory skip decoding and rescaling:
- One binary file per image, in a sibling '<dir>_scaled' directory
- Explicit, versioned record layout
- Entries are invalidated when the source file's size or mtime changes
- Write failures are logged and never abort a scan

Public API:
- FingerprintCache: Read-through/write-through cache
- CacheStats: Statistics dataclass
- scaled_directory_for / fingerprint_path_for: Cache location helpers
- encode_record / decode_record: Binary record codec
"""

from __future__ import annotations

from .core import FingerprintCache
from .utils import CacheStats
from .paths import scaled_directory_for, fingerprint_path_for
from .codec import CacheRecord, encode_record, decode_record


__all__ = [
    'FingerprintCache',
    'CacheStats',
    'scaled_directory_for',
    'fingerprint_path_for',
    'CacheRecord',
    'encode_record',
    'decode_record',
]
