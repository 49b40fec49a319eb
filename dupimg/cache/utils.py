"""
Shared utilities for the fingerprint cache.

Provides:
- CacheStats: Statistics dataclass for tracking cache performance
- Source file identity helper used to detect stale entries
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field


@dataclass
class CacheStats:
    """Statistics about cache usage during a scan."""
    cache_hits: int = 0
    cache_misses: int = 0
    write_errors: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def total_files(self) -> int:
        return self.cache_hits + self.cache_misses

    @property
    def hit_rate(self) -> float:
        """Return cache hit rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.cache_hits / self.total_files) * 100

    def record_hit(self):
        with self._lock:
            self.cache_hits += 1

    def record_miss(self):
        with self._lock:
            self.cache_misses += 1

    def record_write_error(self):
        with self._lock:
            self.write_errors += 1


def get_file_stats(filepath: str) -> tuple[int, int]:
    """
    Get file size and modification time.

    Args:
        filepath: Path to the file

    Returns:
        Tuple of (size, mtime_ns)
    """
    stat = os.stat(filepath)
    return stat.st_size, stat.st_mtime_ns


__all__ = [
    'CacheStats',
    'get_file_stats',
]
