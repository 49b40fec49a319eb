"""
FingerprintCache class for read-through/write-through fingerprint storage.

Each source image gets its own cache file, so concurrent lookups for
different images never touch the same file and need no locking.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import CacheIOError, CacheFormatError, DecodeError
from ..models import Fingerprint
from .codec import CacheRecord, encode_record, decode_record
from .paths import fingerprint_path_for
from .utils import CacheStats, get_file_stats


logger = logging.getLogger(__name__)

Scaler = Callable[[str], Fingerprint]


class FingerprintCache:
    """
    On-disk cache of image fingerprints.

    Thread-safe for concurrent calls on different paths. Calls for the same
    path may both compute the fingerprint; the last write wins.

    Usage:
        cache = FingerprintCache(scale_image)
        fp = cache.get('/photos/holiday/beach.jpg')
        # stored in /photos/holiday_scaled/beach.dat
    """

    def __init__(self, scaler: Scaler, enabled: bool = True):
        """
        Initialize the fingerprint cache.

        Args:
            scaler: Function that computes a fingerprint for an image path
            enabled: If False, always compute fingerprints and never persist them
        """
        self.scaler = scaler
        self.enabled = enabled
        self.stats = CacheStats()

    def get(self, filepath: str | Path) -> Fingerprint:
        """
        Get the fingerprint of an image, computing and storing it if needed.

        Args:
            filepath: Path to the image file

        Returns:
            Fingerprint of the image

        Raises:
            DecodeError: If the file is gone or cannot be decoded
            InvalidPathError: If the file sits in a filesystem root
        """
        filepath = str(filepath)
        if not self.enabled:
            self.stats.record_miss()
            return self.scaler(filepath)

        if not os.path.isfile(filepath):
            raise DecodeError(filepath, "file does not exist")
        cache_path = fingerprint_path_for(filepath)
        try:
            size, mtime_ns = get_file_stats(filepath)
        except OSError as e:
            raise DecodeError(filepath, str(e)) from e
        name = os.path.basename(filepath)

        fingerprint = self.load(cache_path, name, size, mtime_ns)
        if fingerprint is not None:
            self.stats.record_hit()
            return fingerprint

        self.stats.record_miss()
        fingerprint = self.scaler(filepath)

        try:
            self.store(cache_path, CacheRecord(fingerprint, name, size, mtime_ns))
        except CacheIOError as e:
            self.stats.record_write_error()
            logger.warning(f"Could not cache fingerprint of {filepath}: {e}")

        return fingerprint

    def load(
        self,
        cache_path: Path,
        name: str,
        size: int,
        mtime_ns: int,
    ) -> Optional[Fingerprint]:
        """
        Read a cached fingerprint.

        Args:
            cache_path: Location of the cache file
            name: File name of the source image
            size: Current size of the source file
            mtime_ns: Current modification time of the source file

        Returns:
            Fingerprint if a valid entry for this exact source exists, None otherwise
        """
        try:
            data = cache_path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read cache entry {cache_path}: {e}")
            return None

        try:
            record = decode_record(data)
        except CacheFormatError as e:
            logger.debug(f"Discarding unreadable cache entry {cache_path}: {e}")
            return None

        if not record.matches_source(name, size, mtime_ns):
            logger.debug(f"Discarding stale cache entry {cache_path}")
            return None

        return record.fingerprint
    def store(self, cache_path: Path, record: CacheRecord) -> None:
        """
        Persist a cache record atomically.

        Args:
            cache_path: Location of the cache file
            record: Record to write

        Raises:
            CacheIOError: If the cache directory or file cannot be written
        """
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=cache_path.parent,
                prefix=f".{cache_path.stem}.",
                suffix='.tmp',
            )
            try:
                with os.fdopen(fd, 'wb') as f:
                    f.write(encode_record(record))
                os.replace(tmp_path, cache_path)
            except BaseException:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
                raise
        except OSError as e:
            raise CacheIOError(f"Cannot write {cache_path}: {e}") from e


__all__ = ['FingerprintCache']
