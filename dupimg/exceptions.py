"""
Exception types raised by dupimg.

- InvalidPathError: a directory or file that was asked for does not exist
- DecodeError: a file with an image extension could not be decoded
- CacheIOError: a fingerprint cache entry could not be read or written
- CacheFormatError: a cache entry exists but is corrupt or of another schema
- InsufficientImagesError: too few images to compare anything
"""

from __future__ import annotations


class DupImgError(Exception):
    """Base class for all dupimg errors."""


class InvalidPathError(DupImgError):
    """A directory or file path does not exist or cannot be used."""

    def __init__(self, path, message: str = "Invalid path"):
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


class DecodeError(DupImgError, OSError):
    """An image file could not be opened or decoded."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot decode image {self.path}: {reason}")

    def __reduce__(self):
        return (self.__class__, (self.path, self.reason))


class CacheIOError(DupImgError, OSError):
    """A fingerprint cache entry could not be read or persisted."""


class CacheFormatError(CacheIOError):
    """A fingerprint cache entry is corrupt or uses an unknown schema."""


class InsufficientImagesError(DupImgError):
    """Fewer images than needed for a comparison."""

    def __init__(self, image_count: int, required: int):
        self.image_count = image_count
        self.required = required
        super().__init__(
            f"Insufficient amount of source images: found {image_count}, "
            f"need at least {required}"
        )


__all__ = [
    'DupImgError',
    'InvalidPathError',
    'DecodeError',
    'CacheIOError',
    'CacheFormatError',
    'InsufficientImagesError',
]
