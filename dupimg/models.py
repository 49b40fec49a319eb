"""
Data models for dupimg.

Contains dataclasses for fingerprints, similarity matches, resolved duplicate
pairs and the collaborator decisions that drive the resolution walk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import os

from .config import CHANNELS


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


@dataclass(frozen=True)
class Fingerprint:
    """
    Downscaled RGB raster of a source image.

    Attributes:
        source_width: Width of the original image in pixels
        source_height: Height of the original image in pixels
        scaled_width: Width of the scaled raster
        scaled_height: Height of the scaled raster
        pixels: Row-major RGB bytes; each row is `stride` bytes long and only
            the first `scaled_width * 3` bytes of a row hold pixel data
    """
    source_width: int
    source_height: int
    scaled_width: int
    scaled_height: int
    pixels: bytes = field(repr=False)

    def __post_init__(self):
        if self.scaled_width <= 0 or self.scaled_height <= 0:
            raise ValueError(
                f"Degenerate fingerprint size {self.scaled_width}x{self.scaled_height}"
            )
        if len(self.pixels) % self.scaled_height != 0:
            raise ValueError(
                f"Pixel data length {len(self.pixels)} is not a multiple of "
                f"height {self.scaled_height}"
            )
        if len(self.pixels) // self.scaled_height < self.valid_stride:
            raise ValueError(
                f"Row stride {len(self.pixels) // self.scaled_height} is shorter than "
                f"{self.valid_stride} bytes of pixel data"
            )

    @property
    def stride(self) -> int:
        """Number of bytes per raster row, padding included."""
        return len(self.pixels) // self.scaled_height

    @property
    def valid_stride(self) -> int:
        """Number of bytes per row that hold pixel data."""
        return self.scaled_width * CHANNELS

    @property
    def resolution(self) -> int:
        """Pixel count of the original image."""
        return self.source_width * self.source_height

    @property
    def source_size(self) -> tuple[int, int]:
        return (self.source_width, self.source_height)

    @property
    def scaled_size(self) -> tuple[int, int]:
        return (self.scaled_width, self.scaled_height)


@dataclass(frozen=True)
class ScannedImage:
    """An image file together with its fingerprint."""
    path: str
    fingerprint: Fingerprint

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.path)


@dataclass(frozen=True)
class Match:
    """
    A pair of similar images found by a comparison sweep.

    Attributes:
        index_a: Position of the first image in the scanned collection
        index_b: Position of the second image in the scanned collection
        coefficient: Similarity in [0.0, 1.0]
    """
    index_a: int
    index_b: int
    coefficient: float


class Decision(str, Enum):
    """
    What the collaborator decided for a presented duplicate pair.

    Attributes:
        KEEP_BOTH: Leave both files in place
        DELETE_ORIGINAL: Remove the image considered the original
        DELETE_DUPLICATE: Remove the image considered the duplicate
        ABORT_REMAINING: Stop presenting pairs for the rest of the run
    """
    KEEP_BOTH = 'keep_both'
    DELETE_ORIGINAL = 'delete_original'
    DELETE_DUPLICATE = 'delete_duplicate'
    ABORT_REMAINING = 'abort_remaining'


@dataclass(frozen=True)
class ResolvedPair:
    """
    A match with its original and duplicate sides decided.

    Attributes:
        original_path: Image to keep by default (higher quality)
        duplicate_path: Image proposed for deletion
        original_file_size: Size of the original in bytes
        duplicate_file_size: Size of the duplicate in bytes
        original_dimensions: (width, height) of the original
        duplicate_dimensions: (width, height) of the duplicate
        coefficient: Similarity in [0.0, 1.0]
    """
    original_path: str
    duplicate_path: str
    original_file_size: int
    duplicate_file_size: int
    original_dimensions: tuple[int, int]
    duplicate_dimensions: tuple[int, int]
    coefficient: float

    @property
    def similarity_percent(self) -> float:
        return self.coefficient * 100.0

    @property
    def original_resolution(self) -> str:
        return f"{self.original_dimensions[0]}x{self.original_dimensions[1]}"

    @property
    def duplicate_resolution(self) -> str:
        return f"{self.duplicate_dimensions[0]}x{self.duplicate_dimensions[1]}"

    def to_dict(self) -> dict:
        """Convert to dictionary for export."""
        return {
            'original_path': self.original_path,
            'duplicate_path': self.duplicate_path,
            'original_file_size': self.original_file_size,
            'duplicate_file_size': self.duplicate_file_size,
            'original_resolution': self.original_resolution,
            'duplicate_resolution': self.duplicate_resolution,
            'similarity': round(self.coefficient, 4),
        }


@dataclass
class DuplicateScan:
    """
    Result of scanning a collection for similar images.

    Attributes:
        images: Scanned images; in one-vs-many mode the extra image is last
        matches: Similar pairs in discovery order
        comparisons: Number of image pairs that were scored
        mode: 'all-pairs' or 'one-vs-many'
    """
    images: tuple = ()
    matches: list = field(default_factory=list)
    comparisons: int = 0
    mode: str = "all-pairs"

    @property
    def match_count(self) -> int:
        return len(self.matches)


@dataclass
class WalkStats:
    """Counters collected while walking matches with a collaborator."""
    presented: int = 0
    kept: int = 0
    deleted: int = 0
    skipped: int = 0
    errors: int = 0
    space_freed: int = 0
    aborted: bool = False
    error_details: list = field(default_factory=list)

    @property
    def space_freed_formatted(self) -> str:
        return format_size(self.space_freed)


__all__ = [
    'format_size',
    'Fingerprint',
    'ScannedImage',
    'Match',
    'Decision',
    'ResolvedPair',
    'DuplicateScan',
    'WalkStats',
]
