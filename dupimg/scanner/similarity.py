"""
Similarity scoring for fingerprints.

The coefficient is one minus the mean absolute byte difference of the two
rasters, normalized by the total byte count (row padding included) times 255.
"""

from __future__ import annotations

from ..models import Fingerprint
from .dependencies import np


def _pixel_rows(fp: Fingerprint):
    """Pixel data as a (height, valid_stride) int16 array, padding dropped."""
    rows = np.frombuffer(fp.pixels, dtype=np.uint8).reshape(fp.scaled_height, fp.stride)
    return rows[:, :fp.valid_stride].astype(np.int16)


def score(a: Fingerprint, b: Fingerprint) -> float:
    """
    Compute the similarity coefficient of two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Similarity in [0.0, 1.0]; 1.0 means identical pixel data, 0.0 is
        returned for fingerprints of different shape

    Notes:
        Padding bytes never contribute to the difference, but the divisor
        uses the full byte count including padding.
    """
    if (a.scaled_width != b.scaled_width or
            a.scaled_height != b.scaled_height or
            len(a.pixels) != len(b.pixels)):
        return 0.0

    difference = int(np.abs(_pixel_rows(a) - _pixel_rows(b)).sum(dtype=np.int64))
    relative_difference = difference / (len(a.pixels) * 255)
    return 1.0 - relative_difference


__all__ = ['score']
