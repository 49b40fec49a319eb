"""
Image scaling module for the scanner package.

Turns a source image into a Fingerprint: a small RGB raster whose longer side
is FINGERPRINT_SIZE pixels, laid out with padded rows like a classic bitmap.
"""

from __future__ import annotations

from pathlib import Path

from ..config import FINGERPRINT_SIZE, ROW_ALIGNMENT, CHANNELS
from ..exceptions import DecodeError
from ..models import Fingerprint
from .dependencies import Image, np


def compute_scaled_size(width: int, height: int) -> tuple[int, int]:
    """
    Compute fingerprint dimensions that preserve the aspect ratio.

    Args:
        width: Source width in pixels
        height: Source height in pixels

    Returns:
        Tuple of (scaled_width, scaled_height); the longer side is
        FINGERPRINT_SIZE

    Raises:
        ValueError: If either dimension is not positive

    Examples:
        >>> compute_scaled_size(128, 64)
        (64, 32)
        >>> compute_scaled_size(64, 128)
        (32, 64)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image dimensions {width}x{height}")

    aspect_ratio = width / height
    scaled_width = FINGERPRINT_SIZE
    scaled_height = FINGERPRINT_SIZE

    if aspect_ratio > 1.0:
        scaled_height = round(FINGERPRINT_SIZE / aspect_ratio)
    elif aspect_ratio < 1.0:
        scaled_width = round(FINGERPRINT_SIZE * aspect_ratio)

    return scaled_width, scaled_height


def row_stride(width: int) -> int:
    """Bytes per fingerprint row for a raster `width` pixels wide."""
    row_bytes = width * CHANNELS
    return (row_bytes + ROW_ALIGNMENT - 1) // ROW_ALIGNMENT * ROW_ALIGNMENT


def _pack_rows(img, width: int, height: int) -> bytes:
    """Copy RGB pixel data into rows padded to the fingerprint stride."""
    data = np.asarray(img, dtype=np.uint8).reshape(height, width * CHANNELS)
    padded = np.zeros((height, row_stride(width)), dtype=np.uint8)
    padded[:, :width * CHANNELS] = data
    return padded.tobytes()


def scale_image(filepath: str | Path) -> Fingerprint:
    """
    Load an image and produce its fingerprint.

    Args:
        filepath: Path to the image file

    Returns:
        Fingerprint of the image

    Raises:
        DecodeError: If the file cannot be opened or decoded, or the image is
            too degenerate to be scaled

    Notes:
        - Transparency is discarded, images are assumed to be opaque
        - Resampling uses the Lanczos filter
    """
    filepath = str(filepath)

    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated images early
            img.load()
            width, height = img.size

            try:
                scaled_width, scaled_height = compute_scaled_size(width, height)
            except ValueError as e:
                raise DecodeError(filepath, str(e))

            if scaled_width < 1 or scaled_height < 1:
                raise DecodeError(
                    filepath,
                    f"image {width}x{height} is too narrow to be scaled"
                )

            if img.mode != 'RGB':
                img = img.convert('RGB')

            scaled = img.resize(
                (scaled_width, scaled_height),
                resample=Image.Resampling.LANCZOS,
            )
            pixels = _pack_rows(scaled, scaled_width, scaled_height)

    except DecodeError:
        raise
    except Image.UnidentifiedImageError as e:
        raise DecodeError(filepath, f"not a valid image file: {e}") from e
    except (OSError, ValueError, SyntaxError) as e:
        raise DecodeError(filepath, str(e)) from e

    return Fingerprint(
        source_width=width,
        source_height=height,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        pixels=pixels,
    )


__all__ = ['compute_scaled_size', 'row_stride', 'scale_image']
