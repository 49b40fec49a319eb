"""
Binary serialization of fingerprints.

Layout (little-endian):

    offset  size  field
    0       4     magic b'DIFP'
    4       2     format version
    6       2     source file name length in bytes (k)
    8       4     source width
    12      4     source height
    16      2     scaled width
    18      2     scaled height
    20      8     source file size in bytes
    28      8     source file mtime in nanoseconds (signed)
    36      4     pixel data length (n)
    40      k     source file name, UTF-8
    40+k    n     pixel data

Bump FORMAT_VERSION whenever the layout changes; entries of any other
version are rejected and recomputed.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..exceptions import CacheFormatError
from ..models import Fingerprint

MAGIC = b'DIFP'
FORMAT_VERSION = 2

_HEADER = struct.Struct('<4sHHIIHHQqI')
HEADER_SIZE = _HEADER.size


@dataclass(frozen=True)
class CacheRecord:
    """
    A fingerprint with the identity of the source file it was made from.

    Images that share a stem share a cache file, so the file name is stored
    alongside size and mtime to tell them apart.
    """
    fingerprint: Fingerprint
    source_name: str
    source_size: int
    source_mtime_ns: int

    def matches_source(self, name: str, size: int, mtime_ns: int) -> bool:
        """Check whether the record was built from this exact source file."""
        return (
            self.source_name == name and
            self.source_size == size and
            self.source_mtime_ns == mtime_ns
        )


def encode_record(record: CacheRecord) -> bytes:
    """
    Serialize a cache record.

    Args:
        record: Record to serialize

    Returns:
        Header, source file name and raw pixel bytes

    Raises:
        CacheFormatError: If the source file name is too long to store
    """
    fp = record.fingerprint
    name = record.source_name.encode('utf-8', errors='surrogateescape')
    if len(name) > 0xFFFF:
        raise CacheFormatError(f"Source file name too long ({len(name)} bytes)")

    header = _HEADER.pack(
        MAGIC,
        FORMAT_VERSION,
        len(name),
        fp.source_width,
        fp.source_height,
        fp.scaled_width,
        fp.scaled_height,
        record.source_size,
        record.source_mtime_ns,
        len(fp.pixels),
    )
    return header + name + fp.pixels


def decode_record(data: bytes) -> CacheRecord:
    """
    Deserialize a cache record.

    Args:
        data: Bytes produced by encode_record

    Returns:
        The decoded CacheRecord

    Raises:
        CacheFormatError: If the data is truncated, has the wrong magic or
            version, or describes an invalid fingerprint
    """
    if len(data) < HEADER_SIZE:
        raise CacheFormatError(f"Truncated header ({len(data)} bytes)")

    (magic, version, name_length, source_width, source_height,
     scaled_width, scaled_height, source_size, source_mtime_ns,
     pixel_length) = _HEADER.unpack_from(data)

    if magic != MAGIC:
        raise CacheFormatError(f"Bad magic {magic!r}")
    if version != FORMAT_VERSION:
        raise CacheFormatError(f"Unsupported format version {version}")

    pixels_start = HEADER_SIZE + name_length
    if len(data) - pixels_start != pixel_length:
        raise CacheFormatError(
            f"Expected {pixel_length} pixel bytes, found {len(data) - pixels_start}"
        )

    source_name = bytes(data[HEADER_SIZE:pixels_start]).decode('utf-8', errors='surrogateescape')

    try:
        fingerprint = Fingerprint(
            source_width=source_width,
            source_height=source_height,
            scaled_width=scaled_width,
            scaled_height=scaled_height,
            pixels=bytes(data[pixels_start:]),
        )
    except ValueError as e:
        raise CacheFormatError(str(e)) from e

    return CacheRecord(
        fingerprint=fingerprint,
        source_name=source_name,
        source_size=source_size,
        source_mtime_ns=source_mtime_ns,
    )


__all__ = [
    'MAGIC',
    'FORMAT_VERSION',
    'HEADER_SIZE',
    'CacheRecord',
    'encode_record',
    'decode_record',
]
