"""Encoding primitives for timelink.

This package provides the unpadded base64url codec and the 40-bit timestamp
packing used by state tokens.
"""

from .base64url import ALPHABET, Base64Url
from .timestamp import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    TIMESTAMP_BITS,
    TIMESTAMP_BYTES,
    Utc,
    clamp_to_bits,
    datetime_from_seconds,
    pack_timestamp,
    seconds_from_datetime,
    unpack_timestamp,
)

__all__ = [
    "ALPHABET",
    "Base64Url",
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "TIMESTAMP_BITS",
    "TIMESTAMP_BYTES",
    "Utc",
    "clamp_to_bits",
    "datetime_from_seconds",
    "pack_timestamp",
    "seconds_from_datetime",
    "unpack_timestamp",
]
