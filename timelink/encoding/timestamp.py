"""Whole-second timestamps packed into a signed 40-bit field.

Instants are carried as integer seconds since the Unix epoch. The packed form is
five little-endian two's-complement bytes, which covers roughly 17,000 years on
either side of 1970. Values outside that range are clamped rather than rejected.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Final, Union

from timelink.exceptions import EncodingError
from timelink.interfaces.encoding import ITimestamper

TIMESTAMP_BITS: Final[int] = 40
TIMESTAMP_BYTES: Final[int] = TIMESTAMP_BITS // 8

MIN_TIMESTAMP: Final[int] = -(1 << (TIMESTAMP_BITS - 1))
MAX_TIMESTAMP: Final[int] = (1 << (TIMESTAMP_BITS - 1)) - 1

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECOND: Final[timedelta] = timedelta(seconds=1)


def clamp_to_bits(value: int, bits: int) -> int:
    """Clamp an integer to the range of a signed two's-complement field.

    Args:
        value: The integer to clamp.
        bits: Width of the field, sign bit included.

    Returns:
        ``value`` limited to ``[-2**(bits-1), 2**(bits-1) - 1]``.

    Example:
        >>> clamp_to_bits(200, 8)
        127
        >>> clamp_to_bits(-200, 8)
        -128
    """
    lower = -(1 << (bits - 1))
    upper = (1 << (bits - 1)) - 1

    if value < lower:
        return lower

    if value > upper:
        return upper

    return value


def pack_timestamp(seconds: Union[int, float]) -> bytes:
    """Pack seconds since the epoch into the 5-byte wire field.

    Fractional seconds are floored and out-of-range values are clamped.

    Args:
        seconds: Seconds since the Unix epoch.

    Returns:
        Five little-endian bytes.

    Raises:
        EncodingError: If ``seconds`` is NaN or infinite.
    """
    try:
        whole = math.floor(seconds)
    except (OverflowError, ValueError) as e:
        raise EncodingError(f"timestamp {seconds!r} is not a finite number") from e

    value = clamp_to_bits(whole, TIMESTAMP_BITS)
    return value.to_bytes(TIMESTAMP_BYTES, "little", signed=True)


def unpack_timestamp(data: bytes) -> int:
    """Read seconds since the epoch from the start of ``data``.

    Only the first five bytes are used; the 40-bit field is sign-extended.

    Args:
        data: At least five bytes.

    Returns:
        Seconds since the Unix epoch.

    Raises:
        ValueError: If fewer than five bytes are supplied.
    """
    if len(data) < TIMESTAMP_BYTES:
        raise ValueError(f"expected {TIMESTAMP_BYTES} timestamp bytes, got {len(data)}")

    return int.from_bytes(data[:TIMESTAMP_BYTES], "little", signed=True)


def seconds_from_datetime(when: datetime) -> int:
    """Convert a datetime to whole seconds since the epoch, flooring.

    Naive datetimes are taken to be UTC.
    """
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    return (when - _EPOCH) // _SECOND


def datetime_from_seconds(seconds: int) -> datetime:
    """Convert seconds since the epoch to a UTC datetime.

    Raises:
        OverflowError: If the instant is outside the range of ``datetime``.
    """
    return _EPOCH + timedelta(seconds=seconds)


class Utc(ITimestamper):
    """Timestamper returning the current time in UTC."""

    def now(self) -> datetime:
        """Get the current datetime in UTC.

        Returns:
            The current datetime with UTC timezone.
        """
        return datetime.now(timezone.utc)
