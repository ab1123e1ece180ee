"""Tests for 40-bit timestamp packing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from timelink import EncodingError
from timelink.encoding import (
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    Utc,
    clamp_to_bits,
    datetime_from_seconds,
    pack_timestamp,
    seconds_from_datetime,
    unpack_timestamp,
)


def test_bounds() -> None:
    assert MIN_TIMESTAMP == -(2**39)
    assert MAX_TIMESTAMP == 2**39 - 1


def test_clamp_to_bits() -> None:
    assert clamp_to_bits(0, 40) == 0
    assert clamp_to_bits(2**39, 40) == 2**39 - 1
    assert clamp_to_bits(-(2**39) - 1, 40) == -(2**39)
    assert clamp_to_bits(127, 8) == 127
    assert clamp_to_bits(-129, 8) == -128


@pytest.mark.parametrize(
    ("seconds", "packed"),
    [
        (0, b"\x00\x00\x00\x00\x00"),
        (1, b"\x01\x00\x00\x00\x00"),
        (-1, b"\xff\xff\xff\xff\xff"),
        (256, b"\x00\x01\x00\x00\x00"),
        (2**39 - 1, b"\xff\xff\xff\xff\x7f"),
        (-(2**39), b"\x00\x00\x00\x00\x80"),
    ],
)
def test_pack_little_endian(seconds: int, packed: bytes) -> None:
    """Timestamps are stored as five little-endian two's-complement bytes."""
    assert pack_timestamp(seconds) == packed
    assert unpack_timestamp(packed) == seconds


def test_pack_floors_fractions() -> None:
    assert unpack_timestamp(pack_timestamp(1.9)) == 1
    assert unpack_timestamp(pack_timestamp(-0.5)) == -1


def test_pack_clamps_out_of_range() -> None:
    assert unpack_timestamp(pack_timestamp(10**15)) == MAX_TIMESTAMP
    assert unpack_timestamp(pack_timestamp(-(10**15))) == MIN_TIMESTAMP


def test_unpack_ignores_trailing_bytes() -> None:
    """Only the first five bytes carry the timestamp."""
    assert unpack_timestamp(b"\xff\xff\xff\xff\xff\x12\x34\x56") == -1


def test_unpack_requires_five_bytes() -> None:
    with pytest.raises(ValueError):
        unpack_timestamp(b"\x00\x00\x00")


def test_seconds_from_datetime() -> None:
    """Datetimes floor to whole seconds and naive values are UTC."""
    assert seconds_from_datetime(datetime(1970, 1, 1, 0, 0, 1, 999999, tzinfo=timezone.utc)) == 1
    assert seconds_from_datetime(datetime(1969, 12, 31, 23, 59, 59, 500000, tzinfo=timezone.utc)) == -1
    assert seconds_from_datetime(datetime(1970, 1, 2)) == 86400


def test_datetime_from_seconds() -> None:
    assert datetime_from_seconds(86400) == datetime(1970, 1, 2, tzinfo=timezone.utc)

    with pytest.raises(OverflowError):
        datetime_from_seconds(MAX_TIMESTAMP)


def test_utc_now_is_aware() -> None:
    assert Utc().now().tzinfo == timezone.utc


@pytest.mark.parametrize("seconds", [float("nan"), float("inf"), float("-inf")])
def test_pack_rejects_non_finite_values(seconds: float) -> None:
    with pytest.raises(EncodingError):
        pack_timestamp(seconds)
