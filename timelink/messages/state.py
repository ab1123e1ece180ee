"""State token message types for timelink.

This module defines the Entry and State classes and the compact token format
that carries them in a URL.

The version 0 token layout is:

    'A'        version marker (alphabet index 0)
    7 chars    base64url of the 5-byte little-endian signed timestamp
    remainder  entries joined by '~', each ``flag + time_zone`` with '/' as '.'

An empty entry list produces only the 8-character header.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Final, Iterable, List

from timelink.encoding.base64url import ALPHABET, Base64Url
from timelink.encoding.timestamp import (
    TIMESTAMP_BYTES,
    datetime_from_seconds,
    pack_timestamp,
    seconds_from_datetime,
    unpack_timestamp,
)
from timelink.exceptions import (
    InvalidCharacterError,
    InvalidFlagLengthError,
    MalformedLengthError,
    UnsupportedVersionError,
)

logger = logging.getLogger(__name__)

VERSION: Final[str] = ALPHABET[0]
ENTRY_SEPARATOR: Final[str] = "~"
FLAG_LENGTH: Final[int] = 2
HEADER_LENGTH: Final[int] = len(VERSION) + Base64Url.encoded_length(TIMESTAMP_BYTES)

_FLAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9]{2}")
_TIME_ZONE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9/+_-]+")


@dataclass(frozen=True)
class Entry:
    """A region flag paired with an IANA time zone.

    Attributes:
        flag: Two-character region code, e.g. "US".
        time_zone: Time zone identifier, e.g. "America/New_York".
    """

    flag: str
    time_zone: str

    def serialize(self) -> str:
        """Serialize the entry for inclusion in a token.

        Returns:
            The flag followed by the time zone with '/' replaced by '.'.

        Raises:
            InvalidFlagLengthError: If the flag is not exactly two characters.
            InvalidCharacterError: If the flag is not alphanumeric, or the
                time zone is empty or contains characters outside
                ``[A-Za-z0-9/+_-]``.
        """
        if len(self.flag) != FLAG_LENGTH:
            raise InvalidFlagLengthError(f"flag must be {FLAG_LENGTH} characters, got {self.flag!r}")

        if _FLAG_PATTERN.fullmatch(self.flag) is None:
            raise InvalidCharacterError(f"unsupported flag {self.flag!r}")

        if _TIME_ZONE_PATTERN.fullmatch(self.time_zone) is None:
            raise InvalidCharacterError(f"unsupported time zone {self.time_zone!r}")

        return self.flag + self.time_zone.replace("/", ".")

    @staticmethod
    def parse(message: str) -> Entry:
        """Parse one serialized entry.

        No validation is applied, so anything a compliant encoder could emit
        is accepted, along with strings it never would.

        Args:
            message: The serialized entry.

        Returns:
            A new Entry.
        """
        return Entry(flag=message[:FLAG_LENGTH], time_zone=message[FLAG_LENGTH:].replace(".", "/"))


@dataclass
class State:
    """An instant in time and the time zones it should be shown in.

    Attributes:
        timestamp: Seconds since the Unix epoch. Floats are floored and values
            outside the signed 40-bit range are clamped when serialized.
        entries: Entries in display order.
    """

    timestamp: int
    entries: List[Entry] = field(default_factory=list)

    @classmethod
    def at(cls, when: datetime, entries: Iterable[Entry] = ()) -> State:
        """Create a state for a datetime.

        Naive datetimes are taken to be UTC; sub-second precision is dropped.
        """
        return cls(timestamp=seconds_from_datetime(when), entries=list(entries))

    @property
    def when(self) -> datetime:
        """The timestamp as a UTC datetime.

        Raises:
            OverflowError: If the timestamp is outside the range of ``datetime``.
        """
        return datetime_from_seconds(self.timestamp)

    def serialize(self) -> str:
        """Serialize the state to a token. See :func:`encode_state`."""
        return encode_state(self)

    @staticmethod
    def parse(token: str) -> State:
        """Parse a token into a state. See :func:`decode_state`."""
        return decode_state(token)


def encode_state(state: State) -> str:
    """Encode a state as a URL-safe token.

    Every entry is validated before anything is emitted, so an invalid entry
    anywhere in the list fails the whole call.

    Args:
        state: The state to encode.

    Returns:
        The token string.

    Raises:
        InvalidFlagLengthError: If an entry flag is not exactly two characters.
        InvalidCharacterError: If an entry flag or time zone has unsupported
            characters.
        EncodingError: If the timestamp is NaN or infinite.

    Example:
        >>> encode_state(State(timestamp=0))
        'AAAAAAAA'
        >>> encode_state(State(timestamp=0, entries=[Entry("US", "America/New_York")]))
        'AAAAAAAAUSAmerica.New_York'
    """
    entries = [entry.serialize() for entry in state.entries]
    return VERSION + Base64Url.encode(pack_timestamp(state.timestamp)) + ENTRY_SEPARATOR.join(entries)


def decode_state(token: str) -> State:
    """Decode a token produced by :func:`encode_state`.

    Entry content is not re-validated.

    Args:
        token: The token string.

    Returns:
        The decoded state.

    Raises:
        UnsupportedVersionError: If the token does not start with the version 0
            marker, including when it is empty.
        MalformedLengthError: If the token is shorter than its fixed header.
        InvalidCharacterError: If the timestamp characters are not base64url.
    """
    if token[:1] != VERSION:
        logger.debug("rejecting token with version marker %r", token[:1])
        raise UnsupportedVersionError(f"unsupported token version {token[:1]!r}")

    if len(token) < HEADER_LENGTH:
        logger.debug("rejecting token of length %d", len(token))
        raise MalformedLengthError(f"token must be at least {HEADER_LENGTH} characters")

    data = Base64Url.decode_fixed(token[len(VERSION) : HEADER_LENGTH], TIMESTAMP_BYTES)
    if data is None:
        raise InvalidCharacterError("timestamp is not valid base64url")

    rest = token[HEADER_LENGTH:]
    entries = [Entry.parse(message) for message in rest.split(ENTRY_SEPARATOR)] if rest else []

    return State(timestamp=unpack_timestamp(data), entries=entries)
