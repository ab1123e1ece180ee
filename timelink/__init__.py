"""Timelink Python implementation.

This package encodes an instant in time plus an ordered list of region flags and
time zones into a short URL-safe token, so that a link alone determines what a
page shows.

Main Components:
    - State, Entry: The decoded token contents
    - encode_state, decode_state: The token codec
    - Base64Url: Unpadded base64url codec for arbitrary byte lengths
    - StateLinker: Builds and parses shareable links

Example:
    >>> from timelink import Entry, State, encode_state, decode_state
    >>> token = encode_state(State(timestamp=0, entries=[Entry("GB", "Europe/London")]))
    >>> token
    'AAAAAAAAGBEurope.London'
    >>> decode_state(token).entries
    [Entry(flag='GB', time_zone='Europe/London')]
"""

from timelink.api import LinkConfig, StateLinker
from timelink.encoding import Base64Url, Utc
from timelink.exceptions import (
    EncodingError,
    InvalidCharacterError,
    InvalidFlagLengthError,
    MalformedLengthError,
    TimelinkError,
    UnsupportedVersionError,
)
from timelink.messages import Entry, State, decode_state, encode_state

__version__ = "0.1.0"

__all__ = [
    # API
    "LinkConfig",
    "StateLinker",
    # Messages
    "Entry",
    "State",
    "decode_state",
    "encode_state",
    # Encoding
    "Base64Url",
    "Utc",
    # Exceptions
    "TimelinkError",
    "EncodingError",
    "MalformedLengthError",
    "InvalidCharacterError",
    "UnsupportedVersionError",
    "InvalidFlagLengthError",
]
