"""Exception classes for timelink.

This module defines custom exception types used throughout the timelink library.
"""


class TimelinkError(Exception):
    """Base exception class for all timelink errors."""

    pass


class EncodingError(TimelinkError):
    """Exception raised for encoding/decoding errors."""

    pass


class MalformedLengthError(EncodingError):
    """Exception raised when encoded text has a length that cannot be decoded."""

    pass


class InvalidCharacterError(EncodingError):
    """Exception raised when a character falls outside the permitted set.

    Raised for base64url text containing non-alphabet characters and for time
    zone identifiers containing characters that cannot be carried in a token.
    """

    pass


class UnsupportedVersionError(EncodingError):
    """Exception raised when a token does not start with a known version marker."""

    pass


class InvalidFlagLengthError(EncodingError):
    """Exception raised when an entry flag is not exactly two characters."""

    pass
