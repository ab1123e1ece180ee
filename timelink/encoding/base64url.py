"""Unpadded base64url encoding.

This module implements the RFC 4648 Section 5 alphabet without padding
characters. Decoding is all-or-nothing: the input is validated in full before
any byte is produced, and failures are reported as None rather than raised so
that callers can treat malformed text as an ordinary branch.
"""

from __future__ import annotations

import base64
import logging
from typing import Dict, Final, Optional

from timelink.interfaces.encoding import IByteEncoder

logger = logging.getLogger(__name__)

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"

_VALUES: Final[Dict[str, int]] = {character: index for index, character in enumerate(ALPHABET)}

# Text characters needed for a trailing group of 0, 1 or 2 bytes.
_TAIL_LENGTHS: Final[tuple[int, int, int]] = (0, 2, 3)


class Base64Url(IByteEncoder):
    """Base64url codec over arbitrary byte lengths, without padding.

    Every 3 bytes become 4 characters. A trailing single byte becomes 2
    characters and a trailing pair of bytes becomes 3 characters, so the
    encoded length is a multiple of 4 only when the input length is a
    multiple of 3.
    """

    @staticmethod
    def encoded_length(size: int) -> int:
        """Return the unpadded text length that encodes ``size`` bytes.

        Args:
            size: The number of bytes.

        Returns:
            The number of base64url characters.

        Example:
            >>> Base64Url.encoded_length(5)
            7
        """
        return size // 3 * 4 + _TAIL_LENGTHS[size % 3]

    @staticmethod
    def encode(data: bytes) -> str:
        """Encode bytes to an unpadded base64url string.

        Args:
            data: The bytes to encode.

        Returns:
            The base64url text, without '=' padding.

        Example:
            >>> Base64Url.encode(b"\\xff")
            '_w'
        """
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

    @staticmethod
    def decode(text: str) -> Optional[bytes]:
        """Decode unpadded base64url text.

        A trailing group of 2 characters yields 1 byte and a trailing group of
        3 characters yields 2 bytes. Bits of the final character that fall past
        the last whole byte are ignored.

        Args:
            text: The base64url text to decode.

        Returns:
            The decoded bytes, or None if the length is 1 modulo 4 or any
            character is outside the alphabet.

        Example:
            >>> Base64Url.decode("_w")
            b'\\xff'
            >>> Base64Url.decode("_w=") is None
            True
        """
        if len(text) % 4 == 1:
            logger.debug("rejecting base64url text of length %d", len(text))
            return None

        for character in text:
            if character not in _VALUES:
                logger.debug("rejecting base64url text containing %r", character)
                return None

        # The alphabet check above guarantees the decoder sees only valid symbols.
        padded = text + "=" * (-len(text) % 4)
        return base64.urlsafe_b64decode(padded)

    @staticmethod
    def decode_fixed(text: str, size: int) -> Optional[bytes]:
        """Decode text that must encode exactly ``size`` bytes.

        Args:
            text: The base64url text to decode.
            size: The number of bytes the text must carry.

        Returns:
            Exactly ``size`` bytes, or None if the text has the wrong length or
            is not valid base64url.
        """
        if len(text) != Base64Url.encoded_length(size):
            logger.debug("expected %d characters for %d bytes, got %d", Base64Url.encoded_length(size), size, len(text))
            return None

        return Base64Url.decode(text)
