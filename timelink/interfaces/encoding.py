"""Encoding and timestamp interfaces for timelink.

This module defines protocols for byte/text encoding and for obtaining the
current time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol


class IByteEncoder(Protocol):
    """Interface for reversible byte-to-text encodings."""

    def encode(self, data: bytes) -> str:
        """Encode bytes into text.

        Args:
            data: The bytes to encode.

        Returns:
            The encoded text.
        """
        ...

    def decode(self, text: str) -> Optional[bytes]:
        """Decode text back into bytes.

        Args:
            text: The text to decode.

        Returns:
            The decoded bytes, or None if the text is not a valid encoding.
        """
        ...


class ITimestamper(Protocol):
    """Interface for timestamp operations."""

    def now(self) -> datetime:
        """Get the current datetime.

        Returns:
            The current datetime.
        """
        ...
