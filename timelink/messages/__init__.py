"""Message classes for timelink.

This module provides the state token types and their wire encoding.
"""

from timelink.messages.state import (
    ENTRY_SEPARATOR,
    HEADER_LENGTH,
    VERSION,
    Entry,
    State,
    decode_state,
    encode_state,
)

__all__ = [
    "ENTRY_SEPARATOR",
    "HEADER_LENGTH",
    "VERSION",
    "Entry",
    "State",
    "decode_state",
    "encode_state",
]
