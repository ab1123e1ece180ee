"""Timelink interfaces package.

This package provides protocol definitions for encoding and time sources.
"""

from .encoding import IByteEncoder, ITimestamper

__all__ = [
    "IByteEncoder",
    "ITimestamper",
]
