"""Timelink API package.

This package provides link construction and parsing for state tokens.
"""

from timelink.api.link import LinkConfig, StateLinker

__all__ = [
    "LinkConfig",
    "StateLinker",
]
