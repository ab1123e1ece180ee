"""Shareable links for timelink states.

This module provides the StateLinker class, which places state tokens into URLs
and reads them back out. A token travels either as the last path segment
(``https://example.com/t/<token>``) or, for a static page, as the fragment
(``https://example.com/index.html#<token>``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional
from urllib.parse import urlsplit

from timelink.encoding.timestamp import Utc
from timelink.interfaces.encoding import ITimestamper
from timelink.messages.state import Entry, State, decode_state, encode_state

logger = logging.getLogger(__name__)


@dataclass
class LinkConfig:
    """Configuration for link construction.

    Attributes:
        base_url: URL the token is appended to. Empty yields the bare token.
        fragment: When True the token is appended as ``#<token>``, which suits
            a base URL naming a static ``.html`` page. Otherwise it becomes the
            last path segment.
    """

    base_url: str = ""
    fragment: bool = False


class StateLinker:
    """Builds links from states and decodes states from links."""

    def __init__(self, config: Optional[LinkConfig] = None, timestamper: Optional[ITimestamper] = None) -> None:
        """Initialize the linker.

        Args:
            config: Link configuration, defaults to bare tokens.
            timestamper: Source of the current time for :meth:`share`.
        """
        self.config = config or LinkConfig()
        self.timestamper = timestamper or Utc()

    def link(self, state: State) -> str:
        """Build a link carrying ``state``.

        Raises:
            EncodingError: If the state has an invalid entry.
        """
        token = encode_state(state)

        if self.config.fragment:
            return f"{self.config.base_url}#{token}"

        base = self.config.base_url
        if base and not base.endswith("/"):
            base += "/"

        return base + token

    def share(self, entries: Iterable[Entry], when: Optional[datetime] = None) -> str:
        """Build a link for ``when``, or for the current time if omitted.

        Args:
            entries: Entries in display order.
            when: The instant to share.

        Returns:
            The link.
        """
        if when is None:
            when = self.timestamper.now()

        return self.link(State.at(when, entries))

    @staticmethod
    def token(url: str) -> str:
        """Extract the token from a link.

        A URL whose path ends in ``.html`` carries the token in its fragment;
        any other URL carries it in the last path segment.

        Example:
            >>> StateLinker.token("https://example.com/t/AAAAAAAA")
            'AAAAAAAA'
            >>> StateLinker.token("https://example.com/index.html#AAAAAAAA")
            'AAAAAAAA'
        """
        parts = urlsplit(url)

        if parts.path.endswith(".html"):
            return parts.fragment

        return parts.path.split("/")[-1]

    def parse(self, url: str) -> State:
        """Decode the state carried by a link.

        Raises:
            EncodingError: If the token cannot be decoded.
        """
        token = self.token(url)
        logger.debug("decoding token %r from %s", token, url)
        return decode_state(token)
