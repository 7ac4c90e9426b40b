"""Custom exception hierarchy for stripstate."""

from __future__ import annotations


class StripStateError(Exception):
    """Base exception for all stripstate errors."""


class StripConfigError(StripStateError):
    """Invalid configuration value."""


class InvalidMarkerError(StripStateError, ValueError):
    """A string that should be a strip marker (or identifier) is malformed.

    Raised when binding a token that was not minted through
    :class:`~stripstate.codec.MarkerCodec`. This is a programming error
    on the caller's side and is not meant to be recovered from.
    """

    def __init__(self, message: str, *, marker: str = "") -> None:
        self.marker = marker
        super().__init__(message)
