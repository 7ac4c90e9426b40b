"""Strip marker recognition and minting.

A marker token is ``MARKER_PREFIX + identifier + MARKER_SUFFIX`` where the
identifier is one or more characters outside
:data:`~stripstate._constants.RESERVED_IDENTIFIER_CHARS`.

Recognition is a small hand-written scanner rather than a regular
expression. It matches exactly what ``PREFIX([^\\x7f<>&'"]+)SUFFIX``
would: leftmost match first, greedy identifier, and scanning resumes
right after each match.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from stripstate._constants import MARKER_PREFIX, MARKER_SUFFIX, RESERVED_IDENTIFIER_CHARS
from stripstate.exceptions import InvalidMarkerError
from stripstate.models import MarkerMatch


def is_valid_identifier(identifier: str) -> bool:
    return bool(identifier) and not any(c in RESERVED_IDENTIFIER_CHARS for c in identifier)


class MarkerCodec:
    """Find, parse, rewrite and remove marker tokens in text."""

    def __init__(self, prefix: str = MARKER_PREFIX, suffix: str = MARKER_SUFFIX) -> None:
        if not prefix or not suffix:
            raise ValueError("marker prefix and suffix must be non-empty")
        self._prefix = prefix
        self._suffix = suffix

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def suffix(self) -> str:
        return self._suffix

    def find_all(self, text: str) -> Iterator[MarkerMatch]:
        """Yield every marker token in *text*, left to right."""
        prefix, suffix = self._prefix, self._suffix
        length = len(text)
        pos = 0
        while True:
            start = text.find(prefix, pos)
            if start < 0:
                return
            ident_start = start + len(prefix)
            ident_end = ident_start
            while ident_end < length and text[ident_end] not in RESERVED_IDENTIFIER_CHARS:
                ident_end += 1
            # The suffix must start inside the identifier run and leave it non-empty.
            suffix_at = text.rfind(suffix, ident_start + 1, ident_end + len(suffix))
            if suffix_at < 0:
                pos = start + 1
                continue
            end = suffix_at + len(suffix)
            yield MarkerMatch(
                identifier=text[ident_start:suffix_at],
                token=text[start:end],
                start=start,
                end=end,
            )
            pos = end

    def parse(self, token: str) -> str | None:
        """Return the identifier if *token* is exactly one marker, else ``None``."""
        match = next(self.find_all(token), None)
        if match is None or match.start != 0 or match.end != len(token):
            return None
        return match.identifier

    def sub(self, text: str, replace: Callable[[MarkerMatch], str]) -> str:
        """Replace every marker token with ``replace(match)``."""
        parts: list[str] = []
        pos = 0
        for match in self.find_all(text):
            parts.append(text[pos : match.start])
            parts.append(replace(match))
            pos = match.end
        if not parts:
            return text
        parts.append(text[pos:])
        return "".join(parts)

    def strip_all(self, text: str) -> str:
        """Remove every marker token from *text*.

        Removal can splice the halves of a new marker together, so this
        repeats until the text no longer changes.
        """
        while True:
            stripped = self.sub(text, lambda _match: "")
            if stripped == text:
                return text
            text = stripped

    def make_marker(self, identifier: str) -> str:
        """Mint the marker token for *identifier*."""
        if not is_valid_identifier(identifier):
            raise InvalidMarkerError(f"Invalid marker identifier: {identifier!r}", marker=identifier)
        token = f"{self._prefix}{identifier}{self._suffix}"
        if self.parse(token) != identifier:
            raise InvalidMarkerError(f"Identifier does not round-trip: {identifier!r}", marker=token)
        return token


class MarkerMinter:
    """Mint sequential markers (``<kind>-<index:08X>``) for one document."""

    def __init__(self, codec: MarkerCodec | None = None) -> None:
        self._codec = codec or MarkerCodec()
        self._index = 0

    def mint(self, kind: str = "item") -> str:
        token = self._codec.make_marker(f"{kind}-{self._index:08X}")
        self._index += 1
        return token
