"""Inline error messages emitted while unstripping.

Message wording is owned by the host application; :class:`StripState`
only decides *when* a message is needed. Hosts with their own
localisation layer pass any object implementing :class:`MessageFormatter`.
"""

from __future__ import annotations

from typing import Protocol


class MessageFormatter(Protocol):
    """Structural interface for the two unstrip error messages."""

    def loop_detected(self) -> str:
        ...

    def recursion_limit(self, limit: int) -> str:
        ...


class EnglishMessages:
    """Default English wording (``parser-unstrip-*`` messages)."""

    def loop_detected(self) -> str:
        return "Unstrip loop detected"

    def recursion_limit(self, limit: int) -> str:
        return f"Unstrip recursion limit reached ({limit:,})"
