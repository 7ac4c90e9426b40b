"""Holder for stripped items while text moves through a markup pipeline.

Producers replace spans of text with marker tokens and bind the original
content (or a producer for it) in a :class:`StripState`. Later stages
leave the markers alone, and :meth:`StripState.unstrip_both` finally puts
the content back.
"""

from __future__ import annotations

import dataclasses
import html
import logging
import secrets
from collections.abc import Callable, Iterable

from stripstate._redact import redact_for_log
from stripstate.codec import MarkerCodec, is_valid_identifier
from stripstate.config import StripConfig
from stripstate.exceptions import InvalidMarkerError
from stripstate.messages import EnglishMessages, MessageFormatter
from stripstate.models import BoundValue, MarkerMatch, StripCategory, to_bound_value

_logger = logging.getLogger(__name__)


def random_tag(length: int) -> str:
    """Random lowercase hex string of *length* characters."""
    return secrets.token_hex((length + 1) // 2)[:length]


@dataclasses.dataclass
class _UnstripContext:
    """Per-call recursion state, threaded through nested unstrip calls."""

    category: StripCategory
    guard: set[str] = dataclasses.field(default_factory=set)
    depth: int = 0


class StripState:
    """Marker -> value bindings, split into :class:`StripCategory` buckets.

    Resolution never removes bindings, so the same state can unstrip any
    number of text fragments. Not thread-safe: use one state per worker
    and combine them with :meth:`merge`.
    """

    def __init__(
        self,
        *,
        config: StripConfig | None = None,
        formatter: MessageFormatter | None = None,
        tag_factory: Callable[[int], str] = random_tag,
        codec: MarkerCodec | None = None,
    ) -> None:
        self._config = config or StripConfig()
        self._formatter: MessageFormatter = formatter or EnglishMessages()
        self._tag_factory = tag_factory
        self._codec = codec or MarkerCodec()
        self._data: dict[StripCategory, dict[str, BoundValue]] = {category: {} for category in StripCategory}

    @property
    def config(self) -> StripConfig:
        return self._config

    @property
    def codec(self) -> MarkerCodec:
        return self._codec

    def __len__(self) -> int:
        return sum(len(items) for items in self._data.values())

    def identifiers(self, category: StripCategory | str) -> tuple[str, ...]:
        """Sorted identifiers bound in *category*."""
        return tuple(sorted(self._data[StripCategory(category)]))

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def add(self, category: StripCategory | str, marker: str, value: str | Callable[[], str] | BoundValue) -> None:
        """Bind *value* to *marker* in *category*, replacing any previous binding.

        Raises :class:`InvalidMarkerError` if *marker* is not exactly one
        marker token.
        """
        category = StripCategory(category)
        identifier = self._codec.parse(marker)
        if identifier is None:
            raise InvalidMarkerError(f"Invalid marker: {redact_for_log(marker)}", marker=marker)
        self._data[category][identifier] = to_bound_value(value)

    def add_nowiki(self, marker: str, value: str | Callable[[], str] | BoundValue) -> None:
        self.add(StripCategory.NOWIKI, marker, value)

    def add_general(self, marker: str, value: str | Callable[[], str] | BoundValue) -> None:
        self.add(StripCategory.GENERAL, marker, value)

    # ------------------------------------------------------------------
    # Unstripping
    # ------------------------------------------------------------------

    def unstrip(self, category: StripCategory | str, text: str) -> str:
        """Replace markers bound in *category* with their values.

        Markers of other categories and unbound markers are left as they
        are. Values are unstripped recursively; self-references and chains
        deeper than ``config.recursion_limit`` become inline error spans.
        """
        return self._unstrip(text, _UnstripContext(category=StripCategory(category)))

    def unstrip_nowiki(self, text: str) -> str:
        return self.unstrip(StripCategory.NOWIKI, text)

    def unstrip_general(self, text: str) -> str:
        return self.unstrip(StripCategory.GENERAL, text)

    def unstrip_both(self, text: str) -> str:
        """Unstrip nowiki items, then general items."""
        text = self.unstrip(StripCategory.NOWIKI, text)
        return self.unstrip(StripCategory.GENERAL, text)

    def _unstrip(self, text: str, context: _UnstripContext) -> str:
        items = self._data[context.category]
        if not items:
            return text

        def replace(match: MarkerMatch) -> str:
            return self._unstrip_match(match, items, context)

        return self._codec.sub(text, replace)

    def _unstrip_match(self, match: MarkerMatch, items: dict[str, BoundValue], context: _UnstripContext) -> str:
        identifier = match.identifier
        value = items.get(identifier)
        if value is None:
            return match.token

        if identifier in context.guard:
            _logger.warning("Unstrip loop detected category=%s marker=%s", context.category, identifier)
            return self._error_span(self._formatter.loop_detected())

        limit = self._config.recursion_limit
        if context.depth >= limit:
            _logger.warning(
                "Unstrip recursion limit %d reached category=%s marker=%s",
                limit,
                context.category,
                identifier,
            )
            return self._error_span(self._formatter.recursion_limit(limit))

        context.guard.add(identifier)
        context.depth += 1
        try:
            return self._unstrip(value.render(), context)
        finally:
            context.depth -= 1
            context.guard.discard(identifier)

    def _error_span(self, message: str) -> str:
        return f'<span class="{self._config.error_class}">{html.escape(message, quote=False)}</span>'

    def kill_markers(self, text: str) -> str:
        """Remove any strip markers found in *text*."""
        return self._codec.strip_all(text)

    # ------------------------------------------------------------------
    # State algebra
    # ------------------------------------------------------------------

    def get_sub_state(self, text: str) -> StripState:
        """Return a new state holding only the bindings *text* refers to.

        Markers that are not bound here are skipped. Nowiki bindings take
        precedence over general ones with the same identifier.
        """
        sub_state = StripState(
            config=self._config,
            formatter=self._formatter,
            tag_factory=self._tag_factory,
            codec=self._codec,
        )
        for match in self._codec.find_all(text):
            for category in StripCategory:
                value = self._data[category].get(match.identifier)
                if value is not None:
                    sub_state._data[category][match.identifier] = value
                    break
        _logger.debug("Sub state extracted items=%d of %d", len(sub_state), len(self))
        return sub_state

    def merge(self, other: StripState, texts: Iterable[str]) -> list[str]:
        """Absorb *other*'s bindings and rewrite the markers in *texts*.

        Keys are not preserved: every identifier from *other* is prefixed
        with a fresh random tag, and every marker in *texts* is rewritten
        to match. Returns the rewritten texts in input order. Nothing is
        changed if the call raises.
        """
        if isinstance(texts, str):
            raise TypeError("texts must be an iterable of strings, not a single string")
        texts = list(texts)
        for text in texts:
            if not isinstance(text, str):
                raise TypeError(f"texts must contain only strings, got {type(text).__name__}")

        tag = self._tag_factory(self._config.merge_tag_length)
        if not is_valid_identifier(tag):
            raise InvalidMarkerError(f"Merge tag is not a valid identifier: {tag!r}", marker=tag)

        def retag(match: MarkerMatch) -> str:
            return self._codec.make_marker(f"{tag}-{match.identifier}")

        rewritten = [other._codec.sub(text, retag) for text in texts]

        staged = {
            category: {f"{tag}-{identifier}": value for identifier, value in items.items()}
            for category, items in other._data.items()
        }
        for category, items in staged.items():
            self._data[category].update(items)

        _logger.debug("Merged strip state tag=%s items=%d texts=%d", tag, len(other), len(rewritten))
        return rewritten
