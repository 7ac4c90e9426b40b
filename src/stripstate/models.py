"""Value types for strip state bindings.

A binding maps a marker identifier to a :data:`BoundValue`, which is one
of two cases:

* :class:`LiteralValue` - text known at strip time.
* :class:`DeferredValue` - a zero-argument producer called every time
  the marker is unstripped. The result is never cached.

Categories are the closed :class:`StripCategory` enum.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class StripCategory(StrEnum):
    NOWIKI = "nowiki"
    GENERAL = "general"


class LiteralValue(BaseModel):
    """Text bound to a marker."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["literal"] = "literal"
    text: str

    def render(self) -> str:
        return self.text


class DeferredValue(BaseModel):
    """Lazily produced text bound to a marker."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["deferred"] = "deferred"
    producer: Callable[[], str]

    def render(self) -> str:
        value = self.producer()
        if not isinstance(value, str):
            raise TypeError(f"deferred strip value producer returned {type(value).__name__}, expected str")
        return value


BoundValue = LiteralValue | DeferredValue


def to_bound_value(value: str | Callable[[], str] | BoundValue) -> BoundValue:
    """Wrap *value* in the matching :data:`BoundValue` case."""
    if isinstance(value, (LiteralValue, DeferredValue)):
        return value
    if isinstance(value, str):
        return LiteralValue(text=value)
    if callable(value):
        return DeferredValue(producer=value)
    raise TypeError(f"strip value must be a str or a zero-argument callable, got {type(value).__name__}")


@dataclasses.dataclass(frozen=True, slots=True)
class MarkerMatch:
    """A marker token found in a text."""

    identifier: str
    token: str
    start: int
    end: int
