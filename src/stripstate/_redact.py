"""Helpers for readable debug logging.

Stripped texts carry control bytes and can be arbitrarily large. This
module renders them in a form that is safe to emit in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from stripstate.codec import MarkerCodec

_CODEC = MarkerCodec()


def redact_for_log(value: Any, *, max_string: int = 200, _depth: int = 0) -> Any:
    """Return a copy of *value* with markers shown as ``<marker:id>``."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        text = _CODEC.sub(value, lambda m: f"<marker:{m.identifier}>")
        if len(text) > max_string:
            return f"{text[:max_string]}…<truncated>"
        return text

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
