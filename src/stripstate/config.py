"""Engine configuration for stripstate."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from stripstate._constants import (
    ERROR_CLASS,
    MAX_UNSTRIP_RECURSION_LIMIT,
    MERGE_TAG_LENGTH,
    UNSTRIP_RECURSION_LIMIT,
)
from stripstate.exceptions import StripConfigError


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise StripConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class StripConfig:
    """Strip state configuration.

    Parameters
    ----------
    recursion_limit : int
        Maximum nesting depth when unstripping a marker whose value
        contains further markers. Markers found at this depth are
        replaced by an inline error span instead of being expanded.
        At most ``MAX_UNSTRIP_RECURSION_LIMIT`` (100).
    merge_tag_length : int
        Number of characters in the random tag prepended to identifiers
        absorbed by :meth:`StripState.merge`.
    error_class : str
        CSS class of the ``<span>`` wrapping inline loop/limit errors.
    """

    recursion_limit: int = UNSTRIP_RECURSION_LIMIT
    merge_tag_length: int = MERGE_TAG_LENGTH
    error_class: str = ERROR_CLASS

    def __post_init__(self) -> None:
        if not 0 <= self.recursion_limit <= MAX_UNSTRIP_RECURSION_LIMIT:
            raise StripConfigError(
                f"recursion_limit must be between 0 and {MAX_UNSTRIP_RECURSION_LIMIT}, got {self.recursion_limit}"
            )
        if self.merge_tag_length < 1:
            raise StripConfigError(f"merge_tag_length must be >= 1, got {self.merge_tag_length}")
        if not self.error_class or any(c in self.error_class for c in "\"'<>&"):
            raise StripConfigError(f"error_class is not a valid class name: {self.error_class!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StripConfig:
        """Create configuration from environment variables.

        Reads ``STRIPSTATE_RECURSION_LIMIT``, ``STRIPSTATE_MERGE_TAG_LENGTH``
        and ``STRIPSTATE_ERROR_CLASS``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        limit_env = env.get("STRIPSTATE_RECURSION_LIMIT")
        if limit_env is not None and "recursion_limit" not in overrides:
            config_kwargs["recursion_limit"] = _env_int("STRIPSTATE_RECURSION_LIMIT", limit_env)

        tag_env = env.get("STRIPSTATE_MERGE_TAG_LENGTH")
        if tag_env is not None and "merge_tag_length" not in overrides:
            config_kwargs["merge_tag_length"] = _env_int("STRIPSTATE_MERGE_TAG_LENGTH", tag_env)

        class_env = env.get("STRIPSTATE_ERROR_CLASS")
        if class_env is not None:
            config_kwargs["error_class"] = class_env.strip()

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
