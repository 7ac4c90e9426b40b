from __future__ import annotations

from stripstate._redact import redact_for_log


def test_redact_for_log_renders_markers(marker) -> None:
    assert redact_for_log(f"a {marker('x-1')} b") == "a <marker:x-1> b"


def test_redact_for_log_truncates_long_strings() -> None:
    redacted = redact_for_log("x" * 600, max_string=10)
    assert redacted.startswith("x" * 10)
    assert "<truncated>" in redacted


def test_redact_for_log_handles_sequences(marker) -> None:
    assert redact_for_log([marker("a"), 3, None]) == ["<marker:a>", 3, None]
