"""Tests for marker recognition, rewriting and minting."""

from __future__ import annotations

import pytest

from stripstate._constants import MARKER_PREFIX, MARKER_SUFFIX
from stripstate.codec import MarkerCodec, MarkerMinter, is_valid_identifier
from stripstate.exceptions import InvalidMarkerError

# ------------------------------------------------------------------
# find_all / parse
# ------------------------------------------------------------------


class TestFindAll:
    def test_finds_markers_left_to_right(self, codec: MarkerCodec, marker) -> None:
        text = f"a {marker('one')} b {marker('two')}"
        matches = list(codec.find_all(text))

        assert [m.identifier for m in matches] == ["one", "two"]
        assert text[matches[0].start : matches[0].end] == marker("one")
        assert matches[1].token == marker("two")
        assert matches[1].end == len(text)

    def test_adjacent_markers(self, codec: MarkerCodec, marker) -> None:
        text = marker("a") + marker("b")
        assert [m.identifier for m in codec.find_all(text)] == ["a", "b"]

    def test_restartable_per_call(self, codec: MarkerCodec, marker) -> None:
        text = f"{marker('x')}{marker('y')}"
        first = codec.find_all(text)
        next(first)
        assert [m.identifier for m in codec.find_all(text)] == ["x", "y"]

    def test_reserved_characters_break_a_marker(self, codec: MarkerCodec) -> None:
        for bad in ("a<b", "a>b", "a&b", "a'b", 'a"b', "a\x7fb"):
            assert list(codec.find_all(f"{MARKER_PREFIX}{bad}{MARKER_SUFFIX}")) == []

    def test_empty_identifier_is_not_a_marker(self, codec: MarkerCodec) -> None:
        assert list(codec.find_all(MARKER_PREFIX + MARKER_SUFFIX)) == []

    def test_truncated_marker_is_ignored_but_later_marker_found(self, codec: MarkerCodec, marker) -> None:
        text = f"{MARKER_PREFIX}dangling {marker('ok')}"
        assert [m.identifier for m in codec.find_all(text)] == ["ok"]

    def test_plain_text_has_no_markers(self, codec: MarkerCodec) -> None:
        assert list(codec.find_all("<b>nothing 'here' & \"there\"</b>")) == []

    def test_parse_requires_exactly_one_marker(self, codec: MarkerCodec, marker) -> None:
        assert codec.parse(marker("abc123")) == "abc123"
        assert codec.parse(f"x{marker('abc123')}") is None
        assert codec.parse(f"{marker('abc123')} ") is None
        assert codec.parse(marker("a") + marker("b")) is None
        assert codec.parse("abc123") is None

    def test_custom_delimiters(self) -> None:
        codec = MarkerCodec(prefix="\x7f'\"`UNIQ", suffix="QINU\"'\x7f")
        token = "\x7f'\"`UNIQabc123QINU\"'\x7f"
        assert codec.parse(token) == "abc123"

    def test_empty_delimiters_rejected(self) -> None:
        with pytest.raises(ValueError):
            MarkerCodec(prefix="", suffix="x")


# ------------------------------------------------------------------
# sub / strip_all
# ------------------------------------------------------------------


class TestRewrite:
    def test_sub_replaces_each_marker(self, codec: MarkerCodec, marker) -> None:
        text = f"[{marker('a')}|{marker('b')}]"
        assert codec.sub(text, lambda m: m.identifier.upper()) == "[A|B]"

    def test_sub_without_markers_returns_input(self, codec: MarkerCodec) -> None:
        assert codec.sub("plain", lambda m: "x") == "plain"

    def test_strip_all_removes_markers(self, codec: MarkerCodec, marker) -> None:
        assert codec.strip_all(f"a {marker('x')}b{marker('y')} c") == "a b c"

    def test_strip_all_is_idempotent_when_removal_splices_a_marker(self, codec: MarkerCodec, marker) -> None:
        spliced = MARKER_PREFIX[:4] + marker("inner") + MARKER_PREFIX[4:] + "outer" + MARKER_SUFFIX
        stripped = codec.strip_all(spliced)

        assert stripped == ""
        assert codec.strip_all(stripped) == stripped

    def test_strip_all_idempotent_on_plain_text(self, codec: MarkerCodec) -> None:
        text = "\x7f'\"`UNIQ- no suffix here"
        assert codec.strip_all(codec.strip_all(text)) == codec.strip_all(text) == text


# ------------------------------------------------------------------
# Minting
# ------------------------------------------------------------------


class TestMinting:
    def test_make_marker_format(self, codec: MarkerCodec) -> None:
        assert codec.make_marker("abc") == f"{MARKER_PREFIX}abc{MARKER_SUFFIX}"

    def test_identifier_containing_suffix_lookalike_round_trips(self, codec: MarkerCodec) -> None:
        identifier = "a-QINU`b"
        assert codec.parse(codec.make_marker(identifier)) == identifier

    @pytest.mark.parametrize("identifier", ["", "a<b", "x&y", "q'", "\x7f"])
    def test_make_marker_rejects_invalid_identifiers(self, codec: MarkerCodec, identifier: str) -> None:
        assert not is_valid_identifier(identifier)
        with pytest.raises(InvalidMarkerError):
            codec.make_marker(identifier)

    def test_minter_produces_sequential_markers(self, codec: MarkerCodec) -> None:
        minter = MarkerMinter(codec)
        first = minter.mint("nowiki")
        second = minter.mint("nowiki")

        assert codec.parse(first) == "nowiki-00000000"
        assert codec.parse(second) == "nowiki-00000001"
        assert codec.parse(minter.mint()) == "item-00000002"
