"""Tests for tui/keys.py - key decoding."""

from __future__ import annotations

import pytest

from timetrack.tui.keys import (
    Backspace,
    Char,
    Down,
    Enter,
    Escape,
    Interrupt,
    Up,
    decode,
    from_textual,
)


class TestDecode:
    """Tests for raw terminal sequence decoding."""

    @pytest.mark.parametrize(
        "sequence, expected",
        [
            ("\x1b[A", Up()),
            ("\x1bOA", Up()),
            ("\x1b[B", Down()),
            ("\r", Enter()),
            ("\n", Enter()),
            ("\x7f", Backspace()),
            ("\b", Backspace()),
            ("\x1b", Escape()),
            ("\x03", Interrupt()),
            ("a", Char("a")),
            (" ", Char(" ")),
            ("é", Char("é")),
        ],
    )
    def test_known_sequences(self, sequence: str, expected) -> None:
        assert decode(sequence) == expected

    def test_bytes_are_decoded(self) -> None:
        assert decode(b"\x1b[A") == Up()
        assert decode("ü".encode()) == Char("ü")

    @pytest.mark.parametrize("sequence", ["\x1b[C", "\x01", "ab", ""])
    def test_unknown_sequences_are_ignored(self, sequence: str) -> None:
        assert decode(sequence) is None


class TestFromTextual:
    """Tests for textual key name decoding."""

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("up", Up()),
            ("down", Down()),
            ("enter", Enter()),
            ("backspace", Backspace()),
            ("escape", Escape()),
            ("ctrl+c", Interrupt()),
        ],
    )
    def test_named_keys(self, key: str, expected) -> None:
        assert from_textual(key, None) == expected

    def test_printable_character(self) -> None:
        assert from_textual("a", "a") == Char("a")
        assert from_textual("space", " ") == Char(" ")
        assert from_textual("full_stop", ".") == Char(".")

    def test_non_printable_is_ignored(self) -> None:
        assert from_textual("left", None) is None
        assert from_textual("tab", "\t") is None
