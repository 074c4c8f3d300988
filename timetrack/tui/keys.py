"""
Decoded key events.

The controller only ever sees these values. ``from_textual`` handles textual
key names for TrackerApp; ``decode`` handles raw terminal reads for hosts that
drive the controller from a raw-mode stdin instead. Both return None for keys
the tracker ignores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Up:
    pass


@dataclass(frozen=True)
class Down:
    pass


@dataclass(frozen=True)
class Enter:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Escape:
    pass


@dataclass(frozen=True)
class Interrupt:
    pass


@dataclass(frozen=True)
class Char:
    char: str


KeyEvent = Union[Up, Down, Enter, Backspace, Escape, Interrupt, Char]

RAW_SEQUENCES: dict[str, KeyEvent] = {
    "\x1b[A": Up(),
    "\x1bOA": Up(),
    "\x1b[B": Down(),
    "\x1bOB": Down(),
    "\r": Enter(),
    "\n": Enter(),
    "\r\n": Enter(),
    "\x7f": Backspace(),
    "\b": Backspace(),
    "\x1b": Escape(),
    "\x03": Interrupt(),
}

TEXTUAL_KEYS: dict[str, KeyEvent] = {
    "up": Up(),
    "down": Down(),
    "enter": Enter(),
    "ctrl+m": Enter(),
    "ctrl+j": Enter(),
    "backspace": Backspace(),
    "ctrl+h": Backspace(),
    "escape": Escape(),
    "ctrl+c": Interrupt(),
}


def _printable(text: str | None) -> bool:
    return bool(text) and len(text) == 1 and text.isprintable()


def decode(sequence: bytes | str) -> KeyEvent | None:
    """Decode one raw terminal read into a key event."""
    if isinstance(sequence, bytes):
        sequence = sequence.decode("utf-8", errors="ignore")
    event = RAW_SEQUENCES.get(sequence)
    if event is not None:
        return event
    if _printable(sequence):
        return Char(sequence)
    return None


def from_textual(key: str, character: str | None = None) -> KeyEvent | None:
    """Decode a textual Key event (``event.key``, ``event.character``)."""
    event = TEXTUAL_KEYS.get(key)
    if event is not None:
        return event
    if _printable(character):
        return Char(character)
    return None
