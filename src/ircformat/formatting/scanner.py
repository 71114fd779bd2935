"""Lex IRC text into literal runs and control-code tokens."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ircformat.core.constants import COLOR, CONTROL_CODES, RESET, TOGGLE_CODES, Attribute

# fg(,bg) right after the color marker; ASCII digits only
_COLOR_DIGITS = re.compile(r"([0-9]{1,2})(?:,([0-9]{1,2}))?")

_CONTROL = re.compile(f"[{re.escape(CONTROL_CODES)}]")


@dataclass(frozen=True)
class Literal:
    """Run of plain text between control codes."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class StyleToggle:
    attribute: Attribute
    start: int
    end: int


@dataclass(frozen=True)
class ColorDirective:
    """Color marker. ``fg is None`` means no digits followed: close the innermost color."""

    fg: int | None
    bg: int | None
    start: int
    end: int

    @property
    def is_reset(self) -> bool:
        return self.fg is None


@dataclass(frozen=True)
class Reset:
    start: int
    end: int


Token = Literal | StyleToggle | ColorDirective | Reset


def parse_colors(text: str, pos: int) -> tuple[int, int | None, int | None]:
    """Parse ``fg(,bg)`` digits starting at ``pos``.

    Returns ``(length, fg, bg)``; length is 0 and both colors are None when
    no digit is found at ``pos``.
    """
    m = _COLOR_DIGITS.match(text, pos)
    if not m:
        return 0, None, None
    bg = int(m.group(2)) if m.group(2) is not None else None
    return m.end() - pos, int(m.group(1)), bg


class ControlCodeScanner:
    """Iterator over the tokens of ``text``, strictly left to right.

    Every character of the input belongs to exactly one token; token spans
    are contiguous and never overlap. Any input can be scanned.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        text, pos = self.text, self.pos
        if pos >= len(text):
            raise StopIteration

        code = text[pos]
        if code not in CONTROL_CODES:
            m = _CONTROL.search(text, pos)
            end = m.start() if m else len(text)
            self.pos = end
            return Literal(text[pos:end], pos, end)

        if code == COLOR:
            length, fg, bg = parse_colors(text, pos + 1)
            self.pos = pos + 1 + length
            return ColorDirective(fg, bg, pos, self.pos)

        self.pos = pos + 1
        if code == RESET:
            return Reset(pos, self.pos)
        return StyleToggle(TOGGLE_CODES[code], pos, self.pos)


def scan(text: str) -> ControlCodeScanner:
    """Return a lazy token stream for ``text``."""
    return ControlCodeScanner(text)
