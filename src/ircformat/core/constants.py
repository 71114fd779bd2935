"""IRC control bytes, span formats and the standard color table."""

from __future__ import annotations

import enum

# IRC control codes
BOLD = "\x02"
COLOR = "\x03"
RESET = "\x0F"
STRIKETHROUGH = "\x13"
UNDERLINE = "\x15"
UNDERLINE_ALT = "\x1F"
INVERSE = "\x16"
ITALIC = "\x1D"

CONTROL_CODES = BOLD + COLOR + RESET + STRIKETHROUGH + UNDERLINE + UNDERLINE_ALT + INVERSE + ITALIC


class OutputMode(str, enum.Enum):
    """How emitted span elements carry their formatting."""

    STYLE = "style"  # inline style declarations
    CLASS = "class"  # symbolic CSS class names


class Attribute(enum.IntFlag):
    """Toggleable text attributes; combined into the active format state."""

    NONE = 0x0
    BOLD = 0x1
    ITALIC = 0x4
    STRIKETHROUGH = 0x8
    UNDERLINE = 0x10
    INVERSE = 0x20


TOGGLE_CODES: dict[str, Attribute] = {
    BOLD: Attribute.BOLD,
    ITALIC: Attribute.ITALIC,
    STRIKETHROUGH: Attribute.STRIKETHROUGH,
    UNDERLINE: Attribute.UNDERLINE,
    UNDERLINE_ALT: Attribute.UNDERLINE,
    INVERSE: Attribute.INVERSE,
}

# (inline style, class name) per attribute
ATTRIBUTE_MARKUP: dict[Attribute, tuple[str, str]] = {
    Attribute.BOLD: ("font-weight: bold", "bold"),
    Attribute.ITALIC: ("font-style: italic", "italic"),
    Attribute.STRIKETHROUGH: ("text-decoration: line-through", "line-through"),
    Attribute.UNDERLINE: ("text-decoration: underline", "underline"),
    Attribute.INVERSE: ("text-decoration: inverse", "inverse"),
}

DEFAULT_COLORS: dict[int, str] = {
    0: "white",
    1: "black",
    2: "navy",
    3: "green",
    4: "red",
    5: "maroon",
    6: "purple",
    7: "orange",
    8: "yellow",
    9: "lime",
    10: "darkcyan",
    11: "cyan",
    12: "royalblue",
    13: "fuchsia",
    14: "gray",
    15: "lightgray",
}

DEFAULT_FOREGROUND = "black"
DEFAULT_BACKGROUND = "transparent"
