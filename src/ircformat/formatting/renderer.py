"""Convert IRC control codes to HTML span elements."""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from ircformat.core.constants import (
    ATTRIBUTE_MARKUP,
    DEFAULT_BACKGROUND,
    DEFAULT_FOREGROUND,
    Attribute,
    OutputMode,
)
from ircformat.core.errors import LinkPatternError
from ircformat.formatting.links import DEFAULT_URL_PATTERN, LinkDetector
from ircformat.formatting.scanner import ColorDirective, ControlCodeScanner, Literal, Reset, StyleToggle
from ircformat.palette import ColorPalette

CLOSE_SPAN = "</span>"

# A dot, slash or colon not surrounded by whitespace hints at a URL
_URL_HINTS = ".:/"


@dataclass
class FormatState:
    """Attributes and colors active at the current scan position."""

    attributes: Attribute = Attribute.NONE
    fg: int | None = None
    bg: int | None = None

    def clear(self) -> None:
        self.attributes = Attribute.NONE
        self.fg = None
        self.bg = None


@dataclass
class RenderResult:
    markup: str
    depth: int  # spans still open at end of input
    potential_url: bool


class SpanStackRenderer:
    """Render a token stream as nested ``<span>`` elements.

    Style codes toggle; color codes always open a new span (colors stack).
    A reset closes every open span. Spans still open at the end of the
    input are left open unless ``balanced`` is set. Only ``<`` is escaped.
    """

    def __init__(
        self,
        palette: ColorPalette,
        span_format: OutputMode = OutputMode.STYLE,
        *,
        balanced: bool = False,
    ) -> None:
        self.palette = palette
        self.span_format = OutputMode(span_format)
        self.balanced = balanced

    def open_attribute(self, attribute: Attribute) -> str:
        style, css_class = ATTRIBUTE_MARKUP[attribute]
        if self.span_format is OutputMode.STYLE:
            return f"<span style='{style}'>"
        return f"<span class='{css_class}'>"

    def open_color(self, fg: int, bg: int | None) -> str:
        fg_name = self.palette.get(fg, DEFAULT_FOREGROUND)
        bg_name = self.palette.get(bg, DEFAULT_BACKGROUND) if bg is not None else None
        if self.span_format is OutputMode.STYLE:
            styles = [f"color: {fg_name}"]
            if bg_name is not None:
                styles.append(f"background-color: {bg_name}")
            return f"<span style='{'; '.join(styles)}'>"
        classes = [fg_name]
        if bg_name is not None:
            classes.append(f"{bg_name}-background")
        return f"<span class='{' '.join(classes)}'>"

    def render(self, text: str) -> RenderResult:
        text = text.replace("<", "&lt;")
        state = FormatState()
        depth = 0
        potential_url = False
        out: list[str] = []

        def close_one() -> None:
            nonlocal depth
            if depth > 0:
                depth -= 1
                out.append(CLOSE_SPAN)

        for token in ControlCodeScanner(text):
            if isinstance(token, Literal):
                if not potential_url:
                    potential_url = _has_url_hint(text, token, out[-1][-1] if out else "")
                out.append(token.text)
            elif isinstance(token, StyleToggle):
                if state.attributes & token.attribute:
                    close_one()
                else:
                    depth += 1
                    out.append(self.open_attribute(token.attribute))
                state.attributes ^= token.attribute
            elif isinstance(token, ColorDirective):
                if token.is_reset:
                    close_one()
                    state.fg = state.bg = None
                else:
                    depth += 1
                    out.append(self.open_color(token.fg, token.bg))
                    state.fg, state.bg = token.fg, token.bg
            elif isinstance(token, Reset):
                # with nothing open the reset byte is dropped
                if depth:
                    out.append(CLOSE_SPAN * depth)
                depth = 0
                state.clear()

        if self.balanced and depth:
            out.append(CLOSE_SPAN * depth)
            depth = 0
        return RenderResult("".join(out), depth, potential_url)


def _has_url_hint(text: str, token: Literal, previous: str) -> bool:
    """True if a URL hint character in ``token`` has non-space neighbours.

    ``previous`` is the last character already emitted, which is what
    precedes the run in the output.
    """
    for i in range(token.start, token.end):
        if text[i] not in _URL_HINTS:
            continue
        before = text[i - 1] if i > token.start else previous
        if before and not before.isspace() and i + 1 < len(text) and not text[i + 1].isspace():
            return True
    return False


def to_html(
    text: str,
    palette: ColorPalette | None = None,
    span_format: OutputMode = OutputMode.STYLE,
    url_pattern: str | re.Pattern[str] | None = DEFAULT_URL_PATTERN,
    *,
    balanced: bool = False,
) -> str:
    """Convert IRC formatting in ``text`` to HTML and hyperlink URLs.

    An empty or None ``url_pattern`` disables link detection. A pattern
    that does not compile raises LinkPatternError; its ``html`` attribute
    holds the markup rendered without links.
    """
    detector = None
    pattern_error: LinkPatternError | None = None
    if url_pattern:
        try:
            detector = LinkDetector(url_pattern)
        except LinkPatternError as exc:
            pattern_error = exc

    renderer = SpanStackRenderer(palette if palette is not None else ColorPalette(), span_format, balanced=balanced)
    result = renderer.render(text)

    if pattern_error is not None:
        logger.debug("Link detection disabled: {}", pattern_error)
        pattern_error.html = result.markup
        raise pattern_error

    if detector is not None and result.potential_url:
        return detector.linkify(result.markup)
    return result.markup
