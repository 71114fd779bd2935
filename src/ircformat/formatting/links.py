"""Detect URLs and email addresses in rendered markup and turn them into links."""

from __future__ import annotations

import re
from urllib.parse import quote

from cachetools import LRUCache, cached
from loguru import logger

from ircformat.core.errors import LinkPatternError

# Characters left unescaped in generated hrefs
HREF_SAFE = ":/?@%#=+&,"

# What precedes the text following a generated anchor
_LINK_TAIL = "</a>"

# « » “ ” ‘ ’ never end a link
_QUOTES = "«»“”‘’"

# (...) with at most one nested level of parentheses
_PARENS = r"\((?:[^\s()<>]|\([^\s()<>]+\))*\)"

# Group 1: whole link. Group 2: embedded scheme, e.g. "https://".
# Repetitions use single-character alternatives so a failed match cannot
# backtrack exponentially.
DEFAULT_URL_PATTERN = (
    r"\b((?:(?:([a-z][\w.-]+:/{1,3})|www|ftp\d{0,3}[.]|[a-z0-9.\-]+[.][a-z]{2,4}/)"
    r"(?:[^\s()<>]|" + _PARENS + r")+"
    r"(?:" + _PARENS + r"|\}\]|[^\s`!()\[\]{};:'\".,<>?" + _QUOTES + r"])"
    r"|[a-z0-9.\-+_]+@[a-z0-9.\-]+[.][a-z]{1,5}[^\s/`!()\[\]{};:'\".,<>?" + _QUOTES + r"]))"
)


@cached(LRUCache(maxsize=64))
def compile_link_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a link pattern; raise LinkPatternError if it is invalid."""
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise LinkPatternError(
            f"Invalid link pattern: {exc}",
            code="invalid_url_pattern",
            details={"pattern": pattern, "position": exc.pos},
            original_error=exc,
        ) from exc
    logger.debug("Compiled link pattern with {} groups", compiled.groups)
    return compiled


def generate_link(scheme: str, href: str) -> str:
    """Anchor for ``href``; the address is percent-encoded, the text is not."""
    return f"<a href='{scheme}{quote(href, safe=HREF_SAFE)}'>{href}</a>"


class LinkDetector:
    """Rewrite every non-overlapping pattern match as an ``<a>`` element."""

    def __init__(self, pattern: str | re.Pattern[str] = DEFAULT_URL_PATTERN) -> None:
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            self.pattern = compile_link_pattern(pattern)

    def scheme_for(self, match: re.Match[str]) -> str:
        """Scheme to prepend: none when the match carries one, else mailto/ftp/http."""
        groups = self.pattern.groups
        if groups >= 2 and match.group(2):
            return ""
        link = match.group(1) if groups >= 1 and match.group(1) is not None else match.group(0)
        if "@" in link:
            return "mailto:"
        if link[:4].lower() == "ftp.":
            return "ftp://"
        return "http://"

    def linkify(self, text: str) -> str:
        """Return ``text`` with links substituted.

        Generated markup is never rescanned, but the search after a link sees
        the link's closing ``</a>`` before it, so word boundaries behave as if
        the anchor had been spliced into the text. Empty matches are ignored.
        """
        parts: list[str] = []
        links = 0
        pos = 0
        # view index = text index + shift
        view, shift = text, 0
        while pos <= len(text):
            m = self.pattern.search(view, pos + shift)
            if m is None:
                break
            start, end = m.start() - shift, m.end() - shift
            if start == end:
                if start >= len(text):
                    break
                parts.append(text[pos : start + 1])
                pos = start + 1
                view, shift = text, 0
                continue
            parts.append(text[pos:start])
            parts.append(generate_link(self.scheme_for(m), m.group(0)))
            links += 1
            pos = end
            view, shift = _LINK_TAIL + text[pos:], len(_LINK_TAIL) - pos
        if not links:
            return text
        parts.append(text[pos:])
        logger.debug("Linkified {} match(es)", links)
        return "".join(parts)


def parse_links(text: str, pattern: str | re.Pattern[str] = DEFAULT_URL_PATTERN) -> str:
    """Convenience wrapper: ``LinkDetector(pattern).linkify(text)``."""
    return LinkDetector(pattern).linkify(text)
