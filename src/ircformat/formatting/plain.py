"""Strip IRC formatting codes, leaving plain text."""

from __future__ import annotations

import re

from ircformat.core.constants import COLOR, CONTROL_CODES

# A color marker takes its fg(,bg) digits with it; other codes are single bytes.
_STRIP = re.compile(
    f"{COLOR}(?:[0-9]{{1,2}}(?:,[0-9]{{1,2}})?)?|[{re.escape(CONTROL_CODES.replace(COLOR, ''))}]"
)


def to_plain_text(text: str) -> str:
    """Remove bold/color/italic/etc. codes. Never fails; output is never longer than input."""
    if not text:
        return text
    return _STRIP.sub("", text)
