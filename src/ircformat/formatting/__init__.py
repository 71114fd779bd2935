"""IRC text formatting: control codes to HTML or plain text."""

from ircformat.formatting.links import DEFAULT_URL_PATTERN, LinkDetector, parse_links
from ircformat.formatting.plain import to_plain_text
from ircformat.formatting.renderer import FormatState, SpanStackRenderer, to_html
from ircformat.formatting.scanner import ControlCodeScanner, scan

__all__ = [
    "DEFAULT_URL_PATTERN",
    "ControlCodeScanner",
    "FormatState",
    "LinkDetector",
    "SpanStackRenderer",
    "parse_links",
    "scan",
    "to_html",
    "to_plain_text",
]
