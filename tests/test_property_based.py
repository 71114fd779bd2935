"""Property-based tests using hypothesis."""

import re

from hypothesis import given, strategies as st

from ircformat import ColorPalette, to_html, to_plain_text
from ircformat.formatting.renderer import SpanStackRenderer
from ircformat.formatting.scanner import scan

CONTROL = "\x02\x03\x0f\x13\x15\x16\x1d\x1f"
TOGGLES = "\x02\x13\x15\x16\x1d\x1f"

# Text rich in control codes, digits, commas and markup characters
irc_text = st.text(alphabet=st.sampled_from(list(CONTROL + "0123456789,<>&. :/abcXY")), max_size=60)

_GENERATED_TAG = re.compile(r"<span [^>]*>|</span>")


class TestPropertyBased:
    """Property-based tests for invariants."""

    @given(st.text())
    def test_plain_text_idempotent(self, text):
        once = to_plain_text(text)
        assert to_plain_text(once) == once

    @given(irc_text)
    def test_plain_text_idempotent_on_control_heavy_text(self, text):
        once = to_plain_text(text)
        assert to_plain_text(once) == once
        assert not any(c in once for c in CONTROL)
        assert len(once) <= len(text)

    @given(irc_text)
    def test_html_never_contains_literal_less_than(self, text):
        out = to_html(text, url_pattern=None)
        assert "<" not in _GENERATED_TAG.sub("", out)

    @given(st.lists(st.tuples(st.sampled_from(list(TOGGLES)), st.text(alphabet="abc xyz", max_size=5))))
    def test_reset_closes_exactly_the_open_spans(self, pieces):
        text = "".join(code + literal for code, literal in pieces) + "\x0f"
        out = to_html(text, url_pattern=None)
        assert out.count("<span") == out.count("</span>")
        assert SpanStackRenderer(ColorPalette()).render(text).depth == 0

    @given(irc_text)
    def test_depth_never_negative_and_balanced_output_is_well_formed(self, text):
        result = SpanStackRenderer(ColorPalette()).render(text)
        assert result.depth >= 0
        out = to_html(text, url_pattern=None, balanced=True)
        assert out.count("<span") == out.count("</span>")

    @given(irc_text)
    def test_scanner_tokens_tile_the_input(self, text):
        tokens = list(scan(text))
        position = 0
        for token in tokens:
            assert token.start == position
            assert token.end > token.start
            position = token.end
        assert position == len(text)

    @given(st.text(alphabet=st.characters(exclude_characters=CONTROL + "<.:/")))
    def test_text_without_codes_or_hints_is_unchanged(self, text):
        assert to_html(text) == text
