"""Formatting engine exceptions."""

from __future__ import annotations


class IrcFormatError(Exception):
    """Base for text formatting errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class FormatConfigurationError(IrcFormatError):
    """Config validation or load failure."""


class LinkPatternError(FormatConfigurationError):
    """Link pattern does not compile.

    When raised by ``to_html`` the markup rendered without link detection
    is available as ``html``.
    """

    html: str | None = None
