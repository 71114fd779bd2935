"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from ircformat.core.constants import OutputMode
from ircformat.core.errors import FormatConfigurationError
from ircformat.formatting.links import DEFAULT_URL_PATTERN, compile_link_pattern
from ircformat.palette import ColorPalette

DEFAULT_CONFIG: dict[str, Any] = {
    "span_format": OutputMode.STYLE.value,
    "link_detection": True,
    "url_pattern": DEFAULT_URL_PATTERN,
    "balanced_markup": False,
    "max_input_length": 0,
    "palette": {},
}

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "IRCFORMAT_SPAN_FORMAT",
    "IRCFORMAT_LINK_DETECTION",
    "IRCFORMAT_BALANCED_MARKUP",
)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


def _parse_bool_env(val: str) -> bool | None:
    """Parse env string to bool; None if not a recognized bool."""
    v = val.lower()
    if v in ("1", "true", "yes"):
        return True
    if v in ("0", "false", "no"):
        return False
    return None


class Config:
    """Formatter settings with defaults, env overrides and validation.

    Precedence: ``overrides`` (command line flags), then IRCFORMAT_* env,
    then config data.
    """

    def __init__(self, data: dict[str, Any] | None = None, overrides: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._overrides = overrides or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(
        self,
        data: dict[str, Any],
        *,
        overrides: dict[str, Any] | None = None,
        validate: bool = True,
    ) -> None:
        """Replace config data and flag overrides; re-read env overrides."""
        self._data = data or {}
        self._overrides = overrides or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: span_format={}, links={}", self.span_format.value, self.link_detection)

    def _validate(self) -> None:
        """Raise FormatConfigurationError on the first invalid setting."""
        self.span_format  # noqa: B018
        self.palette  # noqa: B018

        max_len = self._data.get("max_input_length", 0)
        if isinstance(max_len, bool) or not isinstance(max_len, int) or max_len < 0:
            raise FormatConfigurationError(
                "max_input_length must be a non-negative integer",
                code="invalid_max_input_length",
                details={"value": max_len},
            )

        pattern = self._data.get("url_pattern", DEFAULT_URL_PATTERN)
        if pattern is not None and not isinstance(pattern, str):
            raise FormatConfigurationError(
                "url_pattern must be a string",
                code="invalid_url_pattern",
                details={"type": type(pattern).__name__},
            )
        if pattern:
            # LinkPatternError is a FormatConfigurationError
            compile_link_pattern(pattern)

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def span_format(self) -> OutputMode:
        value = (
            self._overrides.get("span_format")
            or self._env.get("IRCFORMAT_SPAN_FORMAT")
            or self._data.get("span_format", OutputMode.STYLE.value)
        )
        try:
            return OutputMode(str(value).strip().lower())
        except ValueError as exc:
            raise FormatConfigurationError(
                f"span_format must be one of: {', '.join(m.value for m in OutputMode)}",
                code="invalid_span_format",
                details={"value": value},
                original_error=exc,
            ) from exc

    @property
    def link_detection(self) -> bool:
        if "link_detection" in self._overrides:
            return bool(self._overrides["link_detection"])
        parsed = _parse_bool_env(self._env.get("IRCFORMAT_LINK_DETECTION", ""))
        if parsed is not None:
            return parsed
        return bool(self._data.get("link_detection", True))

    @property
    def url_pattern(self) -> str:
        """Link pattern in effect; empty when link detection is off."""
        if not self.link_detection:
            return ""
        pattern = self._data.get("url_pattern", DEFAULT_URL_PATTERN)
        return pattern if isinstance(pattern, str) else ""

    @property
    def balanced_markup(self) -> bool:
        if "balanced_markup" in self._overrides:
            return bool(self._overrides["balanced_markup"])
        parsed = _parse_bool_env(self._env.get("IRCFORMAT_BALANCED_MARKUP", ""))
        if parsed is not None:
            return parsed
        return bool(self._data.get("balanced_markup", False))

    @property
    def max_input_length(self) -> int:
        """Longest input converted; 0 means unlimited."""
        return int(self._data.get("max_input_length", 0) or 0)

    @property
    def palette(self) -> ColorPalette:
        """New palette: the standard colors with ``palette:`` overrides applied."""
        overrides = self._data.get("palette") or {}
        if not isinstance(overrides, dict):
            raise FormatConfigurationError(
                "palette must be a mapping of color index to color name",
                code="invalid_palette",
                details={"type": type(overrides).__name__},
            )
        palette = ColorPalette()
        for key, color in overrides.items():
            try:
                index = int(key)
            except (TypeError, ValueError) as exc:
                raise FormatConfigurationError(
                    f"palette index {key!r} is not an integer",
                    code="invalid_palette_index",
                    details={"index": key},
                    original_error=exc,
                ) from exc
            if not isinstance(color, str) or not color.strip():
                raise FormatConfigurationError(
                    f"palette[{index}] must be a non-empty string",
                    code="invalid_palette",
                    details={"index": index, "value": color},
                )
            palette.set(index, color.strip())
        return palette


cfg: Config = Config({})
