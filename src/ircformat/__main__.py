"""Command line entrypoint: convert IRC-formatted text to HTML or plain text."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from loguru import logger

from ircformat import __version__
from ircformat.config import DEFAULT_CONFIG, Config, cfg, load_config, load_env
from ircformat.core.constants import OutputMode
from ircformat.core.errors import FormatConfigurationError
from ircformat.formatting import to_html, to_plain_text


def _safe_message_filter(record: Any) -> bool:
    """Escape braces/angles in log messages to prevent format/tag errors."""
    if isinstance(record.get("message"), str):
        msg = record["message"]
        msg = msg.replace("{", "{{").replace("}", "}}").replace("<", "\\<")
        record["message"] = msg
    return True


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru on stderr.
    Level: verbose=True or LOG_LEVEL=DEBUG enables DEBUG; otherwise WARNING,
    so that normal runs keep the terminal for converted output."""
    level = "WARNING"
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.enable("ircformat")
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=("<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}"),
        filter=_safe_message_filter,
    )


def reload_config(config_path: Path | None, overrides: dict[str, Any] | None = None) -> Config:
    """Load .env and config (defaults when no path) and update global cfg.

    ``overrides`` come from command line flags and beat both the file and
    the IRCFORMAT_* environment.
    """
    load_env()
    data = load_config(config_path, DEFAULT_CONFIG) if config_path else dict(DEFAULT_CONFIG)
    cfg.reload(data, overrides=overrides)
    return cfg


def convert(text: str, config: Config, plain: bool = False) -> str:
    """Convert one message according to ``config``."""
    limit = config.max_input_length
    if limit and len(text) > limit:
        logger.warning("Input of {} characters truncated to {}", len(text), limit)
        text = text[:limit]
    if plain:
        return to_plain_text(text)
    return to_html(
        text,
        config.palette,
        config.span_format,
        config.url_pattern,
        balanced=config.balanced_markup,
    )


def _inputs(texts: list[str]) -> Iterable[str]:
    if texts:
        yield from texts
        return
    for line in sys.stdin:
        yield line.rstrip("\r\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ircformat",
        description="Convert mIRC-formatted text to HTML (or strip it to plain text)",
    )
    parser.add_argument("text", nargs="*", help="Messages to convert (default: read lines from stdin)")
    parser.add_argument("--config", "-c", type=Path, default=None, help="Path to YAML config file")
    parser.add_argument("--plain", action="store_true", help="Strip formatting instead of rendering HTML")
    parser.add_argument(
        "--span-format",
        choices=[m.value for m in OutputMode],
        default=None,
        help="Emit inline styles or CSS classes (default: from config, else style)",
    )
    parser.add_argument("--no-links", action="store_true", help="Disable URL/email detection")
    parser.add_argument("--balanced", action="store_true", help="Close spans left open at end of input")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    if args.config is not None and not args.config.exists():
        logger.error("Config file not found: {}", args.config)
        return 1

    overrides: dict[str, Any] = {}
    if args.span_format:
        overrides["span_format"] = args.span_format
    if args.no_links:
        overrides["link_detection"] = False
    if args.balanced:
        overrides["balanced_markup"] = True

    try:
        config = reload_config(args.config, overrides)
    except FormatConfigurationError as exc:
        logger.error("Invalid configuration ({}): {}", exc.code, exc)
        return 2
    logger.debug("Config loaded from {}", args.config or "defaults")

    for text in _inputs(args.text):
        print(convert(text, config, plain=args.plain))
    return 0


if __name__ == "__main__":
    sys.exit(main())
