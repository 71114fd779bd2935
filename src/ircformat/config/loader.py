"""Config loading: YAML file (optionally a section of a larger one) + .env."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

# Files shared with a host application may nest our settings under this key
SECTION = "ircformat"


def _deep_update(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base; base is left untouched."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_update(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str | Path, defaults: dict[str, Any] | None = None) -> dict[str, Any]:
    """Read formatter settings from a YAML file, overlaid on ``defaults``.

    A missing file or a document that is not a mapping yields the defaults.
    YAML syntax errors are logged and re-raised.
    """
    base = dict(defaults or {})
    path = Path(path)
    if not path.exists():
        logger.warning("Config file not found: {}", path)
        return base

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse config {}: {}", path, exc)
        raise

    if isinstance(data, dict) and isinstance(data.get(SECTION), dict):
        data = data[SECTION]
    if not isinstance(data, dict):
        logger.warning("Config file {} has invalid structure (expected dict)", path)
        return base
    logger.debug("Loaded {} key(s) from {}", len(data), path)
    return _deep_update(base, data)


def load_env() -> None:
    """Load .env from the working directory (or a parent) into the process environment."""
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))


def load_config_with_env(path: str | Path, defaults: dict[str, Any] | None = None) -> dict[str, Any]:
    """Load .env into the process environment, then the YAML config."""
    load_env()
    return load_config(path, defaults)
