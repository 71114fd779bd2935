"""Configuration: YAML + env overlay."""

from ircformat.config.loader import _deep_update, load_config, load_config_with_env, load_env
from ircformat.config.schema import DEFAULT_CONFIG, Config, cfg

__all__ = ["DEFAULT_CONFIG", "Config", "_deep_update", "cfg", "load_config", "load_config_with_env", "load_env"]
