"""
Configuration loading and management.

This module provides tools for loading YAML configuration files and accessing
their contents in a structured way. A batcher can be built from a section of
such a file, e.g.::

    batch:
      size: 500
      name: ingest
"""

from typing import Any, Dict, Optional
import yaml
import os


class Config:
    """
    A wrapper around a dictionary for managing configuration.

    It provides a `get` method that allows accessing nested values using
    dot-notation (e.g., 'batch.size').
    """

    def __init__(self, config_data: Optional[Dict[str, Any]]):
        self._config = config_data or {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Access a config value using dot notation.

        Example:
            >>> config = Config({'batch': {'size': 100}})
            >>> config.get('batch.size')
            100
            >>> config.get('batch.name', 'default_value')
            'default_value'

        :param key: The dot-separated key for the desired value.
        :param default: The value to return if the key is not found.
        :return: The configuration value or the default.
        """
        value = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return default
            value = value[k]
        return value

    def section(self, key: str) -> "Config":
        """Returns the nested mapping at `key` as its own Config."""
        value = self.get(key)
        return Config(value if isinstance(value, dict) else {})

    def __repr__(self) -> str:
        return f"Config(config_data={self._config})"


def load_config(path: Optional[str]) -> Config:
    """
    Loads a YAML configuration file from the given path.

    If the path is None or does not exist, it returns an empty Config object.

    :param path: The path to the YAML configuration file.
    :return: A Config object with the loaded data.
    """
    if not path or not os.path.exists(path):
        return Config({})

    with open(path, "r") as f:
        config_data = yaml.safe_load(f)

    return Config(config_data)
