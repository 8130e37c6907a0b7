"""
load the config from config.yaml and .env
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"

# environment variable -> (section, key)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    'CLICKHOUSE_URL': ('clickhouse', 'url'),
    'CLICKHOUSE_TIMEOUT': ('clickhouse', 'timeout'),
    'CLICKHOUSE_LENIENT_TRANSPORT': ('clickhouse', 'lenient_transport'),
    'CLICKHOUSE_STRICT_ROWS': ('clickhouse', 'strict_rows'),
    'LOG_LEVEL': ('logging', 'level'),
    'LOG_JSON': ('logging', 'json'),
}


def coerce_env_value(raw: str):
    """'true'/'false' become bools, numbers become int or float, the rest stays text."""
    lowered = raw.strip().lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'

    for number_type in (int, float):
        try:
            return number_type(raw)
        except ValueError:
            continue
    return raw


class Config:
    """Backend and logging settings: config.yaml first, environment on top."""

    def __init__(self, config_path: str = None):
        """
        Args:
            config_path: YAML file to read. Defaults to the config.yaml
                        shipped with the package.
        """
        self.config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
        self._config = self._read_yaml()
        self._merge_environment()

    def _read_yaml(self) -> Dict[str, Any]:
        if not self.config_path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            data = yaml.safe_load(self.config_path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.config_path} must hold a mapping at the top level")
        return data

    def _merge_environment(self):
        for env_var, (section, key) in ENV_OVERRIDES.items():
            raw = os.environ.get(env_var)
            if raw is None:
                continue
            if not isinstance(self._config.get(section), dict):
                self._config[section] = {}
            self._config[section][key] = coerce_env_value(raw)

    def get(self, *keys, default=None):
        """Walk nested sections, e.g. get('clickhouse', 'url').

        Returns ``default`` as soon as a key is missing or a value on the
        path is not a mapping.
        """
        node = self._config
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    @property
    def clickhouse(self) -> Dict[str, Any]:
        return self.get('clickhouse', default={})

    @property
    def logging(self) -> Dict[str, Any]:
        return self.get('logging', default={})

    @property
    def endpoint_url(self) -> str:
        """Backend URL with trailing slashes removed."""
        url = self.clickhouse.get('url')
        if not url:
            raise ConfigError(f"clickhouse.url is not set in {self.config_path}")
        return str(url).rstrip('/')


def load_config(config_path: Optional[str] = None, dotenv_path: Optional[str] = None) -> Config:
    """Read .env into the environment, then build the Config."""
    load_dotenv(dotenv_path)
    return Config(config_path)
