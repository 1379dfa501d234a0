"""YAML settings for training, export, logging and the simulated lab.

Values are looked up with dotted keys such as ``training.alpha``. A key that
is absent, or present with a null value, yields the caller's default, so the
shipped ``config/default.yaml`` may leave optional settings empty.
"""

import yaml
import os
from typing import Dict, Any, Optional

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), '..', 'config', 'default.yaml')


class Config:
    """Dotted-key view over one loaded YAML document."""

    def __init__(self, config_path: Optional[str] = None):
        self._config: Dict[str, Any] = {}
        self.path: Optional[str] = None
        if config_path:
            self.load_config(config_path)
        elif os.path.exists(DEFAULT_CONFIG_PATH):
            self.load_config(DEFAULT_CONFIG_PATH)

    def load_config(self, config_path: str):
        """Replace the current settings with those of ``config_path``."""
        with open(config_path, 'r') as f:
            self._config = yaml.safe_load(f) or {}
        self.path = config_path

    def get(self, key_path: str, default=None):
        """Value at ``key_path``, or ``default`` when it is missing or null."""
        value = self._config
        try:
            for key in key_path.split('.'):
                value = value[key]
        except (KeyError, TypeError):
            return default
        return default if value is None else value

    def section(self, key_path: str) -> Dict[str, Any]:
        """Non-null entries of the mapping at ``key_path``, as a new dict.

        Suited to ``**`` expansion into a constructor whose keyword names match
        the section's keys, e.g. ``LabEnvironment(**config.section('environment'))``.
        """
        value = self.get(key_path, {})
        if not isinstance(value, dict):
            raise TypeError(f"Config key {key_path!r} is not a section")
        return {k: v for k, v in value.items() if v is not None}

    def set(self, key_path: str, value: Any):
        keys = key_path.split('.')
        node = self._config
        for key in keys[:-1]:
            node = node.setdefault(key, {})
        node[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        return self._config.copy()


config = Config()
