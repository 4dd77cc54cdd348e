"""
Configuration Module for the contact book.

Settings live in YAML. The bundled config/settings.yaml holds every
default; a user file (``--config`` or the CARDBOOK_CONFIG environment
variable) only needs the keys it changes and is merged on top of it.
"""

import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_SETTINGS = Path(__file__).parent / "settings.yaml"
CONFIG_ENV_VAR = "CARDBOOK_CONFIG"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` applied, section by section."""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read one YAML mapping.

    Raises:
        FileNotFoundError: If ``path`` doesn't exist.
        ValueError: If the file does not hold a mapping.
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


class ConfigurationManager:
    """
    Process-wide settings for the contact book.

    Attributes:
        config_path (Path): User override file, or None for defaults only.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("ocr.max_images")
        5
        >>> config.set("storage.backend", "sqlite")
        >>> config.get("storage.backend")
        'sqlite'
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load defaults and the optional user file.

        Only the first construction loads anything; later calls return
        the same instance untouched until reset() is called.

        Args:
            config_path: User settings file. Falls back to the
                         CARDBOOK_CONFIG environment variable.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
        self.config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Build the effective configuration.

        Raises:
            FileNotFoundError: If a configuration file doesn't exist.
            yaml.YAMLError: If a configuration file is invalid.
        """
        config = _read_yaml(DEFAULT_SETTINGS)
        if self.config_path is not None:
            config = _deep_merge(config, _read_yaml(self.config_path))

        self._config = config
        self._resolve_paths()

    def _resolve_paths(self) -> None:
        """Make relative ``paths.*`` and the log file absolute, under the project root."""
        project_root = Path(__file__).parent.parent

        for key, value in (self._config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                self._config['paths'][key] = str(project_root / value)

        log_file = self.get('logging.file.path')
        if log_file and not Path(log_file).is_absolute():
            self._config['logging']['file']['path'] = str(project_root / log_file)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., "storage.key").
            default: Returned when any part of the key is missing.

        Returns:
            Configuration value or default.
        """
        value = self._config
        try:
            for k in key.split('.'):
                value = value[k]
        except (KeyError, TypeError):
            return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Override a configuration value in memory.

        Used by the CLI for flags such as ``--store`` and ``--data-dir``.
        """
        *parents, leaf = key.split('.')
        node = self._config
        for k in parents:
            node = node.setdefault(k, {})
        node[leaf] = value

    @classmethod
    def reset(cls) -> None:
        """Drop the loaded instance so the next access reloads from disk."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ``ConfigurationManager().get(key, default)``.

    Example:
        >>> get_config("storage.quota_bytes")
        5242880
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
