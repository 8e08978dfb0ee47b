"""
Configuration Module for the Invoice Interpretation Engine.

Runtime settings for the interpreter, read from a YAML file. Only ambient
settings live here (logging, date formats, page fan-in,
validation thresholds). The locale vocabularies and VAT rate tables are
compiled-in data in invoice_interpreter.locales.tables and are
not configurable.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from invoice_interpreter.utils.exceptions import ConfigurationError


class ConfigurationManager:
    """
    Centralized configuration management for the interpretation engine.

    This class handles loading and providing access to the configuration
    parameters defined in settings.yaml.

    Attributes:
        config_path (Path): Path to the configuration file.

    Example:
        >>> config = ConfigurationManager()
        >>> config.get("logging.level")
        'INFO'
        >>> config.get("capture.max_workers")
        4
    """

    _instance: Optional['ConfigurationManager'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        """
        Return the process-wide settings instance, creating it on first use.

        Args:
            config_path: Optional path to configuration file.

        Returns:
            ConfigurationManager instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Load settings once; later constructions reuse them.

        Args:
            config_path: Optional path to configuration file.
                        Defaults to the bundled settings.yaml.
        """
        if self._initialized:
            return

        if config_path is None:
            self.config_path = Path(__file__).parent / "settings.yaml"
        else:
            self.config_path = Path(config_path)

        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Read and check the YAML settings file.

        Raises:
            ConfigurationError: If the file doesn't exist or is not a mapping.
            yaml.YAMLError: If the file is not valid YAML.
        """
        if not self.config_path.exists():
            raise ConfigurationError(str(self.config_path), "file not found")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(str(self.config_path), "top level must be a mapping")

        self._config = loaded
        self._resolve_paths()

    def _resolve_paths(self) -> None:
        """
        Resolve the relative log file path against the working directory.
        """
        log_path = self.get("logging.file.path")
        if log_path and not Path(log_path).is_absolute():
            self._config['logging']['file']['path'] = str(Path.cwd() / log_path)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a nested setting by dotted path.

        Args:
            key: Configuration key in dot notation (e.g., "logging.level").
            default: Default value if key doesn't exist.

        Returns:
            Configuration value or default.

        Example:
            >>> config.get("fields.date.input_formats")[0]
            '%d.%m.%Y'
            >>> config.get("nonexistent.key", "default_value")
            'default_value'
        """
        keys = key.split('.')
        value = self._config

        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def get_all(self) -> Dict[str, Any]:
        """Get a copy of the complete configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @classmethod
    def reset(cls) -> None:
        """
        Drop the shared instance so the next construction reloads settings.
        """
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """
    Shortcut for ConfigurationManager().get().

    Args:
        key: Configuration key in dot notation.
        default: Default value if key doesn't exist.

    Returns:
        Configuration value or default.
    """
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config']
