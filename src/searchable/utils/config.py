"""
Configuration System

Small YAML-backed configuration layer for the searchable package. Features:
- Single-file YAML loading with environment variable resolution
- Dot-notation access to nested values
- Works unconfigured: without a config file every lookup returns its default

Lookup order for the configuration file:
1. Explicit ``config_path`` argument
2. ``SEARCHABLE_CONFIG`` environment variable
3. ``searchable.yml`` in the current working directory
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from searchable.base.errors import ConfigurationError

# Standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

CONFIG_ENV_VAR = "SEARCHABLE_CONFIG"
DEFAULT_CONFIG_FILENAME = "searchable.yml"

# Pattern matches ${VAR_NAME:-default}, ${VAR_NAME}, or $VAR_NAME
_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class ConfigBuilder:
    """
    Configuration builder for the searchable package.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Empty configuration when no file is available
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the YAML config file. If None, falls back to the
                SEARCHABLE_CONFIG environment variable, then ./searchable.yml.

        Raises:
            ConfigurationError: If an explicitly requested file does not exist
                or does not contain a mapping.
        """
        explicit = config_path is not None or bool(os.environ.get(CONFIG_ENV_VAR))

        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or None

        if config_path is None:
            cwd_config = Path.cwd() / DEFAULT_CONFIG_FILENAME
            config_path = cwd_config if cwd_config.exists() else None

        self.config_path = Path(config_path) if config_path is not None else None

        if self.config_path is None:
            logger.debug("No configuration file found, using defaults")
            self.raw_config: dict[str, Any] = {}
            return

        if explicit and not self.config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        if not isinstance(config, dict):
            error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.info(f"Environment variable '{var_name}' not found, keeping original value")
                    return match.group(0)
                return env_value

            return _ENV_PATTERN.sub(replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from the config file with environment variables resolved."""
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))

        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | Path | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration instance (cached default with optional explicit path).

    Args:
        config_path: Optional explicit path to configuration file.
        set_as_default: If True and config_path is provided, also set this config as the
            default so future calls without config_path use it.

    Returns:
        ConfigBuilder instance for the specified or default configuration
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            _default_config = ConfigBuilder()
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())

    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)

    if set_as_default:
        _default_config = _config_cache[resolved_path]
        logger.debug(f"Set explicit config as default: {resolved_path}")

    return _config_cache[resolved_path]


def get_config_builder(config_path: str | Path | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Examples:
        >>> config = get_config_builder()
        >>> depth = config.get("searchable.max_hierarchy_depth", 64)

        >>> config = get_config_builder("/path/to/searchable.yml", set_as_default=True)
    """
    return _get_config(config_path, set_as_default)


def get_config_value(path: str, default: Any = None, config_path: str | Path | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "searchable.strict_options")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> depth = get_config_value("searchable.max_hierarchy_depth", 64)
        >>> strict = get_config_value("searchable.strict_options", True)
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def reset_config() -> None:
    """Drop all cached configuration so the next lookup reloads from disk.

    .. warning::
       Intended for tests and for applications that swap configuration files
       at runtime.
    """
    global _default_config
    _default_config = None
    _config_cache.clear()
