"""
Configuration management for linegetter.

Handles loading and merging configuration from:
- Built-in defaults
- The repository's config/default.yaml
- An optional user configuration file
- Environment variables
"""

import copy
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

DEFAULTS: Dict[str, Any] = {
    "reader": {"max_line_length": 16383},
    "indexer": {"chunk_size": 16383},
    "logging": {"level": "INFO", "format": "json"},
}

# Environment variable -> (config key, converter)
ENV_OVERRIDES: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "LINEGETTER_MAX_LINE_LENGTH": ("reader.max_line_length", int),
    "LINEGETTER_CHUNK_SIZE": ("indexer.chunk_size", int),
    "LOG_LEVEL": ("logging.level", str),
    "LOG_FORMAT": ("logging.format", str),
}


class Config:
    """Configuration manager for linegetter."""
    
    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.
        
        Args:
            config_file: Path to a YAML configuration file merged over defaults
        """
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._load_default_config()
        
        if config_file:
            self._load_config_file(config_file)
        
        self._apply_env_overrides()
    
    def _load_default_config(self) -> None:
        default_config_path = Path(__file__).parent.parent.parent / "config" / "default.yaml"
        if default_config_path.exists():
            self._load_config_file(str(default_config_path))
    
    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from YAML file.
        
        Args:
            config_file: Path to YAML configuration file
        
        Raises:
            ValueError: If the file does not hold a mapping
        """
        with open(config_file, "r") as f:
            file_config = yaml.safe_load(f)
        
        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_file}")
        
        self._config = self._deep_merge(self._config, file_config)
    
    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
    
    def _apply_env_overrides(self) -> None:
        for env_name, (key, convert) in ENV_OVERRIDES.items():
            if raw := os.getenv(env_name):
                try:
                    self.set(key, convert(raw))
                except ValueError as e:
                    raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.
        
        Args:
            key: Configuration key in dot notation (e.g., "reader.max_line_length")
            default: Default value if key not found
        
        Returns:
            Configuration value
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
    
    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.
        
        Args:
            key: Configuration key in dot notation
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
    
    def to_dict(self) -> Dict[str, Any]:
        """Get a copy of the entire configuration."""
        return copy.deepcopy(self._config)


# Global configuration instance
_config: Optional[Config] = None


def get_config(config_file: Optional[str] = None) -> Config:
    """
    Get global configuration instance.
    
    Args:
        config_file: Optional configuration file path, used on first call only
    
    Returns:
        Configuration instance
    """
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
