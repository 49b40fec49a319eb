"""
User configuration management for dupimg.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority, e.g. command-line options)
2. Environment variables
3. User config file (~/.dupimg/config.json)
4. Default values from config.py (lowest priority)

Example config.json:
{
    "default_threshold": 0.9,
    "default_workers": 4,
    "progress_interval": 20000,
    "skip_decode_errors": false,
    "use_cache": true
}
"""

import json
import os
from pathlib import Path
from typing import Any, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_THRESHOLD,
    DEFAULT_WORKERS,
    PROGRESS_INTERVAL,
)

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    Attributes are lazy-loaded and cached for performance.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DUPIMG_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and booleans
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def default_threshold(self) -> float:
        """Similarity threshold (0.0-1.0)."""
        return float(self.get(
            'default_threshold',
            default=DEFAULT_THRESHOLD,
            env_var='DUPIMG_THRESHOLD'
        ))

    @property
    def default_workers(self) -> int:
        """Number of parallel workers for fingerprinting."""
        return int(self.get(
            'default_workers',
            default=DEFAULT_WORKERS,
            env_var='DUPIMG_WORKERS'
        ))

    @property
    def progress_interval(self) -> int:
        """Report comparison progress every N pairs."""
        return int(self.get(
            'progress_interval',
            default=PROGRESS_INTERVAL,
            env_var='DUPIMG_PROGRESS_INTERVAL'
        ))

    @property
    def skip_decode_errors(self) -> bool:
        """Skip undecodable images instead of aborting the scan."""
        return bool(self.get(
            'skip_decode_errors',
            default=False,
            env_var='DUPIMG_SKIP_ERRORS'
        ))

    @property
    def use_cache(self) -> bool:
        """Read and write the on-disk fingerprint cache."""
        return bool(self.get(
            'use_cache',
            default=True,
            env_var='DUPIMG_USE_CACHE'
        ))

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "dupimg user configuration",
            "default_threshold": DEFAULT_THRESHOLD,
            "default_workers": DEFAULT_WORKERS,
            "progress_interval": PROGRESS_INTERVAL,
            "skip_decode_errors": False,
            "use_cache": True,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
