import os
import yaml
import logging

from typing import Any

logger = logging.getLogger("Config")

DEFAULT_CONFIG_PATH = "config/reply_thread_config.yaml"

DEFAULT_SETTINGS = {
    "adapter": {
        "api_base": "https://discord.com/api/v10",
        "request_timeout": 10,
        "fetch_retries": 2,
        "retry_delay": 1,
        "max_message_length": 2000
    },
    "caching": {
        "max_cached_messages": 10000,
        "max_age_hours": 24,
        "cache_maintenance_interval": 3600
    },
    "logging": {
        "logging_level": "INFO",
        "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "log_file_path": "logs/reply_thread.log",
        "max_log_size": 5 * 1024 * 1024,
        "backup_count": 3
    },
    "thread": {
        "max_length": 101,
        "nearby_messages_limit": 3
    }
}

class Config:
    """Settings loaded from YAML, backed by DEFAULT_SETTINGS"""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """Initialize the configuration

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path
        self.categories = list(DEFAULT_SETTINGS)
        for category in self.categories:
            setattr(self, category, {})

        self.load_config()

    def load_config(self) -> None:
        """Load configuration from YAML file"""
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as file:
            config = yaml.safe_load(file) or {}

        for category in self.categories:
            if isinstance(config.get(category), dict):
                setattr(self, category, config[category])
        logger.debug(f"Loaded configuration from {self.config_path}")

    def get_setting(self, category: str, key: str, default=None) -> Any:
        """Get a specific setting

        Values missing from the file fall back to the given default,
        then to DEFAULT_SETTINGS.

        Args:
            category: Configuration category
            key: Setting key
            default: Default value if key not found

        Raises:
            ValueError: For unknown categories without default
        """
        if category not in self.categories:
            if default is not None:
                return default
            raise ValueError(f"Unknown configuration category: {category}")

        value = getattr(self, category).get(key)
        if value is not None:
            return value
        if default is not None:
            return default
        return DEFAULT_SETTINGS[category].get(key)
