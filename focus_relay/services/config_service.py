"""Configuration loading service.

Handles loading config.yaml into the Pydantic schema and reading the
reverse-link file that switches the relay into forwarding mode.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from focus_relay.models.config import AppConfig, ReverseLinkConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading application configuration.

    Handles:
    - Loading config from config.yaml
    - Validating against the Pydantic schema
    - Falling back to defaults on a missing or broken file
    - Reading the reverse-link config once at startup
    """

    def __init__(self, config_path: str | Path = "config.yaml"):
        """Initialize the config service.

        Args:
            config_path: Path to the config file.
        """
        self.config_path = Path(config_path)
        self._config: AppConfig | None = None

    def load(self) -> AppConfig:
        """Load and validate configuration.

        Returns:
            Validated AppConfig instance.
        """
        if not self.config_path.exists():
            logger.info(f"Config file not found at {self.config_path}, using defaults")
            self._config = AppConfig()
            return self._config

        try:
            with open(self.config_path) as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error reading config file: {e}, using defaults")
            self._config = AppConfig()
            return self._config

        try:
            self._config = AppConfig(**raw_config)
        except (TypeError, ValidationError) as e:
            logger.warning(f"Config validation error: {e}, using defaults")
            self._config = AppConfig()

        return self._config

    def get_config(self) -> AppConfig:
        """Get the current configuration.

        Loads from disk if not already loaded.
        """
        if self._config is None:
            return self.load()
        return self._config

    def reload(self) -> AppConfig:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    def load_reverse_link(self, path: str | Path | None = None) -> ReverseLinkConfig | None:
        """Read the reverse-link file.

        Its presence means this machine cannot do GUI focus and must forward
        to the paired Mac. A file that exists but cannot be parsed is
        reported and treated as absent.

        Args:
            path: Override for the file location (defaults to config paths).

        Returns:
            ReverseLinkConfig, or None when focus should run locally.
        """
        link_path = Path(path) if path else self.get_config().paths.reverse_link_path
        if not link_path.exists():
            return None

        try:
            data = json.loads(link_path.read_text())
            link = ReverseLinkConfig.model_validate(data)
        except (OSError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Ignoring unreadable reverse-link config {link_path}: {e}")
            return None

        logger.info(f"Reverse link configured: forwarding focus to {link.mac_user}@{link.mac_host}:{link.mac_port}")
        return link


# Module-level singleton
_config_service: ConfigService | None = None


def get_config_service(config_path: str | Path = "config.yaml") -> ConfigService:
    """Get the global config service instance.

    Args:
        config_path: Path to config file (only used on first call).

    Returns:
        ConfigService singleton.
    """
    global _config_service
    if _config_service is None:
        _config_service = ConfigService(config_path)
    return _config_service


def reset_config_service() -> None:
    """Reset the global config service (for testing)."""
    global _config_service
    _config_service = None
