"""Configuration manager for loading feed mappings and plugin settings."""

import re
import yaml
from pathlib import Path
from typing import Any
from pydantic import ValidationError

from feedmap.mapping.models import RecordSettings

from .errors import ConfigurationError, MissingConfigurationError
from .models import FeedConfig
from .settings import FeedMapSettings


class ConfigManager:
    """Manages feed mapping loading and configuration lookups."""
    
    def __init__(
        self,
        config_path: str | Path | None = None,
        settings: FeedMapSettings | None = None,
    ) -> None:
        """Initialize configuration manager.
        
        Args:
            config_path: Path to the feed mapping file (optional)
            settings: Process-wide settings (read from the environment if omitted)
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: FeedConfig | None = None
        self._settings = settings
    
    @property
    def settings(self) -> FeedMapSettings:
        if self._settings is None:
            try:
                self._settings = FeedMapSettings()
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid feedmap settings: {exc}") from exc
        return self._settings

    def load_config(self) -> FeedConfig:
        """Load and validate the feed mapping file.
        
        Returns:
            Validated feed configuration
            
        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config file is invalid YAML or doesn't match schema
        """
        if self.config_path is None:
            raise MissingConfigurationError("No feed mapping file configured")
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        
        with open(self.config_path, 'r', encoding='utf-8') as f:
            try:
                config_data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid YAML in {self.config_path}: {exc}") from exc
        
        try:
            self._config = FeedConfig(**config_data)
        except (ValidationError, TypeError) as exc:
            raise ConfigurationError(f"Invalid feed mapping {self.config_path}: {exc}") from exc
        return self._config
    
    @property
    def config(self) -> FeedConfig:
        """Get the loaded configuration.
        
        Returns:
            Feed configuration (loads if not already loaded)
        """
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get a plugin setting, preferring the feed file over the environment.
        
        Args:
            key: Setting key, camelCase (``dataDelimiter``) or snake_case
            default: Returned when the key is unknown; if None, unknown keys raise
            
        Returns:
            Setting value
        """
        name = self._snake_case(key)

        if self.config_path is not None:
            value = getattr(self.config, name, None)
            if value is not None and name != "fields":
                return value

        if name in FeedMapSettings.model_fields:
            return getattr(self.settings, name)

        if default is not None:
            return default
        raise MissingConfigurationError(f"Unknown configuration key: {key}")

    def get_data_delimiter(self) -> str:
        """Get the delimiter used to split multi-value feed text."""
        return self.get_config("dataDelimiter")

    def record_settings(self) -> RecordSettings:
        """Get the per-record write settings for the loaded feed."""
        if self.config_path is None:
            return RecordSettings()
        return RecordSettings(set_empty_values=self.config.set_empty_values)

    @staticmethod
    def _snake_case(key: str) -> str:
        return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()
