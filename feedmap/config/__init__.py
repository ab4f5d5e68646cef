"""Configuration management for feedmap."""

from .errors import ConfigurationError, MissingConfigurationError
from .manager import ConfigManager
from .models import FeedConfig
from .settings import FeedMapSettings

__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "FeedConfig",
    "FeedMapSettings",
    "MissingConfigurationError",
]
