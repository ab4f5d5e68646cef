from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DELIMITER = "|"


class FeedMapSettings(BaseSettings):
    """Process-wide settings sourced from .env and environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDMAP_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Splits one feed text value into several values, e.g. "a|b|c"
    data_delimiter: str = DEFAULT_DATA_DELIMITER
    log_level: str = "INFO"

    @field_validator("data_delimiter")
    @classmethod
    def _delimiter_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("data_delimiter must not be empty")
        return value
