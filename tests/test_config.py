from __future__ import annotations

from pathlib import Path

import pytest

from feedmap.config import (
    ConfigManager,
    ConfigurationError,
    FeedConfig,
    FeedMapSettings,
    MissingConfigurationError,
)
from feedmap.mapping.models import ResolveStrategy


def test_settings_default_delimiter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FEEDMAP_DATA_DELIMITER", raising=False)

    assert FeedMapSettings(_env_file=None).data_delimiter == "|"


def test_settings_read_delimiter_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEEDMAP_DATA_DELIMITER", ";")

    assert FeedMapSettings(_env_file=None).data_delimiter == ";"


def test_empty_delimiter_fails_loudly(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEEDMAP_DATA_DELIMITER", "")

    with pytest.raises(ConfigurationError):
        ConfigManager().get_config("dataDelimiter")


def test_load_config(config_manager: ConfigManager) -> None:
    config = config_manager.load_config()

    assert isinstance(config, FeedConfig)
    assert config.name == "products"
    assert list(config.fields) == ["title", "tags", "images", "price", "status", "summary"]
    assert config.fields["title"].strategy is ResolveStrategy.SIMPLE
    assert config.fields["status"].uses_default


def test_get_config_prefers_settings_when_feed_is_silent(config_manager: ConfigManager) -> None:
    assert config_manager.get_config("dataDelimiter") == ","
    assert config_manager.get_config("data_delimiter") == ","
    assert config_manager.get_data_delimiter() == ","


def test_get_config_prefers_feed_value(tmp_path: Path, settings: FeedMapSettings) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text("name: feed\ndata_delimiter: ';'\n", encoding="utf-8")

    manager = ConfigManager(path, settings=settings)

    assert manager.get_config("dataDelimiter") == ";"
    assert manager.get_config("name") == "feed"


def test_get_config_unknown_key(config_manager: ConfigManager) -> None:
    assert config_manager.get_config("unknownKey", "fallback") == "fallback"
    with pytest.raises(MissingConfigurationError):
        config_manager.get_config("unknownKey")


def test_record_settings(tmp_path: Path, settings: FeedMapSettings) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text("name: feed\nset_empty_values: true\n", encoding="utf-8")

    assert ConfigManager(path, settings=settings).record_settings().set_empty_values
    assert not ConfigManager(settings=settings).record_settings().set_empty_values


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path / "missing.yml").load_config()


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text("name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_invalid_schema(tmp_path: Path) -> None:
    path = tmp_path / "mapping.yml"
    path.write_text("name: feed\ndata_delimiter: ''\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path).load_config()


def test_no_config_file_configured() -> None:
    with pytest.raises(MissingConfigurationError):
        ConfigManager().load_config()
