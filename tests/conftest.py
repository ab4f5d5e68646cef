from __future__ import annotations

from pathlib import Path

import pytest

from feedmap.config import ConfigManager, FeedMapSettings
from feedmap.mapping.pipeline import ValueResolver

MAPPING_YAML = """\
name: products
set_empty_values: false
fields:
  title:
    node: Title
    strategy: simple
  tags:
    node: Tags
    strategy: multi
  images:
    node: Block/Images
  price:
    node: Price
  status:
    node: usedefault
    default: live
  summary:
    node: Summary
    default: "{title} by {author}"
"""


@pytest.fixture
def resolver() -> ValueResolver:
    return ValueResolver(",")


@pytest.fixture
def settings() -> FeedMapSettings:
    return FeedMapSettings(data_delimiter=",")


@pytest.fixture
def mapping_file(tmp_path: Path) -> Path:
    path = tmp_path / "mapping.yml"
    path.write_text(MAPPING_YAML, encoding="utf-8")
    return path


@pytest.fixture
def config_manager(mapping_file: Path, settings: FeedMapSettings) -> ConfigManager:
    return ConfigManager(mapping_file, settings=settings)
