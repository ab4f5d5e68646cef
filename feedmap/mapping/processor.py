"""Mapping processor turning feed records into content mappings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from feedmap.config.manager import ConfigManager
from feedmap.mapping.models import ChangeSet, ContentMapping, FlatFeedRecord
from .pipeline import (
    ContentDiffer,
    RecordSnapshot,
    StaticRecordSnapshot,
    ValueResolver,
)
from .utils import flatten_feed_record


class MappingProcessor:
    """Resolves every mapped field of a feed record and diffs the result."""

    def __init__(self, config_manager: ConfigManager) -> None:
        self.config_manager = config_manager
        self.value_resolver = ValueResolver(config_manager.get_data_delimiter())
        self.differ = ContentDiffer()

    def load_records(self, data_path: str | Path) -> list[dict[str, Any]]:
        """Load a CSV or JSON feed file as flattened feed records."""
        data_file = Path(data_path)
        if not data_file.exists():
            raise FileNotFoundError(f"Feed file not found: {data_path}")

        if data_file.suffix.lower() == ".json":
            with open(data_file, "r", encoding="utf-8") as file_handle:
                payload = json.load(file_handle)
            rows = payload if isinstance(payload, list) else [payload]
            return [flatten_feed_record(row) for row in rows]

        # Keep cells as text so "0637" and empty cells survive unchanged
        dataframe = pd.read_csv(
            data_file,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8",
        )
        return [dict(row) for row in dataframe.to_dict(orient="records")]

    @staticmethod
    def load_snapshot(snapshot_path: str | Path) -> StaticRecordSnapshot:
        """Load an existing record snapshot exported as JSON."""
        snapshot_file = Path(snapshot_path)
        if not snapshot_file.exists():
            raise FileNotFoundError(f"Snapshot file not found: {snapshot_path}")

        with open(snapshot_file, "r", encoding="utf-8") as file_handle:
            return StaticRecordSnapshot.model_validate(json.load(file_handle))

    def build_content(
        self,
        record: FlatFeedRecord,
        element: Any = None,
    ) -> ContentMapping:
        """Resolve all configured fields for one feed record."""
        config = self.config_manager.config
        record_settings = self.config_manager.record_settings()

        content: ContentMapping = {}
        for handle, field_mapping in config.fields.items():
            value = self.value_resolver.resolve(record, field_mapping, record_settings)
            content[handle] = self.value_resolver.parse_field_data_for_element(
                value, element
            )
        return content

    def compare(
        self,
        record: FlatFeedRecord,
        snapshot: RecordSnapshot | None,
    ) -> ChangeSet:
        """Return the fields of the record's content that the snapshot lacks."""
        content = self.build_content(record, element=snapshot)
        return self.differ.compute_change_set(content, snapshot)
