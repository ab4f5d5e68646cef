"""Resolve feed record values for target fields."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from feedmap.config.errors import ConfigurationError

from ..models import (
    FieldMapping,
    FlatFeedRecord,
    RecordSettings,
    ResolvedValue,
    ResolveStrategy,
)
from ..utils import default_as_list, is_blank, is_numeric, normalize_node_path
from .context import ObjectTemplateRenderer, TemplateRenderer

logger = logging.getLogger(__name__)


class ValueResolver:
    """Turns a flattened feed record and a field mapping into a field value."""

    def __init__(
        self,
        delimiter: str,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        if not delimiter:
            raise ConfigurationError("A non-empty data delimiter is required")
        self.delimiter = delimiter
        self.renderer = renderer or ObjectTemplateRenderer()

    def resolve(
        self,
        record: FlatFeedRecord,
        mapping: FieldMapping | Mapping[str, Any],
        record_settings: RecordSettings | Mapping[str, Any] | None = None,
    ) -> ResolvedValue:
        """Resolve a field with the operation selected by its mapping strategy."""
        mapping = self._as_field_mapping(mapping)
        if mapping.strategy == ResolveStrategy.SIMPLE:
            return self.resolve_simple(record, mapping)
        if mapping.strategy == ResolveStrategy.MULTI:
            return self.resolve_multi(record, mapping)
        return self.resolve_for_write(record, mapping, record_settings)

    def resolve_simple(
        self,
        record: FlatFeedRecord,
        mapping: FieldMapping | Mapping[str, Any],
    ) -> ResolvedValue:
        """Look up the mapped node verbatim, falling back to the default."""
        mapping = self._as_field_mapping(mapping)

        # Exact key only: node paths may contain characters a path parser would split on
        value = record.get(mapping.node) if mapping.node is not None else None
        if value is None or value == "":
            value = mapping.default

        if isinstance(value, str):
            value = value.strip()
        return value

    def resolve_multi(
        self,
        record: FlatFeedRecord,
        mapping: FieldMapping | Mapping[str, Any],
    ) -> list[Any]:
        """Collect every value in the record that belongs to the mapped node."""
        mapping = self._as_field_mapping(mapping)

        values: list[Any] = []
        for node_value in self._matching_values(record, mapping.node):
            values.extend(self._split(node_value))

        if mapping.uses_default and not values:
            values = default_as_list(mapping.default)
        return values

    def resolve_for_write(
        self,
        record: FlatFeedRecord,
        mapping: FieldMapping | Mapping[str, Any],
        record_settings: RecordSettings | Mapping[str, Any] | None = None,
    ) -> ResolvedValue:
        """
        Resolve the value that should be written to the target field.

        Empty feed values take the mapping default before splitting. A single
        collected value is returned as a scalar. Empty results become None,
        except for numbers (``0`` and ``"0"`` are kept) and for empty strings
        when the feed is set to overwrite with empty values.
        """
        mapping = self._as_field_mapping(mapping)
        settings = self._as_record_settings(record_settings)

        values: list[Any] = []
        for node_value in self._matching_values(record, mapping.node):
            if node_value is None or node_value == "":
                node_value = mapping.default
            values.extend(self._split(node_value))

        value: Any = values
        if len(values) == 1:
            value = values[0]

        if mapping.uses_default and is_blank(value):
            value = mapping.default

        if isinstance(value, str) and value == "" and settings.set_empty_values:
            return value

        if not is_numeric(value) and is_blank(value):
            return None
        return value

    def parse_field_data_for_element(self, value: Any, element: Any) -> Any:
        """Render ``{...}`` placeholders in a value against the target record.

        A literal ``{`` in content is common, so any rendering failure keeps
        the original text.
        """
        if isinstance(value, str) and "{" in value:
            try:
                value = self.renderer.render_object_template(value, element)
            except Exception as exc:
                logger.debug("Keeping unrendered value %r: %s", value, exc)
        return value

    def _matching_values(self, record: FlatFeedRecord, node: str | None) -> Iterator[Any]:
        if node is None:
            return
        for node_path, node_value in record.items():
            if normalize_node_path(node_path) == node or str(node_path) == node:
                yield node_value

    def _split(self, value: Any) -> list[Any]:
        if isinstance(value, str) and self.delimiter in value:
            return [part.strip() for part in value.split(self.delimiter)]
        return [value]

    @staticmethod
    def _as_field_mapping(mapping: FieldMapping | Mapping[str, Any] | None) -> FieldMapping:
        if isinstance(mapping, FieldMapping):
            return mapping
        return FieldMapping.model_validate(dict(mapping or {}))

    @staticmethod
    def _as_record_settings(
        settings: RecordSettings | Mapping[str, Any] | None,
    ) -> RecordSettings:
        if isinstance(settings, RecordSettings):
            return settings
        return RecordSettings.model_validate(dict(settings or {}))
