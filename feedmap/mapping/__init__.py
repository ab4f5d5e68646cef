"""Mapping layer for transforming feed records into content field values.

This module provides functionality to:
- Resolve field values from flattened feed records
- Merge repeated and delimited feed values
- Detect which fields differ from an existing record
"""

from .models import (
    FieldMapping,
    RecordSettings,
    ResolveStrategy,
    USE_DEFAULT_NODE,
)
from .utils import flatten_feed_record, normalize_node_path
from .pipeline import ContentDiffer, ValueResolver, array_compare

__all__ = [
    # Models
    "FieldMapping",
    "RecordSettings",
    "ResolveStrategy",
    "USE_DEFAULT_NODE",
    # Helpers
    "flatten_feed_record",
    "normalize_node_path",
    # Pipeline
    "ContentDiffer",
    "ValueResolver",
    "array_compare",
]
