"""Value resolution and change detection for the mapping processor."""

from .context import (
    ObjectTemplateRenderer,
    RecordSnapshot,
    StaticRecordSnapshot,
    TemplateRenderer,
)
from .value_resolution import ValueResolver
from .content_diff import (
    ArrayDiff,
    ContentDiffer,
    array_compare,
    compute_change_set,
    loosely_equal,
    values_match,
)

__all__ = [
    "ArrayDiff",
    "ContentDiffer",
    "ObjectTemplateRenderer",
    "RecordSnapshot",
    "StaticRecordSnapshot",
    "TemplateRenderer",
    "ValueResolver",
    "array_compare",
    "compute_change_set",
    "loosely_equal",
    "values_match",
]
