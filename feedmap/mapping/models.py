from __future__ import annotations
from typing import Any, Dict, List, Mapping, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from enum import Enum

# Sentinel node: the field is not mapped to the feed, only its default is used.
USE_DEFAULT_NODE = "usedefault"

# Flattened feed row: slash-delimited path (e.g. "Block/0/Images/0") -> value.
FlatFeedRecord = Mapping[str, Any]

# Value computed for one target field: scalar, list of scalars or None.
ResolvedValue = Union[str, int, float, List[Any], Dict[str, Any], Any, None]

# Candidate write-set for one target record, and the subset of it that changed.
ContentMapping = Dict[str, Any]
ChangeSet = Dict[str, Any]


class ResolveStrategy(str, Enum):
    SIMPLE = "simple"
    MULTI = "multi"
    VALUE = "value"


class FieldMapping(BaseModel):
    """Binds a target field to a feed node plus a fallback value."""

    model_config = ConfigDict(extra="allow")

    node: str | None = Field(
        None, description="Feed path without index segments, or 'usedefault'"
    )
    default: Any = Field(None, description="Fallback or static value")
    strategy: ResolveStrategy = Field(
        ResolveStrategy.VALUE, description="Resolver operation used for this field"
    )

    @property
    def uses_default(self) -> bool:
        return self.node == USE_DEFAULT_NODE


class RecordSettings(BaseModel):
    """Per-feed settings that affect how resolved values are written."""

    model_config = ConfigDict(populate_by_name=True)

    set_empty_values: bool = Field(
        False,
        validation_alias=AliasChoices("set_empty_values", "setEmptyValues"),
        description="Allow empty strings to overwrite existing content",
    )
