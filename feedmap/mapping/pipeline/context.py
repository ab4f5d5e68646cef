"""Record snapshot and template collaborators used by the mapping pipeline."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..utils import render_template


@runtime_checkable
class RecordSnapshot(Protocol):
    """Read-only view of an existing content record."""

    @property
    def attributes(self) -> Mapping[str, Any]: ...

    def get_serialized_field_values(self) -> Mapping[str, Any]: ...

    def get_groups(self) -> Sequence[Any]: ...


class TemplateRenderer(Protocol):
    def render_object_template(self, text: str, context: Any) -> str: ...


class GroupRef(BaseModel):
    id: int | str


class StaticRecordSnapshot(BaseModel):
    """Snapshot built from already-serialized data (JSON exports, tests)."""

    model_config = ConfigDict(populate_by_name=True)

    field_values: dict[str, Any] = Field(default_factory=dict, alias="fields")
    attributes: dict[str, Any] = Field(default_factory=dict)
    groups: list[GroupRef] = Field(default_factory=list)

    def get_serialized_field_values(self) -> dict[str, Any]:
        return dict(self.field_values)

    def get_groups(self) -> list[GroupRef]:
        return list(self.groups)


def group_ids(groups: Sequence[Any]) -> list[Any]:
    """Return the identifiers of a record's groups."""
    ids: list[Any] = []
    for group in groups:
        if isinstance(group, Mapping):
            ids.append(group.get("id"))
        else:
            ids.append(getattr(group, "id", group))
    return ids


class ObjectTemplateRenderer:
    """Renders ``{field}`` placeholders against a record or mapping."""

    def render_object_template(self, text: str, context: Any) -> str:
        return render_template(text, self._template_context(context))

    @staticmethod
    def _template_context(context: Any) -> Mapping[str, Any]:
        if context is None:
            return {}
        if isinstance(context, Mapping):
            return context
        if isinstance(context, RecordSnapshot):
            values = dict(context.attributes)
            values.update(context.get_serialized_field_values())
            return values
        return vars(context)
