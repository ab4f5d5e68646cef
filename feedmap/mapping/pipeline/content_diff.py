"""Change detection between resolved content and an existing record."""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Mapping, NamedTuple, Sequence

import pandas as pd

from ..models import ChangeSet, ContentMapping
from ..utils import is_blank, is_numeric
from .context import RecordSnapshot, group_ids

logger = logging.getLogger(__name__)

DB_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ISO_8601 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
)


class ArrayDiff(NamedTuple):
    """Two-sided structural difference: what each side holds that the other doesn't."""

    left: dict[Any, Any]
    right: dict[Any, Any]


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def _as_keyed(value: Any) -> dict[Any, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    return dict(enumerate(value))


def array_compare(first: Any, second: Any) -> ArrayDiff | None:
    """
    Recursively diff two containers for diagnostics.

    Lists are keyed by position. Returns None when both sides hold the same
    keys and strictly equal leaves.

    Example:
        array_compare({"a": 1, "b": {"c": 2}}, {"a": 1, "b": {"c": 3}})
        == ArrayDiff(left={"b": {"c": 2}}, right={"b": {"c": 3}})
    """
    first_keyed = _as_keyed(first)
    second_keyed = _as_keyed(second)
    left: dict[Any, Any] = {}
    right: dict[Any, Any] = {}

    for key, value in first_keyed.items():
        if key not in second_keyed:
            left[key] = value
            continue

        other = second_keyed[key]
        if _is_container(value):
            if not _is_container(other):
                left[key] = value
                right[key] = other
                continue
            nested = array_compare(value, other)
            if nested is not None:
                if nested.left:
                    left[key] = nested.left
                if nested.right:
                    right[key] = nested.right
        elif type(value) is not type(other) or value != other:
            left[key] = value
            right[key] = other

    for key, value in second_keyed.items():
        if key not in first_keyed:
            right[key] = value

    if not left and not right:
        return None
    return ArrayDiff(left, right)


def loosely_equal(first: Any, second: Any) -> bool:
    """
    Compare two values after permissive type coercion.

    - None equals None, "", False and empty containers, but not 0
    - a bool compares against the truthiness of the other side, where
      numeric zero (0, 0.0, "0") is false
    - numeric-like values (numbers, numeric strings) compare as exact decimals
    - a number and a non-numeric string compare as strings
    - containers compare key by key with the same rules
    """
    if first is None or second is None:
        return is_blank(first) and is_blank(second)

    if isinstance(first, bool) or isinstance(second, bool):
        return _truthy(first) == _truthy(second)

    if _is_container(first) or _is_container(second):
        if not (_is_container(first) and _is_container(second)):
            return False
        first_keyed = _as_keyed(first)
        second_keyed = _as_keyed(second)
        if first_keyed.keys() != second_keyed.keys():
            return False
        return all(loosely_equal(value, second_keyed[key]) for key, value in first_keyed.items())

    if is_numeric(first) and is_numeric(second):
        return _as_decimal(first) == _as_decimal(second)

    if isinstance(first, str) != isinstance(second, str) and (is_numeric(first) or is_numeric(second)):
        return str(first) == str(second)

    return first == second


def _as_decimal(value: Any) -> Decimal:
    # Exact, so long ids such as "12345678901234567" keep every digit
    return Decimal(str(value).strip())


def _truthy(value: Any) -> bool:
    if is_numeric(value):
        return _as_decimal(value) != 0
    return not is_blank(value)


def _numeric_values(value: Any) -> list[Decimal] | None:
    if not _is_container(value):
        return None
    values = list(value.values()) if isinstance(value, Mapping) else list(value)
    if not all(is_numeric(item) for item in values):
        return None
    return sorted(_as_decimal(item) for item in values)


def values_match(source: Mapping[str, Any], key: str, existing: Any, new: Any) -> bool:
    """Decide whether an existing value and a candidate value are the same.

    ``source`` is the mapping ``existing`` was read from; the key has to be
    set there for the numeric-reference and loose comparisons to apply.
    """
    key_is_set = source.get(key) is not None

    # Element references: same ids, possibly re-keyed or re-ordered
    if key_is_set:
        existing_ids = _numeric_values(existing)
        new_ids = _numeric_values(new)
        if existing_ids is not None and new_ids is not None and existing_ids == new_ids:
            return True

    if _is_container(existing) and _is_container(new) and not existing and not new:
        return True

    if key_is_set and loosely_equal(existing, new):
        # "637" and "0637" are loosely equal but not the same content
        if isinstance(existing, str) and isinstance(new, str):
            return len(existing) == len(new)
        return True

    return False


def normalize_date(value: Any) -> Any:
    """Cast dates and ISO 8601 strings to the database date format."""
    if isinstance(value, str):
        if not _ISO_8601.match(value.strip()):
            return value
        try:
            value = pd.Timestamp(value.strip())
        except ValueError:
            return value
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    elif not isinstance(value, datetime):
        return value

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DB_DATE_FORMAT)


def compute_change_set(
    candidate: ContentMapping,
    existing_fields: Mapping[str, Any],
    existing_attributes: Mapping[str, Any],
    groups: Sequence[Any] | None = None,
) -> ChangeSet:
    """
    Return the candidate keys whose values differ from the existing record.

    Each key is checked against the record's field values first, then its
    attributes. ``groups`` supplies the record's group memberships for the
    ``groups`` attribute.
    """
    changes = dict(candidate)

    for key, new_value in candidate.items():
        existing_value = normalize_date(existing_fields.get(key))
        new_value = normalize_date(new_value)

        # An empty date picker value is the same as no value
        if isinstance(new_value, Mapping) and new_value.get("date") == "":
            new_value = None

        if values_match(existing_fields, key, existing_value, new_value):
            del changes[key]
            continue

        existing_value = normalize_date(existing_attributes.get(key))
        attributes = existing_attributes
        if key == "groups" and groups is not None:
            existing_value = group_ids(groups)
            attributes = {**existing_attributes, key: existing_value}

        if values_match(attributes, key, existing_value, new_value):
            del changes[key]
            continue

        existing_value = existing_fields.get(key)
        if _is_container(existing_value) and _is_container(new_value):
            logger.debug("%s - diff", key)
            logger.debug("%s", array_compare(existing_value, new_value))

        logger.debug("%s - existing", key)
        logger.debug("%r", existing_value)
        logger.debug("%s - new", key)
        logger.debug("%r", new_value)

        logger.info(
            "Data to update for `%s`: `%s`.", key, json.dumps(new_value, default=str)
        )

    return changes


class ContentDiffer:
    """Compares candidate content against a record snapshot."""

    def compute_change_set(
        self,
        candidate: ContentMapping,
        snapshot: RecordSnapshot | None,
    ) -> ChangeSet:
        if snapshot is None:
            return dict(candidate)

        groups = snapshot.get_groups() if "groups" in candidate else None
        return compute_change_set(
            candidate,
            snapshot.get_serialized_field_values(),
            snapshot.attributes,
            groups=groups,
        )

    def is_unchanged(
        self,
        candidate: ContentMapping,
        snapshot: RecordSnapshot | None,
    ) -> bool:
        """Return True when the snapshot already holds every candidate value."""
        if snapshot is None:
            return False
        return not self.compute_change_set(candidate, snapshot)
