"""Helpers shared by the value resolver and the content differ."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Iterator, Mapping

_INDEX_RUN = re.compile(r"/(?:\d+/)+")
_INDEX_EDGES = re.compile(r"^\d+/|/\d+$")
_NUMERIC_STRING = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def normalize_node_path(path: Any) -> str:
    """
    Strip numeric index segments from a feed path.

    Feeds enumerate repeated groups (``Block/0/Images/0``) while field
    mappings point at the logical node (``Block/Images``).
    """
    normalized = _INDEX_RUN.sub("/", str(path))
    return _INDEX_EDGES.sub("", normalized)


def flatten_feed_record(data: Any, separator: str = "/") -> dict[str, Any]:
    """
    Flatten nested feed data into an ordered path -> value mapping.

    Example:
        flatten_feed_record({"Block": [{"Images": ["a.jpg"]}]})
        == {"Block/0/Images/0": "a.jpg"}
    """
    return dict(_iter_flat(data, "", separator))


def _iter_flat(data: Any, prefix: str, separator: str) -> Iterator[tuple[str, Any]]:
    if isinstance(data, Mapping):
        items = ((str(key), value) for key, value in data.items())
    elif isinstance(data, (list, tuple)):
        items = ((str(index), value) for index, value in enumerate(data))
    else:
        yield prefix, data
        return

    empty = True
    for key, value in items:
        empty = False
        path = f"{prefix}{separator}{key}" if prefix else key
        yield from _iter_flat(value, path, separator)
    if empty and prefix:
        yield prefix, data


def is_numeric(value: Any) -> bool:
    """Return True for finite numbers and strings holding a decimal number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, str):
        return bool(_NUMERIC_STRING.match(value))
    return False


def is_blank(value: Any) -> bool:
    """Return True for None, empty strings, False and empty containers."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict, set)) or isinstance(value, Mapping):
        return len(value) == 0
    return False


def default_as_list(default: Any) -> list[Any]:
    """Coerce a field-mapping default into a list of values.

    Sequences are copied, mappings contribute their values in order.
    """
    if isinstance(default, (list, tuple)):
        return list(default)
    if isinstance(default, Mapping):
        return list(default.values())
    if is_blank(default):
        return []
    return [default]


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """
    Render ``{name}`` placeholders in a template using a context mapping.

    Example:
        render_template("{title} ({year})", {"title": "Dune", "year": 1965})
        == "Dune (1965)"

    Raises:
        KeyError: a placeholder is not present in the context
        ValueError: the braces do not form a valid template
    """
    placeholders = re.findall(r"{(.*?)}", template)
    missing = [name for name in placeholders if name and name not in context]
    if missing:
        raise KeyError(f"Placeholders not found in context: {missing}")
    return template.format_map(context)
