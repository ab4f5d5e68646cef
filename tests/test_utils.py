from __future__ import annotations

from decimal import Decimal

import pytest

from feedmap.mapping.utils import (
    default_as_list,
    flatten_feed_record,
    is_blank,
    is_numeric,
    normalize_node_path,
    render_template,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Block/0/Images/0", "Block/Images"),
        ("Block/Images", "Block/Images"),
        ("0/Title", "Title"),
        ("Title/3", "Title"),
        ("Block/0/1/Images", "Block/Images"),
        ("Block/12/Images/7", "Block/Images"),
        ("Title", "Title"),
        ("Price2/Amount", "Price2/Amount"),
    ],
)
def test_normalize_node_path_strips_index_segments(path: str, expected: str) -> None:
    assert normalize_node_path(path) == expected


def test_normalize_node_path_accepts_integer_keys() -> None:
    assert normalize_node_path(3) == "3"


def test_flatten_feed_record_enumerates_repeated_groups() -> None:
    data = {
        "Title": "Chair",
        "Block": [
            {"Images": ["a.jpg", "b.jpg"]},
            {"Images": ["c.jpg"]},
        ],
        "Meta": {"Sku": "C-1", "Tags": []},
    }

    assert flatten_feed_record(data) == {
        "Title": "Chair",
        "Block/0/Images/0": "a.jpg",
        "Block/0/Images/1": "b.jpg",
        "Block/1/Images/0": "c.jpg",
        "Meta/Sku": "C-1",
        "Meta/Tags": [],
    }


def test_flatten_feed_record_paths_normalize_to_mapping_nodes() -> None:
    flat = flatten_feed_record({"Block": [{"Images": ["a.jpg"]}]})

    assert [normalize_node_path(path) for path in flat] == ["Block/Images"]


@pytest.mark.parametrize(
    "value",
    [0, 0.0, 12, -3.5, Decimal("1.10"), "0", "637", " 42 ", "-1.5", "1e3", ".5"],
)
def test_is_numeric_accepts_numbers_and_numeric_strings(value: object) -> None:
    assert is_numeric(value)


@pytest.mark.parametrize(
    "value",
    [True, False, None, "", "abc", "12abc", "0x1A", [], "inf", float("inf"), float("nan"), Decimal("NaN")],
)
def test_is_numeric_rejects_other_values(value: object) -> None:
    assert not is_numeric(value)


@pytest.mark.parametrize("value", [None, "", False, [], (), {}])
def test_is_blank_for_empty_values(value: object) -> None:
    assert is_blank(value)


@pytest.mark.parametrize("value", [0, 0.0, "0", " ", [None], {"a": None}, True])
def test_is_blank_keeps_numbers_and_content(value: object) -> None:
    assert not is_blank(value)


def test_default_as_list() -> None:
    assert default_as_list(None) == []
    assert default_as_list("") == []
    assert default_as_list("live") == ["live"]
    assert default_as_list(0) == [0]
    assert default_as_list(["1", "2"]) == ["1", "2"]
    assert default_as_list(("1",)) == ["1"]
    assert default_as_list({"a": "1", "b": "2"}) == ["1", "2"]
    assert default_as_list({}) == []


def test_render_template_fills_placeholders() -> None:
    assert render_template("{title} ({year})", {"title": "Dune", "year": 1965}) == "Dune (1965)"


def test_render_template_raises_for_unknown_placeholders() -> None:
    with pytest.raises(KeyError):
        render_template("{missing}", {"title": "Dune"})


def test_render_template_raises_for_unbalanced_braces() -> None:
    with pytest.raises(ValueError):
        render_template("function() { return 1;", {})
