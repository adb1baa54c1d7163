"""Unit tests for parsing and validating the sidebar tree."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from dsa_pages.config import DocumentShapeError
from dsa_pages.sidebars import (
    Category,
    DocRef,
    SidebarError,
    load_sidebars,
    parse_sidebars,
)

REPO_SIDEBARS = Path(__file__).resolve().parents[1] / "config" / "sidebars.yaml"


def test_repository_sidebars_load_in_authored_order() -> None:
    sidebars = load_sidebars(REPO_SIDEBARS)

    assert sidebars.names() == ["dsa"]
    doc_ids = [ref.doc_id for _, ref in sidebars.iter_doc_refs()]
    assert doc_ids[:3] == ["intro", "arrays", "linked-list"], f"got {doc_ids[:3]!r}"
    assert doc_ids[-1] == "exercises"
    assert len(doc_ids) == 12
    sidebars.validate_unique()


def test_category_collapsed_flag_is_kept_as_authored() -> None:
    sidebars = load_sidebars(REPO_SIDEBARS)
    categories = [item for item in sidebars.get("dsa") if isinstance(item, Category)]

    flags = {category.label: category.collapsed for category in categories}
    assert flags == {
        "Data Structures": False,
        "Algorithms": False,
        "Reference & Practice": None,
    }, f"unexpected collapsed flags {flags!r}"


def test_explicit_doc_entries_keep_their_label() -> None:
    sidebars = parse_sidebars(
        {"dsa": [{"type": "doc", "id": "intro", "label": "Start here"}]}
    )
    assert sidebars.get("dsa") == (DocRef(doc_id="intro", label="Start here"),)


def test_first_doc_id_descends_into_categories() -> None:
    sidebars = parse_sidebars(
        {
            "dsa": [
                {
                    "type": "category",
                    "label": "Outer",
                    "items": [{"type": "category", "label": "Inner", "items": ["deep"]}],
                },
                "later",
            ]
        }
    )
    assert sidebars.first_doc_id("dsa") == "deep"


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ({}, "No sidebars defined"),
        ({"dsa": []}, "has no entries"),
        ({"dsa": "intro"}, "must be a list"),
        ({"dsa": [42]}, "must be a document id"),
        ({"dsa": [""]}, "must be a document id"),
        ({"dsa": [{"type": "link", "href": "/x"}]}, "unsupported type 'link'"),
        ({"dsa": [{"type": "doc"}]}, "missing 'id'"),
        ({"dsa": [{"type": "category", "items": []}]}, "missing 'label'"),
        ({"dsa": [{"type": "category", "label": "A"}]}, "'items' list"),
        (
            {"dsa": [{"type": "category", "label": "A", "items": [], "collapsed": "no"}]},
            "non-boolean 'collapsed'",
        ),
    ],
)
def test_malformed_entries_are_rejected(raw: dict[str, object], message: str) -> None:
    with pytest.raises(SidebarError, match=message):
        parse_sidebars(raw)


def test_self_containing_category_is_rejected() -> None:
    """A category reachable from its own items would never terminate."""
    category: dict[str, object] = {"type": "category", "label": "Loop"}
    category["items"] = [category]
    with pytest.raises(SidebarError, match="contains itself"):
        parse_sidebars({"dsa": [category]})


def test_shared_alias_is_not_mistaken_for_a_cycle(tmp_path: Path) -> None:
    """Reusing a category via a YAML alias is finite, but duplicates its ids."""
    path = tmp_path / "sidebars.yaml"
    path.write_text(
        dedent(
            """
            dsa:
              - &basics
                type: category
                label: Basics
                items: [arrays]
              - *basics
            """
        ),
        encoding="utf-8",
    )
    sidebars = load_sidebars(path)
    assert len(sidebars.get("dsa")) == 2
    with pytest.raises(SidebarError, match="referenced twice in sidebar 'dsa'"):
        sidebars.validate_unique()


def test_duplicate_ids_across_sidebars_are_rejected() -> None:
    sidebars = parse_sidebars({"dsa": ["arrays"], "practice": ["intro", "arrays"]})
    with pytest.raises(SidebarError, match="in sidebars 'dsa' and 'practice'"):
        sidebars.validate_unique()


def test_unknown_sidebar_lookup() -> None:
    sidebars = parse_sidebars({"dsa": ["intro"]})
    with pytest.raises(SidebarError, match="Unknown sidebar 'other'"):
        sidebars.get("other")


def test_missing_sidebar_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_sidebars(tmp_path / "sidebars.yaml")


def test_non_mapping_sidebar_file(tmp_path: Path) -> None:
    path = tmp_path / "sidebars.yaml"
    path.write_text("- intro\n- arrays\n", encoding="utf-8")
    with pytest.raises(DocumentShapeError, match="must be a mapping"):
        load_sidebars(path)
