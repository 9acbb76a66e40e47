"""Unit tests for cheatsheet index helpers."""

from __future__ import annotations

from cheatsheet_parser.catalog import (
    badge_for,
    build_index_item,
    cheatsheet_id,
    generate_keywords,
    gradient_for,
    icon_for,
)
from cheatsheet_parser.models import Document, Metadata, Section


def test_cheatsheet_id_replaces_non_alphanumerics() -> None:
    assert cheatsheet_id("posts/VS Code.md") == "vs-code"
    assert cheatsheet_id("c++.md") == "c--"
    assert cheatsheet_id("python") == "python"


def test_keywords_are_unique_ordered_and_limited() -> None:
    document = Document(
        metadata=Metadata(
            title="The Git Guide",
            tags=("Git", "vcs"),
            categories=("Programming",),
        ),
        sections=tuple(
            Section(title=title)
            for title in ("Getting Started", "Branching and Merging", "Go", "Remote Sync")
        ),
    )
    assert generate_keywords(document) == (
        "the",
        "git",
        "guide",
        "vcs",
        "programming",
        "getting",
        "started",
        "branching",
        "and",
        "merging",
    )


def test_presentation_lookups() -> None:
    assert gradient_for("git") == "from-orange-500 to-red-600"
    assert gradient_for("unknown") == "from-gray-500 to-gray-600"
    assert badge_for("finder") == "New"
    assert badge_for("unknown") == "Available"
    assert icon_for(("Keyboard Shortcuts",)) == "Code"
    assert icon_for(("Programming", "Other")) == "Code"
    assert icon_for(()) == "BookOpen"


def test_index_item_defaults_to_file_stem() -> None:
    item = build_index_item("docs/react.md", Document(), timestamp="2024-01-01T00:00:00.000Z")
    assert item.id == "react"
    assert item.name == "react"
    assert item.description == "Quick reference for react"
    assert item.keywords == ()
    assert item.categories == ()
    assert item.status == "Available"
    assert item.gradient == "from-emerald-500 to-green-600"
    assert item.last_updated == "2024-01-01T00:00:00.000Z"
