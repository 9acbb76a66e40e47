"""Unit tests for YAML front-matter extraction."""

from __future__ import annotations

import logging

import pytest

from cheatsheet_parser.front_matter import decode_front_matter, split_front_matter
from cheatsheet_parser.markdown_parser import parse_content
from cheatsheet_parser.models import Metadata


def test_missing_front_matter_gives_empty_metadata() -> None:
    text = "## Basics\n### Item\nbody\n"
    metadata, body = split_front_matter(text)
    assert metadata == Metadata()
    assert metadata.to_dict() == {}
    assert body == text


def test_block_must_start_the_document() -> None:
    text = "intro\n---\ntitle: Late\n---\n"
    metadata, body = split_front_matter(text)
    assert metadata == Metadata()
    assert body == text


def test_known_fields_and_extras() -> None:
    text = (
        "---\n"
        "title: Python\n"
        "date: 2020-12-14\n"
        "background: bg-[#436b97]\n"
        "tags:\n"
        "  - script\n"
        "  - interpret\n"
        "categories: Programming\n"
        "intro: |\n"
        "  The Python cheat sheet.\n"
        "plugins: [copyCode]\n"
        "author: Jane\n"
        "stars: 5\n"
        "---\n"
        "## Basics\n"
    )
    metadata, body = split_front_matter(text)
    assert body == "## Basics\n"
    assert metadata.title == "Python"
    assert metadata.date == "2020-12-14"
    assert metadata.background == "bg-[#436b97]"
    assert metadata.tags == ("script", "interpret")
    assert metadata.categories == ("Programming",)
    assert metadata.intro == "The Python cheat sheet.\n"
    assert metadata.plugins == ("copyCode",)
    assert metadata.extra == {"author": "Jane", "stars": 5}
    assert list(metadata.to_dict()) == [
        "title",
        "date",
        "background",
        "tags",
        "categories",
        "intro",
        "plugins",
        "author",
        "stars",
    ]


def test_malformed_yaml_is_logged_and_ignored(caplog: pytest.LogCaptureFixture) -> None:
    text = "---\ntitle: [unclosed\n---\n## Basics\n### Item\nbody\n"
    with caplog.at_level(logging.WARNING, logger="cheatsheet_parser.front_matter"):
        doc = parse_content(text)
    assert doc.metadata == Metadata()
    assert [section.title for section in doc.sections] == ["Basics"]
    assert any("front matter" in record.getMessage() for record in caplog.records)


def test_non_mapping_yaml_is_ignored() -> None:
    assert decode_front_matter("- just\n- a list") == Metadata()
    assert decode_front_matter("") == Metadata()


def test_block_is_removed_when_metadata_disabled() -> None:
    metadata, body = split_front_matter(
        "---\ntitle: Demo\n---\n## Basics\n", include_metadata=False
    )
    assert metadata == Metadata()
    assert body == "## Basics\n"


def test_closing_delimiter_at_end_of_text() -> None:
    metadata, body = split_front_matter("---\ntitle: Only\n---")
    assert metadata.title == "Only"
    assert body == ""


@pytest.mark.parametrize(
    "yaml_text",
    [
        pytest.param("title: One\ntitle: Two", id="duplicate-key"),
        pytest.param("? {a: 1}\n: value", id="unhashable-key"),
        pytest.param("title: !custom value", id="unknown-tag"),
        pytest.param("a: &x [*x]", id="recursive-list"),
        pytest.param("a: &x {b: *x}", id="recursive-mapping"),
        pytest.param("date: 2020-13-45", id="impossible-date"),
    ],
)
def test_unusable_yaml_never_raises(
    yaml_text: str, caplog: pytest.LogCaptureFixture
) -> None:
    text = f"---\n{yaml_text}\n---\n## Basics\n### Item\nbody\n"
    with caplog.at_level(logging.WARNING, logger="cheatsheet_parser.front_matter"):
        doc = parse_content(text)
    assert doc.metadata == Metadata()
    assert doc.sections[0].subsections[0].cards[0].footer == "body"
    assert any("front matter" in record.getMessage() for record in caplog.records)


def test_extras_hold_their_json_form() -> None:
    metadata = decode_front_matter(
        "nested:\n  1: a\n  2: b\nbig: .inf\nmissing: .nan\nwhen: 2024-05-01"
    )
    assert metadata.extra == {
        "nested": {"1": "a", "2": "b"},
        "big": None,
        "missing": None,
        "when": "2024-05-01",
    }
