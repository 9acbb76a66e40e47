"""Unit tests for markdown cleanup applied before structural parsing."""

from __future__ import annotations

import pytest

from cheatsheet_parser.cleaning import clean_markdown

SAMPLES = [
    "",
    "plain text",
    "---\n\n## Title\nbody",
    "\n---\n\n| a | b |\n",
    "***\n---\n\n| a |\n",
    "Intro\n\n---\n\nMore\n\n\n\n\nEnd",
    "| a | b |\n---\n| 1 | 2 |",
    "# a | b\n---\ntext",
    "___\n***\n---\n",
    "```\ncode\n```\n\n\n\n---\nfooter   \n",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_cleaning_is_idempotent(text: str) -> None:
    once = clean_markdown(text)
    assert clean_markdown(once) == once


def test_leading_rule_is_removed() -> None:
    assert clean_markdown("---\n\n## Title\nbody") == "## Title\nbody"


def test_decorative_rules_are_removed() -> None:
    assert clean_markdown("Intro\n\n---\n\nMore") == "Intro\n\nMore"
    assert clean_markdown("Intro\n***\nMore") == "Intro\n\nMore"
    assert clean_markdown("Intro\n_____\nMore") == "Intro\n\nMore"


def test_dash_rule_next_to_table_is_kept() -> None:
    text = "| a | b |\n---\n| 1 | 2 |"
    assert clean_markdown(text) == text


def test_star_rule_next_to_table_is_removed() -> None:
    assert clean_markdown("| a |\n***\n| b |") == "| a |\n\n| b |"


def test_heading_with_pipe_is_not_a_table() -> None:
    assert clean_markdown("# a | b\n---\ntext") == "# a | b\n\ntext"


def test_excess_newlines_collapse() -> None:
    assert clean_markdown("\n\nOne\n\n\n\nTwo\n\n\n") == "One\n\nTwo"
