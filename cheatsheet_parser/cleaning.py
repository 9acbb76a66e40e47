"""Normalise markdown before it is split into sections and cards."""

from __future__ import annotations

import re

LEADING_RULE_PATTERN = re.compile(r"\A---[ \t]*\n[ \t]*\n")
HORIZONTAL_RULE_PATTERN = re.compile(r"^(\*{3,}|-{3,}|_{3,})[ \t]*$", re.MULTILINE)
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")
TABLE_CONTEXT_LINES = 3


def _is_table_line(line: str) -> bool:
    stripped = line.strip()
    return "|" in stripped and not stripped.startswith("#")


def _near_table(text: str, start: int, end: int) -> bool:
    """Return ``True`` when a line within reach of ``text[start:end]`` holds a table."""
    before = text[:start].split("\n")[:-1][-TABLE_CONTEXT_LINES:]
    after = text[end:].split("\n")[1 : TABLE_CONTEXT_LINES + 1]
    return any(_is_table_line(line) for line in (*before, *after))


def _drop_rules(text: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        if match.group(1).startswith("-") and _near_table(
            match.string, match.start(), match.end()
        ):
            return match.group(0)
        return ""

    return HORIZONTAL_RULE_PATTERN.sub(_replace, text)


def _clean_once(text: str) -> str:
    cleaned = LEADING_RULE_PATTERN.sub("", text)
    cleaned = _drop_rules(cleaned)
    cleaned = EXCESS_NEWLINES_PATTERN.sub("\n\n", cleaned)
    return cleaned.strip()


def clean_markdown(text: str) -> str:
    """Strip decorative rules and excess blank lines from markdown.

    A leading ``---`` followed by a blank line is removed, standalone
    horizontal rules are dropped unless a dash rule sits next to table rows,
    runs of three or more newlines collapse to two, and the result is trimmed.
    Every step only deletes text, so the passes repeat until nothing changes;
    ``clean_markdown(clean_markdown(x)) == clean_markdown(x)`` always holds.

    Parameters
    ----------
    text : str
        Markdown to normalise.

    Returns
    -------
    str
        The cleaned markdown.
    """
    current = text
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


__all__ = ["clean_markdown"]
