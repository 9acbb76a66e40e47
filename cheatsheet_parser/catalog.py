"""Helpers that describe a parsed cheatsheet for the cheatsheet index.

Index cards need a stable id, a short keyword list for search, and a few
presentation hints (gradient, badge, icon) chosen from fixed lookups.
"""

from __future__ import annotations

import datetime as dt
import re
from pathlib import Path

from .models import CheatsheetIndexItem, Document

KEYWORD_LIMIT = 10
MIN_WORD_LENGTH = 3
INDEX_STATUS = "Available"

GRADIENTS: dict[str, str] = {
    "python": "from-blue-500 to-indigo-600",
    "finder": "from-blue-500 to-cyan-600",
    "javascript": "from-yellow-500 to-amber-600",
    "react": "from-emerald-500 to-green-600",
    "git": "from-orange-500 to-red-600",
}
DEFAULT_GRADIENT = "from-gray-500 to-gray-600"

BADGES: dict[str, str] = {
    "python": "Popular",
    "finder": "New",
}
DEFAULT_BADGE = "Available"

CODE_ICON_CATEGORIES = ("Keyboard Shortcuts", "Programming")
CODE_ICON = "Code"
DEFAULT_ICON = "BookOpen"


def cheatsheet_id(path: str | Path) -> str:
    """Return the cheatsheet id for a markdown file path.

    >>> cheatsheet_id("posts/VS Code.md")
    'vs-code'
    """
    return re.sub(r"[^a-z0-9]", "-", Path(path).stem.lower())


def utc_timestamp() -> str:
    """Return the current UTC time in ISO-8601 form with millisecond precision."""
    now = dt.datetime.now(dt.UTC)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _title_words(text: str) -> list[str]:
    return [word for word in text.lower().split() if len(word) >= MIN_WORD_LENGTH]


def generate_keywords(document: Document) -> tuple[str, ...]:
    """Collect up to ten unique search keywords in first-seen order.

    Words come from the title, tags, categories, and section titles; title
    and section-title words shorter than three characters are ignored.
    """
    metadata = document.metadata
    candidates: list[str] = []
    if metadata.title:
        candidates.extend(_title_words(metadata.title))
    candidates.extend(tag.lower() for tag in metadata.tags or () if tag)
    candidates.extend(
        category.lower() for category in metadata.categories or () if category
    )
    for section in document.sections:
        candidates.extend(_title_words(section.title))
    return tuple(dict.fromkeys(candidates))[:KEYWORD_LIMIT]


def gradient_for(identifier: str) -> str:
    return GRADIENTS.get(identifier, DEFAULT_GRADIENT)


def badge_for(identifier: str) -> str:
    return BADGES.get(identifier, DEFAULT_BADGE)


def icon_for(categories: tuple[str, ...]) -> str:
    if any(category in categories for category in CODE_ICON_CATEGORIES):
        return CODE_ICON
    return DEFAULT_ICON


def build_index_item(
    path: str | Path, document: Document, *, timestamp: str | None = None
) -> CheatsheetIndexItem:
    """Describe one parsed cheatsheet as an index card.

    Parameters
    ----------
    path : str or Path
        Markdown file the document was parsed from.
    document : Document
        The parsed cheatsheet.
    timestamp : str or None, optional
        ``lastUpdated`` value; defaults to the current UTC time.

    Returns
    -------
    CheatsheetIndexItem
        Index entry named after the document title (or the file stem).
    """
    identifier = cheatsheet_id(path)
    metadata = document.metadata
    name = metadata.title or Path(path).stem
    categories = metadata.categories or ()
    return CheatsheetIndexItem(
        id=identifier,
        name=name,
        description=metadata.intro or f"Quick reference for {name}",
        keywords=generate_keywords(document),
        categories=categories,
        status=INDEX_STATUS,
        gradient=gradient_for(identifier),
        badge=badge_for(identifier),
        icon=icon_for(categories),
        sections=tuple(section.title for section in document.sections),
        last_updated=timestamp or utc_timestamp(),
    )


__all__ = [
    "badge_for",
    "build_index_item",
    "cheatsheet_id",
    "generate_keywords",
    "gradient_for",
    "icon_for",
    "utc_timestamp",
]
