"""Typed dataclasses describing parsed cheatsheet documents.

The parser builds these frozen dataclasses fresh for every input; nothing is
mutated after construction and ownership is strictly tree-shaped
(``Document`` → ``Section`` → subsection ``Section`` → ``Card`` →
``KeyboardShortcut``). The ``from_mapping`` constructors rebuild the tree from
the JSON-ready mappings produced by :mod:`cheatsheet_parser.serializer`.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import typing as typ

import msgspec
import msgspec.json

METADATA_TEXT_FIELDS = ("title", "date", "background", "intro")
METADATA_LIST_FIELDS = ("tags", "categories", "plugins")
METADATA_FIELDS = ("title", "date", "background", "tags", "categories", "intro", "plugins")


def _optional_text(value: object | None) -> str | None:
    """Return ``value`` as text, rendering dates in ISO format."""
    match value:
        case None:
            return None
        case dt.date():
            return value.isoformat()
        case _:
            return str(value)


def _optional_list(value: object | None) -> tuple[str, ...] | None:
    """Normalize a scalar or sequence front-matter value into a tuple of strings."""
    match value:
        case None:
            return None
        case str():
            return (value,)
        case cabc.Iterable():
            return tuple(str(item) for item in value if item is not None)
        case _:
            return (str(value),)


def _json_value(value: object) -> typ.Any:
    """Return ``value`` exactly as it reads back from JSON.

    Non-string mapping keys become strings and non-finite floats become
    ``None``. Raises ``TypeError``, ``RecursionError`` or
    ``msgspec.EncodeError`` for values JSON cannot carry.
    """
    return msgspec.json.decode(msgspec.json.encode(value))


@dc.dataclass(frozen=True, slots=True)
class Metadata:
    """Front-matter fields with an open extension map for unknown keys.

    Attributes
    ----------
    title, date, background, intro : str or None
        Recognised scalar fields. Dates decoded by YAML are stored as ISO
        strings.
    tags, categories, plugins : tuple[str, ...] or None
        Recognised list fields; a scalar value becomes a one-item tuple.
    extra : Mapping[str, Any]
        Every other front-matter key, normalised to the value it decodes to
        after a JSON round trip.
    """

    title: str | None = None
    date: str | None = None
    background: str | None = None
    tags: tuple[str, ...] | None = None
    categories: tuple[str, ...] | None = None
    intro: str | None = None
    plugins: tuple[str, ...] | None = None
    extra: typ.Mapping[str, typ.Any] = dc.field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> Metadata:
        """Split a flat front-matter mapping into known fields and extras."""
        known: dict[str, typ.Any] = {}
        extra: dict[str, typ.Any] = {}
        for key, value in data.items():
            name = str(key)
            if name in METADATA_TEXT_FIELDS:
                known[name] = _optional_text(value)
            elif name in METADATA_LIST_FIELDS:
                known[name] = _optional_list(value)
            else:
                extra[name] = _json_value(value)
        return cls(**known, extra=extra)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the flat mapping form: set known fields, then extras."""
        flat: dict[str, typ.Any] = {}
        for name in METADATA_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            flat[name] = list(value) if isinstance(value, tuple) else value
        flat.update(self.extra)
        return flat


@dc.dataclass(frozen=True, slots=True)
class KeyboardShortcut:
    """One row of a two-column ``Shortcut | Action`` table."""

    shortcut: str
    action: str

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> KeyboardShortcut:
        return cls(shortcut=str(data["shortcut"]), action=str(data["action"]))


@dc.dataclass(frozen=True, slots=True)
class Card:
    """Smallest renderable unit: one subsection's code and explanation.

    Attributes
    ----------
    title : str
        Owning subsection (or section) title.
    body : str
        Primary content, usually a fenced code block; may be empty.
    footer : str
        Secondary explanatory text; may be empty.
    span_config : str
        Layout hint parsed from the heading annotation, e.g. ``col-span-2``.
    shortcuts : tuple[KeyboardShortcut, ...] or None
        Extracted table rows for shortcut cards, ``None`` for plain cards.
    """

    title: str
    body: str = ""
    footer: str = ""
    span_config: str = ""
    shortcuts: tuple[KeyboardShortcut, ...] | None = None

    @property
    def is_shortcuts_card(self) -> bool:
        """Return ``True`` when the card carries a shortcut table."""
        return self.shortcuts is not None

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> Card:
        shortcuts = None
        if data.get("isShortcutsCard"):
            shortcuts = tuple(
                KeyboardShortcut.from_mapping(item)
                for item in data.get("shortcuts") or []
            )
        return cls(
            title=str(data.get("title", "")),
            body=str(data.get("body", "")),
            footer=str(data.get("footer", "")),
            span_config=str(data.get("spanConfig", "")),
            shortcuts=shortcuts,
        )


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Second-level (or third-level) heading block.

    Level-2 sections hold their subsections; level-3 subsections hold cards.
    A level-2 section only carries cards directly when it has no ``###``
    headings at all.
    """

    title: str
    level: int = 2
    cards: tuple[Card, ...] = ()
    subsections: tuple[Section, ...] = ()

    @property
    def card_count(self) -> int:
        """Return the number of cards in this section and its subsections."""
        return len(self.cards) + sum(sub.card_count for sub in self.subsections)

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> Section:
        return cls(
            title=str(data.get("title", "")),
            level=int(data.get("level", 2)),
            cards=tuple(Card.from_mapping(item) for item in data.get("cards") or []),
            subsections=tuple(
                Section.from_mapping(item) for item in data.get("subsections") or []
            ),
        )


@dc.dataclass(frozen=True, slots=True)
class Document:
    """Parse result for one markdown input."""

    metadata: Metadata = dc.field(default_factory=Metadata)
    sections: tuple[Section, ...] = ()

    @property
    def card_count(self) -> int:
        """Return the total number of cards in the document."""
        return sum(section.card_count for section in self.sections)

    @classmethod
    def from_mapping(cls, data: typ.Mapping[str, typ.Any]) -> Document:
        return cls(
            metadata=Metadata.from_mapping(data.get("metadata") or {}),
            sections=tuple(
                Section.from_mapping(item) for item in data.get("sections") or []
            ),
        )


@dc.dataclass(frozen=True, slots=True)
class ParserOptions:
    """Caller-supplied switches controlling extraction and formatting.

    Attributes
    ----------
    include_metadata : bool
        Decode the front matter into ``Document.metadata``.
    preserve_code_blocks : bool
        Re-fence code bodies as ```` ```lang ```` blocks instead of bare code.
    extract_span_config : bool
        Turn ``{.class-name}`` heading annotations into ``Card.span_config``.
    """

    include_metadata: bool = True
    preserve_code_blocks: bool = True
    extract_span_config: bool = True


@dc.dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one file; failures carry the error message."""

    success: bool
    file_path: str
    document: Document | None = None
    error: str | None = None


@dc.dataclass(frozen=True, slots=True)
class CheatsheetEntry:
    """One document inside unified output, keyed by its cheatsheet id."""

    id: str
    metadata: Metadata
    sections: tuple[Section, ...]


@dc.dataclass(frozen=True, slots=True)
class UnifiedCheatsheets:
    """Every successfully parsed cheatsheet gathered into one payload."""

    cheatsheets: tuple[CheatsheetEntry, ...]
    created_at: str
    version: str


@dc.dataclass(frozen=True, slots=True)
class CheatsheetIndexItem:
    """Summary card describing one cheatsheet in the index file."""

    id: str
    name: str
    description: str
    keywords: tuple[str, ...]
    categories: tuple[str, ...]
    status: str
    gradient: str
    badge: str
    icon: str
    sections: tuple[str, ...]
    last_updated: str


@dc.dataclass(frozen=True, slots=True)
class CheatsheetIndex:
    """Index payload listing every individually written cheatsheet."""

    cheatsheets: tuple[CheatsheetIndexItem, ...]
    created_at: str
    version: str


__all__ = [
    "Card",
    "CheatsheetEntry",
    "CheatsheetIndex",
    "CheatsheetIndexItem",
    "Document",
    "KeyboardShortcut",
    "Metadata",
    "ParseResult",
    "ParserOptions",
    "Section",
    "UnifiedCheatsheets",
]
