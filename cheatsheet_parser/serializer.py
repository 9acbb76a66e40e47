"""Encode parsed cheatsheets as JSON and decode them back.

The JSON layout is the one the card-grid renderer reads: camelCase keys
(``spanConfig``, ``isShortcutsCard``, ``filePath``, ``createdAt``), field
order following the dataclass definitions, and metadata flattened into a
single mapping. ``shortcuts`` is only written for shortcut cards.

Examples
--------
>>> from cheatsheet_parser.models import Document, Metadata
>>> from cheatsheet_parser.serializer import from_json, to_json
>>> payload = to_json(Document(metadata=Metadata(title="Demo")), indent=0)
>>> payload
'{"metadata":{"title":"Demo"},"sections":[]}'
>>> from_json(payload).metadata.title
'Demo'
"""

from __future__ import annotations

import functools
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .models import (
    Card,
    CheatsheetEntry,
    CheatsheetIndex,
    CheatsheetIndexItem,
    Document,
    KeyboardShortcut,
    Metadata,
    ParseResult,
    Section,
    UnifiedCheatsheets,
)


@functools.singledispatch
def to_builtins(value: object) -> typ.Any:
    """Return the JSON-ready mapping (or list) for a model instance."""
    return msgspec.to_builtins(value)


@to_builtins.register
def _(value: Metadata) -> dict[str, typ.Any]:
    return value.to_dict()


@to_builtins.register
def _(value: KeyboardShortcut) -> dict[str, typ.Any]:
    return {"shortcut": value.shortcut, "action": value.action}


@to_builtins.register
def _(value: Card) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "title": value.title,
        "body": value.body,
        "footer": value.footer,
        "spanConfig": value.span_config,
        "isShortcutsCard": value.is_shortcuts_card,
    }
    if value.shortcuts is not None:
        payload["shortcuts"] = [to_builtins(item) for item in value.shortcuts]
    return payload


@to_builtins.register
def _(value: Section) -> dict[str, typ.Any]:
    return {
        "title": value.title,
        "level": value.level,
        "cards": [to_builtins(card) for card in value.cards],
        "subsections": [to_builtins(sub) for sub in value.subsections],
    }


@to_builtins.register
def _(value: Document) -> dict[str, typ.Any]:
    return {
        "metadata": to_builtins(value.metadata),
        "sections": [to_builtins(section) for section in value.sections],
    }


@to_builtins.register
def _(value: ParseResult) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {"success": value.success}
    if value.document is not None:
        payload["document"] = to_builtins(value.document)
    if value.error is not None:
        payload["error"] = value.error
    payload["filePath"] = value.file_path
    return payload


@to_builtins.register
def _(value: CheatsheetEntry) -> dict[str, typ.Any]:
    return {
        "id": value.id,
        "metadata": to_builtins(value.metadata),
        "sections": [to_builtins(section) for section in value.sections],
    }


@to_builtins.register
def _(value: UnifiedCheatsheets) -> dict[str, typ.Any]:
    return {
        "cheatsheets": [to_builtins(entry) for entry in value.cheatsheets],
        "createdAt": value.created_at,
        "version": value.version,
    }


@to_builtins.register
def _(value: CheatsheetIndexItem) -> dict[str, typ.Any]:
    return {
        "id": value.id,
        "name": value.name,
        "description": value.description,
        "keywords": list(value.keywords),
        "categories": list(value.categories),
        "status": value.status,
        "gradient": value.gradient,
        "badge": value.badge,
        "icon": value.icon,
        "sections": list(value.sections),
        "lastUpdated": value.last_updated,
    }


@to_builtins.register
def _(value: CheatsheetIndex) -> dict[str, typ.Any]:
    return {
        "cheatsheets": [to_builtins(item) for item in value.cheatsheets],
        "createdAt": value.created_at,
        "version": value.version,
    }


def encode(value: object, indent: int = 2) -> str:
    """Serialize any model to JSON text.

    Parameters
    ----------
    value : object
        A model instance from :mod:`cheatsheet_parser.models`.
    indent : int, optional
        ``0`` for compact output, otherwise the number of spaces per
        indentation level (default ``2``).
    """
    raw = msgspec_json.encode(to_builtins(value))
    if indent > 0:
        raw = msgspec_json.format(raw, indent=indent)
    return raw.decode("utf-8")


def to_json(document: Document, indent: int = 2) -> str:
    """Serialize a parsed document to JSON text."""
    return encode(document, indent=indent)


def from_json(data: str | bytes) -> Document:
    """Rebuild a :class:`Document` from the JSON produced by :func:`to_json`."""
    payload = msgspec_json.decode(data)
    if not isinstance(payload, dict):
        msg = "Document JSON must be an object."
        raise TypeError(msg)
    return Document.from_mapping(payload)


__all__ = ["encode", "from_json", "to_builtins", "to_json"]
