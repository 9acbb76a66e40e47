"""Convert cheatsheet markdown into structured JSON for card-grid rendering.

This package parses markdown documents that follow a fixed convention (YAML
front matter, ``##`` sections, ``###`` subsections with optional
``{.class}`` layout hints) into a tree of sections, subsections, and cards,
and exposes the ``parse-markdown`` CLI.

Exports
-------
- ``parse_content``: Parse markdown text into a ``Document``.
- ``parse_file`` / ``parse_files``: Parse files from disk, isolating failures.
- ``to_json`` / ``from_json``: Serialize and rebuild documents.
- ``app`` / ``main``: Cyclopts application and console entry point.

Examples
--------
>>> from cheatsheet_parser import parse_content, to_json
>>> doc = parse_content("## Basics\\n### Echo\\n```sh\\necho hi\\n```\\n")
>>> doc.sections[0].subsections[0].title
'Echo'
>>> to_json(doc, indent=0).startswith('{"metadata":{}')
True
"""

from __future__ import annotations

from .batch import parse_file, parse_files, parse_individual, parse_unified
from .cli import app, main
from .markdown_parser import parse_content
from .models import (
    Card,
    Document,
    KeyboardShortcut,
    Metadata,
    ParseResult,
    ParserOptions,
    Section,
)
from .serializer import from_json, to_json

__all__ = [
    "Card",
    "Document",
    "KeyboardShortcut",
    "Metadata",
    "ParseResult",
    "ParserOptions",
    "Section",
    "app",
    "from_json",
    "main",
    "parse_content",
    "parse_file",
    "parse_files",
    "parse_individual",
    "parse_unified",
    "to_json",
]
