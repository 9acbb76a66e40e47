r"""Parse cheatsheet markdown into sections, subsections, and cards.

This module powers the cheatsheet pipeline by splitting markdown into ordered
``##`` sections and ``###`` subsections, turning each subsection's content
into a :class:`~cheatsheet_parser.models.Card`, and returning the frozen
dataclasses that :mod:`cheatsheet_parser.serializer` writes as JSON.

The recognised convention is narrow:

* ``## Title`` starts a section.
* ``### Title {.col-span-2}`` starts a subsection; the optional trailing
  ``{.class}`` annotation becomes the card's span config.
* ``#### Title`` inside a subsection marks nested detail that is handed to
  the renderer verbatim as the card footer.
* The first fenced code block of a subsection becomes the card body and the
  text after it becomes the footer.

Example
-------
>>> from cheatsheet_parser.markdown_parser import parse_content
>>> doc = parse_content("## Basics\n### Hello {.wide}\n```py\nprint(1)\n```\nPrints 1.")
>>> card = doc.sections[0].subsections[0].cards[0]
>>> card.body, card.footer, card.span_config
('```py\nprint(1)\n```', 'Prints 1.', 'wide')
"""

from __future__ import annotations

import dataclasses as dc
import re

from ._constants import SHORTCUTS_CLASS, SHORTCUTS_MARKER
from .cleaning import clean_markdown
from .front_matter import split_front_matter
from .models import Card, Document, ParserOptions, Section
from .shortcuts import parse_shortcuts

SECTION_PATTERN = re.compile(r"^## (.+?)(?:[ \t]*(\{[^}\n]+\}))?[ \t]*$", re.MULTILINE)
SUBSECTION_PATTERN = re.compile(
    r"^### (.+?)(?:[ \t]*(\{[^}\n]+\}))?[ \t]*$", re.MULTILINE
)
NESTED_HEADING_PATTERN = re.compile(r"^#### (.+)$", re.MULTILINE)
SPAN_CLASS_PATTERN = re.compile(r"\{\.([^}]+)\}")
CODE_BLOCK_PATTERN = re.compile(r"```([^\s`]+)?[^\n]*\n(.*?)\n```", re.DOTALL)

DEFAULT_OPTIONS = ParserOptions()


@dc.dataclass(frozen=True, slots=True)
class HeadingSpan:
    """Location of one heading and the content it owns.

    Attributes
    ----------
    title : str
        Heading text with any trailing ``{...}`` annotation removed.
    annotation : str
        The raw ``{...}`` annotation, or ``""`` when absent.
    start : int
        Offset of the heading line.
    content_start : int
        Offset just past the heading line.
    end : int
        Offset of the next heading of the same level, or the end of the text.
    """

    title: str
    annotation: str
    start: int
    content_start: int
    end: int


def _split_headings(pattern: re.Pattern[str], text: str) -> list[HeadingSpan]:
    matches = list(pattern.finditer(text))
    spans: list[HeadingSpan] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        spans.append(
            HeadingSpan(
                title=match.group(1).strip(),
                annotation=(match.group(2) or "").strip(),
                start=match.start(),
                content_start=match.end(),
                end=end,
            )
        )
    return spans


def split_sections(text: str) -> list[HeadingSpan]:
    """Return the ``##`` heading spans of ``text`` in document order."""
    return _split_headings(SECTION_PATTERN, text)


def split_subsections(text: str) -> list[HeadingSpan]:
    """Return the ``###`` heading spans of one section's content."""
    return _split_headings(SUBSECTION_PATTERN, text)


def span_class(annotation: str) -> str:
    """Return the bare class name of a ``{.class-name}`` annotation."""
    match = SPAN_CLASS_PATTERN.search(annotation)
    return match.group(1) if match else ""


def _fence(language: str, code: str) -> str:
    return f"```{language}\n{code}\n```"


def _first_code_block(text: str) -> re.Match[str] | None:
    return CODE_BLOCK_PATTERN.search(text)


def _split_flat(content: str, options: ParserOptions) -> tuple[str, str]:
    """Split content without ``####`` headings into code body and footer."""
    match = _first_code_block(content)
    if match is None:
        return "", content.strip()

    language = match.group(1) or ""
    code = match.group(2).strip()
    body = _fence(language, code) if options.preserve_code_blocks else code
    footer_lines = [
        line.strip()
        for line in content[match.end() :].splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
    return body, "\n".join(footer_lines)


def _split_nested(
    content: str, first_heading: re.Match[str], options: ParserOptions
) -> tuple[str, str]:
    """Split content with ``####`` headings into a lead-in body and raw footer."""
    lead_in = content[: first_heading.start()].strip()
    footer = content[first_heading.start() :].strip()
    if not lead_in:
        return "", footer

    prose = CODE_BLOCK_PATTERN.sub("", lead_in).strip()
    code = ""
    match = _first_code_block(lead_in)
    if match is not None:
        language = (match.group(1) or "") if options.preserve_code_blocks else ""
        code = _fence(language, match.group(2).strip())
    body = "\n\n".join(part for part in (prose, code) if part)
    return body, footer


def parse_cards(
    content: str,
    title: str,
    span_config: str = "",
    options: ParserOptions = DEFAULT_OPTIONS,
) -> tuple[Card, ...]:
    """Build the cards for one subsection's content.

    Parameters
    ----------
    content : str
        Raw markdown owned by the subsection (heading line excluded).
    title : str
        Title given to the card, normally the subsection title.
    span_config : str, optional
        Layout class from the heading annotation.
    options : ParserOptions, optional
        Formatting switches.

    Returns
    -------
    tuple[Card, ...]
        Zero or one card; no card is produced when both body and footer end
        up empty.
    """
    is_shortcuts = span_config == SHORTCUTS_CLASS or SHORTCUTS_MARKER in content
    cleaned = clean_markdown(content)

    first_heading = NESTED_HEADING_PATTERN.search(cleaned)
    if first_heading is None:
        body, footer = _split_flat(cleaned, options)
    else:
        body, footer = _split_nested(cleaned, first_heading, options)

    if not body and not footer:
        return ()
    shortcuts = parse_shortcuts(footer or body) if is_shortcuts else None
    return (
        Card(
            title=title,
            body=body,
            footer=footer,
            span_config=span_config,
            shortcuts=shortcuts,
        ),
    )


def _parse_subsection(
    content: str, span: HeadingSpan, options: ParserOptions
) -> Section:
    subsection_content = content[span.content_start : span.end]
    config = span_class(span.annotation) if options.extract_span_config else ""
    return Section(
        title=span.title,
        level=3,
        cards=parse_cards(subsection_content, span.title, config, options),
    )


def parse_sections(
    markdown_text: str, options: ParserOptions = DEFAULT_OPTIONS
) -> tuple[Section, ...]:
    """Split cleaned markdown into ordered sections with their subsections.

    A section without any ``###`` heading is parsed as a single card titled
    after the section. Returns an empty tuple when no ``##`` heading exists.
    """
    sections: list[Section] = []
    for span in split_sections(markdown_text):
        content = markdown_text[span.content_start : span.end]
        sub_spans = split_subsections(content)
        if sub_spans:
            section = Section(
                title=span.title,
                level=2,
                subsections=tuple(
                    _parse_subsection(content, sub_span, options)
                    for sub_span in sub_spans
                ),
            )
        else:
            section = Section(
                title=span.title,
                level=2,
                cards=parse_cards(content, span.title, "", options),
            )
        sections.append(section)
    return tuple(sections)


def parse_content(content: str, options: ParserOptions | None = None) -> Document:
    """Parse one cheatsheet document.

    Parameters
    ----------
    content : str
        Raw markdown, optionally starting with a YAML front-matter block.
    options : ParserOptions or None, optional
        Parser switches; defaults to :class:`ParserOptions()`.

    Returns
    -------
    Document
        Metadata and the section tree. Malformed structure never raises; the
        tree simply contains whatever could be recognised.
    """
    options = options or DEFAULT_OPTIONS
    normalized = content.replace("\r\n", "\n")
    metadata, body = split_front_matter(
        normalized, include_metadata=options.include_metadata
    )
    return Document(
        metadata=metadata,
        sections=parse_sections(clean_markdown(body), options),
    )


__all__ = [
    "CODE_BLOCK_PATTERN",
    "HeadingSpan",
    "parse_cards",
    "parse_content",
    "parse_sections",
    "span_class",
    "split_sections",
    "split_subsections",
]
