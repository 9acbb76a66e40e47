"""Parse cheatsheet files from disk, alone or in batches.

Every file is read and parsed independently. A file that cannot be read
produces a failed :class:`~cheatsheet_parser.models.ParseResult` instead of an
exception, so one bad input never aborts a batch. On top of
:func:`parse_files` this module builds the two aggregate outputs used by the
cheatsheet site: a single unified JSON payload, and one JSON file per
cheatsheet plus an index file.

Examples
--------
>>> from cheatsheet_parser.batch import parse_files
>>> results = parse_files(["docs/python.md", "missing.md"])  # doctest: +SKIP
>>> [result.success for result in results]  # doctest: +SKIP
[True, False]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ._constants import (
    CHEATSHEET_FILE_TEMPLATE,
    DEFAULT_INDEX_OUTPUT,
    DEFAULT_OUTPUT_DIR,
    INDEX_VERSION,
)
from .catalog import build_index_item, cheatsheet_id, utc_timestamp
from .markdown_parser import parse_content
from .models import (
    CheatsheetEntry,
    CheatsheetIndex,
    CheatsheetIndexItem,
    ParseResult,
    ParserOptions,
    UnifiedCheatsheets,
)
from .serializer import encode

logger = logging.getLogger(__name__)

PathLike = str | Path


def parse_file(file_path: PathLike, options: ParserOptions | None = None) -> ParseResult:
    """Read one UTF-8 markdown file and parse it.

    Parameters
    ----------
    file_path : str or Path
        Markdown file to read.
    options : ParserOptions or None, optional
        Parser switches passed to :func:`parse_content`.

    Returns
    -------
    ParseResult
        ``success=True`` with the document, or ``success=False`` with the
        read error message when the file is missing or not valid UTF-8.
    """
    path_text = str(file_path)
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read %s: %s", path_text, exc)
        return ParseResult(success=False, file_path=path_text, error=str(exc))
    document = parse_content(content, options)
    return ParseResult(success=True, file_path=path_text, document=document)


def parse_files(
    file_paths: cabc.Iterable[PathLike],
    options: ParserOptions | None = None,
    *,
    max_workers: int | None = None,
) -> list[ParseResult]:
    """Parse many files concurrently, returning results in input order."""
    paths = list(file_paths)
    if not paths:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda path: parse_file(path, options), paths))


def parse_unified(
    file_paths: cabc.Iterable[PathLike], options: ParserOptions | None = None
) -> UnifiedCheatsheets:
    """Gather every successfully parsed file into one unified payload.

    Failed files are logged and left out.
    """
    entries: list[CheatsheetEntry] = []
    for result in parse_files(file_paths, options):
        if not result.success or result.document is None:
            logger.warning("Failed to parse %s: %s", result.file_path, result.error)
            continue
        entries.append(
            CheatsheetEntry(
                id=cheatsheet_id(result.file_path),
                metadata=result.document.metadata,
                sections=result.document.sections,
            )
        )
    return UnifiedCheatsheets(
        cheatsheets=tuple(entries),
        created_at=utc_timestamp(),
        version=INDEX_VERSION,
    )


def write_json(path: Path, value: object, *, indent: int = 2) -> Path:
    """Write a model as UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(encode(value, indent=indent), encoding="utf-8")
    return path


def parse_individual(
    file_paths: cabc.Iterable[PathLike],
    options: ParserOptions | None = None,
    *,
    output_dir: Path = DEFAULT_OUTPUT_DIR,
    index_output: Path = DEFAULT_INDEX_OUTPUT,
) -> CheatsheetIndex:
    """Write one JSON file per cheatsheet and an index describing them all.

    Parameters
    ----------
    file_paths : Iterable[str or Path]
        Markdown files to parse.
    options : ParserOptions or None, optional
        Parser switches.
    output_dir : Path, optional
        Directory receiving ``<id>.json`` files; created when missing.
    index_output : Path, optional
        Location of the index JSON file.

    Returns
    -------
    CheatsheetIndex
        The index that was written to ``index_output``.

    Raises
    ------
    OSError
        If an output file cannot be written.
    """
    items: list[CheatsheetIndexItem] = []
    for result in parse_files(file_paths, options):
        if not result.success or result.document is None:
            logger.warning("Failed to parse %s: %s", result.file_path, result.error)
            continue
        identifier = cheatsheet_id(result.file_path)
        entry = CheatsheetEntry(
            id=identifier,
            metadata=result.document.metadata,
            sections=result.document.sections,
        )
        write_json(output_dir / CHEATSHEET_FILE_TEMPLATE.format(id=identifier), entry)
        items.append(build_index_item(result.file_path, result.document))
        logger.info("Created %s", CHEATSHEET_FILE_TEMPLATE.format(id=identifier))

    index = CheatsheetIndex(
        cheatsheets=tuple(items),
        created_at=utc_timestamp(),
        version=INDEX_VERSION,
    )
    write_json(index_output, index)
    return index


__all__ = [
    "parse_file",
    "parse_files",
    "parse_individual",
    "parse_unified",
    "write_json",
]
