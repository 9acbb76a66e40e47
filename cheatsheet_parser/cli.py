"""Cyclopts CLI entrypoint for turning cheatsheet markdown into JSON.

The ``parse-markdown`` console script defined here parses one file
(``single``), every file matching a glob pattern (``batch``), a set of files
into one combined payload (``unified``), a set of files into individual JSON
files plus an index (``individual``), or the upstream reference repository
(``github``). Every flag can also be supplied through a ``CHEATSHEET_``
prefixed environment variable, for example ``CHEATSHEET_PRETTY=1``.

Examples
--------
Parse one file and pretty-print the JSON next to it:

>>> from cheatsheet_parser.cli import app
>>> app(["single", "docs/python.md", "--pretty"])  # doctest: +SKIP

Parse a folder of cheatsheets into ``dist``:

>>> app(["batch", "docs/*.md", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import glob
import logging
import subprocess
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import (
    DEFAULT_INDEX_OUTPUT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TEMP_DIR,
    DEFAULT_UNIFIED_OUTPUT,
    REFERENCE_REPO_URL,
)
from .batch import parse_file, parse_files, parse_individual, parse_unified, write_json
from .models import CheatsheetIndex, Document, ParserOptions
from .reference_repo import ReferenceRepoError, clone_reference_repo, remove_clone

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PRETTY_INDENT = 2

logger = logging.getLogger(__name__)

app = App(
    name="parse-markdown",
    help="Parse cheatsheet markdown files into structured JSON.",
    version="1.0.0",
    config=cyclopts.config.Env("CHEATSHEET_", command=False),  # type: ignore[unknown-argument]
)

MetadataFlag = typ.Annotated[bool, Parameter(help="Extract YAML front matter.")]
CodeBlocksFlag = typ.Annotated[
    bool, Parameter(help="Preserve fenced code block formatting in card bodies.")
]
SpanConfigFlag = typ.Annotated[
    bool, Parameter(help="Extract {.class} span configuration from headings.")
]
PrettyFlag = typ.Annotated[bool, Parameter(help="Pretty print JSON output.")]


def _parser_options(*, metadata: bool, code_blocks: bool, span_config: bool) -> ParserOptions:
    return ParserOptions(
        include_metadata=metadata,
        preserve_code_blocks=code_blocks,
        extract_span_config=span_config,
    )


def _indent(pretty: bool) -> int:
    return PRETTY_INDENT if pretty else 0


def _fail(message: str) -> typ.NoReturn:
    """Report ``message`` on stderr and exit with status 1."""
    print(f"error: {message}", file=sys.stderr)
    raise SystemExit(1)


def _resolve_pattern(pattern: str) -> list[Path]:
    """Return the files matching a glob pattern in sorted order."""
    return [Path(match) for match in sorted(glob.glob(pattern, recursive=True))]


def _print_document_summary(document: Document) -> None:
    print("Summary:")
    print(f"  Title: {document.metadata.title or 'N/A'}")
    print(f"  Sections: {len(document.sections)}")
    print(f"  Total Cards: {document.card_count}")


def _print_index_summary(index: CheatsheetIndex) -> None:
    print(f"Total Cheatsheets: {len(index.cheatsheets)}")
    for position, item in enumerate(index.cheatsheets, start=1):
        print(f"  {position}. {item.name} ({item.id}.json)")
    print(f"Created: {index.created_at}")
    print(f"Version: {index.version}")


@app.command(help="Parse a single markdown file.")
def single(
    file: Path,
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Output file path (defaults to <filename>.json)"),
    ] = None,
    metadata: MetadataFlag = True,
    code_blocks: CodeBlocksFlag = True,
    span_config: SpanConfigFlag = True,
    pretty: PrettyFlag = False,
) -> None:
    """Parse ``file`` and write its JSON document.

    Parameters
    ----------
    file : Path
        Markdown file to parse.
    output : Path or None, optional
        Destination file; defaults to the input path with a ``.json`` suffix.
    metadata, code_blocks, span_config : bool, optional
        Parser switches, all enabled by default.
    pretty : bool, optional
        Indent the JSON output.

    Raises
    ------
    SystemExit
        With status 1 when the file cannot be read or the output cannot be
        written.
    """
    options = _parser_options(
        metadata=metadata, code_blocks=code_blocks, span_config=span_config
    )
    print(f"parsing {file}")
    result = parse_file(file, options)
    if not result.success or result.document is None:
        _fail(f"could not parse {file}: {result.error}")

    output_path = output or file.with_suffix(".json")
    try:
        write_json(output_path, result.document, indent=_indent(pretty))
    except OSError as exc:
        _fail(f"could not write {output_path}: {exc}")
    print(f"wrote {output_path}")
    _print_document_summary(result.document)


@app.command(help="Parse multiple markdown files matching a glob pattern.")
def batch(
    pattern: str,
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Output directory (defaults to each input file's directory)"),
    ] = None,
    metadata: MetadataFlag = True,
    code_blocks: CodeBlocksFlag = True,
    span_config: SpanConfigFlag = True,
    pretty: PrettyFlag = False,
) -> None:
    """Parse every file matching ``pattern`` into a sibling ``.json`` file.

    Files that fail to parse are reported and counted without stopping the
    batch; a pattern that matches nothing only prints a warning.
    """
    files = _resolve_pattern(pattern)
    if not files:
        print(f"warning: no files found matching pattern: {pattern}")
        return

    print(f"found {len(files)} files to parse")
    options = _parser_options(
        metadata=metadata, code_blocks=code_blocks, span_config=span_config
    )
    succeeded = failed = 0
    for result in parse_files(files, options):
        source = Path(result.file_path)
        if not result.success or result.document is None:
            print(f"failed {source.name}: {result.error}", file=sys.stderr)
            failed += 1
            continue
        target = (output_dir or source.parent) / f"{source.stem}.json"
        try:
            write_json(target, result.document, indent=_indent(pretty))
        except OSError as exc:
            _fail(f"could not write {target}: {exc}")
        print(f"{source.name} -> {target.name}")
        succeeded += 1

    print("Batch Summary:")
    print(f"  Successful: {succeeded}")
    print(f"  Failed: {failed}")
    print(f"  Total: {succeeded + failed}")


@app.command(help="Parse multiple markdown files into one unified JSON file.")
def unified(
    pattern: str,
    *,
    output: typ.Annotated[
        Path, Parameter(help="Output file path")
    ] = DEFAULT_UNIFIED_OUTPUT,
    metadata: MetadataFlag = True,
    code_blocks: CodeBlocksFlag = True,
    span_config: SpanConfigFlag = True,
    pretty: PrettyFlag = False,
) -> None:
    """Write every cheatsheet matching ``pattern`` into a single payload."""
    files = _resolve_pattern(pattern)
    if not files:
        print(f"warning: no files found matching pattern: {pattern}")
        return

    print(f"parsing {len(files)} files")
    data = parse_unified(
        files,
        _parser_options(
            metadata=metadata, code_blocks=code_blocks, span_config=span_config
        ),
    )
    try:
        write_json(output, data, indent=_indent(pretty))
    except OSError as exc:
        _fail(f"could not write {output}: {exc}")
    print(f"wrote {output}")
    print(f"Total Cheatsheets: {len(data.cheatsheets)}")
    for position, entry in enumerate(data.cheatsheets, start=1):
        label = entry.metadata.title or entry.id
        print(f"  {position}. {label} ({len(entry.sections)} sections)")


@app.command(help="Parse markdown files into individual JSON files with an index.")
def individual(
    pattern: str,
    *,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output directory for individual files")
    ] = DEFAULT_OUTPUT_DIR,
    index_output: typ.Annotated[
        Path, Parameter(help="Output path for the index file")
    ] = DEFAULT_INDEX_OUTPUT,
    metadata: MetadataFlag = True,
    code_blocks: CodeBlocksFlag = True,
    span_config: SpanConfigFlag = True,
) -> None:
    """Write ``<id>.json`` per cheatsheet plus the cheatsheet index."""
    files = _resolve_pattern(pattern)
    if not files:
        print(f"warning: no files found matching pattern: {pattern}")
        return

    print(f"parsing {len(files)} files")
    try:
        index = parse_individual(
            files,
            _parser_options(
                metadata=metadata, code_blocks=code_blocks, span_config=span_config
            ),
            output_dir=output_dir,
            index_output=index_output,
        )
    except OSError as exc:
        _fail(str(exc))
    print(f"wrote cheatsheets to {output_dir}")
    print(f"wrote {index_output}")
    _print_index_summary(index)


@app.command(help="Download and parse cheatsheets from the reference repository.")
def github(
    *,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output directory for individual files")
    ] = DEFAULT_OUTPUT_DIR,
    index_output: typ.Annotated[
        Path, Parameter(help="Output path for the index file")
    ] = DEFAULT_INDEX_OUTPUT,
    temp_dir: typ.Annotated[
        Path, Parameter(help="Temporary directory for cloning the repository")
    ] = DEFAULT_TEMP_DIR,
    repo_url: typ.Annotated[
        str, Parameter(help="Repository to clone")
    ] = REFERENCE_REPO_URL,
    keep_temp: typ.Annotated[
        bool, Parameter(help="Keep the cloned repository after processing")
    ] = False,
    metadata: MetadataFlag = True,
    code_blocks: CodeBlocksFlag = True,
    span_config: SpanConfigFlag = True,
) -> None:
    """Clone the reference repository and convert its posts to JSON."""
    print(f"cloning {repo_url}")
    try:
        posts_dir = clone_reference_repo(temp_dir, repo_url=repo_url)
    except (FileNotFoundError, ReferenceRepoError) as exc:
        _fail(str(exc))
    except subprocess.CalledProcessError as exc:
        _fail(f"git clone failed: {exc.stderr or exc}")

    try:
        files = sorted(posts_dir.glob("*.md"))
        if not files:
            print(f"warning: no markdown files found in: {posts_dir}")
            return
        print(f"found {len(files)} markdown files")
        try:
            index = parse_individual(
                files,
                _parser_options(
                    metadata=metadata, code_blocks=code_blocks, span_config=span_config
                ),
                output_dir=output_dir,
                index_output=index_output,
            )
        except OSError as exc:
            _fail(str(exc))
        print(f"wrote cheatsheets to {output_dir}")
        print(f"wrote {index_output}")
        _print_index_summary(index)
    finally:
        if keep_temp:
            print(f"kept temporary directory {temp_dir}")
        else:
            remove_clone(temp_dir)


def main() -> None:
    """Configure logging and invoke the ``parse-markdown`` application."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
