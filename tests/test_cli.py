"""Tests for the ``parse-markdown`` Cyclopts commands.

Command functions are called directly for most checks; ``_run`` drives the
Cyclopts app with raw tokens to cover flag parsing, normalising the exit code
across Cyclopts releases that do or do not call ``sys.exit`` on success.
"""

from __future__ import annotations

import subprocess
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
import pytest

from cheatsheet_parser import cli
from cheatsheet_parser.reference_repo import ReferenceRepoError

SAMPLE_MD = (
    "---\n"
    "title: Sample\n"
    "---\n"
    "## Basics\n"
    "### Run {.col-span-2}\n"
    "```sh\n"
    "make run\n"
    "```\n"
    "Starts the app.\n"
)


def _run(tokens: list[str]) -> int:
    """Invoke the CLI app and return its exit status."""
    try:
        cli.app(tokens)
    except SystemExit as exc:
        return int(exc.code or 0)
    return 0


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.md"
    path.write_text(SAMPLE_MD, encoding="utf-8")
    return path


def test_single_writes_sibling_json(
    sample_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.single(sample_file)
    output = sample_file.with_suffix(".json")
    text = output.read_text(encoding="utf-8")
    assert "\n" not in text
    payload = msgspec_json.decode(text)
    assert payload["metadata"] == {"title": "Sample"}
    card = payload["sections"][0]["subsections"][0]["cards"][0]
    assert card["body"] == "```sh\nmake run\n```"
    assert card["spanConfig"] == "col-span-2"
    out = capsys.readouterr().out
    assert "Title: Sample" in out
    assert "Total Cards: 1" in out


def test_single_missing_file_exits_non_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.single(tmp_path / "missing.md")
    assert excinfo.value.code == 1
    assert "could not parse" in capsys.readouterr().err


def test_single_flags_via_app(sample_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "out" / "result.json"
    status = _run(
        [
            "single",
            str(sample_file),
            "--output",
            str(output),
            "--no-metadata",
            "--no-code-blocks",
            "--no-span-config",
            "--pretty",
        ]
    )
    assert status == 0
    text = output.read_text(encoding="utf-8")
    assert "\n  " in text
    payload = msgspec_json.decode(text)
    assert payload["metadata"] == {}
    card = payload["sections"][0]["subsections"][0]["cards"][0]
    assert card["body"] == "make run"
    assert card["spanConfig"] == ""


def test_batch_reports_each_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    (source_dir / "one.md").write_text(SAMPLE_MD, encoding="utf-8")
    (source_dir / "two.md").write_text("## Only\ntext\n", encoding="utf-8")
    output_dir = tmp_path / "dist"

    cli.batch(str(source_dir / "*.md"), output_dir=output_dir, pretty=True)

    assert sorted(path.name for path in output_dir.iterdir()) == ["one.json", "two.json"]
    two = msgspec_json.decode((output_dir / "two.json").read_bytes())
    assert two["sections"][0]["cards"][0]["footer"] == "text"
    out = capsys.readouterr().out
    assert "Successful: 2" in out
    assert "Failed: 0" in out


def test_batch_without_matches_warns(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli.batch(str(tmp_path / "*.md"))
    assert "no files found" in capsys.readouterr().out


def test_unified_writes_single_payload(sample_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "unified.json"
    cli.unified(str(sample_file.parent / "*.md"), output=output)
    payload = msgspec_json.decode(output.read_bytes())
    assert [entry["id"] for entry in payload["cheatsheets"]] == ["sample"]
    assert list(payload) == ["cheatsheets", "createdAt", "version"]


def test_individual_writes_index(sample_file: Path, tmp_path: Path) -> None:
    output_dir = tmp_path / "cheatsheets"
    index_output = tmp_path / "index.json"
    cli.individual(
        str(sample_file.parent / "*.md"),
        output_dir=output_dir,
        index_output=index_output,
    )
    assert (output_dir / "sample.json").exists()
    index = msgspec_json.decode(index_output.read_bytes())
    assert index["cheatsheets"][0]["name"] == "Sample"


def test_github_parses_cloned_posts(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    temp_dir = tmp_path / "clone"

    def _fake_clone(dest: Path, *, repo_url: str) -> Path:
        posts = dest / "source" / "_posts"
        posts.mkdir(parents=True)
        (posts / "sample.md").write_text(SAMPLE_MD, encoding="utf-8")
        return posts

    monkeypatch.setattr(cli, "clone_reference_repo", _fake_clone)
    output_dir = tmp_path / "cheatsheets"
    cli.github(
        output_dir=output_dir,
        index_output=tmp_path / "index.json",
        temp_dir=temp_dir,
    )
    assert (output_dir / "sample.json").exists()
    assert not temp_dir.exists()


def test_github_clone_failure_exits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _failing_clone(dest: Path, *, repo_url: str) -> typ.NoReturn:
        raise subprocess.CalledProcessError(128, ["git", "clone"], stderr="denied")

    monkeypatch.setattr(cli, "clone_reference_repo", _failing_clone)
    with pytest.raises(SystemExit) as excinfo:
        cli.github(temp_dir=tmp_path / "clone")
    assert excinfo.value.code == 1


def test_github_missing_posts_exits(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _empty_clone(dest: Path, *, repo_url: str) -> typ.NoReturn:
        msg = f"Posts directory not found: {dest}"
        raise ReferenceRepoError(msg)

    monkeypatch.setattr(cli, "clone_reference_repo", _empty_clone)
    with pytest.raises(SystemExit) as excinfo:
        cli.github(temp_dir=tmp_path / "clone")
    assert excinfo.value.code == 1
