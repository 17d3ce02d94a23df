"""Tests for the ``wireframe`` command-line entrypoint."""

from __future__ import annotations

import io
import json
import typing as typ
from textwrap import dedent

import pytest

from copy_wireframe import cli
from copy_wireframe.models import Complexity, SectionType

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, body: str) -> Path:
    path.write_text(dedent(body).lstrip(), encoding="utf-8")
    return path


def test_analyze_prints_json_for_text(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Plain-text copy is analysed and printed as JSON."""
    source = _write(tmp_path / "copy.txt", "Welcome to Acme. We help you grow.\n")

    cli.analyze(str(source))

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "text"
    assert [section["type"] for section in payload["sections"]] == ["hero", "cta"]


def test_analyze_writes_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``--output`` writes the JSON and reports the destination."""
    source = _write(tmp_path / "copy.txt", "Welcome to Acme. We help you grow.\n")
    output = tmp_path / "out" / "wireframe.json"

    cli.analyze(str(source), output=output)

    message = capsys.readouterr().out.strip()
    assert message.startswith("wrote ")
    assert message.endswith("wireframe.json")
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["sections"][0]["id"] == "section-0-hero"


def test_analyze_markdown_uses_markers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Markdown input is parsed into structural markers first."""
    source = _write(
        tmp_path / "brief.md",
        """
        # Studio

        We design brands for founders.
        """,
    )

    cli.analyze(str(source), input_format="markdown")

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "markers"
    hero = payload["sections"][0]
    assert [element["content"] for element in hero["elements"]] == [
        "Studio",
        "We design brands for founders.",
    ]
    assert hero["elements"][0]["level"] == 1


def test_analyze_html_uses_markers(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """HTML input is walked for headings, paragraphs and list items."""
    source = _write(
        tmp_path / "brief.html",
        "<h1>Studio</h1><p>We design brands for founders.</p>",
    )

    cli.analyze(str(source), input_format="html")

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "markers"
    assert payload["sections"][0]["elements"][0]["content"] == "Studio"


def test_analyze_marker_list(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A YAML list of markers is passed straight to the adapter."""
    source = _write(
        tmp_path / "markers.yaml",
        """
        - {type: heading, level: 1, content: Overview}
        - {type: paragraph, content: We build brands.}
        """,
    )

    cli.analyze(str(source), input_format="markers")

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "markers"
    assert [section["type"] for section in payload["sections"]] == ["hero", "cta"]


def test_analyze_rejects_marker_mapping(tmp_path: Path) -> None:
    """Marker input must be a list."""
    source = _write(tmp_path / "markers.yaml", "type: heading\n")
    with pytest.raises(TypeError):
        cli.analyze(str(source), input_format="markers")


def test_analyze_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """A source of ``-`` reads the copy from standard input."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    cli.analyze("-")

    payload = json.loads(capsys.readouterr().out)
    assert [section["synthesized"] for section in payload["sections"]] == [True, True]


def test_analyze_applies_config_and_complexity(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Config files and complexity hints reach the pipeline."""
    _write(
        tmp_path / "catalog.yaml",
        """
        hero_full_width:
          name: Hero - Poster
          layout: poster_hero
        """,
    )
    config = _write(tmp_path / "wireframe.yaml", "templates:\n  catalog: catalog.yaml\n")
    source = _write(tmp_path / "copy.txt", "Welcome to Acme. We help you grow.\n")

    cli.analyze(str(source), config=config, complexity=Complexity.COMPLEX)

    payload = json.loads(capsys.readouterr().out)
    assert payload["sections"][0]["template"]["layout_key"] == "poster_hero"


def test_analyze_missing_source(tmp_path: Path) -> None:
    """A missing source file raises ``FileNotFoundError``."""
    with pytest.raises(FileNotFoundError, match="not found"):
        cli.analyze(str(tmp_path / "absent.txt"))


def test_templates_lists_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    """The listing prints one ``key: layout (name)`` line per template."""
    cli.templates()

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 27
    assert "bullet_list: bullet_list (Bullet List)" in lines


def test_templates_filters_by_section_type(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """``--section-type`` restricts the listing to suitable templates."""
    cli.templates(section_type=SectionType.HERO)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "hero_image_left: image_text_split (Hero - Image Left)"
    assert len(lines) == 4


def test_analyze_discovers_default_config(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A ``wireframe.yaml`` in the working directory is used without ``--config``."""
    _write(tmp_path / "catalog.yaml", "hero_centered:\n  layout: local_hero\n")
    _write(tmp_path / "wireframe.yaml", "templates:\n  catalog: catalog.yaml\n")
    source = _write(tmp_path / "copy.txt", "Welcome to Acme. We help you grow.\n")
    monkeypatch.chdir(tmp_path)

    cli.analyze(str(source))

    payload = json.loads(capsys.readouterr().out)
    assert payload["sections"][0]["template"]["layout_key"] == "local_hero"
