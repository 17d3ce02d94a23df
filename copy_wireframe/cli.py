"""Cyclopts CLI entrypoint for turning marketing copy into wireframe JSON.

The ``wireframe`` console script defined here reads copy from a file or stdin,
runs :func:`copy_wireframe.pipeline.build_wireframe`, and prints or writes the
JSON result. A second command lists the templates available in the bundled
or an overlaid catalog. Options can also be supplied through ``WIREFRAME_*``
environment variables.

Examples
--------
Analyse a Markdown brief and write the result:

>>> from copy_wireframe.cli import app
>>> app.run(
...     ["analyze", "brief.md", "--format", "markdown", "--output", "out.json"]
... )  # doctest: +SKIP

List the templates suitable for hero sections:

>>> app.run(["templates", "--section-type", "hero"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from . import _constants
from .catalog import default_catalog, load_template_catalog
from .config import PipelineConfig, load_pipeline_config
from .config.helpers import _yaml_loader
from .markup import parse_html_markers, parse_markdown_markers
from .models import Complexity, SectionType, StructuralMarker
from .pipeline import build_wireframe, encode_result

InputFormat = typ.Literal["text", "markdown", "html", "markers"]

STDIN_SOURCE = "-"

app = App(name="wireframe", config=cyclopts.config.Env(_constants.ENV_PREFIX, command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_settings(config: Path | None) -> PipelineConfig:
    """Load ``config``, or a ``wireframe.yaml`` in the working directory."""
    if config is not None:
        return load_pipeline_config(config)
    default = Path(_constants.DEFAULT_CONFIG_FILENAME)
    return load_pipeline_config(default) if default.exists() else PipelineConfig()


def _read_source(source: str) -> str:
    """Return the text at ``source``, reading stdin for ``-``."""
    if source == STDIN_SOURCE:
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        msg = f"Source file '{path}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


def _load_marker_list(text: str) -> list[typ.Any]:
    """Parse a YAML or JSON list of marker mappings."""
    loaded = _yaml_loader().load(text) or []
    if not isinstance(loaded, list):
        msg = "Marker input must be a list of {type, content, level} mappings."
        raise TypeError(msg)
    return loaded


def _markers_for(
    text: str, input_format: InputFormat
) -> list[StructuralMarker] | list[typ.Any] | None:
    """Return structural markers for ``text`` according to ``input_format``."""
    match input_format:
        case "markdown":
            return parse_markdown_markers(text)
        case "html":
            return parse_html_markers(text)
        case "markers":
            return _load_marker_list(text)
        case _:
            return None


@app.command(help="Analyse marketing copy and emit wireframe sections as JSON.")
def analyze(
    source: typ.Annotated[
        str, Parameter(help="Path to the copy, or '-' to read from stdin")
    ],
    *,
    input_format: typ.Annotated[
        InputFormat,
        Parameter(name="--format", help="How to interpret the source"),
    ] = "text",
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to a wireframe YAML config", env_var="WIREFRAME_CONFIG"),
    ] = None,
    catalog: typ.Annotated[
        Path | None,
        Parameter(help="YAML templates overlaid on the default catalog"),
    ] = None,
    complexity: typ.Annotated[
        Complexity | None,
        Parameter(help="Force a template variant for every section"),
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write JSON here instead of stdout")
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log grouping and template decisions")
    ] = False,
) -> None:
    """Build a wireframe for the copy at ``source``.

    Parameters
    ----------
    source : str
        Path to the copy file, or ``-`` for stdin.
    input_format : {"text", "markdown", "html", "markers"}, optional
        ``text`` runs the raw-text path. ``markdown`` and ``html`` extract
        structural markers first. ``markers`` reads a YAML or JSON list of
        ``{type, content, level}`` mappings.
    config : Path or None, optional
        Pipeline configuration file (overridable via ``WIREFRAME_CONFIG``).
        Defaults to ``wireframe.yaml`` in the working directory when present.
    catalog : Path or None, optional
        Template overlay; takes precedence over the config's catalog.
    complexity : Complexity or None, optional
        Template variant hint.
    output : Path or None, optional
        Destination for the JSON result; printed to stdout when omitted.
    verbose : bool, optional
        Enable DEBUG logging for the pipeline modules.

    Raises
    ------
    FileNotFoundError
        If ``source``, ``config`` or ``catalog`` does not exist.
    TypeError
        If a YAML file or marker list has the wrong top-level structure.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    settings = _load_settings(config)
    template_catalog = load_template_catalog(catalog) if catalog else None

    text = _read_source(source)
    markers = _markers_for(text, input_format)
    if input_format == "markers":
        result = build_wireframe(
            markers or [], config=settings, catalog=template_catalog, complexity=complexity
        )
    else:
        result = build_wireframe(
            text,
            markers,
            config=settings,
            catalog=template_catalog,
            complexity=complexity,
        )

    payload = encode_result(result)
    if output is None:
        print(payload.decode("utf-8"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload + b"\n")
    print(f"wrote {_format_path(output)}")


@app.command(help="List the templates available to the selector.")
def templates(
    *,
    catalog: typ.Annotated[
        Path | None,
        Parameter(help="YAML templates overlaid on the default catalog"),
    ] = None,
    section_type: typ.Annotated[
        SectionType | None,
        Parameter(help="Only list templates suited to this section type"),
    ] = None,
) -> None:
    """Print ``key: layout (name)`` for each catalog template.

    Parameters
    ----------
    catalog : Path or None, optional
        Template overlay to list instead of the bundled catalog.
    section_type : SectionType or None, optional
        Restrict the listing to templates whose ``best_for`` names this type.
    """
    registry = load_template_catalog(catalog) if catalog else default_catalog()
    entries = registry.for_section(section_type) if section_type else list(registry)
    for template in entries:
        print(f"{template.key}: {template.layout_key} ({template.name})")


def main() -> None:
    """Invoke the Cyclopts application that powers the `wireframe` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
