"""Turn unstructured marketing copy into typed, templated wireframe sections.

This package exposes the pipeline used by the ``wireframe`` console script and
by rendering collaborators that consume its sections.

Exports
-------
- ``build_wireframe``: run the pipeline on text or structural markers.
- ``encode_result``: serialise a pipeline result to JSON bytes.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from copy_wireframe import build_wireframe
>>> result = build_wireframe("")
>>> [section.type.value for section in result.sections]
['hero', 'cta']
>>> from copy_wireframe import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main
from .pipeline import build_wireframe, encode_result

__all__ = ["app", "build_wireframe", "encode_result", "main"]
