from __future__ import annotations

import copy
import pathlib
import re
from typing import Any, Dict

import nbformat
from nbconvert import MarkdownExporter
from nbformat.validator import ValidationError, validate

from .documents import Document, document_from_frontmatter
from .errors import ParseError
from .utils import _norm_text, normalize_markdown_light

# Jupyter's own notebook metadata, never front matter
_NB_RESERVED = {"kernelspec", "language_info", "widgets", "toc", "vscode"}

_H1_RE = re.compile(
    r'^\s*#\s+(.+?)\s*(?:\{\s*#[-a-z0-9]+\s*\})?\s*$',
    re.MULTILINE,
)


# `hide-*` and `remove-*` mean the same here: nothing hidden reaches the page.
# Underscore spellings (`hide_input`) are folded to dashes first.
_DROP_CELL = {"hide-cell", "remove-cell"}
_DROP_SOURCE = {"hide-input", "remove-input"}
_DROP_OUTPUTS = {"hide-output", "remove-output"}


def _cell_flags(cell) -> set:
    md = cell.get("metadata") or {}
    flags = {str(t).replace("_", "-") for t in md.get("tags") or []}
    jupyter = md.get("jupyter") or {}
    if jupyter.get("source_hidden") or md.get("source_hidden"):
        flags.add("hide-input")
    if jupyter.get("outputs_hidden") or md.get("outputs_hidden"):
        flags.add("hide-output")
    return flags


def _visible_cell(cell):
    """A copy of `cell` with its hidden parts cut, or None if nothing is left."""
    flags = _cell_flags(cell)
    kind = cell.get("cell_type")
    if flags & _DROP_CELL:
        return None
    if kind == "markdown":
        if flags & _DROP_SOURCE:
            return None
        if not _norm_text(cell.get("source", "")).strip() and not cell.get("attachments"):
            return None
        return copy.deepcopy(cell)
    if kind != "code":
        return copy.deepcopy(cell)

    out = copy.deepcopy(cell)
    if flags & _DROP_SOURCE:
        out["source"] = ""
    if flags & _DROP_OUTPUTS:
        out["outputs"] = []
        out["execution_count"] = None
    if not _norm_text(out.get("source", "")).strip() and not out.get("outputs"):
        return None
    return out


def visible_cells(cells) -> list:
    """Cells of a notebook post as they should be rendered, in order."""
    return [c for c in map(_visible_cell, cells) if c is not None]


def _first_h1(nb) -> str | None:
    for cell in nb.cells:
        if cell.get("cell_type") != "markdown":
            continue
        m = _H1_RE.search(_norm_text(cell.get("source", "")))
        if m:
            return m.group(1).strip()
    return None


def _plain(v):
    if isinstance(v, dict):
        return {k: _plain(x) for k, x in v.items()}
    if isinstance(v, list):
        return [_plain(x) for x in v]
    return v


def notebook_frontmatter(nb) -> Dict[str, Any]:
    """
    Front matter of a notebook post: top-level notebook metadata minus the
    keys Jupyter writes itself. A missing title falls back to the first H1.
    """
    fm = {
        k: _plain(v)
        for k, v in nb.metadata.items()
        if k not in _NB_RESERVED
    }
    if not fm.get("title"):
        h1 = _first_h1(nb)
        if h1:
            fm["title"] = h1
    return fm


def load_notebook(ipynb: pathlib.Path, identity: str) -> Document:
    try:
        nb = nbformat.read(str(ipynb), as_version=4)
        validate(nb)
    except (ValueError, ValidationError) as e:
        raise ParseError(identity, None, f"invalid notebook: {e}") from e

    nb.cells = visible_cells(nb.cells)
    fm = notebook_frontmatter(nb)

    exporter = MarkdownExporter()
    body, _ = exporter.from_notebook_node(nb)
    body = normalize_markdown_light(_norm_text(body)).lstrip("\n")

    return document_from_frontmatter(fm, body, identity)
