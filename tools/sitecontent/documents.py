from __future__ import annotations

import pathlib
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping

from .config import CONTENT_SUFFIXES
from .errors import BuildError, ParseError
from .frontmatter import parse_frontmatter_fields
from .utils import (
    FrontmatterError,
    _norm_text,
    natural_key,
    parse_frontmatter,
    yaml_frontmatter_block,
)


@dataclass(frozen=True)
class Document:
    identity: str
    title: str
    date: date
    tags: FrozenSet[str] = frozenset()
    draft: bool = False
    body: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


def document_from_frontmatter(
    fm: Dict[str, Any], body: str, identity: str
) -> Document:
    meta = parse_frontmatter_fields(fm, identity)
    return Document(
        identity=identity,
        title=meta.title,
        date=meta.date,
        tags=meta.tags,
        draft=meta.draft,
        body=body,
        extra=meta.model_extra or {},
    )


def load_document(text: str, identity: str) -> Document:
    """Parse one Markdown source (front matter + body) into a Document."""
    text = _norm_text(text)
    try:
        fm, body = parse_frontmatter(text)
    except FrontmatterError as e:
        raise ParseError(identity, None, str(e)) from e
    if fm is None:
        raise ParseError(identity, None, "no front matter block")
    return document_from_frontmatter(fm, body, identity)


def serialize_document(doc: Document) -> str:
    fm: Dict[str, Any] = {
        "title": doc.title,
        "date": doc.date,
        "tags": sorted(doc.tags, key=natural_key),
        "draft": doc.draft,
    }
    fm.update(doc.extra)
    return yaml_frontmatter_block(fm) + doc.body


def _is_content_file(p: pathlib.Path, content_dir: pathlib.Path) -> bool:
    if not p.is_file() or p.suffix.lower() not in CONTENT_SUFFIXES:
        return False
    parts = p.relative_to(content_dir).parts
    if any(part.startswith(".") for part in parts):
        return False
    return not any(part.startswith("_") for part in parts[:-1])


def discover(content_dir: pathlib.Path) -> List[pathlib.Path]:
    found = [p for p in content_dir.rglob("*") if _is_content_file(p, content_dir)]
    found.sort(key=lambda p: natural_key(p.relative_to(content_dir).as_posix()))
    return found


def load_path(path: pathlib.Path, root: pathlib.Path) -> Document:
    identity = path.relative_to(root).as_posix()
    if path.suffix.lower() == ".ipynb":
        from .notebooks import load_notebook

        return load_notebook(path, identity)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(identity, None, "not UTF-8 text") from e
    return load_document(text, identity)


def load_corpus(content_dir: pathlib.Path, jobs: int = 1) -> List[Document]:
    """
    Load every content file under `content_dir`, sorted by identity.

    With jobs > 1 files are read in a thread pool; the final sort keeps the
    result identical to a sequential load. The first error aborts the load.
    """
    if not content_dir.is_dir():
        raise BuildError(f"{content_dir}: content directory not found")
    paths = discover(content_dir)
    if jobs > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            docs = list(executor.map(lambda p: load_path(p, content_dir), paths))
    else:
        docs = [load_path(p, content_dir) for p in paths]
    docs.sort(key=lambda d: d.identity)
    return docs
