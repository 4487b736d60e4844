"""
Build pass: load -> resolve permalinks -> filter drafts -> sequence ->
tag index -> series/related -> outline.

Produces one immutable SiteBuild per run. Any BuildError aborts the run;
there is no partial output.
"""

from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, List, Optional

import yaml

from .config import DEFAULTS, MAX_TOC_DEPTH
from .documents import Document, load_corpus
from .git import git_last_commit_date
from .markdown_processing import collect_toc, excerpt
from .permalinks import resolve_permalinks
from .sequence import link_neighbours, order_documents
from .series import build_series, related_documents
from .tags import build_tag_index, tag_permalinks
from .visibility import filter_documents


@dataclass(frozen=True)
class SiteBuild:
    mode: str
    documents: List[Document]
    tag_index: Dict[str, List[str]]
    links: Dict[str, Dict[str, Optional[str]]]
    permalinks: Dict[str, str]
    tag_urls: Dict[str, str]
    series: Dict[str, List[str]]
    related: Dict[str, List[str]]
    lastmod: Dict[str, date] = field(default_factory=dict)
    loaded: Dict[str, Document] = field(default_factory=dict)
    excerpt_words: int = DEFAULTS["excerpt_words"]

    def get(self, identity: str) -> Document:
        """Any loaded document, drafts included, by identity."""
        return self.loaded[identity]

    def identities(self) -> List[str]:
        return [d.identity for d in self.documents]

    def _entry(self, doc: Document) -> Dict[str, Any]:
        def _nav(identity: Optional[str]):
            if identity is None:
                return None
            return {
                "title": self.loaded[identity].title,
                "url": self.permalinks[identity],
            }

        entry: Dict[str, Any] = {
            "identity": doc.identity,
            "title": doc.title,
            "date": doc.date.isoformat(),
            "tags": sorted(doc.tags),
            "draft": doc.draft,
            "url": self.permalinks[doc.identity],
            "prev": _nav(self.links[doc.identity]["prev"]),
            "next": _nav(self.links[doc.identity]["next"]),
            "related": list(self.related.get(doc.identity, [])),
            "toc": collect_toc(doc.body, max_depth=MAX_TOC_DEPTH),
            "excerpt": excerpt(doc.body, words=self.excerpt_words),
        }
        if doc.identity in self.lastmod:
            entry["lastmod"] = self.lastmod[doc.identity].isoformat()
        series = str(doc.extra.get("series") or "").strip()
        if series:
            entry["series"] = series
        return entry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "documents": [self._entry(d) for d in self.documents],
            "tags": {
                tag: {"url": self.tag_urls[tag], "documents": list(ids)}
                for tag, ids in self.tag_index.items()
            },
            "series": {name: list(ids) for name, ids in self.series.items()},
        }


def build_site(
    content_dir: pathlib.Path,
    mode: str = "published",
    url_prefix: str = DEFAULTS["url_prefix"],
    related_limit: int = DEFAULTS["related_limit"],
    excerpt_words: int = DEFAULTS["excerpt_words"],
    git_dates: bool = False,
    jobs: int = 1,
) -> SiteBuild:
    documents = load_corpus(content_dir, jobs=jobs)
    print(f"✓ loaded {len(documents)} documents from {content_dir}")

    # every loaded document takes part, drafts too: a draft may be previewed
    permalinks = resolve_permalinks(documents, url_prefix=url_prefix)

    visible = filter_documents(documents, mode)
    hidden = len(documents) - len(visible)
    if hidden:
        print(f"- {hidden} draft(s) left out of {mode} build")

    ordered = order_documents(visible)
    links = link_neighbours(ordered)

    # in preview drafts are listed too, so index them as published
    index_input = [replace(d, draft=False) for d in visible]
    tag_index = build_tag_index(index_input)
    tag_urls = tag_permalinks(tag_index, url_prefix=url_prefix)
    print(f"✓ indexed {len(tag_index)} tags")

    lastmod: Dict[str, date] = {}
    if git_dates:
        for doc in ordered:
            d = git_last_commit_date(content_dir, content_dir / doc.identity)
            if d is not None:
                lastmod[doc.identity] = d
        print(f"✓ git dates for {len(lastmod)}/{len(ordered)} documents")

    return SiteBuild(
        mode=mode,
        documents=ordered,
        tag_index=tag_index,
        links=links,
        permalinks=permalinks,
        tag_urls=tag_urls,
        series=build_series(ordered),
        related=related_documents(ordered, limit=related_limit),
        lastmod=lastmod,
        loaded={d.identity: d for d in documents},
        excerpt_words=excerpt_words,
    )


def write_artifact(build: SiteBuild, path: pathlib.Path) -> None:
    data = build.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in (".yml", ".yaml"):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")
    print(f"✓ wrote {path}")
