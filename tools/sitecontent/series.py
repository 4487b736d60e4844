from __future__ import annotations

from typing import Dict, Iterable, List

from .documents import Document
from .utils import natural_key


def build_series(documents: Iterable[Document]) -> Dict[str, List[str]]:
    """series name -> identities, oldest part first."""
    groups: Dict[str, List[Document]] = {}
    for doc in documents:
        name = doc.extra.get("series")
        if name is None or not str(name).strip():
            continue
        groups.setdefault(str(name).strip(), []).append(doc)

    return {
        name: [
            d.identity
            for d in sorted(groups[name], key=lambda d: (d.date, d.identity))
        ]
        for name in sorted(groups, key=natural_key)
    }


def related_documents(
    documents: Iterable[Document], limit: int = 3
) -> Dict[str, List[str]]:
    """
    Up to `limit` other documents per document, ranked by how many tags they
    share, then newest first, then identity. No shared tag, no relation.
    """
    docs = list(documents)
    related: Dict[str, List[str]] = {}
    for doc in docs:
        scored = []
        for other in docs:
            if other.identity == doc.identity:
                continue
            shared = len(doc.tags & other.tags)
            if shared:
                scored.append(
                    (-shared, -other.date.toordinal(), other.identity)
                )
        scored.sort()
        related[doc.identity] = [ident for _, _, ident in scored[:max(limit, 0)]]
    return related
