from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .documents import Document


def chronological_key(doc: Document):
    # newest first, identity ascending on equal dates
    return (-doc.date.toordinal(), doc.identity)


def order_documents(documents: Iterable[Document]) -> List[Document]:
    return sorted(documents, key=chronological_key)


def link_neighbours(
    ordered: List[Document],
) -> Dict[str, Dict[str, Optional[str]]]:
    """
    prev/next for each document of a newest-first sequence.

    `next` is the newer neighbour, `prev` the older one, so the two links
    are inverses of each other.
    """
    links: Dict[str, Dict[str, Optional[str]]] = {}
    for i, doc in enumerate(ordered):
        links[doc.identity] = {
            "prev": ordered[i + 1].identity if i + 1 < len(ordered) else None,
            "next": ordered[i - 1].identity if i > 0 else None,
        }
    return links
