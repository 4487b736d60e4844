from __future__ import annotations

from typing import Dict, Iterable, List

from .config import URL_PREFIX
from .documents import Document
from .errors import CollisionError
from .permalinks import find_collisions
from .sequence import chronological_key
from .utils import natural_key, slugify


def build_tag_index(documents: Iterable[Document]) -> Dict[str, List[str]]:
    """
    tag -> identities, newest first (ties by identity).

    Drafts are skipped, so a tag carried only by drafts never becomes a key.
    """
    buckets: Dict[str, List[Document]] = {}
    for doc in documents:
        if doc.draft:
            continue
        for tag in doc.tags:
            buckets.setdefault(tag, []).append(doc)

    index: Dict[str, List[str]] = {}
    for tag in sorted(buckets, key=natural_key):
        docs = sorted(buckets[tag], key=chronological_key)
        index[tag] = [d.identity for d in docs]
    return index


def tags_for(index: Dict[str, List[str]], identity: str) -> List[str]:
    return [tag for tag, ids in index.items() if identity in ids]


def documents_for(index: Dict[str, List[str]], tag: str) -> List[str]:
    return list(index.get(tag, []))


def tag_permalinks(
    index: Dict[str, List[str]],
    url_prefix: str = URL_PREFIX,
) -> Dict[str, str]:
    slugs = {tag: slugify(tag) or "tag" for tag in index}
    collisions = find_collisions(slugs)
    if collisions:
        slug = sorted(collisions)[0]
        raise CollisionError(f"tags/{slug}", collisions[slug])
    prefix = url_prefix.rstrip("/")
    return {tag: f"{prefix}/tags/{slug}" for tag, slug in slugs.items()}
