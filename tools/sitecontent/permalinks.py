from __future__ import annotations

import pathlib
from typing import Dict, Iterable, List

from .config import URL_PREFIX
from .documents import Document
from .errors import CollisionError, ParseError
from .utils import slugify


def slug_for_identity(identity: str) -> str:
    """
    `posts/2021/Scenario Tests/index.md` -> `posts-2021-scenario-tests`.

    The suffix is dropped, and so is a trailing `index` segment, so a post
    and its folder-style twin map to the same slug.
    """
    rel = pathlib.PurePosixPath(identity).with_suffix("")
    parts = list(rel.parts)
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts.pop()
    return slugify("/".join(parts))


def resolve_slug(doc: Document) -> str:
    explicit = doc.extra.get("slug")
    if explicit is not None:
        slug = slugify(str(explicit))
    else:
        slug = slug_for_identity(doc.identity)
    if not slug:
        raise ParseError(doc.identity, "slug", "resolves to an empty slug")
    return slug


def find_collisions(slugs: Dict[str, str]) -> Dict[str, List[str]]:
    """identity -> slug  ==>  slug -> identities, for slugs used twice."""
    by_slug: Dict[str, List[str]] = {}
    for identity, slug in slugs.items():
        by_slug.setdefault(slug, []).append(identity)
    return {s: sorted(ids) for s, ids in by_slug.items() if len(ids) > 1}


def resolve_permalinks(
    documents: Iterable[Document],
    url_prefix: str = URL_PREFIX,
) -> Dict[str, str]:
    """
    Canonical URL path per document identity.

    All slugs are computed before anything is returned, so a collision is
    reported for the corpus as a whole rather than for whichever document
    happened to come second.
    """
    slugs = {doc.identity: resolve_slug(doc) for doc in documents}
    collisions = find_collisions(slugs)
    if collisions:
        slug = sorted(collisions)[0]
        raise CollisionError(slug, collisions[slug])

    prefix = url_prefix.rstrip("/")
    return {identity: f"{prefix}/{slug}" for identity, slug in slugs.items()}
