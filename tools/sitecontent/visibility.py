from __future__ import annotations

from typing import Iterable, List

from .config import MODES
from .documents import Document


def filter_documents(documents: Iterable[Document], mode: str) -> List[Document]:
    """
    Documents visible in `mode`.

    `published` drops drafts, `preview` keeps everything. Order is kept.
    """
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}, expected one of {MODES}")
    if mode == "preview":
        return list(documents)
    return [d for d in documents if not d.draft]
