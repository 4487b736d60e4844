from __future__ import annotations

import re
from typing import Any, Dict, List

from .config import (
    FENCE,
    HEADING_ID,
    MAX_TOC_DEPTH,
    MD_HEADING,
    SETEXT_UNDERLINE,
)

_MD_LINK = re.compile(r'!?\[(?P<text>[^\]]*)\]\([^)]*\)')
_EMPHASIS = re.compile(r'[*_`]+')


def map_noncode(md: str, fn):
    parts, last = [], 0
    for m in FENCE.finditer(md):
        pre = md[last : m.start()]
        parts.append(fn(pre))
        parts.append(md[m.start() : m.end()])
        last = m.end()
    parts.append(fn(md[last:]))
    return "".join(parts)


def slugify_heading(text: str) -> str:
    s = text.strip().lower()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^a-z0-9\-]", "", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "section"


def collect_toc(
    md_text: str, max_depth: int = MAX_TOC_DEPTH
) -> List[Dict[str, Any]]:
    """ATX and Setext headings outside code fences, in document order."""
    toc: List[Dict[str, Any]] = []
    used_ids: Dict[str, int] = {}

    def unique_id(base: str) -> str:
        n = used_ids.get(base, 0)
        used_ids[base] = n + 1
        return base if n == 0 else f"{base}-{n}"

    def _add(level: int, text: str) -> None:
        m = HEADING_ID.search(text)
        if m:
            text = text[: m.start()].strip()
            hid = m.group("id")
            used_ids[hid] = used_ids.get(hid, 0) + 1
        else:
            hid = unique_id(slugify_heading(text))
        if level <= max_depth:
            toc.append({"level": level, "text": text, "id": hid})

    def _scan(s: str) -> str:
        lines = s.splitlines()
        skip = False
        for i, line in enumerate(lines):
            if skip:
                skip = False
                continue
            m = MD_HEADING.match(line)
            if m:
                text = re.sub(r"\s+#+$", "", m.group("text")).strip()
                _add(len(m.group("hash")), text)
                continue
            nxt = lines[i + 1] if i + 1 < len(lines) else ""
            if (
                line.strip()
                and not line.startswith((" ", "\t"))
                and not SETEXT_UNDERLINE.match(line)
                and SETEXT_UNDERLINE.match(nxt)
            ):
                level = 1 if nxt.strip().startswith("=") else 2
                _add(level, line.strip())
                skip = True
        return s

    map_noncode(md_text, _scan)
    return toc


def excerpt(md_text: str, words: int = 40) -> str:
    """First prose paragraph, plain text, cut to `words` words."""
    text = FENCE.sub("", md_text)
    for para in re.split(r"\n\s*\n", text):
        lines = [ln for ln in para.strip().splitlines() if ln.strip()]
        if not lines:
            continue
        if (
            MD_HEADING.match(lines[0])
            or SETEXT_UNDERLINE.match(lines[0])
            or lines[0].lstrip().startswith("<")
        ):
            continue
        if len(lines) > 1 and SETEXT_UNDERLINE.match(lines[1]):
            continue
        plain = _MD_LINK.sub(lambda m: m.group("text"), " ".join(lines))
        plain = _EMPHASIS.sub("", plain)
        tokens = plain.split()
        if not tokens:
            continue
        if len(tokens) > words:
            return " ".join(tokens[:words]) + "…"
        return " ".join(tokens)
    return ""
