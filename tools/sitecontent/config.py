#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from typing import Any, Dict, Optional

import yaml

from .errors import BuildError

# ---------- Paths

# This assumes config.py sits in tools/sitecontent/ under the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
CONTENT_DIR = ROOT / "content"
BUILD_OUT = ROOT / "build" / "site.json"
SITE_CONFIG = ROOT / "site.yml"

# ---------- Config

CONTENT_SUFFIXES = (".md", ".markdown", ".ipynb")
URL_PREFIX = "/blog"
MAX_TOC_DEPTH = 3
MODES = ("published", "preview")

DEFAULTS: Dict[str, Any] = {
    "content_dir": str(CONTENT_DIR),
    "output": str(BUILD_OUT),
    "url_prefix": URL_PREFIX,
    "mode": "published",
    "related_limit": 3,
    "excerpt_words": 40,
    "git_dates": False,
    "jobs": 1,
}

# Some shared regexes

MD_HEADING = re.compile(r'^(?P<hash>#{1,6})\s+(?P<text>.+?)\s*$',
                        re.MULTILINE)
SETEXT_UNDERLINE = re.compile(r"^[ ]{0,3}(=+|-+)[ \t]*$")
HEADING_ID = re.compile(r"\s*\{\s*#(?P<id>[-a-z0-9]+)\s*\}\s*$")
FENCE = re.compile(r"(^```.*?$)(.*?)(^```$)",
                   re.MULTILINE | re.DOTALL)
SPACES_EOL = re.compile(r'[ \t]+$', re.MULTILINE)
SLUG_RE = re.compile(r"[^a-z0-9-]+")


def load_site_config(path: Optional[pathlib.Path] = None) -> Dict[str, Any]:
    """
    Merge `site.yml` (if present) over DEFAULTS.

    Relative `content_dir` / `output` values are taken relative to the
    config file's directory.
    """
    path = path or SITE_CONFIG
    cfg = dict(DEFAULTS)
    if not path.exists():
        return cfg

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise BuildError(f"{path}: invalid YAML ({e})") from e
    if not isinstance(data, dict):
        raise BuildError(f"{path}: expected a mapping at top level")

    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise BuildError(f"{path}: unknown config keys {', '.join(unknown)}")
    data = {k: v for k, v in data.items() if v is not None}

    for key in ("content_dir", "output"):
        if key in data:
            p = pathlib.Path(str(data[key]))
            if not p.is_absolute():
                p = path.parent / p
            data[key] = str(p)

    for key in ("related_limit", "excerpt_words", "jobs"):
        if key in data and (
            not isinstance(data[key], int) or isinstance(data[key], bool)
        ):
            raise BuildError(f"{path}: {key} must be an integer")

    if "git_dates" in data and not isinstance(data["git_dates"], bool):
        raise BuildError(f"{path}: git_dates must be true or false")

    if data.get("mode", "published") not in MODES:
        raise BuildError(
            f"{path}: mode must be one of {', '.join(MODES)}"
        )

    cfg.update(data)
    return cfg
