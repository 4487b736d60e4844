from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import SLUG_RE, SPACES_EOL


def slugify(s: str) -> str:
    return re.sub(r"-{2,}", "-", SLUG_RE.sub("-", s.lower()).strip("-"))


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def yaml_frontmatter_block(data: Dict[str, Any]) -> str:
    # dates and datetimes are left to the YAML emitter so they load back
    # as the same type
    dumped = yaml.safe_dump(
        dict(data), sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"---\n{dumped}\n---\n\n"


class FrontmatterError(ValueError):
    """Front-matter block exists but cannot be read."""


class _FrontmatterLoader(yaml.SafeLoader):
    pass


def _lenient_timestamp(loader, node):
    # 2021-02-30 looks like a timestamp but is not a date; keep the text so
    # the caller can report which field is wrong.
    try:
        return yaml.SafeLoader.construct_yaml_timestamp(loader, node)
    except ValueError:
        return loader.construct_scalar(node)


_FrontmatterLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", _lenient_timestamp
)


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Split `text` into (front matter, body).

    Returns (None, text) when there is no opening `---` line. Raises
    FrontmatterError when the block is unterminated, is not valid YAML or
    is not a mapping.
    """
    s = text.lstrip()
    if not s.startswith("---\n") and not s.startswith("---\r\n"):
        return None, text

    lines = s.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            # yaml_frontmatter_block leaves one blank separator line
            if body.startswith("\n"):
                body = body[1:]
            try:
                fm = yaml.load(fm_text, Loader=_FrontmatterLoader) or {}
            except yaml.YAMLError as e:
                raise FrontmatterError(f"invalid YAML: {e}") from e
            if not isinstance(fm, dict):
                raise FrontmatterError("front matter is not a mapping")
            return fm, body
    raise FrontmatterError("front matter block is not terminated by ---")


def normalize_markdown_light(md: str) -> str:
    md = SPACES_EOL.sub("", md)
    md = re.sub(r'\n{3,}', '\n\n', md)
    return md
