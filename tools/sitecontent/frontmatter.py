"""Front-matter schema for posts.

`title` and `date` are required, `tags` and `draft` optional. Any other key
is kept as-is in `model_extra` and never validated.
"""

from __future__ import annotations

import datetime
from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DateParseError, ParseError


class FrontMatter(BaseModel):
    """Validated front matter of one post."""

    model_config = ConfigDict(frozen=True, extra="allow")

    title: str = Field(strict=True)
    date: datetime.date
    tags: FrozenSet[str] = Field(default_factory=frozenset)
    draft: bool = Field(default=False, strict=True)

    @field_validator("title")
    @classmethod
    def _non_empty_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, v: Any) -> datetime.date:
        if isinstance(v, datetime.datetime):
            return v.date()
        if isinstance(v, datetime.date):
            return v
        # YAML only hands back strings for dates it could not read itself
        if isinstance(v, str):
            try:
                return datetime.date.fromisoformat(v.strip().strip('"').strip("'"))
            except ValueError:
                pass
        raise ValueError(f"not a valid ISO-8601 date: {v!r}")

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, v: Any) -> FrozenSet[str]:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            raise ValueError("must be a list of strings")
        for t in v:
            if not isinstance(t, str) or not t.strip():
                raise ValueError(f"invalid tag {t!r}")
        return frozenset(t.strip() for t in v)

    @field_validator("draft", mode="before")
    @classmethod
    def _draft_default(cls, v: Any) -> Any:
        return False if v is None else v


def _as_parse_error(err: ValidationError, identity: str) -> ParseError:
    first = err.errors()[0]
    loc = first.get("loc") or ()
    field = str(loc[0]) if loc else None
    if first["type"] == "missing":
        return ParseError(identity, field, "missing required field")
    if field == "date":
        return DateParseError(identity, "date", first.get("input"))
    cause = (first.get("ctx") or {}).get("error")
    return ParseError(identity, field, str(cause) if cause else first["msg"])


def parse_frontmatter_fields(fm: Dict[str, Any], identity: str) -> FrontMatter:
    """
    Validate a raw front-matter mapping.

    `publishDate` stands in for a missing `date`. A key present with an
    empty value counts as missing for `title` and `date`.
    """
    fm = {
        k: v for k, v in fm.items()
        if not (k in ("title", "date") and v is None)
    }
    if "date" not in fm and fm.get("publishDate") is not None:
        fm["date"] = fm.pop("publishDate")
    try:
        return FrontMatter.model_validate(fm)
    except ValidationError as e:
        raise _as_parse_error(e, identity) from e
