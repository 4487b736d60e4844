"""Build errors. Every one of them is fatal to the build."""

from __future__ import annotations

from typing import Iterable, Optional


class BuildError(Exception):
    """Base class for anything that stops a build."""


class ParseError(BuildError):
    """A content file is malformed or misses a required front-matter field."""

    def __init__(self, path: str, field: Optional[str], reason: str):
        self.path = path
        self.field = field
        self.reason = reason
        where = f"{path}: {field}" if field else path
        super().__init__(f"{where}: {reason}")


class DateParseError(ParseError):
    def __init__(self, path: str, field: str, value):
        self.value = value
        super().__init__(path, field, f"not a valid ISO-8601 date: {value!r}")


class CollisionError(BuildError):
    """Two or more sources resolve to the same slug."""

    def __init__(self, slug: str, identities: Iterable[str]):
        self.slug = slug
        self.identities = sorted(identities)
        super().__init__(
            f"slug {slug!r} is shared by {' and '.join(self.identities)}"
        )
