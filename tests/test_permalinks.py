"""Tests for slug and permalink resolution."""

from datetime import date

import pytest

from sitecontent.documents import Document
from sitecontent.errors import CollisionError, ParseError
from sitecontent.permalinks import resolve_permalinks, resolve_slug, slug_for_identity


def make_doc(identity, draft=False, **extra):
    return Document(
        identity=identity,
        title=identity,
        date=date(2021, 4, 22),
        draft=draft,
        extra=extra,
    )


class TestSlugForIdentity:
    def test_file_stem(self):
        assert slug_for_identity("scenario-tests.md") == "scenario-tests"

    def test_index_uses_folder(self):
        assert slug_for_identity("scenario-tests/index.md") == "scenario-tests"

    def test_nested_path_flattened(self):
        assert (
            slug_for_identity("posts/2021/Scenario Tests/index.md")
            == "posts-2021-scenario-tests"
        )

    def test_dots_in_name(self):
        assert slug_for_identity("v1.2-release.md") == "v1-2-release"

    def test_root_index_kept(self):
        assert slug_for_identity("index.md") == "index"

    def test_deterministic(self):
        ident = "activator-utilities/index.md"
        assert slug_for_identity(ident) == slug_for_identity(ident)


class TestResolveSlug:
    def test_explicit_slug_wins(self):
        doc = make_doc("scenario-tests/index.md", slug="Scenario Tests v2")
        assert resolve_slug(doc) == "scenario-tests-v2"

    def test_empty_slug_is_parse_error(self):
        with pytest.raises(ParseError) as exc:
            resolve_slug(make_doc("!!!.md"))
        assert exc.value.field == "slug"


class TestResolvePermalinks:
    def test_urls(self):
        docs = [make_doc("triggers/index.md"), make_doc("projectables.md")]
        assert resolve_permalinks(docs) == {
            "triggers/index.md": "/blog/triggers",
            "projectables.md": "/blog/projectables",
        }

    def test_custom_prefix(self):
        urls = resolve_permalinks([make_doc("a.md")], url_prefix="/posts/")
        assert urls == {"a.md": "/posts/a"}

    def test_injective_for_distinct_identities(self):
        idents = ["a.md", "b/index.md", "c/d.md", "c-e.md", "2021/x.md"]
        urls = resolve_permalinks([make_doc(i) for i in idents])
        assert len(set(urls.values())) == len(idents)

    def test_duplicate_content_path_collides(self):
        docs = [
            make_doc("scenario-tests/index.md"),
            make_doc("scenario-tests.md", draft=True),
        ]
        with pytest.raises(CollisionError) as exc:
            resolve_permalinks(docs)
        assert exc.value.slug == "scenario-tests"
        assert exc.value.identities == [
            "scenario-tests.md",
            "scenario-tests/index.md",
        ]
        assert "scenario-tests.md" in str(exc.value)
        assert "scenario-tests/index.md" in str(exc.value)

    def test_explicit_slug_can_collide(self):
        docs = [make_doc("a.md"), make_doc("b.md", slug="a")]
        with pytest.raises(CollisionError, match="'a'"):
            resolve_permalinks(docs)

    def test_explicit_slug_resolves_collision(self):
        docs = [
            make_doc("scenario-tests/index.md"),
            make_doc("scenario-tests.md", slug="scenario-tests-draft"),
        ]
        urls = resolve_permalinks(docs)
        assert urls["scenario-tests.md"] == "/blog/scenario-tests-draft"
