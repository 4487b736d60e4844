"""Tests for series grouping and related posts."""

from datetime import date

from sitecontent.documents import Document
from sitecontent.series import build_series, related_documents


def make_doc(identity, day, tags=(), **extra):
    return Document(
        identity=identity,
        title=identity,
        date=day,
        tags=frozenset(tags),
        extra=extra,
    )


class TestBuildSeries:
    def test_oldest_part_first(self):
        docs = [
            make_doc("projectables.md", date(2021, 5, 3), series="EF Core"),
            make_doc("triggers.md", date(2021, 4, 23), series="EF Core"),
            make_doc("activator.md", date(2021, 4, 22)),
        ]
        assert build_series(docs) == {"EF Core": ["triggers.md", "projectables.md"]}

    def test_names_trimmed_and_sorted(self):
        docs = [
            make_doc("b.md", date(2021, 1, 1), series="Testing "),
            make_doc("a.md", date(2021, 1, 1), series="DI"),
            make_doc("c.md", date(2021, 1, 1), series="  "),
        ]
        assert list(build_series(docs)) == ["DI", "Testing"]


class TestRelatedDocuments:
    def test_ranked_by_shared_tags_then_date(self):
        docs = [
            make_doc("a.md", date(2021, 1, 1), ["dotnet", "efcore", "linq"]),
            make_doc("b.md", date(2021, 2, 1), ["dotnet", "efcore", "linq"]),
            make_doc("c.md", date(2021, 3, 1), ["dotnet"]),
            make_doc("d.md", date(2021, 4, 1), ["dotnet", "efcore"]),
            make_doc("e.md", date(2021, 5, 1), ["testing"]),
        ]
        related = related_documents(docs, limit=3)
        assert related["a.md"] == ["b.md", "d.md", "c.md"]
        assert related["e.md"] == []

    def test_limit(self):
        docs = [make_doc(f"{i}.md", date(2021, 1, 1 + i), ["x"]) for i in range(5)]
        assert related_documents(docs, limit=2)["0.md"] == ["4.md", "3.md"]
        assert related_documents(docs, limit=0)["0.md"] == []

    def test_never_related_to_itself(self):
        docs = [make_doc("a.md", date(2021, 1, 1), ["x"])]
        assert related_documents(docs) == {"a.md": []}
