"""Tests for draft filtering."""

from datetime import date

import pytest

from sitecontent.documents import Document
from sitecontent.visibility import filter_documents


def make_doc(identity, draft=False):
    return Document(identity=identity, title=identity, date=date(2021, 1, 1), draft=draft)


class TestFilterDocuments:
    def test_published_drops_drafts(self):
        docs = [make_doc("a.md"), make_doc("b.md", draft=True), make_doc("c.md")]
        assert [d.identity for d in filter_documents(docs, "published")] == ["a.md", "c.md"]

    def test_preview_keeps_drafts(self):
        docs = [make_doc("a.md"), make_doc("b.md", draft=True)]
        assert filter_documents(docs, "preview") == docs

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="mode"):
            filter_documents([], "staging")
