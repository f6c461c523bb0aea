"""
Tests for corpus documents and document sources.
"""

import json

import pytest
from pydantic import ValidationError

from .domain import Document, parse_documents
from .datasource import DocumentSource, InMemoryDocumentSource, JsonDocumentSource


class TestDocument:
    def test_minimal_document(self):
        doc = Document(title="Dogs", text="Dogs are mammals.")
        assert doc.tags == []
        assert doc.full_text == "Dogs. Dogs are mammals."
        assert doc.word_count == 3

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            Document(title="   ", text="x")

    def test_missing_text_rejected(self):
        with pytest.raises(ValidationError):
            Document.model_validate({"title": "No body"})

    def test_non_string_tags_dropped(self):
        doc = Document(title="T", text="x", tags=["Animals", 3, "", None])
        assert doc.tags == ["Animals"]


def test_parse_documents_skips_malformed():
    records = [
        {"title": "Dogs", "text": "Dogs are mammals."},
        {"title": "Broken"},
        {"title": "", "text": "no title"},
        {"title": "Numbers", "text": 42},
        "not a mapping",
        Document(title="Cats", text="Cats are mammals."),
    ]
    docs = parse_documents(records)
    assert [d.title for d in docs] == ["Dogs", "Cats"]


def test_in_memory_source():
    source = InMemoryDocumentSource([{"title": "A", "text": "alpha"}])
    source.add_document({"title": "B", "text": "beta"})
    source.add_document({"text": "no title"})
    assert [d.title for d in source.list_documents()] == ["A", "B"]
    assert isinstance(source, DocumentSource)


def test_json_source_list_layout(tmp_path):
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps([{"title": "A", "text": "alpha", "tags": ["x"]}]), encoding="utf-8")
    docs = JsonDocumentSource(path).list_documents()
    assert len(docs) == 1
    assert docs[0].tags == ["x"]


def test_json_source_object_layout(tmp_path):
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps({"documents": [{"title": "A", "text": "alpha"}, {"bad": True}]}), encoding="utf-8")
    docs = JsonDocumentSource(str(path)).list_documents()
    assert [d.title for d in docs] == ["A"]


def test_json_source_rejects_scalar(tmp_path):
    path = tmp_path / "corpus.json"
    path.write_text("42", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonDocumentSource(path).list_documents()


def test_source_is_abstract():
    with pytest.raises(TypeError):
        DocumentSource()
