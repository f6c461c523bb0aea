"""
Tests for the build_ontology command-line script.

HOW TO RUN:
From the src directory, run:
    python -m pytest test_build_ontology.py
"""

import json

import pytest
from rdflib import Graph

import build_ontology

CORPUS = [
    {"title": "Dogs", "text": "Dogs are mammals. Dogs have fur.", "tags": ["animal"]},
    {"title": "Cats", "text": "Cats are mammals.", "tags": ["animal"]},
]


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(CORPUS), encoding="utf-8")
    return path


def test_writes_export(corpus_file, tmp_path):
    output = tmp_path / "ontology.ttl"
    assert build_ontology.main([str(corpus_file), "--format", "turtle", "--output", str(output)]) == 0

    graph = Graph().parse(output, format="turtle")
    assert len(graph) > 0


def test_prints_export(corpus_file, capsys):
    assert build_ontology.main([str(corpus_file), "--format", "nt", "--namespace", "http://zoo.example/"]) == 0
    assert "<http://zoo.example/mammal>" in capsys.readouterr().out


def test_environment_defaults(corpus_file, capsys, monkeypatch):
    monkeypatch.setenv("ONTOLOGY_EXPORT_FORMAT", "json-ld")
    monkeypatch.setenv("ONTOLOGY_LOG_LEVEL", "warning")
    assert build_ontology.main([str(corpus_file)]) == 0
    assert json.loads(capsys.readouterr().out)


def test_missing_corpus(tmp_path):
    assert build_ontology.main([str(tmp_path / "missing.json")]) == 1


def test_unsupported_format(corpus_file):
    with pytest.raises(SystemExit):
        build_ontology.main([str(corpus_file), "--format", "yaml"])
