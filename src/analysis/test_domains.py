"""
Tests for domain clustering.
"""

import pytest

from .domain import Concept, ConceptKind, DomainScope
from .domains import DomainClusterer


def concept(name, contexts):
    return Concept(name=name, kind=ConceptKind.ABSTRACT, frequency=2, confidence=0.5, contexts=contexts)


@pytest.fixture
def documents():
    return [
        {"title": "Dev notes", "text": "Software systems store data."},
        {"title": "Data log", "text": "More data today."},
        {"title": "Pets", "text": "The cat sleeps."},
    ]


def test_cluster(documents):
    concepts = [
        concept("software system", ["Dev notes"]),
        concept("data", ["Dev notes", "Data log"]),
        concept("cat", ["Pets"]),
    ]
    domains = DomainClusterer().cluster(documents, concepts)

    assert [d.name for d in domains] == ["Technology", "General"]
    technology = domains[0]
    assert technology.concepts == ["software system", "data"]
    assert technology.coherence == pytest.approx(0.1)
    assert technology.coverage == pytest.approx(2 / 3)
    assert technology.scope == DomainScope.LIMITED

    general = domains[1]
    assert general.concepts == ["cat"]
    assert general.coherence == 0.0
    assert general.coverage == pytest.approx(1 / 3)


def test_tie_goes_to_earlier_domain():
    clusterer = DomainClusterer()
    assert clusterer.assign(concept("process data", [])) == "Technology"


def test_context_keywords_count_half():
    clusterer = DomainClusterer()
    assert clusterer.domain_score(concept("notebook", ["Research diary"]), ("research", "method")) == 0.5
    assert clusterer.assign(concept("notebook", ["Research diary"])) == "Science"


def test_empty():
    assert DomainClusterer().cluster([], []) == []
