"""
Tests for the scoring functions.
"""

import pytest

from .domain import DomainScope
from .scoring import (
    accumulated_strength,
    chain_confidence,
    concept_confidence,
    domain_coherence,
    domain_coverage,
    domain_scope,
    mean,
    proximity,
    relationship_confidence,
)


def test_concept_confidence():
    assert concept_confidence("mammal") == pytest.approx(0.5)
    assert concept_confidence("Paris") == pytest.approx(0.7)
    assert concept_confidence("machine learning") == pytest.approx(0.6)
    assert concept_confidence("JavaScript") == pytest.approx(0.85)
    assert concept_confidence("file_system") == pytest.approx(0.65)
    assert concept_confidence("Big-Data_Lake") == pytest.approx(0.95)


def test_proximity():
    assert proximity(0, 5) == pytest.approx(1.0)
    assert proximity(2, 4) == pytest.approx(0.5)
    assert proximity(9, 3) == 0.0
    assert proximity(1, 0) == 0.0


def test_relationship_confidence():
    assert relationship_confidence(2, 3, True) == pytest.approx(0.6)
    assert relationship_confidence(0, 5, True) == pytest.approx(0.8)
    assert relationship_confidence(10, 5, False) == pytest.approx(0.3)


def test_accumulated_strength():
    assert accumulated_strength(0.8, 1) == pytest.approx(0.8)
    assert accumulated_strength(0.7, 3) == pytest.approx(0.9)
    assert accumulated_strength(0.8, 5) == 1.0
    assert accumulated_strength(0.5, 0) == 0.0


def test_mean_and_chain_confidence():
    assert mean([]) == 0.0
    assert mean([0.2, 0.4]) == pytest.approx(0.3)
    assert chain_confidence([0.8, 0.5]) == pytest.approx(0.4)


def test_domain_scores():
    assert domain_coherence(0, 5) == 0.0
    assert domain_coherence(3, 3) == pytest.approx(0.3)
    assert domain_coherence(20, 10) == 1.0
    assert domain_coherence(1, 0) == 0.0
    assert domain_coverage(2, 4) == pytest.approx(0.5)
    assert domain_coverage(1, 0) == 0.0


@pytest.mark.parametrize("words,scope", [
    (10, DomainScope.LIMITED),
    (1000, DomainScope.LIMITED),
    (1001, DomainScope.FOCUSED),
    (5001, DomainScope.MODERATE),
    (10001, DomainScope.COMPREHENSIVE),
])
def test_domain_scope(words, scope):
    assert domain_scope(words) == scope
