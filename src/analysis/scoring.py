"""
Scoring functions for extraction heuristics.

Each function takes explicit inputs and returns a float bounded to [0, 1], so
the heuristics can be tested and tuned one at a time.
"""

from typing import Iterable, List

from .domain import DomainScope


def _bounded(value: float) -> float:
    return max(0.0, min(1.0, value))


def concept_confidence(surface: str) -> float:
    """
    Confidence of a term from its orthography.

    Proper-noun looking terms, compounds and technical spellings
    (internal capitals, underscores) score higher.
    """
    confidence = 0.5
    if surface[:1].isupper():
        confidence += 0.2
    if " " in surface or "-" in surface:
        confidence += 0.1
    if "_" in surface or any(ch.isupper() for ch in surface[1:]):
        confidence += 0.15
    return _bounded(confidence)


def proximity(token_distance: int, sentence_length: int) -> float:
    if sentence_length <= 0:
        return 0.0
    return max(0.0, 1.0 - token_distance / sentence_length)


def relationship_confidence(token_distance: int, sentence_length: int, has_relational_verb: bool) -> float:
    """Confidence of one co-occurrence observation."""
    confidence = 0.3 + 0.3 * proximity(token_distance, sentence_length)
    if has_relational_verb:
        confidence += 0.2
    return _bounded(confidence)


def accumulated_strength(base: float, observations: int, increment: float = 0.1) -> float:
    """Strength of a relationship observed `observations` times."""
    if observations <= 0:
        return 0.0
    return _bounded(base + increment * (observations - 1))


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def chain_confidence(confidences: List[float]) -> float:
    result = 1.0
    for value in confidences:
        result *= value
    return _bounded(result)


def domain_coherence(shared_contexts: int, member_count: int) -> float:
    """Share of a domain's contexts common to several members, damped for small domains."""
    if member_count <= 0:
        return 0.0
    return _bounded((shared_contexts / member_count) * min(1.0, member_count / 10))


def domain_scope(word_count: int) -> DomainScope:
    if word_count > 10000:
        return DomainScope.COMPREHENSIVE
    if word_count > 5000:
        return DomainScope.MODERATE
    if word_count > 1000:
        return DomainScope.FOCUSED
    return DomainScope.LIMITED


def domain_coverage(relevant_documents: int, total_documents: int) -> float:
    if total_documents <= 0:
        return 0.0
    return _bounded(relevant_documents / total_documents)
