"""
Lexical similarity for ontology classes.

Compares classes by the words of their names, descriptions and instance lists.
Names are split on camel case so 'MachineLearning' and 'machine learning'
compare equal.
"""

import re
from typing import Dict, List, Tuple

import numpy as np

from .domain import CAMEL_BOUNDARY, OntologyClass

_TERM = re.compile(r"[a-z0-9]+")


def terms(text: str) -> List[str]:
    """Lower-cased word list of a text, camel case split into words."""
    if not text:
        return []
    return _TERM.findall(CAMEL_BOUNDARY.sub(" ", text).lower())


def word_overlap(text1: str, text2: str) -> float:
    """Jaccard overlap of the word sets of two texts."""
    words1, words2 = set(terms(text1)), set(terms(text2))
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def instance_overlap(instances1: List[str], instances2: List[str]) -> float:
    """Shared instances relative to the larger instance list."""
    shared = set(instances1) & set(instances2)
    return len(shared) / max(len(set(instances1)), len(set(instances2)), 1)


class LexicalSimilarity:
    """Handles similarity computations for ontology classes."""

    def __init__(self, name_weight: float = 0.4, description_weight: float = 0.3, instance_weight: float = 0.3):
        self.name_weight = name_weight
        self.description_weight = description_weight
        self.instance_weight = instance_weight

    def class_text(self, ontology_class: OntologyClass) -> List[str]:
        """Weighted bag of words for a class: name words count three times, description words once."""
        words = terms(ontology_class.name) * 3
        words.extend(terms(ontology_class.description or ""))
        for instance in ontology_class.instances:
            words.extend(terms(instance))
        return words

    def term_vectors(self, documents: List[List[str]]) -> np.ndarray:
        """Term-count matrix, one row per bag of words, normalized to unit length."""
        vocabulary: Dict[str, int] = {}
        for words in documents:
            for word in words:
                vocabulary.setdefault(word, len(vocabulary))
        matrix = np.zeros((len(documents), max(len(vocabulary), 1)))
        for row, words in enumerate(documents):
            for word in words:
                matrix[row, vocabulary[word]] += 1.0
        norms = np.linalg.norm(matrix, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return matrix / norms

    def compute_similarity(self, words1: List[str], words2: List[str]) -> float:
        """Cosine similarity of two bags of words, in [0, 1]."""
        vectors = self.term_vectors([words1, words2])
        return float(np.clip(np.dot(vectors[0], vectors[1]), 0.0, 1.0))

    def find_similar(self,
                     target: OntologyClass,
                     candidates: List[OntologyClass],
                     limit: int = 5,
                     threshold: float = 0.3) -> List[Tuple[OntologyClass, float]]:
        """Find candidates most similar to the target class.

        Args:
            target: Class to compare against
            candidates: Classes to rank (the target itself is skipped)
            limit: Maximum number of results
            threshold: Minimum cosine similarity

        Returns:
            List of (class, score) tuples sorted by score descending
        """
        others = [c for c in candidates if c.id != target.id]
        if not others:
            return []
        vectors = self.term_vectors([self.class_text(target)] + [self.class_text(c) for c in others])
        scores = np.clip(vectors[1:] @ vectors[0], 0.0, 1.0)

        ranked = [(cls, float(score)) for cls, score in zip(others, scores) if score >= threshold]
        ranked.sort(key=lambda pair: (-pair[1], pair[0].id))
        return ranked[:limit]

    def class_similarity(self, cls1: OntologyClass, cls2: OntologyClass) -> float:
        """Weighted name, description and shared-instance similarity of two classes."""
        score = self.name_weight * word_overlap(cls1.name, cls2.name)
        if cls1.description and cls2.description:
            score += self.description_weight * word_overlap(cls1.description, cls2.description)
        score += self.instance_weight * instance_overlap(cls1.instances, cls2.instances)
        return float(np.clip(score, 0.0, 1.0))
