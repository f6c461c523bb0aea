"""
Pure scoring functions for hierarchy placement and shape.
"""

from typing import Sequence

import numpy as np

from analysis.domain import Concept


def specificity(concept: Concept, base: float = 0.1) -> float:
    """
    How specific a concept looks, in [0, 1].

    Multi-word names, low frequency and few contexts all push a concept down
    the taxonomy.
    """
    value = base + 0.2 * (concept.word_count - 1)
    if concept.frequency < 3:
        value += 0.2
    if len(concept.contexts) < 3:
        value += 0.1
    return min(value, 1.0)


def specificity_band(value: float, bands: Sequence[float]) -> int:
    return sum(1 for limit in bands if value >= limit)


def parent_score(child: Concept, candidate: Concept) -> float:
    """How well a candidate fits as the parent of a child concept."""
    score = 0.2 * len(set(child.contexts) & set(candidate.contexts))
    if candidate.name in child.name or child.name in candidate.name:
        score += 0.3
    if candidate.frequency > child.frequency:
        score += 0.2
    return min(score, 1.0)


def balance(leaf_levels: Sequence[int]) -> float:
    if len(leaf_levels) == 0:
        return 1.0
    return float(max(0.0, 1.0 - np.var(np.asarray(leaf_levels, dtype=float)) / 10))
