"""
Quality metrics for a validated ontology.
"""

import numpy as np

from .context import ValidationContext
from .domain import QualityMetrics


def compute_quality_metrics(context: ValidationContext, error_count: int, warning_count: int) -> QualityMetrics:
    """
    Aggregate quality scores, each clipped to [0, 1].

    consistency  - penalized by 0.1 per error and 0.05 per warning
    completeness - share of classes with instances
    clarity      - share of classes and properties with a description
    coverage     - relationships relative to an expected n(n-1)/10 edges
    """
    class_count = len(context.classes)
    property_count = len(context.properties)

    with_instances = sum(1 for c in context.classes.values() if c.instances)
    described = sum(1 for c in context.classes.values() if c.description) + \
        sum(1 for p in context.properties.values() if p.description)
    expected_edges = max(class_count * (class_count - 1) / 10, 1)

    scores = np.clip(np.array([
        1.0 - (0.1 * error_count + 0.05 * warning_count),
        with_instances / max(class_count, 1),
        described / max(class_count + property_count, 1),
        len(context.relationships) / expected_edges,
    ]), 0.0, 1.0)

    return QualityMetrics(
        consistency=float(scores[0]),
        completeness=float(scores[1]),
        clarity=float(scores[2]),
        coverage=float(scores[3]),
    )
