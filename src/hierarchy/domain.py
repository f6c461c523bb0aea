"""
Domain models for the concept hierarchy.

Nodes are held in an id-indexed table by the builder; parent and children are
stored as ids.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from validation.domain import ValidationIssue


@dataclass
class HierarchyNode:
    """A concept, or a synthesized kind parent, placed in the taxonomy."""
    id: str
    name: str
    kind: Optional[str] = None
    level: int = 0
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)
    confidence: float = 0.0
    evidence: List[str] = field(default_factory=list)      # document titles, or a note for kind parents
    properties: List[str] = field(default_factory=list)    # suggested property names
    synthetic: bool = False                                # kind parent not backed by a concept

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class HierarchyMetrics:
    depth: int = 0          # number of levels
    breadth: int = 0        # largest number of children of one node
    balance: float = 1.0    # 1 - variance of leaf levels / 10, floored at 0
    coverage: float = 0.0   # share of well-supported nodes

    def as_dict(self) -> Dict[str, Any]:
        return {
            "depth": self.depth,
            "breadth": self.breadth,
            "balance": self.balance,
            "coverage": self.coverage,
        }


@dataclass
class HierarchyReport:
    """Outcome of checking a built hierarchy."""
    valid: bool
    errors: List[ValidationIssue]
    warnings: List[ValidationIssue]
    metrics: HierarchyMetrics
