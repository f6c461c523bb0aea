"""
Concept Hierarchy Module

Builds a forest of taxonomy trees from extracted concepts and relationships,
guarding every edge against cycles, and reports on the shape of the result.

Public Interface:
- HierarchyBuilder: Builds, navigates, validates and converts a hierarchy
- build_hierarchy: One-call construction returning the root nodes
- HierarchyConfig: Specificity bands, edge confidences and shape limits
- HierarchyNode, HierarchyReport, HierarchyMetrics: Result types
"""

from .builder import HierarchyBuilder, build_hierarchy
from .config import HierarchyConfig
from .domain import HierarchyMetrics, HierarchyNode, HierarchyReport

__all__ = [
    "HierarchyBuilder",
    "build_hierarchy",
    "HierarchyConfig",
    "HierarchyNode",
    "HierarchyReport",
    "HierarchyMetrics",
]
