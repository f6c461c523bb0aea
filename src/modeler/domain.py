"""
Domain models for the modeler service.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from analysis.domain import AnalysisResult
from hierarchy.domain import HierarchyReport


@dataclass
class IngestReport:
    """What one corpus ingestion produced and added to the store."""
    analysis: AnalysisResult
    roots: List[str]                    # ids of hierarchy roots
    hierarchy: HierarchyReport
    classes_added: int = 0
    classes_rejected: List[str] = field(default_factory=list)
    classes_kept: List[str] = field(default_factory=list)     # manual classes only enriched
    relationships_added: int = 0
    properties_added: int = 0
    domains_added: int = 0

    def summary(self) -> Dict[str, Any]:
        return {
            "documents": self.analysis.document_count,
            "concepts": len(self.analysis.concepts),
            "relationships": len(self.analysis.relationships),
            "domains": len(self.analysis.domains),
            "analysis_confidence": self.analysis.confidence,
            "roots": list(self.roots),
            "hierarchy_valid": self.hierarchy.valid,
            "classes_added": self.classes_added,
            "classes_rejected": len(self.classes_rejected),
            "classes_kept": len(self.classes_kept),
            "relationships_added": self.relationships_added,
            "properties_added": self.properties_added,
            "domains_added": self.domains_added,
        }
