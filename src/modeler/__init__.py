"""
Ontology Modeler Module

Orchestrates ontology construction from a corpus: analysis, hierarchy
building, store population, property inference, validation and export, plus
manual class, property and relationship definitions.

Public Interface:
- OntologyModelerService: End-to-end construction and manual refinement
- IngestReport: What one corpus ingestion produced
"""

from .domain import IngestReport
from .service import OntologyModelerService

__all__ = [
    "OntologyModelerService",
    "IngestReport",
]
