"""
Corpus Analysis Module

Deterministic, pattern- and frequency-based extraction of concepts,
relationships and thematic domains from a corpus of short documents.

Public Interface:
- AnalysisService: Runs the whole analysis and reports an overall confidence
- extract_concepts / extract_relationships: Single-stage entry points
- ExtractionConfig: Immutable lexical tables and thresholds

Private Components:
- Tokenizer, ConceptExtractor, RelationshipExtractor, DomainClusterer
- scoring: Pure scoring functions
"""

from .config import ExtractionConfig, RelationPattern
from .domain import (
    AnalysisResult,
    Concept,
    ConceptKind,
    DomainScope,
    ExtractedDomain,
    RelationshipCandidate,
    RelationshipChain,
)
from .relationships import find_relationship_chains
from .service import AnalysisService, extract_concepts, extract_relationships

__all__ = [
    "AnalysisService",
    "extract_concepts",
    "extract_relationships",
    "find_relationship_chains",
    "ExtractionConfig",
    "RelationPattern",
    "AnalysisResult",
    "Concept",
    "ConceptKind",
    "DomainScope",
    "ExtractedDomain",
    "RelationshipCandidate",
    "RelationshipChain",
]
