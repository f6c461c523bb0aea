"""
Analysis service.

Runs concept extraction, relationship extraction and domain clustering over a
corpus and reports an overall confidence for the run.
"""

import logging
from typing import Iterable, List, Optional, Union

from corpus import Document, parse_documents

from .concepts import ConceptExtractor
from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .domain import AnalysisResult, Concept, ConceptKind, ExtractedDomain, RelationshipCandidate
from .domains import DomainClusterer
from .relationships import RelationshipExtractor, strongest_relationships
from .scoring import mean
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class AnalysisService:
    """Service for deterministic corpus analysis."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or DEFAULT_EXTRACTION_CONFIG
        tokenizer = Tokenizer(self.config)
        self.concept_extractor = ConceptExtractor(self.config, tokenizer)
        self.relationship_extractor = RelationshipExtractor(self.config, tokenizer)
        self.domain_clusterer = DomainClusterer(self.config)

    def analyze(self, documents: Iterable[Union[Document, dict]]) -> AnalysisResult:
        docs = parse_documents(documents)
        concepts = self.concept_extractor.extract(docs)
        relationships = self.relationship_extractor.extract(docs, concepts)
        domains = self.domain_clusterer.cluster(docs, concepts)
        confidence = self.overall_confidence(concepts, relationships, domains)
        logger.info(
            f"Analysis of {len(docs)} documents: {len(concepts)} concepts, "
            f"{len(relationships)} relationships, {len(domains)} domains (confidence {confidence:.2f})"
        )
        return AnalysisResult(
            concepts=concepts,
            relationships=relationships,
            domains=domains,
            confidence=confidence,
            document_count=len(docs),
        )

    @staticmethod
    def overall_confidence(concepts: List[Concept],
                           relationships: List[RelationshipCandidate],
                           domains: List[ExtractedDomain]) -> float:
        """Mean of the average concept confidence, relationship confidence and domain coherence."""
        parts = []
        if concepts:
            parts.append(mean(c.confidence for c in concepts))
        if relationships:
            parts.append(mean(r.confidence for r in relationships))
        if domains:
            parts.append(mean(d.coherence for d in domains))
        return mean(parts)

    @staticmethod
    def concepts_by_kind(result: AnalysisResult, kind: ConceptKind) -> List[Concept]:
        return [c for c in result.concepts if c.kind == kind]

    @staticmethod
    def high_confidence_concepts(result: AnalysisResult, threshold: float = 0.7) -> List[Concept]:
        return [c for c in result.concepts if c.confidence >= threshold]

    @staticmethod
    def strongest_relationships(result: AnalysisResult, limit: int = 10) -> List[RelationshipCandidate]:
        return strongest_relationships(result.relationships, limit)

    @staticmethod
    def domains_by_coherence(result: AnalysisResult, minimum: float = 0.0) -> List[ExtractedDomain]:
        return [d for d in result.domains if d.coherence >= minimum]


def extract_concepts(corpus: Iterable[Union[Document, dict]],
                     config: Optional[ExtractionConfig] = None) -> List[Concept]:
    return ConceptExtractor(config).extract(corpus)


def extract_relationships(corpus: Iterable[Union[Document, dict]],
                          concepts: List[Concept],
                          config: Optional[ExtractionConfig] = None) -> List[RelationshipCandidate]:
    return RelationshipExtractor(config).extract(corpus, concepts)
