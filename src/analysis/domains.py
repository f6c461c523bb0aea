"""
Domain clustering.

Groups concepts into thematic domains using a keyword table and scores each
domain for scope, coherence and corpus coverage.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from corpus import Document, parse_documents

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .domain import Concept, ExtractedDomain
from .scoring import domain_coherence, domain_coverage, domain_scope

logger = logging.getLogger(__name__)


class DomainClusterer:
    """Assigns every concept to exactly one keyword domain."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or DEFAULT_EXTRACTION_CONFIG

    def domain_score(self, concept: Concept, keywords) -> float:
        score = 0.0
        contexts = [ctx.lower() for ctx in concept.contexts]
        for keyword in keywords:
            if keyword in concept.name:
                score += 1.0
            if any(keyword in ctx for ctx in contexts):
                score += 0.5
        return score

    def assign(self, concept: Concept) -> str:
        best, best_score = self.config.default_domain, 0.0
        for name, keywords in self.config.domain_keywords.items():
            score = self.domain_score(concept, keywords)
            if score > best_score:
                best, best_score = name, score
        return best

    def cluster(self, documents: Iterable[Union[Document, dict]], concepts: List[Concept]) -> List[ExtractedDomain]:
        docs = parse_documents(documents)
        groups: Dict[str, List[Concept]] = {}
        for concept in concepts:
            groups.setdefault(self.assign(concept), []).append(concept)

        domains = []
        for name, members in groups.items():
            titles = {ctx for member in members for ctx in member.contexts}
            relevant = [doc for doc in docs if doc.title in titles]
            domains.append(ExtractedDomain(
                name=name,
                concepts=[member.name for member in members],
                scope=domain_scope(sum(doc.word_count for doc in relevant)),
                coherence=domain_coherence(self._shared_contexts(members), len(members)),
                coverage=domain_coverage(len(relevant), len(docs)),
            ))

        domains.sort(key=lambda d: (-d.coherence, d.name))
        logger.info(f"Clustered {len(concepts)} concepts into {len(domains)} domains")
        return domains

    @staticmethod
    def _shared_contexts(members: List[Concept]) -> int:
        """Number of contexts mentioned by more than one member."""
        counts: Dict[str, int] = {}
        for member in members:
            for ctx in set(member.contexts):
                counts[ctx] = counts.get(ctx, 0) + 1
        return sum(1 for count in counts.values() if count > 1)
