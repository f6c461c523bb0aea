"""
Relationship extraction.

Scans sentences for pairs of known concepts and types each pair by the first
relation pattern found between the two mentions. Repeated observations of the
same (source, type, target) triple are consolidated into one candidate whose
strength grows with every observation.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from corpus import Document, parse_documents

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .domain import Concept, RelationshipCandidate, RelationshipChain
from .scoring import accumulated_strength, chain_confidence, mean, relationship_confidence
from .tokenizer import Token, Tokenizer

logger = logging.getLogger(__name__)


@dataclass
class _Mention:
    name: str
    first: int   # token index range [first, last)
    last: int
    start: int   # character range in the sentence
    end: int


@dataclass
class _Observations:
    base: float
    bidirectional: bool
    confidences: List[float] = field(default_factory=list)
    evidence: List[str] = field(default_factory=list)


class RelationshipExtractor:
    """Extracts consolidated relationship candidates between known concepts."""

    def __init__(self, config: Optional[ExtractionConfig] = None, tokenizer: Optional[Tokenizer] = None):
        self.config = config or DEFAULT_EXTRACTION_CONFIG
        self.tokenizer = tokenizer or Tokenizer(self.config)
        self._patterns = [(p, re.compile(p.pattern)) for p in self.config.relation_patterns]
        self._relational_verbs = re.compile(self.config.relational_verb_pattern)

    def extract(self, documents: Iterable[Union[Document, dict]], concepts: List[Concept]) -> List[RelationshipCandidate]:
        docs = parse_documents(documents)
        index = {tuple(c.name.split()): c.name for c in concepts}
        longest = max((len(key) for key in index), default=0)
        observed: Dict[Tuple[str, str, str], _Observations] = {}

        for doc in docs:
            sentences = self.tokenizer.split_sentences(doc.text, self.config.min_sentence_length)
            for sentence in sentences:
                tokens = self.tokenizer.tokenize(sentence)
                mentions = self._find_mentions(tokens, index, longest)
                if len(mentions) < 2:
                    continue
                lowered = sentence.lower()
                has_verb = bool(self._relational_verbs.search(lowered))
                snippet = f'From "{doc.title}": {sentence[:self.config.snippet_length]}'

                for i, source in enumerate(mentions):
                    for target in mentions[i + 1:]:
                        if target.first < source.last or target.name == source.name:
                            continue
                        rel_type, base = self.classify(lowered[source.end:target.start])
                        confidence = relationship_confidence(target.first - source.first, len(tokens), has_verb)
                        self._observe(observed, source.name, rel_type, target.name, base, confidence, snippet)

        candidates = []
        for (source, rel_type, target), obs in observed.items():
            strength = accumulated_strength(obs.base, len(obs.confidences), self.config.strength_increment)
            if strength <= self.config.min_strength:
                continue
            candidate = RelationshipCandidate(
                source=source,
                target=target,
                type=rel_type,
                strength=strength,
                confidence=mean(obs.confidences),
                evidence=list(obs.evidence),
                bidirectional=obs.bidirectional,
            )
            candidates.append(candidate)
            if obs.bidirectional:
                candidates.append(RelationshipCandidate(
                    source=target,
                    target=source,
                    type=rel_type,
                    strength=strength,
                    confidence=candidate.confidence,
                    evidence=list(obs.evidence),
                    bidirectional=True,
                ))

        candidates.sort(key=lambda r: (-r.strength, r.source, r.type, r.target))
        logger.info(f"Extracted {len(candidates)} relationships from {len(observed)} observed pairs")
        return candidates

    def classify(self, text: str) -> Tuple[str, float]:
        """Relationship type and base strength for the text between two mentions."""
        for pattern, regex in self._patterns:
            if regex.search(text):
                return pattern.type, pattern.strength
        return self.config.default_relation_type, self.config.default_relation_strength

    def _observe(self, observed, source, rel_type, target, base, confidence, snippet) -> None:
        bidirectional = rel_type in self.config.bidirectional_types
        if bidirectional and target < source:
            source, target = target, source
        key = (source, rel_type, target)
        if key not in observed:
            observed[key] = _Observations(base=base, bidirectional=bidirectional)
        obs = observed[key]
        obs.base = max(obs.base, base)
        obs.confidences.append(confidence)
        obs.evidence.append(snippet)

    def _find_mentions(self, tokens: List[Token], index: Dict[tuple, str], longest: int) -> List[_Mention]:
        """First whole-word mention of every known concept, in sentence order."""
        norms = [t.norm for t in tokens]
        seen = set()
        mentions = []
        for first in range(len(tokens)):
            for size in range(min(longest, len(tokens) - first), 0, -1):
                name = index.get(tuple(norms[first:first + size]))
                if name is None or name in seen:
                    continue
                seen.add(name)
                last = first + size
                mentions.append(_Mention(name, first, last, tokens[first].start, tokens[last - 1].end))
        return mentions


def relationships_of_type(relationships: List[RelationshipCandidate], rel_type: str) -> List[RelationshipCandidate]:
    return [r for r in relationships if r.type == rel_type]


def relationships_for_concept(relationships: List[RelationshipCandidate], name: str) -> List[RelationshipCandidate]:
    return [r for r in relationships if r.source == name or r.target == name]


def strongest_relationships(relationships: List[RelationshipCandidate], limit: int = 10) -> List[RelationshipCandidate]:
    ranked = sorted(relationships, key=lambda r: (-r.strength, -r.confidence, r.source, r.type, r.target))
    return ranked[:limit]


def find_relationship_chains(relationships: List[RelationshipCandidate],
                             start: str,
                             max_depth: int = 3) -> List[RelationshipChain]:
    """
    Find acyclic chains of at least two relationships starting at a concept.

    Args:
        relationships: Candidate relationships to walk
        start: Concept name the chains start from
        max_depth: Maximum number of relationships in a chain

    Returns:
        Chains sorted by confidence (product of link confidences), best first
    """
    outgoing: Dict[str, List[RelationshipCandidate]] = {}
    for rel in relationships:
        outgoing.setdefault(rel.source, []).append(rel)

    chains = []

    def walk(path: List[str], links: List[RelationshipCandidate]) -> None:
        if len(links) >= 2:
            chains.append(RelationshipChain(
                concepts=list(path),
                types=[link.type for link in links],
                confidence=chain_confidence([link.confidence for link in links]),
            ))
        if len(links) >= max_depth:
            return
        for rel in outgoing.get(path[-1], []):
            if rel.target in path:
                continue
            walk(path + [rel.target], links + [rel])

    walk([start], [])
    chains.sort(key=lambda c: (-c.confidence, c.concepts))
    return chains
