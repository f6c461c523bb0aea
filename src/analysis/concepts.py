"""
Concept extraction.

Builds the concept table of a corpus: every term that occurs more than once,
plus terms that head an explicit relational statement, with an inferred kind
and an orthography-based confidence.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Union

from corpus import Document, parse_documents

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .domain import Concept, ConceptKind
from .scoring import concept_confidence
from .tokenizer import Token, Tokenizer

logger = logging.getLogger(__name__)


@dataclass
class _TermStats:
    frequency: int = 0
    contexts: List[str] = field(default_factory=list)
    surface: Optional[str] = None    # first occurrence not at a sentence start
    fallback: Optional[str] = None   # first occurrence, leading letter lowered

    def observe(self, surface: str, initial: bool, context: str) -> None:
        self.frequency += 1
        if context not in self.contexts:
            self.contexts.append(context)
        if not initial and self.surface is None:
            self.surface = surface
        if self.fallback is None:
            self.fallback = surface[:1].lower() + surface[1:]

    @property
    def display(self) -> str:
        return self.surface or self.fallback or ""


class ConceptExtractor:
    """Extracts a deduplicated, deterministic concept table from documents."""

    def __init__(self, config: Optional[ExtractionConfig] = None, tokenizer: Optional[Tokenizer] = None):
        self.config = config or DEFAULT_EXTRACTION_CONFIG
        self.tokenizer = tokenizer or Tokenizer(self.config)
        self._patterns = [re.compile(p.pattern) for p in self.config.relation_patterns]

    def extract(self, documents: Iterable[Union[Document, dict]]) -> List[Concept]:
        docs = parse_documents(documents)
        stats: Dict[str, _TermStats] = {}
        anchored: Set[str] = set()

        for doc in docs:
            for sentence in self.tokenizer.split_sentences(doc.full_text):
                tokens = self.tokenizer.tokenize(sentence)
                for term in self.tokenizer.candidate_terms(tokens):
                    stats.setdefault(term.name, _TermStats()).observe(term.surface, term.initial, doc.title)
                anchored.update(self.anchored_terms(sentence, tokens))

            for tag in doc.tags:
                surface = tag.strip()
                stats.setdefault(surface.lower(), _TermStats()).observe(surface, False, doc.title)

        concepts = [
            self._build_concept(name, term)
            for name, term in stats.items()
            if self._retained(name, term, anchored)
        ]
        concepts.sort(key=lambda c: (-c.frequency, c.name))
        logger.info(f"Extracted {len(concepts)} concepts from {len(docs)} documents ({len(stats)} candidate terms)")
        return concepts

    def anchored_terms(self, sentence: str, tokens: List[Token]) -> Set[str]:
        """
        Head terms of the subject and object of the first explicit relational
        statement in a sentence.

        The subject head is the last valid word before the relation phrase, the
        object head the last word of the first run of valid words after it.
        Both must exist for either to count.
        """
        lowered = sentence.lower()
        for pattern in self._patterns:
            match = pattern.search(lowered)
            if not match:
                continue
            before = [t for t in tokens if t.end <= match.start() and self.tokenizer.is_valid(t)]
            after = [i for i, t in enumerate(tokens) if t.start >= match.end()]
            if not before or not after:
                return set()
            object_head = None
            for i in range(after[0], len(tokens)):
                if self.tokenizer.is_valid(tokens[i]):
                    object_head = tokens[i]
                elif object_head is not None:
                    break
            if object_head is None:
                return set()
            return {before[-1].norm, object_head.norm}
        return set()

    def infer_kind(self, name: str, capitalized: bool = False) -> ConceptKind:
        for kind, indicators in self.config.kind_indicators.items():
            if any(indicator in name for indicator in indicators):
                return ConceptKind(kind)
        if name.endswith(self.config.process_suffixes):
            return ConceptKind.PROCESS
        if name.endswith(self.config.quality_suffixes):
            return ConceptKind.QUALITY
        if capitalized:
            return ConceptKind.ENTITY
        return ConceptKind.ABSTRACT

    def _retained(self, name: str, term: _TermStats, anchored: Set[str]) -> bool:
        if term.frequency >= self.config.min_frequency:
            return True
        return self.config.retain_anchored_terms and name in anchored

    def _build_concept(self, name: str, term: _TermStats) -> Concept:
        surface = term.display
        return Concept(
            name=name,
            kind=self.infer_kind(name, surface[:1].isupper()),
            frequency=term.frequency,
            confidence=concept_confidence(surface),
            contexts=list(term.contexts),
        )
