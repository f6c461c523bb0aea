"""
Domain models for corpus analysis.

These are the artefacts of a single analysis run. They are produced fresh from a
corpus snapshot and are not updated after extraction finishes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ConceptKind(str, Enum):
    """Coarse category of an extracted concept."""
    ENTITY = "entity"
    PROCESS = "process"
    QUALITY = "quality"
    ABSTRACT = "abstract"


class DomainScope(str, Enum):
    """Breadth of a domain, judged from the amount of text behind it."""
    LIMITED = "limited"
    FOCUSED = "focused"
    MODERATE = "moderate"
    COMPREHENSIVE = "comprehensive"


@dataclass
class Concept:
    """A named idea found in the corpus."""
    name: str                       # canonical lower-cased term or phrase
    kind: ConceptKind
    frequency: int
    confidence: float
    contexts: List[str] = field(default_factory=list)  # titles of documents mentioning it

    @property
    def word_count(self) -> int:
        return len(self.name.split())


@dataclass
class RelationshipCandidate:
    """A typed link between two concepts, consolidated over all observations."""
    source: str
    target: str
    type: str
    strength: float
    confidence: float
    evidence: List[str] = field(default_factory=list)
    bidirectional: bool = False

    @property
    def key(self):
        return (self.source, self.type, self.target)


@dataclass
class RelationshipChain:
    """A path of relationships starting at one concept."""
    concepts: List[str]
    types: List[str]
    confidence: float

    @property
    def length(self) -> int:
        return len(self.types)


@dataclass
class ExtractedDomain:
    """A thematic group of concepts."""
    name: str
    concepts: List[str]
    scope: DomainScope
    coherence: float
    coverage: float = 0.0


@dataclass
class AnalysisResult:
    """Everything one analysis run produced from a corpus."""
    concepts: List[Concept]
    relationships: List[RelationshipCandidate]
    domains: List[ExtractedDomain]
    confidence: float
    document_count: int = 0

    def get_concept(self, name: str):
        for concept in self.concepts:
            if concept.name == name:
                return concept
        return None
