"""
Configuration for concept, relationship and domain extraction.

All lexical tables used by the extractors live here as immutable data so that
alternate vocabularies can be injected, e.g. in tests.
"""

from typing import Dict, FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, Field


STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "being", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "can", "this", "that", "these", "those",
})

INVARIANT_WORDS = frozenset({
    "species", "series", "news", "means", "chaos", "bias", "alias", "atlas", "canvas", "lens",
})

KIND_INDICATORS = {
    "entity": ("person", "organization", "place", "thing", "object", "system", "tool", "device"),
    "process": ("process", "method", "procedure", "workflow", "algorithm", "technique", "approach"),
    "quality": ("property", "attribute", "characteristic", "feature", "quality", "trait"),
    "abstract": ("concept", "idea", "theory", "principle", "rule", "law", "pattern"),
}

DOMAIN_KEYWORDS = {
    "Technology": ("software", "system", "data", "computer", "digital", "algorithm", "code"),
    "Business": ("organization", "management", "strategy", "process", "customer", "market"),
    "Science": ("research", "method", "theory", "analysis", "experiment", "hypothesis"),
    "Education": ("learning", "knowledge", "skill", "training", "teaching", "course"),
    "Personal": ("life", "experience", "goal", "habit", "reflection", "journal"),
}


class RelationPattern(BaseModel):
    """A verb-phrase pattern that types the link between two concepts."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Relationship type tag, e.g. 'is-a'")
    pattern: str = Field(..., description="Regular expression matched against lower-cased text")
    strength: float = Field(..., ge=0.0, le=1.0, description="Base strength of a single observation")


# Ordered most specific first; the bare copula comes last because it is part of
# many longer phrases ("is part of", "is similar to").
RELATION_PATTERNS = (
    RelationPattern(type="part-of", pattern=r"\b(?:part|component|element|member)\s+of\b|\bbelongs?\s+to\b", strength=0.8),
    RelationPattern(type="composed-of", pattern=r"\b(?:consists?|composed|made\s+up)\s+of\b", strength=0.8),
    RelationPattern(type="is-a", pattern=r"\b(?:subclass|subtype|kind|type|sort)\s+of\b", strength=0.9),
    RelationPattern(type="caused-by", pattern=r"\b(?:caused|triggered)\s+by\b|\bresults?\s+from\b", strength=0.8),
    RelationPattern(type="causes", pattern=r"\b(?:causes?|leads?\s+to|results?\s+in|triggers?|produces?)\b", strength=0.8),
    RelationPattern(type="prevents", pattern=r"\b(?:prevents?|stops?|blocks?)\b", strength=0.7),
    RelationPattern(type="disables", pattern=r"\b(?:disables?|prohibits?)\b", strength=0.7),
    RelationPattern(type="enables", pattern=r"\b(?:enables?|allows?|permits?|facilitates?)\b", strength=0.7),
    RelationPattern(type="depends-on", pattern=r"\b(?:requires?|needs?|depends?\s+on|relies\s+on)\b", strength=0.8),
    RelationPattern(type="uses", pattern=r"\b(?:uses?|utili[sz]es?|employs?)\b", strength=0.6),
    RelationPattern(type="located-in", pattern=r"\b(?:located|situated|positioned|found)\s+(?:in|at|on)\b", strength=0.8),
    RelationPattern(type="adjacent-to", pattern=r"\b(?:adjacent|next|close)\s+to\b", strength=0.7),
    RelationPattern(type="precedes", pattern=r"\b(?:before|precedes?)\b", strength=0.8),
    RelationPattern(type="follows", pattern=r"\b(?:after|follows?|succeeds?)\b", strength=0.8),
    RelationPattern(type="during", pattern=r"\b(?:during|while|throughout)\b", strength=0.7),
    RelationPattern(type="similar-to", pattern=r"\b(?:similar|comparable|analogous)\s+to\b|\b(?:like|resembles?)\b", strength=0.6),
    RelationPattern(type="different-from", pattern=r"\b(?:different|distinct)\s+from\b|\b(?:unlike|differs?\s+from)\b", strength=0.6),
    RelationPattern(type="corresponds-to", pattern=r"\b(?:corresponds?|maps)\s+to\b|\bequivalent\s+to\b", strength=0.7),
    RelationPattern(type="related-to", pattern=r"\b(?:related|connected|linked)\s+to\b|\bassociated\s+with\b", strength=0.5),
    RelationPattern(type="has-a", pattern=r"\b(?:has|have|had|contains?|includes?)\b", strength=0.7),
    RelationPattern(type="is-a", pattern=r"\b(?:is|are|was|were)\b(?:\s+(?:a|an|the)\b)?", strength=0.8),
)

BIDIRECTIONAL_TYPES = frozenset({"similar-to", "different-from", "related-to", "corresponds-to", "adjacent-to"})


class ExtractionConfig(BaseModel):
    """Lexical tables and thresholds for the extractors."""

    model_config = ConfigDict(frozen=True)

    stop_words: FrozenSet[str] = Field(default=STOP_WORDS, description="Words never treated as terms")
    invariant_words: FrozenSet[str] = Field(
        default=INVARIANT_WORDS,
        description="Words ending in s that plural folding leaves unchanged",
    )
    min_term_length: int = Field(default=3, description="Shortest accepted term, in characters")
    min_frequency: int = Field(default=2, description="Corpus frequency a term needs to become a concept")
    retain_anchored_terms: bool = Field(
        default=True,
        description="Keep singleton terms that head the subject or object of an explicit relational statement",
    )
    max_phrase_words: int = Field(default=3, description="Longest multi-word window collected as a phrase")

    kind_indicators: Dict[str, Tuple[str, ...]] = Field(
        default_factory=lambda: dict(KIND_INDICATORS),
        description="Indicator substrings per concept kind, tested in order",
    )
    process_suffixes: Tuple[str, ...] = Field(default=("ing", "tion", "ment"), description="Suffixes marking a process")
    quality_suffixes: Tuple[str, ...] = Field(default=("ness", "ity", "able"), description="Suffixes marking a quality")

    relation_patterns: Tuple[RelationPattern, ...] = Field(default=RELATION_PATTERNS, description="Ordered relation patterns")
    default_relation_type: str = Field(default="related-to", description="Type used when no pattern matches")
    default_relation_strength: float = Field(default=0.3, description="Base strength of an untyped co-occurrence")
    bidirectional_types: FrozenSet[str] = Field(default=BIDIRECTIONAL_TYPES, description="Types mirrored automatically")
    relational_verb_pattern: str = Field(
        default=r"\b(?:is|are|has|have|causes|enables)\b",
        description="Explicit relational verbs that raise observation confidence",
    )
    min_sentence_length: int = Field(default=11, description="Shorter sentence fragments are ignored")
    min_strength: float = Field(default=0.3, description="Consolidated relationships at or below this strength are dropped")
    strength_increment: float = Field(default=0.1, description="Strength added per repeated observation")
    snippet_length: int = Field(default=100, description="Characters of a sentence kept as evidence")

    domain_keywords: Dict[str, Tuple[str, ...]] = Field(
        default_factory=lambda: dict(DOMAIN_KEYWORDS),
        description="Keywords per thematic domain, tested in order",
    )
    default_domain: str = Field(default="General", description="Domain for concepts matching no keyword")


DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()
